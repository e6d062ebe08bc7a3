"""
Wall & door layout along the room's boundary ring.

Each edge is handled as a one-dimensional strip of ring cells:

    1. Doors reserve their spans (DOORWAY)
    2. Forced walls reserve theirs (WALL_BOUNDARY)
    3. The remaining free runs are bin-packed greedily with wall modules

Walls sit on the virtual ring just outside the interior grid. Doors are
positioned against the last interior row so their frames line up with the
floor edge rather than the wall pivot.
"""

import logging
from typing import Dict, List, Optional, Sequence, Set, Tuple

from gridroom.conversion.transforms import Rotator, Transform, Vec3, offset_location
from gridroom.generators.assets import AssetResolver, MeshHandle
from gridroom.generators.grid.grid_types import (
    BoundaryOccupancy, CellType, EDGE_ORDER, EDGE_YAW, RoomSpec, WallEdge, edge_cells
)
from .room_types import (
    DoorRecord, FixedDoorLocation, ForcedWallPlacement, WallModule, WallSegmentRecord
)

logger = logging.getLogger(__name__)


class WallLayoutEngine:
    """
    Places doors, forced walls and greedy wall modules on all four edges.

    Attributes:
        segments: Every placed base wall, in placement order
        doors: Every accepted door span
        boundary: Ring occupancy shared by all edges
        metrics: Placement counters for the run
    """

    def __init__(self, room: RoomSpec, wall_style, resolver: AssetResolver):
        self.room = room
        self.wall_style = wall_style
        self.resolver = resolver

        self.boundary = BoundaryOccupancy()
        self.edge_states: Dict[WallEdge, List[CellType]] = {
            edge: [CellType.EMPTY] * room.edge_length(edge) for edge in EDGE_ORDER
        }
        self.segments: List[WallSegmentRecord] = []
        self.doors: List[DoorRecord] = []
        self.metrics: Dict[str, int] = {
            'walls_placed': 0,
            'forced_walls_placed': 0,
            'doors_placed': 0,
            'skipped_assets': 0,
            'skipped_conflicts': 0,
            'unfilled_cells': 0,
        }

        self._modules = self._usable_modules(wall_style.modules)

    # ------------------------------------------------------------------
    # Module catalog
    # ------------------------------------------------------------------

    def _usable_modules(self, modules: Sequence[WallModule]) -> List[Tuple[WallModule, MeshHandle]]:
        """Catalog order is kept; modules with an unresolvable Base are dropped once."""
        usable = []
        for module in modules:
            if module.footprint < 1:
                logger.warning("Wall module with footprint %d ignored", module.footprint)
                continue
            base = self.resolver.resolve(module.base_mesh)
            if base is None:
                logger.warning("Wall module base mesh %r did not resolve; excluded for this run",
                               module.base_mesh)
                self.metrics['skipped_assets'] += 1
                continue
            usable.append((module, base))
        return usable

    def _largest_fitting(self, remaining: int) -> Optional[Tuple[WallModule, MeshHandle]]:
        best = None
        for module, base in self._modules:
            if module.footprint <= remaining:
                if best is None or module.footprint > best[0].footprint:
                    best = (module, base)
        return best

    # ------------------------------------------------------------------
    # Positions
    # ------------------------------------------------------------------

    def edge_offset(self, edge: WallEdge) -> float:
        style = self.wall_style
        return {
            WallEdge.NORTH: style.north_offset,
            WallEdge.SOUTH: style.south_offset,
            WallEdge.EAST: style.east_offset,
            WallEdge.WEST: style.west_offset,
        }[edge]

    def wall_position(self, edge: WallEdge, start: int, length: int) -> Vec3:
        """Pivot of a wall module: centred along its span, on the ring's near side."""
        cs = self.room.cell_size
        along = start * cs + (length * cs) / 2.0
        offset = self.edge_offset(edge)

        if edge == WallEdge.NORTH:
            local = (self.room.width * cs + offset, along, 0.0)
        elif edge == WallEdge.SOUTH:
            local = (offset, along, 0.0)
        elif edge == WallEdge.EAST:
            local = (along, self.room.height * cs + offset, 0.0)
        else:
            local = (along, offset, 0.0)
        return self.room.to_world(local)

    def door_position(self, edge: WallEdge, start: int, footprint: int) -> Vec3:
        """Centre of a door span, projected onto the last interior row."""
        cs = self.room.cell_size
        mid = (start + footprint / 2.0) * cs

        if edge == WallEdge.NORTH:
            local = ((self.room.width - 1) * cs + cs / 2.0, mid, 0.0)
        elif edge == WallEdge.SOUTH:
            local = (cs / 2.0, mid, 0.0)
        elif edge == WallEdge.EAST:
            local = (mid, (self.room.height - 1) * cs + cs / 2.0, 0.0)
        else:
            local = (mid, cs / 2.0, 0.0)
        return self.room.to_world(local)

    # ------------------------------------------------------------------
    # Occupancy
    # ------------------------------------------------------------------

    def _span_is_free(self, edge: WallEdge, start: int, length: int) -> bool:
        states = self.edge_states[edge]
        if start < 0 or length < 1 or start + length > len(states):
            return False
        return all(s == CellType.EMPTY for s in states[start:start + length])

    def _mark_span(self, edge: WallEdge, start: int, length: int, cell_type: CellType):
        ring = edge_cells(self.room, edge)
        for i in range(start, start + length):
            self.edge_states[edge][i] = cell_type
            self.boundary.mark(ring[i], cell_type)

    def free_segments(self, edge: WallEdge) -> List[Tuple[int, int]]:
        """Maximal runs of free cells as (start, length)."""
        segments = []
        run_start = None
        states = self.edge_states[edge]
        for i, state in enumerate(states):
            if state == CellType.EMPTY:
                if run_start is None:
                    run_start = i
            elif run_start is not None:
                segments.append((run_start, i - run_start))
                run_start = None
        if run_start is not None:
            segments.append((run_start, len(states) - run_start))
        return segments

    # ------------------------------------------------------------------
    # Placement
    # ------------------------------------------------------------------

    def place_door(self, door: FixedDoorLocation, procedural: bool = False) -> Optional[DoorRecord]:
        """Reserve a door span and compute its transforms."""
        edge = door.edge
        if door.door is None:
            logger.warning("Door on %s edge at %d has no door data; skipped",
                           edge.value, door.start_cell)
            self.metrics['skipped_conflicts'] += 1
            return None

        footprint = door.door.footprint
        if not self._span_is_free(edge, door.start_cell, footprint):
            logger.warning("Door on %s edge at %d (footprint %d) is out of range or overlaps; skipped",
                           edge.value, door.start_cell, footprint)
            self.metrics['skipped_conflicts'] += 1
            return None

        self._mark_span(edge, door.start_cell, footprint, CellType.DOORWAY)

        rotation = Rotator(yaw=EDGE_YAW[edge]) + door.door.frame_rotation_offset
        position = offset_location(
            self.door_position(edge, door.start_cell, footprint),
            door.offsets.frame_offset,
        )
        frame_transform = Transform(rotation, position)
        actor_transform = frame_transform.translated(door.offsets.actor_offset)

        frame_mesh = self.resolver.resolve(door.door.frame_mesh)
        if frame_mesh is None:
            # The span stays reserved so no wall is packed into the opening
            logger.warning("Door frame mesh %r did not resolve", door.door.frame_mesh)
            self.metrics['skipped_assets'] += 1

        record = DoorRecord(
            edge=edge,
            start_cell=door.start_cell,
            footprint=footprint,
            door=door.door,
            frame_transform=frame_transform,
            actor_transform=actor_transform,
            frame_mesh=frame_mesh,
            procedural=procedural,
        )
        self.doors.append(record)
        self.metrics['doors_placed'] += 1
        return record

    def place_forced_wall(self, forced: ForcedWallPlacement) -> Optional[WallSegmentRecord]:
        module = forced.module
        edge = forced.edge
        if not self._span_is_free(edge, forced.start_cell, module.footprint):
            logger.warning("Forced wall on %s edge at %d is out of range or occupied; skipped",
                           edge.value, forced.start_cell)
            self.metrics['skipped_conflicts'] += 1
            return None

        base = self.resolver.resolve(module.base_mesh)
        if base is None:
            logger.warning("Forced wall base mesh %r did not resolve; skipped", module.base_mesh)
            self.metrics['skipped_assets'] += 1
            return None

        self._mark_span(edge, forced.start_cell, module.footprint, CellType.WALL_BOUNDARY)
        record = self._record_wall(edge, forced.start_cell, module, base, forced=True)
        self.metrics['forced_walls_placed'] += 1
        return record

    def fill_wall_segment(self, edge: WallEdge, start: int, length: int) -> List[WallSegmentRecord]:
        """Greedy largest-fit packing of one free run. Returns the walls placed."""
        placed = []
        cursor = start
        remaining = length

        while remaining > 0:
            choice = self._largest_fitting(remaining)
            if choice is None:
                logger.debug("No module fits %d remaining cells on %s edge at %d",
                             remaining, edge.value, cursor)
                self.metrics['unfilled_cells'] += remaining
                break

            module, base = choice
            self._mark_span(edge, cursor, module.footprint, CellType.WALL_BOUNDARY)
            placed.append(self._record_wall(edge, cursor, module, base))
            self.metrics['walls_placed'] += 1

            cursor += module.footprint
            remaining -= module.footprint

        return placed

    def _record_wall(self, edge: WallEdge, start: int, module: WallModule,
                     base: MeshHandle, forced: bool = False) -> WallSegmentRecord:
        transform = Transform(
            Rotator(yaw=EDGE_YAW[edge]),
            self.wall_position(edge, start, module.footprint),
        )
        record = WallSegmentRecord(
            edge=edge,
            start_cell=start,
            length=module.footprint,
            base_transform=transform,
            base_mesh=base,
            module=module,
            forced=forced,
        )
        self.segments.append(record)
        return record

    # ------------------------------------------------------------------
    # Driver
    # ------------------------------------------------------------------

    def layout(self, doors: Sequence[FixedDoorLocation],
               forced_walls: Sequence[ForcedWallPlacement] = (),
               procedural: Optional[Set[int]] = None) -> List[WallSegmentRecord]:
        """
        Run doors, forced walls and greedy packing for every edge.

        Args:
            doors: Resolved door list (fixed plus procedural)
            forced_walls: Designer wall overrides
            procedural: ids of the door entries that were generated this run
        """
        procedural = procedural or set()
        if not self._modules:
            logger.warning("No usable wall modules; walls will only contain forced pieces")

        for edge in EDGE_ORDER:
            for door in doors:
                if door.edge == edge:
                    self.place_door(door, procedural=id(door) in procedural)

            for forced in forced_walls:
                if forced.edge == edge:
                    self.place_forced_wall(forced)

            for start, length in self.free_segments(edge):
                self.fill_wall_segment(edge, start, length)

        logger.info("Walls: %d segments, %d doors", len(self.segments), len(self.doors))
        return list(self.segments)

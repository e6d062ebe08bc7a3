"""
Interior packer — fills the room's floor grid.

Passes, in order:
  0. Forced placements (designer overrides, own rotation roll each)
  1. Forced-empty marking (regions + single cells reserved as WALL_BOUNDARY)
  2. Weighted scan placement (row-major, one attempt per empty cell)
  3. Gap fill with the 1x1 filler mesh

Failures are local: a forced item that does not fit, a mesh that fails to
resolve, or a candidate that overlaps is skipped and counted, never raised.
"""

import logging
from typing import Dict, List, Optional, Sequence

from gridroom.conversion.transforms import Rotator, Transform
from gridroom.generators.assets import AssetResolver, MeshHandle
from gridroom.generators.grid.grid_types import CellType, GridCoord, InteriorGrid, RoomSpec
from gridroom.generators.random_stream import NoCandidatesError, RandomStream, weighted_choice
from .room_types import (
    ForcedEmptyRegion, ForcedInteriorPlacement, InteriorPlacement, MeshPlacementInfo
)

logger = logging.getLogger(__name__)


def expand_forced_empty_regions(room: RoomSpec,
                                regions: Sequence[ForcedEmptyRegion],
                                cells: Sequence[GridCoord]) -> List[GridCoord]:
    """
    Expand rectangular regions and single cells into a de-duplicated cell list.

    Region corners may be given in any order and are clamped to the grid.
    Single cells outside the grid are dropped. Order of first appearance is
    kept so the result is deterministic.
    """
    expanded: Dict[GridCoord, None] = {}

    for region in regions:
        min_x = min(region.start_cell.x, region.end_cell.x)
        max_x = max(region.start_cell.x, region.end_cell.x)
        min_y = min(region.start_cell.y, region.end_cell.y)
        max_y = max(region.start_cell.y, region.end_cell.y)

        min_x = max(0, min(min_x, room.width - 1))
        max_x = max(0, min(max_x, room.width - 1))
        min_y = max(0, min(min_y, room.height - 1))
        max_y = max(0, min(max_y, room.height - 1))

        for y in range(min_y, max_y + 1):
            for x in range(min_x, max_x + 1):
                expanded.setdefault(GridCoord(x, y), None)

    for cell in cells:
        if room.in_bounds(cell.x, cell.y):
            expanded.setdefault(cell, None)

    return list(expanded)


class InteriorPacker:
    """Weighted random bin filling of the interior grid with forced overrides."""

    def __init__(self, room: RoomSpec, resolver: AssetResolver, stream: RandomStream):
        self.room = room
        self.resolver = resolver
        self.stream = stream
        self.grid = InteriorGrid.for_room(room)
        self.placements: List[InteriorPlacement] = []
        self.metrics: Dict[str, int] = {
            'forced_placed': 0,
            'weighted_placed': 0,
            'filler_placed': 0,
            'reserved_cells': 0,
            'skipped_assets': 0,
            'skipped_conflicts': 0,
            'pool_exhausted': 0,
        }

    # -- public --

    def pack(self,
             floor_pool: Sequence[MeshPlacementInfo],
             filler_mesh: Optional[str],
             forced_placements: Sequence[ForcedInteriorPlacement] = (),
             forced_empty_regions: Sequence[ForcedEmptyRegion] = (),
             forced_empty_cells: Sequence[GridCoord] = ()) -> List[InteriorPlacement]:
        """Run all interior passes and return the placements in emission order."""
        self.execute_forced_placements(forced_placements)
        self.mark_forced_empty_cells(
            expand_forced_empty_regions(self.room, forced_empty_regions, forced_empty_cells)
        )
        self.place_weighted_meshes(floor_pool)
        self.fill_gaps(filler_mesh)

        logger.info(
            "Interior: %d placements (%d forced, %d weighted, %d filler), %d reserved cells",
            len(self.placements), self.metrics['forced_placed'],
            self.metrics['weighted_placed'], self.metrics['filler_placed'],
            self.metrics['reserved_cells'],
        )
        return list(self.placements)

    # -- passes --

    def execute_forced_placements(self, forced_placements: Sequence[ForcedInteriorPlacement]):
        for forced in forced_placements:
            cell = forced.cell
            info = forced.placement

            mesh = self.resolver.resolve(info.mesh)
            if mesh is None:
                logger.warning("Forced placement at (%d, %d) skipped: mesh %r did not resolve",
                               cell.x, cell.y, info.mesh)
                self.metrics['skipped_assets'] += 1
                continue

            yaw = self._roll_rotation(info)
            fw, fh = info.footprint_for(yaw)

            if not self.grid.area_fits(cell.x, cell.y, fw, fh):
                logger.warning("Forced placement at (%d, %d) skipped: %dx%d footprint out of bounds",
                               cell.x, cell.y, fw, fh)
                self.metrics['skipped_conflicts'] += 1
                continue

            if not self.grid.area_is_free(cell.x, cell.y, fw, fh):
                logger.warning("Forced placement at (%d, %d) skipped: overlaps an existing forced item",
                               cell.x, cell.y)
                self.metrics['skipped_conflicts'] += 1
                continue

            self._place(mesh, cell.x, cell.y, fw, fh, yaw, "forced")
            self.metrics['forced_placed'] += 1

    def mark_forced_empty_cells(self, cells: Sequence[GridCoord]):
        """Reserve cells so no later pass fills them."""
        for cell in cells:
            if self.grid.is_empty(cell.x, cell.y):
                self.grid.set(cell.x, cell.y, CellType.WALL_BOUNDARY)
                self.metrics['reserved_cells'] += 1

    def place_weighted_meshes(self, floor_pool: Sequence[MeshPlacementInfo]):
        if not floor_pool:
            logger.debug("Floor pool is empty; weighted pass skipped")
            self.metrics['pool_exhausted'] += 1
            return

        for x, y in self.grid.iter_row_major():
            if not self.grid.is_empty(x, y):
                continue

            try:
                info = weighted_choice(floor_pool, self.stream)
            except NoCandidatesError:
                self.metrics['pool_exhausted'] += 1
                return

            mesh = self.resolver.resolve(info.mesh)
            if mesh is None:
                self.metrics['skipped_assets'] += 1
                continue

            yaw = self._roll_rotation(info)
            fw, fh = info.footprint_for(yaw)

            # Leave the cell to gap fill on any conflict; no retry here
            if not self.grid.area_is_free(x, y, fw, fh):
                self.metrics['skipped_conflicts'] += 1
                continue

            self._place(mesh, x, y, fw, fh, yaw, "weighted")
            self.metrics['weighted_placed'] += 1

    def fill_gaps(self, filler_mesh: Optional[str]):
        empty_cells = self.grid.cells_of_type(CellType.EMPTY)
        if not empty_cells:
            return

        mesh = self.resolver.resolve(filler_mesh)
        if mesh is None:
            logger.warning("Filler mesh %r did not resolve; %d cells left empty",
                           filler_mesh, len(empty_cells))
            self.metrics['skipped_assets'] += len(empty_cells)
            return

        for cell in empty_cells:
            self._place(mesh, cell.x, cell.y, 1, 1, 0.0, "filler")
            self.metrics['filler_placed'] += 1

    # -- helpers --

    def _roll_rotation(self, info: MeshPlacementInfo) -> float:
        rotations = info.rotations()
        return float(rotations[self.stream.uniform_int(0, len(rotations) - 1)])

    def _place(self, mesh: MeshHandle, x: int, y: int, fw: int, fh: int,
               yaw: float, source: str):
        cs = self.room.cell_size
        location = self.room.to_world(((x + fw / 2.0) * cs, (y + fh / 2.0) * cs, 0.0))
        transform = Transform(Rotator(yaw=yaw), location)

        self.grid.mark_area(x, y, fw, fh, CellType.FLOOR_MESH)
        self.placements.append(InteriorPlacement(
            mesh=mesh,
            cell=GridCoord(x, y),
            footprint=(fw, fh),
            yaw=yaw,
            transform=transform,
            source=source,
        ))


def pack_interior(room: RoomSpec,
                  floor_pool: Sequence[MeshPlacementInfo],
                  filler_mesh: Optional[str],
                  resolver: AssetResolver,
                  stream: RandomStream,
                  forced_placements: Sequence[ForcedInteriorPlacement] = (),
                  forced_empty_regions: Sequence[ForcedEmptyRegion] = (),
                  forced_empty_cells: Sequence[GridCoord] = ()) -> List[InteriorPlacement]:
    """Convenience wrapper around InteriorPacker.pack()."""
    packer = InteriorPacker(room, resolver, stream)
    return packer.pack(floor_pool, filler_mesh, forced_placements,
                       forced_empty_regions, forced_empty_cells)

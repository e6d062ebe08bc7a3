"""
Door planning along the room's boundary edges.

Doors are one-dimensional spans on an edge. The planner answers gap queries
(can a door of this footprint start here, how much room is left, where could
a door go) and generates procedural doors into a run-local copy of the
designer's fixed door list.
"""

import logging
from typing import List, Optional, Sequence, Tuple

from gridroom.generators.grid.grid_types import EDGE_ORDER, RoomSpec, WallEdge
from gridroom.generators.random_stream import NoCandidatesError, RandomStream, weighted_choice
from .room_types import DoorSpec, FixedDoorLocation, ProceduralDoorSettings

logger = logging.getLogger(__name__)

# Weighted draws per gap before giving up on a door that fits
MAX_DOOR_SELECTION_ATTEMPTS = 10

Interval = Tuple[int, int]  # [start, end)


class DoorPlanner:
    """
    Tracks door spans per edge for a single run.

    Spans are kept as half-open intervals. Nothing here touches the caller's
    FixedDoorLocation list; ``resolved_doors`` is the run's own copy.
    """

    def __init__(self, room: RoomSpec, doors: Sequence[FixedDoorLocation] = ()):
        self.room = room
        self.resolved_doors: List[FixedDoorLocation] = list(doors)

    # ------------------------------------------------------------------
    # Gap queries
    # ------------------------------------------------------------------

    def door_intervals(self, edge: WallEdge) -> List[Interval]:
        """Sorted spans of the doors already on an edge."""
        spans = [
            (door.start_cell, door.start_cell + door.footprint)
            for door in self.resolved_doors
            if door.edge == edge and door.footprint > 0
        ]
        return sorted(spans)

    def valid_gaps(self, edge: WallEdge) -> List[Interval]:
        """Complement of the door spans over [0, edge_length), sorted by start."""
        length = self.room.edge_length(edge)
        gaps = []
        cursor = 0
        for start, end in self.door_intervals(edge):
            start = max(0, start)
            end = min(length, end)
            if start > cursor:
                gaps.append((cursor, start))
            cursor = max(cursor, end)
        if cursor < length:
            gaps.append((cursor, length))
        return gaps

    def can_fit_door(self, edge: WallEdge, start: int, footprint: int) -> bool:
        """True if a door of ``footprint`` cells can start at ``start``."""
        if footprint < 1 or start < 0:
            return False
        end = start + footprint
        if end > self.room.edge_length(edge):
            return False
        return all(end <= s or start >= e for s, e in self.door_intervals(edge))

    def available_space_on_edge(self, edge: WallEdge, start: int) -> int:
        """Free cells from ``start`` up to the next door or the edge end."""
        for gap_start, gap_end in self.valid_gaps(edge):
            if gap_start <= start < gap_end:
                return gap_end - start
        return 0

    def valid_door_locations(self, edge: WallEdge) -> List[Tuple[int, int]]:
        """Every free start cell on an edge, paired with the largest footprint it allows."""
        locations = []
        for gap_start, gap_end in self.valid_gaps(edge):
            for start in range(gap_start, gap_end):
                locations.append((start, gap_end - start))
        return locations

    # ------------------------------------------------------------------
    # Procedural generation
    # ------------------------------------------------------------------

    def choose_edges(self, settings: ProceduralDoorSettings,
                     stream: RandomStream) -> List[WallEdge]:
        """Required edges when given, otherwise a random subset of the four."""
        if settings.required_edges:
            edges: List[WallEdge] = []
            for edge in settings.required_edges:
                if edge not in edges:
                    edges.append(edge)
            return edges

        lo = max(1, min(4, settings.min_doors))
        hi = max(1, min(4, settings.max_doors))
        count = stream.uniform_int(lo, max(lo, hi))
        shuffled = stream.shuffle(list(EDGE_ORDER))
        return shuffled[:count]

    def place_procedural_door(self, edge: WallEdge, door_pack: DoorSpec,
                              stream: RandomStream) -> Optional[FixedDoorLocation]:
        """Add one procedural door to an edge, or return None if nothing fits."""
        gaps = self.valid_gaps(edge)
        if not gaps:
            logger.debug("No free gap on %s edge for a procedural door", edge.value)
            return None

        gap_start, gap_end = gaps[stream.uniform_int(0, len(gaps) - 1)]
        gap_size = gap_end - gap_start

        candidates = door_pack.candidates()
        chosen: Optional[DoorSpec] = None
        for _ in range(MAX_DOOR_SELECTION_ATTEMPTS):
            try:
                candidate = weighted_choice(candidates, stream)
            except NoCandidatesError:
                return None
            if candidate.footprint <= gap_size:
                chosen = candidate
                break

        if chosen is None:
            logger.debug("No door variant fits the %d-cell gap on %s edge",
                         gap_size, edge.value)
            return None

        start = gap_start + stream.uniform_int(0, gap_size - chosen.footprint)
        door = FixedDoorLocation(edge=edge, start_cell=start, door=chosen)
        self.resolved_doors.append(door)
        return door

    def generate_procedural_doors(self, settings: ProceduralDoorSettings,
                                  door_pack: Optional[DoorSpec],
                                  stream: RandomStream) -> List[FixedDoorLocation]:
        """Run procedural placement; returns only the doors it added."""
        if not settings.enabled or door_pack is None:
            return []

        added = []
        for edge in self.choose_edges(settings, stream):
            door = self.place_procedural_door(edge, door_pack, stream)
            if door is not None:
                added.append(door)

        logger.info("Procedural doors: %d placed", len(added))
        return added

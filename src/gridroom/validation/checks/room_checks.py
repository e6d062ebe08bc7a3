"""
Post-generation checks for a single room.

All checks read the products of a run (placements, door records, wall
segments) rather than the occupancy grids the generator used, so they catch
bookkeeping mistakes as well as placement mistakes.

- ROOM-001/002/003: interior coverage, overlap and bounds
- DOOR-001/002: door spans disjoint and on their edge
- WALL-001/002: every ring cell covered exactly once by a wall or door
"""

from collections import Counter
from typing import Dict, List, Sequence

from gridroom.generators.grid.grid_types import EDGE_ORDER, GridCoord, RoomSpec, WallEdge
from gridroom.generators.room.interior_packer import expand_forced_empty_regions
from gridroom.generators.room.room_types import DoorRecord, InteriorPlacement, WallSegmentRecord
from ..core import ValidationIssue, ValidationResult, ValidationStage
from ..rules import DOOR_001, DOOR_002, ROOM_001, ROOM_002, ROOM_003, WALL_001, WALL_002


def check_interior_bounds(room: RoomSpec,
                          placements: Sequence[InteriorPlacement]) -> List[ValidationIssue]:
    issues = []
    for p in placements:
        fw, fh = p.footprint
        if not (p.cell.x >= 0 and p.cell.y >= 0
                and p.cell.x + fw <= room.width and p.cell.y + fh <= room.height):
            issues.append(ROOM_003.issue(
                location=f"({p.cell.x}, {p.cell.y})", mesh=p.mesh.name,
                x=p.cell.x, y=p.cell.y, fw=fw, fh=fh,
            ))
    return issues


def check_interior_overlap(placements: Sequence[InteriorPlacement]) -> List[ValidationIssue]:
    coverage = Counter(cell for p in placements for cell in p.covers())
    return [
        ROOM_002.issue(location=f"({cell.x}, {cell.y})", x=cell.x, y=cell.y, count=count)
        for cell, count in sorted(coverage.items(), key=lambda kv: (kv[0].y, kv[0].x))
        if count > 1
    ]


def check_interior_coverage(room: RoomSpec,
                            placements: Sequence[InteriorPlacement],
                            reserved: Sequence[GridCoord] = ()) -> List[ValidationIssue]:
    """Every cell must be covered by a placement or be a forced-empty cell."""
    covered = {cell for p in placements for cell in p.covers()}
    covered.update(reserved)

    issues = []
    for y in range(room.height):
        for x in range(room.width):
            if GridCoord(x, y) not in covered:
                issues.append(ROOM_001.issue(location=f"({x}, {y})", x=x, y=y))
    return issues


def check_door_spans(room: RoomSpec, doors: Sequence[DoorRecord]) -> List[ValidationIssue]:
    issues = []
    by_edge: Dict[WallEdge, List[DoorRecord]] = {edge: [] for edge in EDGE_ORDER}
    for door in doors:
        by_edge[door.edge].append(door)

    for edge, edge_doors in by_edge.items():
        length = room.edge_length(edge)
        for door in edge_doors:
            if door.start_cell < 0 or door.end_cell > length:
                issues.append(DOOR_002.issue(
                    location=edge.value, start=door.start_cell, end=door.end_cell,
                    edge=edge.value, length=length,
                ))

        ordered = sorted(edge_doors, key=lambda d: d.start_cell)
        for a, b in zip(ordered, ordered[1:]):
            if b.start_cell < a.end_cell:
                issues.append(DOOR_001.issue(
                    location=edge.value, edge=edge.value,
                    a=f"[{a.start_cell}, {a.end_cell})", b=f"[{b.start_cell}, {b.end_cell})",
                ))
    return issues


def check_wall_coverage(room: RoomSpec, segments: Sequence[WallSegmentRecord],
                        doors: Sequence[DoorRecord]) -> List[ValidationIssue]:
    """Walls and doors together should cover each edge exactly once."""
    issues = []
    for edge in EDGE_ORDER:
        counts = [0] * room.edge_length(edge)
        spans = [(s.start_cell, s.end_cell) for s in segments if s.edge == edge]
        spans += [(d.start_cell, d.end_cell) for d in doors if d.edge == edge]
        for start, end in spans:
            for i in range(max(0, start), min(len(counts), end)):
                counts[i] += 1

        for index, count in enumerate(counts):
            if count == 0:
                issues.append(WALL_001.issue(location=edge.value, index=index, edge=edge.value))
            elif count > 1:
                issues.append(WALL_002.issue(location=edge.value, index=index,
                                             edge=edge.value, count=count))
    return issues


def validate_generation(state) -> ValidationResult:
    """
    Run every room check against a finished RoomState.

    Args:
        state: RoomState after all passes

    Returns:
        ValidationResult with stage ROOM
    """
    result = ValidationResult(stage=ValidationStage.ROOM)
    reserved = expand_forced_empty_regions(
        state.room, state.forced_empty_regions, state.forced_empty_cells
    )

    result.extend(check_interior_bounds(state.room, state.interior_placements))
    result.extend(check_interior_overlap(state.interior_placements))
    result.extend(check_interior_coverage(state.room, state.interior_placements, reserved))
    result.extend(check_door_spans(state.room, state.doors))
    result.extend(check_wall_coverage(state.room, state.segments, state.doors))
    return result

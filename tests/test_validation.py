"""Tests for post-generation room checks."""

import pytest

from gridroom.conversion.transforms import Transform
from gridroom.generators.assets import MeshHandle
from gridroom.generators.grid.grid_types import GridCoord, RoomSpec, WallEdge
from gridroom.generators.room.room_types import (
    DoorRecord, DoorSpec, InteriorPlacement, WallSegmentRecord
)
from gridroom.validation import (
    Severity, ValidationError, ValidationResult, ValidationStage, get_rule
)
from gridroom.validation.checks import (
    check_door_spans, check_interior_bounds, check_interior_coverage,
    check_interior_overlap, check_wall_coverage,
)

MESH = MeshHandle("SM_Test")


def _placement(x, y, fw=1, fh=1):
    return InteriorPlacement(MESH, GridCoord(x, y), (fw, fh), 0.0, Transform(), "weighted")


def _door(edge, start, footprint=2):
    return DoorRecord(edge, start, footprint, DoorSpec("D", "SM_Door", footprint),
                      Transform(), Transform())


def _wall(edge, start, length):
    return WallSegmentRecord(edge, start, length, Transform(), MESH, None)


def test_overlap_detected():
    issues = check_interior_overlap([_placement(0, 0, 2, 2), _placement(1, 1)])
    assert [i.code for i in issues] == ["ROOM-002"]
    assert issues[0].location == "(1, 1)"
    assert issues[0].severity == Severity.FAIL


def test_bounds_detected():
    issues = check_interior_bounds(RoomSpec(2, 2), [_placement(1, 0, 2, 1)])
    assert [i.code for i in issues] == ["ROOM-003"]
    assert issues[0].mesh == "SM_Test"


def test_coverage_counts_reserved_cells():
    room = RoomSpec(2, 1)
    assert check_interior_coverage(room, [_placement(0, 0)], [GridCoord(1, 0)]) == []

    issues = check_interior_coverage(room, [_placement(0, 0)])
    assert [i.code for i in issues] == ["ROOM-001"]
    assert "(1, 0)" in issues[0].message


def test_door_spans():
    room = RoomSpec(10, 10)
    issues = check_door_spans(room, [
        _door(WallEdge.SOUTH, 3), _door(WallEdge.SOUTH, 4), _door(WallEdge.EAST, 9),
    ])
    assert sorted(i.code for i in issues) == ["DOOR-001", "DOOR-002"]


def test_wall_coverage():
    room = RoomSpec(4, 1)
    segments = [
        _wall(WallEdge.NORTH, 0, 1),
        _wall(WallEdge.SOUTH, 0, 1),
        _wall(WallEdge.EAST, 0, 4),
        _wall(WallEdge.WEST, 0, 2),
        _wall(WallEdge.WEST, 1, 1),
    ]
    issues = check_wall_coverage(room, segments, [_door(WallEdge.WEST, 2)])
    assert [i.code for i in issues] == ["WALL-002"]

    issues = check_wall_coverage(room, segments[:-1], [])
    assert [i.code for i in issues] == ["WALL-001", "WALL-001"]
    assert all(i.severity == Severity.WARN for i in issues)


def test_issue_format_and_rule_lookup():
    rule = get_rule("WALL-001")
    issue = rule.issue(location="south", index=3, edge="south")
    assert issue.format() == (
        "[WARN] WALL-001 at south mesh=- :: "
        "Edge cell 3 on the south edge has no wall or door :: "
        "fix=Add a wall module with footprint 1"
    )
    assert get_rule("NOPE-999") is None


def test_result_report_and_dict():
    result = ValidationResult(stage=ValidationStage.ROOM)
    assert result.report() == "Room checks [room] passed: 0 fail, 0 warn"
    result.raise_if_failed()

    result.extend(check_interior_overlap([_placement(0, 0), _placement(0, 0)]))
    assert result.failed
    data = result.to_dict()
    assert data['fail_count'] == 1
    assert data['stage'] == "room"
    assert data['issues'][0]['severity'] == "FAIL"
    assert data['issues'][0]['code'] == "ROOM-002"

    report = result.report().splitlines()
    assert report[0] == "Room checks [room] FAILED: 1 fail, 0 warn"
    assert report[1].startswith("[FAIL] ROOM-002 at (0, 0)")

    with pytest.raises(ValidationError) as excinfo:
        result.raise_if_failed()
    assert excinfo.value.result is result

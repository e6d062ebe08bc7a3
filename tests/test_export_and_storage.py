"""Tests for result export and room file loading."""

import csv
import io
import json

import pytest

from gridroom.conversion.placement_export import (
    count_instructions_by_category, export_result_to_csv, export_result_to_json, write_result
)
from gridroom.generators.errors import StyleLoadError
from gridroom.generators.grid.grid_types import GridCoord, WallEdge
from gridroom.generators.room_storage import load_room_file, room_file_from_dict
from gridroom.pipeline import generate_room


ROOM_FILE = {
    "room": {"width": 8, "height": 6, "origin": [100, 0, 0]},
    "style": "Stone Keep",
    "seed": 42,
    "overrides": {
        "shape_preset": "L-Shape",
        "forced_empty_regions": [{"start": [0, 0], "end": [1, 1]}],
        "forced_empty_cells": [[4, 4]],
        "forced_placements": [{"cell": [2, 2], "mesh": {"mesh": "SM_Altar", "footprint": [2, 1]}}],
        "fixed_doors": [{"edge": "South", "start": 3,
                         "door": {"frame_mesh": "SM_Door", "footprint": 2},
                         "frame_offset": [0, 0, 5]}],
        "forced_walls": [{"edge": "north", "start": 0, "module": {"base": "SM_Wall_Arch", "footprint": 2}}],
        "procedural_doors": {"enabled": True, "min": 1, "max": 3, "required_edges": ["east"]},
    },
}


@pytest.fixture
def result(room, resolver, styles):
    return generate_room(room, resolver, styles, seed=3)


def test_json_export(result):
    data = json.loads(export_result_to_json(result))

    assert data['success'] is True
    assert data['seed'] == 3
    assert len(data['placements']) == len(result.instructions)
    assert data['counts'] == count_instructions_by_category(result.instructions)
    assert len(data['walls']) == 12
    assert data['validation']['passed'] is True


def test_json_export_without_records(result):
    data = json.loads(export_result_to_json(result, include_records=False))
    assert 'walls' not in data and 'doors' not in data


def test_csv_export(result):
    rows = list(csv.reader(io.StringIO(export_result_to_csv(result))))
    assert rows[0] == ['category', 'mesh', 'x', 'y', 'z', 'pitch', 'yaw', 'roll']
    assert len(rows) == len(result.instructions) + 1
    assert rows[1][0] == "floor"


def test_write_result_picks_format(tmp_path, result):
    json_path = write_result(result, tmp_path / "out" / "room.json")
    csv_path = write_result(result, tmp_path / "room.csv")

    assert json.loads(json_path.read_text(encoding="utf-8"))['success'] is True
    assert csv_path.read_text(encoding="utf-8").startswith("category,mesh")


def test_room_file_from_dict():
    room_file = room_file_from_dict(ROOM_FILE)

    assert (room_file.room.width, room_file.room.height) == (8, 6)
    assert room_file.room.origin == (100.0, 0.0, 0.0)
    assert room_file.seed == 42
    assert room_file.style == "Stone Keep"

    overrides = room_file.overrides
    assert overrides.shape_preset == "L-Shape"
    assert overrides.forced_empty_cells == [GridCoord(4, 4)]
    assert overrides.forced_placements[0].placement.footprint == (2, 1)
    assert overrides.fixed_doors[0].edge == WallEdge.SOUTH
    assert overrides.fixed_doors[0].offsets.frame_offset == (0.0, 0.0, 5.0)
    assert overrides.forced_walls[0].module.footprint == 2
    assert overrides.procedural_doors.enabled
    assert overrides.procedural_doors.required_edges == [WallEdge.EAST]


def test_load_room_file(tmp_path):
    path = tmp_path / "room.json"
    path.write_text(json.dumps(ROOM_FILE), encoding="utf-8")
    assert load_room_file(path).room.width == 8


def test_room_file_errors(tmp_path):
    with pytest.raises(StyleLoadError):
        room_file_from_dict({"seed": 1})
    with pytest.raises(StyleLoadError):
        room_file_from_dict({"room": {"width": 4}})
    with pytest.raises(StyleLoadError):
        room_file_from_dict({"room": {"width": 4, "height": 4},
                             "overrides": {"fixed_doors": [{"edge": "up", "start": 0}]}})
    with pytest.raises(StyleLoadError):
        load_room_file(tmp_path / "missing.json")

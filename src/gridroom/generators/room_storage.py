"""
Room file loading.

A room file is JSON describing one room to generate::

    {
      "room": {"width": 10, "height": 10, "cell_size": 100.0, "origin": [0, 0, 0]},
      "style": "Stone Keep",
      "seed": 42,
      "overrides": {
        "shape_preset": "L-Shape",
        "forced_empty_regions": [{"start": [0, 0], "end": [1, 1]}],
        "forced_empty_cells": [[4, 4]],
        "forced_placements": [{"cell": [2, 2], "mesh": {"mesh": "SM_Altar", "footprint": [2, 1]}}],
        "fixed_doors": [{"edge": "south", "start": 3, "door": {"frame_mesh": "SM_Door", "footprint": 2}}],
        "forced_walls": [{"edge": "north", "start": 0, "module": {"base": "SM_Wall_Arch", "footprint": 2}}],
        "procedural_doors": {"enabled": true, "min": 1, "max": 2, "required_edges": []}
      }
    }
"""

from __future__ import annotations
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

from gridroom.generators.errors import StyleLoadError
from gridroom.generators.grid.grid_types import CELL_SIZE, GridCoord, RoomSpec, WallEdge
from gridroom.generators.room.room_types import (
    DoorPositionOffsets, FixedDoorLocation, ForcedEmptyRegion, ForcedInteriorPlacement,
    ForcedWallPlacement, ProceduralDoorSettings, RoomOverrides,
)
from gridroom.generators.styles.style_storage import (
    door_from_dict, mesh_info_from_dict, wall_module_from_dict
)

logger = logging.getLogger(__name__)


@dataclass
class RoomFile:
    """Everything a room file describes."""
    room: RoomSpec
    overrides: RoomOverrides
    seed: int = 0
    style: Optional[str] = None


def _vec3(values, default=(0.0, 0.0, 0.0)):
    if values is None:
        return default
    return (float(values[0]), float(values[1]), float(values[2]))


def _edge(value: str) -> WallEdge:
    try:
        return WallEdge(str(value).lower())
    except ValueError:
        raise StyleLoadError(f"unknown edge '{value}'")


def room_spec_from_dict(data: Dict[str, Any]) -> RoomSpec:
    if "width" not in data or "height" not in data:
        raise StyleLoadError("room needs 'width' and 'height'")
    return RoomSpec(
        width=int(data["width"]),
        height=int(data["height"]),
        cell_size=float(data.get("cell_size", CELL_SIZE)),
        origin=_vec3(data.get("origin")),
        floor_style=data.get("floor_style"),
        wall_style=data.get("wall_style"),
        door_style=data.get("door_style"),
        ceiling_style=data.get("ceiling_style"),
    )


def overrides_from_dict(data: Dict[str, Any]) -> RoomOverrides:
    procedural = data.get("procedural_doors", {})
    return RoomOverrides(
        forced_empty_regions=[
            ForcedEmptyRegion(GridCoord.from_sequence(r["start"]), GridCoord.from_sequence(r["end"]))
            for r in data.get("forced_empty_regions", [])
        ],
        forced_empty_cells=[GridCoord.from_sequence(c) for c in data.get("forced_empty_cells", [])],
        forced_placements=[
            ForcedInteriorPlacement(GridCoord.from_sequence(p["cell"]), mesh_info_from_dict(p["mesh"]))
            for p in data.get("forced_placements", [])
        ],
        fixed_doors=[
            FixedDoorLocation(
                edge=_edge(d["edge"]),
                start_cell=int(d["start"]),
                door=door_from_dict(d["door"]) if d.get("door") else None,
                offsets=DoorPositionOffsets(
                    frame_offset=_vec3(d.get("frame_offset")),
                    actor_offset=_vec3(d.get("actor_offset")),
                ),
            )
            for d in data.get("fixed_doors", [])
        ],
        forced_walls=[
            ForcedWallPlacement(_edge(w["edge"]), int(w["start"]), wall_module_from_dict(w["module"]))
            for w in data.get("forced_walls", [])
        ],
        procedural_doors=ProceduralDoorSettings(
            enabled=bool(procedural.get("enabled", False)),
            min_doors=int(procedural.get("min", 1)),
            max_doors=int(procedural.get("max", 2)),
            required_edges=[_edge(e) for e in procedural.get("required_edges", [])],
        ),
        shape_preset=data.get("shape_preset"),
    )


def room_file_from_dict(data: Dict[str, Any]) -> RoomFile:
    if not isinstance(data, dict) or "room" not in data:
        raise StyleLoadError("room file is missing required key 'room'")
    try:
        return RoomFile(
            room=room_spec_from_dict(data["room"]),
            overrides=overrides_from_dict(data.get("overrides", {})),
            seed=int(data.get("seed", 0)),
            style=data.get("style"),
        )
    except (KeyError, TypeError, ValueError, IndexError) as e:
        raise StyleLoadError(f"room file is malformed: {e}") from e


def load_room_file(path: Union[str, Path]) -> RoomFile:
    """
    Load a room description from JSON.

    Raises:
        StyleLoadError: if the file cannot be read or is malformed
    """
    path = Path(path)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except OSError as e:
        raise StyleLoadError(f"cannot read room file: {e}", path) from e
    except json.JSONDecodeError as e:
        raise StyleLoadError(f"invalid JSON: {e}", path) from e

    try:
        room_file = room_file_from_dict(data)
    except StyleLoadError as e:
        raise StyleLoadError(str(e), path) from e

    logger.debug("Loaded %dx%d room from %s", room_file.room.width, room_file.room.height, path)
    return room_file

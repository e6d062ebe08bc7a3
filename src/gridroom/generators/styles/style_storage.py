"""
Style pack persistence.

Style packs are stored as JSON, one bundle per file, under
~/.config/gridroom/styles/ unless an explicit path is given. Loading is strict
(malformed files raise StyleLoadError) because a half-read style would
silently produce rooms that differ from what the designer authored.
"""

from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from gridroom.conversion.transforms import Rotator
from gridroom.generators.errors import StyleLoadError
from gridroom.generators.grid.grid_types import Corner
from gridroom.generators.room.room_types import (
    VALID_ROTATIONS, DoorSpec, MeshPlacementInfo, WallModule, clamp_weight
)
from .style_pack import CeilingStyle, CeilingTile, FloorStyle, StylePacks, WallStyle

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def get_styles_dir() -> Path:
    """
    Directory for saved style packs.

    Returns:
        Path to ~/.config/gridroom/styles/ (created if missing)
    """
    styles_dir = Path.home() / ".config" / "gridroom" / "styles"
    styles_dir.mkdir(parents=True, exist_ok=True)
    return styles_dir


def _sanitize_filename(name: str) -> str:
    safe = name.lower().replace(" ", "_")
    safe = "".join(c for c in safe if c.isalnum() or c in "_-")
    return safe or "style"


# ---------------------------------------------------------------------------
# Element conversion
# ---------------------------------------------------------------------------

def _require(data: Dict[str, Any], key: str, context: str):
    if not isinstance(data, dict):
        raise StyleLoadError(f"{context} must be an object")
    if key not in data:
        raise StyleLoadError(f"{context} is missing required key '{key}'")
    return data[key]


def _rotations_from_list(values) -> List[int]:
    rotations = []
    for value in values or []:
        yaw = int(value) % 360
        if yaw not in VALID_ROTATIONS:
            raise StyleLoadError(f"rotation {value} is not a multiple of 90")
        if yaw not in rotations:
            rotations.append(yaw)
    return rotations or [0]


def mesh_info_from_dict(data: Dict[str, Any]) -> MeshPlacementInfo:
    footprint = data.get("footprint", [1, 1])
    return MeshPlacementInfo(
        mesh=_require(data, "mesh", "floor mesh"),
        footprint=(max(1, int(footprint[0])), max(1, int(footprint[1]))),
        weight=clamp_weight(data.get("weight", 1.0)),
        allowed_rotations=_rotations_from_list(data.get("rotations")),
    )


def mesh_info_to_dict(info: MeshPlacementInfo) -> Dict[str, Any]:
    return {
        "mesh": info.mesh,
        "footprint": list(info.footprint),
        "weight": info.weight,
        "rotations": list(info.allowed_rotations),
    }


def wall_module_from_dict(data: Dict[str, Any]) -> WallModule:
    return WallModule(
        footprint=int(data.get("footprint", 1)),
        base_mesh=_require(data, "base", "wall module"),
        middle1_mesh=data.get("middle1"),
        middle2_mesh=data.get("middle2"),
        top_mesh=data.get("top"),
        weight=clamp_weight(data.get("weight", 1.0)),
    )


def wall_module_to_dict(module: WallModule) -> Dict[str, Any]:
    data = {"footprint": module.footprint, "base": module.base_mesh, "weight": module.weight}
    for key, value in (("middle1", module.middle1_mesh),
                       ("middle2", module.middle2_mesh),
                       ("top", module.top_mesh)):
        if value:
            data[key] = value
    return data


def door_from_dict(data: Dict[str, Any]) -> DoorSpec:
    return DoorSpec(
        name=data.get("name", "Door"),
        frame_mesh=data.get("frame_mesh"),
        frame_footprint=max(1, int(data.get("footprint", 2))),
        frame_rotation_offset=Rotator.from_sequence(data.get("rotation_offset")),
        weight=clamp_weight(data.get("weight", 1.0)),
        door_pool=[door_from_dict(d) for d in data.get("pool", [])],
        connection_box_extent=tuple(data.get("connection_box_extent", (50.0, 50.0, 200.0))),
    )


def door_to_dict(door: DoorSpec) -> Dict[str, Any]:
    data = {
        "name": door.name,
        "frame_mesh": door.frame_mesh,
        "footprint": door.frame_footprint,
        "rotation_offset": door.frame_rotation_offset.to_list(),
        "weight": door.weight,
        "connection_box_extent": list(door.connection_box_extent),
    }
    if door.door_pool:
        data["pool"] = [door_to_dict(d) for d in door.door_pool]
    return data


def _tile_from_dict(data: Dict[str, Any]) -> CeilingTile:
    return CeilingTile(
        mesh=_require(data, "mesh", "ceiling tile"),
        tile_size=max(1, int(data.get("tile_size", 1))),
        weight=clamp_weight(data.get("weight", 1.0)),
    )


def _tile_to_dict(tile: CeilingTile) -> Dict[str, Any]:
    return {"mesh": tile.mesh, "tile_size": tile.tile_size, "weight": tile.weight}


# ---------------------------------------------------------------------------
# Style conversion
# ---------------------------------------------------------------------------

def _floor_from_dict(data: Dict[str, Any]) -> FloorStyle:
    return FloorStyle(
        meshes=[mesh_info_from_dict(m) for m in data.get("meshes", [])],
        filler_mesh=data.get("filler"),
    )


def _wall_from_dict(data: Dict[str, Any]) -> WallStyle:
    offsets = data.get("offsets", {})
    corner_offsets = {}
    for key, value in data.get("corner_offsets", {}).items():
        try:
            corner = Corner(key)
        except ValueError:
            raise StyleLoadError(f"unknown corner '{key}'")
        corner_offsets[corner] = (float(value[0]), float(value[1]), float(value[2]))

    return WallStyle(
        modules=[wall_module_from_dict(m) for m in data.get("modules", [])],
        default_corner_mesh=data.get("corner_mesh"),
        wall_height=float(data.get("wall_height", 400.0)),
        layer_height=float(data.get("layer_height", 100.0)),
        north_offset=float(offsets.get("north", 0.0)),
        south_offset=float(offsets.get("south", 0.0)),
        east_offset=float(offsets.get("east", 0.0)),
        west_offset=float(offsets.get("west", 0.0)),
        corner_offsets=corner_offsets,
    )


def _ceiling_from_dict(data: Dict[str, Any]) -> CeilingStyle:
    rotation = data.get("rotation")
    return CeilingStyle(
        large_tiles=[_tile_from_dict(t) for t in data.get("large_tiles", [])],
        small_tiles=[_tile_from_dict(t) for t in data.get("small_tiles", [])],
        large_tile_size=max(1, int(data.get("large_tile_size", 4))),
        ceiling_height=float(data.get("height", 500.0)),
        ceiling_rotation=Rotator.from_sequence(rotation) if rotation else Rotator(yaw=180.0),
    )


def styles_to_dict(packs: StylePacks) -> Dict[str, Any]:
    """Convert a StylePacks bundle to a JSON-serializable dictionary."""
    data: Dict[str, Any] = {"name": packs.name, "description": packs.description}

    if packs.floor is not None:
        data["floor"] = {
            "meshes": [mesh_info_to_dict(m) for m in packs.floor.meshes],
            "filler": packs.floor.filler_mesh,
        }
    if packs.wall is not None:
        wall = packs.wall
        data["wall"] = {
            "modules": [wall_module_to_dict(m) for m in wall.modules],
            "corner_mesh": wall.default_corner_mesh,
            "wall_height": wall.wall_height,
            "layer_height": wall.layer_height,
            "offsets": {
                "north": wall.north_offset,
                "south": wall.south_offset,
                "east": wall.east_offset,
                "west": wall.west_offset,
            },
            "corner_offsets": {c.value: list(v) for c, v in wall.corner_offsets.items()},
        }
    if packs.door is not None:
        data["door"] = door_to_dict(packs.door)
    if packs.ceiling is not None:
        ceiling = packs.ceiling
        data["ceiling"] = {
            "large_tiles": [_tile_to_dict(t) for t in ceiling.large_tiles],
            "small_tiles": [_tile_to_dict(t) for t in ceiling.small_tiles],
            "large_tile_size": ceiling.large_tile_size,
            "height": ceiling.ceiling_height,
            "rotation": ceiling.ceiling_rotation.to_list(),
        }
    return data


def dict_to_styles(data: Dict[str, Any]) -> StylePacks:
    """
    Create a StylePacks bundle from a dictionary.

    Raises:
        StyleLoadError: if required keys are missing or values have the wrong shape
    """
    name = _require(data, "name", "style")
    try:
        return StylePacks(
            name=name,
            description=data.get("description", ""),
            floor=_floor_from_dict(data["floor"]) if "floor" in data else None,
            wall=_wall_from_dict(data["wall"]) if "wall" in data else None,
            door=door_from_dict(data["door"]) if "door" in data else None,
            ceiling=_ceiling_from_dict(data["ceiling"]) if "ceiling" in data else None,
        )
    except (TypeError, ValueError, IndexError, AttributeError) as e:
        raise StyleLoadError(f"style '{name}' is malformed: {e}") from e


# ---------------------------------------------------------------------------
# Files
# ---------------------------------------------------------------------------

def save_style_packs(packs: StylePacks, path: Optional[PathLike] = None) -> Path:
    """
    Save a style bundle as JSON.

    Args:
        packs: Bundle to save
        path: Target file; defaults to the styles directory

    Returns:
        Path to the saved file
    """
    if path is None:
        path = get_styles_dir() / (_sanitize_filename(packs.name) + ".json")
    path = Path(path)

    with open(path, 'w', encoding='utf-8') as f:
        json.dump(styles_to_dict(packs), f, indent=2, ensure_ascii=False)

    logger.debug("Saved style '%s' to %s", packs.name, path)
    return path


def load_style_packs(path: PathLike) -> StylePacks:
    """
    Load a style bundle from a JSON file.

    Raises:
        StyleLoadError: if the file cannot be read or is malformed
    """
    path = Path(path)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except OSError as e:
        raise StyleLoadError(f"cannot read style file: {e}", path) from e
    except json.JSONDecodeError as e:
        raise StyleLoadError(f"invalid JSON: {e}", path) from e

    try:
        return dict_to_styles(data)
    except StyleLoadError as e:
        raise StyleLoadError(str(e), path) from e


def load_all_saved_styles(styles_dir: Optional[PathLike] = None) -> List[StylePacks]:
    """Load every valid bundle in a directory; malformed files are logged and skipped."""
    styles_dir = Path(styles_dir) if styles_dir is not None else get_styles_dir()
    styles = []
    for file_path in sorted(styles_dir.glob("*.json")):
        try:
            styles.append(load_style_packs(file_path))
        except StyleLoadError as e:
            logger.warning("Skipping style file: %s", e)
    return styles

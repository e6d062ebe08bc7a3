"""Shared fixtures: a plain 10x10 room, a small test style and the Stone Keep style."""

import pytest

from gridroom.conversion.transforms import Transform
from gridroom.generators.assets import TOP_SOCKET_NAME, DictAssetResolver
from gridroom.generators.grid.grid_types import RoomSpec
from gridroom.generators.room.room_types import DoorSpec, MeshPlacementInfo, WallModule
from gridroom.generators.styles import (
    STONE_KEEP_MANIFEST, STONE_KEEP_STYLE, CeilingStyle, CeilingTile, FloorStyle,
    StylePacks, WallStyle,
)


@pytest.fixture
def room():
    return RoomSpec(10, 10)


@pytest.fixture
def resolver():
    """Resolver for the small test style."""
    resolver = DictAssetResolver()
    for name in ("SM_Floor_2x2", "SM_Floor_1x1", "SM_Floor_Long",
                 "SM_Wall_1", "SM_Wall_2", "SM_Wall_4",
                 "SM_Door", "SM_Gate", "SM_Tile_4", "SM_Tile_1", "SM_Corner"):
        resolver.add_mesh(name)
    resolver.add_mesh("SM_Wall_Base", bounds_height=300.0,
                      sockets={TOP_SOCKET_NAME: Transform(location=(0.0, 0.0, 200.0))})
    resolver.add_mesh("SM_Wall_Mid", bounds_height=100.0)
    resolver.add_mesh("SM_Wall_Top", bounds_height=50.0)
    return resolver


@pytest.fixture
def wall_style():
    return WallStyle(
        modules=[
            WallModule(4, "SM_Wall_4"),
            WallModule(2, "SM_Wall_2"),
            WallModule(1, "SM_Wall_1"),
        ],
        default_corner_mesh="SM_Corner",
    )


@pytest.fixture
def styles(wall_style):
    return StylePacks(
        name="Test Style",
        floor=FloorStyle(
            meshes=[MeshPlacementInfo("SM_Floor_2x2", (2, 2), 1.0)],
            filler_mesh="SM_Floor_1x1",
        ),
        wall=wall_style,
        door=DoorSpec("Door", "SM_Door", 2),
        ceiling=CeilingStyle(
            large_tiles=[CeilingTile("SM_Tile_4", 4)],
            small_tiles=[CeilingTile("SM_Tile_1")],
            large_tile_size=4,
        ),
    )


@pytest.fixture
def keep_resolver():
    return DictAssetResolver.from_manifest(STONE_KEEP_MANIFEST)


@pytest.fixture
def keep_styles():
    return STONE_KEEP_STYLE

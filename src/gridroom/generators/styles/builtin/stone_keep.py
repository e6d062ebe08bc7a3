"""
Stone Keep style — flagstone floors, ashlar walls and timber ceiling panels.

Also ships the mesh manifest for its assets so the style can be generated
without an external asset library.
"""

from gridroom.conversion.transforms import Rotator
from gridroom.generators.grid.grid_types import Corner
from gridroom.generators.room.room_types import DoorSpec, MeshPlacementInfo, WallModule
from gridroom.generators.styles.style_pack import (
    CeilingStyle, CeilingTile, FloorStyle, StylePacks, WallStyle
)


STONE_KEEP_STYLE = StylePacks(
    name="Stone Keep",
    description="Castle interior: flagstones, ashlar walls with a cornice, timber ceiling",
    floor=FloorStyle(
        meshes=[
            MeshPlacementInfo("SM_Floor_Flagstone_2x2", (2, 2), 3.0, [0, 90, 180, 270]),
            MeshPlacementInfo("SM_Floor_Flagstone_1x2", (1, 2), 1.5, [0, 90]),
            MeshPlacementInfo("SM_Floor_Rug_3x2", (3, 2), 0.5, [0, 90]),
            MeshPlacementInfo("SM_Floor_Grate_1x1", (1, 1), 0.25),
        ],
        filler_mesh="SM_Floor_Flagstone_1x1",
    ),
    wall=WallStyle(
        modules=[
            WallModule(4, "SM_Wall_Ashlar_4m", "SM_Wall_Ashlar_Mid_4m", None, "SM_Wall_Cornice_4m"),
            WallModule(2, "SM_Wall_Ashlar_2m", "SM_Wall_Ashlar_Mid_2m", None, "SM_Wall_Cornice_2m"),
            WallModule(1, "SM_Wall_Ashlar_1m", None, None, "SM_Wall_Cornice_1m"),
        ],
        default_corner_mesh="SM_Wall_Pillar",
        wall_height=400.0,
        layer_height=100.0,
        corner_offsets={corner: (0.0, 0.0, 0.0) for corner in Corner},
    ),
    door=DoorSpec(
        name="Keep Doors",
        frame_mesh="SM_DoorFrame_Oak_2m",
        frame_footprint=2,
        door_pool=[
            DoorSpec("Oak Door", "SM_DoorFrame_Oak_2m", 2, Rotator(), 3.0),
            DoorSpec("Great Gate", "SM_DoorFrame_Gate_4m", 4, Rotator(), 1.0),
        ],
    ),
    ceiling=CeilingStyle(
        large_tiles=[CeilingTile("SM_Ceiling_Timber_4x4", 4, 1.0)],
        small_tiles=[
            CeilingTile("SM_Ceiling_Timber_1x1", 1, 4.0),
            CeilingTile("SM_Ceiling_Beam_1x1", 1, 1.0),
        ],
        large_tile_size=4,
        ceiling_height=500.0,
    ),
)


def _socket(height):
    return {"TopCenter": {"location": [0.0, 0.0, height], "rotation": [0.0, 0.0, 0.0]}}


STONE_KEEP_MANIFEST = {
    "SM_Floor_Flagstone_2x2": {},
    "SM_Floor_Flagstone_1x2": {},
    "SM_Floor_Flagstone_1x1": {},
    "SM_Floor_Rug_3x2": {},
    "SM_Floor_Grate_1x1": {},
    "SM_Wall_Ashlar_4m": {"bounds_height": 200.0, "sockets": _socket(200.0)},
    "SM_Wall_Ashlar_2m": {"bounds_height": 200.0, "sockets": _socket(200.0)},
    "SM_Wall_Ashlar_1m": {"bounds_height": 300.0},
    "SM_Wall_Ashlar_Mid_4m": {"bounds_height": 100.0, "sockets": _socket(100.0)},
    "SM_Wall_Ashlar_Mid_2m": {"bounds_height": 100.0, "sockets": _socket(100.0)},
    "SM_Wall_Cornice_4m": {"bounds_height": 100.0},
    "SM_Wall_Cornice_2m": {"bounds_height": 100.0},
    "SM_Wall_Cornice_1m": {"bounds_height": 100.0},
    "SM_Wall_Pillar": {"bounds_height": 400.0},
    "SM_DoorFrame_Oak_2m": {"bounds_height": 300.0},
    "SM_DoorFrame_Gate_4m": {"bounds_height": 400.0},
    "SM_Ceiling_Timber_4x4": {},
    "SM_Ceiling_Timber_1x1": {},
    "SM_Ceiling_Beam_1x1": {},
}

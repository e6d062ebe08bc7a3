"""
Style packs and StyleCatalog — the designer-authored pools a room is built from.

A StylePacks bundle groups one floor, wall, door and ceiling style under a
single name. Rooms can also mix parts from different bundles by naming them
individually on the RoomSpec.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from gridroom.conversion.transforms import Rotator, Vec3
from gridroom.generators.grid.grid_types import Corner, RoomSpec
from gridroom.generators.room.room_types import DoorSpec, MeshPlacementInfo, WallModule


@dataclass
class FloorStyle:
    """
    Floor and interior meshes.

    Attributes:
        meshes: Weighted pool for the scan pass
        filler_mesh: 1x1 mesh used to close every remaining gap
    """
    meshes: List[MeshPlacementInfo] = field(default_factory=list)
    filler_mesh: Optional[str] = None


@dataclass
class WallStyle:
    """
    Wall modules plus edge and corner alignment.

    The per-edge offsets shift walls perpendicular to their edge: north/south
    along X, east/west along Y.
    """
    modules: List[WallModule] = field(default_factory=list)
    default_corner_mesh: Optional[str] = None
    wall_height: float = 400.0
    layer_height: float = 100.0

    north_offset: float = 0.0
    south_offset: float = 0.0
    east_offset: float = 0.0
    west_offset: float = 0.0

    corner_offsets: Dict[Corner, Vec3] = field(default_factory=dict)


@dataclass
class CeilingTile:
    mesh: Optional[str]
    tile_size: int = 1
    weight: float = 1.0


@dataclass
class CeilingStyle:
    """Large tiles cover K x K blocks first; small tiles fill what is left."""
    large_tiles: List[CeilingTile] = field(default_factory=list)
    small_tiles: List[CeilingTile] = field(default_factory=list)
    large_tile_size: int = 4
    ceiling_height: float = 500.0
    ceiling_rotation: Rotator = field(default_factory=lambda: Rotator(yaw=180.0))


@dataclass
class StylePacks:
    """Named bundle of the four styles a room needs."""
    name: str
    description: str = ""
    floor: Optional[FloorStyle] = None
    wall: Optional[WallStyle] = None
    door: Optional[DoorSpec] = None
    ceiling: Optional[CeilingStyle] = None


class StyleCatalog:
    """
    Registry of style packs.

    Lookup is case-insensitive, matching how designers type names on rooms.
    """

    def __init__(self):
        self._styles: Dict[str, StylePacks] = {}

    def register(self, packs: StylePacks) -> None:
        self._styles[packs.name] = packs

    def get_style(self, name: Optional[str]) -> Optional[StylePacks]:
        if not name:
            return None
        if name in self._styles:
            return self._styles[name]

        name_lower = name.lower()
        for sname, packs in self._styles.items():
            if sname.lower() == name_lower:
                return packs
        return None

    def list_styles(self) -> List[str]:
        return sorted(self._styles.keys())

    def unregister(self, name: str) -> bool:
        packs = self.get_style(name)
        if packs is None:
            return False
        del self._styles[packs.name]
        return True

    def is_registered(self, name: str) -> bool:
        return self.get_style(name) is not None

    def resolve_for_room(self, room: RoomSpec, default: Optional[str] = None) -> StylePacks:
        """
        Assemble the packs for a room from its per-part style names.

        Parts the room does not name come from ``default``. A name that is
        not registered leaves that part empty.
        """
        fallback = self.get_style(default)

        def pick(style_name: Optional[str], attr: str):
            source = self.get_style(style_name) if style_name else fallback
            return getattr(source, attr) if source is not None else None

        return StylePacks(
            name=default or "room",
            floor=pick(room.floor_style, 'floor'),
            wall=pick(room.wall_style, 'wall'),
            door=pick(room.door_style, 'door'),
            ceiling=pick(room.ceiling_style, 'ceiling'),
        )

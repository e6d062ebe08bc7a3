"""
ShapePreset dataclass — reusable carve-outs that turn a rectangle into L, T, U
and plus shaped rooms.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Tuple

from gridroom.generators.grid.grid_types import GridCoord, RoomSpec
from gridroom.generators.room.room_types import ForcedEmptyRegion


class ShapeType(Enum):
    RECTANGULAR = "rectangular"
    L_SHAPE = "l_shape"
    T_SHAPE = "t_shape"
    PLUS_SHAPE = "plus_shape"
    U_SHAPE = "u_shape"
    CUSTOM = "custom"


@dataclass
class ShapePreset:
    """
    A named bundle of forced-empty regions and cells.

    Coordinates are absolute grid cells laid out for ``recommended_min_size``;
    on a smaller room regions are clamped like any other forced-empty input.
    """

    # Identity
    name: str
    shape_type: ShapeType = ShapeType.RECTANGULAR
    description: str = ""
    recommended_min_size: Tuple[int, int] = (10, 10)

    # Shape definition
    empty_regions: List[ForcedEmptyRegion] = field(default_factory=list)
    empty_cells: List[GridCoord] = field(default_factory=list)

    def fits(self, room: RoomSpec) -> bool:
        """True if the room is at least the recommended size."""
        min_w, min_h = self.recommended_min_size
        return room.width >= min_w and room.height >= min_h


def region(x0: int, y0: int, x1: int, y1: int) -> ForcedEmptyRegion:
    return ForcedEmptyRegion(GridCoord(x0, y0), GridCoord(x1, y1))

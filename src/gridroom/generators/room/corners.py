"""
Corner pieces at the four outer grid corners.
"""

import logging
from typing import Dict, List, Tuple

from gridroom.conversion.transforms import Transform, Vec3, offset_location
from gridroom.generators.assets import AssetResolver, MeshHandle
from gridroom.generators.grid.grid_types import Corner, RoomSpec

logger = logging.getLogger(__name__)

CORNER_ORDER = [Corner.SOUTH_WEST, Corner.NORTH_WEST, Corner.SOUTH_EAST, Corner.NORTH_EAST]


def corner_position(room: RoomSpec, corner: Corner) -> Vec3:
    w = room.width * room.cell_size
    h = room.height * room.cell_size
    return {
        Corner.SOUTH_WEST: (0.0, 0.0, 0.0),
        Corner.NORTH_WEST: (w, 0.0, 0.0),
        Corner.SOUTH_EAST: (0.0, h, 0.0),
        Corner.NORTH_EAST: (w, h, 0.0),
    }[corner]


def place_corners(room: RoomSpec, wall_style,
                  resolver: AssetResolver) -> List[Tuple[Corner, MeshHandle, Transform]]:
    """Corner mesh at each grid corner plus its offset; identity rotation."""
    mesh = resolver.resolve(wall_style.default_corner_mesh)
    if mesh is None:
        if wall_style.default_corner_mesh:
            logger.warning("Corner mesh %r did not resolve; corners skipped",
                           wall_style.default_corner_mesh)
        return []

    offsets: Dict[Corner, Vec3] = wall_style.corner_offsets
    placed = []
    for corner in CORNER_ORDER:
        local = offset_location(corner_position(room, corner), offsets.get(corner, (0.0, 0.0, 0.0)))
        placed.append((corner, mesh, Transform(location=room.to_world(local))))
    return placed

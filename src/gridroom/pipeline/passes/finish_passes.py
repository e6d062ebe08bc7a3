"""
Finishing passes: ceiling tiles and corner pieces.
"""

import logging

from gridroom.generators.grid.grid_types import CellType
from gridroom.generators.room.ceiling import CeilingTiler
from gridroom.generators.room.corners import place_corners
from gridroom.generators.room.interior_packer import expand_forced_empty_regions
from .base import PassConfig, PassResult, RoomPass
from ..room_state import CATEGORY_CEILING, CATEGORY_CORNER, RoomState

logger = logging.getLogger(__name__)


class CeilingPass(RoomPass):
    """
    Tile the ceiling.

    Options:
        seed_offset: Added to the run seed for the large-tile stream (default 0)
        follow_floor_shape: Leave cells the floor left reserved without ceiling (default False)
    """

    @property
    def name(self) -> str:
        return "ceiling"

    def execute(self, state: RoomState, config: PassConfig) -> PassResult:
        result = PassResult(success=True, state=state)
        ceiling = state.styles.ceiling
        if ceiling is None:
            logger.debug("No ceiling style; ceiling skipped")
            result.skipped = True
            return result

        blocked = []
        if config.options.get('follow_floor_shape', False):
            # Reserved cells left on the packed grid; forced items may cover carve-outs
            if state.interior_grid is not None:
                blocked = state.interior_grid.cells_of_type(CellType.WALL_BOUNDARY)
            else:
                blocked = expand_forced_empty_regions(
                    state.room, state.forced_empty_regions, state.forced_empty_cells
                )

        tiler = CeilingTiler(state.room, ceiling, state.resolver, blocked)
        for tile in tiler.tile(state.seed + config.options.get('seed_offset', 0)):
            state.emit(tile.mesh, tile.transform, CATEGORY_CEILING)

        result.metrics = dict(tiler.metrics)
        return result


class CornerPass(RoomPass):
    """Place the wall style's corner mesh at the four grid corners."""

    @property
    def name(self) -> str:
        return "corners"

    def execute(self, state: RoomState, config: PassConfig) -> PassResult:
        result = PassResult(success=True, state=state)
        wall = state.styles.wall
        if wall is None or not wall.default_corner_mesh:
            result.skipped = True
            return result

        corners = place_corners(state.room, wall, state.resolver)
        for _corner, mesh, transform in corners:
            state.emit(mesh, transform, CATEGORY_CORNER)

        result.metrics = {'corners_placed': len(corners)}
        return result

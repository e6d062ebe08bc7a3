"""
Interior pass: fills the floor grid with forced, weighted and filler meshes.
"""

from typing import List

from gridroom.generators.grid.grid_types import CellType
from gridroom.generators.random_stream import RandomStream
from gridroom.generators.room.interior_packer import InteriorPacker
from .base import PassConfig, PassResult, RoomPass
from ..room_state import CATEGORY_FLOOR, RoomState


class InteriorPackingPass(RoomPass):
    """
    Pack the interior grid.

    Options:
        seed_offset: Added to the run seed for this pass's stream (default 0)
    """

    @property
    def name(self) -> str:
        return "interior"

    @property
    def description(self) -> str:
        return "Forced placements, forced-empty carve-outs, weighted scan and gap fill"

    def validate_preconditions(self, state: RoomState) -> List[str]:
        if state.styles.floor is None:
            return ["No floor style"]
        return []

    def execute(self, state: RoomState, config: PassConfig) -> PassResult:
        result = PassResult(success=True, state=state)
        floor = state.styles.floor
        stream = RandomStream(state.seed + config.options.get('seed_offset', 0))

        packer = InteriorPacker(state.room, state.resolver, stream)
        placements = packer.pack(
            floor.meshes,
            floor.filler_mesh,
            state.overrides.forced_placements,
            state.forced_empty_regions,
            state.forced_empty_cells,
        )

        state.interior_grid = packer.grid
        state.interior_placements = placements
        for placement in placements:
            state.emit(placement.mesh, placement.transform, CATEGORY_FLOOR)

        if not floor.meshes:
            result.add_warning("Floor pool is empty; only filler meshes were placed")

        result.metrics = dict(packer.metrics)
        result.metrics['placements'] = len(placements)
        return result

    def validate_postconditions(self, state: RoomState) -> List[str]:
        grid = state.interior_grid
        if grid is None:
            return []
        empty = grid.count(CellType.EMPTY)
        if empty:
            return [f"{empty} interior cells left empty"]
        return []

"""
Wall passes: doors and base walls on the boundary ring, then the stacked
Middle/Top layers on top of every base wall.
"""

from typing import List

from gridroom.generators.grid.grid_types import CellType, EDGE_ORDER
from gridroom.generators.random_stream import RandomStream
from gridroom.generators.room.door_placement import DoorPlanner
from gridroom.generators.room.vertical_layers import VerticalLayerCompositor
from gridroom.generators.room.wall_layout import WallLayoutEngine
from .base import PassConfig, PassResult, RoomPass
from ..room_state import (
    CATEGORY_DOOR, CATEGORY_WALL, CATEGORY_WALL_MIDDLE, CATEGORY_WALL_TOP, RoomState
)


class WallLayoutPass(RoomPass):
    """
    Resolve doors (fixed plus procedural) and bin-pack walls on every edge.

    Options:
        seed_offset: Added to the run seed for procedural door placement (default 0)
    """

    @property
    def name(self) -> str:
        return "walls"

    @property
    def description(self) -> str:
        return "Procedural doors, door spans, forced walls and greedy wall packing"

    def validate_preconditions(self, state: RoomState) -> List[str]:
        if state.styles.wall is None:
            return ["No wall style"]
        return []

    def execute(self, state: RoomState, config: PassConfig) -> PassResult:
        result = PassResult(success=True, state=state)
        stream = RandomStream(state.seed + config.options.get('seed_offset', 0))

        # The planner works on its own copy; the overrides keep only designer doors
        planner = DoorPlanner(state.room, state.overrides.fixed_doors)
        procedural = planner.generate_procedural_doors(
            state.overrides.procedural_doors, state.styles.door, stream
        )
        if state.overrides.procedural_doors.enabled and state.styles.door is None:
            result.add_warning("Procedural doors enabled but no door style is set")
        state.resolved_doors = planner.resolved_doors

        engine = WallLayoutEngine(state.room, state.styles.wall, state.resolver)
        engine.layout(
            state.resolved_doors,
            state.overrides.forced_walls,
            procedural={id(door) for door in procedural},
        )

        state.boundary = engine.boundary
        state.doors = engine.doors
        state.segments = engine.segments

        # Emit per edge in placement order: doors, then walls
        for edge in EDGE_ORDER:
            for door in engine.doors:
                if door.edge == edge and door.frame_mesh is not None:
                    state.emit(door.frame_mesh, door.frame_transform, CATEGORY_DOOR)
            for segment in engine.segments:
                if segment.edge == edge:
                    state.emit(segment.base_mesh, segment.base_transform, CATEGORY_WALL)

        result.metrics = dict(engine.metrics)
        result.metrics['procedural_doors'] = len(procedural)
        result.metrics['segments'] = len(engine.segments)
        return result

    def validate_postconditions(self, state: RoomState) -> List[str]:
        messages = []
        for edge in EDGE_ORDER:
            free = sum(1 for s in state.boundary.edge_states(state.room, edge) if s == CellType.EMPTY)
            if free:
                messages.append(f"{free} cells on the {edge.value} edge have no wall")
        return messages


class VerticalLayerPass(RoomPass):
    """Stack Middle1, Middle2 and Top meshes on the placed base walls."""

    @property
    def name(self) -> str:
        return "wall_layers"

    @property
    def description(self) -> str:
        return "Socket-relative Middle and Top wall layers"

    def execute(self, state: RoomState, config: PassConfig) -> PassResult:
        result = PassResult(success=True, state=state)
        if state.styles.wall is None:
            return result

        compositor = VerticalLayerCompositor(state.resolver, state.styles.wall.layer_height)
        for layer in compositor.compose(state.segments):
            category = CATEGORY_WALL_TOP if layer.layer == "top" else CATEGORY_WALL_MIDDLE
            state.emit(layer.mesh, layer.transform, category)

        result.metrics = dict(compositor.metrics)
        return result

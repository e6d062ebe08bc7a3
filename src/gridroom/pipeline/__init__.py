"""
Room Generation Pipeline Module.

Runs the room passes in order and collects the placed meshes.
"""

from .room_pipeline import (
    RoomPipeline,
    PipelineSettings,
    GenerationResult,
    PipelineStage,
    PipelineError,
    generate_room,
)

from .room_state import (
    RoomState,
    CATEGORY_FLOOR,
    CATEGORY_DOOR,
    CATEGORY_WALL,
    CATEGORY_WALL_MIDDLE,
    CATEGORY_WALL_TOP,
    CATEGORY_CEILING,
    CATEGORY_CORNER,
)

__all__ = [
    # Pipeline core
    'RoomPipeline',
    'PipelineSettings',
    'GenerationResult',
    'PipelineStage',
    'PipelineError',
    'generate_room',
    # Run state
    'RoomState',
    'CATEGORY_FLOOR',
    'CATEGORY_DOOR',
    'CATEGORY_WALL',
    'CATEGORY_WALL_MIDDLE',
    'CATEGORY_WALL_TOP',
    'CATEGORY_CEILING',
    'CATEGORY_CORNER',
]

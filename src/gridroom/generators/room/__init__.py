"""
Room Generation Module

The placement algorithms that fill one room: interior packing, door planning,
wall layout, vertical wall layers, ceiling tiling and corner pieces.
"""

from .room_types import (
    DoorPositionOffsets,
    DoorRecord,
    DoorSpec,
    FixedDoorLocation,
    ForcedEmptyRegion,
    ForcedInteriorPlacement,
    ForcedWallPlacement,
    InteriorPlacement,
    MeshPlacementInfo,
    PlacementInstruction,
    ProceduralDoorSettings,
    RoomOverrides,
    WallModule,
    WallSegmentRecord,
)
from .interior_packer import InteriorPacker, expand_forced_empty_regions, pack_interior
from .door_placement import DoorPlanner, MAX_DOOR_SELECTION_ATTEMPTS
from .wall_layout import WallLayoutEngine
from .vertical_layers import LayerPlacement, VerticalLayerCompositor, attachment_offset
from .ceiling import CEILING_SMALL_SEED_OFFSET, CeilingPlacement, CeilingTiler
from .corners import place_corners

__all__ = [
    # Data model
    'DoorPositionOffsets',
    'DoorRecord',
    'DoorSpec',
    'FixedDoorLocation',
    'ForcedEmptyRegion',
    'ForcedInteriorPlacement',
    'ForcedWallPlacement',
    'InteriorPlacement',
    'MeshPlacementInfo',
    'PlacementInstruction',
    'ProceduralDoorSettings',
    'RoomOverrides',
    'WallModule',
    'WallSegmentRecord',
    # Algorithms
    'InteriorPacker',
    'expand_forced_empty_regions',
    'pack_interior',
    'DoorPlanner',
    'MAX_DOOR_SELECTION_ATTEMPTS',
    'WallLayoutEngine',
    'LayerPlacement',
    'VerticalLayerCompositor',
    'attachment_offset',
    'CEILING_SMALL_SEED_OFFSET',
    'CeilingPlacement',
    'CeilingTiler',
    'place_corners',
]

__version__ = '1.0.0'

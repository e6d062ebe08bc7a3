"""
Room generation passes.

Each pass runs one phase of generation against the RoomState.
"""

from .base import PassConfig, PassResult, RoomPass
from .interior_passes import InteriorPackingPass
from .wall_passes import VerticalLayerPass, WallLayoutPass
from .finish_passes import CeilingPass, CornerPass

__all__ = [
    # Base classes
    'RoomPass',
    'PassConfig',
    'PassResult',
    # Phases
    'InteriorPackingPass',
    'WallLayoutPass',
    'VerticalLayerPass',
    'CeilingPass',
    'CornerPass',
]

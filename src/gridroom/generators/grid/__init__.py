"""
Occupancy model for a single room: the interior grid and its boundary ring.
"""

from .grid_types import (
    CELL_SIZE,
    EDGE_ORDER,
    EDGE_YAW,
    BoundaryOccupancy,
    CellType,
    Corner,
    GridCoord,
    InteriorGrid,
    RoomSpec,
    WallEdge,
    edge_cells,
)

__all__ = [
    'CELL_SIZE',
    'EDGE_ORDER',
    'EDGE_YAW',
    'BoundaryOccupancy',
    'CellType',
    'Corner',
    'GridCoord',
    'InteriorGrid',
    'RoomSpec',
    'WallEdge',
    'edge_cells',
]

__version__ = '1.0.0'

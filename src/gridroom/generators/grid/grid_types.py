#!/usr/bin/env python3
"""
Grid Types for Room Generation

This module defines the occupancy structures used while filling a single room:
the interior cell grid and the boundary ring that surrounds it. The interior
is tracked in a flat numpy array indexed by ``y * width + x``; the boundary
ring is a sparse mapping because its cells live one unit *outside* the grid
(x = -1, x = W, y = -1, y = H).

Coordinate system (matches the room meshes' authoring convention):
- +X = North, -X = South
- +Y = East,  -Y = West

Author: Grid Room Generator
License: MIT
"""

from typing import Dict, Iterator, List, Optional, Tuple
from dataclasses import dataclass, field
from enum import Enum
import numpy as np

from gridroom.conversion.transforms import Vec3


# Default cell size in world units (one cell = 100x100 units)
CELL_SIZE = 100.0


class CellType(Enum):
    """Occupancy state of a single grid cell"""
    EMPTY = 0          # Nothing placed yet
    FLOOR_MESH = 1     # Covered by a floor or interior mesh
    WALL_BOUNDARY = 2  # Wall on the ring; reserved sentinel in the interior
    DOORWAY = 3        # Door span on the ring


class WallEdge(Enum):
    """The four boundary edges of a room"""
    NORTH = "north"  # +X
    SOUTH = "south"  # -X
    EAST = "east"    # +Y
    WEST = "west"    # -Y

    @property
    def runs_along_y(self) -> bool:
        """North/South edges vary along Y; East/West along X."""
        return self in (WallEdge.NORTH, WallEdge.SOUTH)


# Processing order for per-edge passes
EDGE_ORDER: List[WallEdge] = [WallEdge.NORTH, WallEdge.SOUTH, WallEdge.EAST, WallEdge.WEST]

# Inward-facing yaw for walls on each edge
EDGE_YAW: Dict[WallEdge, float] = {
    WallEdge.NORTH: 180.0,
    WallEdge.SOUTH: 0.0,
    WallEdge.EAST: 270.0,
    WallEdge.WEST: 90.0,
}


class Corner(Enum):
    """Room corners, named by the two edges that meet there"""
    SOUTH_WEST = "south_west"
    NORTH_WEST = "north_west"
    SOUTH_EAST = "south_east"
    NORTH_EAST = "north_east"


@dataclass(frozen=True)
class GridCoord:
    """Integer cell coordinate (may lie on the virtual boundary ring)."""
    x: int
    y: int

    def offset(self, dx: int, dy: int) -> 'GridCoord':
        return GridCoord(self.x + dx, self.y + dy)

    @classmethod
    def from_sequence(cls, values) -> 'GridCoord':
        return cls(int(values[0]), int(values[1]))


@dataclass(frozen=True)
class RoomSpec:
    """
    Grid dimensions of the room being generated.

    Immutable for the length of a generation run. Style names are optional
    and only used when packs are resolved through a StyleCatalog.
    """
    width: int   # Cells along X
    height: int  # Cells along Y
    cell_size: float = CELL_SIZE
    origin: Vec3 = (0.0, 0.0, 0.0)
    floor_style: Optional[str] = None
    wall_style: Optional[str] = None
    door_style: Optional[str] = None
    ceiling_style: Optional[str] = None

    def __post_init__(self):
        if self.width < 1 or self.height < 1:
            raise ValueError(f"Room grid must be at least 1x1, got {self.width}x{self.height}")
        if self.cell_size <= 0:
            raise ValueError(f"Cell size must be positive, got {self.cell_size}")

    def edge_length(self, edge: WallEdge) -> int:
        """Number of ring positions along an edge."""
        return self.height if edge.runs_along_y else self.width

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def to_world(self, local: Vec3) -> Vec3:
        """Offset a room-local position by the room origin."""
        return (
            self.origin[0] + local[0],
            self.origin[1] + local[1],
            self.origin[2] + local[2],
        )

    def cell_center(self, x: float, y: float, z: float = 0.0) -> Vec3:
        """World position of the centre of cell (x, y)."""
        return self.to_world(((x + 0.5) * self.cell_size, (y + 0.5) * self.cell_size, z))


@dataclass
class InteriorGrid:
    """
    Occupancy of the room interior as a flat array of CellType values.

    Cells start EMPTY and are only ever advanced to a non-empty state;
    a new run builds a new grid.
    """

    width: int
    height: int
    cells: np.ndarray = field(init=False)

    def __post_init__(self):
        self.cells = np.zeros(self.width * self.height, dtype=np.int8)

    @classmethod
    def for_room(cls, room: RoomSpec) -> 'InteriorGrid':
        return cls(room.width, room.height)

    def index(self, x: int, y: int) -> int:
        return y * self.width + x

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, x: int, y: int) -> CellType:
        """Get cell state; out-of-bounds cells read as WALL_BOUNDARY."""
        if not self.in_bounds(x, y):
            return CellType.WALL_BOUNDARY
        return CellType(int(self.cells[self.index(x, y)]))

    def set(self, x: int, y: int, cell_type: CellType):
        if self.in_bounds(x, y):
            self.cells[self.index(x, y)] = cell_type.value

    def is_empty(self, x: int, y: int) -> bool:
        return self.get(x, y) == CellType.EMPTY

    def area_fits(self, x: int, y: int, width: int, height: int) -> bool:
        """True if the rectangle is inside the grid."""
        return x >= 0 and y >= 0 and x + width <= self.width and y + height <= self.height

    def area_is_free(self, x: int, y: int, width: int, height: int) -> bool:
        """True if the rectangle is inside the grid and every cell is EMPTY."""
        if not self.area_fits(x, y, width, height):
            return False
        view = self.cells.reshape(self.height, self.width)[y:y + height, x:x + width]
        return bool(np.all(view == CellType.EMPTY.value))

    def mark_area(self, x: int, y: int, width: int, height: int, cell_type: CellType):
        """Mark every in-bounds cell of a rectangle."""
        x0, y0 = max(0, x), max(0, y)
        x1, y1 = min(self.width, x + width), min(self.height, y + height)
        if x0 >= x1 or y0 >= y1:
            return
        view = self.cells.reshape(self.height, self.width)
        view[y0:y1, x0:x1] = cell_type.value

    def count(self, cell_type: CellType) -> int:
        return int(np.count_nonzero(self.cells == cell_type.value))

    def cells_of_type(self, cell_type: CellType) -> List[GridCoord]:
        """All cells in row-major order that hold the given state."""
        return [
            GridCoord(int(i % self.width), int(i // self.width))
            for i in np.flatnonzero(self.cells == cell_type.value)
        ]

    def iter_row_major(self) -> Iterator[Tuple[int, int]]:
        for y in range(self.height):
            for x in range(self.width):
                yield x, y

    def to_ascii(self) -> str:
        """ASCII dump for debugging (rows are Y, columns are X)."""
        char_map = {
            CellType.EMPTY.value: '.',
            CellType.FLOOR_MESH.value: '#',
            CellType.WALL_BOUNDARY.value: 'x',
            CellType.DOORWAY.value: '+',
        }
        view = self.cells.reshape(self.height, self.width)
        return '\n'.join(
            ''.join(char_map.get(int(v), '?') for v in row) for row in view
        )


def edge_cells(room: RoomSpec, edge: WallEdge) -> List[GridCoord]:
    """
    Ring cells for an edge, ordered by increasing position along the edge.

    The ring sits one unit outside the interior:
    North at x = W, South at x = -1, East at y = H, West at y = -1.
    """
    if edge == WallEdge.NORTH:
        return [GridCoord(room.width, y) for y in range(room.height)]
    if edge == WallEdge.SOUTH:
        return [GridCoord(-1, y) for y in range(room.height)]
    if edge == WallEdge.EAST:
        return [GridCoord(x, room.height) for x in range(room.width)]
    return [GridCoord(x, -1) for x in range(room.width)]


@dataclass
class BoundaryOccupancy:
    """What occupies each ring cell, independent of the interior grid."""
    cells: Dict[GridCoord, CellType] = field(default_factory=dict)

    def get(self, coord: GridCoord) -> CellType:
        return self.cells.get(coord, CellType.EMPTY)

    def mark(self, coord: GridCoord, cell_type: CellType):
        self.cells[coord] = cell_type

    def edge_states(self, room: RoomSpec, edge: WallEdge) -> List[CellType]:
        return [self.get(c) for c in edge_cells(room, edge)]

    def count(self, cell_type: CellType) -> int:
        return sum(1 for v in self.cells.values() if v == cell_type)

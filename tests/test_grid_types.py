"""Tests for the room grid and boundary ring."""

import pytest

from gridroom.generators.grid.grid_types import (
    BoundaryOccupancy, CellType, GridCoord, InteriorGrid, RoomSpec, WallEdge, edge_cells
)


def test_room_spec_rejects_empty_grid():
    with pytest.raises(ValueError):
        RoomSpec(0, 5)
    with pytest.raises(ValueError):
        RoomSpec(5, 5, cell_size=0.0)


def test_edge_lengths_follow_axis_convention():
    room = RoomSpec(8, 5)
    # North/South run along Y, East/West along X
    assert room.edge_length(WallEdge.NORTH) == 5
    assert room.edge_length(WallEdge.SOUTH) == 5
    assert room.edge_length(WallEdge.EAST) == 8
    assert room.edge_length(WallEdge.WEST) == 8


def test_edge_cells_sit_outside_the_grid():
    room = RoomSpec(3, 2)
    assert edge_cells(room, WallEdge.NORTH) == [GridCoord(3, 0), GridCoord(3, 1)]
    assert edge_cells(room, WallEdge.SOUTH) == [GridCoord(-1, 0), GridCoord(-1, 1)]
    assert edge_cells(room, WallEdge.EAST) == [GridCoord(0, 2), GridCoord(1, 2), GridCoord(2, 2)]
    assert edge_cells(room, WallEdge.WEST)[0] == GridCoord(0, -1)


def test_cell_center_includes_origin():
    room = RoomSpec(4, 4, cell_size=100.0, origin=(1000.0, 0.0, 50.0))
    assert room.cell_center(0, 0) == (1050.0, 50.0, 50.0)
    assert room.cell_center(3, 1) == (1350.0, 150.0, 50.0)


def test_interior_grid_area_queries():
    grid = InteriorGrid(4, 3)
    assert grid.area_is_free(0, 0, 2, 2)
    assert not grid.area_fits(3, 0, 2, 1)

    grid.mark_area(1, 1, 2, 2, CellType.FLOOR_MESH)
    assert grid.get(2, 2) == CellType.FLOOR_MESH
    assert not grid.area_is_free(0, 0, 2, 2)
    assert grid.count(CellType.FLOOR_MESH) == 4
    assert grid.count(CellType.EMPTY) == 8


def test_out_of_bounds_reads_as_boundary():
    grid = InteriorGrid(2, 2)
    assert grid.get(-1, 0) == CellType.WALL_BOUNDARY
    assert grid.get(2, 0) == CellType.WALL_BOUNDARY
    assert not grid.is_empty(0, 5)


def test_cells_of_type_row_major():
    grid = InteriorGrid(3, 2)
    grid.set(2, 0, CellType.FLOOR_MESH)
    grid.set(0, 1, CellType.FLOOR_MESH)
    assert grid.cells_of_type(CellType.FLOOR_MESH) == [GridCoord(2, 0), GridCoord(0, 1)]


def test_ascii_dump():
    grid = InteriorGrid(3, 2)
    grid.set(0, 0, CellType.FLOOR_MESH)
    grid.set(2, 1, CellType.WALL_BOUNDARY)
    assert grid.to_ascii() == "#..\n..x"


def test_boundary_occupancy_edge_states():
    room = RoomSpec(3, 3)
    boundary = BoundaryOccupancy()
    boundary.mark(GridCoord(-1, 1), CellType.DOORWAY)
    assert boundary.edge_states(room, WallEdge.SOUTH) == [
        CellType.EMPTY, CellType.DOORWAY, CellType.EMPTY
    ]
    assert boundary.count(CellType.DOORWAY) == 1

"""Tests for interior packing: forced items, carve-outs, weighted scan and gap fill."""

from collections import Counter

from gridroom.generators.grid.grid_types import CellType, GridCoord, RoomSpec
from gridroom.generators.random_stream import RandomStream
from gridroom.generators.room.interior_packer import (
    InteriorPacker, expand_forced_empty_regions, pack_interior
)
from gridroom.generators.room.room_types import (
    ForcedEmptyRegion, ForcedInteriorPlacement, MeshPlacementInfo
)


def _coverage(placements):
    return Counter(cell for p in placements for cell in p.covers())


def test_single_2x2_mesh_covers_whole_room(room, resolver):
    pool = [MeshPlacementInfo("SM_Floor_2x2", (2, 2), 1.0)]
    packer = InteriorPacker(room, resolver, RandomStream(0))
    placements = packer.pack(pool, "SM_Floor_1x1")

    coverage = _coverage(placements)
    assert len(coverage) == 100
    assert max(coverage.values()) == 1
    assert packer.grid.count(CellType.EMPTY) == 0

    for p in placements:
        if p.source == "filler":
            assert p.footprint == (1, 1)
            assert p.mesh.name == "SM_Floor_1x1"
        else:
            assert p.footprint == (2, 2)
    assert packer.metrics['weighted_placed'] > 0


def test_rotation_swaps_footprint():
    info = MeshPlacementInfo("SM_Floor_Long", (3, 1), 1.0, [90])
    assert info.footprint_for(90) == (1, 3)
    assert info.footprint_for(180) == (3, 1)


def test_rotated_mesh_fits_narrow_room(resolver):
    room = RoomSpec(1, 3)
    pool = [MeshPlacementInfo("SM_Floor_Long", (3, 1), 1.0, [90])]
    placements = pack_interior(room, pool, "SM_Floor_1x1", resolver, RandomStream(0))

    assert len(placements) == 1
    placed = placements[0]
    assert placed.footprint == (1, 3)
    assert placed.yaw == 90.0
    assert placed.transform.location == (50.0, 150.0, 0.0)
    assert placed.transform.rotator.yaw == 90.0


def test_forced_placements_go_first_and_skip_conflicts(room, resolver):
    mesh = MeshPlacementInfo("SM_Floor_2x2", (2, 2))
    forced = [
        ForcedInteriorPlacement(GridCoord(0, 0), mesh),
        ForcedInteriorPlacement(GridCoord(1, 1), mesh),  # overlaps the first
        ForcedInteriorPlacement(GridCoord(9, 9), mesh),  # leaves the grid
    ]
    packer = InteriorPacker(room, resolver, RandomStream(1))
    placements = packer.pack([], "SM_Floor_1x1", forced_placements=forced)

    assert placements[0].source == "forced"
    assert placements[0].cell == GridCoord(0, 0)
    assert packer.metrics['forced_placed'] == 1
    assert packer.metrics['skipped_conflicts'] == 2
    assert packer.metrics['filler_placed'] == 96


def test_forced_empty_cells_stay_uncovered(room, resolver):
    packer = InteriorPacker(room, resolver, RandomStream(2))
    placements = packer.pack(
        [MeshPlacementInfo("SM_Floor_2x2", (2, 2))],
        "SM_Floor_1x1",
        forced_empty_regions=[ForcedEmptyRegion(GridCoord(5, 5), GridCoord(4, 4))],
        forced_empty_cells=[GridCoord(0, 9)],
    )

    reserved = {GridCoord(4, 4), GridCoord(5, 4), GridCoord(4, 5), GridCoord(5, 5), GridCoord(0, 9)}
    coverage = _coverage(placements)
    assert not reserved & set(coverage)
    assert len(coverage) == 95
    assert packer.metrics['reserved_cells'] == 5
    assert packer.grid.count(CellType.WALL_BOUNDARY) == 5


def test_unresolved_pool_mesh_is_skipped(room, resolver):
    packer = InteriorPacker(room, resolver, RandomStream(3))
    packer.pack([MeshPlacementInfo("SM_Missing", (2, 2))], "SM_Floor_1x1")

    assert packer.metrics['weighted_placed'] == 0
    assert packer.metrics['skipped_assets'] == 100
    assert packer.metrics['filler_placed'] == 100


def test_unresolved_filler_leaves_cells_empty(room, resolver):
    packer = InteriorPacker(room, resolver, RandomStream(3))
    placements = packer.pack([], "SM_Missing")

    assert placements == []
    assert packer.grid.count(CellType.EMPTY) == 100
    assert packer.metrics['pool_exhausted'] == 1


def test_packing_is_deterministic(room, resolver):
    pool = [
        MeshPlacementInfo("SM_Floor_2x2", (2, 2), 2.0, [0, 90]),
        MeshPlacementInfo("SM_Floor_Long", (3, 1), 1.0, [0, 90, 180, 270]),
    ]

    def run(seed):
        placements = pack_interior(room, pool, "SM_Floor_1x1", resolver, RandomStream(seed))
        return [(p.mesh.name, p.cell, p.footprint, p.yaw) for p in placements]

    assert run(11) == run(11)


def test_expand_forced_empty_regions():
    room = RoomSpec(4, 4)
    cells = expand_forced_empty_regions(
        room,
        [ForcedEmptyRegion(GridCoord(3, 1), GridCoord(2, 0)),
         ForcedEmptyRegion(GridCoord(3, 3), GridCoord(9, 9))],
        [GridCoord(2, 0), GridCoord(10, 10), GridCoord(0, 0)],
    )
    assert cells == [
        GridCoord(2, 0), GridCoord(3, 0), GridCoord(2, 1), GridCoord(3, 1),
        GridCoord(3, 3),
        GridCoord(0, 0),
    ]


def test_forced_placement_wins_over_carve_out(room, resolver):
    packer = InteriorPacker(room, resolver, RandomStream(4))
    placements = packer.pack(
        [],
        "SM_Floor_1x1",
        forced_placements=[ForcedInteriorPlacement(GridCoord(0, 0), MeshPlacementInfo("SM_Floor_2x2", (2, 2)))],
        forced_empty_regions=[ForcedEmptyRegion(GridCoord(0, 0), GridCoord(1, 1))],
        forced_empty_cells=[GridCoord(3, 3)],
    )

    assert placements[0].source == "forced"
    assert placements[0].cell == GridCoord(0, 0)
    assert packer.metrics['forced_placed'] == 1
    for x, y in [(0, 0), (1, 0), (0, 1), (1, 1)]:
        assert packer.grid.get(x, y) == CellType.FLOOR_MESH
    # Only the carve-out cell the forced item did not cover stays reserved
    assert packer.metrics['reserved_cells'] == 1
    assert packer.grid.cells_of_type(CellType.WALL_BOUNDARY) == [GridCoord(3, 3)]

"""Tests for room shape presets."""

from gridroom.generators.grid.grid_types import CellType, GridCoord, RoomSpec
from gridroom.generators.room.room_types import ForcedEmptyRegion, RoomOverrides
from gridroom.generators.shapes import SHAPE_CATALOG, ShapeCatalog, ShapePreset, ShapeType
from gridroom.pipeline import CATEGORY_FLOOR, RoomPipeline


def test_builtin_presets_registered():
    assert SHAPE_CATALOG.list_presets() == [
        "L-Shape", "Plus Shape", "Rectangular", "T-Shape", "U-Shape"
    ]
    assert SHAPE_CATALOG.list_presets(ShapeType.PLUS_SHAPE) == ["Plus Shape"]
    assert SHAPE_CATALOG.get_preset("l-shape").shape_type == ShapeType.L_SHAPE


def test_forced_empty_for_appends_preset(room):
    own = ForcedEmptyRegion(GridCoord(0, 0), GridCoord(0, 0))
    overrides = RoomOverrides(forced_empty_regions=[own], shape_preset="L-Shape")

    regions, cells = SHAPE_CATALOG.forced_empty_for(room, overrides)

    assert regions[0] is own
    assert regions[1].start_cell == GridCoord(5, 5)
    assert regions[1].end_cell == GridCoord(9, 9)
    assert cells == []
    # The designer's list is not extended in place
    assert len(overrides.forced_empty_regions) == 1


def test_unknown_preset_is_ignored(room):
    overrides = RoomOverrides(shape_preset="Dodecagon")
    assert SHAPE_CATALOG.forced_empty_for(room, overrides) == ([], [])


def test_custom_preset_with_cells():
    catalog = ShapeCatalog()
    catalog.register(ShapePreset(
        name="Pillars",
        shape_type=ShapeType.CUSTOM,
        empty_cells=[GridCoord(2, 2), GridCoord(2, 5)],
        recommended_min_size=(6, 6),
    ))
    regions, cells = catalog.forced_empty_for(RoomSpec(4, 4), RoomOverrides(shape_preset="pillars"))
    assert regions == []
    assert cells == [GridCoord(2, 2), GridCoord(2, 5)]
    assert not catalog.get_preset("Pillars").fits(RoomSpec(4, 4))


def test_l_shaped_room_generation(room, keep_resolver, keep_styles):
    result = RoomPipeline(keep_resolver).generate(
        room, keep_styles, RoomOverrides(shape_preset="L-Shape"), seed=3
    )

    assert result.success
    assert result.validation.passed
    state = result.state
    assert state.interior_grid.count(CellType.WALL_BOUNDARY) == 25
    assert state.interior_grid.count(CellType.FLOOR_MESH) == 75

    covered = {cell for p in state.interior_placements for cell in p.covers()}
    assert GridCoord(7, 7) not in covered
    assert len(result.instructions_in(CATEGORY_FLOOR)) == len(state.interior_placements)


def test_preset_regions_outside_small_room_are_dropped():
    small = RoomSpec(4, 4)

    assert SHAPE_CATALOG.forced_empty_for(small, RoomOverrides(shape_preset="L-Shape")) == ([], [])

    regions, _cells = SHAPE_CATALOG.forced_empty_for(small, RoomOverrides(shape_preset="T-Shape"))
    assert [(r.start_cell, r.end_cell) for r in regions] == [(GridCoord(0, 0), GridCoord(5, 2))]

"""Tests for door gap queries and procedural door generation."""

from gridroom.generators.grid.grid_types import EDGE_ORDER, WallEdge
from gridroom.generators.random_stream import RandomStream
from gridroom.generators.room.door_placement import DoorPlanner
from gridroom.generators.room.room_types import (
    DoorSpec, FixedDoorLocation, ProceduralDoorSettings
)


DOOR = DoorSpec("Door", "SM_Door", 2)


def _planner(room, *doors):
    return DoorPlanner(room, list(doors))


def test_valid_gaps_around_a_door(room):
    planner = _planner(room, FixedDoorLocation(WallEdge.SOUTH, 3, DOOR))
    assert planner.valid_gaps(WallEdge.SOUTH) == [(0, 3), (5, 10)]
    assert planner.valid_gaps(WallEdge.NORTH) == [(0, 10)]


def test_can_fit_door(room):
    planner = _planner(room, FixedDoorLocation(WallEdge.SOUTH, 3, DOOR))
    assert not planner.can_fit_door(WallEdge.SOUTH, 2, 2)
    assert planner.can_fit_door(WallEdge.SOUTH, 5, 2)
    assert planner.can_fit_door(WallEdge.SOUTH, 1, 2)
    assert not planner.can_fit_door(WallEdge.SOUTH, 9, 2)
    assert not planner.can_fit_door(WallEdge.SOUTH, -1, 2)


def test_available_space_and_locations(room):
    planner = _planner(room, FixedDoorLocation(WallEdge.SOUTH, 3, DOOR))
    assert planner.available_space_on_edge(WallEdge.SOUTH, 0) == 3
    assert planner.available_space_on_edge(WallEdge.SOUTH, 3) == 0
    assert planner.available_space_on_edge(WallEdge.SOUTH, 6) == 4

    locations = planner.valid_door_locations(WallEdge.SOUTH)
    assert len(locations) == 8
    assert locations[0] == (0, 3)
    assert locations[-1] == (9, 1)


def test_required_edges_are_deduplicated(room):
    settings = ProceduralDoorSettings(
        enabled=True, required_edges=[WallEdge.NORTH, WallEdge.NORTH, WallEdge.EAST]
    )
    edges = _planner(room).choose_edges(settings, RandomStream(0))
    assert edges == [WallEdge.NORTH, WallEdge.EAST]


def test_random_edge_count_respects_bounds(room):
    settings = ProceduralDoorSettings(enabled=True, min_doors=2, max_doors=2)
    for seed in range(10):
        edges = _planner(room).choose_edges(settings, RandomStream(seed))
        assert len(edges) == 2
        assert len(set(edges)) == 2
        assert all(edge in EDGE_ORDER for edge in edges)


def test_procedural_door_lands_in_remaining_gap(room):
    fixed = [FixedDoorLocation(WallEdge.SOUTH, 0, DoorSpec("Wide", "SM_Gate", 8))]
    planner = DoorPlanner(room, fixed)
    settings = ProceduralDoorSettings(enabled=True, required_edges=[WallEdge.SOUTH])

    added = planner.generate_procedural_doors(settings, DOOR, RandomStream(4))

    assert len(added) == 1
    assert added[0].start_cell == 8
    assert added[0].edge == WallEdge.SOUTH
    # Caller's list is untouched; the planner works on its own copy
    assert len(fixed) == 1
    assert len(planner.resolved_doors) == 2


def test_procedural_door_too_large_is_not_placed(room):
    planner = _planner(room)
    door = planner.place_procedural_door(
        WallEdge.NORTH, DoorSpec("Huge", "SM_Gate", 20), RandomStream(0)
    )
    assert door is None
    assert planner.resolved_doors == []


def test_disabled_or_missing_pack_places_nothing(room):
    planner = _planner(room)
    assert planner.generate_procedural_doors(ProceduralDoorSettings(), DOOR, RandomStream(0)) == []
    assert planner.generate_procedural_doors(
        ProceduralDoorSettings(enabled=True), None, RandomStream(0)
    ) == []


def test_procedural_doors_are_disjoint(room):
    settings = ProceduralDoorSettings(
        enabled=True, required_edges=[WallEdge.WEST, WallEdge.WEST, WallEdge.EAST]
    )
    pack = DoorSpec("Pool", door_pool=[DoorSpec("A", "SM_Door", 2, weight=1.0),
                                       DoorSpec("B", "SM_Gate", 4, weight=1.0)])
    fixed = [FixedDoorLocation(WallEdge.WEST, 4, DOOR)]

    for seed in range(20):
        planner = DoorPlanner(room, fixed)
        planner.generate_procedural_doors(settings, pack, RandomStream(seed))
        for edge in EDGE_ORDER:
            spans = planner.door_intervals(edge)
            for (_, a_end), (b_start, _) in zip(spans, spans[1:]):
                assert a_end <= b_start
            assert all(0 <= s and e <= room.edge_length(edge) for s, e in spans)

"""Tests for corridor routing."""

from rosmapgen.environment import Room, RoomGraph, RoomKind, corridor_segments, route_corridors
from rosmapgen.environment.corridors import order_by_x

from conftest import SequenceRandomizer


def centred(x, y, size=10):
    return Room.from_center(x, y, size, size)


def test_clockwise_horizontal_pair():
    """Centres (10, 10) and (50, 10): horizontal run plus a zero-length leg."""
    a, b = centred(10, 10), centred(50, 10)
    horizontal, vertical = corridor_segments(a, b, 4, clockwise=True)

    assert horizontal.bbox == (10, 10, 44, 4)
    assert vertical.bbox == (50, 10, 4, 0)
    assert horizontal.kind == vertical.kind == RoomKind.CORRIDOR


def test_counter_clockwise_horizontal_pair():
    a, b = centred(10, 10), centred(50, 10)
    vertical, horizontal = corridor_segments(a, b, 4, clockwise=False)

    assert vertical.bbox == (10, 10, 4, 0)
    assert horizontal.bbox == (10, 10, 40, 4)


def test_clockwise_bend_downwards():
    a, b = centred(10, 10), centred(40, 50)
    horizontal, vertical = corridor_segments(a, b, 6, clockwise=True)

    assert horizontal.bbox == (10, 10, 36, 6)
    assert vertical.bbox == (40, 10, 6, 40)


def test_counter_clockwise_bend_upwards():
    a, b = centred(10, 60), centred(40, 20)
    vertical, horizontal = corridor_segments(a, b, 6, clockwise=False)

    assert vertical.bbox == (10, 20, 6, 40)
    assert horizontal.bbox == (10, 20, 30, 6)


def test_cross_section_equals_corridor_width():
    a, b = centred(15, 80), centred(90, 25)
    for clockwise in (True, False):
        first, second = corridor_segments(a, b, 5, clockwise)
        horizontal = first if clockwise else second
        vertical = second if clockwise else first
        assert horizontal.height == 5
        assert vertical.width == 5


def test_order_by_x():
    left, right = centred(10, 50), centred(30, 0)
    assert order_by_x(right, left) == (left, right)
    assert order_by_x(left, right) == (left, right)

    same_a, same_b = centred(10, 0), centred(10, 40)
    assert order_by_x(same_a, same_b) == (same_b, same_a)


def test_route_uses_one_draw_per_edge():
    halls = [centred(10, 10), centred(50, 10), centred(50, 60)]
    graph = RoomGraph(vertex_count=3)
    graph.add_edge(0, 1)
    graph.add_edge(1, 2)

    random = SequenceRandomizer([1, 2])
    corridors = route_corridors(halls, graph, 4, random)

    assert random.calls == 2
    assert len(corridors) == 4
    # Edge (0, 1): odd draw -> clockwise
    assert corridors[0].bbox == (10, 10, 44, 4)
    assert corridors[1].bbox == (50, 10, 4, 0)
    # Edge (1, 2): equal x, so hall 2 is A; even draw -> counter-clockwise
    assert corridors[2].bbox == (50, 10, 4, 50)
    assert corridors[3].bbox == (50, 10, 0, 4)


def test_negative_draws_pick_clockwise_when_odd():
    halls = [centred(10, 10), centred(50, 10)]
    graph = RoomGraph(vertex_count=2)
    graph.add_edge(0, 1)

    corridors = route_corridors(halls, graph, 4, SequenceRandomizer([-3]))
    assert corridors[0].bbox == (10, 10, 44, 4)


def test_no_edges_no_corridors():
    random = SequenceRandomizer([1])
    assert route_corridors([centred(10, 10)], RoomGraph(vertex_count=1), 4, random) == []
    assert random.calls == 0

"""Shared fixtures for the map generator tests."""

import pytest

from rosmapgen.environment import Randomizer, Room, RoomKind


class SequenceRandomizer(Randomizer):
    """Replays a fixed list of values, cycling when exhausted."""

    def __init__(self, values):
        super().__init__(seed=None)
        self.values = list(values)
        self.calls = 0

    def next_rand(self) -> int:
        value = self.values[self.calls % len(self.values)]
        self.calls += 1
        return value


def hall(left, top, width, height):
    return Room(left, top, width, height, kind=RoomKind.HALL)


@pytest.fixture
def small_environment_args():
    """Parameters for a quick 5-hall environment."""
    return dict(
        room_count=5,
        min_size=20,
        max_size=40,
        corridor_width=6,
        width=400,
        height=400,
    )

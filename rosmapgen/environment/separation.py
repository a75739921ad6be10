"""
Room Separation
Pushes overlapping rooms apart until no pair touches.
"""

import logging
from typing import List

from .room import Room

logger = logging.getLogger(__name__)

DEFAULT_MAX_PASSES = 10000


class SeparationError(RuntimeError):
    """Raised when rooms are still touching after the pass ceiling."""

    def __init__(self, passes: int, overlapping_pairs: int):
        self.passes = passes
        self.overlapping_pairs = overlapping_pairs
        super().__init__(
            f"Rooms did not separate after {passes} passes "
            f"({overlapping_pairs} pairs still touching)"
        )


def _half(value: int) -> int:
    """Half of ``value``, truncated toward zero."""
    half = abs(value) // 2
    return half if value >= 0 else -half


def separation_deltas(room_a: Room, room_b: Room, padding: int = 0):
    """
    Compute the shifts that pull two touching rooms apart.

    The delta on each axis is the signed minimum of the two candidate
    pushes, so ``room_a`` always ends up on the positive side of ``room_b``
    and every pair keeps a stable order across passes. Only the axis with
    the smaller delta is then used. ``room_a`` takes half of it and
    ``room_b`` the remainder, so one of them may absorb an extra unit.

    Returns:
        ((dx_a, dy_a), (dx_b, dy_b))
    """
    delta_x = min(room_a.right - room_b.left + padding,
                  room_a.left - room_b.right - padding)
    delta_y = min(room_a.bottom - room_b.top + padding,
                  room_a.top - room_b.bottom - padding)

    if abs(delta_x) < abs(delta_y):
        delta_y = 0
    else:
        delta_x = 0

    delta_x_a = _half(-delta_x)
    delta_x_b = delta_x + delta_x_a
    delta_y_a = _half(-delta_y)
    delta_y_b = delta_y + delta_y_a

    return (delta_x_a, delta_y_a), (delta_x_b, delta_y_b)


def count_touching_pairs(rooms: List[Room], padding: int = 0) -> int:
    """Number of unordered room pairs that touch."""
    count = 0
    for i, room_a in enumerate(rooms):
        for room_b in rooms[i + 1:]:
            if room_a.touches(room_b, padding):
                count += 1
    return count


def separate_rooms(
    rooms: List[Room],
    padding: int = 0,
    max_passes: int = DEFAULT_MAX_PASSES,
) -> int:
    """
    Relocate rooms in place until a full pairwise pass moves nothing.

    Args:
        rooms: Rooms to separate (mutated)
        padding: Gap that still counts as touching
        max_passes: Pass ceiling

    Returns:
        Number of passes performed (including the final quiet pass)

    Raises:
        SeparationError: if rooms still touch after ``max_passes`` passes
    """
    passes = 0
    touching = True

    while touching:
        if passes >= max_passes:
            remaining = count_touching_pairs(rooms, padding)
            if remaining:
                raise SeparationError(passes, remaining)
            break

        touching = False
        passes += 1
        moves = 0

        for i in range(len(rooms)):
            room_a = rooms[i]
            for j in range(i + 1, len(rooms)):
                room_b = rooms[j]
                if not room_a.touches(room_b, padding):
                    continue

                touching = True
                moves += 1
                (dx_a, dy_a), (dx_b, dy_b) = separation_deltas(room_a, room_b, padding)
                room_a.relocate(dx_a, dy_a)
                room_b.relocate(dx_b, dy_b)

        logger.debug(f"Separation pass {passes}: {moves} relocations")

    logger.info(f"Separated {len(rooms)} rooms in {passes} passes")
    return passes

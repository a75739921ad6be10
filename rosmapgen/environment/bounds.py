"""
Bounds filtering for separated rooms.
"""

import logging
from typing import List

from .room import Room

logger = logging.getLogger(__name__)


def is_within_bounds(room: Room, width: int, height: int) -> bool:
    """True if every pixel of the room lies in ``[0, width) x [0, height)``."""
    return (
        room.left >= 0
        and room.top >= 0
        and room.right <= width
        and room.bottom <= height
    )


def remove_out_of_bounds(rooms: List[Room], width: int, height: int) -> List[Room]:
    """
    Drop rooms that stick out of the canvas.

    Rooms are discarded outright, never moved back inside.

    Returns:
        New list with the rooms that fit, in their original order
    """
    kept = [room for room in rooms if is_within_bounds(room, width, height)]

    dropped = len(rooms) - len(kept)
    if dropped:
        logger.info(f"Removed {dropped} out-of-bounds rooms, {len(kept)} left")

    return kept

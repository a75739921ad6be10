"""
Room Generator
Creates the initial, fully overlapping population of random halls.
"""

import logging
from typing import List

from .randomizer import Randomizer
from .room import Room

logger = logging.getLogger(__name__)


def random_size(random: Randomizer, min_size: int, max_size: int) -> int:
    """Draw a side length in ``[min_size, min_size + max_size)``."""
    return abs(random.next_rand()) % max_size + min_size


def generate_rooms(
    amount: int,
    min_size: int,
    max_size: int,
    center_x: int,
    center_y: int,
    random: Randomizer,
    obstacle_padding: int = 0,
) -> List[Room]:
    """
    Generate ``amount`` halls stacked on the canvas centre.

    No overlap or bounds checks happen here; the separator spreads the
    halls out afterwards.

    Args:
        amount: Number of halls to create
        min_size: Minimum side length
        max_size: Upper bound of the random part of the side length
        center_x: Canvas centre x
        center_y: Canvas centre y
        random: Randomness source
        obstacle_padding: Obstacle clearance (0 disables obstacles)

    Returns:
        List of halls
    """
    if max_size <= 0:
        raise ValueError(f"max_size must be positive, got {max_size}")

    rooms = []
    for _ in range(amount):
        width = random_size(random, min_size, max_size)
        height = random_size(random, min_size, max_size)
        rooms.append(Room.from_center(
            center_x, center_y, width, height,
            padding=obstacle_padding,
            random=random,
        ))

    logger.debug(f"Generated {len(rooms)} rooms around ({center_x}, {center_y})")
    return rooms

"""
Corridor Routing
Joins connected halls with L-shaped pairs of corridor segments.
"""

import logging
from typing import List, Tuple

from .graph import RoomGraph
from .randomizer import Randomizer
from .room import Room, RoomKind

logger = logging.getLogger(__name__)


def _corridor(left: int, top: int, width: int, height: int) -> Room:
    return Room(left, top, width, height, kind=RoomKind.CORRIDOR)


def order_by_x(room_a: Room, room_b: Room) -> Tuple[Room, Room]:
    """Return the pair with the smaller centre-x first (``room_b`` first on a tie)."""
    if room_a.center_x < room_b.center_x:
        return room_a, room_b
    return room_b, room_a


def corridor_segments(
    room_a: Room,
    room_b: Room,
    corridor_width: int,
    clockwise: bool,
) -> List[Room]:
    """
    Build the two segments of an L-shaped corridor between two halls.

    Both segments start from hall centres. The clockwise variant runs
    horizontally from A and then vertically along B's x; the other runs
    vertically along A's x and then horizontally along B's y. A segment
    has zero length when the centres share that coordinate.

    Args:
        room_a: Hall with the smaller centre-x
        room_b: Other hall
        corridor_width: Cross-section of every segment
        clockwise: Bend direction

    Returns:
        [first segment, second segment]
    """
    a_x, a_y = room_a.center_x, room_a.center_y
    b_x, b_y = room_b.center_x, room_b.center_y

    delta_x = b_x - a_x
    delta_y = b_y - a_y

    if clockwise:
        return [
            _corridor(a_x, a_y, abs(delta_x) + corridor_width, corridor_width),  # horizontal
            _corridor(b_x, min(a_y, b_y), corridor_width, abs(delta_y)),  # vertical
        ]
    return [
        _corridor(a_x, min(a_y, b_y), corridor_width, abs(delta_y)),  # vertical
        _corridor(a_x, b_y, abs(delta_x), corridor_width),  # horizontal
    ]


def route_corridors(
    halls: List[Room],
    graph: RoomGraph,
    corridor_width: int,
    random: Randomizer,
) -> List[Room]:
    """
    Create corridor segments for every graph edge.

    One random draw per edge picks the bend direction (odd = clockwise).

    Returns:
        Corridor segments, two per edge, in edge order
    """
    corridors = []

    for a, b in graph.edges():
        room_a, room_b = order_by_x(halls[a], halls[b])
        clockwise = random.next_rand() % 2 != 0
        corridors.extend(corridor_segments(room_a, room_b, corridor_width, clockwise))

    logger.info(f"Routed {len(corridors)} corridor segments for {graph.edge_count} edges")
    return corridors

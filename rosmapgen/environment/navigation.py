"""
Navigation Environment
Runs the floor plan synthesis stages in order and holds the result.
"""

import logging
from typing import List, Optional, Tuple

from .bounds import remove_out_of_bounds
from .corridors import route_corridors
from .generator import generate_rooms
from .graph import build_neighborhood_graph, select_halls
from .randomizer import Randomizer
from .room import Room, RoomKind
from .separation import DEFAULT_MAX_PASSES, separate_rooms

logger = logging.getLogger(__name__)


class NavigationEnvironment:
    """
    Synthetic floor plan made of halls and corridors.

    The plan is built once in the constructor:

      1. Generate ``amount`` random halls on the canvas centre
      2. Separate them until none overlap
      3. Drop halls outside the canvas
      4. Keep the larger half and connect them (relative neighborhood graph)
      5. Route L-shaped corridors along the graph edges

    The final rectangle order is reversed, so corridors come first and the
    halls generated first end up last.
    """

    def __init__(
        self,
        amount: int,
        min_size: int,
        max_size: int,
        corridor_width: int,
        width: int,
        height: int,
        random: Randomizer,
        obstacles: bool = False,
        max_passes: int = DEFAULT_MAX_PASSES,
    ):
        """
        Build the environment.

        Args:
            amount: Number of candidate halls to generate
            min_size: Minimum hall side
            max_size: Random part of the hall side
            corridor_width: Corridor cross-section
            width: Canvas width
            height: Canvas height
            random: Randomness source, consumed in stage order
            obstacles: Place obstacles inside halls
            max_passes: Separation pass ceiling

        Raises:
            SeparationError: if the halls cannot be separated
        """
        self.width = width
        self.height = height
        self.corridor_width = corridor_width
        self.random = random
        self.obstacles = obstacles

        logger.info(f"[1/5] Generating {amount} rooms on a {width}x{height} canvas")
        rooms = generate_rooms(
            amount,
            min_size,
            max_size,
            width // 2,
            height // 2,
            random,
            obstacle_padding=corridor_width if obstacles else 0,
        )

        logger.info("[2/5] Separating rooms")
        self.separation_passes = separate_rooms(rooms, padding=0, max_passes=max_passes)

        logger.info("[3/5] Removing out-of-bounds rooms")
        rooms = remove_out_of_bounds(rooms, width, height)
        self.candidate_count = len(rooms)

        logger.info("[4/5] Selecting halls and building connectivity graph")
        halls = select_halls(rooms)
        graph = build_neighborhood_graph(halls)
        self.edges: Tuple[Tuple[int, int], ...] = tuple(graph.edges())
        logger.debug(f"  Graph components: {len(graph.components())}")

        logger.info("[5/5] Routing corridors")
        corridors = route_corridors(halls, graph, corridor_width, random)

        self._rooms: Tuple[Room, ...] = tuple(reversed(halls + corridors))

        logger.info(
            f"Environment ready: {len(halls)} halls, {len(corridors)} corridor segments"
        )

    @property
    def rooms(self) -> Tuple[Room, ...]:
        """All rectangles in render order."""
        return self._rooms

    @property
    def halls(self) -> List[Room]:
        return [room for room in self._rooms if room.kind == RoomKind.HALL]

    @property
    def corridors(self) -> List[Room]:
        return [room for room in self._rooms if room.kind == RoomKind.CORRIDOR]

    def __len__(self) -> int:
        return len(self._rooms)

    def __iter__(self):
        return iter(self._rooms)


def build_environment(
    room_count: int,
    min_size: int,
    max_size: int,
    corridor_width: int,
    width: int,
    height: int,
    random: Optional[Randomizer] = None,
    seed: Optional[int] = None,
    obstacles: bool = False,
    max_passes: int = DEFAULT_MAX_PASSES,
) -> NavigationEnvironment:
    """
    Build an environment for a requested hall count.

    A room count of 0 is treated as 1. Twice the requested count is
    generated to make up for rooms lost to bounds filtering and hall
    selection.

    Args:
        room_count: Requested number of halls
        min_size: Minimum hall side
        max_size: Random part of the hall side
        corridor_width: Corridor cross-section
        width: Canvas width
        height: Canvas height
        random: Randomness source (created from ``seed`` when omitted)
        seed: Seed for a new randomness source
        obstacles: Place obstacles inside halls
        max_passes: Separation pass ceiling

    Returns:
        NavigationEnvironment
    """
    if room_count < 0:
        raise ValueError(f"room_count must be non-negative, got {room_count}")
    room_count = max(room_count, 1)

    if random is None:
        random = Randomizer(seed)

    return NavigationEnvironment(
        room_count * 2,
        min_size,
        max_size,
        corridor_width,
        width,
        height,
        random,
        obstacles=obstacles,
        max_passes=max_passes,
    )


def environment_rectangles(environment: NavigationEnvironment) -> List[Tuple[str, int, int, int, int]]:
    """Flatten rooms into (kind, x, y, w, h) tuples."""
    return [(room.kind.value,) + room.bbox for room in environment.rooms]

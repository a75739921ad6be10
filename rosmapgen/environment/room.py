"""
Room Entity
Axis-aligned rectangle used for halls and corridor segments.

Coordinates follow image conventions: x grows to the right, y grows
downwards, so ``top`` is the smaller y edge. Edges are exclusive on the
right/bottom side: a room covers pixels ``[left, right) x [top, bottom)``.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from .randomizer import Randomizer


class RoomKind(str, Enum):
    """Role of a rectangle in the floor plan."""
    HALL = "hall"
    CORRIDOR = "corridor"


@dataclass
class Room:
    """A rectangle of free space on the map."""
    left: int
    top: int
    width: int
    height: int
    kind: RoomKind = RoomKind.CORRIDOR
    padding: int = 0  # Obstacle clearance, 0 = no obstacles
    obstacles: List[Tuple[int, int, int, int]] = field(default_factory=list)  # x, y, w, h (room-local)

    def __post_init__(self):
        if self.width < 0 or self.height < 0:
            raise ValueError(f"Room size must be non-negative, got {self.width}x{self.height}")
        if self.kind == RoomKind.HALL and (self.width == 0 or self.height == 0):
            raise ValueError(f"Hall size must be positive, got {self.width}x{self.height}")

    @classmethod
    def from_center(
        cls,
        center_x: int,
        center_y: int,
        width: int,
        height: int,
        padding: int = 0,
        random: Optional[Randomizer] = None,
    ) -> "Room":
        """
        Create a hall centred on a point.

        Args:
            center_x: Centre x coordinate
            center_y: Centre y coordinate
            width: Hall width
            height: Hall height
            padding: Obstacle clearance (0 disables obstacles)
            random: Randomness source for obstacle placement

        Returns:
            Room of kind HALL
        """
        room = cls(
            left=center_x - width // 2,
            top=center_y - height // 2,
            width=width,
            height=height,
            kind=RoomKind.HALL,
            padding=padding,
        )
        if padding > 0 and random is not None:
            room.obstacles = place_obstacles(width, height, padding, random)
        return room

    @property
    def right(self) -> int:
        return self.left + self.width

    @property
    def bottom(self) -> int:
        return self.top + self.height

    @property
    def center_x(self) -> int:
        return self.left + self.width // 2

    @property
    def center_y(self) -> int:
        return self.top + self.height // 2

    @property
    def area(self) -> int:
        return self.width * self.height

    @property
    def bbox(self) -> Tuple[int, int, int, int]:
        """Bounding box as (x, y, w, h)."""
        return (self.left, self.top, self.width, self.height)

    def relocate(self, delta_x: int, delta_y: int) -> None:
        """Translate the room. Obstacles are room-local and move with it."""
        self.left += delta_x
        self.top += delta_y

    def touches(self, other: "Room", padding: int = 0) -> bool:
        """
        Check whether two rooms overlap or are closer than ``padding``.

        A gap of less than ``padding`` along both axes still counts as
        touching.
        """
        return (
            self.left - padding < other.right
            and other.left < self.right + padding
            and self.top - padding < other.bottom
            and other.top < self.bottom + padding
        )

    def overlap(self, other: "Room") -> Tuple[int, int]:
        """Overlap extent along x and y (0 when disjoint on that axis)."""
        overlap_x = min(self.right, other.right) - max(self.left, other.left)
        overlap_y = min(self.bottom, other.bottom) - max(self.top, other.top)
        return max(0, overlap_x), max(0, overlap_y)

    def squared_distance(self, other: "Room") -> int:
        """Squared Euclidean distance between centres."""
        return (self.center_x - other.center_x) ** 2 + (self.center_y - other.center_y) ** 2

    def absolute_obstacles(self) -> List[Tuple[int, int, int, int]]:
        """Obstacles translated to map coordinates."""
        return [(self.left + x, self.top + y, w, h) for x, y, w, h in self.obstacles]


def area_key(room: Room) -> int:
    """Sort key ranking rooms by area."""
    return room.area


def place_obstacles(
    width: int,
    height: int,
    padding: int,
    random: Randomizer,
) -> List[Tuple[int, int, int, int]]:
    """
    Scatter square obstacles inside a hall.

    The interior (minus a ``padding`` wide clearance along the walls) is cut
    into cells of ``2 * padding``. Each cell gets an obstacle on a random bit,
    sized between ``padding // 2`` and ``padding`` and centred in its cell, so
    the lanes between obstacles stay at least ``padding`` wide.

    Args:
        width: Hall width
        height: Hall height
        padding: Clearance around obstacles
        random: Randomness source

    Returns:
        List of (x, y, w, h) boxes relative to the hall's top-left corner
    """
    cell = 2 * padding
    cols = max(0, width - 2 * padding) // cell
    rows = max(0, height - 2 * padding) // cell

    min_side = max(1, padding // 2)
    span = padding - min_side + 1

    obstacles = []
    for row in range(rows):
        for col in range(cols):
            if random.next_rand() % 2 == 0:
                continue
            side = min_side + abs(random.next_rand()) % span
            x = padding + col * cell + (cell - side) // 2
            y = padding + row * cell + (cell - side) // 2
            obstacles.append((x, y, side, side))

    return obstacles

"""
Floor Plan Synthesis Module.

Generates random indoor floor plans (halls joined by corridors) for use as
robot navigation test maps.
"""

from .randomizer import Randomizer
from .room import Room, RoomKind, area_key, place_obstacles
from .generator import generate_rooms
from .separation import SeparationError, separate_rooms, DEFAULT_MAX_PASSES
from .bounds import remove_out_of_bounds
from .graph import RoomGraph, select_halls, build_neighborhood_graph
from .corridors import route_corridors, corridor_segments
from .navigation import NavigationEnvironment, build_environment, environment_rectangles

__all__ = [
    "Randomizer",
    "Room",
    "RoomKind",
    "area_key",
    "place_obstacles",
    "generate_rooms",
    "SeparationError",
    "separate_rooms",
    "DEFAULT_MAX_PASSES",
    "remove_out_of_bounds",
    "RoomGraph",
    "select_halls",
    "build_neighborhood_graph",
    "route_corridors",
    "corridor_segments",
    "NavigationEnvironment",
    "build_environment",
    "environment_rectangles",
]

"""
Map Parameters
Converts physical map settings (meters) into pixel-space generator inputs.

Defaults follow common ROS map_server setups:
- 0.05 m/pixel resolution
- 0.5 m robot footprint
- Rooms 4x to 8x the robot size, corridors 2x the robot size
"""

import logging
import math
import time
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

logger = logging.getLogger(__name__)

DEFAULT_ROOM_COUNT = 30
DEFAULT_RESOLUTION = 0.05  # meters per pixel
DEFAULT_ROBOT_SIZE = 0.5  # meters

ROOM_SIZE_ROBOT_FACTOR = 4
CORRIDOR_ROBOT_FACTOR = 2


class ConfigurationError(ValueError):
    """Inconsistent or invalid map parameters."""


def _default_seed() -> int:
    return time.time_ns()


@dataclass
class MapParameters:
    """User-facing map settings, in meters."""
    room_count: int = DEFAULT_ROOM_COUNT
    resolution: float = DEFAULT_RESOLUTION
    robot_size: float = DEFAULT_ROBOT_SIZE
    min_size: Optional[float] = None
    max_size: Optional[float] = None
    corridor_width: Optional[float] = None
    obstacles: bool = False
    seed: int = field(default_factory=_default_seed)

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass
class PixelParameters:
    """Generator inputs, in pixels."""
    room_count: int
    min_size: int
    max_size: int
    corridor_width: int
    width: int
    height: int
    resolution: float
    obstacles: bool
    seed: int


def derive_parameters(params: MapParameters) -> PixelParameters:
    """
    Derive pixel-space sizes from physical settings.

    Args:
        params: Map settings in meters

    Returns:
        PixelParameters

    Raises:
        ConfigurationError: on invalid or inconsistent settings
    """
    if params.room_count < 0:
        raise ConfigurationError(f"room_count must be non-negative, got {params.room_count}")
    if params.resolution <= 0:
        raise ConfigurationError(f"resolution must be positive, got {params.resolution}")
    if params.robot_size <= 0:
        raise ConfigurationError(f"robot_size must be positive, got {params.robot_size}")
    if (params.min_size is None) != (params.max_size is None):
        raise ConfigurationError("min_size and max_size must be given together")

    room_count = max(params.room_count, 1)

    robot_px = int(params.robot_size / params.resolution)
    if robot_px < 1:
        raise ConfigurationError(
            f"robot_size {params.robot_size} m is smaller than one pixel "
            f"at resolution {params.resolution} m/px"
        )

    min_size = robot_px * ROOM_SIZE_ROBOT_FACTOR
    max_size = min_size * 2

    if params.min_size is not None:
        min_size = max(min_size, int(params.min_size / params.resolution))
        max_size = max(int(params.max_size / params.resolution), min_size + 1)

    corridor_width = robot_px * CORRIDOR_ROBOT_FACTOR
    if params.corridor_width is not None:
        if params.corridor_width < params.robot_size:
            logger.warning(
                f"Corridor width {params.corridor_width} m is narrower than the robot "
                f"({params.robot_size} m), widening to robot size"
            )
        corridor_width = max(robot_px, int(params.corridor_width / params.resolution))

    map_size = int(math.sqrt(room_count) * (min_size + max_size) * 2)

    pixels = PixelParameters(
        room_count=room_count,
        min_size=min_size,
        max_size=max_size,
        corridor_width=corridor_width,
        width=map_size,
        height=map_size,
        resolution=params.resolution,
        obstacles=params.obstacles,
        seed=params.seed,
    )
    logger.debug(f"Derived pixel parameters: {pixels}")
    return pixels


# (expected type, may be null)
_PARAMETER_TYPES = {
    'room_count': (int, False),
    'resolution': (float, False),
    'robot_size': (float, False),
    'min_size': (float, True),
    'max_size': (float, True),
    'corridor_width': (float, True),
    'obstacles': (bool, False),
    'seed': (int, False),
}


def _value_matches(key: str, value: Any) -> bool:
    expected, nullable = _PARAMETER_TYPES[key]
    if value is None:
        return nullable
    if expected is bool:
        return isinstance(value, bool)
    # bool is a subclass of int
    if isinstance(value, bool):
        return False
    if expected is float:
        return isinstance(value, (int, float))
    return isinstance(value, expected)


def load_parameters_file(path: Path) -> Dict[str, Any]:
    """
    Load map settings from a YAML file.

    Args:
        path: YAML file with a mapping of MapParameters field names

    Returns:
        Dictionary of settings

    Raises:
        ConfigurationError: if the file is not a mapping, has unknown keys
            or values of the wrong type
    """
    with open(path) as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ConfigurationError(f"{path}: expected a mapping, got {type(data).__name__}")

    known = {f.name for f in fields(MapParameters)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigurationError(f"{path}: unknown parameters {unknown}")

    for key, value in data.items():
        if not _value_matches(key, value):
            expected = _PARAMETER_TYPES[key][0].__name__
            raise ConfigurationError(
                f"{path}: {key} must be {expected}, got {value!r}"
            )

    logger.info(f"Loaded {len(data)} parameters from {path}")
    return data

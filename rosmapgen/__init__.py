"""
ROS Map Generator
Synthetic indoor floor plans rendered as occupancy grids for robot navigation.
"""

__version__ = "1.0.0"

from .environment import NavigationEnvironment, Randomizer, Room, RoomKind, SeparationError, build_environment
from .params import ConfigurationError, MapParameters, PixelParameters, derive_parameters
from .pipeline import MapGenerationPipeline, PipelineConfig, PipelineResult, generate_batch, generate_map

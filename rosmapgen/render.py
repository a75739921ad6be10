"""
Occupancy Grid Rendering
Rasterizes a floor plan and exports it in ROS map_server format
(PGM image + YAML metadata).
"""

import json
import logging
from pathlib import Path
from typing import Dict, Iterable, Optional

import cv2
import numpy as np
import yaml

from .environment import NavigationEnvironment, Room, environment_rectangles

logger = logging.getLogger(__name__)

# Pixel values (map_server trinary interpretation with negate: 0)
OCCUPIED = 0
FREE = 254

OCCUPIED_THRESH = 0.65
FREE_THRESH = 0.196
DEFAULT_ORIGIN = [0.0, 0.0, 0.0]


def _paint(grid: np.ndarray, x: int, y: int, w: int, h: int, value: int) -> None:
    """Fill a box on the grid, clipped to its extent."""
    height, width = grid.shape
    x0, y0 = max(0, x), max(0, y)
    x1, y1 = min(width, x + w), min(height, y + h)
    if x0 < x1 and y0 < y1:
        grid[y0:y1, x0:x1] = value


def rasterize(
    rooms: Iterable[Room],
    width: int,
    height: int,
    background: int = OCCUPIED,
) -> np.ndarray:
    """
    Paint rooms onto an occupancy grid.

    Rooms are painted free in the given order; a hall's obstacles are
    painted occupied right after the hall itself, so later rooms win where
    rectangles overlap.

    Args:
        rooms: Rectangles in render order
        width: Grid width in pixels
        height: Grid height in pixels
        background: Value for space outside every room

    Returns:
        uint8 array of shape (height, width)
    """
    grid = np.full((height, width), background, dtype=np.uint8)

    for room in rooms:
        _paint(grid, room.left, room.top, room.width, room.height, FREE)
        for x, y, w, h in room.absolute_obstacles():
            _paint(grid, x, y, w, h, OCCUPIED)

    return grid


def render_environment(environment: NavigationEnvironment) -> np.ndarray:
    """Rasterize a finished environment at its canvas size."""
    return rasterize(environment.rooms, environment.width, environment.height)


def map_metadata(image_name: str, resolution: float, origin: Optional[list] = None) -> Dict:
    """Build the map_server YAML document."""
    return {
        "image": image_name,
        "resolution": resolution,
        "origin": list(origin or DEFAULT_ORIGIN),
        "occupied_thresh": OCCUPIED_THRESH,
        "free_thresh": FREE_THRESH,
        "negate": 0,
    }


class OccupancyGridExporter:
    """
    Writes occupancy grids to disk.
    """

    def __init__(self, output_dir: Path):
        """
        Initialize exporter.

        Args:
            output_dir: Directory for the generated files
        """
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)

    def export(
        self,
        grid: np.ndarray,
        name: str,
        resolution: float,
        environment: Optional[NavigationEnvironment] = None,
    ) -> Dict[str, Path]:
        """
        Export a grid as ``<name>.pgm`` and ``<name>.yaml``.

        Args:
            grid: Occupancy grid (uint8)
            name: Base file name
            resolution: Meters per pixel
            environment: When given, the rectangle layout is also written
                to ``<name>_layout.json``

        Returns:
            Dictionary of output paths
        """
        outputs = {}

        pgm_path = self._export_pgm(grid, name)
        outputs['pgm'] = pgm_path

        yaml_path = self._export_yaml(pgm_path.name, name, resolution)
        outputs['yaml'] = yaml_path

        if environment is not None:
            outputs['layout'] = self._export_layout(environment, name, resolution)

        logger.info(f"Exported map '{name}' to {self.output_dir}")
        return outputs

    def _export_pgm(self, grid: np.ndarray, name: str) -> Path:
        """Write the grid as a binary (P5) PGM."""
        path = self.output_dir / f"{name}.pgm"
        if not cv2.imwrite(str(path), grid, [cv2.IMWRITE_PXM_BINARY, 1]):
            raise IOError(f"Could not write image: {path}")
        return path

    def _export_yaml(self, image_name: str, name: str, resolution: float) -> Path:
        path = self.output_dir / f"{name}.yaml"
        with open(path, "w") as f:
            yaml.safe_dump(map_metadata(image_name, resolution), f,
                           default_flow_style=None, sort_keys=False)
        return path

    def _export_layout(self, environment: NavigationEnvironment, name: str, resolution: float) -> Path:
        """Write the rectangle list as JSON ground truth."""
        path = self.output_dir / f"{name}_layout.json"
        data = {
            "width": environment.width,
            "height": environment.height,
            "resolution": resolution,
            "corridor_width": environment.corridor_width,
            "edges": [list(edge) for edge in environment.edges],
            "rooms": [
                {"kind": kind, "bbox": [x, y, w, h]}
                for kind, x, y, w, h in environment_rectangles(environment)
            ],
        }
        with open(path, "w") as f:
            json.dump(data, f, indent=2)
        return path

"""
Map Generation Pipeline
Main entry point for producing occupancy grid maps end-to-end.
"""

import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Dict, List, Optional

import numpy as np

from .environment import (
    DEFAULT_MAX_PASSES,
    NavigationEnvironment,
    Randomizer,
    SeparationError,
    build_environment,
)
from .params import ConfigurationError, MapParameters, PixelParameters, derive_parameters
from .qc import QCReport, QualityChecker
from .render import OccupancyGridExporter, render_environment

logger = logging.getLogger(__name__)


@dataclass
class PipelineConfig:
    """Configuration for the generation pipeline."""
    # Output
    output_dir: Path = Path("./out")
    name: str = "occupancy_grid"
    export: bool = True
    export_layout: bool = False

    # Separation
    max_separation_passes: int = DEFAULT_MAX_PASSES

    # Validation
    run_qc: bool = True


@dataclass
class PipelineResult:
    """Result of pipeline execution."""
    name: str
    success: bool
    pixels: Optional[PixelParameters] = None
    environment: Optional[NavigationEnvironment] = None
    grid: Optional[np.ndarray] = None
    qc_report: Optional[QCReport] = None
    output_paths: Dict[str, Path] = field(default_factory=dict)
    errors: List[str] = field(default_factory=list)


class MapGenerationPipeline:
    """
    End-to-end map generation pipeline.
    """

    def __init__(self, config: Optional[PipelineConfig] = None):
        """
        Initialize pipeline.

        Args:
            config: Pipeline configuration
        """
        self.config = config or PipelineConfig()
        self.qc_checker = QualityChecker()

    def run(self, params: MapParameters, name: Optional[str] = None) -> PipelineResult:
        """
        Generate, render, check and export a single map.

        Args:
            params: Map settings
            name: Output base name (defaults to the configured name)

        Returns:
            PipelineResult
        """
        name = name or self.config.name
        result = PipelineResult(name=name, success=False)

        try:
            logger.info(f"[1/4] Deriving parameters for '{name}' (seed {params.seed})")
            pixels = derive_parameters(params)
            result.pixels = pixels

            logger.info("[2/4] Building environment")
            environment = build_environment(
                pixels.room_count,
                pixels.min_size,
                pixels.max_size,
                pixels.corridor_width,
                pixels.width,
                pixels.height,
                random=Randomizer(pixels.seed),
                obstacles=pixels.obstacles,
                max_passes=self.config.max_separation_passes,
            )
            result.environment = environment

            logger.info("[3/4] Rendering occupancy grid")
            grid = render_environment(environment)
            result.grid = grid

            if self.config.run_qc:
                result.qc_report = self.qc_checker.check(environment, grid)
                if not result.qc_report.is_valid:
                    result.errors.extend(w.message for w in result.qc_report.errors())
                    return result

            if self.config.export:
                logger.info("[4/4] Exporting map")
                exporter = OccupancyGridExporter(self.config.output_dir)
                result.output_paths = exporter.export(
                    grid,
                    name,
                    pixels.resolution,
                    environment=environment if self.config.export_layout else None,
                )

            result.success = True

        except ConfigurationError as e:
            logger.error(f"Invalid parameters: {e}")
            result.errors.append(str(e))
        except SeparationError as e:
            logger.error(f"Generation failed: {e}")
            result.errors.append(str(e))
        except OSError as e:
            logger.error(f"Export failed: {e}")
            result.errors.append(str(e))

        return result


def generate_map(
    params: MapParameters,
    config: Optional[PipelineConfig] = None,
) -> PipelineResult:
    """
    Convenience function to generate one map.

    Args:
        params: Map settings
        config: Pipeline configuration

    Returns:
        PipelineResult
    """
    pipeline = MapGenerationPipeline(config)
    return pipeline.run(params)


def generate_batch(
    params: MapParameters,
    count: int,
    config: Optional[PipelineConfig] = None,
) -> List[PipelineResult]:
    """
    Generate ``count`` maps with consecutive seeds.

    Maps are named ``<name>_<i>``; map ``i`` uses ``params.seed + i``.

    Args:
        params: Map settings (seed of the first map)
        count: Number of maps
        config: Pipeline configuration

    Returns:
        List of PipelineResult
    """
    pipeline = MapGenerationPipeline(config)
    results = []

    for i in range(count):
        map_params = replace(params, seed=params.seed + i)
        result = pipeline.run(map_params, name=f"{pipeline.config.name}_{i}")
        results.append(result)

        status = "OK" if result.success else "FAILED"
        logger.info(f"Map {i + 1}/{count}: {result.name} [{status}]")

    return results

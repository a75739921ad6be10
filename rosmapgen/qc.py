"""
Map Quality Control Module
Validates a generated floor plan and its occupancy grid.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import cv2
import numpy as np

from .environment import NavigationEnvironment
from .environment.bounds import is_within_bounds
from .render import FREE

logger = logging.getLogger(__name__)

# Halls may share at most this many units along an axis
OVERLAP_TOLERANCE = 1


@dataclass
class QCWarning:
    """A quality control warning."""
    code: str
    severity: str  # "error", "warning", "info"
    message: str
    details: Dict = field(default_factory=dict)


@dataclass
class QCReport:
    """Quality control report for a map."""
    is_valid: bool
    warnings: List[QCWarning]
    statistics: Dict

    def errors(self) -> List[QCWarning]:
        return [w for w in self.warnings if w.severity == "error"]


class QualityChecker:
    """
    Performs quality checks on generated maps.
    """

    def __init__(self, overlap_tolerance: int = OVERLAP_TOLERANCE):
        self.overlap_tolerance = overlap_tolerance

    def check(
        self,
        environment: NavigationEnvironment,
        grid: Optional[np.ndarray] = None,
    ) -> QCReport:
        """
        Run all quality checks.

        Args:
            environment: Generated environment
            grid: Rendered occupancy grid (enables free-space checks)

        Returns:
            QCReport
        """
        warnings = []
        halls = environment.halls

        warnings.extend(self._check_overlaps(environment))
        warnings.extend(self._check_bounds(environment))

        if not halls:
            warnings.append(QCWarning(
                code="NO_HALLS",
                severity="warning",
                message="No halls survived bounds filtering",
            ))

        statistics = {
            'hall_count': len(halls),
            'corridor_count': len(environment.corridors),
            'edge_count': len(environment.edges),
            'separation_passes': environment.separation_passes,
        }

        if grid is not None:
            components = self._count_free_components(grid)
            statistics['free_components'] = components
            statistics['free_ratio'] = round(float(np.mean(grid == FREE)), 4)

            if components > 1:
                warnings.append(QCWarning(
                    code="DISCONNECTED",
                    severity="warning",
                    message=f"Free space is split into {components} regions",
                    details={'components': components},
                ))

        is_valid = not any(w.severity == "error" for w in warnings)

        for w in warnings:
            log = logger.error if w.severity == "error" else logger.warning
            log(f"QC {w.code}: {w.message}")

        return QCReport(is_valid=is_valid, warnings=warnings, statistics=statistics)

    def _check_overlaps(self, environment: NavigationEnvironment) -> List[QCWarning]:
        """Halls must not overlap by more than the tolerance on both axes."""
        warnings = []
        halls = environment.halls

        for i, hall_a in enumerate(halls):
            for hall_b in halls[i + 1:]:
                overlap_x, overlap_y = hall_a.overlap(hall_b)
                if overlap_x > self.overlap_tolerance and overlap_y > self.overlap_tolerance:
                    warnings.append(QCWarning(
                        code="HALL_OVERLAP",
                        severity="error",
                        message=f"Halls at {hall_a.bbox} and {hall_b.bbox} overlap",
                        details={'overlap': (overlap_x, overlap_y)},
                    ))

        return warnings

    def _check_bounds(self, environment: NavigationEnvironment) -> List[QCWarning]:
        warnings = []
        for hall in environment.halls:
            if not is_within_bounds(hall, environment.width, environment.height):
                warnings.append(QCWarning(
                    code="OUT_OF_BOUNDS",
                    severity="error",
                    message=f"Hall at {hall.bbox} leaves the {environment.width}x{environment.height} canvas",
                ))
        return warnings

    def _count_free_components(self, grid: np.ndarray) -> int:
        """Count 4-connected free regions."""
        free_mask = (grid == FREE).astype(np.uint8)
        num_labels, _ = cv2.connectedComponents(free_mask, connectivity=4)
        return num_labels - 1  # Skip background

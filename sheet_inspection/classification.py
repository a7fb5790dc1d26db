"""
Hole classification from center color and local edge density.
"""

import numpy as np
from typing import Optional, Tuple

from .analysis import ColorSampler, EdgeDensityAnalyzer
from .config import InspectionConfig
from .logsman import level_from_name, setup_logger
from .models import Hole, HoleCategory


class HoleClassifier:
    """Assigns a HoleCategory to a single hole; rules are checked in priority order."""

    def __init__(
        self,
        config: Optional[InspectionConfig] = None,
        sampler: Optional[ColorSampler] = None,
        edge_analyzer: Optional[EdgeDensityAnalyzer] = None,
    ):
        self.config = config or InspectionConfig()
        self.sampler = sampler or ColorSampler()
        self.edge_analyzer = edge_analyzer or EdgeDensityAnalyzer(self.config)
        self.logger = setup_logger(name=__name__, logging_level=level_from_name(self.config.logging_level))

    def classify(self, hole: Hole, frame: np.ndarray) -> HoleCategory:
        color = self.sampler.sample_at(hole.center, frame)
        if self.is_anodized(color):
            category = HoleCategory.ANODIZED
        elif self.is_countersunk(hole, frame):
            category = HoleCategory.COUNTERSUNK
        else:
            category = HoleCategory.NORMAL
        self.logger.debug(f"Hole {hole.index} color={color} -> {category.value}")
        return category

    def is_anodized(self, color: Tuple[int, int, int]) -> bool:
        """Light, desaturated sample: every channel bright and all channels close together."""
        c0, c1, c2 = color
        floor = self.config.anodized_channel_floor
        delta = self.config.anodized_max_channel_delta
        return (
            c0 > floor and c1 > floor and c2 > floor
            and abs(c0 - c1) < delta and abs(c1 - c2) < delta and abs(c0 - c2) < delta
        )

    def is_countersunk(self, hole: Hole, frame: np.ndarray) -> bool:
        region = self.hole_region(hole, frame.shape[1], frame.shape[0])
        edge_count = self.edge_analyzer.count_edge_pixels(frame, region)
        return edge_count > self.config.countersink_edge_threshold

    @staticmethod
    def hole_region(hole: Hole, frame_width: int, frame_height: int) -> Tuple[int, int, int, int]:
        """Square [center - radius, center + radius) clamped to the frame, at least 1x1."""
        cx, cy = hole.center.to_pixel()
        x0 = min(max(cx - hole.radius, 0), frame_width - 1)
        y0 = min(max(cy - hole.radius, 0), frame_height - 1)
        x1 = min(cx + hole.radius, frame_width)
        y1 = min(cy + hole.radius, frame_height)
        return x0, y0, max(x1 - x0, 1), max(y1 - y0, 1)

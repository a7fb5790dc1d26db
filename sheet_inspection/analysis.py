"""
Pixel-level helpers: frame validation, grayscale conversion, color sampling
and local edge density.
"""

import cv2
import numpy as np
from typing import Optional, Tuple

from .config import InspectionConfig
from .exceptions import InvalidFrameError, InvalidRegionError, PointOutOfBoundsError
from .logsman import level_from_name, setup_logger
from .models import Point2D

_GRAY_CODES = {
    ("BGR", 3): cv2.COLOR_BGR2GRAY,
    ("BGR", 4): cv2.COLOR_BGRA2GRAY,
    ("RGB", 3): cv2.COLOR_RGB2GRAY,
    ("RGB", 4): cv2.COLOR_RGBA2GRAY,
}


def validate_frame(frame: np.ndarray) -> Tuple[int, int]:
    """Check that ``frame`` is a non-empty color image and return (width, height)."""
    if frame is None:
        raise InvalidFrameError("Frame is None")
    if not isinstance(frame, np.ndarray) or frame.ndim != 3:
        raise InvalidFrameError(f"Expected an HxWxC array, got shape {getattr(frame, 'shape', None)}")
    height, width, channels = frame.shape
    if width == 0 or height == 0:
        raise InvalidFrameError(f"Frame has zero size: {width}x{height}")
    if channels < 3:
        raise InvalidFrameError(f"Frame needs at least 3 channels, got {channels}")
    return width, height


def to_grayscale(frame: np.ndarray, channel_order: str = "BGR") -> np.ndarray:
    """Convert a 3- or 4-channel frame to a new single-channel uint8 image."""
    channels = frame.shape[2]
    code = _GRAY_CODES.get((channel_order.upper(), channels))
    if code is None:
        raise InvalidFrameError(f"Unsupported frame layout: {channel_order} with {channels} channels")
    if frame.dtype != np.uint8:
        frame = np.clip(frame, 0, 255).astype(np.uint8)
    return cv2.cvtColor(frame, code)


class ColorSampler:
    """Reads the first three channel values of a single pixel."""

    def sample_at(self, point: Point2D, frame: np.ndarray) -> Tuple[int, int, int]:
        height, width = frame.shape[:2]
        if not (0 <= point.x < width and 0 <= point.y < height):
            raise PointOutOfBoundsError(f"Point ({point.x}, {point.y}) outside {width}x{height} frame")
        x, y = point.to_pixel()
        pixel = frame[y, x]
        return int(pixel[0]), int(pixel[1]), int(pixel[2])


class EdgeDensityAnalyzer:
    """Counts edge pixels inside a sub-region of a frame."""

    def __init__(self, config: Optional[InspectionConfig] = None):
        self.config = config or InspectionConfig()
        self.logger = setup_logger(name=__name__, logging_level=level_from_name(self.config.logging_level))

    def count_edge_pixels(self, frame: np.ndarray, region: Tuple[int, int, int, int]) -> int:
        """``region`` is (x, y, width, height) and must lie inside the frame."""
        x, y, w, h = region
        frame_h, frame_w = frame.shape[:2]
        if w <= 0 or h <= 0:
            raise InvalidRegionError(f"Empty region {region}")
        if x < 0 or y < 0 or x + w > frame_w or y + h > frame_h:
            raise InvalidRegionError(f"Region {region} exceeds {frame_w}x{frame_h} frame")

        crop = frame[y:y + h, x:x + w].copy()
        if crop.ndim == 3:
            gray = to_grayscale(crop, self.config.channel_order)
        else:
            gray = crop
        edges = cv2.Canny(gray, self.config.region_canny_low, self.config.region_canny_high)
        count = int(cv2.countNonZero(edges))
        self.logger.debug(f"Edge pixels in region {region}: {count}")
        return count

"""
Detection module for the sheet outline and circular holes.
"""

import cv2
import numpy as np
from typing import Optional, Tuple

from .config import InspectionConfig
from .analysis import to_grayscale, validate_frame
from .exceptions import InvalidFrameError
from .logsman import level_from_name, setup_logger
from .models import Hole, Point2D, SheetRegion


class SheetDetector:
    """Finds the largest quadrilateral contour and reports its bounding rectangle."""

    def __init__(self, config: Optional[InspectionConfig] = None):
        self.config = config or InspectionConfig()
        self.logger = setup_logger(name=__name__, logging_level=level_from_name(self.config.logging_level))

    def detect(self, frame: np.ndarray, gray: Optional[np.ndarray] = None) -> Optional[SheetRegion]:
        """Return the sheet bounding rectangle, or None when no quadrilateral is in view.

        ``gray`` may carry an already converted grayscale copy of ``frame``.
        Among equal-area quadrilaterals the first one in OpenCV's contour
        enumeration order wins.
        """
        if gray is None:
            validate_frame(frame)
            gray = to_grayscale(frame, self.config.channel_order)

        smoothed = cv2.bilateralFilter(
            gray,
            self.config.bilateral_diameter,
            self.config.bilateral_sigma_color,
            self.config.bilateral_sigma_space,
        )
        edges = cv2.Canny(smoothed, self.config.sheet_canny_low, self.config.sheet_canny_high)
        contours, _ = cv2.findContours(edges, cv2.RETR_EXTERNAL, cv2.CHAIN_APPROX_SIMPLE)

        best: Optional[Tuple[int, int, int, int]] = None
        for contour in contours:
            epsilon = self.config.quad_epsilon_ratio * cv2.arcLength(contour, True)
            approx = cv2.approxPolyDP(contour, epsilon, True)
            if len(approx) != 4:
                continue
            rect = cv2.boundingRect(approx)
            if best is None or rect[2] * rect[3] > best[2] * best[3]:
                best = rect

        if best is None:
            self.logger.debug(f"No sheet found among {len(contours)} contours")
            return None

        x, y, w, h = (int(v) for v in best)
        self.logger.debug(f"Sheet: {w} x {h} px at ({x}, {y})")
        return SheetRegion(x=x, y=y, width=w, height=h)


class HoleDetector:
    """Finds circular holes with the Hough gradient circle transform."""

    def __init__(self, config: Optional[InspectionConfig] = None):
        self.config = config or InspectionConfig()
        self.logger = setup_logger(name=__name__, logging_level=level_from_name(self.config.logging_level))

    def detect(self, gray: np.ndarray) -> Tuple[Hole, ...]:
        if gray is None or gray.ndim != 2:
            raise InvalidFrameError("HoleDetector expects a single-channel grayscale frame")
        height, width = gray.shape
        if width == 0 or height == 0:
            raise InvalidFrameError(f"Frame has zero size: {width}x{height}")

        circles = cv2.HoughCircles(
            gray,
            cv2.HOUGH_GRADIENT,
            dp=self.config.hough_dp,
            minDist=height / self.config.hough_min_dist_divisor,
            param1=self.config.hough_param1,
            param2=self.config.hough_param2,
            minRadius=self.config.min_hole_radius,
            maxRadius=self.config.max_hole_radius,
        )
        if circles is None:
            return ()

        holes = []
        for index, (cx, cy, r) in enumerate(circles[0]):
            hole = Hole(center=Point2D(float(cx), float(cy)), radius=int(r), index=index)
            holes.append(hole)
            self.logger.debug(f"Hole {index}: center=({cx:.1f}, {cy:.1f}) radius={hole.radius}")
        return tuple(holes)

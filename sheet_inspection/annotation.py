"""
Overlay rendering of inspection results for display.
"""

import cv2
import numpy as np

from .models import DetectionResult, HoleCategory

SHEET_COLOR = (255, 0, 0)
HOLE_COLOR = (0, 255, 0)
CENTER_COLOR = (0, 0, 255)
CATEGORY_COLORS = {
    HoleCategory.ANODIZED: (0, 0, 255),
    HoleCategory.COUNTERSUNK: (0, 255, 0),
    HoleCategory.NORMAL: (0, 0, 0),
}


class FrameAnnotator:
    """Draws the sheet rectangle and labelled hole circles onto a copy of the frame."""

    def annotate(self, frame: np.ndarray, result: DetectionResult) -> np.ndarray:
        canvas = frame.copy()

        if result.sheet is not None:
            sheet = result.sheet
            cv2.rectangle(canvas, sheet.top_left, sheet.bottom_right, SHEET_COLOR, 3)
            cv2.putText(
                canvas, f"Sheet: {sheet.width} x {sheet.height} px",
                (sheet.x + 10, sheet.y + 30),
                cv2.FONT_HERSHEY_SIMPLEX, 1.0, (0, 255, 0), 2,
            )

        for classified in result.holes:
            hole = classified.hole
            center = hole.center.to_pixel()
            color = CATEGORY_COLORS[classified.category]
            cv2.circle(canvas, center, hole.radius, HOLE_COLOR, 2)
            cv2.circle(canvas, center, 3, CENTER_COLOR, 2)
            cv2.putText(
                canvas, f"D {hole.diameter} px",
                (center[0] + 10, center[1] - 10),
                cv2.FONT_HERSHEY_SIMPLEX, 0.7, HOLE_COLOR, 2,
            )
            # Category ring goes over the detection circle
            cv2.circle(canvas, center, hole.radius, color, 2)
            cv2.putText(
                canvas, classified.label,
                (center[0] + 10, center[1] + 10),
                cv2.FONT_HERSHEY_SIMPLEX, 0.7, color, 2,
            )

        return canvas

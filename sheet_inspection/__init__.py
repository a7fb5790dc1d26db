"""
Metal Sheet Inspection Package

Per-frame detection of a metal sheet outline and its drilled holes, with
classification of each hole as normal, countersunk or anodized.
"""

__version__ = "1.0.0"

from .config import InspectionConfig
from .models import (
    Point2D,
    SheetRegion,
    Hole,
    HoleCategory,
    ClassifiedHole,
    DetectionResult,
    SheetItem,
    HoleItem,
    CounterboreItem,
)
from .exceptions import InspectionError, InvalidFrameError, PointOutOfBoundsError, InvalidRegionError
from .analysis import ColorSampler, EdgeDensityAnalyzer
from .detection import SheetDetector, HoleDetector
from .classification import HoleClassifier
from .annotation import FrameAnnotator
from .pipeline import FrameProcessor, InspectionPipeline

__all__ = [
    "InspectionConfig",
    "Point2D",
    "SheetRegion",
    "Hole",
    "HoleCategory",
    "ClassifiedHole",
    "DetectionResult",
    "SheetItem",
    "HoleItem",
    "CounterboreItem",
    "InspectionError",
    "InvalidFrameError",
    "PointOutOfBoundsError",
    "InvalidRegionError",
    "ColorSampler",
    "EdgeDensityAnalyzer",
    "SheetDetector",
    "HoleDetector",
    "HoleClassifier",
    "FrameAnnotator",
    "FrameProcessor",
    "InspectionPipeline",
]

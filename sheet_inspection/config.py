"""
Configuration module for the metal sheet inspection pipeline.
Contains the tunable thresholds and runtime settings.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class InspectionConfig:
    """Configuration for sheet and hole inspection."""
    source: str = "0"
    output_dir: str = "data/inspection_output"
    log_dir: str = "logs"
    log_filename: Optional[str] = None
    log_prefix: str = "sheet_inspection"
    log_postfix: str = "run"
    max_log_size: int = 50
    backup_count: int = 5
    logging_level: str = "INFO"

    # Frames are delivered in one fixed channel order: "BGR" or "RGB"
    channel_order: str = "BGR"

    # Sheet detection
    bilateral_diameter: int = 9
    bilateral_sigma_color: float = 75.0
    bilateral_sigma_space: float = 75.0
    sheet_canny_low: float = 50.0
    sheet_canny_high: float = 150.0
    quad_epsilon_ratio: float = 0.04

    # Hole detection (circle transform)
    hough_dp: float = 1.0
    hough_min_dist_divisor: float = 4.0  # min separation = frame height / divisor
    hough_param1: float = 100.0
    hough_param2: float = 30.0
    min_hole_radius: int = 10
    max_hole_radius: int = 50

    # Hole classification
    region_canny_low: float = 100.0
    region_canny_high: float = 200.0
    anodized_channel_floor: int = 100
    anodized_max_channel_delta: int = 15
    countersink_edge_threshold: int = 2000

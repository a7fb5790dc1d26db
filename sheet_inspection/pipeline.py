"""
Pipeline module for the sheet inspection system.
FrameProcessor runs the per-frame detection stages; InspectionPipeline feeds it
frames from an image file or a video source.
"""

import cv2
import numpy as np
import json
import os
import traceback
from typing import Optional

from .config import InspectionConfig
from .analysis import ColorSampler, EdgeDensityAnalyzer, to_grayscale, validate_frame
from .annotation import FrameAnnotator
from .classification import HoleClassifier
from .detection import HoleDetector, SheetDetector
from .logsman import level_from_name, setup_logger
from .models import ClassifiedHole, DetectionResult


class FrameProcessor:
    """Runs sheet detection, hole detection and hole classification on one frame."""

    def __init__(self, config: Optional[InspectionConfig] = None):
        self.config = config or InspectionConfig()
        self.logger = setup_logger(name=__name__, logging_level=level_from_name(self.config.logging_level))
        self.sheet_detector = SheetDetector(self.config)
        self.hole_detector = HoleDetector(self.config)
        self.hole_classifier = HoleClassifier(
            self.config, ColorSampler(), EdgeDensityAnalyzer(self.config)
        )

    def process(self, frame: np.ndarray) -> DetectionResult:
        """Return a fresh DetectionResult; nothing is carried over between calls."""
        validate_frame(frame)
        gray = to_grayscale(frame, self.config.channel_order)

        sheet = self.sheet_detector.detect(frame, gray=gray)
        holes = self.hole_detector.detect(gray)

        # Classification needs color, so it runs on the original frame
        classified = tuple(
            ClassifiedHole(hole=hole, category=self.hole_classifier.classify(hole, frame))
            for hole in holes
        )
        self.logger.debug(f"Frame processed: sheet={sheet is not None}, holes={len(classified)}")
        return DetectionResult(sheet=sheet, holes=classified)


class InspectionPipeline:
    """Feeds frames from an image or a video source through the FrameProcessor."""

    def __init__(self, config: InspectionConfig, display: bool = False):
        self.config = config
        self.display = display
        self.running = False
        self.logger = setup_logger(
            name=__name__,
            log_filename=config.log_filename,
            prefix=config.log_prefix,
            postfix=config.log_postfix,
            log_dir=config.log_dir,
            max_log_size=config.max_log_size,
            backup_count=config.backup_count,
            logging_level=level_from_name(config.logging_level)
        )
        self.processor = FrameProcessor(config)
        self.annotator = FrameAnnotator()
        self.logger.info("Pipeline initialized.")

    def process_image(self, image_path: str) -> DetectionResult:
        frame = cv2.imread(image_path, cv2.IMREAD_COLOR)
        if frame is None:
            raise FileNotFoundError(f"Could not read image: {image_path}")
        if self.config.channel_order.upper() == "RGB":
            frame = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)

        result = self.processor.process(frame)
        self._log_result(result)
        self._save_results(frame, result, os.path.splitext(os.path.basename(image_path))[0])
        return result

    def _save_results(self, frame: np.ndarray, result: DetectionResult, stem: str):
        os.makedirs(self.config.output_dir, exist_ok=True)
        base_filename = os.path.join(self.config.output_dir, stem)

        annotated = self.annotator.annotate(frame, result)
        if self.config.channel_order.upper() == "RGB":
            annotated = cv2.cvtColor(annotated, cv2.COLOR_RGB2BGR)
        cv2.imwrite(f"{base_filename}_annotated.png", annotated)

        with open(f"{base_filename}_detections.json", 'w') as f:
            json.dump(result.to_dict(), f, indent=4)
        self.logger.info(f"Results saved: {base_filename}")

    def _log_result(self, result: DetectionResult, frame_count: Optional[int] = None):
        prefix = f"Frame {frame_count}: " if frame_count is not None else ""
        if result.sheet is None:
            sheet = "no sheet"
        else:
            sheet = f"sheet {result.sheet.width} x {result.sheet.height} px"
        labels = ", ".join(c.label for c in result.holes) or "none"
        self.logger.info(f"{prefix}{sheet}; holes: {labels}")

    def run(self):
        self.running = True
        source = int(self.config.source) if self.config.source.isdigit() else self.config.source
        self.logger.info(f"Starting pipeline: {source}")

        capture = cv2.VideoCapture(source)
        if not capture.isOpened():
            self.running = False
            raise RuntimeError(f"Could not open video source: {source}")

        frame_count = 0
        try:
            while self.running:
                ok, frame = capture.read()
                if not ok or frame is None:
                    self.logger.info("End of stream.")
                    break

                frame_count += 1
                try:
                    if self.config.channel_order.upper() == "RGB":
                        frame = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
                    result = self.processor.process(frame)
                    self._log_result(result, frame_count)
                    if self.display:
                        self._show(frame, result)
                except Exception as e:
                    self.logger.error(f"Error processing frame {frame_count}: {e}")
                    self.logger.error(f"Traceback: {traceback.format_exc()}")
                    continue
        finally:
            capture.release()
            if self.display:
                cv2.destroyAllWindows()
            self.running = False
            self.logger.info("Pipeline stopped.")

    def _show(self, frame: np.ndarray, result: DetectionResult):
        annotated = self.annotator.annotate(frame, result)
        if self.config.channel_order.upper() == "RGB":
            annotated = cv2.cvtColor(annotated, cv2.COLOR_RGB2BGR)
        cv2.imshow("sheet inspection", annotated)
        if cv2.waitKey(1) & 0xFF == ord('q'):
            self.stop()

    def stop(self):
        self.running = False

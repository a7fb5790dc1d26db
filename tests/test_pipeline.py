"""
Integration tests for sheet_inspection.pipeline.

Tests cover:
- End-to-end processing of a synthetic sheet with two holes
- Idempotence and absence of cross-frame state
- Input validation
- Image-file processing with saved outputs
"""

import json
import math
import os
import shutil
import tempfile
import unittest
import numpy as np
import cv2

from sheet_inspection.annotation import FrameAnnotator
from sheet_inspection.config import InspectionConfig
from sheet_inspection.exceptions import InvalidFrameError
from sheet_inspection.models import DetectionResult, HoleCategory, HoleItem, SheetItem, SheetRegion
from sheet_inspection.pipeline import FrameProcessor, InspectionPipeline


def sheet_with_holes() -> np.ndarray:
    """640x480 frame: 400x300 white sheet, an anodized-gray hole and a dark sharp hole."""
    frame = np.full((480, 640, 3), 30, dtype=np.uint8)
    cv2.rectangle(frame, (120, 90), (519, 389), (255, 255, 255), -1)
    cv2.circle(frame, (150, 150), 20, (200, 200, 195), -1, lineType=cv2.LINE_AA)
    cv2.circle(frame, (400, 300), 15, (90, 40, 20), -1, lineType=cv2.LINE_AA)
    return frame


def nearest(holes, point):
    return min(holes, key=lambda c: math.hypot(c.hole.center.x - point[0], c.hole.center.y - point[1]))


class TestFrameProcessor(unittest.TestCase):
    """Test the per-frame orchestration."""

    def setUp(self):
        self.processor = FrameProcessor(InspectionConfig())
        self.frame = sheet_with_holes()

    def test_end_to_end_scenario(self):
        result = self.processor.process(self.frame)

        self.assertEqual(result.sheet, SheetRegion(x=120, y=90, width=400, height=300))

        self.assertEqual(len(result.holes), 2)
        self.assertEqual([c.hole.index for c in result.holes], [0, 1])

        anodized = nearest(result.holes, (150, 150))
        normal = nearest(result.holes, (400, 300))
        self.assertIsNot(anodized, normal)
        self.assertLessEqual(math.hypot(anodized.hole.center.x - 150, anodized.hole.center.y - 150), 2.5)
        self.assertLessEqual(math.hypot(normal.hole.center.x - 400, normal.hole.center.y - 300), 2.5)
        self.assertLessEqual(abs(anodized.hole.radius - 20), 3)
        self.assertLessEqual(abs(normal.hole.radius - 15), 3)
        self.assertEqual(anodized.category, HoleCategory.ANODIZED)
        self.assertEqual(normal.category, HoleCategory.NORMAL)

    def test_items_match_detection_order(self):
        result = self.processor.process(self.frame)
        items = result.items()

        self.assertEqual(sum(isinstance(i, SheetItem) for i in items), 1)
        hole_items = [i for i in items if isinstance(i, HoleItem)]
        self.assertEqual([i.position for i in hole_items], [c.hole.center for c in result.holes])

    def test_idempotent(self):
        first = self.processor.process(self.frame)
        second = self.processor.process(self.frame)
        self.assertEqual(first, second)

    def test_no_state_leaks_between_frames(self):
        self.processor.process(self.frame)
        blank = np.full((480, 640, 3), 30, dtype=np.uint8)

        result = self.processor.process(blank)

        self.assertEqual(result, DetectionResult(sheet=None, holes=()))

    def test_input_frame_untouched(self):
        original = self.frame.copy()
        self.processor.process(self.frame)
        np.testing.assert_array_equal(self.frame, original)

    def test_rgb_channel_order(self):
        processor = FrameProcessor(InspectionConfig(channel_order="RGB"))
        rgb = cv2.cvtColor(self.frame, cv2.COLOR_BGR2RGB)

        result = processor.process(rgb)

        self.assertEqual(len(result.holes), 2)
        self.assertEqual(nearest(result.holes, (150, 150)).category, HoleCategory.ANODIZED)

    def test_bgra_frame(self):
        bgra = cv2.cvtColor(self.frame, cv2.COLOR_BGR2BGRA)
        result = self.processor.process(bgra)
        self.assertIsNotNone(result.sheet)
        self.assertEqual(len(result.holes), 2)

    def test_invalid_frames_rejected(self):
        for frame in (None, np.zeros((0, 0, 3), dtype=np.uint8), np.zeros((480, 640), dtype=np.uint8)):
            with self.assertRaises(InvalidFrameError):
                self.processor.process(frame)


class TestFrameAnnotator(unittest.TestCase):
    """Test overlay rendering."""

    def test_annotate_draws_on_copy(self):
        frame = sheet_with_holes()
        original = frame.copy()
        result = FrameProcessor().process(frame)

        annotated = FrameAnnotator().annotate(frame, result)

        np.testing.assert_array_equal(frame, original)
        self.assertEqual(annotated.shape, frame.shape)
        self.assertTrue(np.any(annotated != frame))

    def test_empty_result_leaves_frame_unchanged(self):
        frame = np.full((100, 100, 3), 30, dtype=np.uint8)
        annotated = FrameAnnotator().annotate(frame, DetectionResult())
        np.testing.assert_array_equal(annotated, frame)


class TestInspectionPipeline(unittest.TestCase):
    """Test image-file processing."""

    def setUp(self):
        self.tmp_dir = tempfile.mkdtemp()
        self.config = InspectionConfig(
            output_dir=os.path.join(self.tmp_dir, "out"),
            log_dir=os.path.join(self.tmp_dir, "logs"),
        )
        self.pipeline = InspectionPipeline(self.config)

    def tearDown(self):
        shutil.rmtree(self.tmp_dir, ignore_errors=True)

    def test_process_image_writes_outputs(self):
        image_path = os.path.join(self.tmp_dir, "frame.png")
        cv2.imwrite(image_path, sheet_with_holes())

        result = self.pipeline.process_image(image_path)

        self.assertEqual(len(result.holes), 2)
        annotated_path = os.path.join(self.config.output_dir, "frame_annotated.png")
        json_path = os.path.join(self.config.output_dir, "frame_detections.json")
        self.assertTrue(os.path.exists(annotated_path))
        with open(json_path) as f:
            data = json.load(f)
        self.assertEqual(data, result.to_dict())

    def test_missing_image_raises(self):
        with self.assertRaises(FileNotFoundError):
            self.pipeline.process_image(os.path.join(self.tmp_dir, "missing.png"))

    def test_stop_clears_running_flag(self):
        self.pipeline.running = True
        self.pipeline.stop()
        self.assertFalse(self.pipeline.running)


if __name__ == "__main__":
    unittest.main()

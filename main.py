#!/usr/bin/env python3
"""
Metal Sheet Hole Inspection

Usage:
    python main.py --image path/to/frame.png
    python main.py --source 0 --display
    python main.py --source "rtsp://your-stream-url" --debug
"""

import argparse
import logging
import sys
import signal
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent))

from sheet_inspection.pipeline import InspectionPipeline
from sheet_inspection.config import InspectionConfig
from sheet_inspection.logsman import setup_logger, LoggerWriter


def signal_handler(signum, frame):
    logger = logging.getLogger(__name__)
    logger.info(f"Received signal {signum}. Shutting down...")
    if hasattr(signal_handler, 'pipeline'):
        signal_handler.pipeline.stop()


def parse_arguments(argv=None):
    parser = argparse.ArgumentParser(description="Metal sheet hole detection and classification")
    parser.add_argument('--image', type=str, help='Process a single image file and save the results')
    parser.add_argument('--source', type=str, help='Camera index or video/stream URL')
    parser.add_argument('--output-dir', type=str, help='Directory for annotated images and JSON results')
    parser.add_argument('--channel-order', type=str, choices=['BGR', 'RGB'], help='Channel order of processed frames')
    parser.add_argument('--display', action='store_true', help='Show annotated frames while streaming')
    parser.add_argument('--debug', action='store_true', help='Enable debug logging')
    return parser.parse_args(argv)


def create_config_from_args(args) -> InspectionConfig:
    config = InspectionConfig()
    if args.source: config.source = args.source
    if args.output_dir: config.output_dir = args.output_dir
    if args.channel_order: config.channel_order = args.channel_order
    if args.debug: config.logging_level = "DEBUG"
    return config


def main(argv=None):
    args = parse_arguments(argv)
    config = create_config_from_args(args)

    logger = setup_logger(
        name=__name__,
        log_filename=config.log_filename,
        prefix=config.log_prefix,
        postfix=config.log_postfix,
        log_dir=config.log_dir,
        max_log_size=config.max_log_size,
        backup_count=config.backup_count,
        logging_level=getattr(logging, config.logging_level.upper())
    )
    sys.stdout = LoggerWriter(logger, logging.INFO)

    print("=" * 60)
    print("Metal Sheet Hole Inspection")
    print("=" * 60)

    try:
        pipeline = InspectionPipeline(config, display=args.display)
    except Exception as e:
        logger.error(f"Failed to initialize pipeline: {e}")
        return 1

    if args.image:
        try:
            result = pipeline.process_image(args.image)
        except Exception as e:
            logger.error(f"Failed to process {args.image}: {e}")
            return 1
        print(f"Sheet: {result.sheet}")
        for classified in result.holes:
            print(f"{classified.label}: {classified.hole.center} r={classified.hole.radius}")
        return 0

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)
    signal_handler.pipeline = pipeline

    try:
        print(f"Starting pipeline on source {config.source}...")
        pipeline.run()
    except KeyboardInterrupt:
        print("Pipeline interrupted by user")
    except Exception as e:
        logger.error(f"Pipeline failed: {e}")
        return 1
    finally:
        pipeline.stop()
        print("Pipeline stopped")
    return 0


if __name__ == "__main__":
    sys.exit(main())

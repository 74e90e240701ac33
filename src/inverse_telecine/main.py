"""
inverse-telecine Command Line
=============================

Runs the cadence pipeline over a video file and reports what it dropped.

Frames are decoded with OpenCV, converted to NV12 and given exact
rational timestamps derived from the container's frame rate, so the
output matches what a live capture pipeline would do with the same
frames.

Usage:
    inverse-telecine capture.mp4
    inverse-telecine capture.mp4 --mode 30p --max-frame-rate 0
    inverse-telecine capture.mp4 --config config.yaml
"""

import argparse
import json
import logging
import sys
from fractions import Fraction
from typing import Iterable, Iterator, Optional

import cv2
import yaml

from inverse_telecine.config import load_config, setup_logging
from inverse_telecine.detection import CadenceDetector, create_detector
from inverse_telecine.models.decision import CadenceMode
from inverse_telecine.models.timestamp import Timestamp
from inverse_telecine.stream import CadencePipeline, Frame, frame_from_bgr


logger = logging.getLogger(__name__)


# Recovers NTSC-style rates such as 30000/1001 from the float FPS
MAX_RATE_DENOMINATOR = 1001


def frame_interval(fps: float) -> Timestamp:
    """
    Exact duration of one frame at the given rate.

    Raises:
        ValueError: If fps is not positive
    """
    if fps <= 0:
        raise ValueError(f"Invalid frame rate: {fps}")
    rate = Fraction(fps).limit_denominator(MAX_RATE_DENOMINATOR)
    return Timestamp(1 / rate)


def iter_video_frames(path: str, row_alignment: int = 64) -> Iterator[Frame]:
    """
    Decode a video file into NV12 Frames.

    Args:
        path: Video file readable by OpenCV
        row_alignment: Row stride alignment of the produced planes

    Raises:
        OSError: If the file cannot be opened
    """
    capture = cv2.VideoCapture(path)
    if not capture.isOpened():
        raise OSError(f"Cannot open video: {path}")

    try:
        interval = frame_interval(capture.get(cv2.CAP_PROP_FPS))
        index = 0
        while True:
            ok, image = capture.read()
            if not ok:
                break
            timestamp = Timestamp(interval.value * index)
            yield frame_from_bgr(image, timestamp, row_alignment=row_alignment)
            index += 1
    finally:
        capture.release()


def analyze_frames(
    frames: Iterable[Frame],
    detector: CadenceDetector,
    max_frame_rate: Optional[int] = None,
) -> dict:
    """
    Run frames through a pipeline and summarize the result.

    Args:
        frames: Frames in presentation order
        detector: Detector to use
        max_frame_rate: Frame-rate limit for the pipeline (None = off)

    Returns:
        Dict of pipeline metrics plus the detector's final phase
    """
    pipeline = CadencePipeline(detector, max_frame_rate=max_frame_rate)
    for frame in frames:
        pipeline.push(frame)

    summary = pipeline.metrics.to_dict()
    summary["final_phase"] = detector.phase.value
    summary["locked"] = detector.locked
    return summary


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="inverse-telecine",
        description="Detect and drop telecine duplicate frames in a video",
    )
    parser.add_argument("video", help="Path to the video file")
    parser.add_argument(
        "--mode",
        choices=[mode.value for mode in CadenceMode],
        default=None,
        help="Expected source cadence (default: from config)",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to config.yaml",
    )
    parser.add_argument(
        "--max-frame-rate",
        type=int,
        default=None,
        help="Maximum delivered frame rate, 0 disables (default: from config)",
    )
    return parser


def main(argv: Optional[list] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = load_config(args.config)
    except (OSError, ValueError, yaml.YAMLError) as e:
        logging.basicConfig()
        logger.error(f"Invalid configuration: {e}")
        return 1

    if args.mode is not None:
        settings.detector.mode = CadenceMode(args.mode)
    if args.max_frame_rate is not None:
        settings.pipeline.max_frame_rate = args.max_frame_rate
    setup_logging(settings)

    detector = create_detector(
        settings.detector.mode,
        lock_on_sequences=settings.detector.lock_on_sequences,
    )

    try:
        summary = analyze_frames(
            iter_video_frames(args.video, settings.pipeline.row_alignment),
            detector,
            max_frame_rate=settings.pipeline.max_frame_rate,
        )
    except (OSError, ValueError) as e:
        logger.error(str(e))
        return 1

    summary["mode"] = settings.detector.mode.value
    logger.info(
        f"Processed {summary['frames_received']} frames, "
        f"delivered {summary['frames_delivered']}"
    )
    print(json.dumps(summary, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())

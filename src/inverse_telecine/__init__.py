"""
inverse-telecine
================

Streaming inverse-telecine (IVTC) frame-cadence detection for screen and
video capture pipelines.

Captured video that went through telecine, or through plain frame
duplication to hit a display rate, carries bit-identical duplicate frames.
This package detects the repeating duplicate pattern frame by frame and
decides whether each frame should be dropped or delivered, smoothing
presentation timestamps where a dropped duplicate would leave a gap.

Components:
    - models: Timestamp, Decision and detector phase types
    - detection: Chroma-plane frame comparator and the cadence detectors
    - stream: NV12 frame descriptor, OpenCV conversion and pipeline driver

Example:
    from inverse_telecine.detection import CadenceDetector60
    from inverse_telecine.stream import CadencePipeline

    pipeline = CadencePipeline(CadenceDetector60(), sink=encoder.submit)
    for frame in capture:
        pipeline.push(frame)
"""

__version__ = "0.1.0"
__author__ = "inverse-telecine contributors"

from inverse_telecine.models import CadenceMode, Decision, DetectorResult, Phase, Timestamp
from inverse_telecine.detection import (
    CadenceDetector,
    CadenceDetector30,
    CadenceDetector60,
    compare_frames,
    create_detector,
)
from inverse_telecine.stream import CadencePipeline, Frame, Plane, frame_from_bgr

__all__ = [
    "__version__",
    # Models
    "CadenceMode",
    "Decision",
    "DetectorResult",
    "Phase",
    "Timestamp",
    # Detection
    "CadenceDetector",
    "CadenceDetector30",
    "CadenceDetector60",
    "compare_frames",
    "create_detector",
    # Stream
    "CadencePipeline",
    "Frame",
    "Plane",
    "frame_from_bgr",
]

"""
Stream Module
=============

Frame descriptors and the capture-side pipeline driver.

This module provides the ingestion layer for inverse-telecine:
    - Frame / Plane: Typed NV12 frame descriptor
    - frame_from_bgr: OpenCV conversion of BGR images into NV12 Frames
    - CadencePipeline: Driver feeding frame pairs into a detector

Example:
    from inverse_telecine.detection import CadenceDetector30
    from inverse_telecine.stream import CadencePipeline, frame_from_bgr

    pipeline = CadencePipeline(CadenceDetector30(), sink=forward)
    pipeline.push(frame_from_bgr(image, timestamp))
"""

from inverse_telecine.stream.frame import CHROMA_PLANE, LUMA_PLANE, Frame, Plane
from inverse_telecine.stream.nv12 import aligned_stride, frame_from_bgr
from inverse_telecine.stream.pipeline import CadencePipeline, PipelineMetrics


__all__ = [
    "CHROMA_PLANE",
    "LUMA_PLANE",
    "Frame",
    "Plane",
    "aligned_stride",
    "frame_from_bgr",
    "CadencePipeline",
    "PipelineMetrics",
]

"""
NV12 Conversion
===============

Builds NV12 Frames from BGR images decoded by OpenCV.

Screen and camera capture on the target platforms delivers bi-planar
4:2:0 buffers: a full-size luma plane and a half-height plane of
interleaved U/V samples. Offline sources (video files, tests) decode to
BGR, so they are converted here into the same layout, including row
padding, before entering the pipeline.
"""

import logging

import cv2
import numpy as np

from inverse_telecine.models.timestamp import Timestamp
from inverse_telecine.stream.frame import Frame, Plane


logger = logging.getLogger(__name__)


DEFAULT_ROW_ALIGNMENT = 64


def aligned_stride(width: int, alignment: int) -> int:
    """Round a row width up to the next multiple of alignment."""
    if alignment < 1:
        raise ValueError("alignment must be >= 1")
    return ((width + alignment - 1) // alignment) * alignment


def _padded_plane(rows: np.ndarray, alignment: int) -> Plane:
    """Copy rows into a zero-padded buffer with an aligned stride."""
    height, width = rows.shape
    stride = aligned_stride(width, alignment)
    buffer = np.zeros((height, stride), dtype=np.uint8)
    buffer[:, :width] = rows
    return Plane(
        data=buffer.reshape(-1),
        width=width,
        height=height,
        bytes_per_row=stride,
    )


def frame_from_bgr(
    image: np.ndarray,
    timestamp: Timestamp,
    row_alignment: int = DEFAULT_ROW_ALIGNMENT,
) -> Frame:
    """
    Convert a BGR image into an NV12 Frame.

    Args:
        image: (H, W, 3) uint8 BGR image with even width and height
        timestamp: Presentation timestamp for the frame
        row_alignment: Row stride alignment in bytes

    Returns:
        Frame with a luma plane and an interleaved U/V chroma plane

    Raises:
        ValueError: If the image is not 3-channel or has odd dimensions
    """
    if image.ndim != 3 or image.shape[2] != 3:
        raise ValueError(f"Expected a (H, W, 3) BGR image, got shape {image.shape}")

    height, width = image.shape[:2]
    if width % 2 or height % 2:
        raise ValueError(f"NV12 requires even dimensions, got {width}x{height}")

    if image.dtype != np.uint8:
        image = image.astype(np.uint8)

    # I420 layout: Y (H rows of W), then the U and V planes packed back to
    # back; U ends mid-row whenever H is not a multiple of 4
    yuv = cv2.cvtColor(image, cv2.COLOR_BGR2YUV_I420)
    chroma_height = height // 2
    chroma_width = width // 2

    y = yuv[:height]
    chroma_size = chroma_height * chroma_width
    tail = yuv[height:].reshape(-1)
    u = tail[:chroma_size].reshape(chroma_height, chroma_width)
    v = tail[chroma_size:].reshape(chroma_height, chroma_width)

    uv = np.empty((chroma_height, width), dtype=np.uint8)
    uv[:, 0::2] = u
    uv[:, 1::2] = v

    return Frame(
        width=width,
        height=height,
        planes=(_padded_plane(y, row_alignment), _padded_plane(uv, row_alignment)),
        timestamp=timestamp,
    )

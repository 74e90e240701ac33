"""
Frame Comparator
================

Duplicate-frame test used by the cadence detectors.

Only the chroma (interleaved U/V) plane is compared. Skipping luma,
which is twice the size of the chroma plane in 4:2:0 layouts, keeps the
check cheap enough to run on every captured frame pair. Two distinct
frames with identical chroma are reported as equal; an occasional false
positive only drops a single frame, which is accepted.

Any frame that cannot be compared (size mismatch, missing or truncated
chroma plane) is reported as not equal, so the frame is delivered.
"""

import logging
from typing import Optional

import numpy as np
from numpy.lib.stride_tricks import as_strided

from inverse_telecine.stream.frame import Frame, Plane


logger = logging.getLogger(__name__)


def _plane_rows(plane: Optional[Plane]) -> Optional[np.ndarray]:
    """
    Read-only (height, width) view over a plane's image bytes.

    Row padding beyond `width` is excluded. Returns None when the plane
    cannot be addressed as described.
    """
    if plane is None or plane.data is None:
        return None
    if plane.width < 0 or plane.height < 0 or plane.bytes_per_row < plane.width:
        return None

    buffer = np.ascontiguousarray(plane.data, dtype=np.uint8).reshape(-1)
    if plane.height == 0 or plane.width == 0:
        return buffer[:0].reshape(plane.height, plane.width)

    required = (plane.height - 1) * plane.bytes_per_row + plane.width
    if buffer.size < required:
        return None

    return as_strided(
        buffer,
        shape=(plane.height, plane.width),
        strides=(plane.bytes_per_row, 1),
        writeable=False,
    )


def compare_frames(a: Optional[Frame], b: Optional[Frame]) -> bool:
    """
    Check whether two frames are duplicates.

    Args:
        a: First frame
        b: Second frame

    Returns:
        True if both chroma planes are byte-identical, False otherwise
        (including every case where the frames cannot be compared).
    """
    if a is None or b is None:
        return False
    if a.width != b.width or a.height != b.height:
        return False

    first, second = a.chroma, b.chroma
    if first is None or second is None:
        return False
    if first.width != second.width or first.height != second.height:
        return False

    first_rows = _plane_rows(first)
    second_rows = _plane_rows(second)
    if first_rows is None or second_rows is None:
        logger.debug("Chroma plane not addressable, treating frames as distinct")
        return False

    return bool(np.array_equal(first_rows, second_rows))

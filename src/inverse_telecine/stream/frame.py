"""
Frame Data Model
=================

Planar frame descriptor handed from the capture source to the pipeline.

This module defines the typed Frame and Plane classes used as the
interface between the capture source, the pipeline driver and the
cadence detectors.

Design Rules:
    - Frames are immutable and owned by the capture source / driver
    - Detectors borrow frames read-only for the duration of one call
    - Plane data is never copied or decoded by this module
"""

from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from inverse_telecine.models.timestamp import Timestamp


LUMA_PLANE = 0
CHROMA_PLANE = 1


@dataclass(frozen=True, slots=True, eq=False)
class Plane:
    """
    One image plane of a planar frame.

    Attributes:
        data: uint8 buffer (1-D or 2-D), or None if the plane is unaddressable
        width: Bytes of image data per row
        height: Number of rows
        bytes_per_row: Row stride in bytes, may exceed width due to padding
    """

    data: Optional[np.ndarray]
    width: int
    height: int
    bytes_per_row: int

    def __repr__(self) -> str:
        return (
            f"Plane(width={self.width}, height={self.height}, "
            f"bytes_per_row={self.bytes_per_row}, "
            f"addressable={self.data is not None})"
        )


@dataclass(frozen=True, slots=True, eq=False)
class Frame:
    """
    Captured NV12 video frame.

    Attributes:
        width: Frame width in pixels
        height: Frame height in pixels
        planes: (luma, chroma) planes; chroma holds interleaved U/V bytes
        timestamp: Presentation timestamp
    """

    width: int
    height: int
    planes: Tuple[Plane, ...]
    timestamp: Timestamp

    @property
    def luma(self) -> Optional[Plane]:
        return self.planes[LUMA_PLANE] if len(self.planes) > LUMA_PLANE else None

    @property
    def chroma(self) -> Optional[Plane]:
        return self.planes[CHROMA_PLANE] if len(self.planes) > CHROMA_PLANE else None

    def __repr__(self) -> str:
        """Compact repr that doesn't dump the planes."""
        return (
            f"Frame({self.width}x{self.height}, "
            f"planes={len(self.planes)}, "
            f"timestamp={self.timestamp.milliseconds:.3f}ms)"
        )

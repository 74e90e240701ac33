"""
Test Configuration
==================

Pytest fixtures and test configuration for inverse-telecine.

Synthetic NV12 frames are built from an integer "content id": frames
with the same id have byte-identical planes, frames with different ids
differ in both luma and chroma.
"""

from fractions import Fraction

import numpy as np
import pytest


FRAME_WIDTH = 16
FRAME_HEIGHT = 8
ROW_STRIDE = 32


def _plane_bytes(seed: int, rows: int, stride: int) -> np.ndarray:
    rng = np.random.default_rng(seed)
    return rng.integers(0, 256, size=rows * stride, dtype=np.uint8)


@pytest.fixture
def make_frame():
    """Factory building a synthetic NV12 frame for a content id."""
    from inverse_telecine.models.timestamp import Timestamp
    from inverse_telecine.stream.frame import Frame, Plane

    def factory(
        content: int,
        timestamp=None,
        width: int = FRAME_WIDTH,
        height: int = FRAME_HEIGHT,
        stride: int = ROW_STRIDE,
    ):
        if timestamp is None:
            timestamp = Timestamp.zero()
        luma = Plane(
            data=_plane_bytes(2 * content, height, stride),
            width=width,
            height=height,
            bytes_per_row=stride,
        )
        chroma = Plane(
            data=_plane_bytes(2 * content + 1, height // 2, stride),
            width=width,
            height=height // 2,
            bytes_per_row=stride,
        )
        return Frame(width=width, height=height, planes=(luma, chroma), timestamp=timestamp)

    return factory


@pytest.fixture
def make_sequence(make_frame):
    """Factory turning a list of content ids into evenly spaced frames."""
    from inverse_telecine.models.timestamp import Timestamp

    def factory(contents, fps: int = 60):
        interval = Fraction(1, fps)
        return [
            make_frame(content, Timestamp(interval * index))
            for index, content in enumerate(contents)
        ]

    return factory


@pytest.fixture
def run_detector():
    """Feed frames through a detector the way the pipeline driver does."""

    def run(detector, frames):
        results = []
        previous = None
        for frame in frames:
            results.append(detector.process(frame, previous))
            previous = frame
        return results

    return run


def groups(count: int, size: int = 3, start: int = 0) -> list:
    """Content ids for `count` runs of `size` identical frames."""
    return [group for group in range(start, start + count) for _ in range(size)]


def cycles_30p(count: int, distinct: int = 4, start: int = 0) -> list:
    """Content ids for `count` cycles of distinct frames plus one duplicate."""
    contents = []
    next_id = start
    for _ in range(count):
        cycle = list(range(next_id, next_id + distinct))
        contents.extend(cycle)
        contents.append(cycle[-1])
        next_id += distinct
    return contents


@pytest.fixture
def content_groups():
    """Builder for runs of identical frames (see `groups`)."""
    return groups


@pytest.fixture
def content_cycles():
    """Builder for distinct-then-duplicate cycles (see `cycles_30p`)."""
    return cycles_30p

"""
Cadence Pipeline
================

Driver that connects a capture source, one cadence detector and a sink.

This module provides the CadencePipeline class which:
    - Retains the previous captured frame for the next comparison
    - Feeds (current, previous) pairs into exactly one detector
    - Forwards delivered frames with the detector's output timestamp
    - Drops frames arriving faster than the configured maximum rate
    - Exposes metrics for observability

Design Rules:
    - Frames must be pushed in increasing timestamp order
    - One pipeline per capture stream; not thread-safe
    - The detector never sees frames other than (current, previous)
"""

import logging
from fractions import Fraction
from typing import TYPE_CHECKING, Callable, Optional

from inverse_telecine.models.decision import Decision
from inverse_telecine.models.timestamp import Timestamp
from inverse_telecine.stream.frame import Frame

if TYPE_CHECKING:
    from inverse_telecine.detection.base import CadenceDetector


logger = logging.getLogger(__name__)


FrameSink = Callable[[Frame, Timestamp], None]


class PipelineMetrics:
    """Metrics for CadencePipeline observability."""

    __slots__ = (
        "frames_received",
        "frames_delivered",
        "duplicates_dropped",
        "rate_limited",
        "timestamps_adjusted",
    )

    def __init__(self) -> None:
        self.frames_received: int = 0
        self.frames_delivered: int = 0
        self.duplicates_dropped: int = 0
        self.rate_limited: int = 0
        self.timestamps_adjusted: int = 0

    @property
    def drop_ratio(self) -> float:
        """Fraction of received frames that were not delivered."""
        if self.frames_received == 0:
            return 0.0
        return 1.0 - self.frames_delivered / self.frames_received

    def to_dict(self) -> dict:
        """Export metrics as dict."""
        return {
            "frames_received": self.frames_received,
            "frames_delivered": self.frames_delivered,
            "duplicates_dropped": self.duplicates_dropped,
            "rate_limited": self.rate_limited,
            "timestamps_adjusted": self.timestamps_adjusted,
            "drop_ratio": round(self.drop_ratio, 4),
        }


class CadencePipeline:
    """
    Per-stream driver around a cadence detector.

    Attributes:
        detector: Active cadence detector
        sink: Callable receiving (frame, timestamp) for delivered frames
        max_frame_rate: Upper bound on delivered frames per second (None = off)
        metrics: Operational metrics

    Example:
        pipeline = CadencePipeline(
            CadenceDetector60(),
            sink=lambda frame, ts: encoder.encode(frame, ts),
            max_frame_rate=120,
        )

        for frame in capture:
            pipeline.push(frame)
    """

    def __init__(
        self,
        detector: "CadenceDetector",
        sink: Optional[FrameSink] = None,
        max_frame_rate: Optional[int] = 120,
    ) -> None:
        """
        Initialize pipeline.

        Args:
            detector: Detector instance owned by this pipeline
            sink: Consumer of delivered frames
            max_frame_rate: Maximum delivered frame rate. 0 or None disables.
        """
        if max_frame_rate is not None and max_frame_rate < 0:
            raise ValueError("max_frame_rate must be >= 0")

        self.detector = detector
        self.sink = sink
        self.max_frame_rate = max_frame_rate or None
        self.metrics = PipelineMetrics()

        self._min_interval: Optional[Timestamp] = (
            Timestamp(Fraction(1, self.max_frame_rate)) if self.max_frame_rate else None
        )
        self._previous: Optional[Frame] = None
        self._last_delivered: Optional[Timestamp] = None

        logger.info(
            f"CadencePipeline initialized: detector={type(detector).__name__}, "
            f"max_frame_rate={self.max_frame_rate}"
        )

    @property
    def previous_frame(self) -> Optional[Frame]:
        """Frame retained for the next comparison."""
        return self._previous

    def push(self, frame: Frame) -> bool:
        """
        Process one captured frame.

        Args:
            frame: Next frame from the capture source

        Returns:
            True if the frame was forwarded to the sink, False if dropped.
        """
        self.metrics.frames_received += 1

        decision, timestamp = self.detector.process(frame, self._previous)
        self._previous = frame

        if decision is Decision.DROP_FRAME:
            self.metrics.duplicates_dropped += 1
            return False

        if self._is_rate_limited(timestamp):
            self.metrics.rate_limited += 1
            logger.debug(
                f"Dropping frame with delta "
                f"{(timestamp - self._last_delivered).milliseconds:.3f}ms"
            )
            return False

        if timestamp != frame.timestamp:
            self.metrics.timestamps_adjusted += 1

        self._last_delivered = timestamp
        self.metrics.frames_delivered += 1
        if self.sink is not None:
            self.sink(frame, timestamp)
        return True

    def reset(self) -> None:
        """Forget the previous frame and restart cadence detection."""
        self._previous = None
        self._last_delivered = None
        self.detector.reset()
        logger.info("CadencePipeline reset")

    def _is_rate_limited(self, timestamp: Timestamp) -> bool:
        if self._min_interval is None or self._last_delivered is None:
            return False
        return timestamp - self._last_delivered < self._min_interval

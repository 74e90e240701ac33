"""
Cadence Detector Contract
=========================

Shared interface for the drop-in-replaceable cadence detectors.

A detector is a synchronous per-frame state machine. The driver calls
`process(current, previous)` once per captured frame, strictly in
arrival order, and forwards the frame only when the returned decision
is DELIVER_FRAME, using the returned timestamp in place of the original.

Instances are not thread-safe and must not be shared between capture
pipelines.
"""

from typing import Optional, Protocol

from inverse_telecine.models.decision import DetectorResult, Phase
from inverse_telecine.stream.frame import Frame


class CadenceDetector(Protocol):
    """
    Protocol for cadence detectors.

    Implementations keep only scalar state between calls; they never
    retain the frames they are given.
    """

    @property
    def phase(self) -> Phase:
        """Current state machine phase."""
        ...

    @property
    def locked(self) -> bool:
        """Whether enough sequences were observed to start dropping frames."""
        ...

    def process(self, current: Frame, previous: Optional[Frame]) -> DetectorResult:
        """
        Classify one frame.

        Args:
            current: Frame N
            previous: Frame N-1, or None for the first frame of a stream

        Returns:
            DetectorResult with the decision and output timestamp
        """
        ...

    def reset(self) -> None:
        """Return to the initial DETECTING state."""
        ...

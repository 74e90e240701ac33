"""
30p Cadence Detector
====================

Detects "3 to 6 distinct frames, then one duplicate" cadences produced
when 24 or 25 fps content is converted to 30 fps.

After the first duplicate the detector counts distinct frames. A
duplicate arriving after 3 to 6 of them completes a sequence and is
dropped. Any other run length returns the detector to DETECTING.

Dropping a duplicate leaves a double-length gap before the next frame.
That frame is pulled back by half of its distance to the dropped
duplicate, splitting the gap into two regular intervals:

    output = current - (current - duplicate) / 2

No frame is dropped until more than `lock_on_sequences` sequences have
been completed.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from inverse_telecine.detection.comparator import compare_frames
from inverse_telecine.models.decision import Decision, DetectorResult, Phase
from inverse_telecine.models.timestamp import Timestamp
from inverse_telecine.stream.frame import Frame


logger = logging.getLogger(__name__)


@dataclass
class Cadence30State:
    """
    Mutable state for the 30p detector.

    Attributes:
        phase: Current phase
        content_frames: Distinct frames since the last duplicate
        sequence_counter: Sequences completed since lock-on started
        last_input_timestamp: Original timestamp of the previous frame
    """

    phase: Phase = Phase.DETECTING
    content_frames: int = 0
    sequence_counter: int = 0
    last_input_timestamp: Optional[Timestamp] = None

    def reset(self) -> None:
        """Reset the state machine, keeping the last input timestamp."""
        self.phase = Phase.DETECTING
        self.content_frames = 0
        self.sequence_counter = 0


class CadenceDetector30:
    """
    Single-duplicate detector for 30p conversions.

    Attributes:
        lock_on_sequences: Sequences that must complete before frames are dropped
        state: Current Cadence30State

    Example:
        detector = CadenceDetector30()
        decision, timestamp = detector.process(frame, last_frame)
    """

    MIN_CONTENT_FRAMES = 3
    MAX_CONTENT_FRAMES = 6
    DEFAULT_LOCK_ON_SEQUENCES = 4

    def __init__(self, lock_on_sequences: int = DEFAULT_LOCK_ON_SEQUENCES) -> None:
        if lock_on_sequences < 0:
            raise ValueError("lock_on_sequences must be >= 0")
        self.lock_on_sequences = lock_on_sequences
        self.state = Cadence30State()

    @property
    def phase(self) -> Phase:
        return self.state.phase

    @property
    def locked(self) -> bool:
        return self.state.sequence_counter > self.lock_on_sequences

    def reset(self) -> None:
        self.state.reset()
        self.state.last_input_timestamp = None

    def process(self, current: Frame, previous: Optional[Frame]) -> DetectorResult:
        state = self.state
        input_timestamp = current.timestamp

        if state.last_input_timestamp is None:
            state.last_input_timestamp = input_timestamp
            return DetectorResult(Decision.DELIVER_FRAME, input_timestamp)

        decision = Decision.DELIVER_FRAME
        output_timestamp = input_timestamp

        if state.phase is Phase.DETECTING:
            if compare_frames(current, previous):
                logger.debug("Found a duplicate frame, tracking content runs")
                state.phase = Phase.CONTENT
                state.content_frames = 0
            else:
                state.content_frames += 1

        elif state.phase is Phase.CONTENT:
            if compare_frames(current, previous):
                if self.MIN_CONTENT_FRAMES <= state.content_frames <= self.MAX_CONTENT_FRAMES:
                    state.content_frames = 0
                    state.sequence_counter += 1
                    decision = Decision.DROP_FRAME
                    if state.sequence_counter == self.lock_on_sequences + 1:
                        logger.debug(f"Locked on after {state.sequence_counter} sequences")
                else:
                    self._break(
                        f"duplicate after {state.content_frames} content frames"
                    )
            elif state.content_frames == 0:
                state.content_frames = 1
                half_delta = (input_timestamp - state.last_input_timestamp).half()
                output_timestamp = input_timestamp - half_delta
            elif state.content_frames <= self.MAX_CONTENT_FRAMES:
                state.content_frames += 1
            else:
                self._break(
                    f"more than {self.MAX_CONTENT_FRAMES} content frames without a duplicate"
                )

        elif state.phase is Phase.WAIT:
            state.content_frames = 0

        # Longer pattern, so more sequences are needed before dropping
        if state.sequence_counter <= self.lock_on_sequences:
            decision = Decision.DELIVER_FRAME

        state.last_input_timestamp = input_timestamp
        return DetectorResult(decision, output_timestamp)

    def _break(self, reason: str) -> None:
        logger.debug(f"Cadence broken: {reason}")
        self.state.reset()

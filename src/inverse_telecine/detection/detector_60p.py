"""
60p Cadence Detector
====================

Detects 2-3 pulldown in 60 fps captures of 24 fps content.

Pulldown shows each source frame for two or three consecutive display
frames. Once three identical frames are seen, the detector tracks runs
of duplicates: the first frame of each run is delivered and the repeats
are dropped. Runs of one are tolerated once in a row; two consecutive
single-frame runs, a run longer than three, or a duplicate at the start
of a run break the pattern and the detector returns to DETECTING.

No frame is dropped until more than `lock_on_sequences` runs have been
completed. Timestamps are passed through unchanged.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from inverse_telecine.detection.comparator import compare_frames
from inverse_telecine.models.decision import Decision, DetectorResult, Phase
from inverse_telecine.stream.frame import Frame


logger = logging.getLogger(__name__)


@dataclass
class Cadence60State:
    """
    Mutable state for the 60p detector.

    Attributes:
        phase: Current phase
        frame_counter: Duplicates seen while detecting, or position in the current run
        sequence_counter: Runs completed since lock-on started
        last_sequence_length: Length of the previous run
    """

    phase: Phase = Phase.DETECTING
    frame_counter: int = 0
    sequence_counter: int = 0
    last_sequence_length: int = 0

    def reset(self) -> None:
        self.phase = Phase.DETECTING
        self.frame_counter = 0
        self.sequence_counter = 0
        self.last_sequence_length = 0


class CadenceDetector60:
    """
    Duplicate-run detector for 2-3 pulldown.

    Attributes:
        lock_on_sequences: Runs that must complete before frames are dropped
        state: Current Cadence60State

    Example:
        detector = CadenceDetector60()
        decision, timestamp = detector.process(frame, last_frame)
    """

    # Identical frames (after the first) that start content tracking
    DETECT_DUPLICATES = 2
    MAX_RUN_LENGTH = 3
    DEFAULT_LOCK_ON_SEQUENCES = 2

    def __init__(self, lock_on_sequences: int = DEFAULT_LOCK_ON_SEQUENCES) -> None:
        if lock_on_sequences < 0:
            raise ValueError("lock_on_sequences must be >= 0")
        self.lock_on_sequences = lock_on_sequences
        self.state = Cadence60State()

    @property
    def phase(self) -> Phase:
        return self.state.phase

    @property
    def locked(self) -> bool:
        return self.state.sequence_counter > self.lock_on_sequences

    def reset(self) -> None:
        self.state.reset()

    def process(self, current: Frame, previous: Optional[Frame]) -> DetectorResult:
        state = self.state
        decision = Decision.DELIVER_FRAME

        if state.phase is Phase.DETECTING:
            if compare_frames(current, previous):
                state.frame_counter += 1
                if state.frame_counter == self.DETECT_DUPLICATES:
                    logger.debug("Found 3 duplicate frames, tracking 2-3 runs")
                    state.phase = Phase.CONTENT
                    state.frame_counter = 0
            else:
                state.frame_counter = 0

        elif state.phase is Phase.CONTENT:
            if compare_frames(current, previous):
                if state.frame_counter == 0:
                    self._break(f"run {state.sequence_counter + 1} started with a duplicate")
                elif state.frame_counter < self.MAX_RUN_LENGTH:
                    state.frame_counter += 1
                    decision = Decision.DROP_FRAME
                else:
                    self._break(
                        f"run {state.sequence_counter + 1} exceeded "
                        f"{self.MAX_RUN_LENGTH} frames"
                    )
            elif state.frame_counter == 1 and state.last_sequence_length == 1:
                self._break("two consecutive runs without a duplicate")
            else:
                state.last_sequence_length = state.frame_counter
                state.sequence_counter += 1
                state.frame_counter = 1
                if state.sequence_counter == self.lock_on_sequences + 1:
                    logger.debug(f"Locked on after {state.sequence_counter} runs")

        elif state.phase is Phase.WAIT:
            state.frame_counter += 1

        # Wait to lock on to several iterations of the sequence
        if state.sequence_counter <= self.lock_on_sequences:
            decision = Decision.DELIVER_FRAME

        return DetectorResult(decision, current.timestamp)

    def _break(self, reason: str) -> None:
        logger.debug(f"Cadence broken: {reason}")
        self.state.reset()

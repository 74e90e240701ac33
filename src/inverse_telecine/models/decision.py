"""
Detector Decisions
==================

Per-frame verdict types returned by the cadence detectors.

Every call to a detector yields exactly one DetectorResult: a Decision
telling the driver whether to forward the frame, plus the timestamp the
frame must be forwarded with (which may differ from the input timestamp).
"""

from enum import Enum
from typing import NamedTuple

from inverse_telecine.models.timestamp import Timestamp


class Decision(str, Enum):
    """
    Drop/deliver verdict for a single frame.

    Attributes:
        DROP_FRAME: Frame is a redundant duplicate, discard it
        DELIVER_FRAME: Frame carries content, forward it
    """

    DROP_FRAME = "DROP_FRAME"
    DELIVER_FRAME = "DELIVER_FRAME"


class Phase(str, Enum):
    """
    Detector state machine phase.

    Attributes:
        DETECTING: Looking for the first duplicate pattern
        WAIT: Reserved resynchronization phase, never entered
        CONTENT: Tracking a recognized duplicate cadence
    """

    DETECTING = "DETECTING"
    WAIT = "WAIT"
    CONTENT = "CONTENT"


class DetectorResult(NamedTuple):
    """Decision and output timestamp for one processed frame."""

    decision: Decision
    timestamp: Timestamp


class CadenceMode(str, Enum):
    """
    Expected source cadence, chosen when the pipeline is built.

    Attributes:
        PULLDOWN_60P: Runs of 2-3 duplicates (24 fps content at 60 fps)
        PULLDOWN_30P: 3-6 distinct frames then one duplicate (24/25 fps at 30 fps)
    """

    PULLDOWN_60P = "60p"
    PULLDOWN_30P = "30p"

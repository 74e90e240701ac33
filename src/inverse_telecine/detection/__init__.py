"""
Detection Module
================

Duplicate-frame comparison and cadence detection.

This module provides:
    - compare_frames: Chroma-plane duplicate test
    - CadenceDetector: Protocol shared by all detectors
    - CadenceDetector60: 2-3 pulldown detector (60p captures)
    - CadenceDetector30: single-duplicate detector (30p captures)
    - create_detector: Build a detector for a CadenceMode

Example:
    from inverse_telecine.detection import create_detector
    from inverse_telecine.models import CadenceMode

    detector = create_detector(CadenceMode.PULLDOWN_30P)
    decision, timestamp = detector.process(frame, last_frame)
"""

import logging
from typing import Optional, Union

from inverse_telecine.detection.base import CadenceDetector
from inverse_telecine.detection.comparator import compare_frames
from inverse_telecine.detection.detector_30p import Cadence30State, CadenceDetector30
from inverse_telecine.detection.detector_60p import Cadence60State, CadenceDetector60
from inverse_telecine.models.decision import CadenceMode


logger = logging.getLogger(__name__)


def create_detector(
    mode: Union[CadenceMode, str],
    lock_on_sequences: Optional[int] = None,
) -> CadenceDetector:
    """
    Build a detector for the expected source cadence.

    Args:
        mode: CadenceMode or its value ("60p" / "30p")
        lock_on_sequences: Override the detector's default lock-on window

    Returns:
        A fresh detector instance

    Raises:
        ValueError: If mode is not a known cadence
    """
    mode = CadenceMode(mode)

    if mode is CadenceMode.PULLDOWN_60P:
        detector_cls = CadenceDetector60
    else:
        detector_cls = CadenceDetector30

    if lock_on_sequences is None:
        lock_on_sequences = detector_cls.DEFAULT_LOCK_ON_SEQUENCES

    logger.info(
        f"Creating {detector_cls.__name__} "
        f"(mode={mode.value}, lock_on_sequences={lock_on_sequences})"
    )
    return detector_cls(lock_on_sequences=lock_on_sequences)


__all__ = [
    "CadenceDetector",
    "CadenceDetector30",
    "CadenceDetector60",
    "Cadence30State",
    "Cadence60State",
    "compare_frames",
    "create_detector",
]

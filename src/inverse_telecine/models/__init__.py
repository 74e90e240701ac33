"""
Data Models
===========

Value types shared by the detectors and the pipeline driver.

Models:
    - Timestamp: Exact rational presentation time
    - Decision: DROP_FRAME / DELIVER_FRAME verdict
    - DetectorResult: (decision, timestamp) pair returned per frame
    - Phase: Detector state machine phase
    - CadenceMode: Which detector a pipeline is built with
"""

from inverse_telecine.models.timestamp import Timestamp
from inverse_telecine.models.decision import CadenceMode, Decision, DetectorResult, Phase

__all__ = [
    "Timestamp",
    "Decision",
    "DetectorResult",
    "Phase",
    "CadenceMode",
]

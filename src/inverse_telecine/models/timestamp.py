"""
Presentation Timestamps
=======================

Exact rational time values for frame presentation timestamps.

Capture sources describe time as an integer value over an integer
timescale (e.g. 1001/30000 s). Storing that as a float drifts over long
sessions and cannot represent half of a 1/30 s interval exactly, so
timestamps are kept as a Fraction of seconds.
"""

from dataclasses import dataclass
from fractions import Fraction
from typing import Union


Number = Union[int, Fraction]


@dataclass(frozen=True, order=True, slots=True)
class Timestamp:
    """
    Immutable presentation timestamp.

    Attributes:
        value: Time in seconds as an exact Fraction

    Example:
        ts = Timestamp.from_value(1001, 30000)
        later = ts + Timestamp.from_milliseconds(33)
        midpoint = ts + (later - ts).half()
    """

    value: Fraction

    def __post_init__(self) -> None:
        if isinstance(self.value, float):
            raise TypeError(
                "Timestamp does not accept floats, use from_seconds(str(value))"
            )
        if not isinstance(self.value, Fraction):
            object.__setattr__(self, "value", Fraction(self.value))

    @classmethod
    def from_value(cls, value: int, timescale: int) -> "Timestamp":
        """
        Build a timestamp from an integer value and timescale.

        Args:
            value: Tick count
            timescale: Ticks per second, must be > 0
        """
        if timescale <= 0:
            raise ValueError("timescale must be > 0")
        return cls(Fraction(value, timescale))

    @classmethod
    def from_seconds(cls, seconds: Union[Number, str]) -> "Timestamp":
        """Build a timestamp from seconds (int, Fraction, decimal string, or float via its repr)."""
        if isinstance(seconds, float):
            seconds = str(seconds)
        return cls(Fraction(seconds))

    @classmethod
    def from_milliseconds(cls, milliseconds: Union[Number, str]) -> "Timestamp":
        """Build a timestamp from milliseconds (int, Fraction, decimal string, or float via its repr)."""
        if isinstance(milliseconds, float):
            milliseconds = str(milliseconds)
        return cls(Fraction(milliseconds) / 1000)

    @classmethod
    def zero(cls) -> "Timestamp":
        return cls(Fraction(0))

    @property
    def seconds(self) -> float:
        """Approximate seconds, for display and logging only."""
        return float(self.value)

    @property
    def milliseconds(self) -> float:
        """Approximate milliseconds, for display and logging only."""
        return float(self.value * 1000)

    def half(self) -> "Timestamp":
        """Exactly half of this time value."""
        return Timestamp(self.value / 2)

    def __add__(self, other: "Timestamp") -> "Timestamp":
        if not isinstance(other, Timestamp):
            return NotImplemented
        return Timestamp(self.value + other.value)

    def __sub__(self, other: "Timestamp") -> "Timestamp":
        if not isinstance(other, Timestamp):
            return NotImplemented
        return Timestamp(self.value - other.value)

    def __repr__(self) -> str:
        return f"Timestamp({self.value.numerator}/{self.value.denominator}s)"

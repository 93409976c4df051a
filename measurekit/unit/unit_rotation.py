"""Rotational speed, the quotient of an angle by a time duration.

All rotational speeds are stored in radians per second. A rotational speed
is usually obtained by dividing an Angle by a ``datetime.timedelta``, and
multiplying it back by a duration yields an Angle.

Example:
    >>> from datetime import timedelta
    >>> speed = RotationalSpeed(60, RotationalSpeed.RevolutionPerMinute)
    >>> speed.to(RotationalSpeed.TurnPerSecond)
    Fraction(1, 1)
"""

from __future__ import annotations

import math
from datetime import timedelta
from fractions import Fraction
from types import MappingProxyType

from .unit_base import ScaleUnit
from .unit_measure import Measurement
from .unit_parser import number_rule

_TAU = Fraction(math.tau)


def duration_seconds(duration: timedelta) -> Fraction:
    """Return the exact number of seconds in a timedelta."""
    return Fraction(duration // timedelta(microseconds=1), 1_000_000)


class RotationalSpeed(Measurement):
    """Angular velocity. Arbitrary unit is radians per second."""

    __slots__ = ()

    IS_FAMILY_ROOT = True
    ARBITRARY_SYMBOL = "rad/s"
    DEFAULT_CODE = "RS"

    RadianPerSecond = ScaleUnit(1, "radian per second")
    DegreePerSecond = ScaleUnit(_TAU / 360, "degree per second")
    TurnPerSecond = ScaleUnit(_TAU, "turn per second")
    RevolutionPerMinute = ScaleUnit(_TAU / 60, "revolution per minute")

    UNIT_CODES = MappingProxyType(
        {
            "RS": (RadianPerSecond, "rad/s"),
            "DS": (DegreePerSecond, "°/s"),
            "TS": (TurnPerSecond, "τ/s"),
            "RPM": (RevolutionPerMinute, "rpm"),
        }
    )

    @classmethod
    def _parse_rules(cls):
        return (
            number_rule(r"rad/s|radians? per second", lambda v: cls(v, cls.RadianPerSecond)),
            number_rule(r"°/s|deg/s|degrees? per second", lambda v: cls(v, cls.DegreePerSecond)),
            number_rule(r"τ/s|turns?/s|turns? per second|rps", lambda v: cls(v, cls.TurnPerSecond)),
            number_rule(r"rpm|revolutions? per minute", lambda v: cls(v, cls.RevolutionPerMinute)),
        )

    def __mul__(self, k):
        """Scale by a number, or integrate over a duration into an Angle."""
        if isinstance(k, timedelta):
            from .unit_angle import Angle

            return Angle.from_arbitrary(self.arbitrary * duration_seconds(k))
        return super().__mul__(k)

    def __rmul__(self, k):
        return self.__mul__(k)

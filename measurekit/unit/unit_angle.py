"""Angular unit definitions for orientation and rotation.

This module provides the Angle dimension, a 2D cartesian angle. All angles
are internally stored in radians, while supporting input and display in
degrees, gradians and turns. By most conventions 0 is aligned with the x axis.

Angles may be normalized into one full turn, ``[0, 2π)``, using true
(non-negative) modulo arithmetic. The 2π used throughout is the exact
rational value of ``math.tau``.

Classes:
    Angle: Angle measurement with radian, degree, gradian and turn units.

Example:
    >>> heading = Angle(450, Angle.Degree, normalize=True)
    >>> print(heading.to_string("D_F1"))  # "90.0°"
    >>> bearing = Angle.atan2(1, 1)  # π/4, always normalized
"""

from __future__ import annotations

import math
from datetime import timedelta
from fractions import Fraction
from types import MappingProxyType

from .unit_base import ScaleUnit
from .unit_measure import Measurement
from .unit_parser import number_rule
from .unit_rotation import RotationalSpeed, duration_seconds

PI = Fraction(math.pi)
TAU = Fraction(math.tau)


class Angle(Measurement):
    """Angular measurement. Arbitrary unit is radians.

    Attributes:
        Radian: 1/2π of a full turn.
        Degree: 1/360 of a full turn.
        Gradian: 1/400 of a full turn.
        Turn: One full turn, the only standard unit that is not normalized.
        RightAngle: 1/4 of a full turn.
    """

    __slots__ = ()

    IS_FAMILY_ROOT = True
    ARBITRARY_SYMBOL = "rad"
    DEFAULT_CODE = "R"

    Radian = ScaleUnit(1, "radian")
    Degree = ScaleUnit(PI / 180, "degree")
    Gradian = ScaleUnit(PI / 200, "gradian")
    Turn = ScaleUnit(TAU, "turn")
    RightAngle = ScaleUnit(PI / 2, "right angle")

    UNIT_CODES = MappingProxyType(
        {
            "R": (Radian, "rad"),
            "D": (Degree, "°"),
            "G": (Gradian, "gon"),
            "T": (Turn, "τ"),
        }
    )

    def __init__(self, value, unit=None, normalize: bool = False):
        """Create an angle.

        Args:
            value: Numeric value in the unit's scale.
            unit: Unit of the value; radians when omitted.
            normalize: Reduce the angle into ``[0, 2π)`` with modulo arithmetic.
        """
        super().__init__(value, unit)
        if normalize:
            object.__setattr__(self, "_arbitrary", self.arbitrary % TAU)

    @classmethod
    def _parse_rules(cls):
        return (
            number_rule(r"turns?|t|τ", lambda v: cls(v, cls.Turn)),
            number_rule(r"°|degrees?|d", lambda v: cls(v, cls.Degree)),
            number_rule(r"rad|㎭|radians?|c|r", lambda v: cls(v, cls.Radian)),
            number_rule(r"grad|g|gradians?|gon", lambda v: cls(v, cls.Gradian)),
        )

    @property
    def is_normalized(self) -> bool:
        """Whether the angle lies within one full turn, ``[0, 2π)``."""
        return 0 <= self.arbitrary < TAU

    def normalize(self) -> Angle:
        """Return the equivalent angle within ``[0, 2π)``."""
        if self.is_normalized:
            return self
        return type(self).from_arbitrary(self.arbitrary % TAU)

    # -------------------------------- Trigonometry --------------------------------
    @classmethod
    def asin(cls, x: float) -> Angle:
        return cls(math.asin(x))

    @classmethod
    def acos(cls, x: float) -> Angle:
        return cls(math.acos(x))

    @classmethod
    def atan(cls, y: float, x: float | None = None) -> Angle:
        """Arctangent of ``y``, or of ``y / x`` by quadrant when ``x`` is given.

        Only the two-argument form is normalized.
        """
        if x is not None:
            return cls.atan2(y, x)
        return cls(math.atan(y))

    @classmethod
    def atan2(cls, y: float, x: float) -> Angle:
        """Angle of the vector ``(x, y)``, always normalized."""
        return cls(math.atan2(y, x), normalize=True)

    def sin(self) -> float:
        return math.sin(self.arbitrary)

    def cos(self) -> float:
        return math.cos(self.arbitrary)

    def tan(self) -> float:
        return math.tan(self.arbitrary)

    def __truediv__(self, other):
        """Divide by a scalar, an angle, or a duration (giving a RotationalSpeed)."""
        if isinstance(other, timedelta):
            return RotationalSpeed.from_arbitrary(self.arbitrary / duration_seconds(other))
        return super().__truediv__(other)

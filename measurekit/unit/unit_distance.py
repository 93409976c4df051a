"""Distance and length unit definitions.

All lengths are internally stored in meters, while supporting input and
display in metric, imperial and astronomical scales.

Classes:
    Length: Length measurement.

Example:
    >>> flight_range = Length.parse("25.5km")
    >>> flight_range.to(Length.Meter)
    Fraction(25500, 1)
    >>> print(format(flight_range, "MI_F2"))  # "15.84mi"
"""

from __future__ import annotations

import math
from fractions import Fraction
from types import MappingProxyType

from .unit_base import ScaleUnit
from .unit_measure import Measurement
from .unit_parser import number_rule


class Length(Measurement):
    """Length measurement. Arbitrary unit is meters."""

    __slots__ = ()

    IS_FAMILY_ROOT = True
    ARBITRARY_SYMBOL = "m"
    DEFAULT_CODE = "M"

    Meter = ScaleUnit(1, "meter")
    CentiMeter = ScaleUnit(Fraction(1, 100), "centimeter")
    MilliMeter = ScaleUnit(Fraction(1, 1000), "millimeter")
    KiloMeter = ScaleUnit(1000, "kilometer")
    Foot = ScaleUnit(Fraction("0.3048"), "foot")
    Yard = Foot.scaled(3, "yard")
    Mile = Yard.scaled(1760, "mile")
    LightSecond = ScaleUnit(299_792_458, "light-second")
    LightYear = ScaleUnit(9_460_730_472_580_800, "light-year")
    AstronomicalUnit = ScaleUnit(149_597_870_700, "astronomical unit")
    Parsec = AstronomicalUnit.scaled(648_000 / Fraction(math.pi), "parsec")

    UNIT_CODES = MappingProxyType(
        {
            "M": (Meter, "m"),
            "CM": (CentiMeter, "cm"),
            "MM": (MilliMeter, "mm"),
            "KM": (KiloMeter, "km"),
            "F": (Foot, "ft"),
            "Y": (Yard, "yd"),
            "MI": (Mile, "mi"),
            "LS": (LightSecond, "ls"),
            "LY": (LightYear, "ly"),
            "P": (Parsec, "pc"),
            "AU": (AstronomicalUnit, "au"),
        }
    )

    @classmethod
    def _parse_rules(cls):
        return (
            number_rule(r"m|meters?", lambda v: cls(v, cls.Meter)),
            number_rule(r"cm|centimeters?", lambda v: cls(v, cls.CentiMeter)),
            number_rule(r"mm|millimeters?", lambda v: cls(v, cls.MilliMeter)),
            number_rule(r"km|kilometers?", lambda v: cls(v, cls.KiloMeter)),
            number_rule(r"ft|foot|feet", lambda v: cls(v, cls.Foot)),
            number_rule(r"yd|yards?", lambda v: cls(v, cls.Yard)),
            number_rule(r"mi|miles?", lambda v: cls(v, cls.Mile)),
            number_rule(r"au|astronomical units?", lambda v: cls(v, cls.AstronomicalUnit)),
            number_rule(r"ls|light ?seconds?", lambda v: cls(v, cls.LightSecond)),
            number_rule(r"ly|light ?years?", lambda v: cls(v, cls.LightYear)),
            number_rule(r"pc|parsecs?", lambda v: cls(v, cls.Parsec)),
        )

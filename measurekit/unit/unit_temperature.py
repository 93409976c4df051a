"""Absolute temperatures and temperature differences.

Both dimensions store kelvin. Absolute temperature scales are affine
(``DeltaUnit``): 0 °C is 273.15 K. Temperature differences are pure scales
(``ScaleUnit``): a Celsius degree of difference is exactly a kelvin, and a
Fahrenheit degree of difference is 5/9 of a kelvin.

The two dimensions combine as follows:

- Temperature - Temperature -> TemperatureDelta
- Temperature ± TemperatureDelta -> Temperature
- TemperatureDelta + Temperature -> Temperature

Absolute temperatures cannot be negated, scaled or added to each other.

Example:
    >>> delta = Temperature(0, Temperature.Kelvin) - Temperature(0, Temperature.Celsius)
    >>> delta.arbitrary
    Fraction(-5463, 20)
"""

from __future__ import annotations

from fractions import Fraction
from types import MappingProxyType

from measurekit.errors import InvalidValueError

from .unit_base import DeltaUnit, ScaleUnit
from .unit_measure import Measurement
from .unit_parser import number_rule

_FIVE_NINTHS = Fraction(5, 9)


class TemperatureDelta(Measurement):
    """Difference between two temperatures. Arbitrary unit is kelvin."""

    __slots__ = ()

    IS_FAMILY_ROOT = True
    ARBITRARY_SYMBOL = "K"
    DEFAULT_CODE = "C"

    Kelvin = ScaleUnit(1, "kelvin")
    Celsius = Kelvin
    Fahrenheit = ScaleUnit(_FIVE_NINTHS, "fahrenheit")

    UNIT_CODES = MappingProxyType(
        {
            "K": (Kelvin, "K"),
            "F": (Fahrenheit, "°F"),
            "C": (Celsius, "°C"),
        }
    )

    @classmethod
    def _parse_rules(cls):
        return (
            number_rule(r"K|k|kelvin", lambda v: cls(v, cls.Kelvin)),
            number_rule(r"°F|F|f|fahrenheit", lambda v: cls(v, cls.Fahrenheit)),
            number_rule(r"°C|C|c|celsius", lambda v: cls(v, cls.Celsius)),
        )


class Temperature(Measurement):
    """Absolute temperature. Arbitrary unit is kelvin, never negative."""

    __slots__ = ()

    IS_FAMILY_ROOT = True
    ARBITRARY_SYMBOL = "K"
    DEFAULT_CODE = "C"

    Kelvin = ScaleUnit(1, "kelvin")
    Celsius = DeltaUnit(1, Fraction("273.15"), "celsius")
    Fahrenheit = DeltaUnit(_FIVE_NINTHS, Fraction("459.67") * _FIVE_NINTHS, "fahrenheit")

    UNIT_CODES = MappingProxyType(
        {
            "K": (Kelvin, "K"),
            "F": (Fahrenheit, "°F"),
            "C": (Celsius, "°C"),
        }
    )

    @classmethod
    def _validate(cls, arbitrary):
        if arbitrary < 0:
            msg = f"temperature below absolute zero: {float(arbitrary):g} K"
            raise InvalidValueError(msg)
        return arbitrary

    @classmethod
    def _parse_rules(cls):
        return (
            number_rule(r"K|k|kelvin", lambda v: cls(v, cls.Kelvin)),
            number_rule(r"°F|F|f|fahrenheit", lambda v: cls(v, cls.Fahrenheit)),
            number_rule(r"°C|C|c|celsius", lambda v: cls(v, cls.Celsius)),
        )

    def __add__(self, other):
        if isinstance(other, TemperatureDelta):
            return type(self).from_arbitrary(self.arbitrary + other.arbitrary)
        return NotImplemented

    def __radd__(self, other):
        return self.__add__(other)

    def __sub__(self, other):
        if isinstance(other, TemperatureDelta):
            return type(self).from_arbitrary(self.arbitrary - other.arbitrary)
        if isinstance(other, Temperature):
            return TemperatureDelta.from_arbitrary(self.arbitrary - other.arbitrary)
        return NotImplemented

    def __neg__(self):
        msg = "absolute temperatures cannot be negated"
        raise TypeError(msg)

    def __mul__(self, k):
        return NotImplemented

    def __rmul__(self, k):
        return NotImplemented

    def __truediv__(self, other):
        return NotImplemented

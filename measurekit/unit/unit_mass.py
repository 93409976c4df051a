"""Mass unit definitions.

All masses are internally stored in kilograms.

Example:
    >>> Mass.Pound.to_arbitrary(1)
    Fraction(45359237, 100000000)
"""

from __future__ import annotations

from fractions import Fraction
from types import MappingProxyType

from .unit_base import ScaleUnit
from .unit_measure import Measurement
from .unit_parser import number_rule


class Mass(Measurement):
    """Mass measurement. Arbitrary unit is kilograms."""

    __slots__ = ()

    IS_FAMILY_ROOT = True
    ARBITRARY_SYMBOL = "kg"
    DEFAULT_CODE = "K"

    KiloGram = ScaleUnit(1, "kilogram")
    Gram = ScaleUnit(Fraction(1, 1000), "gram")
    Milligram = ScaleUnit(Fraction(1, 1_000_000), "milligram")
    Tonne = ScaleUnit(1000, "tonne")
    Pound = ScaleUnit(Fraction("0.45359237"), "pound")
    Ounce = Gram.scaled(Fraction("28.349523125"), "ounce")

    UNIT_CODES = MappingProxyType(
        {
            "K": (KiloGram, "kg"),
            "M": (Milligram, "mg"),
            "G": (Gram, "g"),
            "T": (Tonne, "t"),
            "O": (Ounce, "oz"),
            "L": (Pound, "lb"),
        }
    )

    @classmethod
    def _parse_rules(cls):
        # "k" alone is accepted as kilograms
        return (
            number_rule(r"kg?|kilograms?", lambda v: cls(v, cls.KiloGram)),
            number_rule(r"g|grams?", lambda v: cls(v, cls.Gram)),
            number_rule(r"mg|milligrams?", lambda v: cls(v, cls.Milligram)),
            number_rule(r"t|tons?|tonnes?", lambda v: cls(v, cls.Tonne)),
            number_rule(r"oz|ounces?", lambda v: cls(v, cls.Ounce)),
            number_rule(r"lb|pounds?", lambda v: cls(v, cls.Pound)),
        )

"""Rational-valued measurements with exact unit conversion and type safety.

This module provides the Measurement class, the single generic
implementation behind every dimension (Length, Mass, Angle, ...). A
measurement stores its value as an exact ``Fraction`` in the dimension's
canonical "arbitrary" unit and only combines with measurements of its own
dimension family.

Each dimension subclass supplies a small descriptor:

- ``IS_FAMILY_ROOT``: marks the class as the root of a new dimension.
- ``ARBITRARY_SYMBOL``: symbol of the canonical unit.
- ``UNIT_CODES``: named unit table, code -> (unit, display symbol).
- ``DEFAULT_CODE``: unit code used when a format spec names none.
- ``SYMBOL_FIRST``: whether the symbol precedes the number when rendered.
- ``_parse_rules()``: the ordered rules of the dimension's parsing funnel.

Key Features:
- Exact conversion through ScaleUnit / DeltaUnit
- Type-safe operations between measurements of the same family
- Arithmetic with plain scalars and other measurements
- Parsing from human-readable strings and formatted output

Example:
    >>> class Length(Measurement):
    ...     IS_FAMILY_ROOT = True
    ...     Meter = ScaleUnit(1, "meter")
    ...     KiloMeter = ScaleUnit(1000, "kilometer")
    ...
    >>> distance = Length(5, Length.KiloMeter)
    >>> distance.to(Length.Meter)
    Fraction(5000, 1)
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from functools import cache
from types import MappingProxyType
from typing import ClassVar

import numpy as np

from measurekit.config import ArrayLike, Number

from .unit_base import Dimensioned, Unit, as_rational, is_scalar
from .unit_format import lookup_unit, render, split_format_spec
from .unit_parser import Funnel, ParserRule


@cache
def _funnel_for(cls: type[Measurement]) -> Funnel:
    return Funnel(*cls._parse_rules())


class Measurement(Dimensioned):
    """Base class for immutable, exact physical quantities.

    Attributes:
        ROOT (ClassVar[type[Measurement]]): Root class defining the dimension.
        ARBITRARY_SYMBOL (ClassVar[str]): Symbol of the canonical unit.
        UNIT_CODES (ClassVar[Mapping]): Unit code -> (unit, display symbol).
        DEFAULT_CODE (ClassVar[str]): Code used for an empty format spec.
        SYMBOL_FIRST (ClassVar[bool]): Render the symbol before the number.
    """

    __slots__ = ("_arbitrary",)

    ARBITRARY_SYMBOL: ClassVar[str] = ""
    UNIT_CODES: ClassVar[Mapping[str, tuple[Unit, str]]] = MappingProxyType({})
    DEFAULT_CODE: ClassVar[str] = ""
    SYMBOL_FIRST: ClassVar[bool] = False

    def __init__(self, value: Number, unit: Unit | None = None):
        """Create a measurement from a value expressed in ``unit``.

        Args:
            value: Numeric value in the unit's scale.
            unit: Unit the value is expressed in. When omitted, the value is
                taken as the arbitrary (canonical unit) value.

        Raises:
            InvalidValueError: If the value is not finite or breaks the
                dimension's domain.
        """
        arbitrary = as_rational(value) if unit is None else unit.to_arbitrary(value)
        object.__setattr__(self, "_arbitrary", self._validate(arbitrary))

    @classmethod
    def from_arbitrary(cls, arbitrary):
        """Create a measurement directly from its arbitrary value."""
        obj = cls.__new__(cls)
        object.__setattr__(obj, "_arbitrary", cls._validate(as_rational(arbitrary)))
        return obj

    @classmethod
    def zero(cls):
        return cls.from_arbitrary(0)

    @classmethod
    def _validate(cls, arbitrary):
        """Check a dimension's domain invariant; returns the arbitrary value."""
        return arbitrary

    def __setattr__(self, name, value):
        msg = f"{type(self).__name__} is immutable"
        raise AttributeError(msg)

    def __delattr__(self, name):
        msg = f"{type(self).__name__} is immutable"
        raise AttributeError(msg)

    def __reduce__(self):
        return (type(self).from_arbitrary, (self._arbitrary,))

    @property
    def arbitrary(self):
        """The exact value in the dimension's canonical unit."""
        return self._arbitrary

    # -------------------------------- Units --------------------------------
    @classmethod
    def unit_dictionary(cls) -> Mapping[str, tuple[Unit, str]]:
        """Return the named unit table used for formatting."""
        return cls.UNIT_CODES

    @classmethod
    def resolve_unit(cls, unit: Unit | str | None = None) -> Unit:
        """Return ``unit`` itself, the unit named by a code, or the default unit.

        Raises:
            UnknownUnitError: If a code is not in the unit dictionary.
        """
        if unit is None or isinstance(unit, str):
            return lookup_unit(cls.unit_dictionary(), unit or "", cls.DEFAULT_CODE, cls.__name__)[0]
        return unit

    def to(self, unit: Unit | str):
        """Return the exact value of this measurement expressed in ``unit``.

        Args:
            unit: A unit object or a code of the unit dictionary.
        """
        return self.resolve_unit(unit).from_arbitrary(self._arbitrary)

    def __float__(self) -> float:
        return float(self._arbitrary)

    @classmethod
    def as_array(cls, measurements: Iterable[Measurement], unit: Unit | str | None = None) -> np.ndarray:
        """Convert measurements to a float array of magnitudes in ``unit``.

        Raises:
            TypeError: If a measurement belongs to another dimension.
        """
        target = cls.resolve_unit(unit)
        values = []
        for item in measurements:
            cls._check_same_root(type(item))
            values.append(float(target.from_arbitrary(item._arbitrary)))
        return np.asarray(values, dtype=np.float64)

    @classmethod
    def from_values(cls, values: ArrayLike, unit: Unit | str | None = None) -> list:
        """Build one measurement per element of a scalar or array of values."""
        source = cls.resolve_unit(unit)
        return [cls(value, source) for value in np.asarray(values).ravel().tolist()]

    # -------------------------------- Parsing --------------------------------
    @classmethod
    def _parse_rules(cls) -> tuple[ParserRule, ...]:
        return ()

    @classmethod
    def parsers(cls) -> Funnel:
        """Return the dimension's parsing funnel, built once per class."""
        return _funnel_for(cls)

    @classmethod
    def parse(cls, text: str):
        """Parse a human-readable string such as ``"5km"``.

        Raises:
            NoMatchingRuleError: If no parsing rule matches the text.
        """
        return cls.parsers().process(text)

    # -------------------------------- Arithmetic Operations --------------------------------
    def __neg__(self):
        return type(self).from_arbitrary(-self._arbitrary)

    def __pos__(self):
        return self

    def __abs__(self):
        return type(self).from_arbitrary(abs(self._arbitrary))

    def __add__(self, other):
        """Add two measurements of the same family."""
        if not isinstance(other, Measurement) or not self._same_root(type(other)):
            return NotImplemented
        return type(self).from_arbitrary(self._arbitrary + other._arbitrary)

    def __sub__(self, other):
        """Subtract two measurements of the same family."""
        if not isinstance(other, Measurement) or not self._same_root(type(other)):
            return NotImplemented
        return type(self).from_arbitrary(self._arbitrary - other._arbitrary)

    def __mul__(self, k):
        """Multiply by a plain scalar."""
        if not is_scalar(k):
            return NotImplemented
        return type(self).from_arbitrary(self._arbitrary * as_rational(k))

    def __rmul__(self, k):
        return self.__mul__(k)

    def __truediv__(self, other):
        """Divide by a scalar, or by a measurement of the same family.

        Dividing two measurements yields their dimensionless ratio as a
        ``Fraction``.

        Raises:
            ZeroDivisionError: If the divisor is zero.
            TypeError: If the divisor belongs to another family.
        """
        if is_scalar(other):
            k = as_rational(other)
            if k == 0:
                msg = f"{type(self).__name__} divided by zero"
                raise ZeroDivisionError(msg)
            return type(self).from_arbitrary(self._arbitrary / k)
        if isinstance(other, Measurement):
            self._check_same_root(type(other))
            return self._arbitrary / other._arbitrary
        return NotImplemented

    # -------------------------------- Comparison --------------------------------
    def __eq__(self, other) -> bool:
        if not isinstance(other, Measurement):
            return NotImplemented
        return self._same_root(type(other)) and self._arbitrary == other._arbitrary

    def __ne__(self, other) -> bool:
        result = self.__eq__(other)
        return result if result is NotImplemented else not result

    def _compare_key(self, other):
        self._check_same_root(type(other))
        return other._arbitrary

    def __lt__(self, other) -> bool:
        if not isinstance(other, Measurement):
            return NotImplemented
        return self._arbitrary < self._compare_key(other)

    def __le__(self, other) -> bool:
        if not isinstance(other, Measurement):
            return NotImplemented
        return self._arbitrary <= self._compare_key(other)

    def __gt__(self, other) -> bool:
        if not isinstance(other, Measurement):
            return NotImplemented
        return self._arbitrary > self._compare_key(other)

    def __ge__(self, other) -> bool:
        if not isinstance(other, Measurement):
            return NotImplemented
        return self._arbitrary >= self._compare_key(other)

    def __hash__(self) -> int:
        return hash((self.ROOT, self._arbitrary))

    # -------------------------------- Formatting --------------------------------
    def to_string(self, spec: str | None = "") -> str:
        """Render the measurement with a ``CODE_numberformat_symbol`` spec.

        Examples of specs: ``""`` (default unit), ``"KM"``, ``"KM_F2"``.

        Raises:
            UnknownUnitError: If the unit code is not in the unit dictionary.
        """
        code, number_format = split_format_spec(spec)
        unit, symbol = lookup_unit(self.unit_dictionary(), code, self.DEFAULT_CODE, type(self).__name__)
        value = float(unit.from_arbitrary(self._arbitrary))
        return render(value, symbol, number_format, self.SYMBOL_FIRST)

    def __format__(self, spec: str) -> str:
        return self.to_string(spec)

    def __str__(self) -> str:
        return self.to_string("")

    def __repr__(self) -> str:
        return f"{self} (= {float(self._arbitrary):g} {self.ARBITRARY_SYMBOL})"

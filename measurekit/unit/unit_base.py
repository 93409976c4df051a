"""Unit abstraction and dimension family foundation.

This module provides the two building blocks every dimension is made of:

- Units: ``ScaleUnit`` (pure multiplicative factor, zero preserving) and
  ``DeltaUnit`` (affine, factor plus offset). Both convert values to and from
  the dimension's canonical "arbitrary" unit exactly, using rational numbers.
- Dimension families: the ``Dimensioned`` base assigns a ROOT class to every
  subclass, so that operations are only allowed between measurements of the
  same physical quantity.

Key Concepts:
- Arbitrary value: a value expressed in the dimension's canonical unit.
- ROOT Class: Each dimension has a root class that defines the family.
- IS_FAMILY_ROOT: Boolean flag marking the root class of each family.

Example:
    >>> km = ScaleUnit(1000, "kilometer")
    >>> km.to_arbitrary(5)
    Fraction(5000, 1)
    >>> celsius = DeltaUnit(1, Fraction("273.15"), "celsius")
    >>> celsius.to_arbitrary(0)
    Fraction(5463, 20)
"""

from __future__ import annotations

import math
import numbers
import re
from dataclasses import dataclass
from decimal import Decimal
from fractions import Fraction
from typing import ClassVar, Protocol, runtime_checkable

from measurekit.config import Number
from measurekit.errors import InvalidValueError

# largest decimal exponent accepted, well past the float range
_MAX_EXPONENT = 400
_STRING_EXPONENT = re.compile(r"[eE][-+]?([\d_]+)\s*\Z")


def _check_exponent(exponent: int, value) -> None:
    if abs(exponent) > _MAX_EXPONENT:
        msg = f"exponent out of range: {value!r}"
        raise InvalidValueError(msg)


def as_rational(value: Number | str) -> Fraction:
    """Convert a plain number to an exact ``Fraction``.

    Floats are taken at their exact binary value. Strings are read as
    decimal or scientific literals, so ``"0.1"`` becomes ``1/10``.

    Raises:
        InvalidValueError: If the value is NaN, infinite, has a decimal exponent
            beyond ±400, or is an unreadable string.
        TypeError: If the value is not a number.
    """
    if isinstance(value, Fraction):
        return value
    if isinstance(value, bool):
        msg = f"booleans are not numeric values: {value!r}"
        raise TypeError(msg)
    if isinstance(value, numbers.Integral):
        return Fraction(int(value))
    if isinstance(value, numbers.Rational):
        return Fraction(value.numerator, value.denominator)
    if isinstance(value, Decimal):
        if not value.is_finite():
            msg = f"non-finite value: {value!r}"
            raise InvalidValueError(msg)
        _check_exponent(value.adjusted(), value)
        return Fraction(value)
    if isinstance(value, numbers.Real):
        value = float(value)
        if not math.isfinite(value):
            msg = f"non-finite value: {value!r}"
            raise InvalidValueError(msg)
        return Fraction(value)
    if isinstance(value, str):
        match = _STRING_EXPONENT.search(value)
        if match is not None:
            digits = match.group(1).replace("_", "").lstrip("0") or "0"
            if len(digits) > len(str(_MAX_EXPONENT)):
                msg = f"exponent out of range: {value!r}"
                raise InvalidValueError(msg)
            _check_exponent(int(digits), value)
        try:
            return Fraction(value)
        except ValueError as exc:
            msg = f"not a number: {value!r}"
            raise InvalidValueError(msg) from exc
    msg = f"expected a number, got {type(value).__name__}"
    raise TypeError(msg)


def is_scalar(value) -> bool:
    """Return True if ``value`` can act as a plain scalar multiplier."""
    return not isinstance(value, bool) and isinstance(value, (numbers.Real, Decimal))


@runtime_checkable
class Unit(Protocol):
    """Conversion contract shared by all units.

    ``from_arbitrary(to_arbitrary(v)) == v`` holds exactly for every rational v.
    """

    def to_arbitrary(self, value) -> Fraction: ...

    def from_arbitrary(self, arbitrary) -> Fraction: ...


@dataclass(frozen=True, slots=True)
class ScaleUnit:
    """A unit related to the canonical unit by a multiplicative factor.

    Attributes:
        factor: Arbitrary value of one of this unit.
        name: Human readable name, for display only.
    """

    factor: Fraction
    name: str = ""

    def __post_init__(self):
        factor = as_rational(self.factor)
        if factor == 0:
            msg = f"scale unit {self.name!r} needs a non-zero factor"
            raise InvalidValueError(msg)
        object.__setattr__(self, "factor", factor)

    def to_arbitrary(self, value) -> Fraction:
        return as_rational(value) * self.factor

    def from_arbitrary(self, arbitrary) -> Fraction:
        return as_rational(arbitrary) / self.factor

    def scaled(self, k, name: str = "") -> ScaleUnit:
        """Return a new scale unit worth ``k`` of this one."""
        return ScaleUnit(self.factor * as_rational(k), name)


@dataclass(frozen=True, slots=True)
class DeltaUnit:
    """A unit related to the canonical unit by an affine transform.

    ``arbitrary = value * factor + offset``. Zero does not map to zero, which
    is what absolute temperature scales such as Celsius need.

    Attributes:
        factor: Arbitrary size of one step of this unit.
        offset: Arbitrary value of this unit's zero.
        name: Human readable name, for display only.
    """

    factor: Fraction
    offset: Fraction
    name: str = ""

    def __post_init__(self):
        factor = as_rational(self.factor)
        if factor == 0:
            msg = f"delta unit {self.name!r} needs a non-zero factor"
            raise InvalidValueError(msg)
        object.__setattr__(self, "factor", factor)
        object.__setattr__(self, "offset", as_rational(self.offset))

    def to_arbitrary(self, value) -> Fraction:
        return as_rational(value) * self.factor + self.offset

    def from_arbitrary(self, arbitrary) -> Fraction:
        return (as_rational(arbitrary) - self.offset) / self.factor


class Dimensioned:
    """Base class for all measurement types.

    Implements automatic ROOT class assignment. Every dimension (Length,
    Mass, ...) sets ``IS_FAMILY_ROOT = True``; subclasses of a dimension
    inherit its family and may be mixed with it freely.

    Attributes:
        ROOT (ClassVar[type[Dimensioned]]): Root class defining the family.
        IS_FAMILY_ROOT (ClassVar[bool]): Indicates if this class is a root.
    """

    __slots__ = ()
    __array_priority__ = 1000

    ROOT: ClassVar[type[Dimensioned]]
    IS_FAMILY_ROOT: ClassVar[bool] = False

    def __init_subclass__(cls, **kwargs):
        """Automatically set ROOT class for subclasses.

        The ROOT is the first ancestor with IS_FAMILY_ROOT=True, or the class
        itself if it is flagged or none is found.
        """
        super().__init_subclass__(**kwargs)
        if "ROOT" in cls.__dict__ and cls.ROOT is not None:
            return

        if cls.__dict__.get("IS_FAMILY_ROOT", False):
            cls.ROOT = cls
            return

        for base in cls.mro()[1:]:
            if base.__dict__.get("IS_FAMILY_ROOT", False):
                cls.ROOT = base
                return

        cls.ROOT = cls

    @classmethod
    def _same_root(cls, other_type: type) -> bool:
        return getattr(other_type, "ROOT", None) is cls.ROOT

    @classmethod
    def _check_same_root(cls, other_type: type):
        """Check that another type belongs to the same dimension family.

        Raises:
            TypeError: If the types belong to different families.
        """
        if not cls._same_root(other_type):
            other = getattr(other_type, "ROOT", other_type)
            msg = f"cannot combine {cls.ROOT.__name__} with {other.__name__}"
            raise TypeError(msg)

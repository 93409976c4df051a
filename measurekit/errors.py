"""Exception types raised by measurekit.

Construction, parsing and formatting errors propagate to the caller.
ConversionFailure is only ever reported inside a refresh outcome.
"""

from __future__ import annotations


class MeasurementError(Exception):
    """Base class for all measurekit errors."""


class InvalidValueError(MeasurementError, ValueError):
    """A value cannot be represented, or would violate a dimension's domain."""


class NoMatchingRuleError(MeasurementError, ValueError):
    """No rule of a parsing funnel matched the input text."""

    def __init__(self, text: str):
        super().__init__(f"no parsing rule matches {text!r}")
        self.text = text


class UnknownUnitError(MeasurementError, LookupError):
    """A format string named a unit code missing from the unit dictionary."""

    def __init__(self, code: str, dimension: str = ""):
        where = f" for {dimension}" if dimension else ""
        super().__init__(f"unknown unit code {code!r}{where}")
        self.code = code
        self.dimension = dimension


class ConversionFailure(MeasurementError):
    """Exchange rates could not be fetched, read or parsed."""

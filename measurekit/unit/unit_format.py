"""Unit dictionary lookup and string rendering of measurements.

Format specs have the shape ``CODE_numberformat_symbol``:

- ``CODE`` selects an entry of the dimension's unit dictionary; an empty code
  selects the dimension's default unit.
- ``numberformat`` is a standard numeric format in the .NET style (``F2``,
  ``N0``, ``E3``, ``G5``, ``P1``, ``R``). Anything else is handed to Python's
  own format mini-language, so ``.3f`` works too. Empty means the shortest
  positional rendering of the value.
- The trailing ``symbol`` part is accepted and ignored.

Example:
    >>> render(14.0, "$", "F2", symbol_first=True)
    '$14.00'
    >>> render(5000.0, "m")
    '5000m'
"""

from __future__ import annotations

import re
from collections.abc import Mapping

from numpy import format_float_positional

from measurekit.errors import UnknownUnitError

from .unit_base import Unit

_STANDARD_FORMAT = re.compile(r"([FfNnEeGgPpRr])(\d*)")

# precision used by a standard format that gives no digits
_DEFAULT_DIGITS = {"F": 2, "N": 2, "E": 6, "P": 2}


def split_format_spec(spec: str | None) -> tuple[str, str]:
    """Split a format spec into its unit code and numeric format."""
    code, _, rest = (spec or "").partition("_")
    number_format, _, _ = rest.partition("_")
    return code, number_format


def lookup_unit(
    dictionary: Mapping[str, tuple[Unit, str]],
    code: str,
    default_code: str,
    dimension: str = "",
) -> tuple[Unit, str]:
    """Return the ``(unit, symbol)`` pair for ``code``.

    Raises:
        UnknownUnitError: If the code is not in the dictionary.
    """
    key = code or default_code
    try:
        return dictionary[key]
    except KeyError:
        raise UnknownUnitError(key, dimension) from None


def format_number(value: float, number_format: str = "") -> str:
    """Render a float according to a numeric format string."""
    if not number_format:
        return format_float_positional(value, trim="-")
    match = _STANDARD_FORMAT.fullmatch(number_format)
    if match is None:
        return format(value, number_format)

    kind, digits = match.groups()
    upper = kind.upper()
    if upper == "R" or (upper == "G" and not digits):
        return format_float_positional(value, trim="-")
    precision = int(digits) if digits else _DEFAULT_DIGITS[upper]
    if upper == "F":
        return f"{value:.{precision}f}"
    if upper == "N":
        return f"{value:,.{precision}f}"
    if upper == "P":
        return f"{value:.{precision}%}"
    # E/e and G/g keep the case of the requested exponent marker
    return format(value, f".{precision}{kind}")


def render(value: float, symbol: str, number_format: str = "", symbol_first: bool = False) -> str:
    """Join a formatted number and a unit symbol."""
    number = format_number(value, number_format)
    return f"{symbol}{number}" if symbol_first else f"{number}{symbol}"

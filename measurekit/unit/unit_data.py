"""Digital data size units.

All data sizes are internally stored in mebibytes (2**20 bytes). Binary
(IEC, powers of 1024) and decimal (SI, powers of 1000) multiples are
provided for both bytes and bits.

Parsing is case-sensitive: a lowercase ``b`` means bits and an uppercase
``B`` means bytes, so ``"8b"`` and ``"1B"`` are the same size.

Example:
    >>> DataSize.parse("1 KiB").arbitrary
    Fraction(1, 1024)
    >>> print(DataSize(1536, DataSize.Kibibyte))  # "1.5MiB"
"""

from __future__ import annotations

from fractions import Fraction
from functools import partial
from types import MappingProxyType

from .unit_base import ScaleUnit
from .unit_measure import Measurement
from .unit_parser import number_rule

_EIGHTH = Fraction(1, 8)

# (tokens, unit attribute) in matching order
_RULE_TABLE = (
    (r"b|bits?", "Bit"),
    (r"B|bytes?", "Byte"),
    # binary, bytes
    (r"KiB|kibibytes?", "Kibibyte"),
    (r"MiB|mebibytes?", "Mebibyte"),
    (r"GiB|gibibytes?", "Gibibyte"),
    (r"TiB|tebibytes?", "Tebibyte"),
    (r"PiB|pebibytes?", "Pebibyte"),
    (r"EiB|exbibytes?", "Exbibyte"),
    (r"ZiB|zebibytes?", "Zebibyte"),
    (r"YiB|yobibytes?", "Yobibyte"),
    # binary, bits
    (r"Kib|kibibits?", "Kibibit"),
    (r"Mib|mebibits?", "Mebibit"),
    (r"Gib|gibibits?", "Gibibit"),
    (r"Tib|tebibits?", "Tebibit"),
    (r"Pib|pebibits?", "Pebibit"),
    (r"Eib|exbibits?", "Exbibit"),
    (r"Zib|zebibits?", "Zebibit"),
    (r"Yib|yobibits?", "Yobibit"),
    # decimal, bytes
    (r"KB|kilobytes?", "Kilobyte"),
    (r"MB|megabytes?", "Megabyte"),
    (r"GB|gigabytes?", "Gigabyte"),
    (r"TB|terr?abytes?", "Terabyte"),
    (r"PB|pett?abytes?", "Petabyte"),
    (r"EB|exabytes?", "Exabyte"),
    (r"ZB|zettabytes?", "Zettabyte"),
    (r"YB|yottabytes?", "Yottabyte"),
    # decimal, bits
    (r"Kb|kilobits?", "Kilobit"),
    (r"Mb|megabits?", "Megabit"),
    (r"Gb|gigabits?", "Gigabit"),
    (r"Tb|terr?abits?", "Terabit"),
    (r"Pb|pett?abits?", "Petabit"),
    (r"Eb|exabits?", "Exabit"),
    (r"Zb|zettabits?", "Zettabit"),
    (r"Yb|yottabits?", "Yottabit"),
)


class DataSize(Measurement):
    """Amount of digital data. Arbitrary unit is mebibytes."""

    __slots__ = ()

    IS_FAMILY_ROOT = True
    ARBITRARY_SYMBOL = "MiB"
    DEFAULT_CODE = "M"

    Mebibyte = ScaleUnit(1, "mebibyte")
    Gibibyte = Mebibyte.scaled(1024, "gibibyte")
    Tebibyte = Gibibyte.scaled(1024, "tebibyte")
    Pebibyte = Tebibyte.scaled(1024, "pebibyte")
    Exbibyte = Pebibyte.scaled(1024, "exbibyte")
    Zebibyte = Exbibyte.scaled(1024, "zebibyte")
    Yobibyte = Zebibyte.scaled(1024, "yobibyte")

    Kibibyte = Mebibyte.scaled(Fraction(1, 1024), "kibibyte")
    Byte = Kibibyte.scaled(Fraction(1, 1024), "byte")
    Bit = Byte.scaled(_EIGHTH, "bit")

    Kibibit = Kibibyte.scaled(_EIGHTH, "kibibit")
    Mebibit = Mebibyte.scaled(_EIGHTH, "mebibit")
    Gibibit = Gibibyte.scaled(_EIGHTH, "gibibit")
    Tebibit = Tebibyte.scaled(_EIGHTH, "tebibit")
    Pebibit = Pebibyte.scaled(_EIGHTH, "pebibit")
    Exbibit = Exbibyte.scaled(_EIGHTH, "exbibit")
    Zebibit = Zebibyte.scaled(_EIGHTH, "zebibit")
    Yobibit = Yobibyte.scaled(_EIGHTH, "yobibit")

    Kilobyte = Byte.scaled(1000, "kilobyte")
    Megabyte = Kilobyte.scaled(1000, "megabyte")
    Gigabyte = Megabyte.scaled(1000, "gigabyte")
    Terabyte = Gigabyte.scaled(1000, "terabyte")
    Petabyte = Terabyte.scaled(1000, "petabyte")
    Exabyte = Petabyte.scaled(1000, "exabyte")
    Zettabyte = Exabyte.scaled(1000, "zettabyte")
    Yottabyte = Zettabyte.scaled(1000, "yottabyte")

    Kilobit = Kilobyte.scaled(_EIGHTH, "kilobit")
    Megabit = Megabyte.scaled(_EIGHTH, "megabit")
    Gigabit = Gigabyte.scaled(_EIGHTH, "gigabit")
    Terabit = Terabyte.scaled(_EIGHTH, "terabit")
    Petabit = Petabyte.scaled(_EIGHTH, "petabit")
    Exabit = Exabyte.scaled(_EIGHTH, "exabit")
    Zettabit = Zettabyte.scaled(_EIGHTH, "zettabit")
    Yottabit = Yottabyte.scaled(_EIGHTH, "yottabit")

    UNIT_CODES = MappingProxyType(
        {
            "b": (Bit, "b"),
            "B": (Byte, "B"),
            "K": (Kibibyte, "KiB"),
            "M": (Mebibyte, "MiB"),
            "G": (Gibibyte, "GiB"),
            "T": (Tebibyte, "TiB"),
            "P": (Pebibyte, "PiB"),
            "E": (Exbibyte, "EiB"),
            "Z": (Zebibyte, "ZiB"),
            "Y": (Yobibyte, "YiB"),
        }
    )

    @classmethod
    def _parse_rules(cls):
        return tuple(
            number_rule(tokens, partial(cls, unit=getattr(cls, name)))
            for tokens, name in _RULE_TABLE
        )

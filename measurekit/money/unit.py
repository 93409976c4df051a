"""Money, with live currency units.

Amounts are stored exactly in euros. The US dollar, new shekel and yen units
are not fixed: each lookup reads the currency table of the exchange-rate
holder in use, so conversions and formatting follow the latest refresh.
Amounts are rendered symbol first, as in ``$14.00``.

Example:
    >>> price = Money.parse("$14")
    >>> print(price.to_string("E_F2"))  # "€12.50" with the built-in rates
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import timedelta

from measurekit.unit import Measurement, Unit, number_rule, prefix_rule

from .rates import EURO, RefreshOutcome, current_rates


class Money(Measurement):
    """Amount of money. Arbitrary unit is the euro.

    The dollar, shekel and yen units are looked up in the live currency table
    every time they are used, so conversions follow the latest refresh while
    amounts already constructed keep their euro value.
    """

    __slots__ = ()

    IS_FAMILY_ROOT = True
    ARBITRARY_SYMBOL = "€"
    DEFAULT_CODE = "E"
    SYMBOL_FIRST = True

    Euro = EURO

    @staticmethod
    def dollar_us() -> Unit:
        return current_rates().table.dollar_us

    @staticmethod
    def new_shekel() -> Unit:
        return current_rates().table.new_shekel

    @staticmethod
    def yen() -> Unit:
        return current_rates().table.yen

    @staticmethod
    def update_rates(tolerance: timedelta | None = None) -> RefreshOutcome:
        """Refresh the exchange rates of the current holder."""
        return current_rates().update(tolerance)

    @classmethod
    def unit_dictionary(cls) -> Mapping[str, tuple[Unit, str]]:
        table = current_rates().table
        return {
            "D": (table.dollar_us, "$"),
            "S": (table.new_shekel, "₪"),
            "E": (cls.Euro, "€"),
            "Y": (table.yen, "¥"),
        }

    @classmethod
    def _parse_rules(cls):
        return (
            number_rule(r"\$|dollars?", lambda v: cls(v, cls.dollar_us())),
            prefix_rule(r"\$", lambda v: cls(v, cls.dollar_us())),
            number_rule(
                r"INS|ins|ILS|NIS|Israeli New Sheckels?|israeli new sheckel|shekels?",
                lambda v: cls(v, cls.new_shekel()),
            ),
            prefix_rule(r"₪", lambda v: cls(v, cls.new_shekel())),
            number_rule(r"€|euros?", lambda v: cls(v, cls.Euro)),
            prefix_rule(r"€", lambda v: cls(v, cls.Euro)),
            number_rule(r"yen|¥", lambda v: cls(v, cls.yen())),
            prefix_rule(r"¥", lambda v: cls(v, cls.yen())),
        )

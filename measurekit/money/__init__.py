"""Money with exchange rates refreshed from the ECB daily feed.

This package provides the Money dimension and the machinery keeping its
currency units current. Amounts are stored exactly in euros; the US dollar,
new shekel and yen units come from a currency table that a refresh replaces
as a whole.

Components:
    Money Dimension:
        Money: Amount of money, formatted with the symbol first ("$12.5")

    Exchange Rates:
        ExchangeRates: Guarded holder of the live currency table
        CurrencyTable: Immutable snapshot of the floating currency units
        RefreshOutcome: Result of a refresh attempt
        current_rates / using_rates: Lookup and binding of the holder in use

    Collaborators:
        fetch_document: Downloads the feed over HTTP
        FileRateCache / MemoryRateCache: Storage for the last fetched feed

Example:
    >>> from measurekit.money import Money
    >>>
    >>> Money.update_rates()  # fetch or reuse cached rates
    >>> price = Money.parse("$12.50")
    >>> print(price.to_string("E_F2"))
"""

from .cache import FileRateCache, MemoryRateCache, RateCache
from .ecb import fetch_document, parse_rates
from .rates import (
    EURO,
    CurrencyTable,
    ExchangeRates,
    RefreshOutcome,
    current_rates,
    default_rates,
    using_rates,
)
from .unit import Money

__all__ = [
    "Money",
    "EURO",
    "CurrencyTable",
    "ExchangeRates",
    "RefreshOutcome",
    "current_rates",
    "default_rates",
    "using_rates",
    "fetch_document",
    "parse_rates",
    "RateCache",
    "FileRateCache",
    "MemoryRateCache",
]

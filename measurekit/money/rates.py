"""Live currency units and their exchange-rate refresher.

Money's arbitrary unit is the euro. The US dollar, new shekel and yen float
against it: their units live in an immutable ``CurrencyTable`` snapshot held
by an ``ExchangeRates`` instance. A refresh builds a complete new table and
swaps the reference in one step, so a concurrent conversion sees either the
old table or the new one, never a mix. Money values already constructed keep
their arbitrary (euro) value across refreshes.

The holder in use is looked up through a context variable, so callers and
tests can bind their own holder with ``using_rates``.

Example:
    >>> rates = ExchangeRates(fetcher=my_fetcher, cache=MemoryRateCache())
    >>> with using_rates(rates):
    ...     outcome = rates.update()
    ...     price = Money(10, Money.dollar_us())
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from datetime import timedelta
from fractions import Fraction

from measurekit.config import RatesConfig
from measurekit.errors import ConversionFailure
from measurekit.unit import ScaleUnit

from .cache import FileRateCache, RateCache
from .ecb import fetch_document, parse_rates

logger = logging.getLogger(__name__)

EURO = ScaleUnit(1, "euro")

Fetcher = Callable[[str, float], bytes]


@dataclass(frozen=True)
class CurrencyTable:
    """Snapshot of the floating currency units, each relative to the euro."""

    dollar_us: ScaleUnit
    new_shekel: ScaleUnit
    yen: ScaleUnit

    @classmethod
    def default(cls) -> CurrencyTable:
        """Built-in rates used until a refresh succeeds."""
        dollar = ScaleUnit(1 / Fraction("1.12"), "US dollar")
        return cls(
            dollar_us=dollar,
            new_shekel=dollar.scaled(Fraction("0.26"), "new shekel"),
            yen=dollar.scaled(Fraction("0.009"), "yen"),
        )

    @classmethod
    def from_rates(cls, rates: Mapping[str, Fraction]) -> CurrencyTable:
        """Build a table from currency -> units-per-euro rates.

        Raises:
            ConversionFailure: If a needed currency is missing.
        """
        missing = [code for code in ("USD", "ILS", "JPY") if code not in rates]
        if missing:
            msg = f"exchange-rate document lacks {', '.join(missing)}"
            raise ConversionFailure(msg)
        return cls(
            dollar_us=ScaleUnit(1 / rates["USD"], "US dollar"),
            new_shekel=ScaleUnit(1 / rates["ILS"], "new shekel"),
            yen=ScaleUnit(1 / rates["JPY"], "yen"),
        )


@dataclass(frozen=True)
class RefreshOutcome:
    """Result of a refresh attempt; truthy when the rates were replaced."""

    refreshed: bool
    error: Exception | None = None

    def __bool__(self) -> bool:
        return self.refreshed


class ExchangeRates:
    """Guarded holder of the live currency table.

    Args:
        config: Feed address, staleness tolerance, timeout and cache path.
        fetcher: Called as ``fetcher(url, timeout)``; returns the feed bytes
            or raises ConversionFailure.
        cache: Store for the last fetched document. Defaults to a file at
            ``config.cache_path``.
    """

    def __init__(
        self,
        config: RatesConfig | None = None,
        fetcher: Fetcher | None = None,
        cache: RateCache | None = None,
    ):
        self.config = config or RatesConfig()
        self._fetcher = fetcher or fetch_document
        self._cache = cache if cache is not None else FileRateCache(self.config.cache_path)
        self._update_lock = threading.Lock()
        self._table = CurrencyTable.default()
        self._initialized = False

    @property
    def table(self) -> CurrencyTable:
        """The current snapshot. Reading it never blocks on a refresh."""
        return self._table

    @property
    def initialized(self) -> bool:
        """Whether a refresh has succeeded since creation or the last reset."""
        return self._initialized

    def update(self, tolerance: timedelta | None = None) -> RefreshOutcome:
        """Refresh the currency table unless cached rates are still fresh.

        Args:
            tolerance: Age under which the cache is fresh; defaults to
                ``config.tolerance``.

        Returns:
            RefreshOutcome: ``refreshed`` is False when the cache was fresh and
            rates were already loaded, or when the attempt failed; a failure
            also carries the error and leaves the current table in place.
        """
        if tolerance is None:
            tolerance = self.config.tolerance or timedelta(0)
        with self._update_lock:
            try:
                fresh = self._cache.age() < tolerance
                if fresh and self._initialized:
                    return RefreshOutcome(False)
                document = self._cache.read() if fresh else b""
                fetched = not document
                if fetched:
                    document = self._fetcher(self.config.url, self.config.timeout)
                else:
                    logger.debug("using cached exchange rates")
                table = CurrencyTable.from_rates(parse_rates(document))
            except ConversionFailure as exc:
                logger.warning("exchange-rate refresh failed: %s", exc)
                return RefreshOutcome(False, exc)

            if fetched:
                try:
                    self._cache.write(document)
                except ConversionFailure as exc:
                    logger.warning("exchange rates not cached: %s", exc)

            self._table = table
            self._initialized = True
            logger.debug("exchange rates updated: %s", table)
            return RefreshOutcome(True)

    def reset(self) -> None:
        """Restore the built-in rates and forget any previous refresh."""
        with self._update_lock:
            self._table = CurrencyTable.default()
            self._initialized = False


_default_rates: ExchangeRates | None = None
_default_lock = threading.Lock()
_bound_rates: ContextVar[ExchangeRates | None] = ContextVar("measurekit_rates", default=None)


def default_rates() -> ExchangeRates:
    """Return the process-wide holder, creating it on first use."""
    global _default_rates
    with _default_lock:
        if _default_rates is None:
            _default_rates = ExchangeRates()
        return _default_rates


def current_rates() -> ExchangeRates:
    """Return the holder bound in the current context, or the default one."""
    bound = _bound_rates.get()
    return bound if bound is not None else default_rates()


@contextmanager
def using_rates(rates: ExchangeRates) -> Iterator[ExchangeRates]:
    """Bind ``rates`` as the current holder for the duration of the block."""
    token = _bound_rates.set(rates)
    try:
        yield rates
    finally:
        _bound_rates.reset(token)

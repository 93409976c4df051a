"""Global configuration and type definitions for the measurement library.

This module provides the numeric type aliases shared by every dimension and
the configuration of the exchange-rate refresher used by the Money dimension.

Type Definitions:
    Number: Scalar types accepted wherever a plain number is expected
            (construction values, scalar multipliers and divisors).
    ArrayLike: Number or NumPy array, accepted by batch conversion helpers.

Configuration:
    RatesConfig: Where and how often exchange rates are refreshed.

Example:
    >>> from measurekit.config import RatesConfig
    >>> config = RatesConfig(timeout=5)
    >>> config.cache_path.name
    'exchange_rates.xml'
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from datetime import timedelta
from decimal import Decimal
from fractions import Fraction
from pathlib import Path

from numpy import ndarray

Number = int | float | Fraction | Decimal
ArrayLike = Number | ndarray

ECB_DAILY_URL = "https://www.ecb.europa.eu/stats/eurofxref/eurofxref-daily.xml"
CACHE_FILE_NAME = "exchange_rates.xml"


def default_cache_dir() -> Path:
    """Return the per-user directory holding the exchange-rate cache.

    ``MEASUREKIT_CACHE_DIR`` wins, then ``XDG_DATA_HOME``, then
    ``~/.local/share``.
    """
    override = os.environ.get("MEASUREKIT_CACHE_DIR")
    if override:
        return Path(override)
    data_home = os.environ.get("XDG_DATA_HOME")
    base = Path(data_home) if data_home else Path.home() / ".local" / "share"
    return base / "measurekit"


@dataclass
class RatesConfig:
    """Configuration for the exchange-rate refresher.

    Attributes:
        url: Address of the ECB daily reference-rate feed.
        tolerance: Age under which cached rates are considered fresh.
            ``None`` means cached rates are never fresh.
        timeout: Network timeout in seconds for a single fetch.
        cache_path: File holding the last fetched feed document.
    """

    url: str = ECB_DAILY_URL
    tolerance: timedelta | None = timedelta(hours=12)
    timeout: float = 30.0
    cache_path: Path = field(default_factory=lambda: default_cache_dir() / CACHE_FILE_NAME)

"""Exact measurements with unit conversion, parsing and formatting.

Subpackages:
    unit: The unit abstraction, the generic Measurement and its dimensions
    money: The Money dimension and its exchange-rate refresher

Modules:
    config: Numeric type aliases and refresher configuration
    errors: Exception types

The library logs through the standard ``logging`` module under the
``measurekit`` logger and never configures handlers itself.
"""

import logging

from .errors import (
    ConversionFailure,
    InvalidValueError,
    MeasurementError,
    NoMatchingRuleError,
    UnknownUnitError,
)
from .money import ExchangeRates, Money, RefreshOutcome, current_rates, using_rates
from .unit import (
    Angle,
    DataSize,
    DeltaUnit,
    GraphicsLength,
    Length,
    Mass,
    Measurement,
    RotationalSpeed,
    ScaleUnit,
    Temperature,
    TemperatureDelta,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Measurement",
    "ScaleUnit",
    "DeltaUnit",
    "Angle",
    "RotationalSpeed",
    "Length",
    "GraphicsLength",
    "Mass",
    "DataSize",
    "Temperature",
    "TemperatureDelta",
    "Money",
    "ExchangeRates",
    "RefreshOutcome",
    "current_rates",
    "using_rates",
    "MeasurementError",
    "InvalidValueError",
    "NoMatchingRuleError",
    "UnknownUnitError",
    "ConversionFailure",
]

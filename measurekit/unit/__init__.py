"""Exact, type-safe physical quantities.

This package provides the unit abstraction, the generic measurement type and
the dimensions built on it. Every measurement stores an exact rational value
in its dimension's canonical ("arbitrary") unit, converts to and from named
units, parses human-readable strings and renders formatted output.

Architecture:
    - unit_base: ScaleUnit / DeltaUnit and the dimension family system
    - unit_measure: Measurement, the generic quantity implementation
    - unit_parser: ordered, first-match-wins parsing funnel
    - unit_format: unit dictionary lookup and number rendering
    - unit_angle, unit_distance, unit_mass, unit_data, unit_temperature,
      unit_graphics, unit_rotation: the dimensions

Dimensions:
    - Angle (radian), RotationalSpeed (radian per second)
    - Length (meter), GraphicsLength (pixel)
    - Mass (kilogram)
    - DataSize (mebibyte)
    - Temperature, TemperatureDelta (kelvin)

Example:
    >>> from measurekit.unit import Length, Angle
    >>>
    >>> route = Length.parse("5km") + Length(250, Length.Meter)
    >>> print(route.to_string("KM_F2"))  # "5.25km"
    >>>
    >>> # Dimensions do not mix
    >>> # route + Angle(1)  # TypeError
"""

from .unit_angle import Angle
from .unit_base import DeltaUnit, Dimensioned, ScaleUnit, Unit, as_rational
from .unit_data import DataSize
from .unit_distance import Length
from .unit_format import format_number, render, split_format_spec
from .unit_graphics import GraphicsLength
from .unit_mass import Mass
from .unit_measure import Measurement
from .unit_parser import NUMBER_PATTERN, Funnel, ParserRule, number_rule, prefix_rule
from .unit_rotation import RotationalSpeed
from .unit_temperature import Temperature, TemperatureDelta

__all__ = [
    # Unit abstraction
    "Unit",
    "ScaleUnit",
    "DeltaUnit",
    "Dimensioned",
    "as_rational",
    # Generic measurement
    "Measurement",
    # Parsing
    "NUMBER_PATTERN",
    "Funnel",
    "ParserRule",
    "number_rule",
    "prefix_rule",
    # Formatting
    "format_number",
    "render",
    "split_format_spec",
    # Dimensions
    "Angle",
    "RotationalSpeed",
    "Length",
    "GraphicsLength",
    "Mass",
    "DataSize",
    "Temperature",
    "TemperatureDelta",
]

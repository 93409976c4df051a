"""Screen-space length, measured in pixels."""

from __future__ import annotations

from types import MappingProxyType

from .unit_base import ScaleUnit
from .unit_measure import Measurement
from .unit_parser import number_rule


class GraphicsLength(Measurement):
    """Length on a raster display. Arbitrary unit is pixels."""

    __slots__ = ()

    IS_FAMILY_ROOT = True
    ARBITRARY_SYMBOL = "px"
    DEFAULT_CODE = "P"

    Pixel = ScaleUnit(1, "pixel")

    UNIT_CODES = MappingProxyType({"P": (Pixel, "px")})

    @classmethod
    def _parse_rules(cls):
        return (number_rule(r"px|p|pixels?", lambda v: cls(v, cls.Pixel)),)

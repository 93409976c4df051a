"""Regex-driven parsing funnel.

A ``Funnel`` is an ordered list of ``ParserRule`` objects. Each rule pairs a
regular expression with a constructor taking the match. ``Funnel.process``
tries the rules strictly in construction order and returns the result of the
first rule whose pattern matches the whole input, so rule order is part of
each dimension's contract (e.g. ``b`` before ``B`` for bits and bytes).

Example:
    >>> funnel = Funnel(number_rule(r"m|meters?", lambda v: ("m", v)))
    >>> funnel.process("5 meters")
    ('m', Fraction(5, 1))
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass
from fractions import Fraction
from typing import Generic, TypeVar

from measurekit.errors import NoMatchingRuleError

from .unit_base import as_rational

logger = logging.getLogger(__name__)

T = TypeVar("T")

# signed decimal with optional fraction and exponent: 5, -1.5, .5, 2., 1e-3
NUMBER_PATTERN = r"[-+]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][-+]?\d+)?"


@dataclass(frozen=True)
class ParserRule(Generic[T]):
    """A regular expression and the constructor applied to its match.

    Attributes:
        pattern: Compiled expression, matched against the whole input.
        build: Callable turning the match into a result.
    """

    pattern: re.Pattern
    build: Callable[[re.Match], T]

    def apply(self, text: str) -> T | None:
        """Return the built result, or None if the pattern does not match."""
        match = self.pattern.fullmatch(text)
        if match is None:
            return None
        return self.build(match)


def number_rule(tokens: str, factory: Callable[[Fraction], T]) -> ParserRule[T]:
    """Build a ``<number> ?<token>`` rule.

    Args:
        tokens: Regex alternation of the unit's accepted spellings.
        factory: Called with the exact value of the captured number.
    """
    pattern = re.compile(rf"^({NUMBER_PATTERN}) ?(?:{tokens})$")
    return ParserRule(pattern, lambda m: factory(as_rational(m.group(1))))


def prefix_rule(symbol: str, factory: Callable[[Fraction], T]) -> ParserRule[T]:
    """Build a ``<symbol><number>`` rule, as in ``$12.50``.

    Args:
        symbol: Regex for the leading currency-style symbol.
        factory: Called with the exact value of the captured number.
    """
    pattern = re.compile(rf"^(?:{symbol})({NUMBER_PATTERN})$")
    return ParserRule(pattern, lambda m: factory(as_rational(m.group(1))))


class Funnel(Generic[T]):
    """Ordered, first-match-wins collection of parser rules.

    Funnels are immutable after construction and safe to share between
    threads.
    """

    __slots__ = ("_rules",)

    def __init__(self, *rules: ParserRule[T]):
        self._rules = tuple(rules)

    @property
    def rules(self) -> tuple[ParserRule[T], ...]:
        return self._rules

    def __len__(self) -> int:
        return len(self._rules)

    def process(self, text: str) -> T:
        """Return the result of the first rule matching ``text``.

        Raises:
            NoMatchingRuleError: If no rule matches.
        """
        for rule in self._rules:
            result = rule.apply(text)
            if result is not None:
                return result
        logger.debug("no rule out of %d matched %r", len(self._rules), text)
        raise NoMatchingRuleError(text)

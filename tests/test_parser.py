"""
Tests for the parsing funnel.
"""

import re
import unittest
from decimal import Decimal
from fractions import Fraction

from measurekit.errors import InvalidValueError, NoMatchingRuleError
from measurekit.unit import NUMBER_PATTERN, Funnel, Length, ParserRule, as_rational, number_rule, prefix_rule


class TestNumberPattern(unittest.TestCase):
    """Test the number syntax accepted by parsing rules."""

    def test_accepted_numbers(self):
        """Test decimal and scientific forms."""
        for text in ("5", "-1.5", "+2", ".5", "2.", "1e-3", "6.02E23"):
            self.assertIsNotNone(re.fullmatch(NUMBER_PATTERN, text), text)

    def test_rejected_numbers(self):
        """Test malformed numbers."""
        for text in ("", ".", "1e", "--1", "1,5", "five"):
            self.assertIsNone(re.fullmatch(NUMBER_PATTERN, text), text)


class TestRules(unittest.TestCase):
    """Test rule construction helpers."""

    def test_number_rule_optional_space(self):
        """Test that one optional space separates number and unit."""
        rule = number_rule(r"m|meters?", lambda v: v)
        self.assertEqual(rule.apply("5m"), 5)
        self.assertEqual(rule.apply("5 meters"), 5)
        self.assertIsNone(rule.apply("5  m"))
        self.assertIsNone(rule.apply(" 5m"))
        self.assertIsNone(rule.apply("5m "))

    def test_number_rule_exact_value(self):
        """Test that the captured number is exact."""
        rule = number_rule(r"x", lambda v: v)
        self.assertEqual(rule.apply("0.1x"), Fraction(1, 10))
        self.assertEqual(rule.apply("2.5e2x"), Fraction(250))

    def test_prefix_rule(self):
        """Test symbol-first rules."""
        rule = prefix_rule(r"\$", lambda v: v)
        self.assertEqual(rule.apply("$12.50"), Fraction("12.5"))
        self.assertIsNone(rule.apply("$ 12.50"))
        self.assertIsNone(rule.apply("12.50$"))

    def test_custom_rule(self):
        """Test a rule built directly from a pattern."""
        rule = ParserRule(re.compile(r"(\d+)%"), lambda m: int(m.group(1)))
        self.assertEqual(rule.apply("42%"), 42)


class TestExponentLimits(unittest.TestCase):
    """Test that huge decimal exponents are rejected before conversion."""

    def test_parse_huge_exponent(self):
        """Test that a short text with a huge exponent fails fast."""
        with self.assertRaises(InvalidValueError):
            Length.parse("1e50000000m")
        with self.assertRaises(InvalidValueError):
            Length.parse("1e-401m")

    def test_parse_large_exponent_in_range(self):
        """Test that exponents near the float range still parse exactly."""
        self.assertEqual(Length.parse("1e300m").arbitrary, Fraction(10**300))
        self.assertEqual(Length.parse("2.5e-3m").arbitrary, Fraction(1, 400))

    def test_string_exponents(self):
        """Test the exponent limit on plain strings."""
        with self.assertRaises(InvalidValueError):
            as_rational("1e401")
        with self.assertRaises(InvalidValueError):
            as_rational("1E-99999999999")
        with self.assertRaises(InvalidValueError):
            as_rational("1e50_000_000")
        self.assertEqual(as_rational("1e0000000000000000000000003"), Fraction(1000))

    def test_decimal_exponents(self):
        """Test the exponent limit on Decimal values."""
        with self.assertRaises(InvalidValueError):
            as_rational(Decimal("1e50000000"))
        self.assertEqual(as_rational(Decimal("1e3")), Fraction(1000))


class TestFunnel(unittest.TestCase):
    """Test Funnel class."""

    def test_first_match_wins(self):
        """Test that rules are tried in construction order."""
        funnel = Funnel(
            number_rule(r"m", lambda v: "first"),
            number_rule(r"m|meters?", lambda v: "second"),
        )
        self.assertEqual(funnel.process("1m"), "first")
        self.assertEqual(funnel.process("1 meter"), "second")
        self.assertEqual(len(funnel), 2)

    def test_no_match(self):
        """Test that an unmatched string raises a ValueError subclass."""
        funnel = Funnel(number_rule(r"m", lambda v: v))
        with self.assertRaises(NoMatchingRuleError) as ctx:
            funnel.process("five meters")
        self.assertEqual(ctx.exception.text, "five meters")
        self.assertIsInstance(ctx.exception, ValueError)

    def test_no_match_logged(self):
        """Test that parse misses are logged at debug level."""
        funnel = Funnel()
        with self.assertLogs("measurekit.unit.unit_parser", level="DEBUG") as logs:
            with self.assertRaises(NoMatchingRuleError):
                funnel.process("anything")
        self.assertIn("anything", logs.output[0])

    def test_dimension_funnel_cached(self):
        """Test that a dimension builds its funnel once."""
        self.assertIs(Length.parsers(), Length.parsers())
        self.assertEqual(len(Length.parsers()), 11)


if __name__ == '__main__':
    unittest.main()

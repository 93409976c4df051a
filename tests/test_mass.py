"""
Tests for masses.
"""

import unittest
from fractions import Fraction

from measurekit.unit import Mass


class TestMassUnits(unittest.TestCase):
    """Test Mass units and conversion."""

    def test_pound(self):
        """Test that one pound is 0.45359237 kilograms."""
        self.assertEqual(Mass.Pound.to_arbitrary(1), Fraction("0.45359237"))

    def test_ounce(self):
        """Test that sixteen ounces make a pound."""
        self.assertEqual(Mass(16, Mass.Ounce), Mass(1, Mass.Pound))

    def test_round_trip(self):
        """Test exact round trips through every named unit."""
        for unit, _ in Mass.UNIT_CODES.values():
            for value in (Fraction(0), Fraction(3), Fraction(-2, 7)):
                self.assertEqual(unit.from_arbitrary(unit.to_arbitrary(value)), value)

    def test_formatting(self):
        """Test mass unit codes and the kilogram default."""
        self.assertEqual(str(Mass(2)), "2kg")
        self.assertEqual(Mass(1, Mass.Tonne).to_string("T"), "1t")
        self.assertEqual(Mass(1, Mass.Pound).to_string("O_F1"), "16.0oz")
        self.assertEqual(Mass(1).to_string("M"), "1000000mg")


class TestMassParsing(unittest.TestCase):
    """Test Mass parsing and its rule order."""

    def test_prefix_collisions(self):
        """Test g, mg and kg, which share a trailing letter."""
        self.assertEqual(Mass.parse("1g"), Mass(1, Mass.Gram))
        self.assertEqual(Mass.parse("1mg"), Mass(1, Mass.Milligram))
        self.assertEqual(Mass.parse("1kg"), Mass(1))
        self.assertEqual(Mass.parse("1k"), Mass(1))

    def test_spellings(self):
        """Test long and plural spellings."""
        self.assertEqual(Mass.parse("2 kilograms"), Mass(2))
        self.assertEqual(Mass.parse("500 grams"), Mass(Fraction(1, 2)))
        self.assertEqual(Mass.parse("3 tonnes"), Mass(3000))
        self.assertEqual(Mass.parse("3 tons"), Mass(3000))
        self.assertEqual(Mass.parse("4 ounces"), Mass(4, Mass.Ounce))
        self.assertEqual(Mass.parse("1 pound"), Mass(1, Mass.Pound))
        self.assertEqual(Mass.parse("1lb"), Mass(1, Mass.Pound))

    def test_formatted_output_parses(self):
        """Test that every unit's formatted output parses back."""
        for code, (unit, _) in Mass.UNIT_CODES.items():
            mass = Mass(3, unit)
            self.assertEqual(Mass.parse(mass.to_string(code)), mass, code)


if __name__ == '__main__':
    unittest.main()

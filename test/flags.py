"""
Flags module behavioral tests (declaration, matching, flag-token detection).

Scope
- Validate Flag constructors, identifier rules and kind-locked values.
- Validate matches() for short/long forms and its exactness.
- Validate is_flag_token() on prefixes.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from pennant import Flag, Boolean, String, Integer, Float, matches, is_flag_token


class TestFlag(TestCase):
    """Behavioral tests for Flag declarations."""

    def testConstructorsPickTheVariant(self):
        self.assertIsInstance(Flag.boolean("f", "ferris", "").value, Boolean)
        self.assertIsInstance(Flag.string("n", "name", "").value, String)
        self.assertIsInstance(Flag.integer("c", "count", "").value, Integer)
        self.assertIsInstance(Flag.float("r", "ratio", "").value, Float)

    def testBooleanStartsFalse(self):
        self.assertIs(Flag.boolean("f", "ferris", "").payload, False)

    def testTypedDefault(self):
        self.assertEqual(Flag.integer("c", "count", "", default=3).payload, 3)

    def testIdentifierMustNotBeEmpty(self):
        with self.assertRaises(ValueError):
            Flag.boolean("", "ferris", "")
        with self.assertRaises(ValueError):
            Flag.boolean("f", "  ", "")

    def testIdentifierWithoutDashes(self):
        with self.assertRaises(ValueError):
            Flag.boolean("-f", "ferris", "")

    def testIdentifierShape(self):
        with self.assertRaises(ValueError):
            Flag.boolean("f", "dry_run", "")
        self.assertEqual(Flag.boolean("d", "dry-run", "").long, "dry-run")

    def testIdentifierType(self):
        with self.assertRaises(TypeError):
            Flag.boolean(1, "one", "")

    def testValueMustBeAVariant(self):
        with self.assertRaises(TypeError):
            Flag("f", "ferris", "", True)

    def testValueKindIsLocked(self):
        flag = Flag.boolean("f", "ferris", "")
        flag.value = Boolean(True)
        self.assertIs(flag.payload, True)
        with self.assertRaises(TypeError):
            flag.value = String("yes")

    def testResetRestoresDeclaredPayload(self):
        flag = Flag.integer("c", "count", "", default=3)
        flag.value.payload = 9
        flag.reset()
        self.assertEqual(flag.payload, 3)

    def testNames(self):
        self.assertEqual(Flag.boolean("f", "ferris", "").names, ("-f", "--ferris"))

    def testHelpLine(self):
        flag = Flag.boolean("f", "ferris", "say hello from ferris")
        self.assertEqual(str(flag), "  -f, --ferris\tsay hello from ferris")


class TestMatching(TestCase):
    """Behavioral tests for matches() and is_flag_token()."""

    def setUp(self):
        self.flag = Flag.boolean("f", "ferris", "say hello from ferris")

    def testShortAndLongForms(self):
        self.assertTrue(matches(self.flag, "-f"))
        self.assertTrue(matches(self.flag, "--ferris"))
        self.assertTrue(self.flag.matches("--ferris"))

    def testCrossedPrefixesDoNotMatch(self):
        self.assertFalse(matches(self.flag, "-ferris"))
        self.assertFalse(matches(self.flag, "--f"))

    def testCrossedPrefixesMatchWhenIdsAreEqual(self):
        flag = Flag.boolean("x", "x", "")
        self.assertTrue(matches(flag, "-x"))
        self.assertTrue(matches(flag, "--x"))

    def testExactAndCaseSensitive(self):
        self.assertFalse(matches(self.flag, "-F"))
        self.assertFalse(matches(self.flag, "--ferr"))
        self.assertFalse(matches(self.flag, "--ferris=1"))
        self.assertFalse(matches(self.flag, "f"))

    def testMatchesRequiresAFlag(self):
        with self.assertRaises(TypeError):
            matches("f", "-f")

    def testIsFlagToken(self):
        self.assertTrue(is_flag_token("-f"))
        self.assertTrue(is_flag_token("--ferris"))
        self.assertTrue(is_flag_token("-"))
        self.assertFalse(is_flag_token("ferris"))
        self.assertFalse(is_flag_token(""))
        self.assertFalse(is_flag_token("a-b"))


if __name__ == "__main__":
    unittest.main()

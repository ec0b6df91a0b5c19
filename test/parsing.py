"""
Parsing module behavioral tests (partition of raw tokens).

Scope
- Validate positional extraction and in-place flag updates.
- Validate that the caller's token list is never mutated and no token is skipped.
- Validate typed flag arguments and the faults they report.
- Validate unknown flag tokens are dropped and reported as warnings.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from pennant import (
    Flag,
    partition,
    MissingFlagValueError,
    UncastableValueError,
    UnknownFlagWarning,
)


class TestPartition(TestCase):
    """Behavioral tests for partition()."""

    def setUp(self):
        self.ferris = Flag.boolean("f", "ferris", "say hello from ferris")
        self.green = Flag.boolean("g", "green", "paint it green")
        self.count = Flag.integer("n", "count", "how many times")
        self.name = Flag.string("s", "name", "who says hello")
        self.ratio = Flag.float("r", "ratio", "scale factor")
        self.flags = [self.ferris, self.green, self.count, self.name, self.ratio]

    def testPositionalsOnlyAreUnchanged(self):
        tokens = ["world", "again", "a-b"]
        self.assertEqual(partition(self.flags, tokens), tokens)
        self.assertIs(self.ferris.payload, False)
        self.assertIsNone(self.count.payload)

    def testEmptyTokens(self):
        self.assertEqual(partition(self.flags, []), [])

    def testBooleanFlagAfterInput(self):
        self.assertEqual(partition(self.flags, ["world", "-f"]), ["world"])
        self.assertIs(self.ferris.payload, True)
        self.assertIs(self.green.payload, False)

    def testLongForm(self):
        partition(self.flags, ["--green"])
        self.assertIs(self.green.payload, True)

    def testUnknownFlagIsDropped(self):
        self.assertEqual(partition(self.flags, ["-x", "world"]), ["world"])

    def testLoneDashIsDropped(self):
        self.assertEqual(partition(self.flags, ["-", "world"]), ["world"])

    def testTokensAreNotMutatedNorSkipped(self):
        tokens = ["-f", "a", "-f", "-g", "b"]
        snapshot = list(tokens)
        self.assertEqual(partition(self.flags, tokens), ["a", "b"])
        self.assertEqual(tokens, snapshot)
        self.assertIs(self.ferris.payload, True)
        self.assertIs(self.green.payload, True)

    def testRepartitionIsNoOp(self):
        positionals = partition(self.flags, ["x", "-f", "y", "--green", "z"])
        self.assertEqual(partition(self.flags, positionals), positionals)

    def testAcceptsAnyIterable(self):
        self.assertEqual(partition(self.flags, iter(("a", "-f", "b"))), ["a", "b"])

    def testIntegerArgument(self):
        self.assertEqual(partition(self.flags, ["--count", "3", "x"]), ["x"])
        self.assertEqual(self.count.payload, 3)

    def testNegativeIntegerArgument(self):
        self.assertEqual(partition(self.flags, ["-n", "-3"]), [])
        self.assertEqual(self.count.payload, -3)

    def testFloatArgument(self):
        partition(self.flags, ["-r", "0.5"])
        self.assertEqual(self.ratio.payload, 0.5)

    def testStringArgumentIsTakenVerbatim(self):
        self.assertEqual(partition(self.flags, ["-s", "--ferris", "world"]), ["world"])
        self.assertEqual(self.name.payload, "--ferris")
        self.assertIs(self.ferris.payload, False)

    def testRepeatedFlagOverwrites(self):
        partition(self.flags, ["-n", "1", "-n", "2"])
        self.assertEqual(self.count.payload, 2)

    def testMissingArgumentRaisesByDefault(self):
        with self.assertRaises(MissingFlagValueError):
            partition(self.flags, ["x", "-n"])

    def testUncastableArgumentRaisesByDefault(self):
        with self.assertRaises(UncastableValueError):
            partition(self.flags, ["-n", "abc"])

    def testHugeFloatLiteralIsUncastable(self):
        with self.assertRaises(UncastableValueError):
            partition(self.flags, ["-r", "1e400"])
        self.assertIsNone(self.ratio.payload)

    def testGroupedDigitsAreUncastable(self):
        with self.assertRaises(UncastableValueError):
            partition(self.flags, ["-n", "1_000"])
        self.assertIsNone(self.count.payload)

    def testReporterCollectsAndParsingContinues(self):
        faults = []
        positionals = partition(self.flags, ["-q", "-n", "abc", "x", "-f"], report=faults.append)
        self.assertEqual(positionals, ["x"])
        self.assertEqual([type(fault) for fault in faults], [UnknownFlagWarning, UncastableValueError])
        self.assertIsNone(self.count.payload)
        self.assertIs(self.ferris.payload, True)

    def testFaultOptionsCarryPosition(self):
        faults = []
        partition(self.flags, ["x", "--nope"], report=faults.append)
        warning, = faults
        self.assertEqual(warning.options["input"], "--nope")
        self.assertEqual(warning.options["index"], 2)
        self.assertIn("second position", warning.message)

    def testDuplicatedDeclarationsAreAllUpdated(self):
        twin = Flag.boolean("f", "ferris", "same ids")
        partition([self.ferris, twin], ["-f"])
        self.assertIs(self.ferris.payload, True)
        self.assertIs(twin.payload, True)

    def testRejectsNonFlags(self):
        with self.assertRaises(TypeError):
            partition(["-f"], ["-f"])

    def testRejectsNonStringTokens(self):
        with self.assertRaises(TypeError):
            partition(self.flags, ["x", 3])

    def testRejectsNonCallableReporter(self):
        with self.assertRaises(TypeError):
            partition(self.flags, [], report="print")


if __name__ == "__main__":
    unittest.main()

"""
Option table behavioral tests.

Scope
- Validate long option spec parsing: separators, arity suffixes, invalid specs.
- Validate stable indexing, reset, and abbreviation candidates.
- Validate short spec parsing: ordering prefix, silent flag, arities.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from egetopt import (
    Arity,
    Ordering,
    LongOption,
    OptionTable,
    ShortSpec,
    InvalidSpecError,
    UnknownOptionError,
    AmbiguousOptionError,
    FaultCode,
    split_arity,
)


class TestLongSpecParsing(TestCase):
    """OptionTable.parse and friends."""

    def testAritySuffixes(self):
        table = OptionTable()
        table.parse("foo,bar:,baz::")
        self.assertEqual(list(table), [
            LongOption("foo", Arity.NONE),
            LongOption("bar", Arity.REQUIRED),
            LongOption("baz", Arity.OPTIONAL),
        ])

    def testSeparators(self):
        table = OptionTable("a b\tc\nd,,e ,")
        self.assertEqual([option.name for option in table], ["a", "b", "c", "d", "e"])

    def testSeveralSpecStringsAccumulate(self):
        table = OptionTable("foo", "bar:")
        self.assertEqual(table.parse("baz::"), (2,))
        self.assertEqual(len(table), 3)

    def testEmptySpecAddsNothing(self):
        table = OptionTable()
        self.assertEqual(table.parse(""), ())
        self.assertEqual(len(table), 0)

    def testEmptyNameAfterSuffixRejected(self):
        for spec in (":", "::", "foo,::", "foo :"):
            with self.subTest(spec=spec):
                table = OptionTable("keep")
                with self.assertRaises(InvalidSpecError) as context:
                    table.parse(spec)
                self.assertEqual(context.exception.code, FaultCode.INVALID_SPEC)
                # nothing of the offending spec string is registered
                self.assertEqual([option.name for option in table], ["keep"])

    def testSplitArity(self):
        self.assertEqual(split_arity("x::"), ("x", Arity.OPTIONAL))
        self.assertEqual(split_arity("x:"), ("x", Arity.REQUIRED))
        self.assertEqual(split_arity("x"), ("x", Arity.NONE))
        self.assertEqual(split_arity("::"), ("", Arity.OPTIONAL))

    def testParseRejectsNonString(self):
        with self.assertRaises(TypeError):
            OptionTable().parse(["foo"])


class TestTableLifecycle(TestCase):
    """add/reset/indexing."""

    def testIndicesAreStable(self):
        table = OptionTable()
        first = table.add("first", Arity.REQUIRED)
        table.parse("second,third:")
        self.assertEqual(first, 0)
        self.assertEqual(table[first], LongOption("first", Arity.REQUIRED))
        self.assertEqual(table.add("fourth"), 3)

    def testAddValidatesName(self):
        table = OptionTable()
        with self.assertRaises(ValueError):
            table.add("")
        with self.assertRaises(TypeError):
            table.add(42)

    def testAddCoercesArity(self):
        table = OptionTable()
        table.add("level", 2)
        self.assertIs(table[0].arity, Arity.OPTIONAL)

    def testReset(self):
        table = OptionTable("foo,bar")
        table.reset()
        self.assertEqual(len(table), 0)
        self.assertEqual(table.candidates("foo"), [])

    def testOptionsViewIsReadOnly(self):
        table = OptionTable("foo")
        self.assertIsInstance(table.options, tuple)
        with self.assertRaises(AttributeError):
            table.options = ()


class TestCandidates(TestCase):
    """Exact and abbreviated long option lookup."""

    def testExactMatchWins(self):
        table = OptionTable("foobar,foo")
        self.assertEqual(table.candidates("foo"), [1])

    def testUniqueAbbreviation(self):
        table = OptionTable("verbose,output:")
        self.assertEqual(table.candidates("verb"), [0])
        self.assertEqual(table.candidates("o"), [1])

    def testAmbiguousAbbreviation(self):
        table = OptionTable("verbose,version")
        self.assertEqual(table.candidates("ver"), [0, 1])

    def testRepeatedNameIsOneCandidate(self):
        table = OptionTable("foo,foo:")
        self.assertEqual(table.candidates("fo"), [0])
        self.assertEqual(table.candidates("foo"), [0])

    def testUnknownAndEmptyNames(self):
        table = OptionTable("foo")
        self.assertEqual(table.candidates("bar"), [])
        self.assertEqual(table.candidates(""), [])

    def testMatchResolvesAbbreviation(self):
        table = OptionTable("alpha,beta:")
        self.assertEqual(table.match("be"), (1, LongOption("beta", Arity.REQUIRED)))

    def testMatchUnknown(self):
        with self.assertRaises(UnknownOptionError) as context:
            OptionTable("alpha").match("gamma")
        self.assertEqual(context.exception.message, "unrecognized option '--gamma'")
        self.assertEqual(context.exception.code, FaultCode.UNKNOWN_OPTION)

    def testMatchAmbiguous(self):
        with self.assertRaises(AmbiguousOptionError) as context:
            OptionTable("foo,fob").match("fo")
        self.assertEqual(
            context.exception.message,
            "option '--fo' is ambiguous; possibilities: '--foo' '--fob'",
        )
        self.assertEqual(context.exception.options["candidates"], ("--foo", "--fob"))

    def testMatchSpellsSingleDash(self):
        with self.assertRaises(AmbiguousOptionError) as context:
            OptionTable("foo,fob").match("fo", "-")
        self.assertEqual(
            context.exception.message,
            "option '-fo' is ambiguous; possibilities: '-foo' '-fob'",
        )
        with self.assertRaises(UnknownOptionError) as context:
            OptionTable("foo").match("bar", "-")
        self.assertEqual(context.exception.message, "unrecognized option '-bar'")


class TestShortSpec(TestCase):
    """ShortSpec.parse."""

    def testRequireOrderPrefix(self):
        spec = ShortSpec.parse("+ab:c::")
        self.assertIs(spec.ordering, Ordering.REQUIRE_ORDER)
        self.assertEqual(dict(spec.letters), {"a": Arity.NONE, "b": Arity.REQUIRED, "c": Arity.OPTIONAL})
        self.assertFalse(spec.silent)

    def testReturnInOrderPrefix(self):
        self.assertIs(ShortSpec.parse("-x").ordering, Ordering.RETURN_IN_ORDER)

    def testNoPrefixPermutes(self):
        spec = ShortSpec.parse("ab")
        self.assertIs(spec.ordering, Ordering.PERMUTE)
        self.assertIn("a", spec)

    def testSilentFlag(self):
        spec = ShortSpec.parse("+:o:")
        self.assertTrue(spec.silent)
        self.assertIs(spec.arity("o"), Arity.REQUIRED)
        self.assertNotIn(":", spec)

    def testFirstOccurrenceWins(self):
        self.assertIs(ShortSpec.parse("a:a").arity("a"), Arity.REQUIRED)

    def testUnknownLetter(self):
        spec = ShortSpec.parse("+a")
        self.assertIsNone(spec.arity("z"))
        self.assertNotIn("z", spec)

    def testEmptySpec(self):
        spec = ShortSpec.parse("+")
        self.assertIs(spec.ordering, Ordering.REQUIRE_ORDER)
        self.assertEqual(len(spec.letters), 0)

    def testLettersViewIsReadOnly(self):
        spec = ShortSpec.parse("a")
        with self.assertRaises(TypeError):
            spec.letters["b"] = Arity.NONE


if __name__ == "__main__":
    unittest.main()

"""
Fault behavioral tests.

Scope
- Validate fault families, statuses and codes.
- Validate trigger(): raising by default, printing with shell=True, exiting unless deferred.
- Validate rendering: "<prog>: <message>" plus an optional hint line.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import io
import unittest
from contextlib import redirect_stderr
from unittest import TestCase

from egetopt import (
    FaultCode,
    ExitCode,
    GetoptException,
    OptionFault,
    UnknownOptionError,
    AmbiguousOptionError,
    MissingArgumentError,
    ConfigurationError,
    UsageError,
    MissingOptstringError,
    AllocationError,
    trigger,
)


class TestFaultFamilies(TestCase):
    """Statuses per family."""

    def testStatuses(self):
        self.assertEqual(UnknownOptionError("x").status, ExitCode.GETOPT)
        self.assertEqual(MissingOptstringError("x").status, ExitCode.PARAMETER)
        self.assertEqual(AllocationError("x").status, ExitCode.ALLOCATION)

    def testHierarchy(self):
        self.assertTrue(issubclass(UnknownOptionError, OptionFault))
        self.assertTrue(issubclass(UsageError, ConfigurationError))
        self.assertTrue(issubclass(ConfigurationError, GetoptException))

    def testCodeAndOptions(self):
        fault = UnknownOptionError("invalid option -- 'x'", code=FaultCode.UNKNOWN_OPTION, input="x")
        self.assertEqual(fault.code, FaultCode.UNKNOWN_OPTION)
        self.assertEqual(fault.options["input"], "x")
        self.assertEqual(str(fault), "invalid option -- 'x'")
        with self.assertRaises(TypeError):
            fault.options["input"] = "y"

    def testAboutWordsLongAndShortSpellings(self):
        fault = UnknownOptionError.about("--nope")
        self.assertEqual(fault.message, "unrecognized option '--nope'")
        self.assertEqual(fault.code, FaultCode.UNKNOWN_OPTION)
        self.assertEqual(fault.options["input"], "--nope")
        self.assertEqual(UnknownOptionError.about("x", long=False).message, "invalid option -- 'x'")
        self.assertEqual(
            MissingArgumentError.about("o", long=False).message,
            "option requires an argument -- 'o'",
        )

    def testAboutListsAmbiguousCandidates(self):
        fault = AmbiguousOptionError.about("--ver", candidates=iter(["--verbose", "--version"]))
        self.assertEqual(fault.message, "option '--ver' is ambiguous; possibilities: '--verbose' '--version'")
        self.assertEqual(fault.options["candidates"], ("--verbose", "--version"))
        self.assertEqual(fault.code, FaultCode.AMBIGUOUS_OPTION)

    def testMessageIsOptional(self):
        fault = UsageError(code=FaultCode.BAD_USAGE)
        self.assertEqual(str(fault), "")
        self.assertIsNone(MissingOptstringError("x").code)


class TestTrigger(TestCase):
    """trigger() and __replace__."""

    def testRaisesByDefault(self):
        with self.assertRaises(UnknownOptionError) as context:
            trigger(UnknownOptionError("boom"), prog="p")
        self.assertEqual(context.exception.options["prog"], "p")

    def testReplaceKeepsOriginalUntouched(self):
        fault = UnknownOptionError("boom", code=FaultCode.UNKNOWN_OPTION)
        copy = fault.__replace__(prog="p")
        self.assertIsNot(copy, fault)
        self.assertIsInstance(copy, UnknownOptionError)
        self.assertEqual(copy.options["code"], FaultCode.UNKNOWN_OPTION)
        self.assertNotIn("prog", fault.options)

    def testShellDeferredPrints(self):
        stderr = io.StringIO()
        with redirect_stderr(stderr):
            trigger(UnknownOptionError("invalid option -- 'x'"), prog="p", shell=True, deferred=True)
        self.assertEqual(stderr.getvalue(), "p: invalid option -- 'x'\n")

    def testShellExitsWithStatus(self):
        with redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit) as context:
                trigger(MissingOptstringError("missing optstring argument"), shell=True)
        self.assertEqual(context.exception.code, ExitCode.PARAMETER)

    def testHintLine(self):
        stderr = io.StringIO()
        with redirect_stderr(stderr):
            trigger(UsageError(), prog="p", hint="Try 'p --help' for more information.", shell=True, deferred=True)
        self.assertEqual(stderr.getvalue(), "Try 'p --help' for more information.\n")

    def testRejectsNonFaults(self):
        with self.assertRaises(TypeError):
            trigger(ValueError("nope"))


if __name__ == "__main__":
    unittest.main()

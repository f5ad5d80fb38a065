"""
Argument-vector parser behavioral tests.

Scope
- Validate the three spellings of valued options (short, long spaced, long inline).
- Validate command detection and the per-command option scopes.
- Validate the `--`, `-` and first-word conventions.
- Validate the value-consumption rule (option-looking tokens are never taken).
- Validate faults and their exit codes, check_arguments() and the getters.

Conventions
- Test method names follow CamelCase per project convention.
- Tokens are always passed explicitly; sys.argv is only read by the dedicated tests.
"""
import sys
import unittest
from unittest import TestCase, mock

from argtable import (
    Options,
    ExitCode,
    UsageError,
    UnknownOptionError,
    OptionArgumentRequiredError,
    ArgumentCountError,
    ArgvReadFailure,
)


def exclude(tokens):
    options = Options(tokens, prog="tool")
    options.register_option("exclude", "exclude files", "x", "file")
    return options


def plugins(tokens):
    options = Options(tokens, prog="tool")
    options.register_option("plugins", "run on plugins only", "p")
    options.register_command("status", "display status info")
    options.register_option("long", "display long lines", "l", command="status")
    return options


class TestValuedOptions(TestCase):
    """The short, long-spaced and long-inline spellings resolve identically."""

    def testSimpleShort(self):
        options = exclude(["-x", "foo", "bang"])
        options.parse()
        self.assertEqual(options.get_opt("exclude"), "foo")
        self.assertEqual(options.get_args(), ["bang"])
        self.assertIs(options.get_opt("nothing"), False)

    def testSimpleLongSpaced(self):
        options = exclude(["--exclude", "foo", "bang"])
        options.parse()
        self.assertEqual(options.get_opt("exclude"), "foo")
        self.assertEqual(options.get_args(), ["bang"])
        self.assertIs(options.get_opt("nothing"), False)

    def testSimpleLongInline(self):
        options = exclude(["--exclude=foo", "bang"])
        options.parse()
        self.assertEqual(options.get_opt("exclude"), "foo")
        self.assertEqual(options.get_args(), ["bang"])
        self.assertIs(options.get_opt("nothing"), False)

    def testAllSpellingsAgree(self):
        results = []
        for tokens in (["-x", "foo", "bang"], ["--exclude", "foo", "bang"], ["--exclude=foo", "bang"]):
            options = exclude(tokens)
            options.parse()
            results.append((options.get_cmd(), options.get_opt(), options.get_args()))
        self.assertEqual(results[0], results[1])
        self.assertEqual(results[1], results[2])

    def testInlineValueKeepsLaterEquals(self):
        options = exclude(["--exclude=a=b"])
        options.parse()
        self.assertEqual(options.get_opt("exclude"), "a=b")

    def testInlineEmptyValue(self):
        options = exclude(["--exclude="])
        options.parse()
        self.assertEqual(options.get_opt("exclude"), "")

    def testDashIsConsumedAsValue(self):
        options = exclude(["-x", "-", "bang"])
        options.parse()
        self.assertEqual(options.get_opt("exclude"), "-")
        self.assertEqual(options.get_args(), ["bang"])

    def testOptionLookingTokenIsNotConsumed(self):
        options = exclude(["-x", "--other"])
        with self.assertRaises(OptionArgumentRequiredError):
            options.parse()

    def testMissingValueAtEnd(self):
        options = exclude(["--exclude"])
        with self.assertRaises(OptionArgumentRequiredError) as context:
            options.parse()
        self.assertEqual(context.exception.code, ExitCode.OPT_ARG_REQUIRED)
        self.assertEqual(context.exception.options["input"], "--exclude")

    def testNonAsciiDashTokenIsConsumedAsValue(self):
        options = exclude(["-x", "-é", "bang"])
        options.parse()
        self.assertEqual(options.get_opt("exclude"), "-é")
        self.assertEqual(options.get_args(), ["bang"])

    def testLastValueWins(self):
        options = exclude(["-x", "one", "--exclude=two"])
        options.parse()
        self.assertEqual(options.get_opt("exclude"), "two")


class TestFlags(TestCase):
    """Flags resolve to True and never consume a value."""

    def testFlagDoesNotConsumeNextToken(self):
        options = Options(["-v", "file"], prog="tool")
        options.register_option("verbose", "be verbose", "v")
        options.parse()
        self.assertIs(options.get_opt("verbose"), True)
        self.assertEqual(options.get_args(), ["file"])

    def testFlagWithInlineValueIsPresent(self):
        options = Options(["--verbose=yes"], prog="tool")
        options.register_option("verbose", "be verbose", "v")
        options.parse()
        self.assertIs(options.get_opt("verbose"), True)

    def testCustomDefault(self):
        options = Options([], prog="tool")
        options.register_option("loglevel", "minimum level", label="level")
        options.parse()
        self.assertEqual(options.get_opt("loglevel", "info"), "info")


class TestCommands(TestCase):
    """Command detection and per-command option scopes."""

    def testComplex(self):
        options = plugins(["-p", "status", "--long", "foo"])
        options.parse()
        self.assertEqual(options.get_cmd(), "status")
        self.assertIs(options.get_opt("plugins"), True)
        self.assertIs(options.get_opt("long"), True)
        self.assertEqual(options.get_args(), ["foo"])

    def testNoCommand(self):
        options = plugins(["-p", "other", "--long"])
        options.parse()
        self.assertEqual(options.get_cmd(), "")
        self.assertEqual(options.get_args(), ["other", "--long"])

    def testRootOptionsAreNotInheritedByCommands(self):
        options = plugins(["status", "-p"])
        with self.assertRaises(UnknownOptionError) as context:
            options.parse()
        self.assertEqual(context.exception.options["command"], "status")

    def testCommandOptionsAreUnknownAtRoot(self):
        options = plugins(["--long", "status"])
        with self.assertRaises(UnknownOptionError):
            options.parse()

    def testCommandIsDetectedOnlyOnce(self):
        options = plugins(["status", "status", "foo"])
        options.parse()
        self.assertEqual(options.get_cmd(), "status")
        self.assertEqual(options.get_args(), ["status", "foo"])

    def testCommandAfterDoubleDash(self):
        options = plugins(["-p", "--", "status", "--long"])
        options.parse()
        self.assertEqual(options.get_cmd(), "status")
        self.assertIs(options.get_opt("long"), True)
        self.assertEqual(options.get_args(), [])

    def testCommandOptionOverridesRootOption(self):
        options = Options(["--level=1", "run", "--level=2"], prog="tool")
        options.register_option("level", "root level", label="n")
        options.register_command("run", "run it")
        options.register_option("level", "run level", label="n", command="run")
        options.parse()
        self.assertEqual(options.get_opt("level"), "2")

    def testEmptyTokenIsNeverACommand(self):
        options = plugins([""])
        options.parse()
        self.assertEqual(options.get_cmd(), "")
        self.assertEqual(options.get_args(), [""])

    def testParseTwiceGivesSameResult(self):
        options = plugins(["-p", "status", "--long", "foo"])
        options.parse()
        first = (options.get_cmd(), options.get_opt(), options.get_args())
        options.parse()
        self.assertEqual(first, (options.get_cmd(), options.get_opt(), options.get_args()))


class TestTerminators(TestCase):
    """`--`, `-` and the first word stop option scanning."""

    def scan(self, tokens):
        options = Options(tokens, prog="tool")
        options.register_option("verbose", "be verbose", "v")
        options.parse()
        return options

    def testDoubleDash(self):
        options = self.scan(["-v", "--", "-v", "--verbose"])
        self.assertIs(options.get_opt("verbose"), True)
        self.assertEqual(options.get_args(), ["-v", "--verbose"])

    def testSingleDashIsPositional(self):
        options = self.scan(["-", "-v"])
        self.assertIs(options.get_opt("verbose"), False)
        self.assertEqual(options.get_args(), ["-", "-v"])

    def testFirstWordEndsScanning(self):
        options = self.scan(["file", "-v", "--", "x"])
        self.assertIs(options.get_opt("verbose"), False)
        self.assertEqual(options.get_args(), ["file", "-v", "--", "x"])

    def testArgsBeforeParseAreRawTokens(self):
        options = Options(["-v", "file"], prog="tool")
        self.assertEqual(options.get_args(), ["-v", "file"])


class TestUnknownOptions(TestCase):
    """Unknown spellings raise UnknownOptionError (exit code 1)."""

    def testUnknownLong(self):
        options = exclude(["--include=foo"])
        with self.assertRaises(UnknownOptionError) as context:
            options.parse()
        self.assertEqual(context.exception.code, ExitCode.UNKNOWN_OPT)
        self.assertEqual(context.exception.options["input"], "--include")

    def testUnknownShort(self):
        options = exclude(["-y"])
        with self.assertRaises(UnknownOptionError):
            options.parse()

    def testBundledShortsAreNotSupported(self):
        options = Options(["-ab"], prog="tool")
        options.register_option("all", "all", "a")
        options.register_option("brief", "brief", "b")
        with self.assertRaises(UnknownOptionError):
            options.parse()

    def testUnknownOptionIsUsageError(self):
        options = exclude(["--nope"])
        with self.assertRaises(UsageError):
            options.parse()


class TestCheckArguments(TestCase):
    """Only the leading run of required arguments is counted."""

    def testEnoughArguments(self):
        options = Options(["a", "b"], prog="tool")
        options.register_argument("first", "first file")
        options.register_argument("second", "second file")
        options.register_argument("third", "third file", required=False)
        options.parse()
        self.assertTrue(options.check_arguments())

    def testNotEnoughArguments(self):
        options = Options(["a"], prog="tool")
        options.register_argument("first", "first file")
        options.register_argument("second", "second file")
        options.parse()
        with self.assertRaises(ArgumentCountError) as context:
            options.check_arguments()
        self.assertEqual(context.exception.code, ExitCode.OPT_ARG_REQUIRED)
        self.assertIn("2 arguments required, 1 given", context.exception.message)

    def testRequiredAfterOptionalIsNotCounted(self):
        options = Options([], prog="tool")
        options.register_argument("first", "first file", required=False)
        options.register_argument("second", "second file")
        options.parse()
        self.assertTrue(options.check_arguments())

    def testCommandArgumentsAreChecked(self):
        options = Options(["status"], prog="tool")
        options.register_command("status", "display status info")
        options.register_argument("target", "what to inspect", command="status")
        options.parse()
        with self.assertRaises(ArgumentCountError):
            options.check_arguments()


class TestGetters(TestCase):
    """get_opt/get_cmd/get_args hand out copies."""

    def testGetOptWithoutNameCopiesTheMap(self):
        options = exclude(["-x", "foo"])
        options.parse()
        everything = options.get_opt()
        self.assertEqual(everything, {"exclude": "foo"})
        everything["exclude"] = "bar"
        self.assertEqual(options.get_opt("exclude"), "foo")

    def testGetArgsCopiesTheList(self):
        options = exclude(["bang"])
        options.parse()
        options.get_args().append("boom")
        self.assertEqual(options.get_args(), ["bang"])

    def testGetCmdDefaultsToEmpty(self):
        options = exclude([])
        options.parse()
        self.assertEqual(options.get_cmd(), "")


class TestArgv(TestCase):
    """Reading the process argument vector."""

    def testReadsSysArgv(self):
        with mock.patch.object(sys, "argv", ["/usr/bin/tool", "-x", "foo"]):
            options = Options()
        options.register_option("exclude", "exclude files", "x", "file")
        options.parse()
        self.assertEqual(options.prog, "tool")
        self.assertEqual(options.get_opt("exclude"), "foo")

    def testUnreadableArgv(self):
        with mock.patch.object(sys, "argv", None):
            with self.assertRaises(ArgvReadFailure) as context:
                Options()
        self.assertEqual(context.exception.code, ExitCode.ARG_READ)

    def testMissingArgv(self):
        with mock.patch.object(sys, "argv", ["tool"]):
            del sys.argv
            try:
                with self.assertRaises(ArgvReadFailure):
                    Options()
            finally:
                sys.argv = ["tool"]

    def testExplicitTokensMustBeStrings(self):
        with self.assertRaises(TypeError):
            Options(["-x", 1])
        with self.assertRaises(TypeError):
            Options("-x foo")


if __name__ == '__main__':
    unittest.main()

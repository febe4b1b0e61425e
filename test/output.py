# python
"""
Output and progress behavioral tests.

Scope
- Validate verbosity derivation from raw tokens and the shapes Output prints at each
  verbosity (quiet suppresses everything but errors).
- Validate colors switching off and styles lookup.
- Validate Progress enablement (--no-progress, debug, quiet) and its debug trace.

Conventions
- Test method names follow CamelCase per project convention.
- Consoles write into StringIO buffers; rich renders plain text for non-terminals.
"""

from __future__ import annotations

import io
import unittest
from unittest import TestCase
from unittest import mock

from rich.console import Console

import consolette.output
from consolette import APPLICATION_OPTIONS, Input, Output, OptionValue, Progress, Verbosity, complete_options
from consolette.output import verbosity


def capture(level=Verbosity.NORMAL):
    stdout, stderr = io.StringIO(), io.StringIO()
    return Output(Console(file=stdout, width=120), Console(file=stderr, width=120), verbosity=level), stdout, stderr


def options_input(*present):
    values = complete_options(APPLICATION_OPTIONS, {name: OptionValue.no_value(name) for name in present})
    return Input({}, values, option_definitions=APPLICATION_OPTIONS)


class TestVerbosity(TestCase):
    """Behavioral tests for verbosity()."""

    def testDefaultIsNormal(self):
        self.assertIs(verbosity(["one", "arg"]), Verbosity.NORMAL)

    def testLevels(self):
        for tokens, expected in (
            (["-v"], Verbosity.VERBOSE),
            (["--verbose"], Verbosity.VERBOSE),
            (["-vv"], Verbosity.VERY_VERBOSE),
            (["-vvv"], Verbosity.DEBUG),
        ):
            with self.subTest(tokens=tokens):
                self.assertIs(verbosity(tokens), expected)

    def testQuietWins(self):
        self.assertIs(verbosity(["-vvv", "--quiet"]), Verbosity.QUIET)
        self.assertIs(verbosity(["-q", "-v"]), Verbosity.QUIET)


class TestOutput(TestCase):
    """Behavioral tests for Output."""

    def testMessage(self):
        output, stdout, _ = capture()
        output.message("hello [green]world[/]")
        self.assertEqual(stdout.getvalue(), "hello world\n")

    def testQuietSuppressesAllButErrors(self):
        output, stdout, stderr = capture(Verbosity.QUIET)
        output.message("hello")
        output.title("Title")
        output.section("Options:", [("a", "b")])
        output.error("broken")
        self.assertEqual(stdout.getvalue(), "")
        self.assertIn("broken", stderr.getvalue())

    def testVerboseAndDebugLevels(self):
        output, stdout, _ = capture(Verbosity.VERBOSE)
        output.verbose("shown")
        output.debug("hidden")
        self.assertIn("shown", stdout.getvalue())
        self.assertNotIn("hidden", stdout.getvalue())
        self.assertTrue(output.is_verbose())
        self.assertFalse(output.is_very_verbose())

    def testTitleIsUnderlined(self):
        output, stdout, _ = capture()
        output.title("Interactive")
        self.assertIn("Interactive\n===========\n", stdout.getvalue())

    def testSectionIsIndented(self):
        output, stdout, _ = capture()
        output.section("Options:", [("-f, --force", "Force it")])
        lines = stdout.getvalue().splitlines()
        self.assertEqual(lines[0], "Options:")
        self.assertTrue(lines[1].startswith("    -f, --force"))
        self.assertIn("Force it", lines[1])

    def testTable(self):
        output, stdout, _ = capture()
        output.table(["Name", "Value"], [["a", "1"]])
        self.assertIn("Name", stdout.getvalue())
        self.assertIn("a", stdout.getvalue())

    def testColorsOff(self):
        output, _, _ = capture()
        output.colorful = False
        self.assertTrue(output.console.no_color)
        self.assertTrue(output.errors.no_color)
        styler = output.styles({"command": "green"})
        self.assertEqual(styler("command"), "")

    def testStylesLookup(self):
        output, _, _ = capture()
        styler = output.styles({"command": "green"})
        self.assertEqual(styler("command"), "green")
        self.assertEqual(styler("unknown"), "")

    def testAskPromptsOnConsole(self):
        output, _, _ = capture()
        with mock.patch("consolette.output.Prompt.ask", return_value="Bob") as prompt:
            self.assertEqual(output.ask("Name?"), "Bob")
        prompt.assert_called_once_with("Name?", console=output.console)

    def testAskIsOnlyAMethod(self):
        self.assertNotIn("ask", consolette.output.__all__)

    def testConsolesMustBeRich(self):
        with self.assertRaises(TypeError):
            Output(io.StringIO())


class TestProgress(TestCase):
    """Behavioral tests for Progress."""

    def testEnabledByDefault(self):
        output, _, _ = capture()
        self.assertTrue(Progress(options_input(), output, "work").is_enabled())

    def testDisabledByOption(self):
        output, _, _ = capture()
        self.assertFalse(Progress(options_input("no-progress"), output, "work").is_enabled())

    def testDisabledWhenQuiet(self):
        output, _, _ = capture(Verbosity.QUIET)
        self.assertFalse(Progress(options_input(), output, "work").is_enabled())

    def testDebugPrintsTrace(self):
        output, stdout, _ = capture(Verbosity.DEBUG)
        with Progress(options_input(), output, "work") as progress:
            progress.start(2)
            progress.advance()
            progress.advance()
        text = stdout.getvalue()
        self.assertIn("[Debug] Progress for \"work\" for (2) is disabled", text)
        self.assertEqual(text.count("Progress advanced"), 2)
        self.assertIn("Progress finished", text)

    def testRunsToCompletion(self):
        output, _, _ = capture()
        with Progress(options_input(), output, "work") as progress:
            progress.start(3)
            progress.advance(3)
        progress.finish()
        self.assertEqual(progress.name, "work")

    def testNameMustBeString(self):
        output, _, _ = capture()
        with self.assertRaises(TypeError):
            Progress(options_input(), output, None)


if __name__ == "__main__":
    unittest.main()

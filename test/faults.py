# python
"""
Faults behavioral tests.

Scope
- Validate fault payloads, codes and titles.
- Validate trigger(): raising outside shell mode, printing (and exiting unless
  deferred) in shell mode, on the console given in the options.

Conventions
- Test method names follow CamelCase per project convention.
- Rendering is captured through a rich console writing into a StringIO buffer.
"""

from __future__ import annotations

import io
import unittest
from unittest import TestCase

from rich.console import Console

from consolette.faults import (
    CommandException,
    DefinitionError,
    DuplicateArgumentError,
    FaultCode,
    UndefinedNameError,
    UndefinedOptionError,
    trigger,
)


def console():
    buffer = io.StringIO()
    return Console(file=buffer, width=200), buffer


class TestFault(TestCase):
    """Behavioral tests for CommandException subclasses."""

    def testPayloadIsReadOnly(self):
        fault = UndefinedOptionError("The \"-x\" option does not exist.", option="-x")
        self.assertEqual(fault.options["option"], "-x")
        with self.assertRaises(TypeError):
            fault.options["option"] = "-y"

    def testCodeAndTitle(self):
        fault = UndefinedOptionError("message")
        self.assertIs(fault.code, FaultCode.UNDEFINED_OPTION)
        self.assertEqual(fault.title, "undefined option")
        self.assertEqual(fault.code.normalize(), "11102")

    def testMessageFallsBackToTitle(self):
        self.assertEqual(str(UndefinedOptionError()), "undefined option")

    def testLookupErrorsAreCatchable(self):
        with self.assertRaises(LookupError):
            raise UndefinedNameError("missing", name="x")

    def testReplaceMergesOptions(self):
        fault = UndefinedOptionError("message", option="-x").__replace__(colorful=False)
        self.assertEqual(dict(fault.options), {"option": "-x", "colorful": False})
        self.assertEqual(str(fault), "message")


class TestTrigger(TestCase):
    """Behavioral tests for trigger()."""

    def testRaisesOutsideShell(self):
        with self.assertRaises(UndefinedOptionError) as context:
            trigger(UndefinedOptionError("message", option="-x"), prog="app")
        self.assertEqual(context.exception.options["prog"], "app")

    def testPrintsDeferredInShell(self):
        target, buffer = console()
        trigger(UndefinedOptionError("broken option"), shell=True, deferred=True, prog="app", console=target)
        text = buffer.getvalue()
        self.assertIn("app", text)
        self.assertIn("11102", text)
        self.assertIn("Undefined Option", text)
        self.assertIn("broken option", text)

    def testExitsInShell(self):
        target, _ = console()
        with self.assertRaises(SystemExit) as context:
            trigger(UndefinedOptionError("broken option"), shell=True, console=target)
        self.assertEqual(context.exception.code, 1)

    def testHintIsRendered(self):
        target, buffer = console()
        trigger(UndefinedOptionError("broken"), shell=True, deferred=True, hint="try --help", console=target)
        self.assertIn("try --help", buffer.getvalue())

    def testDefinitionErrorRendersEveryViolation(self):
        target, buffer = console()
        group = DefinitionError([
            DuplicateArgumentError("An argument with name \"a\" already exists.", name="a"),
            DuplicateArgumentError("An argument with name \"b\" already exists.", name="b"),
        ])
        trigger(group, shell=True, deferred=True, console=target)
        self.assertIn("\"a\" already exists", buffer.getvalue())
        self.assertIn("\"b\" already exists", buffer.getvalue())

    def testTriggerRejectsPlainExceptions(self):
        with self.assertRaises(TypeError):
            trigger(ValueError("plain"))

    def testBaseClassIsException(self):
        self.assertTrue(issubclass(CommandException, Exception))


if __name__ == "__main__":
    unittest.main()

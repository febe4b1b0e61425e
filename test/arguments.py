# python
"""
Definitions behavioral tests (Argument, Option and registration checks).

Scope
- Validate construction of argument/option definitions per kind, default handling,
  value semantics and sealing.
- Validate usage and listing fragments.
- Validate registration checks: name errors first, then structural checks, every
  violation collected into one DefinitionError.

Conventions
- Test method names follow CamelCase per project convention.
- Build definitions with the named constructors unless the generic one is under test.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from consolette import (
    Argument,
    ArgumentKind,
    Option,
    OptionKind,
    APPLICATION_OPTIONS,
    validate_arguments,
    validate_options,
)
from consolette.arguments import usage
from consolette.faults import (
    DefinitionError,
    DuplicateArgumentError,
    ArgumentAfterArrayError,
    RequiredAfterOptionalError,
    DuplicateOptionError,
    DuplicateShortcutError,
    EmptyDefaultError,
    NameStartsWithError,
    ReservedNameError,
    ReservedShortcutError,
)
from consolette.utils import Unset


def kinds(group):
    return [type(exception) for exception in group.exceptions]


class TestArgument(TestCase):
    """Behavioral tests for Argument definitions."""

    def testRequiredHasNoDefault(self):
        argument = Argument.required("path", "The path")
        self.assertEqual(argument.kind, ArgumentKind.REQUIRED)
        self.assertIs(argument.default, Unset)

    def testRequiredRejectsDefault(self):
        with self.assertRaises(TypeError):
            Argument("path", "", ArgumentKind.REQUIRED, "x")

    def testOptionalKeepsDefault(self):
        self.assertEqual(Argument.optional("name", default="default").default, "default")

    def testArrayDefaultIsTuple(self):
        self.assertEqual(Argument.array("names", default=["a", "b"]).default, ("a", "b"))

    def testArrayDefaultRejectsString(self):
        with self.assertRaises(TypeError):
            Argument.array("names", default="ab")

    def testNameMustBeString(self):
        with self.assertRaises(TypeError):
            Argument.required(1)

    def testEqualityByValue(self):
        self.assertEqual(Argument.required("a", "x"), Argument.required("a", "x"))
        self.assertNotEqual(Argument.required("a"), Argument.optional("a"))
        self.assertEqual(hash(Argument.required("a")), hash(Argument.required("a")))

    def testFieldsAreReadOnly(self):
        argument = Argument.required("a")
        with self.assertRaises(AttributeError):
            argument.name = "b"

    def testSubclassingRejected(self):
        with self.assertRaises(TypeError):
            type("Custom", (Argument,), {})

    def testUsagePerKind(self):
        self.assertEqual(Argument.required("a").usage, "<a>")
        self.assertEqual(Argument.optional("a").usage, "[<a>]")
        self.assertEqual(Argument.required_array("a").usage, "<a>...")
        self.assertEqual(Argument.array("a").usage, "[<a>...]")

    def testUsageOfArgumentList(self):
        self.assertEqual(usage([Argument.required("a"), Argument.optional("b")]), "[--] <a> [<b>]")
        self.assertEqual(usage([]), "")


class TestOption(TestCase):
    """Behavioral tests for Option definitions."""

    def testNoValueRejectsDefault(self):
        with self.assertRaises(TypeError):
            Option("flag", None, "", OptionKind.NO_VALUE, "x")

    def testRequiredDefaultFallsBackToEmptyString(self):
        self.assertEqual(Option("opt", None, "", OptionKind.REQUIRED).default, "")

    def testOptionalDefaultStaysUnset(self):
        self.assertIs(Option.optional("opt").default, Unset)

    def testArrayDefaultIsTuple(self):
        self.assertEqual(Option.array("item", "i", default=["foo", "bar"]).default, ("foo", "bar"))

    def testMatchesLongToken(self):
        option = Option.required("opt1", "o")
        self.assertTrue(option.matches("--opt1"))
        self.assertTrue(option.matches("--opt1=value"))
        self.assertFalse(option.matches("--opt10"))

    def testUsagePerKind(self):
        self.assertEqual(Option.no_value("force", "f").usage, "[-f|--force]")
        self.assertEqual(Option.required("format").usage, "[--format FORMAT]")
        self.assertEqual(Option.optional("cat", "c").usage, "[-c|--cat [CAT]]")

    def testSignaturePerKind(self):
        self.assertEqual(Option.no_value("force", "f").signature, "-f, --force")
        self.assertEqual(Option.required("format").signature, "    --format=FORMAT")
        self.assertEqual(Option.array("item", "i").signature, "-i, --item[=ITEM]")

    def testVerboseSignatureShowsLevels(self):
        verbose = next(option for option in APPLICATION_OPTIONS if option.name == "verbose")
        self.assertEqual(verbose.signature, "-v|vv|vvv, --verbose")

    def testApplicationOptions(self):
        self.assertEqual(
            [option.name for option in APPLICATION_OPTIONS],
            ["help", "quiet", "version", "no-interaction", "no-progress", "no-ansi", "verbose"],
        )
        self.assertTrue(all(option.kind is OptionKind.NO_VALUE for option in APPLICATION_OPTIONS))

    def testKindValueRequirements(self):
        required = {kind for kind in OptionKind if kind.requires_value}
        self.assertEqual(required, {OptionKind.REQUIRED, OptionKind.REQUIRED_ARRAY})
        self.assertFalse(OptionKind.NO_VALUE.takes_value)
        self.assertTrue(all(kind.takes_value for kind in required))


class TestValidateArguments(TestCase):
    """Behavioral tests for argument registration checks."""

    def testValidListIsReturned(self):
        arguments = [Argument.required("a"), Argument.optional("b"), Argument.array("c")]
        self.assertEqual(validate_arguments(arguments), tuple(arguments))

    def testNameErrorsAreCollectedFirst(self):
        with self.assertRaises(DefinitionError) as context:
            validate_arguments([Argument.optional("-a"), Argument.required("command"), Argument.required("-a")])
        self.assertEqual(kinds(context.exception), [NameStartsWithError, ReservedNameError, NameStartsWithError])

    def testDuplicateName(self):
        with self.assertRaises(DefinitionError) as context:
            validate_arguments([Argument.required("a"), Argument.required("a")])
        self.assertEqual(kinds(context.exception), [DuplicateArgumentError])

    def testArgumentAfterArray(self):
        with self.assertRaises(DefinitionError) as context:
            validate_arguments([Argument.required_array("a"), Argument.required("b")])
        self.assertIn(ArgumentAfterArrayError, kinds(context.exception))

    def testRequiredAfterOptional(self):
        with self.assertRaises(DefinitionError) as context:
            validate_arguments([Argument.optional("a"), Argument.required("b")])
        self.assertEqual(kinds(context.exception), [RequiredAfterOptionalError])

    def testEveryStructuralViolationIsReported(self):
        with self.assertRaises(DefinitionError) as context:
            validate_arguments([Argument.array("a"), Argument.required("a"), Argument.required("b")])
        self.assertEqual(
            kinds(context.exception),
            [DuplicateArgumentError, ArgumentAfterArrayError, RequiredAfterOptionalError],
        )

    def testItemsMustBeArguments(self):
        with self.assertRaises(TypeError):
            validate_arguments([Option.no_value("a")])


class TestValidateOptions(TestCase):
    """Behavioral tests for option registration checks."""

    def testValidListIsReturned(self):
        options = [Option.required("opt1", "o"), Option.optional("opt2", "O")]
        self.assertEqual(validate_options(options), tuple(options))

    def testReservedNameAndShortcutCollected(self):
        with self.assertRaises(DefinitionError) as context:
            validate_options([Option.no_value("help"), Option.no_value("force", "h")])
        self.assertEqual(kinds(context.exception), [ReservedNameError, ReservedShortcutError])

    def testDuplicateNameAndShortcut(self):
        with self.assertRaises(DefinitionError) as context:
            validate_options([Option.no_value("a", "x"), Option.no_value("a", "y"), Option.no_value("b", "x")])
        self.assertEqual(kinds(context.exception), [DuplicateOptionError, DuplicateShortcutError])

    def testEmptyRequiredArrayDefault(self):
        with self.assertRaises(DefinitionError) as context:
            validate_options([Option.required_array("item", "i", default=[])])
        self.assertEqual(kinds(context.exception), [EmptyDefaultError])

    def testRequiredArrayWithoutDefaultAccepted(self):
        self.assertEqual(len(validate_options([Option.required_array("item", "i")])), 1)


if __name__ == "__main__":
    unittest.main()

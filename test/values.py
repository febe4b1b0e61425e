# python
"""
Resolved values behavioral tests (ArgumentValue, OptionValue, completion).

Scope
- Validate the accessors of each value kind: value, string, list, int, try_int, is_set.
- Validate argument completion (defaults, missing required values) and option
  completion (every definition ends with an entry).

Conventions
- Test method names follow CamelCase per project convention.
- Values are built with their named constructors.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from consolette import Argument, ArgumentValue, Option, OptionValue, complete_arguments, complete_options
from consolette.faults import InvalidValueError, NotEnoughArgumentsError


class TestArgumentValue(TestCase):
    """Behavioral tests for ArgumentValue accessors."""

    def testRequiredValue(self):
        value = ArgumentValue.required("a", "x")
        self.assertEqual(value.value(), "x")
        self.assertEqual(value.string(), "x")
        self.assertEqual(value.list(), ["x"])
        self.assertTrue(value.is_set())

    def testEmptyRequiredIsNotSet(self):
        self.assertFalse(ArgumentValue.required("a", "").is_set())

    def testUnsetOptionalValueFails(self):
        value = ArgumentValue.optional("a")
        with self.assertRaises(InvalidValueError):
            value.value()
        self.assertIsNone(value.string())
        self.assertEqual(value.list(), [])
        self.assertFalse(value.is_set())

    def testArrayValueFailsAsSingleValue(self):
        value = ArgumentValue.array("a", ["x", "y"])
        with self.assertRaises(InvalidValueError):
            value.value()
        self.assertIsNone(value.string())
        self.assertEqual(value.list(), ["x", "y"])
        self.assertTrue(value.is_set())

    def testEmptyArrayIsNotSet(self):
        self.assertFalse(ArgumentValue.array("a").is_set())

    def testAppendAccumulates(self):
        value = ArgumentValue.required_array("a", ["x"]).append(["y", "z"])
        self.assertEqual(value.payload, ("x", "y", "z"))

    def testAppendOnScalarRejected(self):
        with self.assertRaises(TypeError):
            ArgumentValue.required("a", "x").append(["y"])

    def testIntParsing(self):
        self.assertEqual(ArgumentValue.required("a", "42").int(), 42)
        self.assertIsNone(ArgumentValue.optional("a").int())
        with self.assertRaises(InvalidValueError):
            ArgumentValue.required("a", "forty").int()

    def testTryIntYieldsNoneOnInvalidText(self):
        self.assertIsNone(ArgumentValue.required("a", "forty").try_int())
        self.assertEqual(ArgumentValue.required("a", "7").try_int(), 7)


class TestOptionValue(TestCase):
    """Behavioral tests for OptionValue accessors."""

    def testPresentFlagIsSet(self):
        value = OptionValue.no_value("force")
        self.assertTrue(value.is_set())
        self.assertEqual(value.list(), [])
        self.assertIsNone(value.string())
        with self.assertRaises(InvalidValueError):
            value.value()

    def testAbsentFlagIsNotSet(self):
        self.assertFalse(OptionValue.no_value("force", False).is_set())

    def testRequiredValue(self):
        value = OptionValue.required("opt1", "value1")
        self.assertEqual(value.value(), "value1")
        self.assertEqual(value.list(), ["value1"])
        self.assertTrue(value.is_set())

    def testOptionalWithoutValue(self):
        value = OptionValue.optional("opt2")
        self.assertFalse(value.is_set())
        self.assertIsNone(value.string())
        with self.assertRaises(InvalidValueError):
            value.value()

    def testOptionalWithEmptyValueIsSet(self):
        self.assertTrue(OptionValue.optional("opt2", "").is_set())

    def testArrayValue(self):
        value = OptionValue.array("item", ["one", "two"])
        self.assertEqual(value.list(), ["one", "two"])
        with self.assertRaises(InvalidValueError):
            value.value()

    def testIntParsing(self):
        self.assertEqual(OptionValue.required("count", "3").int(), 3)
        self.assertIsNone(OptionValue.required("count", "x").try_int())


class TestCompleteArguments(TestCase):
    """Behavioral tests for argument completion."""

    def testOptionalFallsBackToDefault(self):
        completed = complete_arguments([Argument.optional("optionalArg", default="default")], {})
        self.assertEqual(completed["optionalArg"], ArgumentValue.optional("optionalArg", "default"))

    def testOptionalWithoutDefaultIsUnset(self):
        completed = complete_arguments([Argument.optional("arg")], {})
        self.assertEqual(completed["arg"], ArgumentValue.optional("arg", None))

    def testArrayFallsBackToDefaultOrEmpty(self):
        completed = complete_arguments([Argument.array("list", default=["a"])], {})
        self.assertEqual(completed["list"], ArgumentValue.array("list", ["a"]))
        completed = complete_arguments([Argument.array("list")], {})
        self.assertEqual(completed["list"], ArgumentValue.array("list", []))

    def testMissingRequiredFails(self):
        with self.assertRaises(NotEnoughArgumentsError) as context:
            complete_arguments([Argument.required("mandatoryArg")], {})
        self.assertEqual(context.exception.options["name"], "mandatoryArg")
        self.assertEqual(str(context.exception), "Not enough arguments (missing: \"mandatoryArg\").")

    def testPartiallyCreatedRequiredArrayFails(self):
        partial = {"list": ArgumentValue.required_array("list")}
        with self.assertRaises(NotEnoughArgumentsError):
            complete_arguments([Argument.required_array("list")], partial)

    def testFilledRequiredArraySucceeds(self):
        filled = {"list": ArgumentValue.required_array("list", ["a"])}
        self.assertEqual(complete_arguments([Argument.required_array("list")], filled), filled)

    def testExistingValuesAreKept(self):
        existing = {"arg": ArgumentValue.optional("arg", "given")}
        self.assertEqual(complete_arguments([Argument.optional("arg", default="x")], existing), existing)

    def testCompletionIsIdempotent(self):
        definitions = [Argument.optional("a", default="x"), Argument.array("b")]
        once = complete_arguments(definitions, {})
        self.assertEqual(complete_arguments(definitions, once), once)


class TestCompleteOptions(TestCase):
    """Behavioral tests for option completion."""

    def testEveryDefinitionGetsAnEntry(self):
        definitions = [
            Option.no_value("force", "f"),
            Option.required("opt1", "o", default="opt1-default-value"),
            Option.optional("message"),
            Option.array("item", "i", default=["foo", "bar"]),
            Option.required_array("tag", "t"),
        ]
        completed = complete_options(definitions, {})
        self.assertEqual(completed, {
            "force": OptionValue.no_value("force", False),
            "opt1": OptionValue.required("opt1", "opt1-default-value"),
            "message": OptionValue.optional("message", None),
            "item": OptionValue.array("item", ["foo", "bar"]),
            "tag": OptionValue.required_array("tag", []),
        })

    def testParsedValuesWin(self):
        parsed = {"opt1": OptionValue.required("opt1", "value1")}
        completed = complete_options([Option.required("opt1", "o", default="x")], parsed)
        self.assertEqual(completed["opt1"].value(), "value1")


if __name__ == "__main__":
    unittest.main()

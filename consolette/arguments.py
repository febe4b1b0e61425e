"""
Consolette definitions: positional arguments and named options.

Scope
- Argument: one positional slot of a command (Required, Optional, Array, RequiredArray).
- Option: one named flag/value of a command with an optional single-letter shortcut
  (NoValue, Required, Optional, Array, RequiredArray).
- validate_arguments()/validate_options(): registration-time checks that collect every
  naming and structural violation of a command and raise them together.
- Usage and listing helpers consumed by the help renderer.

Overview
- Definitions are immutable once built. Their fields are exposed as read-only
  properties (see ArgumentType) and they compare by value.
- Names are not validated on construction: a command validates its whole list at
  registration so that all problems are reported at once.
- Defaults use Unset for "no default declared"; None is never a valid default.

Usage guidance
- Prefer the named constructors:
    Argument.required("path", "The file to read")
    Argument.array("paths", "Other files", default=("a", "b"))
    Option.no_value("force", "f", "Do it anyway")
    Option.required("format", "F", "Output format", default="table")
"""
import functools
import operator
import re
from collections.abc import Iterable
from enum import Enum

from . import names
from .faults import (
    CommandException,
    DefinitionError,
    DuplicateArgumentError,
    ArgumentAfterArrayError,
    RequiredAfterOptionalError,
    DuplicateOptionError,
    DuplicateShortcutError,
    EmptyDefaultError,
)
from .utils import Unset, coalesce, mirror, rename


class ArgumentKind(Enum):
    REQUIRED = "required"
    OPTIONAL = "optional"
    ARRAY = "array"
    REQUIRED_ARRAY = "required-array"

    @property
    def is_array(self):
        return self in (ArgumentKind.ARRAY, ArgumentKind.REQUIRED_ARRAY)

    @property
    def is_optional(self):
        return self in (ArgumentKind.OPTIONAL, ArgumentKind.ARRAY)


class OptionKind(Enum):
    NO_VALUE = "no-value"
    REQUIRED = "required"
    OPTIONAL = "optional"
    ARRAY = "array"
    REQUIRED_ARRAY = "required-array"

    @property
    def is_array(self):
        return self in (OptionKind.ARRAY, OptionKind.REQUIRED_ARRAY)

    @property
    def takes_value(self):
        return self is not OptionKind.NO_VALUE

    @property
    def requires_value(self):
        return self in (OptionKind.REQUIRED, OptionKind.REQUIRED_ARRAY)


class ArgumentType(type):
    """
    Metaclass that turns definitions into introspectable, comparable value objects.

    Responsibilities
    - Derive __typename__ from the class name (camel-case split with hyphens); it is
      used in messages.
    - Expose every name listed in __introspectable__ as a read-only property via mirror().
    - Provide stable __repr__/__rich_repr__ and value-based __eq__/__hash__.
    - Seal the class against subclassing to keep the kind set closed.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            return f"{type(self).__typename__}({', '.join(map(functools.partial(operator.mod, '%s=%r'), self.__rich_repr__()))})"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        @rename("__eq__")
        def __eq__(self, other):
            if type(other) is not type(self):
                return NotImplemented
            return tuple(self.__rich_repr__()) == tuple(other.__rich_repr__())
        self.__eq__ = __eq__

        @rename("__hash__")
        def __hash__(self):
            return hash((type(self), *self.__rich_repr__()))
        self.__hash__ = __hash__

        @rename("__init_subclass__")
        def __init_subclass__(cls, **options):  # NOQA: F-841
            raise TypeError(f"type {self.__name__!r} is not an acceptable base type")
        self.__init_subclass__ = classmethod(__init_subclass__)

        return self


def _sanitize_strings(cls, values, /):
    """
    Internal: normalize a list default into a tuple of strings.
    """
    if isinstance(values, str) or not isinstance(values, Iterable):
        raise TypeError(f"{cls.__typename__} 'default' must be an iterable of strings")
    values = tuple(values)
    if not all(isinstance(value, str) for value in values):
        raise TypeError(f"{cls.__typename__} 'default' must be an iterable of strings")
    return values


class Argument(metaclass=ArgumentType):
    """
    Positional argument definition.

    Kinds
    - REQUIRED: exactly one token, never defaulted.
    - OPTIONAL: zero or one token; falls back to `default` (None when undeclared).
    - ARRAY: zero or more tokens; falls back to `default` (empty when undeclared).
    - REQUIRED_ARRAY: one or more tokens, never defaulted.
    """

    __introspectable__ = (
        "name",
        "descr",
        "kind",
        "default",
    )

    def __new__(cls, name, /, descr="", kind=ArgumentKind.REQUIRED, default=Unset):
        if not isinstance(name, str):
            raise TypeError(f"{cls.__typename__} 'name' must be a string")
        if not isinstance(descr, str):
            raise TypeError(f"{cls.__typename__} 'descr' must be a string")
        if not isinstance(kind, ArgumentKind):
            raise TypeError(f"{cls.__typename__} 'kind' must be an argument kind")

        match kind:
            case ArgumentKind.REQUIRED | ArgumentKind.REQUIRED_ARRAY:
                if default is not Unset:
                    raise TypeError(f"{kind.value} {cls.__typename__} cannot have a 'default'")
            case ArgumentKind.OPTIONAL:
                if not isinstance(default, str | Unset):
                    raise TypeError(f"{cls.__typename__} 'default' must be a string")
            case ArgumentKind.ARRAY:
                if default is not Unset:
                    default = _sanitize_strings(cls, default)

        self = super().__new__(cls)
        self._name = name
        self._descr = descr
        self._kind = kind
        self._default = default
        return self

    @classmethod
    def required(cls, name, descr=""):
        return cls(name, descr, ArgumentKind.REQUIRED)

    @classmethod
    def optional(cls, name, descr="", default=Unset):
        return cls(name, descr, ArgumentKind.OPTIONAL, default)

    @classmethod
    def array(cls, name, descr="", default=Unset):
        return cls(name, descr, ArgumentKind.ARRAY, default)

    @classmethod
    def required_array(cls, name, descr=""):
        return cls(name, descr, ArgumentKind.REQUIRED_ARRAY)

    @property
    def usage(self):
        match self.kind:
            case ArgumentKind.REQUIRED:
                return f"<{self.name}>"
            case ArgumentKind.OPTIONAL:
                return f"[<{self.name}>]"
            case ArgumentKind.REQUIRED_ARRAY:
                return f"<{self.name}>..."
            case ArgumentKind.ARRAY:
                return f"[<{self.name}>...]"


class Option(metaclass=ArgumentType):
    """
    Named option definition.

    Kinds
    - NO_VALUE: a flag, present or not.
    - REQUIRED: needs a value whenever it appears; `default` (a string) when absent.
    - OPTIONAL: may appear without a value; `default` when absent (None if undeclared).
    - ARRAY: repeatable, values accumulate; `default` when absent.
    - REQUIRED_ARRAY: repeatable and each occurrence needs a value; `default` when
      absent, which cannot be an empty list.
    """

    __introspectable__ = (
        "name",
        "shortcut",
        "descr",
        "kind",
        "default",
    )

    def __new__(cls, name, /, shortcut=None, descr="", kind=OptionKind.NO_VALUE, default=Unset):
        if not isinstance(name, str):
            raise TypeError(f"{cls.__typename__} 'name' must be a string")
        if not isinstance(shortcut, str | None):
            raise TypeError(f"{cls.__typename__} 'shortcut' must be a string")
        if not isinstance(descr, str):
            raise TypeError(f"{cls.__typename__} 'descr' must be a string")
        if not isinstance(kind, OptionKind):
            raise TypeError(f"{cls.__typename__} 'kind' must be an option kind")

        match kind:
            case OptionKind.NO_VALUE:
                if default is not Unset:
                    raise TypeError(f"{kind.value} {cls.__typename__} cannot have a 'default'")
            case OptionKind.REQUIRED:
                if not isinstance(default := coalesce(default, ""), str):
                    raise TypeError(f"{cls.__typename__} 'default' must be a string")
            case OptionKind.OPTIONAL:
                if not isinstance(default, str | Unset):
                    raise TypeError(f"{cls.__typename__} 'default' must be a string")
            case OptionKind.ARRAY | OptionKind.REQUIRED_ARRAY:
                if default is not Unset:
                    default = _sanitize_strings(cls, default)

        self = super().__new__(cls)
        self._name = name
        self._shortcut = shortcut
        self._descr = descr
        self._kind = kind
        self._default = default
        return self

    @classmethod
    def no_value(cls, name, shortcut=None, descr=""):
        return cls(name, shortcut, descr, OptionKind.NO_VALUE)

    @classmethod
    def required(cls, name, shortcut=None, descr="", default=""):
        return cls(name, shortcut, descr, OptionKind.REQUIRED, default)

    @classmethod
    def optional(cls, name, shortcut=None, descr="", default=Unset):
        return cls(name, shortcut, descr, OptionKind.OPTIONAL, default)

    @classmethod
    def array(cls, name, shortcut=None, descr="", default=Unset):
        return cls(name, shortcut, descr, OptionKind.ARRAY, default)

    @classmethod
    def required_array(cls, name, shortcut=None, descr="", default=Unset):
        return cls(name, shortcut, descr, OptionKind.REQUIRED_ARRAY, default)

    def matches(self, token):
        """
        Whether a raw long-option token ("--name" or "--name=value") names this option.
        """
        return token.split("=", 1)[0].lstrip("-") == self.name

    @property
    def usage(self):
        shortcut = f"-{self.shortcut}|" if self.shortcut else ""
        match self.kind:
            case OptionKind.NO_VALUE:
                value = ""
            case OptionKind.REQUIRED | OptionKind.REQUIRED_ARRAY:
                value = f" {self.name.upper()}"
            case OptionKind.OPTIONAL | OptionKind.ARRAY:
                value = f" [{self.name.upper()}]"
        return f"[{shortcut}--{self.name}{value}]"

    @property
    def signature(self):
        """
        Left column of the options listing, e.g. "-f, --format=FORMAT".
        """
        shortcut = f"-{self.shortcut}, " if self.shortcut else "    "
        match self.kind:
            case OptionKind.NO_VALUE:
                value = ""
            case OptionKind.REQUIRED | OptionKind.REQUIRED_ARRAY:
                value = f"={self.name.upper()}"
            case OptionKind.OPTIONAL | OptionKind.ARRAY:
                value = f"[={self.name.upper()}]"
        if self.name == "verbose":
            shortcut = "-v|vv|vvv, "
        return f"{shortcut}--{self.name}{value}"


# Options every command accepts; their names and shortcuts are reserved.
APPLICATION_OPTIONS = (
    Option.no_value("help", "h", "Display this help message"),
    Option.no_value("quiet", "q", "Do not output any message"),
    Option.no_value("version", "V", "Display this application version"),
    Option.no_value("no-interaction", "n", "Do not ask any interactive question"),
    Option.no_value("no-progress", None, "Whether to disable all progress bars"),
    Option.no_value("no-ansi", None, "Whether to disable all markup with ansi formatting"),
    Option.no_value("verbose", "v", "Increase the verbosity of messages"),
)


def _collect(validator, value, faults):
    try:
        validator(value)
    except CommandException as fault:
        faults.append(fault)


def _duplicates(values):
    seen = set()
    duplicates = []
    for value in values:
        if value in seen and value not in duplicates:
            duplicates.append(value)
        seen.add(value)
    return duplicates


def validate_arguments(arguments, /):
    """
    Validate an ordered list of argument definitions for one command.

    Name errors are collected first. When every name is valid, the structural checks
    run in order (uniqueness, array placement, required-after-optional), each
    violation reported once.

    Returns
    - tuple[Argument, ...]: the definitions, unchanged.

    Raises
    - TypeError: when an item is not an Argument.
    - DefinitionError: carrying every violation found.
    """
    arguments = tuple(arguments)
    for argument in arguments:
        if not isinstance(argument, Argument):
            raise TypeError("arguments must be a sequence of argument definitions")

    faults = []
    for argument in arguments:
        _collect(names.argument_name, argument.name, faults)
    if faults:
        raise DefinitionError(faults)

    for name in _duplicates(argument.name for argument in arguments):
        faults.append(DuplicateArgumentError(f"An argument with name \"{name}\" already exists.", name=name))

    for index, argument in enumerate(arguments):
        if argument.kind.is_array and index < len(arguments) - 1:
            faults.append(ArgumentAfterArrayError(
                "Cannot add an argument after an array argument.",
                name=arguments[index + 1].name,
            ))
            break

    optional = False
    for argument in arguments:
        if argument.kind.is_optional:
            optional = True
        elif optional:
            faults.append(RequiredAfterOptionalError(
                "Cannot add a required argument after an optional one.",
                name=argument.name,
            ))
            break

    if faults:
        raise DefinitionError(faults)
    return arguments


def validate_options(options, /):
    """
    Validate the option definitions of one command.

    Name and shortcut errors (including reserved application names/shortcuts and empty
    required-array defaults) are collected first; when there are none, name and then
    shortcut uniqueness are checked.

    Raises
    - TypeError: when an item is not an Option.
    - DefinitionError: carrying every violation found.
    """
    options = tuple(options)
    for option in options:
        if not isinstance(option, Option):
            raise TypeError("options must be a sequence of option definitions")

    faults = []
    for option in options:
        _collect(names.option_name, option.name, faults)
        if option.shortcut is not None:
            _collect(names.option_shortcut, option.shortcut, faults)
        if option.kind is OptionKind.REQUIRED_ARRAY and option.default == ():
            faults.append(EmptyDefaultError(
                f"Option \"{option.name}\" must have at least one default value.",
                name=option.name,
            ))
    if faults:
        raise DefinitionError(faults)

    for name in _duplicates(option.name for option in options):
        faults.append(DuplicateOptionError(f"An option named \"{name}\" already exists.", name=name))
    for shortcut in _duplicates(option.shortcut for option in options if option.shortcut is not None):
        faults.append(DuplicateShortcutError(
            f"An option with shortcut \"{shortcut}\" already exists.",
            shortcut=shortcut,
        ))

    if faults:
        raise DefinitionError(faults)
    return options


def usage(arguments, /):
    """
    Usage fragment of an argument list: "[--] <a> [<b>...]" (empty without arguments).
    """
    if not arguments:
        return ""
    return " ".join((f"[{names.SEPARATOR}]", *(argument.usage for argument in arguments)))


__all__ = (
    "ArgumentKind",
    "OptionKind",
    "Argument",
    "Option",
    "APPLICATION_OPTIONS",
    "validate_arguments",
    "validate_options",
)

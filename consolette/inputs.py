"""
Input: the resolved state of one invocation.

Scope
- Holds name -> ArgumentValue and name -> OptionValue mappings plus the definitions they
  were resolved against (used for existence checks).
- Typed getters over both mappings (value, string, list, int, try_int, is_set).
- Pure setters returning a new Input; the interactive stage uses them to fill gaps.

Contracts
- The "command" argument is implicitly defined on every Input; it carries the name of
  the command being run.
- Reading or writing a name that was never declared raises UndefinedNameError.
- Reading a declared name that has no value yet (arguments before completion) raises
  UndefinedNameError as well; `argument()`/`option()` return None instead.
- Writing a value of the wrong shape (list on a scalar, anything on a flag, empty
  value on a required definition) raises InvalidValueError.
"""
from types import MappingProxyType

from .arguments import ArgumentKind, OptionKind
from .faults import InvalidValueError, UndefinedNameError
from .names import COMMAND_ARGUMENT
from .values import ArgumentValue, OptionValue


class Input:
    __slots__ = ("_arguments", "_options", "_argument_definitions", "_option_definitions")

    def __init__(self, arguments=None, options=None, /, argument_definitions=(), option_definitions=()):
        self._arguments = MappingProxyType(dict(arguments or {}))
        self._options = MappingProxyType(dict(options or {}))
        self._argument_definitions = tuple(argument_definitions)
        self._option_definitions = tuple(option_definitions)

    @property
    def arguments(self):
        return self._arguments

    @property
    def options(self):
        return self._options

    @property
    def argument_definitions(self):
        return self._argument_definitions

    @property
    def option_definitions(self):
        return self._option_definitions

    @property
    def command(self):
        """
        Name of the command this input was resolved for ("" before routing).
        """
        value = self._arguments.get(COMMAND_ARGUMENT)
        return "" if value is None else value.payload

    def _copy(self, arguments=None, options=None):
        return type(self)(
            self._arguments if arguments is None else arguments,
            self._options if options is None else options,
            argument_definitions=self._argument_definitions,
            option_definitions=self._option_definitions,
        )

    def __eq__(self, other):
        if not isinstance(other, Input):
            return NotImplemented
        return (
            dict(self._arguments) == dict(other._arguments) and
            dict(self._options) == dict(other._options) and
            self._argument_definitions == other._argument_definitions and
            self._option_definitions == other._option_definitions
        )

    __hash__ = None

    def __repr__(self):
        return f"input(arguments={dict(self._arguments)!r}, options={dict(self._options)!r})"

    def __rich_repr__(self):
        yield "arguments", dict(self._arguments)
        yield "options", dict(self._options)

    # arguments

    def argument_definition(self, name, /):
        for definition in self._argument_definitions:
            if definition.name == name:
                return definition
        return None

    def has_argument_definition(self, name, /):
        return name == COMMAND_ARGUMENT or self.argument_definition(name) is not None

    def argument(self, name, /):
        """
        The ArgumentValue of `name`, None when it has no value (yet).

        Raises
        - UndefinedNameError: when `name` is not declared.
        """
        if not self.has_argument_definition(name):
            raise UndefinedNameError(f"The \"{name}\" argument does not exist.", name=name)
        return self._arguments.get(name)

    def has_argument(self, name, /):
        return self.argument(name) is not None

    def _argument(self, name):
        if (value := self.argument(name)) is None:
            raise UndefinedNameError(f"The \"{name}\" argument does not have a value.", name=name)
        return value

    def is_argument_set(self, name, /):
        return (value := self.argument(name)) is not None and value.is_set()

    def argument_value(self, name, /):
        return self._argument(name).value()

    def argument_string(self, name, /):
        return self._argument(name).string()

    def argument_list(self, name, /):
        return self._argument(name).list()

    def argument_int(self, name, /):
        return self._argument(name).int()

    def argument_try_int(self, name, /):
        return self._argument(name).try_int()

    def with_argument(self, name, value, /):
        """
        Return a new Input where argument `name` holds the single `value`.

        Array definitions receive a one-element list. Optional definitions accept None
        (unset); Required ones reject empty values.
        """
        if name == COMMAND_ARGUMENT:
            return self._copy(arguments=self._arguments | {name: ArgumentValue.required(name, value)})
        if (definition := self.argument_definition(name)) is None:
            raise UndefinedNameError(f"The \"{name}\" argument does not exist.", name=name)

        match definition.kind:
            case ArgumentKind.REQUIRED | ArgumentKind.REQUIRED_ARRAY:
                if not value:
                    raise InvalidValueError(f"The \"{name}\" argument does not accept an empty value.", name=name)
                bound = ArgumentValue(name, definition.kind, value if definition.kind is ArgumentKind.REQUIRED else (value,))
            case ArgumentKind.OPTIONAL:
                bound = ArgumentValue.optional(name, value)
            case ArgumentKind.ARRAY:
                bound = ArgumentValue.array(name, (value,))
        return self._copy(arguments=self._arguments | {name: bound})

    def with_argument_list(self, name, values, /):
        if (definition := self.argument_definition(name)) is None:
            raise UndefinedNameError(f"The \"{name}\" argument does not exist.", name=name)

        values = tuple(values)
        match definition.kind:
            case ArgumentKind.ARRAY:
                bound = ArgumentValue.array(name, values)
            case ArgumentKind.REQUIRED_ARRAY:
                if not values:
                    raise InvalidValueError(f"The \"{name}\" argument does not accept an empty list.", name=name)
                bound = ArgumentValue.required_array(name, values)
            case _:
                raise InvalidValueError(
                    f"The \"{name}\" argument does not accept a list value. Use with_argument() instead.",
                    name=name,
                )
        return self._copy(arguments=self._arguments | {name: bound})

    # options

    def option_definition(self, name, /):
        for definition in self._option_definitions:
            if definition.name == name:
                return definition
        return None

    def has_option_definition(self, name, /):
        return self.option_definition(name) is not None

    def option(self, name, /):
        """
        The OptionValue of `name`, None when it has no value.

        Raises
        - UndefinedNameError: when `name` is not declared.
        """
        if not self.has_option_definition(name):
            raise UndefinedNameError(f"The \"--{name}\" option does not exist.", name=name)
        return self._options.get(name)

    def has_option(self, name, /):
        return self.option(name) is not None

    def _option(self, name):
        if (value := self.option(name)) is None:
            raise UndefinedNameError(f"The \"--{name}\" option does not have a value.", name=name)
        return value

    def is_option_set(self, name, /):
        return (value := self.option(name)) is not None and value.is_set()

    def option_value(self, name, /):
        return self._option(name).value()

    def option_string(self, name, /):
        return self._option(name).string()

    def option_list(self, name, /):
        return self._option(name).list()

    def option_int(self, name, /):
        return self._option(name).int()

    def option_try_int(self, name, /):
        return self._option(name).try_int()

    def with_option(self, name, value, /):
        if (definition := self.option_definition(name)) is None:
            raise UndefinedNameError(f"The \"--{name}\" option does not exist.", name=name)

        match definition.kind:
            case OptionKind.NO_VALUE:
                raise InvalidValueError(f"The \"{name}\" option does not accept any value.", name=name)
            case OptionKind.REQUIRED:
                if not value:
                    raise InvalidValueError(f"The \"{name}\" option does not accept an empty value.", name=name)
                bound = OptionValue.required(name, value)
            case OptionKind.OPTIONAL:
                bound = OptionValue.optional(name, value)
            case OptionKind.ARRAY:
                bound = OptionValue.array(name, (value,))
            case OptionKind.REQUIRED_ARRAY:
                if not value:
                    raise InvalidValueError(f"The \"{name}\" option does not accept an empty value.", name=name)
                bound = OptionValue.required_array(name, (value,))
        return self._copy(options=self._options | {name: bound})

    def with_option_list(self, name, values, /):
        if (definition := self.option_definition(name)) is None:
            raise UndefinedNameError(f"The \"--{name}\" option does not exist.", name=name)

        values = tuple(values)
        match definition.kind:
            case OptionKind.NO_VALUE:
                raise InvalidValueError(f"The \"{name}\" option does not accept any value.", name=name)
            case OptionKind.ARRAY:
                bound = OptionValue.array(name, values)
            case OptionKind.REQUIRED_ARRAY:
                if not values:
                    raise InvalidValueError(f"The \"{name}\" option does not accept an empty list.", name=name)
                bound = OptionValue.required_array(name, values)
            case _:
                raise InvalidValueError(
                    f"The \"{name}\" option does not accept a list value. Use with_option() instead.",
                    name=name,
                )
        return self._copy(options=self._options | {name: bound})

    def with_values(self, arguments=None, options=None, /):
        """
        Return a new Input with the given mappings merged over the current ones.
        """
        return self._copy(
            arguments=self._arguments | dict(arguments or {}),
            options=self._options | dict(options or {}),
        )


__all__ = (
    "Input",
)

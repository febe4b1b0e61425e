"""
Resolved runtime values of arguments and options, and default filling.

ArgumentValue / OptionValue are immutable tagged values: (name, kind, payload). The
payload shape follows the kind:

    kind                      payload
    REQUIRED                  str
    OPTIONAL                  str | None
    ARRAY / REQUIRED_ARRAY    tuple[str, ...]
    NO_VALUE (options)        bool (present or not)

A REQUIRED_ARRAY argument value with an empty payload is "partially created": it only
exists while tokens are still being consumed, and complete_arguments() either sees
values in it or reports the argument as missing.
"""
from typing import NamedTuple

from .arguments import ArgumentKind, OptionKind
from .faults import InvalidValueError, NotEnoughArgumentsError
from .utils import Unset, coalesce


def _int(name, text, typename):
    try:
        return int(text)
    except ValueError:
        raise InvalidValueError(
            f"{typename} \"{name}\" value \"{text}\" is not an integer.",
            name=name,
            value=text,
        ) from None


class ArgumentValue(NamedTuple):
    name: str
    kind: ArgumentKind
    payload: str | None | tuple[str, ...]

    @classmethod
    def required(cls, name, value):
        return cls(name, ArgumentKind.REQUIRED, value)

    @classmethod
    def optional(cls, name, value=None):
        return cls(name, ArgumentKind.OPTIONAL, value)

    @classmethod
    def array(cls, name, values=()):
        return cls(name, ArgumentKind.ARRAY, tuple(values))

    @classmethod
    def required_array(cls, name, values=()):
        return cls(name, ArgumentKind.REQUIRED_ARRAY, tuple(values))

    def append(self, values):
        if not self.kind.is_array:
            raise TypeError(f"argument {self.name!r} is not a list")
        return self._replace(payload=self.payload + tuple(values))

    def value(self):
        """
        The single string value; fails for list-shaped or unset values.
        """
        match self.kind:
            case ArgumentKind.REQUIRED:
                return self.payload
            case ArgumentKind.OPTIONAL:
                if self.payload is None:
                    raise InvalidValueError(f"Argument \"{self.name}\" has no value.", name=self.name)
                return self.payload
            case ArgumentKind.ARRAY | ArgumentKind.REQUIRED_ARRAY:
                raise InvalidValueError(f"Argument \"{self.name}\" has list value.", name=self.name)

    def string(self):
        return None if self.kind.is_array else self.payload

    def list(self):
        if self.kind.is_array:
            return list(self.payload)
        return [] if self.payload is None else [self.payload]

    def int(self):
        text = self.string()
        return None if text is None else _int(self.name, text, "Argument")

    def try_int(self):
        try:
            return self.int()
        except InvalidValueError:
            return None

    def is_set(self):
        match self.kind:
            case ArgumentKind.REQUIRED:
                return bool(self.payload)
            case ArgumentKind.OPTIONAL:
                return self.payload is not None
            case ArgumentKind.ARRAY | ArgumentKind.REQUIRED_ARRAY:
                return len(self.payload) > 0


class OptionValue(NamedTuple):
    name: str
    kind: OptionKind
    payload: bool | str | None | tuple[str, ...]

    @classmethod
    def no_value(cls, name, present=True):
        return cls(name, OptionKind.NO_VALUE, present)

    @classmethod
    def required(cls, name, value):
        return cls(name, OptionKind.REQUIRED, value)

    @classmethod
    def optional(cls, name, value=None):
        return cls(name, OptionKind.OPTIONAL, value)

    @classmethod
    def array(cls, name, values=()):
        return cls(name, OptionKind.ARRAY, tuple(values))

    @classmethod
    def required_array(cls, name, values=()):
        return cls(name, OptionKind.REQUIRED_ARRAY, tuple(values))

    def append(self, values):
        if not self.kind.is_array:
            raise TypeError(f"option {self.name!r} is not a list")
        return self._replace(payload=self.payload + tuple(values))

    def value(self):
        """
        The single string value; fails for flags, list-shaped or unset values.
        """
        match self.kind:
            case OptionKind.REQUIRED:
                return self.payload
            case OptionKind.OPTIONAL:
                if self.payload is None:
                    raise InvalidValueError(f"Option \"{self.name}\" does not have a value.", name=self.name)
                return self.payload
            case OptionKind.NO_VALUE:
                raise InvalidValueError(f"Option \"{self.name}\" has no value.", name=self.name)
            case OptionKind.ARRAY | OptionKind.REQUIRED_ARRAY:
                raise InvalidValueError(f"Option \"{self.name}\" has list value.", name=self.name)

    def string(self):
        match self.kind:
            case OptionKind.REQUIRED | OptionKind.OPTIONAL:
                return self.payload
            case _:
                return None

    def list(self):
        match self.kind:
            case OptionKind.REQUIRED:
                return [self.payload]
            case OptionKind.OPTIONAL:
                return [] if self.payload is None else [self.payload]
            case OptionKind.NO_VALUE:
                return []
            case OptionKind.ARRAY | OptionKind.REQUIRED_ARRAY:
                return list(self.payload)

    def int(self):
        text = self.string()
        return None if text is None else _int(self.name, text, "Option")

    def try_int(self):
        try:
            return self.int()
        except InvalidValueError:
            return None

    def is_set(self):
        match self.kind:
            case OptionKind.NO_VALUE:
                return self.payload is True
            case OptionKind.REQUIRED | OptionKind.OPTIONAL:
                return self.payload is not None
            case OptionKind.ARRAY | OptionKind.REQUIRED_ARRAY:
                return len(self.payload) > 0


def complete_arguments(definitions, arguments, /):
    """
    Fill every argument definition that has no resolved value.

    Parameters
    - definitions: the command's argument definitions that were left unfilled by parsing,
      in declaration order.
    - arguments: mapping name -> ArgumentValue resolved so far.

    Returns
    - dict: a new mapping with an entry for every definition.

    Raises
    - NotEnoughArgumentsError: for the first Required/RequiredArray definition without
      a value.
    """
    arguments = dict(arguments)
    for definition in definitions:
        value = arguments.get(definition.name)
        match definition.kind:
            case ArgumentKind.REQUIRED | ArgumentKind.REQUIRED_ARRAY:
                if value is None or not value.is_set():
                    raise NotEnoughArgumentsError(
                        f"Not enough arguments (missing: \"{definition.name}\").",
                        name=definition.name,
                    )
            case ArgumentKind.OPTIONAL:
                if value is None:
                    arguments[definition.name] = ArgumentValue.optional(
                        definition.name,
                        coalesce(definition.default),
                    )
            case ArgumentKind.ARRAY:
                if value is None or not value.payload:
                    arguments[definition.name] = ArgumentValue.array(
                        definition.name,
                        coalesce(definition.default, ()),
                    )
    return arguments


def complete_options(definitions, options, /):
    """
    Fill every option definition that has no resolved value.

    Absent flags resolve to "not present"; absent value options resolve to their
    declared default, or to an unset value when none was declared.
    """
    options = dict(options)
    for definition in definitions:
        if definition.name in options:
            continue
        match definition.kind:
            case OptionKind.NO_VALUE:
                value = OptionValue.no_value(definition.name, False)
            case OptionKind.REQUIRED:
                value = OptionValue.required(definition.name, definition.default)
            case OptionKind.OPTIONAL:
                value = OptionValue.optional(definition.name, coalesce(definition.default))
            case OptionKind.ARRAY:
                value = OptionValue.array(definition.name, coalesce(definition.default, ()))
            case OptionKind.REQUIRED_ARRAY:
                value = OptionValue.required_array(definition.name, coalesce(definition.default, ()))
        options[definition.name] = value
    return options


def default_option(definition, /):
    """
    Value of an option that appeared without a value it could take.
    """
    match definition.kind:
        case OptionKind.OPTIONAL:
            return OptionValue.optional(definition.name, coalesce(definition.default))
        case OptionKind.ARRAY | OptionKind.REQUIRED_ARRAY:
            return OptionValue(definition.name, definition.kind, coalesce(definition.default, ()))
    raise TypeError(f"option {definition.name!r} cannot fall back to a default")


__all__ = (
    "ArgumentValue",
    "OptionValue",
    "complete_arguments",
    "complete_options",
)

"""
Parsing engine: raw tokens -> resolved argument and option values for one command.

phases
- consume: tokens are read left to right.
  • options (long form or shortcut clusters) bind immediately;
  • positional tokens are bound one at a time to the head of the unfilled argument
    definitions; array definitions stay at the head and keep accumulating;
  • the separator switches every remaining token to positional and binds them in one
    batch (arrays absorb everything left).
- complete: definitions never touched are defaulted (see values.complete_arguments and
  values.complete_options).

invariants
- every step builds new mappings; nothing already bound is mutated.
- a parse either succeeds or raises exactly one fault:
  RequiredValueNotSetError, UndefinedOptionError, TooManyArgumentsError or
  NotEnoughArgumentsError (the latter only on completion).
"""
import logging
from collections import deque
from types import MappingProxyType
from typing import NamedTuple

from .arguments import ArgumentKind, OptionKind
from .faults import RequiredValueNotSetError, UndefinedOptionError, TooManyArgumentsError
from .tokens import TokenKind, classify, find_shortcut, looks_like_option
from .values import ArgumentValue, OptionValue, complete_arguments, complete_options, default_option

logger = logging.getLogger(__name__)


class Parsed(NamedTuple):
    arguments: MappingProxyType
    options: MappingProxyType
    # argument definitions still waiting for values, in declaration order
    unfilled: tuple


def _too_many(definitions):
    if not definitions:
        message = "Too many arguments, no arguments expected."
    else:
        message = "Too many arguments, expected arguments %s." % " ".join(
            f"\"{definition.name}\"" for definition in definitions
        )
    return TooManyArgumentsError(message, arguments=tuple(definition.name for definition in definitions))


def _take_value(tokens):
    """
    Pop the next raw token as an option value unless it looks like an option itself.
    """
    if tokens and not looks_like_option(tokens[0]):
        return tokens.popleft()
    return None


def _bind_option(option, value, options):
    if option.kind.requires_value and value is None:
        raise RequiredValueNotSetError(
            f"The \"--{option.name}\" option requires a value.",
            option=option.name,
        )
    current = options.get(option.name)
    match option.kind:
        case OptionKind.NO_VALUE:
            bound = OptionValue.no_value(option.name)
        case OptionKind.REQUIRED:
            bound = OptionValue.required(option.name, value)
        case OptionKind.OPTIONAL:
            bound = OptionValue.optional(option.name, value) if value is not None else default_option(option)
        case OptionKind.ARRAY:
            values = (value,) if value is not None else default_option(option).payload
            bound = current.append(values) if current is not None else OptionValue.array(option.name, values)
        case OptionKind.REQUIRED_ARRAY:
            bound = current.append((value,)) if current is not None else OptionValue.required_array(option.name, (value,))
    return options | {option.name: bound}


def _consume_long(token, tokens, options):
    option = token.option
    logger.debug("parse option %r value for %r", token.text, option.name)
    if not option.kind.takes_value:
        if token.value is not None:
            # "--flag=text": the text is read as the next raw token
            tokens.appendleft(token.value)
        return _bind_option(option, None, options)
    value = token.value if token.value is not None else _take_value(tokens)
    return _bind_option(option, value, options)


def _consume_cluster(token, tokens, definitions, options):
    """
    Decompose a shortcut cluster such as "-fcWorld".

    Flags are recorded and decomposition continues with the next letter; the first
    value-taking letter swallows the rest of the cluster as its literal value (or, when
    nothing is left, the next raw token) and ends the cluster.
    """
    logger.debug("parse shortcut(s) %r", token.text)
    letters = token.text[1:]
    for index, letter in enumerate(letters):
        if (option := find_shortcut(definitions, letter)) is None:
            raise UndefinedOptionError(f"The \"-{letter}\" option does not exist.", option=f"-{letter}")
        if not option.kind.takes_value:
            options = _bind_option(option, None, options)
            continue
        value = letters[index + 1:] or _take_value(tokens)
        return _bind_option(option, value, options)
    return options


def _consume_positional(token, definitions, unfilled, arguments):
    logger.debug("parse argument %r", token)
    if not unfilled:
        raise _too_many(definitions)
    definition = unfilled[0]
    match definition.kind:
        case ArgumentKind.REQUIRED:
            return arguments | {definition.name: ArgumentValue.required(definition.name, token)}, unfilled[1:]
        case ArgumentKind.OPTIONAL:
            return arguments | {definition.name: ArgumentValue.optional(definition.name, token)}, unfilled[1:]
        case ArgumentKind.ARRAY | ArgumentKind.REQUIRED_ARRAY:
            current = arguments.get(definition.name) or ArgumentValue(definition.name, definition.kind, ())
            return arguments | {definition.name: current.append((token,))}, unfilled


def _consume_rest(tokens, definitions, unfilled, arguments):
    logger.debug("parse arguments after separator %r for %r", tokens, [definition.name for definition in unfilled])
    while tokens:
        if not unfilled:
            raise _too_many(definitions)
        definition, unfilled = unfilled[0], unfilled[1:]
        match definition.kind:
            case ArgumentKind.REQUIRED:
                arguments = arguments | {definition.name: ArgumentValue.required(definition.name, tokens[0])}
                tokens = tokens[1:]
            case ArgumentKind.OPTIONAL:
                arguments = arguments | {definition.name: ArgumentValue.optional(definition.name, tokens[0])}
                tokens = tokens[1:]
            case ArgumentKind.ARRAY | ArgumentKind.REQUIRED_ARRAY:
                current = arguments.get(definition.name) or ArgumentValue(definition.name, definition.kind, ())
                arguments = arguments | {definition.name: current.append(tokens)}
                tokens = ()
    return arguments, unfilled


def parse(tokens, arguments, options, /):
    """
    Consume raw tokens against a command's definitions.

    Parameters
    - tokens: Iterable[str], the raw tokens following the command name.
    - arguments: ordered argument definitions.
    - options: option definitions (application options included).

    Returns
    - Parsed: values bound so far plus the argument definitions left unfilled. Options
      that never appeared have no entry yet.

    Raises
    - RequiredValueNotSetError, UndefinedOptionError, TooManyArgumentsError.
    """
    definitions = tuple(arguments)
    options = tuple(options)
    tokens = deque(tokens)

    bound_arguments = {}
    bound_options = {}
    unfilled = definitions

    while tokens:
        token = classify(tokens.popleft(), options)
        match token.kind:
            case TokenKind.SEPARATOR:
                bound_arguments, unfilled = _consume_rest(tuple(tokens), definitions, unfilled, bound_arguments)
                tokens.clear()
            case TokenKind.LONG_OPTION:
                bound_options = _consume_long(token, tokens, bound_options)
            case TokenKind.SHORT_CLUSTER:
                bound_options = _consume_cluster(token, tokens, options, bound_options)
            case TokenKind.UNDEFINED_OPTION:
                raise UndefinedOptionError(f"The \"{token.text}\" option does not exist.", option=token.text)
            case TokenKind.POSITIONAL:
                bound_arguments, unfilled = _consume_positional(token.text, definitions, unfilled, bound_arguments)

    return Parsed(MappingProxyType(bound_arguments), MappingProxyType(bound_options), unfilled)


def resolve(tokens, arguments, options, /):
    """
    Parse and complete in one go: every definition ends up with a value.

    Returns
    - tuple[dict, dict]: (arguments, options) mappings name -> value.

    Raises
    - every fault parse() raises, plus NotEnoughArgumentsError.
    """
    options = tuple(options)
    parsed = parse(tokens, arguments, options)
    return (
        complete_arguments(parsed.unfilled, parsed.arguments),
        complete_options(options, parsed.options),
    )


__all__ = (
    "Parsed",
    "parse",
    "resolve",
)

"""
Naming rules shared by arguments, options, shortcuts, commands and applications.

Every validator returns the name unchanged when it is acceptable and raises the
matching naming fault otherwise. Nothing here has side effects.

Rules
- argument: no "-" prefix, no space, not "command".
- option: no "-" prefix, no "=" and no whitespace, not a reserved application option.
- shortcut: exactly one letter, no "-", not a reserved application shortcut.
- command: only word characters, ".", "-", ":" and space; no ":"/"-" prefix, no space,
  no "::", no ":" suffix; not a built-in command name (registration only).
- application: anything non-empty.
"""
import re
from types import MappingProxyType

from .faults import (
    EmptyNameError,
    NameStartsWithError,
    NameContainsError,
    NameEndsWithError,
    ReservedNameError,
    InvalidNameError,
    EmptyShortcutError,
    ShortcutContainsError,
    ShortcutTooLongError,
    ReservedShortcutError,
)

SEPARATOR = "--"
NAMESPACE_SEPARATOR = ":"

COMMAND_ARGUMENT = "command"

RESERVED_OPTIONS = (
    "help",
    "quiet",
    "version",
    "verbose",
    "no-interaction",
    "no-progress",
    "no-ansi",
)

# shortcut -> option it belongs to
RESERVED_SHORTCUTS = MappingProxyType({
    "h": "help",
    "q": "quiet",
    "V": "version",
    "v": "verbose",
    "n": "no-interaction",
})

RESERVED_COMMANDS = ("list", "help", "about", "exit")

_WHITESPACE = (" ", "\t", "\r", "\n")


def validate(name, prefixes=(), substrings=(), suffixes=(), /, *, kind="name"):
    """
    Check a raw name against forbidden prefixes, substrings and suffixes.

    Checks run in that order and the first violation wins; each fault carries the
    offending fragment under options["fragment"].

    Raises
    - TypeError: when name is not a string.
    - EmptyNameError, NameStartsWithError, NameContainsError, NameEndsWithError.
    """
    if not isinstance(name, str):
        raise TypeError(f"{kind} must be a string")
    if not name:
        raise EmptyNameError(f"{kind.capitalize()} name is empty.", name=name)
    for prefix in prefixes:
        if name.startswith(prefix):
            raise NameStartsWithError(
                f"{kind.capitalize()} name \"{name}\" must not start with \"{prefix}\".",
                name=name,
                fragment=prefix,
            )
    for substring in substrings:
        if substring in name:
            raise NameContainsError(
                f"{kind.capitalize()} name \"{name}\" must not contain \"{substring}\".",
                name=name,
                fragment=substring,
            )
    for suffix in suffixes:
        if name.endswith(suffix):
            raise NameEndsWithError(
                f"{kind.capitalize()} name \"{name}\" must not end with \"{suffix}\".",
                name=name,
                fragment=suffix,
            )
    return name


def argument_name(name, /):
    if name == COMMAND_ARGUMENT:
        raise ReservedNameError(
            f"Argument name \"{name}\" is reserved. Please use something else.",
            name=name,
        )
    return validate(name, ("-",), (" ",), (), kind="argument")


def option_name(name, /):
    if name in RESERVED_OPTIONS:
        raise ReservedNameError(
            f"Option name \"{name}\" is reserved. Please use something else.",
            name=name,
        )
    return validate(name, ("-",), ("=", *_WHITESPACE), (), kind="option")


def option_shortcut(shortcut, /):
    if not isinstance(shortcut, str):
        raise TypeError("shortcut must be a string")
    if not shortcut:
        raise EmptyShortcutError("An option shortcut cannot be empty.", shortcut=shortcut)
    if "-" in shortcut:
        raise ShortcutContainsError(
            f"An option shortcut \"{shortcut}\" cannot contain \"-\".",
            shortcut=shortcut,
            fragment="-",
        )
    if len(shortcut) > 1:
        raise ShortcutTooLongError(
            f"An option shortcut \"{shortcut}\" cannot be more than single letter.",
            shortcut=shortcut,
        )
    if shortcut in RESERVED_SHORTCUTS:
        raise ReservedShortcutError(
            f"An option shortcut \"{shortcut}\" is reserved for option \"{RESERVED_SHORTCUTS[shortcut]}\". "
            "Please use something else.",
            shortcut=shortcut,
            option=RESERVED_SHORTCUTS[shortcut],
        )
    return shortcut


def _command_name(name):
    if not isinstance(name, str):
        raise TypeError("command must be a string")
    if not re.fullmatch(r"[\w.\-: ]*", name):
        raise InvalidNameError(f"Command name \"{name}\" is invalid.", name=name)
    return validate(
        name,
        (NAMESPACE_SEPARATOR, "-"),
        (" ", NAMESPACE_SEPARATOR * 2),
        (NAMESPACE_SEPARATOR,),
        kind="command",
    )


def command_name(name, /):
    """
    Validate a command name at registration time (built-in names are reserved).
    """
    if name == COMMAND_ARGUMENT or name in RESERVED_COMMANDS:
        raise ReservedNameError(
            f"Command name \"{name}\" is reserved. Please use something else.",
            name=name,
        )
    return _command_name(name)


def runtime_command_name(name, /):
    """
    Validate a command name typed by the user; built-in names are accepted.
    """
    if name == COMMAND_ARGUMENT:
        raise InvalidNameError(f"Command name \"{name}\" is invalid.", name=name)
    return _command_name(name)


def is_command_name(token, /):
    try:
        runtime_command_name(token)
    except (InvalidNameError, EmptyNameError, NameStartsWithError, NameContainsError, NameEndsWithError):
        return False
    return True


def application_name(name, /):
    return validate(name, kind="application")


def namespace(name, /):
    """
    Return the first namespace segment of a command name.
    """
    return name.split(NAMESPACE_SEPARATOR)[0]


__all__ = (
    "SEPARATOR",
    "NAMESPACE_SEPARATOR",
    "RESERVED_OPTIONS",
    "RESERVED_SHORTCUTS",
    "RESERVED_COMMANDS",
    "validate",
    "argument_name",
    "option_name",
    "option_shortcut",
    "command_name",
    "runtime_command_name",
    "is_command_name",
    "application_name",
)

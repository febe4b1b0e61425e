"""
Consolette faults (errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing error.
  Codes are grouped by domain to keep copy consistent and logs searchable.
- CommandException: base type carrying message + options (the structured payload of
  the fault) that knows how to render itself through rich.
- DefinitionError: group of every violation found while registering one command.
- trigger(): central entry point to surface a fault (respecting shell/deferred/colorful).

Domains
- input (100xx): the raw command line cannot be split into tokens.
- naming (101xx): a name or shortcut breaks the naming rules.
- definition (102xx): a command's argument/option list is structurally invalid.
- option parsing (111xx), argument parsing (112xx): a single terminal runtime error.
- routing (113xx): the typed command name does not resolve to exactly one command.
- values (114xx): a resolved value cannot be read or written the requested way.
- execution (115xx): a command body failed.

Integration
- The core raises faults and never prints them.
- The application boundary calls trigger(fault, shell=True, deferred=True, ...) which
  renders the fault on the stderr console and lets the caller translate it into an
  exit code.
"""
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the library (stable identifiers).

    grouping (by high-level domain)
    - input (100xx)
      • INVALID_INPUT
    - naming (101xx)
      • EMPTY_NAME, NAME_STARTS_WITH, NAME_CONTAINS, NAME_ENDS_WITH, RESERVED_NAME,
        INVALID_NAME, EMPTY_SHORTCUT, SHORTCUT_CONTAINS, SHORTCUT_TOO_LONG,
        RESERVED_SHORTCUT
    - definition (102xx)
      • DUPLICATE_ARGUMENT, ARGUMENT_AFTER_ARRAY, REQUIRED_AFTER_OPTIONAL,
        DUPLICATE_OPTION, DUPLICATE_SHORTCUT, EMPTY_REQUIRED_ARRAY_DEFAULT,
        DUPLICATE_COMMAND, INVALID_DEFINITION
    - option parsing (111xx)
      • REQUIRED_VALUE_NOT_SET, UNDEFINED_OPTION
    - argument parsing (112xx)
      • NOT_ENOUGH_ARGUMENTS, TOO_MANY_ARGUMENTS
    - routing (113xx)
      • COMMAND_NOT_FOUND, AMBIGUOUS_COMMAND, NAMESPACE_NOT_FOUND
    - values (114xx)
      • INVALID_VALUE, UNDEFINED_NAME
    - execution (115xx)
      • APPLICATION_ERROR

    normalize() lets the host relabel codes while keeping them stable.
    """
    # --- input errors (100xx) ---
    INVALID_INPUT                = 10001

    # --- naming errors (101xx) ---
    EMPTY_NAME                   = 10101
    NAME_STARTS_WITH             = 10102
    NAME_CONTAINS                = 10103
    NAME_ENDS_WITH               = 10104
    RESERVED_NAME                = 10105
    INVALID_NAME                 = 10106
    EMPTY_SHORTCUT               = 10111
    SHORTCUT_CONTAINS            = 10112
    SHORTCUT_TOO_LONG            = 10113
    RESERVED_SHORTCUT            = 10114

    # --- definition errors (102xx) ---
    DUPLICATE_ARGUMENT           = 10201
    ARGUMENT_AFTER_ARRAY         = 10202
    REQUIRED_AFTER_OPTIONAL      = 10203
    DUPLICATE_OPTION             = 10204
    DUPLICATE_SHORTCUT           = 10205
    EMPTY_REQUIRED_ARRAY_DEFAULT = 10206
    DUPLICATE_COMMAND            = 10207
    INVALID_DEFINITION           = 10299

    # --- option parsing errors (111xx) ---
    REQUIRED_VALUE_NOT_SET       = 11101
    UNDEFINED_OPTION             = 11102

    # --- argument parsing errors (112xx) ---
    NOT_ENOUGH_ARGUMENTS         = 11201
    TOO_MANY_ARGUMENTS           = 11202

    # --- routing errors (113xx) ---
    COMMAND_NOT_FOUND            = 11301
    AMBIGUOUS_COMMAND            = 11302
    NAMESPACE_NOT_FOUND          = 11303

    # --- value errors (114xx) ---
    INVALID_VALUE                = 11401
    UNDEFINED_NAME               = 11402

    # --- execution errors (115xx) ---
    APPLICATION_ERROR            = 11501

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _prog():
    return getattr(__import__("__main__"), "__prog__", None) or "console"


class CommandException(Exception):
    """
    Base class of every fault raised by the library.

    The payload lives in `options` (read-only); rendering options (prog, colorful,
    fancy, ratio, shell, deferred) are merged into it by trigger().
    """
    __faultcode__ = FaultCode.INVALID_DEFINITION
    __faulttitle__ = "error"

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def code(self):
        return self.options.get("code", type(self).__faultcode__)

    @property
    def title(self):
        return self.options.get("title", type(self).__faulttitle__)

    def __str__(self):
        return self.message if self.message is not Unset else self.title

    def __rich__(self):
        main = __import__("__main__")

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",
            "code": "bold #00E5FF",
            "error-title": "bold #FF4DA6",

            # body
            "error-message": "#C8C8D0",
            "hint-arrow": "#9CE19C dim",
            "hint": "italic #9CE19C",
        } | getattr(main, "__styles__", {}))

        colorful = self.options.get("colorful", True)
        fancy = self.options.get("fancy", False)

        def styler(style):
            return styles[style] if colorful else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), style)

        header = Text.assemble(
            "[ ",
            text(self.options.get("prog") or _prog(), styler("prog-name")),
            " — ",
            text(self.code.normalize(), styler("code")),
            " | ",
            text(self.title.title(), styler("error-title")),
            " ]"
        )
        message = text(str(self), styler("error-message"))
        renders = [message]
        if hint := self.options.get("hint"):
            renders.append(Text.assemble(text(" → ", styler("hint-arrow")), text(hint, styler("hint"))))

        if fancy:
            try:
                width = int((console.width - 4) * self.options["ratio"])
            except KeyError:
                width = None
            return Panel(Group(*renders), title=header, title_align="left", width=width)

        return Group(header, *renders)

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        self.options.get("console", console).print(self)
        if self.options.get("deferred", False):
            return
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


# input
class InvalidInputError(CommandException):
    __faultcode__, __faulttitle__ = FaultCode.INVALID_INPUT, "invalid input"

# naming
class EmptyNameError(CommandException):
    __faultcode__, __faulttitle__ = FaultCode.EMPTY_NAME, "empty name"
class NameStartsWithError(CommandException):
    __faultcode__, __faulttitle__ = FaultCode.NAME_STARTS_WITH, "invalid name prefix"
class NameContainsError(CommandException):
    __faultcode__, __faulttitle__ = FaultCode.NAME_CONTAINS, "invalid name content"
class NameEndsWithError(CommandException):
    __faultcode__, __faulttitle__ = FaultCode.NAME_ENDS_WITH, "invalid name suffix"
class ReservedNameError(CommandException):
    __faultcode__, __faulttitle__ = FaultCode.RESERVED_NAME, "reserved name"
class InvalidNameError(CommandException):
    __faultcode__, __faulttitle__ = FaultCode.INVALID_NAME, "invalid name"
class EmptyShortcutError(CommandException):
    __faultcode__, __faulttitle__ = FaultCode.EMPTY_SHORTCUT, "empty shortcut"
class ShortcutContainsError(CommandException):
    __faultcode__, __faulttitle__ = FaultCode.SHORTCUT_CONTAINS, "invalid shortcut content"
class ShortcutTooLongError(CommandException):
    __faultcode__, __faulttitle__ = FaultCode.SHORTCUT_TOO_LONG, "shortcut too long"
class ReservedShortcutError(CommandException):
    __faultcode__, __faulttitle__ = FaultCode.RESERVED_SHORTCUT, "reserved shortcut"

# definition structure
class DuplicateArgumentError(CommandException):
    __faultcode__, __faulttitle__ = FaultCode.DUPLICATE_ARGUMENT, "duplicate argument"
class ArgumentAfterArrayError(CommandException):
    __faultcode__, __faulttitle__ = FaultCode.ARGUMENT_AFTER_ARRAY, "argument after array"
class RequiredAfterOptionalError(CommandException):
    __faultcode__, __faulttitle__ = FaultCode.REQUIRED_AFTER_OPTIONAL, "required after optional"
class DuplicateOptionError(CommandException):
    __faultcode__, __faulttitle__ = FaultCode.DUPLICATE_OPTION, "duplicate option"
class DuplicateShortcutError(CommandException):
    __faultcode__, __faulttitle__ = FaultCode.DUPLICATE_SHORTCUT, "duplicate shortcut"
class EmptyDefaultError(CommandException):
    __faultcode__, __faulttitle__ = FaultCode.EMPTY_REQUIRED_ARRAY_DEFAULT, "empty default"
class DuplicateCommandError(CommandException):
    __faultcode__, __faulttitle__ = FaultCode.DUPLICATE_COMMAND, "duplicate command"

# runtime: options
class RequiredValueNotSetError(CommandException):
    __faultcode__, __faulttitle__ = FaultCode.REQUIRED_VALUE_NOT_SET, "missing option value"
class UndefinedOptionError(CommandException):
    __faultcode__, __faulttitle__ = FaultCode.UNDEFINED_OPTION, "undefined option"

# runtime: arguments
class NotEnoughArgumentsError(CommandException):
    __faultcode__, __faulttitle__ = FaultCode.NOT_ENOUGH_ARGUMENTS, "not enough arguments"
class TooManyArgumentsError(CommandException):
    __faultcode__, __faulttitle__ = FaultCode.TOO_MANY_ARGUMENTS, "too many arguments"

# runtime: routing
class CommandNotFoundError(CommandException):
    __faultcode__, __faulttitle__ = FaultCode.COMMAND_NOT_FOUND, "command not found"
class AmbiguousCommandError(CommandException):
    __faultcode__, __faulttitle__ = FaultCode.AMBIGUOUS_COMMAND, "ambiguous command"
class NamespaceNotFoundError(CommandException):
    __faultcode__, __faulttitle__ = FaultCode.NAMESPACE_NOT_FOUND, "namespace not found"

# runtime: values
class InvalidValueError(CommandException, ValueError):
    __faultcode__, __faulttitle__ = FaultCode.INVALID_VALUE, "invalid value"
class UndefinedNameError(CommandException, LookupError):
    __faultcode__, __faulttitle__ = FaultCode.UNDEFINED_NAME, "undefined name"

# runtime: execution
class ApplicationError(CommandException):
    __faultcode__, __faulttitle__ = FaultCode.APPLICATION_ERROR, "application error"


class DefinitionError(ExceptionGroup[CommandException]):
    """
    Every violation found while registering one command, reported together.
    """

    def __new__(cls, exceptions, **options):
        return super().__new__(cls, "invalid definition", exceptions)

    def __init__(self, exceptions, **options):
        super().__init__("invalid definition", tuple(exceptions))
        self.options = MappingProxyType(options)

    def derive(self, exceptions):
        return type(self)(exceptions, **self.options)

    def __rich__(self):
        main = __import__("__main__")

        styles = defaultdict(str, {
            "prog-name": "bold #E6E6F0",
            "title": "bold #FF4DA6",
        } | getattr(main, "__styles__", {}))

        colorful = self.options.get("colorful", True)

        def text(fragment, style=""):
            return Text(str(fragment), styles[style] if colorful else "")

        header = Text.assemble(
            "[ ",
            text(self.options.get("prog") or _prog(), "prog-name"),
            " — ",
            text(self.message.title(), "title"),
            " ]"
        )
        renders = [exception.__replace__(**{**self.options, "ratio": 2/3}) for exception in self.exceptions]

        if self.options.get("fancy", False):
            return Panel(Group(*renders), title=header, title_align="left")

        return Group(header, *renders)

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        self.options.get("console", console).print(self)
        if self.options.get("deferred", False):
            return
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.exceptions, **{**self.options, **overrides})


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via __replace__(**options) before triggering.
    - in shell mode the fault is rendered on the stderr console, then the process exits
      with 1 unless deferred; otherwise the (merged) fault is raised.

    typical options
    - prog, shell, deferred, colorful, fancy, hint, console (a rich Console to print on).
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    fault.__replace__(**options).__trigger__()


__all__ = (
    "FaultCode",
    "CommandException",
    "InvalidInputError",
    "EmptyNameError",
    "NameStartsWithError",
    "NameContainsError",
    "NameEndsWithError",
    "ReservedNameError",
    "InvalidNameError",
    "EmptyShortcutError",
    "ShortcutContainsError",
    "ShortcutTooLongError",
    "ReservedShortcutError",
    "DuplicateArgumentError",
    "ArgumentAfterArrayError",
    "RequiredAfterOptionalError",
    "DuplicateOptionError",
    "DuplicateShortcutError",
    "EmptyDefaultError",
    "DuplicateCommandError",
    "RequiredValueNotSetError",
    "UndefinedOptionError",
    "NotEnoughArgumentsError",
    "TooManyArgumentsError",
    "CommandNotFoundError",
    "AmbiguousCommandError",
    "NamespaceNotFoundError",
    "InvalidValueError",
    "UndefinedNameError",
    "ApplicationError",
    "DefinitionError",
    "trigger",
)

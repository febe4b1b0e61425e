"""
Consolette application: registry of commands plus the run life-cycle.

Run flow (Application.run)
1. tokens come from sys.argv[1:], a shell-like string or an iterable of strings.
2. verbosity and colors are derived from the raw tokens (-q, -v/-vv/-vvv, --no-ansi);
   -vvv also routes the package's debug logs through rich.logging.RichHandler.
3. empty tokens, or tokens made only of options, get the default command prepended.
4. --help/-h renders the help of the first command-name token; --version/-V renders
   the name and version. Both exit with 0.
5. otherwise the first token is resolved to a command (exact, then partial name),
   the rest is parsed against the command's definitions plus the application
   options, then: initialize -> interact (unless --no-interaction) -> argument
   completion -> execute.

Failures
- every fault is rendered once on the error console, followed by the single-line
  usage of the resolved command (when one was resolved), and run() returns 1.
- any other exception escaping a life-cycle callable becomes an ApplicationError
  carrying its message.
- a prompt string that cannot be split into tokens (unbalanced quotes) is reported
  as an InvalidInputError.
"""
import logging
import shlex
import sys
from collections.abc import Iterable, Mapping
from types import MappingProxyType

from rich.logging import RichHandler
from rich.text import Text

from . import names, render
from .arguments import APPLICATION_OPTIONS
from .commands import EXIT_COMMAND, Command, about_command, help_command, list_command
from .faults import (
    ApplicationError,
    CommandException,
    DefinitionError,
    DuplicateCommandError,
    InvalidInputError,
    trigger,
)
from .inputs import Input
from .output import Output, verbosity
from .parser import parse
from .resolver import find
from .utils import Unset
from .values import ArgumentValue, complete_arguments, complete_options

logger = logging.getLogger(__name__)


def _split(line):
    try:
        return shlex.split(line)
    except ValueError as error:
        raise InvalidInputError(f"Could not read \"{line}\": {error}.", input=line) from error


def _tokens(prompt):
    if prompt is Unset:
        return list(sys.argv[1:])
    if isinstance(prompt, str):
        return _split(prompt)
    if isinstance(prompt, Iterable):
        tokens = list(prompt)
        if not all(isinstance(token, str) for token in tokens):
            raise TypeError("run() argument must be a string or an iterable of strings")
        return tokens
    raise TypeError("run() argument must be a string or an iterable of strings")


def _options_only(tokens):
    return all(token.startswith("-") and token != names.SEPARATOR for token in tokens)


def _before_separator(tokens):
    if names.SEPARATOR in tokens:
        return tokens[:tokens.index(names.SEPARATOR)]
    return tokens


class Application:
    """
    A console application.

    Parameters
    - name: str, non-empty application name.
    - version: str | None, shown by --version and about.
    - title: str | None, shown as heading in interactive mode.
    - description: str | None, shown by about.
    - meta: Mapping[str, str], extra lines for about.
    - default: str, the command run when none is typed (may be a built-in).
    - ask: Callable[[str], str], interactive prompt; Output.ask when omitted.
    - output: Output, printing surface; a stdout/stderr Output when omitted.
    - colorful, fancy: fault and help rendering switches.

    Raises
    - TypeError: on wrongly typed parameters.
    - CommandException: when the name or the default command name is invalid.
    """

    def __init__(
            self,
            name,
            /,
            version=None,
            title=None,
            description=None,
            meta=None,
            default="list",
            ask=None,
            output=None,
            colorful=True,
            fancy=False,
    ):
        for parameter, value in (("version", version), ("title", title), ("description", description)):
            if not isinstance(value, str | None):
                raise TypeError(f"application {parameter!r} must be a string")
        if not isinstance(meta, Mapping | None):
            raise TypeError("application 'meta' must be a mapping")
        if not isinstance(output, Output | None):
            raise TypeError("application 'output' must be an output")
        if ask is not None and not callable(ask):
            raise TypeError("application 'ask' must be callable")

        self._name = names.application_name(name)
        self._version = version
        self._title = title
        self._description = description
        self._meta = MappingProxyType(dict(meta or {}))
        self._default = names.runtime_command_name(default)
        self._output = output or Output()
        self._ask = ask or self._output.ask
        self._colorful = colorful
        self._fancy = fancy
        self._handler = None
        self._level = logging.NOTSET
        self._commands = {
            "list": list_command(self),
            "help": help_command(self),
            "about": about_command(self),
        }

    @property
    def name(self):
        return self._name

    @property
    def version(self):
        return self._version

    @property
    def title(self):
        return self._title

    @property
    def description(self):
        return self._description

    @property
    def meta(self):
        return self._meta

    @property
    def default(self):
        return self._default

    @property
    def output(self):
        return self._output

    @property
    def commands(self):
        return MappingProxyType(self._commands)

    @property
    def options(self):
        return APPLICATION_OPTIONS

    def __repr__(self):
        return f"application(name={self._name!r}, version={self._version!r}, commands={sorted(self._commands)!r})"

    def register(self, name, command, /):
        """
        Register `command` under `name` and return the application (for chaining).

        Raises
        - TypeError: when command is not a Command.
        - CommandException: when name breaks the naming rules or is a built-in name.
        - DuplicateCommandError: when name is already registered.
        """
        if not isinstance(command, Command):
            raise TypeError("register() second argument must be a command")
        names.command_name(name)
        if name in self._commands:
            raise DuplicateCommandError(f"A command named \"{name}\" already exists.", name=name)
        self._commands[name] = command
        logger.debug("registered command %r", name)
        return self

    def command(self, name, /, **kwargs):
        """
        Decorator registering a callable as a command.

            @application.command("greet", descr="Greets someone")
            def greet(input, output): ...
        """
        def wrapper(execute):
            self.register(name, Command(execute, **kwargs))
            return execute
        return wrapper

    def _configure(self, tokens):
        output = self._output
        output.verbosity = verbosity(tokens)
        output.colorful = self._colorful and "--no-ansi" not in tokens

        package = logging.getLogger(__package__)
        if output.is_debug():
            if self._handler is None:
                self._handler = RichHandler(console=output.errors, show_path=False)
                self._level = package.level
                package.addHandler(self._handler)
            package.setLevel(logging.DEBUG)
        elif self._handler is not None:
            package.removeHandler(self._handler)
            package.setLevel(self._level)
            self._handler = None

    def _help(self, tokens):
        name = next((token for token in tokens if names.is_command_name(token)), self._default)
        resolved = find(name, self._commands)
        render.help(self._output, resolved, self._commands[resolved], self.options)
        return 0

    def _version_line(self):
        line = Text(self._name)
        if self._version:
            line.append(" ").append(f"<{self._version}>", "green" if self._output.colorful else "")
        self._output.message(line)
        return 0

    def _parse(self, resolved, tokens):
        command = self._commands[resolved]
        definitions = (*APPLICATION_OPTIONS, *command.options)

        parsed = parse(tokens, command.arguments, definitions)
        input = Input(
            parsed.arguments | {names.COMMAND_ARGUMENT: ArgumentValue.required(names.COMMAND_ARGUMENT, resolved)},
            complete_options(definitions, parsed.options),
            argument_definitions=command.arguments,
            option_definitions=definitions,
        )
        logger.debug("input for %r: %r", resolved, input)
        return command, input, parsed.unfilled

    def _execute(self, command, input, unfilled):
        output = self._output
        try:
            input = command.initialize(input, output)
            input = command.interact(input, output, self._ask)
            input = input.with_values(complete_arguments(unfilled, input.arguments))
            return command.execute(input, output)
        except CommandException:
            raise
        except Exception as error:
            logger.debug("command failed", exc_info=True)
            raise ApplicationError(str(error), error=type(error).__name__) from error

    def _report(self, fault, resolved=None):
        trigger(
            fault,
            shell=True,
            deferred=True,
            prog=self._name,
            colorful=self._output.colorful,
            fancy=self._fancy,
            console=self._output.errors,
        )
        if resolved is not None:
            render.single_line(self._output, resolved, self._commands[resolved], self.options)

    def run(self, prompt=Unset, /):
        """
        Run one command and return its exit code (0 success, 1 any reported error).

        Parameters
        - prompt: Unset (sys.argv[1:]), a shell-like string or an iterable of tokens.
        """
        try:
            tokens = _tokens(prompt)
        except InvalidInputError as fault:
            self._report(fault)
            return 1
        self._configure(tokens)

        if not tokens or _options_only(tokens):
            tokens = [self._default, *tokens]

        resolved = None
        options = _before_separator(tokens)
        try:
            if "--help" in options or "-h" in options:
                return self._help(tokens)
            if "--version" in options or "-V" in options:
                return self._version_line()

            resolved = find(names.runtime_command_name(tokens[0]), self._commands)
            return self._execute(*self._parse(resolved, tokens[1:]))
        except (CommandException, DefinitionError) as fault:
            self._report(fault, resolved)
            return 1

    def run_interactively(self, prompt=Unset, /):
        """
        Keep asking for a command and run it with the fixed trailing `prompt` tokens.

        Returns the exit code of the first failing command, or the last one when the
        user leaves with "exit". A line that cannot be split into tokens (unbalanced
        quotes) is reported and asked again.
        """
        try:
            tokens = _tokens(prompt)
        except InvalidInputError as fault:
            self._report(fault)
            return 1
        heading = self._title or (f"{self._name} <{self._version}>" if self._version else self._name)
        code = 0
        while True:
            self._output.title(f"{heading} - interactive mode")
            render.commands(self._output, self._commands | {"exit": EXIT_COMMAND})

            try:
                typed = _split(self._ask("Command:"))
            except InvalidInputError as fault:
                self._report(fault)
                continue

            match typed:
                case []:
                    continue
                case ["exit", *_]:
                    return code
                case _:
                    code = self.run([*typed, *tokens])
            if code != 0:
                return code

    def __invoke__(self, prompt=Unset):
        return self.run(prompt)


def invoke(application, prompt=Unset, /):
    """
    Run an application and exit the process with its exit code.
    """
    if not hasattr(application, "__invoke__") or not callable(application.__invoke__):
        raise TypeError("invoke() argument must be an application")
    sys.exit(application.__invoke__(prompt))


__all__ = (
    "Application",
    "invoke",
)

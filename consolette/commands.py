"""
Consolette commands: registered units of work and the built-in ones.

What this module provides
- Command: description, help text, argument/option definitions and three life-cycle
  callables:
  • initialize(input, output) -> Input | None     runs first;
  • interact(input, output, ask) -> Input | None  skipped with --no-interaction;
  • execute(input, output) -> int | None          the body; None means success (0).
  Definitions are validated once, when the command is built: argument problems are
  reported before option problems, each as one DefinitionError.
- command(...): build a Command directly or as a decorator.
- Built-ins bound to an application: list, help, about (and exit, interactive mode only).

Quick start
    from consolette import Application, Argument, Option, command

    @command(
        descr="Greets someone",
        arguments=[Argument.required("name", "Who to greet")],
        options=[Option.no_value("yell", "y", "Shout it")],
    )
    def greet(input, output):
        text = f"Hello {input.argument_value('name')}"
        output.message(text.upper() if input.is_option_set("yell") else text)

    Application("greeter", version="1.0.0").register("greet", greet).run()
"""
import logging

from . import names, render
from .arguments import Argument, validate_arguments, validate_options
from .faults import NamespaceNotFoundError
from .resolver import find
from .utils import Unset, mirror, rename

logger = logging.getLogger(__name__)


class Command:
    """
    A registered unit of work.

    Parameters
    - execute: Callable[[Input, Output], int | None], the command body.
    - descr: str, one-line description shown in listings.
    - help: str | None, long help; may use {{command.name}}/{{command.full_name}}.
    - arguments: ordered Iterable[Argument].
    - options: Iterable[Option].
    - initialize, interact: optional life-cycle callables (see module docstring).

    Raises
    - TypeError: on wrongly typed parameters.
    - DefinitionError: when the argument (first) or option definitions are invalid.
    """

    __introspectable__ = (
        "descr",
        "help",
        "arguments",
        "options",
    )

    descr = mirror("descr")
    help = mirror("help")
    arguments = mirror("arguments")
    options = mirror("options")

    def __init__(self, execute, /, descr="", help=None, arguments=(), options=(), initialize=None, interact=None):
        if not callable(execute):
            raise TypeError("command 'execute' must be callable")
        if not isinstance(descr, str):
            raise TypeError("command 'descr' must be a string")
        if not isinstance(help, str | None):
            raise TypeError("command 'help' must be a string")
        for name, callback in (("initialize", initialize), ("interact", interact)):
            if callback is not None and not callable(callback):
                raise TypeError(f"command {name!r} must be callable")

        self._execute = execute
        self._descr = descr
        self._help = help
        self._arguments = validate_arguments(arguments)
        self._options = validate_options(options)
        self._initialize = initialize
        self._interact = interact

    def __repr__(self):
        return f"command(descr={self._descr!r}, arguments={self._arguments!r}, options={self._options!r})"

    def __rich_repr__(self):
        for name in type(self).__introspectable__:
            yield name, getattr(self, name)

    def initialize(self, input, output, /):
        if self._initialize is None:
            return input
        return coalesce_input(self._initialize(input, output), input)

    def interact(self, input, output, ask, /):
        if self._interact is None or input.is_option_set("no-interaction"):
            return input
        return coalesce_input(self._interact(input, output, ask), input)

    def execute(self, input, output, /):
        code = self._execute(input, output)
        return 0 if code is None else int(code)


def coalesce_input(result, input, /):
    """
    Life-cycle callables may return nothing to keep the input unchanged.
    """
    return input if result is None else result


def command(source=Unset, /, **kwargs):
    """
    Create a Command or return a decorator to build it later.

    Invocation modes
    - Direct: command(func, descr="...", arguments=[...])
    - Decorator:
        @command(descr="...", arguments=[...])
        def func(input, output): ...

    Returns
    - Command | Callable[[Callable], Command]
    """
    @rename("command")
    def wrapper(source, /):
        if not callable(source):
            raise TypeError("@command() must be applied to a callable")
        return Command(source, **kwargs)

    return wrapper(source) if source is not Unset else wrapper


# built-ins

def list_command(application, /):
    def execute(input, output):
        commands = application.commands
        if (group := input.argument_string("namespace")) is not None:
            commands = {name: command for name, command in commands.items() if names.namespace(name) == group}
            if not commands:
                raise NamespaceNotFoundError(
                    f"There are no commands defined in the \"{group}\" namespace.",
                    name=group,
                )

        styler = output.styles(render.PALETTE)
        output.section("Usage:", [("command [options] [--] [arguments]", "")])
        output.section("Options:", render.option_rows(application.options, styler))
        render.commands(output, commands)

    return Command(
        execute,
        descr="Lists commands",
        help="\n".join((
            "The [green]{{command.name}}[/] command lists all commands:",
            "",
            "    [green]{{command.full_name}}[/]",
            "",
            "You can also display the commands for a specific namespace:",
            "",
            "    [green]{{command.full_name}} test[/]",
        )),
        arguments=[Argument.optional("namespace", "The namespace name")],
    )


def help_command(application, /):
    def execute(input, output):
        name = names.runtime_command_name(input.argument_value("command_name"))
        resolved = find(name, application.commands)
        logger.debug("help for %r", resolved)
        render.help(output, resolved, application.commands[resolved], application.options)

    return Command(
        execute,
        descr="Displays help for a command",
        help="\n".join((
            "The [green]{{command.name}}[/] command displays help for a given command:",
            "",
            "    [green]{{command.full_name}} list[/]",
            "",
            "To display list of available commands, please use [green]list[/] command.",
        )),
        arguments=[Argument.optional("command_name", "The command name", default="help")],
    )


def about_command(application, /):
    def execute(input, output):
        render.about(output, application)

    return Command(
        execute,
        descr="Displays information about the current project",
        help="\n".join((
            "The [green]{{command.name}}[/] command displays information about the current project:",
            "",
            "    [green]{{command.full_name}}[/]",
            "",
            "There are multiple sections shown in the output:",
            "  - [cyan]current project details/meta information[/]",
            "  - [green]environment[/]",
        )),
    )


def _exit(input, output):
    raise RuntimeError("exit command is handled by the interactive loop")


EXIT_COMMAND = Command(_exit, descr="Exit interactive mode")


__all__ = (
    "Command",
    "command",
)

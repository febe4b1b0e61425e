"""
Rendering of commands for humans: help pages, usage lines, command lists, about.

Sections
- help(): Description, Usage, Arguments, Options and Help sections of one command.
- usage(): "name [options] [--] <args>" (options listed in full when complete=True).
- single_line(): the usage line printed after a runtime error.
- commands(): registered commands grouped by their first namespace segment.
- about(): application metadata and environment.

Palette
- command, argument, signature, default, multiple, namespace, usage, application, head
- define a mapping named __styles__ in __main__ to override any entry; every style is
  dropped when the output is not colorful.

Help texts may use rich markup ("[green]{{command.name}}[/]") and two placeholders:
{{command.name}} (the command name) and {{command.full_name}} (program + command name).
"""
import os
import platform
import sys
from pathlib import Path

from rich.text import Text

from .arguments import ArgumentKind, OptionKind, usage as arguments_usage
from .names import NAMESPACE_SEPARATOR, namespace
from .utils import Unset

PALETTE = {
    "command": "green",
    "signature": "green",
    "argument": "green",
    "default": "dark_goldenrod",
    "multiple": "blue",
    "namespace": "yellow",
    "usage": "dark_green",
    "application": "cyan",
    "head": "dark_goldenrod",
}


def program():
    """
    Name the running program was invoked by.
    """
    return Path(sys.argv[0]).name if sys.argv and sys.argv[0] else "console"


def _quote(default):
    if isinstance(default, tuple):
        return "[%s]" % ", ".join(f"\"{value}\"" for value in default)
    return f"\"{default}\""


def _markup(fragment, colorful):
    text = Text.from_markup(fragment)
    return text if colorful else Text(text.plain)


def usage(name, arguments, options, /, complete=True):
    """
    One-line usage of a command, e.g. "greet [-y|--yell] [--] <who>".
    """
    options = " ".join(option.usage for option in options) if complete else "[options]"
    return " ".join(part for part in (name, options, arguments_usage(arguments)) if part)


def argument_rows(arguments, styler, /):
    for argument in arguments:
        descr = Text(argument.descr)
        if argument.kind in (ArgumentKind.OPTIONAL, ArgumentKind.ARRAY) and argument.default is not Unset:
            descr.append(" ").append(f"[default: {_quote(argument.default)}]", styler("default"))
        yield Text(argument.name, styler("argument")), descr


def option_rows(options, styler, /):
    for option in options:
        descr = Text(option.descr)
        if option.kind is not OptionKind.NO_VALUE and option.default is not Unset:
            descr.append(" ").append(f"[default: {_quote(option.default)}]", styler("default"))
        if option.kind.is_array:
            descr.append(" ").append("(multiple values allowed)", styler("multiple"))
        yield Text(option.signature, styler("signature")), descr


def help(output, name, command, application_options, /, complete=False):
    """
    Print the help page of `command` registered as `name`.
    """
    styler = output.styles(PALETTE)
    options = (*command.options, *application_options)

    output.section("Description:", [(Text(command.descr), "")])
    output.section("Usage:", [(Text(usage(name, command.arguments, options, complete=complete)), "")])
    if command.arguments:
        output.section("Arguments:", argument_rows(command.arguments, styler))
    if options:
        output.section("Options:", option_rows(options, styler))
    if command.help:
        text = command.help.replace("{{command.name}}", name).replace("{{command.full_name}}", f"{program()} {name}")
        output.section("Help:", [(_markup(text, output.colorful), "")])


def single_line(output, name, command, application_options, /):
    styler = output.styles(PALETTE)
    line = usage(name, command.arguments, (*command.options, *application_options))
    output.message(Text(line, styler("usage")))


def command_rows(commands, styler, /):
    """
    Rows of the command listing: plain names first, then one header per namespace
    followed by its commands.
    """
    grouped = {}
    for name in sorted(commands):
        group = namespace(name) if NAMESPACE_SEPARATOR in name else ""
        grouped.setdefault(group, []).append(name)

    for group in sorted(grouped):
        if group:
            yield Text(group, styler("namespace")), ""
        for name in grouped[group]:
            yield Text(name, styler("command")), Text(commands[name].descr)


def commands(output, commands, /, label="Available commands:"):
    output.section(label, command_rows(commands, output.styles(PALETTE)))


def about(output, application, /):
    """
    Print application metadata followed by the environment it runs in.
    """
    styler = output.styles(PALETTE)

    def head(rows):
        return [(Text(left, styler("head")), Text(right)) for left, right in rows]

    title = Text(application.name, styler("application"))
    if application.version:
        title.append(f" <{application.version}>")
    output.message(title)
    output.message()

    rows = [("Name", application.name)]
    if application.version:
        rows.append(("Version", application.version))
    if application.description:
        rows.append(("Description", application.description))
    rows.extend(application.meta.items())
    output.section("Application", head(rows))

    output.section("Environment", head([
        ("Python", platform.python_version()),
        ("Command Line", " ".join(sys.argv)),
        ("Current Directory", os.getcwd()),
        ("Machine Name", platform.node()),
        ("OS Version", platform.platform()),
        ("Processor Count", str(os.cpu_count())),
    ]))


__all__ = (
    "program",
    "usage",
    "help",
    "single_line",
    "commands",
    "about",
)

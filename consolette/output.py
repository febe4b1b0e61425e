"""
Output boundary: everything a command prints goes through an Output.

Scope
- Verbosity: QUIET < NORMAL < VERBOSE < VERY_VERBOSE < DEBUG, derived from the raw
  tokens before parsing (see verbosity()).
- Output: a thin layer over two rich consoles (stdout for messages, stderr for
  errors) with the few shapes commands need: messages, titles, two-column sections,
  tables and a blocking `ask`.

Notes
- Quiet suppresses every shape except errors.
- Messages accept rich markup ("[green]done[/]"); colors are dropped when colorful is
  off (--no-ansi) while the text stays.
"""
from collections import defaultdict
from enum import IntEnum

from rich.console import Console
from rich.padding import Padding
from rich.prompt import Prompt
from rich.table import Table
from rich.text import Text


class Verbosity(IntEnum):
    QUIET = 0
    NORMAL = 1
    VERBOSE = 2
    VERY_VERBOSE = 3
    DEBUG = 4


def verbosity(tokens, /):
    """
    Derive the verbosity of an invocation from its raw tokens.

    "-q"/"--quiet" wins over everything; otherwise the first verbose token decides:
    "-vvv" -> DEBUG, "-vv" -> VERY_VERBOSE, "-v"/"--verbose" -> VERBOSE.
    """
    tokens = tuple(tokens)
    if "-q" in tokens or "--quiet" in tokens:
        return Verbosity.QUIET
    for token in tokens:
        match token:
            case "-vvv":
                return Verbosity.DEBUG
            case "-vv":
                return Verbosity.VERY_VERBOSE
            case "-v" | "--verbose":
                return Verbosity.VERBOSE
    return Verbosity.NORMAL


class Output:
    """
    Printing surface handed to commands.

    Parameters
    - console: rich Console for regular output (stdout when omitted).
    - errors: rich Console for errors (stderr when omitted).
    - verbosity: initial Verbosity.
    - colorful: False drops every color (--no-ansi).
    """

    def __init__(self, console=None, errors=None, /, verbosity=Verbosity.NORMAL, colorful=True):
        if not isinstance(console, Console | None):
            raise TypeError("output 'console' must be a rich console")
        if not isinstance(errors, Console | None):
            raise TypeError("output 'errors' must be a rich console")
        self._console = console or Console()
        self._errors = errors or Console(stderr=True)
        self._verbosity = Verbosity(verbosity)
        self.colorful = colorful

    @property
    def console(self):
        return self._console

    @property
    def errors(self):
        return self._errors

    @property
    def verbosity(self):
        return self._verbosity

    @verbosity.setter
    def verbosity(self, verbosity):
        self._verbosity = Verbosity(verbosity)

    @property
    def colorful(self):
        return self._colorful

    @colorful.setter
    def colorful(self, colorful):
        self._colorful = bool(colorful)
        self._console.no_color = not self._colorful
        self._errors.no_color = not self._colorful

    def is_quiet(self):
        return self._verbosity is Verbosity.QUIET

    def is_verbose(self):
        return self._verbosity >= Verbosity.VERBOSE

    def is_very_verbose(self):
        return self._verbosity >= Verbosity.VERY_VERBOSE

    def is_debug(self):
        return self._verbosity >= Verbosity.DEBUG

    def styles(self, palette, /):
        """
        Style lookup over `palette` merged with __styles__ from __main__; every style is
        blank when colors are off.
        """
        styles = defaultdict(str, palette | getattr(__import__("__main__"), "__styles__", {}))
        return lambda style: styles[style] if self._colorful else ""

    def print(self, *renderables, **options):
        if self.is_quiet():
            return
        self._console.print(*renderables, highlight=False, **options)

    def message(self, *messages):
        self.print(*messages)

    def verbose(self, *messages):
        if self.is_verbose():
            self.print(*messages)

    def debug(self, *messages):
        if self.is_debug():
            self.print(*messages, style="dim")

    def error(self, message, /):
        self._errors.print(message, style="bold red" if self._colorful else "", highlight=False)

    def title(self, title, /):
        self.print(Text(title, style="bold cyan" if self._colorful else ""))
        self.print(Text("=" * len(title), style="cyan" if self._colorful else ""))
        self.print()

    def section(self, label, rows, /):
        """
        A labelled two-column section ("Options:" + indented rows).

        rows: Iterable of (left, right) pairs, str or rich Text each.
        """
        grid = Table.grid(padding=(0, 2))
        grid.add_column(no_wrap=True)
        grid.add_column()
        for left, right in rows:
            grid.add_row(left, right)
        self.print(Text(label, style="bold yellow" if self._colorful else ""))
        self.print(Padding(grid, (0, 0, 1, 4)))

    def table(self, headers, rows, /, title=None):
        table = Table(*headers, title=title, show_header=bool(headers), header_style="bold" if self._colorful else "")
        for row in rows:
            table.add_row(*row)
        self.print(table)

    def ask(self, question, /):
        return Prompt.ask(question, console=self._console)


__all__ = (
    "Verbosity",
    "Output",
    "verbosity",
)

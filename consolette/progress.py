"""
Progress indicator for long-running command bodies.

The bar is drawn with rich.progress on the output console. It is disabled when the
invocation sets --no-progress or runs at debug verbosity; debug runs print one trace
line per step instead.
"""
import rich.progress
from rich.text import Text


class Progress:
    """
    Usage
        with Progress(input, output, "download") as progress:
            progress.start(len(files))
            for file in files:
                ...
                progress.advance()
    """

    def __init__(self, input, output, name, /):
        if not isinstance(name, str):
            raise TypeError("progress 'name' must be a string")
        self._input = input
        self._output = output
        self._name = name
        self._bar = None
        self._task = None

    @property
    def name(self):
        return self._name

    def is_enabled(self):
        disabled = self._input.has_option_definition("no-progress") and self._input.is_option_set("no-progress")
        return not disabled and not self._output.is_debug() and not self._output.is_quiet()

    def start(self, total, /):
        if not self.is_enabled():
            self._output.debug(Text(f"[Debug] Progress for \"{self._name}\" for ({total}) is disabled"))
            return
        self._bar = rich.progress.Progress(console=self._output.console, transient=False)
        self._bar.start()
        self._task = self._bar.add_task(self._name, total=total)

    def advance(self, steps=1, /):
        if self._bar is not None:
            self._bar.advance(self._task, steps)
        self._output.debug(Text("  ├──> [Debug] Progress advanced"))

    def finish(self):
        self._output.debug(Text("  └──> [Debug] Progress finished"))
        if self._bar is not None:
            self._bar.stop()
        self._bar = None
        self._task = None

    def __enter__(self):
        return self

    def __exit__(self, *unused):
        self.finish()


__all__ = (
    "Progress",
)

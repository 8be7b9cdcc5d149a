"""
Helmsman diagnostics: trace printing and the fatal path.

- trace(*objects): silent unless enabled. when enabled, prints a numbered
  message followed by a separator line on the stderr console, so traces never
  mix with command results on stdout.
- fatal(*objects): raises FatalError. the application's top-level handler
  prints it with an error marker and ends the run with status 1.
"""
from collections import defaultdict

from rich.console import Console
from rich.text import Text

from .faults import FatalError, FaultCode
from .utils import Unset, render


class Diagnostics:
    __slots__ = ("enabled", "counter", "console", "colorful")

    def __init__(self, *, enabled=False, console=Unset, colorful=True):
        self.enabled = enabled
        self.counter = 0
        self.console = Console(stderr=True) if console is Unset else console
        self.colorful = colorful

    def trace(self, *objects):
        if not self.enabled:
            return
        self.counter += 1

        styles = defaultdict(str, {
            "trace-counter": "bold #FFB400",  # amber counter
            "trace-message": "#D6D6DE",
            "trace-separator": "#6B6F7A",
        } | getattr(__import__("__main__"), "__styles__", {}))

        def style(name):
            return styles[name] if self.colorful else ""

        self.console.print(
            Text.assemble((f"{self.counter}: ", style("trace-counter")), (render(*objects), style("trace-message"))),
        )
        self.console.rule(style=style("trace-separator"), characters="―")

    def fatal(self, *objects, hint=Unset):
        """
        take the fatal path: raise FatalError with the rendered message.

        never returns.
        """
        options = {"code": FaultCode.FATAL}
        if hint is not Unset:
            options["hint"] = hint
        raise FatalError(render(*objects), **options)


__all__ = (
    "Diagnostics",
)

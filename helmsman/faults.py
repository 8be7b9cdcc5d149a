"""
Helmsman faults (fatal conditions) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing fault.
- CommandException: base type that carries message + options and knows how to
  render itself (rich protocol) and how to end the run (__trigger__).
- UsageError / UnknownCommandError / FatalError: the fault taxonomy.
- trigger(): central entry point to surface any fault.

Integration
- Framework and commands raise faults; nothing below the application calls
  sys.exit() directly.
- Application.run() is the single handler: it merges its runtime options into
  the fault (__replace__) and triggers it.
- In shell mode the fault is printed to stderr and the process exits with 1;
  otherwise the fault is raised again so embedding code (and tests) can catch it.

A command's own non-zero exit status is not a fault: it is passed through
untouched as the process status.
"""
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.text import Text

from .utils import Unset, UnsetType, coalesce

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping
    - routing (111xx): UNKNOWN_COMMAND
    - usage (112xx): MISSING_NAME, UNEXPECTED_OPTION, INVALID_CHOICE
    - delegated (113xx): FATAL, UNREACHABLE_SOURCE
    """
    # --- routing ---
    UNKNOWN_COMMAND    = 11101

    # --- usage ---
    MISSING_NAME       = 11201
    UNEXPECTED_OPTION  = 11202
    INVALID_CHOICE     = 11203

    # --- delegated ---
    FATAL              = 11301
    UNREACHABLE_SOURCE = 11302

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class CommandException(Exception):
    status = 1

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | UnsetType)
        super().__init__(coalesce(message, ""))
        self.message = message
        self.options = MappingProxyType(options)

    def __rich__(self):
        main = __import__("__main__")

        styles = defaultdict(str, {
            "prog-name": "bold #E6E6F0",  # near-white program name
            "error-marker": "bold #FF4DA6",  # pinky marker
            "code": "#00E5FF",  # cyan fault code
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",
            "hint": "italic #9CE19C",
        } | getattr(main, "__styles__", {}))

        colorful = self.options.get("colorful", True)

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            return Text(str(fragment), styles[style] if colorful else "")

        code = self.options.get("code", FaultCode.FATAL)

        header = Text.assemble(
            text(self.options.get("prog", "")),
            ": " if self.options.get("prog") else "",
            text("error", "error-marker"),
            " [",
            text(code.normalize(), "code"),
            "]: ",
            text(coalesce(self.message, code.name.lower().replace("_", " ")), "error-message"),
        )
        if not (hint := self.options.get("hint")):
            return header
        return Group(header, Text.assemble(text(" → ", "hint-arrow"), text(hint, "hint")))

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        self.options.get("console", console).print(self)
        sys.exit(self.status)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class UsageError(CommandException): ...
class UnknownCommandError(CommandException): ...
class FatalError(CommandException): ...


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see CommandException).
    - options are merged into the fault via __replace__(**options) before triggering.

    typical options
    - prog, shell, colorful, console, code, hint.
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
    "CommandException",
    "UsageError",
    "UnknownCommandError",
    "FatalError",
    "FaultCode",
    "trigger",
)

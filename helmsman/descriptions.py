"""
Helmsman description registry: usage text per command name.

Descriptions are registered eagerly, usually while commands are defined, and
read lazily by `help`. The text is given inline or drained from a stream up
to a terminator line, the way a shell heredoc is written:

    descriptions.register("example", stream=sys.stdin, terminator="EOF")

A missing terminator is not an error: end of input ends the text.
"""
import sys
from types import MappingProxyType

from .faults import FaultCode, UsageError
from .utils import Unset


class Descriptions:
    """
    mapping of command name → free-text description.

    - register() overwrites previous entries for the same name.
    - describe() never fails: unknown names get a fallback message.
    """
    __slots__ = ("_entries",)

    fallback = "No additional information for `%s`."

    def __init__(self):
        self._entries = {}

    @property
    def entries(self):
        return MappingProxyType(self._entries)

    def register(self, name, text=Unset, /, *, stream=Unset, terminator=Unset):
        """
        register the description of a command.

        parameters
        - name: str, the command name (must be non-empty).
        - text: str, the description. when omitted, it is read from stream.
        - stream: TextIO, source used when text is omitted (sys.stdin by default).
        - terminator: str, line that ends the text read from stream (not included).
          when omitted or never found, the stream is read until its end.

        raises
        - UsageError: when name is empty.
        """
        if not isinstance(name, str):
            raise TypeError("register() first argument must be a string")
        if not name.strip():
            raise UsageError(
                "description name is required",
                code=FaultCode.MISSING_NAME,
                hint="pass the command name as the first argument",
            )
        if text is Unset:
            text = self._drain(sys.stdin if stream is Unset else stream, terminator)
        elif not isinstance(text, str):
            raise TypeError("register() second argument must be a string")
        self._entries[name] = text
        return text

    def describe(self, name, /):
        try:
            return self._entries[name]
        except KeyError:
            return self.fallback % name

    @staticmethod
    def _drain(stream, terminator):
        lines = []
        for line in stream:
            if terminator is not Unset and line.rstrip("\r\n") == terminator:
                break
            lines.append(line)
        return "".join(lines).rstrip("\r\n")

    def __contains__(self, name):
        return name in self._entries

    def __len__(self):
        return len(self._entries)

    def __repr__(self):
        return f"{type(self).__name__}({sorted(self._entries)!r})"


__all__ = (
    "Descriptions",
)

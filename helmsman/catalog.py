"""
Helmsman command catalog: the names that can be dispatched.

The catalog is built from the commands registered on an application, minus:
- names starting with the reserved prefix ("_" by default), which stay
  available as internal helpers but are never user-invokable;
- the reserved names of the framework's own primitives ("desc", "trace",
  "fatal" by default).

Building is idempotent. The application rebuilds its catalog once per run,
right before dispatch, so every command registered up to that point is visible.
"""
from collections.abc import Mapping
from types import MappingProxyType

PREFIX = "_"
RESERVED = ("desc", "trace", "fatal")


class Catalog(Mapping):
    """
    read-only name → command mapping, iterated in sorted order.
    """
    __slots__ = ("_commands",)

    def __init__(self, commands=(), /):
        self._commands = MappingProxyType(dict(sorted(dict(commands).items())))

    def __getitem__(self, name):
        return self._commands[name]

    def __iter__(self):
        return iter(self._commands)

    def __len__(self):
        return len(self._commands)

    @property
    def names(self):
        return tuple(self._commands)

    def __repr__(self):
        return f"{type(self).__name__}({list(self._commands)!r})"


def excluded(name, /, *, prefix=PREFIX, reserved=RESERVED):
    """
    tell whether a command name is kept out of the catalog.
    """
    return not name or (bool(prefix) and name.startswith(prefix)) or name in reserved


def build(commands, /, *, prefix=PREFIX, reserved=RESERVED):
    """
    build a Catalog from a name → command mapping.

    parameters
    - commands: Mapping[str, Command] of every registered command.
    - prefix: str, reserved internal prefix ("" disables the prefix rule).
    - reserved: Iterable[str], names that are never dispatchable.
    """
    reserved = frozenset(reserved)
    return Catalog(
        (name, command) for name, command in commands.items()
        if not excluded(name, prefix=prefix, reserved=reserved)
    )


__all__ = (
    "Catalog",
    "PREFIX",
    "RESERVED",
    "build",
    "excluded",
)

"""
Helmsman command layer: register, resolve and run commands.

What this module provides
- Command: wraps a Python callable into a dispatchable unit. The callable
  receives the application and the residual parameters, and returns an exit
  status (None counts as 0).
- Application: the context object owning everything a run needs:
  • the command registry (explicit registration, no runtime reflection),
  • the description registry consulted by `help`,
  • diagnostics (trace / fatal) and the stdout/stderr consoles,
  • configuration (name, version, default command, reserved names, styling).

Run protocol
    argv ──normalize──▶ ParsedInvocation ──build──▶ Catalog ──dispatch──▶ status
- normalize: see helmsman.arguments.
- build: the catalog is rebuilt once per run, right before dispatch.
- dispatch: an empty command name falls back to the default command; a name
  outside the catalog raises UnknownCommandError; otherwise the command is
  invoked exactly once and its status becomes the run's status.
- faults: every CommandException raised during the run is handled once, in
  run(): printed on stderr and turned into exit status 1 (shell mode), or
  raised again (non-shell mode).

Quick start
    from helmsman import Application

    app = Application("tool", version="1.0.0")

    @app.command(descr='''
        Usage:
          tool greet [<name>]
    ''')
    def greet(app, name="World", /):
        app.echo(f"Hello, {name}!")

    if __name__ == "__main__":
        raise SystemExit(app.run())
"""
import shlex
import sys
import textwrap
from collections.abc import Iterable
from types import MappingProxyType

from rich.console import Console

from . import catalog as catalogs
from .arguments import normalize
from .descriptions import Descriptions
from .diagnostics import Diagnostics
from .faults import CommandException, FaultCode, UnknownCommandError, trigger
from .utils import Unset, coalesce, rename, render


class Command:
    """
    a named, dispatchable callable.

    contract
    - callback(app, /, *parameters) -> int | None
    - the name defaults to the callback's __name__ (trailing underscores are
      dropped so that `def help_(...)` is exposed as "help").
    """
    __slots__ = ("_callback", "_name")

    def __init__(self, callback, /, name=Unset):
        if not callable(callback):
            raise TypeError("Command() first argument must be callable")
        name = coalesce(name, getattr(callback, "__name__", "").rstrip("_"))
        if not isinstance(name, str):
            raise TypeError("Command() name must be a string")
        if not name.strip() or any(char.isspace() for char in name):
            raise ValueError(f"invalid command name {name!r}")
        self._callback = callback
        self._name = name

    @property
    def name(self):
        return self._name

    @property
    def callback(self):
        return self._callback

    def __call__(self, app, /, *parameters):
        status = self._callback(app, *parameters)
        if status is None:
            return 0
        if isinstance(status, bool) or not isinstance(status, int):
            raise TypeError(f"command {self._name!r} must return an exit status, not {type(status).__name__}")
        return status

    def __repr__(self):
        return f"{type(self).__name__}({self._name!r})"


class Application:
    """
    application context: one per program run.

    options
    - name: program name used in help and fault headers.
    - version: version string printed by `version` / --version.
    - descr: one-paragraph program description shown by `help`.
    - default: command dispatched when no command name is given.
    - prefix / reserved: names kept out of the catalog (see helmsman.catalog).
    - shell: when True, faults are printed and end the process (status 1);
      when False, they are raised to the caller.
    - colorful: enable rich styles on diagnostics.
    - stdout / stderr: rich consoles for results and diagnostics.
    """

    def __init__(
            self,
            name,
            /,
            *,
            version="0.0.0",
            descr=Unset,
            default="help",
            prefix=catalogs.PREFIX,
            reserved=catalogs.RESERVED,
            shell=True,
            colorful=True,
            stdout=Unset,
            stderr=Unset,
    ):
        if not isinstance(name, str) or not name.strip():
            raise ValueError("Application() name must be a non-empty string")
        self.name = name
        self.version = version
        self.descr = coalesce(descr, None)
        self.default = default
        self.prefix = prefix
        self.reserved = tuple(reserved)
        self.shell = shell
        self.colorful = colorful
        self.stdout = Console() if stdout is Unset else stdout
        self.stderr = Console(stderr=True) if stderr is Unset else stderr
        self.descriptions = Descriptions()
        self.diagnostics = Diagnostics(console=self.stderr, colorful=colorful)
        self._commands = {}
        self._catalog = Unset

    # --- registration ---

    @property
    def commands(self):
        return MappingProxyType(self._commands)

    def command(self, source=Unset, /, *, name=Unset, descr=Unset):
        """
        register a command, directly or as a decorator.

        forms
        - app.command(callback, name=..., descr=...) -> Command
        - @app.command(name=..., descr=...) -> decorator

        descr is dedented and registered in the description registry at the
        moment the command is defined.

        raises
        - TypeError: when the source is not callable.
        - ValueError: when a command with the same name is already registered.
        """
        @rename("command")
        def wrapper(source, /):
            if not callable(source):
                raise TypeError("@command() must be applied to a callable")
            command = Command(source.callback if isinstance(source, Command) else source, name=name)
            if command.name in self._commands:
                raise ValueError(f"command {command.name!r} is already registered")
            self._commands[command.name] = command
            if descr is not Unset:
                self.desc(command.name, textwrap.dedent(descr).strip("\n"))
            return command

        return wrapper(source) if source is not Unset else wrapper

    def desc(self, name, text=Unset, /, **options):
        return self.descriptions.register(name, text, **options)

    def describe(self, name, /):
        return self.descriptions.describe(name)

    # --- diagnostics and output ---

    def trace(self, *objects):
        self.diagnostics.trace(*objects)

    def fatal(self, *objects, hint=Unset):
        self.diagnostics.fatal(*objects, hint=hint)

    def echo(self, *objects):
        self.stdout.print(render(*objects), markup=False, highlight=False, emoji=False, soft_wrap=True)

    # --- catalog and dispatch ---

    def build(self):
        return catalogs.build(self._commands, prefix=self.prefix, reserved=self.reserved)

    @property
    def catalog(self):
        if self._catalog is Unset:
            self._catalog = self.build()
        return self._catalog

    def parse(self, args, /):
        invocation = normalize(args)
        # debug state belongs to a single run
        self.diagnostics.enabled = invocation.debug
        self.diagnostics.counter = 0
        self.trace("argv:", list(invocation.argv))
        return invocation

    def dispatch(self, invocation, /):
        """
        resolve invocation.name (or the default) against the catalog and run it.

        returns
        - the command's exit status.

        raises
        - UnknownCommandError: when the name is not in the catalog; the command
          is not invoked.
        """
        name = invocation.name or self.default
        self.trace("command:", repr(name))
        if name not in self.catalog:
            raise UnknownCommandError(
                f"Unknown command: {name}",
                code=FaultCode.UNKNOWN_COMMAND,
                hint=f"run '{self.name} commands' to list the available commands",
            )
        self.trace("parameters:", list(invocation.parameters))
        status = self.catalog[name](self, *invocation.parameters)
        self.trace("status:", status)
        return status

    def trigger(self, fault, /):
        self.trace("exiting with error:", fault.status)
        trigger(fault, prog=self.name, shell=self.shell, colorful=self.colorful, console=self.stderr)

    def run(self, args=Unset, /):
        """
        run the full protocol once and return the exit status.

        parameters
        - args:
          • Unset: sys.argv.
          • str: a shell-like command line (program name first), split with shlex.
          • Iterable[str]: the argument list (program name first).

        faults raised anywhere below are handled here (see Application.trigger).
        """
        if args is Unset:
            args = sys.argv
        elif isinstance(args, str):
            args = shlex.split(args)
        elif not isinstance(args, Iterable):
            raise TypeError("run() argument must be a string or an iterable of strings")

        try:
            invocation = self.parse(args)
            self._catalog = self.build()
            self.trace("catalog:", ", ".join(self._catalog))
            return self.dispatch(invocation)
        except CommandException as fault:
            self.trigger(fault)
            raise

    def __repr__(self):
        return f"{type(self).__name__}({self.name!r}, version={self.version!r})"


__all__ = (
    "Application",
    "Command",
)

"""
Helmsman argument normalizer: split a process argument list into a command
name and the parameters handed to that command.

Grammar
    program [ -h|--help | --version | --debug ]* [name [parameter]*]

Rules
- The global flags are consumed wherever they appear and never reach the
  command's parameters:
  • -h / --help select the "help" command, --version selects "version"
    (the last one wins).
  • --debug turns tracing on.
- The first other token becomes the command name; every later token is
  appended to the parameters verbatim (unrecognized flags included, commands
  validate their own parameters).

Indexing
- ParsedInvocation.argv keeps the program name at index 0.
- ParsedInvocation.parameters is argv without it, as a plain 0-based tuple:
  parameters[i] == argv[i + 1]. Commands always index into parameters.

Example
    >>> normalize(["prog", "--debug", "help", "commands"])
    ParsedInvocation(name='help', argv=('prog', 'commands'), debug=True)
"""
from collections import namedtuple
from collections.abc import Iterable

HELP_FLAGS = ("-h", "--help")
VERSION_FLAGS = ("--version",)
DEBUG_FLAGS = ("--debug",)


class ParsedInvocation(namedtuple("ParsedInvocation", ("name", "argv", "debug"))):
    """
    result of normalize(); immutable.

    fields
    - name: str, the selected command name ("" when none was given).
    - argv: tuple[str, ...], the program name followed by every residual token.
    - debug: bool, whether --debug was present.
    """
    __slots__ = ()

    @property
    def prog(self):
        return self.argv[0]

    @property
    def parameters(self):
        return self.argv[1:]


def normalize(args, /):
    """
    normalize a full argument list (program name first) into a ParsedInvocation.

    parameters
    - args: Iterable[str]
      the process argument list, e.g. sys.argv. it is consumed once, left to right.

    raises
    - TypeError: when args is not an iterable of strings.
    - ValueError: when args is empty (the program name is mandatory).
    """
    if isinstance(args, str) or not isinstance(args, Iterable):
        raise TypeError("normalize() argument must be an iterable of strings")
    args = tuple(args)
    if not args:
        raise ValueError("normalize() argument must start with the program name")
    if not all(isinstance(arg, str) for arg in args):
        raise TypeError("normalize() argument must be an iterable of strings")

    prog, *tokens = args
    name = None
    argv = [prog]
    debug = False

    for token in tokens:
        if token in HELP_FLAGS:
            name = "help"
        elif token in VERSION_FLAGS:
            name = "version"
        elif token in DEBUG_FLAGS:
            debug = True
        elif name is None:
            name = token
        else:
            argv.append(token)

    return ParsedInvocation(name or "", tuple(argv), debug)


__all__ = (
    "ParsedInvocation",
    "normalize",
)

"""
Entry point for the `helmsman` program (and `python -m helmsman`).

build() assembles the application: built-in commands, the worked example
and the installer. Its configuration comes from keyword options and, for the
installer source, the HELMSMAN_INSTALL_SOURCE environment variable (no default).
"""
import sys

from . import __title__, __version__
from . import example, install, introspection
from .commands import Application


def build(**options):
    app = Application(
        __title__,
        version=__version__,
        descr="Discover, describe and dispatch commands.",
        **options,
    )
    introspection.mount(app)
    example.mount(app)
    install.mount(app)
    return app


def main(argv=None):
    return build().run(sys.argv if argv is None else argv)


if __name__ == "__main__":
    raise SystemExit(main())

"""
Built-in introspection commands: help, commands, version.

mount(app) registers the three of them, together with their descriptions,
on an application.
"""
from .utils import render


def mount(app, /):
    prog = app.name

    @app.command(name="help", descr=f"""
        Usage:
          {prog} help [<command>]

        Description:
          Display help information for {prog} or a specified command.
    """)
    def help_(app, topic="", /, *unused):
        if topic:
            app.echo(app.describe(topic))
            return 0

        title = f"{app.name} {app.version}"
        synopsis = render(
            "",
            "Usage:",
            f"  {app.name} <command> [--command-options] [<arguments>]",
            f"  {app.name} -h | --help",
            f"  {app.name} --version",
            "",
            "Options:",
            "  -h --help  Display this help information.",
            "  --version  Display version information.",
            "",
            "Help:",
            f"  {app.name} help [<command>]",
            "",
            sep="\n",
        )
        app.echo(title if not app.descr else render(title, "", app.descr, sep="\n"))
        app.echo(synopsis)
        return commands(app)

    @app.command(descr=f"""
        Usage:
          {prog} commands [--raw]

        Options:
          --raw  Display the command list without formatting.

        Description:
          Display the list of available commands.
    """)
    def commands(app, /, *parameters):
        raw = False
        for parameter in parameters:
            if parameter == "--raw":
                raw = True
            else:
                app.fatal(f"Unexpected option: {parameter}", hint=f"run '{app.name} help commands' for usage")

        if raw:
            for name in app.catalog:
                app.echo(name)
            return 0

        app.echo("Available commands:")
        for name in app.catalog:
            app.echo(f"  {name}")
        return 0

    @app.command(descr=f"""
        Usage:
          {prog} ( version | --version )

        Description:
          Display the current program version.
    """)
    def version(app, /, *unused):
        app.echo(app.version)
        return 0

    return app


__all__ = (
    "mount",
)

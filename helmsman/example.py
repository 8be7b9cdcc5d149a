"""
A worked example command, kept as a template for new commands.

It shows the three things a command is responsible for:
- registering its own description,
- validating its own parameters (the framework passes them through verbatim),
- returning an exit status.
"""


def mount(app, /):
    prog = app.name

    @app.command(descr=f"""
        Usage:
          {prog} example [<name>] [--farewell]

        Options:
          --farewell  Print "Goodbye, <name>!" instead.

        Description:
          Print "Hello, World!" or "Hello, <name>!".
    """)
    def example(app, /, *parameters):
        name = None
        farewell = False

        for parameter in parameters:
            if parameter == "--farewell":
                farewell = True
            elif parameter.startswith("-"):
                app.fatal(f"Unexpected option: {parameter}", hint=f"run '{app.name} help example' for usage")
            elif name is None:
                name = parameter
            else:
                app.fatal(f"Unexpected argument: {parameter}", hint=f"run '{app.name} help example' for usage")

        app.trace("example:", {"name": name, "farewell": farewell})
        app.echo(f"{'Goodbye' if farewell else 'Hello'}, {name or 'World'}!")
        return 0

    return app


__all__ = (
    "mount",
)

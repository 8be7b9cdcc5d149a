"""
The `install` command: run the remote installer script for an operating system.

Flow
- select the target system: the first parameter, or the running system
  (platform.system()) when omitted;
- download `<source>/<system>.sh` with requests, where <source> comes from
  HELMSMAN_INSTALL_SOURCE unless given explicitly;
- pipe the script to `bash -s`, forwarding the parameters found after `--`;
- return bash's exit status.

The script is executed as downloaded: no checksum or signature is verified.
"""
import os
import platform
import subprocess

import requests

from .faults import FatalError, FaultCode
from .utils import Unset

# base URL of the installer scripts; there is no built-in default
SOURCE_VARIABLE = "HELMSMAN_INSTALL_SOURCE"

# platform.system() → installer name
SYSTEMS = {
    "Linux": "linux",
    "Darwin": "macos",
}


class Installer:
    """
    fetches and runs installer scripts.

    the HTTP session and the process runner are injectable so the command can
    be exercised without network access or a shell.
    """
    __slots__ = ("source", "session", "runner", "timeout")

    def __init__(self, source=Unset, /, *, session=Unset, runner=Unset, timeout=30):
        source = os.environ.get(SOURCE_VARIABLE, "") if source is Unset else source
        self.source = source.rstrip("/") or None
        self.session = requests.Session() if session is Unset else session
        self.runner = subprocess.run if runner is Unset else runner
        self.timeout = timeout

    @property
    def systems(self):
        return tuple(sorted(set(SYSTEMS.values())))

    def detect(self, system=Unset, /):
        return SYSTEMS.get(platform.system() if system is Unset else system)

    def url(self, system, /):
        if self.source is None:
            raise FatalError(
                "No installer source configured",
                code=FaultCode.UNREACHABLE_SOURCE,
                hint=f"set {SOURCE_VARIABLE} to the base URL of the installer scripts",
            )
        return f"{self.source}/{system}.sh"

    def fetch(self, url, /):
        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as error:
            raise FatalError(
                f"Unable to download {url}: {error}",
                code=FaultCode.UNREACHABLE_SOURCE,
                hint=f"check the network connection or {SOURCE_VARIABLE}",
            ) from error
        return response.text

    def execute(self, script, arguments=(), /):
        try:
            completed = self.runner(["bash", "-s", "--", *arguments], input=script, text=True, check=False)
        except OSError as error:
            raise FatalError(f"Unable to run the installer: {error}", code=FaultCode.FATAL) from error
        return completed.returncode


def mount(app, /, installer=Unset):
    installer = Installer() if installer is Unset else installer
    prog = app.name

    @app.command(descr=f"""
        Usage:
          {prog} install [<os>] [-- <script-arguments>...]

        Arguments:
          <os>  Target operating system: {", ".join(installer.systems)}.
                Detected from the running system when omitted.

        Description:
          Download the installer script for <os> and run it with bash.
          Arguments after `--` are passed to the script.
          Scripts are downloaded from the base URL in ${SOURCE_VARIABLE},
          which must be set.
    """)
    def install(app, /, *parameters):
        usage = f"run '{app.name} help install' for usage"
        system = None
        arguments = ()

        for index, parameter in enumerate(parameters):
            if parameter == "--":
                arguments = parameters[index + 1:]
                break
            if parameter.startswith("-"):
                app.fatal(f"Unexpected option: {parameter}", hint=usage)
            if system is not None:
                app.fatal(f"Unexpected argument: {parameter}", hint=usage)
            system = parameter

        if system is None:
            if (system := installer.detect()) is None:
                app.fatal(f"Unable to detect a supported operating system ({platform.system() or 'unknown'})", hint=usage)
        elif system not in installer.systems:
            raise FatalError(
                f"Unsupported operating system: {system}",
                code=FaultCode.INVALID_CHOICE,
                hint=f"choose one of: {', '.join(installer.systems)}",
            )

        url = installer.url(system)
        app.trace("installer:", url)
        app.echo(f"Installing for {system} from {url}")
        return installer.execute(installer.fetch(url), arguments)

    return app


__all__ = (
    "SOURCE_VARIABLE",
    "Installer",
    "mount",
)

"""
Install command tests.

Scope
- Target selection (explicit, detected, unsupported).
- Download through the injected HTTP session, failures become fatal faults.
- Execution through the injected runner, status pass-through and forwarded arguments.

Conventions
- Test method names follow CamelCase per project convention.
- No network access and no shell: session and runner are fakes.
"""

from __future__ import annotations

import io
import subprocess
import unittest
from unittest import TestCase, mock

import requests
from rich.console import Console

from helmsman import Application, FatalError, FaultCode
from helmsman import install


class FakeResponse:
    def __init__(self, text, status=200):
        self.text = text
        self.status = status

    def raise_for_status(self):
        if self.status >= 400:
            raise requests.HTTPError(f"{self.status} Client Error")


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response or FakeResponse("echo installing\n")
        self.error = error
        self.requests = []

    def get(self, url, timeout=None):
        self.requests.append((url, timeout))
        if self.error is not None:
            raise self.error
        return self.response


class FakeRunner:
    def __init__(self, returncode=0, error=None):
        self.returncode = returncode
        self.error = error
        self.calls = []

    def __call__(self, args, **options):
        self.calls.append((args, options))
        if self.error is not None:
            raise self.error
        return subprocess.CompletedProcess(args, self.returncode)


class TestInstall(TestCase):

    def setUp(self) -> None:
        self.stdout = io.StringIO()
        self.app = Application(
            "prog",
            shell=False,
            colorful=False,
            stdout=Console(file=self.stdout, width=200, force_terminal=False, color_system=None),
            stderr=Console(file=io.StringIO(), width=200, force_terminal=False, color_system=None),
        )
        self.session = FakeSession()
        self.runner = FakeRunner()
        self.installer = install.Installer(
            "https://example.test/installers/",
            session=self.session,
            runner=self.runner,
            timeout=5,
        )
        install.mount(self.app, self.installer)

    def testExplicitSystem(self):
        self.assertEqual(self.app.run(["prog", "install", "linux"]), 0)
        self.assertEqual(self.session.requests, [("https://example.test/installers/linux.sh", 5)])
        (args, options), = self.runner.calls
        self.assertEqual(args, ["bash", "-s", "--"])
        self.assertEqual(options["input"], "echo installing\n")
        self.assertIn("Installing for linux", self.stdout.getvalue())

    def testArgumentsAfterSeparatorAreForwarded(self):
        self.app.run(["prog", "install", "macos", "--", "--prefix", "/opt"])
        (args, options), = self.runner.calls
        self.assertEqual(args, ["bash", "-s", "--", "--prefix", "/opt"])

    def testScriptStatusIsPassedThrough(self):
        self.runner.returncode = 7
        self.assertEqual(self.app.run(["prog", "install", "linux"]), 7)

    def testSystemIsDetected(self):
        with mock.patch("helmsman.install.platform.system", return_value="Darwin"):
            self.app.run(["prog", "install"])
        self.assertEqual(self.session.requests[0][0], "https://example.test/installers/macos.sh")

    def testUndetectableSystemIsFatal(self):
        with mock.patch("helmsman.install.platform.system", return_value="Windows"):
            with self.assertRaises(FatalError) as context:
                self.app.run(["prog", "install"])
        self.assertIn("Windows", context.exception.message)
        self.assertEqual(self.session.requests, [])

    def testUnsupportedSystemIsFatal(self):
        with self.assertRaises(FatalError) as context:
            self.app.run(["prog", "install", "plan9"])
        self.assertEqual(context.exception.message, "Unsupported operating system: plan9")
        self.assertIs(context.exception.options["code"], FaultCode.INVALID_CHOICE)
        self.assertEqual(self.session.requests, [])

    def testUnexpectedOptionIsFatal(self):
        with self.assertRaises(FatalError):
            self.app.run(["prog", "install", "--force"])

    def testExtraArgumentIsFatal(self):
        with self.assertRaises(FatalError):
            self.app.run(["prog", "install", "linux", "macos"])

    def testDownloadFailureIsFatal(self):
        self.session.error = requests.ConnectionError("unreachable")
        with self.assertRaises(FatalError) as context:
            self.app.run(["prog", "install", "linux"])
        self.assertIs(context.exception.options["code"], FaultCode.UNREACHABLE_SOURCE)
        self.assertEqual(self.runner.calls, [])

    def testHttpErrorIsFatal(self):
        self.session.response = FakeResponse("not found", status=404)
        with self.assertRaises(FatalError) as context:
            self.app.run(["prog", "install", "linux"])
        self.assertIn("404", context.exception.message)
        self.assertEqual(self.runner.calls, [])

    def testMissingShellIsFatal(self):
        self.runner.error = FileNotFoundError("bash")
        with self.assertRaises(FatalError):
            self.app.run(["prog", "install", "linux"])

    def testMissingSourceIsFatal(self):
        with mock.patch.dict("os.environ", clear=True):
            installer = install.Installer(session=self.session, runner=self.runner)
        self.assertIsNone(installer.source)
        app = Application("prog", shell=False, colorful=False, stdout=Console(file=io.StringIO()), stderr=Console(file=io.StringIO()))
        install.mount(app, installer)
        with self.assertRaises(FatalError) as context:
            app.run(["prog", "install", "linux"])
        self.assertIs(context.exception.options["code"], FaultCode.UNREACHABLE_SOURCE)
        self.assertIn(install.SOURCE_VARIABLE, context.exception.options["hint"])
        self.assertEqual(self.session.requests, [])
        self.assertEqual(self.runner.calls, [])

    def testSourceIsReadFromEnvironment(self):
        with mock.patch.dict("os.environ", {install.SOURCE_VARIABLE: "https://mirror.test/scripts/"}):
            installer = install.Installer(session=self.session, runner=self.runner)
        self.assertEqual(installer.url("linux"), "https://mirror.test/scripts/linux.sh")

    def testDescriptionNamesSourceVariable(self):
        self.assertIn("$" + install.SOURCE_VARIABLE, self.app.describe("install"))

    def testDetect(self):
        self.assertEqual(self.installer.detect("Linux"), "linux")
        self.assertEqual(self.installer.detect("Darwin"), "macos")
        self.assertIsNone(self.installer.detect("Windows"))
        self.assertEqual(self.installer.systems, ("linux", "macos"))


if __name__ == "__main__":
    unittest.main()

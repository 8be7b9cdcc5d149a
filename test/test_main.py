"""
Program entry point tests (helmsman.__main__).

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import contextlib
import io
import unittest
from unittest import TestCase

from helmsman import __version__
from helmsman.__main__ import build, main


class TestMain(TestCase):

    def testCatalog(self):
        app = build(shell=False)
        self.assertEqual(app.build().names, ("commands", "example", "help", "install", "version"))
        self.assertEqual(app.default, "help")

    def testVersion(self):
        stdout = io.StringIO()
        with contextlib.redirect_stdout(stdout):
            self.assertEqual(main(["helmsman", "--version"]), 0)
        self.assertEqual(stdout.getvalue(), __version__ + "\n")

    def testUnknownCommandExits(self):
        stderr = io.StringIO()
        with contextlib.redirect_stderr(stderr), self.assertRaises(SystemExit) as context:
            main(["helmsman", "bogus"])
        self.assertEqual(context.exception.code, 1)
        self.assertIn("Unknown command: bogus", stderr.getvalue())


if __name__ == "__main__":
    unittest.main()

"""
doxxer end-to-end tests.

Scope
- Render: captured text becomes a valid module docstring, escaped as needed.
- CLI: output to a file and to standard output, version, usage and failures.

Conventions
- Test method names follow CamelCase per project convention.
- The generated module is inspected with ast instead of being imported.
"""

from __future__ import annotations

import ast
import io
import os
import sys
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from unittest import TestCase, mock

from cmdset import doxxer
from cmdset.utils import program


class TestRender(TestCase):

    def testDocstringRoundTrip(self):
        text = 'Usage: tool [-o "file"]\n\n  C:\\path  ends with a quote"\n'
        source = doxxer.render(text, "doxxer tool -h")
        self.assertTrue(source.startswith('# Code generated by "doxxer tool -h"; DO NOT EDIT.\n'))
        docstring = ast.get_docstring(ast.parse(source), clean=False)
        self.assertEqual(docstring, "\n" + text)

    def testEmptyCapture(self):
        source = doxxer.render("", "doxxer tool")
        self.assertEqual(ast.get_docstring(ast.parse(source), clean=False), "\n")


class TestProgramName(TestCase):

    def testRunAsScriptNamesItself(self):
        with mock.patch.object(sys, "argv", ["/tmp/venv/lib/doxxer.py"]):
            with mock.patch.dict(sys.modules, {"__main__": doxxer}):
                self.assertEqual(program(), "doxxer")


class TestMain(TestCase):

    def setUp(self):
        self.directory = tempfile.TemporaryDirectory()
        self.addCleanup(self.directory.cleanup)
        self.path = os.path.join(self.directory.name, "doc.py")

    def run_main(self, *arguments):
        stdout, stderr = io.StringIO(), io.StringIO()
        code = 0
        with mock.patch.object(sys, "argv", ["doxxer", *arguments]):
            with redirect_stdout(stdout), redirect_stderr(stderr):
                try:
                    doxxer.main()
                except SystemExit as error:
                    code = error.code
        return code, stdout.getvalue(), stderr.getvalue()

    def testWritesGeneratedModule(self):
        code, _, stderr = self.run_main("-o", self.path, "json.tool", "-h")
        self.assertEqual(code, 0, stderr)
        with open(self.path) as file:
            source = file.read()
        self.assertIn(f'# Code generated by "doxxer -o {self.path} json.tool -h"; DO NOT EDIT.', source)
        self.assertIn("usage:", ast.get_docstring(ast.parse(source), clean=False))

    def testWritesToStandardOutput(self):
        code, stdout, _ = self.run_main("-o", "-", "json.tool", "-h")
        self.assertEqual(code, 0)
        self.assertIn("usage:", ast.get_docstring(ast.parse(stdout), clean=False))

    def testMissingModuleArgument(self):
        code, _, stderr = self.run_main()
        self.assertEqual(code, 1)
        self.assertIn("Usage:", stderr)
        self.assertIn("[-o output] <module> [arguments...]", stderr)
        self.assertIn("Write output to file (default \"doc.py\")", stderr)

    def testFailingModuleIsReported(self):
        code, _, stderr = self.run_main("-o", self.path, "cmdset_test_module_that_does_not_exist")
        self.assertEqual(code, 1)
        self.assertTrue(stderr.startswith("doxxer: "))
        self.assertFalse(os.path.exists(self.path))

    def testUndecodableOutputIsReplaced(self):
        package = os.path.join(self.directory.name, "latin_usage")
        os.mkdir(package)
        with open(os.path.join(package, "__main__.py"), "w") as file:
            file.write('import sys\nsys.stdout.buffer.write(b"Usage: caf\\xe9 -h\\n")\n')
        with mock.patch.dict(os.environ, {"PYTHONPATH": self.directory.name}):
            code, _, stderr = self.run_main("-o", self.path, "latin_usage")
        self.assertEqual(code, 0, stderr)
        with open(self.path, encoding="utf-8") as file:
            docstring = ast.get_docstring(ast.parse(file.read()), clean=False)
        self.assertEqual(docstring, "\nUsage: caf\ufffd -h\n")

    def testUnexpectedErrorIsReported(self):
        with mock.patch.object(doxxer, "capture", side_effect=RuntimeError("boom")):
            code, _, stderr = self.run_main("-o", self.path, "json.tool")
        self.assertEqual(code, 1)
        self.assertEqual(stderr, "doxxer: boom\n")
        self.assertFalse(os.path.exists(self.path))

    def testVersion(self):
        code, stdout, _ = self.run_main("-version")
        self.assertEqual(code, 0)
        self.assertTrue(stdout.startswith("doxxer "))

    def testHelpExitsZero(self):
        code, _, stderr = self.run_main("-h")
        self.assertEqual(code, 0)
        self.assertIn("Doxxer is a tool", stderr)

    def testBadFlagExitsTwo(self):
        code, _, stderr = self.run_main("-x", "json.tool")
        self.assertEqual(code, 2)
        self.assertIn("flag provided but not defined: -x", stderr)


if __name__ == "__main__":
    unittest.main()

"""
Tests for the internal helpers: the Unset sentinel, program name, arguments and
environment lookups.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import copy
import os
import sys
import unittest
from types import SimpleNamespace
from unittest import TestCase, mock

from cmdset import utils
from cmdset.faults import CommandError, MissingEnvironmentError
from cmdset.utils import Unset, UnsetType, arguments, getenv, program


class TestUnset(TestCase):

    def testSingleton(self):
        self.assertIs(UnsetType(), Unset)
        self.assertIs(copy.copy(Unset), Unset)

    def testPublicSurface(self):
        self.assertEqual(set(utils.__all__), {"UnsetType", "Unset", "program", "arguments", "getenv", "console"})

    def testFalsyAndRepr(self):
        self.assertFalse(Unset)
        self.assertEqual(repr(Unset), "Unset")

    def testFinal(self):
        with self.assertRaises(TypeError):
            type("Derived", (UnsetType,), {})


class TestProgram(TestCase):

    def testBaseNameOfArgv0(self):
        with mock.patch.object(sys, "argv", ["/usr/local/bin/tool", "a"]):
            with mock.patch.dict(sys.modules, {"__main__": SimpleNamespace()}):
                self.assertEqual(program(), "tool")
                self.assertEqual(arguments(), ["tool", "a"])

    def testMainOverride(self):
        with mock.patch.dict(sys.modules, {"__main__": SimpleNamespace(__prog__="custom")}):
            self.assertEqual(program(), "custom")


class TestGetenv(TestCase):

    def testPresent(self):
        with mock.patch.dict(os.environ, {"CMDSET_TEST_VALUE": "42"}):
            self.assertEqual(getenv("CMDSET_TEST_VALUE"), "42")

    def testMissingRaisesTypedError(self):
        with mock.patch.dict(os.environ, clear=False):
            os.environ.pop("CMDSET_TEST_MISSING", None)
            with self.assertRaises(MissingEnvironmentError) as context:
                getenv("CMDSET_TEST_MISSING")
        self.assertIsInstance(context.exception, CommandError)
        self.assertIsInstance(context.exception, KeyError)
        self.assertEqual(str(context.exception), "missing environment variable: $CMDSET_TEST_MISSING")

    def testRejectsEmptyName(self):
        with self.assertRaises(TypeError):
            getenv("")


if __name__ == "__main__":
    unittest.main()

"""
cmdset flag sets: the flag-parsing collaborator commands and the dispatcher consume.

What this module provides
- FlagSet: a named group of flags backed by argparse. Flags are declared with the
  familiar add_argument() signature; parsing follows the classic "flags first"
  rules: flags are consumed until the first positional argument (or "--"), and
  everything after that is handed back untouched as the positional list.
- ErrorHandling: what a flag set does when parsing fails (continue, exit, raise).
- CommandLine: the default flag set, named after the running program.

Why not plain parse_args()
- argparse intermixes options and positionals. A sub-command dispatcher needs the
  opposite: "prog -v build -o out" must stop at "build" so "-o out" reaches the
  command untouched. FlagSet splits the token stream itself and only hands the
  flag prefix to argparse for binding and value conversion.

Example
    flags = FlagSet("build", ErrorHandling.RAISE)
    flags.add_argument("-o", dest="output", default="a.out", help="Write `file` here")
    rest = flags.parse(["-o", "bin/app", "main.py"])
    flags.values.output  # "bin/app"
    rest                 # ["main.py"]
"""
import argparse
import io
import re
import sys
from enum import Enum

from .faults import FlagError, HelpRequested, report
from .utils import Unset, program

_HELP = ("-h", "-help", "--help")


class ErrorHandling(Enum):
    """
    flag parse error policy.

    - CONTINUE: report the error and usage to the output, then return the
      tokens that follow the failing flag so the caller carries on.
    - EXIT: report the error and usage, then exit with status 2 (0 for help).
    - RAISE: raise the FlagError without printing; the caller owns reporting.
    """
    CONTINUE = "continue"
    EXIT = "exit"
    RAISE = "raise"


class _Parser(argparse.ArgumentParser):
    """
    argparse parser that never prints nor exits on its own.
    """

    def error(self, message):
        raise FlagError(message)


class FlagSet:
    """
    Named group of command-line flags.

    Responsibilities
    - Declaration: add_argument() mirrors argparse for option-style flags.
    - Parsing: parse(arguments) binds the leading flags into `values` and returns
      the remaining positional arguments (also available as `args`).
    - Help: print_defaults() lists every flag with its help and default value;
      usage() (replaceable) is called on failures and help requests.

    Notes
    - Defaults are bound into `values` at declaration time, so values can be
      read before (or without) parsing.
    - Parsing twice keeps values bound by the first parse unless overridden.
    """

    def __init__(self, name="", error_handling=ErrorHandling.CONTINUE, /):
        if not isinstance(name, str):
            raise TypeError("flag set name must be a string")
        if not isinstance(error_handling, ErrorHandling):
            raise TypeError("flag set error handling must be an ErrorHandling member")
        self._name = name
        self._actions = {}
        self._args = []
        self._parsed = False
        self._output = Unset
        self._parser = _Parser(prog=name or None, add_help=False, allow_abbrev=False)
        self.error_handling = error_handling
        self.values = argparse.Namespace()
        self.usage = self._default_usage

    @property
    def name(self):
        return self._name

    @property
    def args(self):
        """
        positional arguments remaining after the last parse.
        """
        return list(self._args)

    @property
    def parsed(self):
        return self._parsed

    @property
    def output(self):
        """
        sink for usage and error messages (standard error unless set).
        """
        return sys.stderr if self._output is Unset else self._output

    @output.setter
    def output(self, file):
        self._output = Unset if file is None else file

    def add_argument(self, *names, **kwargs):
        """
        Declare a flag; same signature as argparse.ArgumentParser.add_argument.

        Rules
        - every name must be an option string ("-x", "--name"); positionals are
          collected by parse() and cannot be declared.
        - a flag takes either no value (switches: store_true, count, ...) or exactly
          one value per occurrence.

        Returns
        - the argparse action, as add_argument() does.

        Raises
        - ValueError for positional names or multi-value nargs.
        - argparse.ArgumentError when an option string is already declared.
        """
        if not names:
            raise ValueError("add_argument() requires at least one flag name")
        for name in names:
            if not isinstance(name, str) or len(name) < 2 or not name.startswith("-"):
                raise ValueError(f"flag names must start with '-', got {name!r}")
        if kwargs.get("nargs") not in (None, 0):
            raise ValueError("flags take a single value per occurrence")

        action = self._parser.add_argument(*names, **kwargs)
        for name in action.option_strings:
            self._actions[name] = action
        if action.default is not argparse.SUPPRESS and not hasattr(self.values, action.dest):
            setattr(self.values, action.dest, action.default)
        return action

    def lookup(self, name, /):
        """
        return the action declared for option string `name`, or None.
        """
        return self._actions.get(name)

    def parse(self, arguments, /):
        """
        Parse the leading flags of `arguments` and return the remaining positionals.

        Token rules
        - "--" ends flag parsing and is dropped.
        - "-" alone, or any token not starting with "-", starts the positional list.
        - "-x=value" and "-x value" both bind a value; switches accept no value.
        - "-h", "-help" and "--help" request help unless declared as flags.

        Errors
        - FlagError (HelpRequested for help) handled per `error_handling`. Flags
          before the failing one stay bound, and `args` holds the tokens that
          follow it.
        """
        if isinstance(arguments, str):
            raise TypeError("parse() argument must be a sequence of strings, not a string")
        self._args = list(arguments)
        self._parsed = True

        try:
            while self._consume():
                pass
        except FlagError as error:
            return self._fail(error)
        return self.args

    def _consume(self):
        # Bind the next flag and drop its tokens; False once flags are over.
        if not self._args:
            return False
        if not isinstance(token := self._args[0], str):
            raise TypeError("parse() argument must be a sequence of strings")
        if len(token) < 2 or not token.startswith("-"):
            return False
        if token == "--":
            del self._args[0]
            return False
        stripped = token[2:] if token.startswith("--") else token[1:]
        if stripped[0] in "-=":
            raise FlagError(f"bad flag syntax: {token}", flag=token)

        del self._args[0]
        name, sep, value = token.partition("=")
        if (action := self._actions.get(name)) is None:
            if name in _HELP:
                raise HelpRequested(flag=name)
            raise FlagError(f"flag provided but not defined: {name}", flag=name)
        if action.nargs == 0:
            if sep:
                raise FlagError(f"flag does not take a value: {name}", flag=name)
            self._parser.parse_args([name], namespace=self.values)
            return True
        if not sep:
            if not self._args:
                raise FlagError(f"flag needs an argument: {name}", flag=name)
            value = self._args.pop(0)
        self._parser.parse_args([f"{name}={value}"], namespace=self.values)
        return True

    def _fail(self, error):
        if self.error_handling is ErrorHandling.RAISE:
            raise error
        if not isinstance(error, HelpRequested):
            report(error, file=self.output)
        self.usage()
        if self.error_handling is ErrorHandling.EXIT:
            sys.exit(0 if isinstance(error, HelpRequested) else 2)
        return self.args

    def print_defaults(self, file=Unset, /):
        """
        Write every declared flag with its help and default value.

        Format (one entry per flag, sorted by name)
            -o output
                    Write output to file (default "doc.py")
            -v      Verbose output

        - the value name is the metavar, else a back-quoted word of the help text,
          else the flag type name, else "value"; switches show none.
        - zero defaults (None, False, 0, "", empty collections) are not shown.
        """
        file = self.output if file is Unset else file
        seen = set()
        for name in sorted(self._actions, key=lambda x: x.lstrip("-")):
            action = self._actions[name]
            if id(action) in seen or action.help is argparse.SUPPRESS:
                continue
            seen.add(id(action))

            metavar, usage = _unquote_usage(action)
            line = "  " + ", ".join(action.option_strings)
            if metavar:
                line += " " + metavar
            # one-letter switches keep their help on the same line
            line += " " * (8 - len(line)) if len(line) <= 4 else "\n" + " " * 8
            line += usage.replace("\n", "\n" + " " * 8)
            if action.default is not argparse.SUPPRESS and action.default:
                line += f" (default {_quote(action.default)})"
            file.write(line + "\n")

    def _default_usage(self):
        output = self.output
        output.write(f"Usage of {self._name}:\n" if self._name else "Usage:\n")
        self.print_defaults(output)

    def format_defaults(self):
        """
        return print_defaults() output as a string.
        """
        buffer = io.StringIO()
        self.print_defaults(buffer)
        return buffer.getvalue()

    def __repr__(self):
        return f"FlagSet(name={self._name!r}, error_handling={self.error_handling.name})"


def _unquote_usage(action):
    usage = action.help or ""
    if match := re.search(r"`([^`]*)`", usage):
        usage = usage[:match.start()] + match.group(1) + usage[match.end():]
    if action.nargs == 0:
        return "", usage
    if action.metavar is not None:
        return str(action.metavar), usage
    if match:
        return match.group(1), usage
    if action.type is not None:
        return getattr(action.type, "__name__", "value"), usage
    return "value", usage


def _quote(value):
    if isinstance(value, str):
        return '"%s"' % value.replace("\\", "\\\\").replace('"', '\\"')
    return str(value)


CommandLine = FlagSet(program(), ErrorHandling.EXIT)
"""
default flag set, named after the running program and parsed from sys.argv[1:].
"""


__all__ = (
    "ErrorHandling",
    "FlagSet",
)

"""
cmdset command layer: register named sub-commands and dispatch to them.

What this module provides
- Command: the protocol any object satisfies to be dispatched as a sub-command
  (name, description, usage, parse, run). No base class is needed.
- CommandSet: an ordered registry of commands, unique by name, with the dispatch
  procedure that turns "prog [flags] <command> [args...]" into parse() + run().
- CommandLine: a process-wide default set, plus module-level wrappers (add,
  lookup, visit, parse, print_usage, print_global_usage) for global-style use.

Quick start
    from cmdset import ArgumentCountError, ErrorHandling, FlagSet, CommandSet

    class Clean:
        name = "clean"
        description = "Remove build outputs"

        def __init__(self):
            self.flags = FlagSet("clean", ErrorHandling.RAISE)
            self.flags.add_argument("-n", action="store_true", dest="dry", help="Only print")

        def usage(self):
            self.flags.usage()

        def parse(self, arguments):
            if self.flags.parse(arguments):
                raise ArgumentCountError()

        def run(self):
            ...

    commands = CommandSet()
    commands.add(Clean())
    commands.parse(flags, sys.argv[1:])

Dispatch contract
- Top-level flags are parsed first; the first positional argument names the
  command; everything after it goes to that command's parse().
- Failures are terminal: the error is reported on standard error, optionally
  followed by a usage message, and the process exits with status 1.
"""
import sys
from typing import Protocol, runtime_checkable

from .faults import HelpRequested, UnknownCommandError, report
from .flags import CommandLine as _flags
from .usage import render_usage
from .utils import Unset, console


@runtime_checkable
class Command(Protocol):
    """
    Capability set of a dispatchable sub-command.

    - name: dispatch key; non-empty and unique within a CommandSet.
    - description: one-line summary; the empty string keeps the command out of
      listings (it stays dispatchable).
    - usage(): writes help for this command to standard error; must not exit.
    - parse(arguments): binds the arguments that follow the command name; raises
      (e.g. ArgumentCountError) when they are unusable.
    - run(): executes the command using the parsed state; raises on failure.
    """

    @property
    def name(self) -> str: ...

    @property
    def description(self) -> str: ...

    def usage(self) -> None: ...

    def parse(self, arguments: list[str], /) -> None: ...

    def run(self) -> None: ...


class CommandSet:
    """
    Ordered set of commands, unique by name.

    Invariants
    - no two entries share a name; the first registration wins.
    - insertion order is preserved and used for lookup, visiting and listings.
    - the set only grows; commands are never removed.

    Notes
    - Registration is expected to happen before dispatch. Mutating the set from
      within visit() is not supported.
    """

    def __init__(self):
        self._commands = []

    def add(self, command, /):
        """
        Append `command` unless a command with the same name is already registered.

        Duplicates are ignored silently so repeated initialization paths are safe.

        Raises
        - TypeError when `command` does not implement the Command protocol.
        - ValueError when its name is empty.
        """
        if not isinstance(command, Command):
            raise TypeError("add() argument must implement the Command protocol")
        if not isinstance(name := command.name, str) or not name:
            raise ValueError("command name must be a non-empty string")
        if self.lookup(name) is not None:
            return
        self._commands.append(command)

    def lookup(self, name, /):
        """
        Return the first command named `name` (in insertion order), or None.
        """
        for command in self._commands:
            if command.name == name:
                return command
        return None

    def visit(self, fn, /):
        """
        Call `fn(command)` for every command in insertion order.
        """
        for command in self._commands:
            fn(command)

    def parse(self, flags, arguments=Unset, /):
        """
        Dispatch the command line to a registered command.

        Procedure
        1. `flags` parses the leading flags of `arguments` (sys.argv[1:] by
           default); syntax errors follow the flag set's own error policy.
        2. The first remaining positional argument names the command.
        3. The matching command parses the rest of the arguments. On failure the
           error is reported, the command's usage() is shown and the process
           exits with status 1 (a help request exits 0 after the usage).
        4. The command runs. On failure the error is reported and the process
           exits with status 1; otherwise parse() returns normally.
        5. With no command name, or an unknown one ("invalid command: <name>"),
           flags.usage() is shown and the process exits with status 1.

        Only one level is dispatched: the command's own arguments are never
        interpreted as a nested command name.
        """
        if arguments is Unset:
            arguments = sys.argv[1:]

        if args := flags.parse(arguments):
            name, *arguments = args
            if (command := self.lookup(name)) is not None:
                try:
                    command.parse(arguments)
                except HelpRequested:
                    command.usage()
                    sys.exit(0)
                except Exception as error:
                    report(error)
                    command.usage()
                    sys.exit(1)
                try:
                    command.run()
                except Exception as error:
                    report(error)
                    sys.exit(1)
                return
            report(UnknownCommandError(f"invalid command: {name}", name=name))
        flags.usage()
        sys.exit(1)

    def format_usage(self, flags, usage, /):
        """
        Render a usage template with both flag defaults and the command listing.

        See cmdset.usage for the template surface; this level adds PrintCommands.
        """
        return render_usage(flags, usage, self)

    def print_usage(self, flags, usage, /):
        """
        Print a help message to standard error (see format_usage).
        """
        console.print(self.format_usage(flags, usage), end="")

    def __len__(self):
        return len(self._commands)

    def __iter__(self):
        return iter(tuple(self._commands))

    def __contains__(self, name):
        return self.lookup(name) is not None

    def __repr__(self):
        return f"CommandSet({[command.name for command in self._commands]!r})"


CommandLine = CommandSet()
"""
default set of commands, dispatched from sys.argv[1:] by parse().
"""


def add(command, /):
    """
    Append `command` to the default set; duplicates are ignored silently.
    """
    CommandLine.add(command)


def lookup(name, /):
    """
    Return the command named `name` from the default set, or None.
    """
    return CommandLine.lookup(name)


def visit(fn, /):
    """
    Call `fn(command)` for every command of the default set in insertion order.
    """
    CommandLine.visit(fn)


def parse():
    """
    Dispatch sys.argv[1:] using the default flag and command sets.
    """
    CommandLine.parse(_flags, sys.argv[1:])


def print_usage(flags, usage, /):
    """
    Print a help message for `flags` and the default command set.
    """
    CommandLine.print_usage(flags, usage)


def print_global_usage(usage, /):
    """
    Print a help message using the default flag and command sets.
    """
    print_usage(_flags, usage)


__all__ = (
    "Command",
    "CommandSet",
    "CommandLine",
    "add",
    "lookup",
    "visit",
    "parse",
    "print_usage",
    "print_global_usage",
)

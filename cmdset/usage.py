"""
cmdset usage rendering: template-driven help messages.

Templates are plain str.format strings evaluated against a fresh context per
render. The context exposes:

Variables
- Program: the base program name (see utils.program).
- Name: the name of the flag set.

Hooks (evaluated lazily, each time they are referenced)
- PrintDefaults: the default values of all flags in the flag set.
- PrintCommands: names and descriptions of all listed commands in a command
  set (registry-level rendering only, see CommandSet.print_usage).

Example
    print_flag_usage(flags, '''
        Usage:

          {Program} [-o output] <module>

        Flags:

          {PrintDefaults}
    ''')

The template is trimmed and always ends with exactly one newline. Literal
braces must be doubled ("{{" and "}}"). A malformed template (unbalanced
braces, unknown fields) raises ValueError before anything is written.
"""
import string

from .flags import CommandLine
from .utils import Unset, console, program

_formatter = string.Formatter()


class _Hook:
    """
    lazy text producer usable as a str.format field.
    """
    __slots__ = ("_callback",)

    def __init__(self, callback, /):
        self._callback = callback

    def __call__(self):
        return self._callback()

    def __format__(self, spec):
        return format(self._callback(), spec)

    def __str__(self):
        return self._callback()


def _compile(usage, context):
    if not isinstance(usage, str):
        raise TypeError("usage template must be a string")
    usage = usage.strip() + "\n"
    try:
        fields = [field for _, field, _, _ in _formatter.parse(usage) if field is not None]
    except ValueError as error:
        raise ValueError(f"malformed usage template: {error}") from None
    for field in fields:
        # positional, attribute and index fields have nothing to bind to
        if field not in context:
            raise ValueError(f"malformed usage template: unknown field {field or '{}'!r}")
    return usage


def _context(flags, commands=Unset):
    context = {
        "Program": program(),
        "Name": flags.name,
        "PrintDefaults": _Hook(lambda: flags.format_defaults().strip()),
    }
    if commands is not Unset:
        context["PrintCommands"] = _Hook(lambda: format_commands(commands).strip())
    return context


def format_commands(commands, /):
    """
    return one aligned "name  description" row per listed command.

    commands with an empty description are unlisted and skipped. names are
    indented by two spaces and padded to a shared column of at least 16
    characters, keeping two spaces before the widest name's description.
    """
    rows = []

    def collect(command):
        if description := command.description:
            rows.append((command.name, description))

    commands.visit(collect)
    width = max([16, *(len(name) + 4 for name, _ in rows)])
    return "".join(f"{'  ' + name:<{width}}{description}\n" for name, description in rows)


def render_usage(flags, usage, /, commands=Unset):
    """
    render `usage` against `flags` (and `commands` when given) and return the text.
    """
    context = _context(flags, commands)
    return _compile(usage, context).format_map(context)


def print_flag_usage(flags, usage, /):
    """
    print a help message for a flag set to standard error (no command listing).
    """
    console.print(render_usage(flags, usage), end="")


def print_global_flag_usage(usage, /):
    """
    print a help message to standard error using the default flag set.
    """
    print_flag_usage(CommandLine, usage)


__all__ = (
    "format_commands",
    "render_usage",
    "print_flag_usage",
    "print_global_flag_usage",
)

"""
cmdset utilities (internal helpers, carefully exposed)

Scope
- Sentinel used across the package to tell "not provided" apart from None.
- Process helpers: program name and command line as seen by the host.
- Environment lookup that fails with a typed error instead of aborting.
- The shared stderr console every diagnostic goes through.
"""
import functools
import os
import os.path
import sys
from typing import final

from rich.console import Console

console = Console(stderr=True, soft_wrap=True, markup=False, emoji=False, highlight=False)


@final
class UnsetType:
    """
    internal singleton sentinel representing an "unset" value.

    behavior
    - truthiness: bool(Unset) is False.
    - identity: Unset is a process-wide singleton (see __new__).
    - display: repr(Unset) -> "Unset".
    - final: subclassing is forbidden to preserve semantics.
    """

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


Unset = UnsetType()


def program():
    """
    return the base name of the running program.

    lookup
    - the host application may expose __prog__ in __main__ to override the name
      (handy for entry points installed under a different name than the script).
    - otherwise the base name of sys.argv[0] is used.
    """
    prog = getattr(sys.modules.get("__main__"), "__prog__", None)
    if isinstance(prog, str) and prog:
        return prog
    return os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else ""


def arguments():
    """
    return the command line arguments, starting with the base program name.
    """
    return [program(), *sys.argv[1:]]


def getenv(name, /):
    """
    return the value of the environment variable `name`.

    errors
    - MissingEnvironmentError when the variable is not present. The error is a
      KeyError too, so callers may treat it like a missing mapping key.
    """
    from .faults import MissingEnvironmentError

    if not isinstance(name, str) or not name:
        raise TypeError("getenv() argument must be a non-empty string")
    try:
        return os.environ[name]
    except KeyError:
        raise MissingEnvironmentError(f"missing environment variable: ${name}", name=name) from None


__all__ = (
    "UnsetType",
    "Unset",
    "program",
    "arguments",
    "getenv",
    "console",
)

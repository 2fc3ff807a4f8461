"""
Helpers for implementing source generators.

Generators are small programs that run another program, capture its output and
turn it into a source file. The helpers below cover the repetitive parts:
the command line a file was generated with (for the "DO NOT EDIT" header),
the interpreter to run, and writing the result either to a file or to
standard output ("-").
"""
import os
import sys

from .faults import MissingEnvironmentError
from .utils import arguments as _arguments, getenv


def arguments():
    """
    return the command line arguments, starting with the base program name, as
    a single string.
    """
    return " ".join(_arguments())


def interpreter():
    """
    return the Python interpreter generators should run: $PYTHON when set,
    otherwise the running interpreter.
    """
    try:
        return getenv("PYTHON")
    except MissingEnvironmentError:
        return sys.executable


def python_command(arguments, /):
    """
    return the argument vector running the interpreter with `arguments`.
    """
    return [interpreter(), *arguments]


def run_module_command(module, arguments, /):
    """
    return the argument vector running `module` as a script ("python -m module")
    with `arguments`.
    """
    if not isinstance(module, str) or not module:
        raise TypeError("run_module_command() module must be a non-empty string")
    return python_command(["-m", module, *arguments])


def write_file(name, data, /):
    """
    write `data` (str or bytes) to the file `name`; "-" writes to standard output.
    """
    if isinstance(data, str):
        data = data.encode()
    if name == "-":
        # captured streams (StringIO) have no binary buffer
        if (stdout := getattr(sys.stdout, "buffer", None)) is None:
            sys.stdout.write(data.decode())
        else:
            stdout.write(data)
        sys.stdout.flush()
        return
    with open(os.fspath(name), "wb") as file:
        file.write(data)


def write_source(name, data, /):
    """
    check that `data` is valid Python source before calling write_file().

    errors
    - SyntaxError when the generated source does not compile; nothing is written.
    """
    source = data.decode() if isinstance(data, bytes) else data
    compile(source, "<generated>" if name == "-" else os.fspath(name), "exec", dont_inherit=True)
    write_file(name, data)


__all__ = (
    "arguments",
    "interpreter",
    "python_command",
    "run_module_command",
    "write_file",
    "write_source",
)

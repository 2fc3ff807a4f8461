"""
doxxer: generate documentation modules for command line applications.

Runs a module as a script ("python -m <module> [arguments...]"), captures what
it prints (typically its -h output) and writes it as the docstring of a
generated Python module, so the help text ships with the sources and shows up
in pydoc and IDEs.

    doxxer -o mytool/doc.py mytool -h
"""
import subprocess
import sys

from .faults import CommandError, report
from .flags import ErrorHandling, FlagSet
from .generate import arguments, run_module_command, write_source
from .runtime import fix_version
from .usage import print_flag_usage

__prog__ = "doxxer"

# stamped by the release pipeline; empty for source installs
version = ""

USAGE = """
Doxxer is a tool that generates documentation for command line applications.

Usage:

  {Program} [-o output] <module> [arguments...]

Flags:

  {PrintDefaults}

Arguments are passed verbatim to "python -m <module>", whose standard output
and standard error are captured. The captured text becomes the docstring of a
generated module, which by default is written to doc.py. Use "-" as output to
write to standard output instead.

Example:

  {Program} -o mytool/doc.py mytool -h

The module runs under the current interpreter unless $PYTHON names another.
"""

TEMPLATE = '''\
# Code generated by "{arguments}"; DO NOT EDIT.

"""
{text}"""
'''


def render(text, command, /):
    """
    return the source of a module whose docstring holds `text`, one line per
    captured line, with backslashes and double quotes escaped.
    """
    lines = (line.replace("\\", "\\\\").replace('"', '\\"') for line in text.splitlines())
    return TEMPLATE.format(arguments=command.replace('"', "'"), text="".join(line + "\n" for line in lines))


def capture(module, arguments, /):
    """
    run `module` with `arguments` and return its combined stdout and stderr.

    bytes that are not valid UTF-8 are replaced, never fatal.

    errors
    - subprocess.CalledProcessError when the module exits with a non-zero status.
    """
    completed = subprocess.run(
        run_module_command(module, arguments),
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
        check=True,
    )
    return completed.stdout.decode(errors="replace")


def _fatal(error):
    report(CommandError(f"{__prog__}: {error}"))
    sys.exit(1)


def main():
    flags = FlagSet(__prog__, ErrorHandling.EXIT)
    flags.usage = lambda: print_flag_usage(flags, USAGE)
    flags.add_argument("-o", dest="output", default="doc.py", help="Write `output` to file")
    flags.add_argument("-version", dest="version", action="store_true", help="Print version and exit")

    args = flags.parse(sys.argv[1:])
    if flags.values.version:
        print(f"{__prog__} {fix_version(version, 'cmdset')}")
        return
    if not args:
        flags.usage()
        sys.exit(1)

    # Faults raised while generating are reported, never dumped as tracebacks.
    try:
        source = render(capture(args[0], args[1:]), arguments())
        write_source(flags.values.output, source)
    except Exception as error:
        _fatal(error)


if __name__ == "__main__":
    main()

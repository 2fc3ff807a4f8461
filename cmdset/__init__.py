"""
cmdset: named sub-commands on top of a classic "flags first" flag parser.

    import cmdset

    flags = cmdset.FlagSet("tool", cmdset.ErrorHandling.EXIT)
    commands = cmdset.CommandSet()
    commands.add(Build())
    commands.parse(flags)

Submodules
- commands: Command protocol, CommandSet registry and dispatch.
- flags: FlagSet and ErrorHandling.
- usage: template-driven help messages.
- faults: error taxonomy and reporting.
- runtime, generate: helpers for version stamping and source generators.
"""
__title__ = 'cmdset'
__author__ = 'Eiko Reishin (影皇嶺臣)'
__license__ = 'MIT'
# Placeholder, modified by dynamic-versioning.
__version__ = "0.1.0"

from collections import namedtuple

from .commands import *
from .faults import *
from .flags import *
from .usage import *

VersionInfo = namedtuple("VersionInfo", "major minor micro releaselevel serial metadata")

version_info = VersionInfo(*map(int, __version__.split(".")), "final", 0, "")

__all__ = (
    "__title__",
    "__author__",
    "__license__",
    "__version__",
    "VersionInfo",
    "version_info",
    *commands.__all__,  # type: ignore[attr-defined]
    *faults.__all__,  # type: ignore[attr-defined]
    *flags.__all__,  # type: ignore[attr-defined]
    *usage.__all__,  # type: ignore[attr-defined]
)

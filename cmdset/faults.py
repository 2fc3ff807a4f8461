"""
cmdset faults (errors) and reporting.

Scope
- CommandError and its subclasses: the exception taxonomy commands, flag sets
  and helpers raise. Each carries a message and read-only options.
- report(): writes a fault as a single line to standard error (or a given sink).

Integration
- Commands raise CommandError subclasses (or any exception) from parse()/run();
  the dispatcher reports them with report() and terminates the process.
- Flag sets raise FlagError/HelpRequested and apply their own error policy.
- Hosts can restyle faults through __styles__ in __main__.
"""
import sys
from collections import defaultdict
from types import MappingProxyType

from rich.console import Console
from rich.text import Text

from .utils import Unset, console


class CommandError(Exception):
    """
    base type for every fault raised by cmdset and by the commands it dispatches.

    subclasses pin a default message; extra keyword options are
    kept as a read-only mapping for reporters and tests (e.g. name=..., flag=...).
    """
    default = "command failed"

    def __init__(self, message=Unset, /, **options):
        if message is Unset:
            message = self.default
        if not isinstance(message, str):
            raise TypeError(f"{type(self).__name__} message must be a string")
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return self.message


class ArgumentCountError(CommandError):
    default = "wrong number of arguments"


class UnknownCommandError(CommandError):
    default = "invalid command"


class FlagError(CommandError):
    default = "bad flag syntax"


class HelpRequested(FlagError):
    default = "help requested"


class MissingEnvironmentError(CommandError, KeyError):
    default = "missing environment variable"


def report(fault, /, *, file=Unset):
    """
    write `fault` to standard error as one line.

    behavior
    - the message is str(fault), so plain exceptions raised by commands are
      reported the same way as CommandError instances.
    - when the sink is a colour terminal the line is styled; styles come from
      the defaults below, overridden by __styles__ in __main__.
    - `file` redirects the line to another sink (flag sets pass their output).
    """
    styles = defaultdict(str, {
        "error-message": "bold #FF4DA6",
        "help-message": "",
    } | getattr(sys.modules.get("__main__"), "__styles__", {}))

    target = console if file is Unset else Console(
        file=file, soft_wrap=True, markup=False, emoji=False, highlight=False
    )
    style = styles["help-message" if isinstance(fault, HelpRequested) else "error-message"]
    target.print(Text(str(fault), style=style if target.is_terminal else ""))


__all__ = (
    "CommandError",
    "ArgumentCountError",
    "UnknownCommandError",
    "FlagError",
    "HelpRequested",
    "MissingEnvironmentError",
    "report",
)

"""
Argtable faults (errors) and rendering.

Scope
- ExitCode: canonical, stable process exit statuses for every fault. A driver
  that catches an ArgtableError exits with `error.code`.
- ArgtableError and its subclasses: carry a message plus read-only context
  options (title, hint, input, command, ...) and know how to render themselves
  through rich in a short, lowercased, actionable way.

Hierarchy
- ConfigurationError: duplicate or unknown command, bad color name. A setup-time
  programmer error; not meant to be recovered from at runtime.
- ArgvReadFailure: the process argument vector cannot be read. Fatal.
- UsageError: malformed short-option declaration. It is also the base of every
  fault caused by invalid user input, so a driver can print the help screen
  for the whole family with a single except clause:
  • UnknownOptionError
  • OptionArgumentRequiredError
  • ArgumentCountError

Integration
- Faults are plain exceptions: the registry and the parser raise them, the caller
  decides what to print and which status to exit with.
- copy.replace(error, **context) merges more context into a copy.
- rich renders them directly: Console().print(error).
"""
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Group
from rich.text import Text

from .utils import Unset, coalesce


class ExitCode(IntEnum):
    """
    process exit statuses consumed by the driver.

    - ANY is used when no more specific status applies.
    - OPT_ARG_DENIED is reserved: flags given an inline value are accepted as
      present, so nothing raises it today.
    """
    ANY              = -1
    UNKNOWN_OPT      = 1
    OPT_ARG_REQUIRED = 2
    OPT_ARG_DENIED   = 3
    OPT_AMBIGUOUS    = 4
    ARG_READ         = 5


class ArgtableError(Exception):
    code = ExitCode.ANY
    title = "error"

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(coalesce(message, ""))
        self.message = coalesce(message, "")
        self.options = MappingProxyType(options)

    @property
    def hint(self):
        return self.options.get("hint")

    def __rich__(self):
        main = __import__("__main__")

        styles = defaultdict(str, {
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan exit code
            "error-title": "bold #FF4DA6",  # pinky title
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",
            "hint": "italic #9CE19C",
        } | getattr(main, "__styles__", {}))

        colorful = self.options.get("colorful", True)

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            return Text(str(fragment), styles[style] if colorful else "")

        prog = getattr(main, "__prog__", self.options.get("prog", "argtable"))

        header = Text.assemble(
            "[ ",
            text(prog, "prog-name"),
            " - ",
            text(int(self.code), "code"),
            " | ",
            text(self.options.get("title", self.title).title(), "error-title"),
            " ]"
        )
        renders = [header, text(self.message, "error-message")]
        if self.hint:
            renders.append(Text.assemble(text(" → ", "hint-arrow"), text(self.hint, "hint")))
        return Group(*renders)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class ConfigurationError(ArgtableError):
    title = "configuration error"


class ArgvReadFailure(ArgtableError):
    code = ExitCode.ARG_READ
    title = "unreadable arguments"


class UsageError(ArgtableError):
    code = ExitCode.OPT_AMBIGUOUS
    title = "usage error"


class UnknownOptionError(UsageError):
    code = ExitCode.UNKNOWN_OPT
    title = "unknown option"


class OptionArgumentRequiredError(UsageError):
    code = ExitCode.OPT_ARG_REQUIRED
    title = "missing option value"


class ArgumentCountError(UsageError):
    code = ExitCode.OPT_ARG_REQUIRED
    title = "not enough arguments"


__all__ = (
    "ExitCode",
    "ArgtableError",
    "ConfigurationError",
    "ArgvReadFailure",
    "UsageError",
    "UnknownOptionError",
    "OptionArgumentRequiredError",
    "ArgumentCountError",
)

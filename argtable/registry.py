"""
Argtable option, argument and command registry.

Overview
- Specs
  • OptionSpec: a named option (--long, optionally -x) that is either a flag
    or takes a value labelled in help as <label>.
  • ArgSpec: a positional argument, required or optional, used for help and
    for the argument-count check.
  • CommandSpec: one command scope; the root scope is the command named "".

- Registry
  • register_command / register_option / register_argument build the scopes
    during setup; nothing mutates them once parsing starts.
  • set_help / set_command_help / set_compact_help feed the help screen.

Scopes
- Every command owns its own option table. A command never falls back to the
  root options: a root flag is only recognized before the command token.
- Positional arguments are checked in declaration order. A required argument
  declared after an optional one is never counted as required.

Validation highlights
- Long names must be non-empty and may not contain whitespace or "=" or start
  with "-".
- Short names must be exactly one ASCII character (UsageError otherwise) and
  unique within a command (UsageError when another long option owns it).
- Commands and options can only be attached to registered commands
  (ConfigurationError).
"""
import logging
import re
from types import MappingProxyType

from rich.text import Text

from .faults import ConfigurationError, UsageError
from .utils import *

logger = logging.getLogger(__name__)


class SpecType(type):
    """
    Metaclass for registry specs.

    - exposes every name listed in __introspectable__ as a read-only property
      mirroring the private "_<name>" attribute.
    - provides a stable __repr__ and a __rich_repr__ for pretty printers.
    - __typename__ ("option-spec", ...) is used in validation messages.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            return "%s(%s)" % (
                type(self).__typename__,
                ", ".join("%s=%r" % pair for pair in self.__rich_repr__())
            )
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_help(cls, help, /):
    if not isinstance(help, str | Text):
        raise TypeError(f"{cls.__typename__} 'help' must be a string")
    return str(help)


class OptionSpec(metaclass=SpecType):
    """
    Named option specification.

    Properties
    - long: name used on the command line as --long and as the result key.
    - help: help text (may contain color escapes).
    - short: single character used as -x, or None.
    - label: value name shown as <label>; its presence means the option
      requires a value. None for flags.
    """
    __introspectable__ = ("long", "help", "short", "label")

    def __init__(self, long, help, /, short=None, label=None):
        if not isinstance(long, str):
            raise TypeError("option-spec 'long' must be a string")
        elif not re.fullmatch(r"[^\s=-][^\s=]*", long):
            raise ValueError("option-spec 'long' must be a non-empty name without whitespace, '=' or leading '-'")

        if short is not None:
            if not isinstance(short, str):
                raise TypeError("option-spec 'short' must be a string")
            elif len(short) != 1 or not short.isascii() or short.isspace() or short in "-=":
                raise UsageError(
                    "short option %r of %r must be exactly one ascii character" % (short, long),
                    title="invalid short option",
                    input=short,
                    hint="use a single letter such as 'x' (given as -x on the command line)",
                )

        if label is not None:
            if not isinstance(label, str):
                raise TypeError("option-spec 'label' must be a string")
            elif not (label := label.strip()):
                raise ValueError("option-spec 'label' cannot be empty")

        self._long = long
        self._help = _sanitize_help(type(self), help)
        self._short = short
        self._label = label

    @property
    def needs_argument(self):
        return self._label is not None


class ArgSpec(metaclass=SpecType):
    """Positional argument specification (name and help are for the help screen)."""
    __introspectable__ = ("name", "help", "required")

    def __init__(self, name, help, /, required=True):
        if not isinstance(name, str):
            raise TypeError("arg-spec 'name' must be a string")
        elif not (name := name.strip()):
            raise ValueError("arg-spec 'name' cannot be empty")
        if not isinstance(required, bool):
            raise TypeError("arg-spec 'required' must be a boolean")

        self._name = name
        self._help = _sanitize_help(type(self), help)
        self._required = required


class CommandSpec(metaclass=SpecType):
    """
    One command scope: its options (by long name), the short-to-long map and
    its positional arguments in declaration order.
    """
    __introspectable__ = ("name", "help", "options", "shorts", "arguments")

    def __init__(self, name, help, /):
        if not isinstance(name, str):
            raise TypeError("command-spec 'name' must be a string")
        elif name != name.strip() or name.startswith("-"):
            raise ValueError("command-spec 'name' cannot start with '-' or carry surrounding whitespace")

        self._name = name
        self._help = _sanitize_help(type(self), help)
        self._options = {}
        self._shorts = {}
        self._arguments = []

    def _add_option(self, option, /):
        if option.short is not None and self._shorts.get(option.short, option.long) != option.long:
            raise UsageError(
                "short option -%s is already used by --%s" % (option.short, self._shorts[option.short]),
                title="ambiguous short option",
                input=option.short,
                command=self._name,
                hint="pick another letter for --%s" % option.long,
            )
        # re-registering a long name replaces it, including its old short alias
        if previous := self._options.get(option.long):
            self._shorts.pop(previous.short, None)
        self._options[option.long] = option
        if option.short is not None:
            self._shorts[option.short] = option.long

    def _add_argument(self, argument, /):
        self._arguments.append(argument)

    def lookup(self, long, /):
        """return the OptionSpec registered under `long`, or None."""
        return self._options.get(long)

    def resolve(self, short, /):
        """return the long name behind the short alias `short`, or None."""
        return self._shorts.get(short)


class Registry:
    """
    Commands, options and arguments known to a program.

    The root command "" always exists. Commands keep registration order,
    which is also the order of the help screen.
    """

    def __init__(self):
        self._commands = {"": CommandSpec("", "")}
        self._command_help = Unset
        self._compact = False

    @property
    def commands(self):
        return MappingProxyType(self._commands)

    @property
    def compact(self):
        return self._compact

    def __contains__(self, name):
        return name in self._commands

    def __getitem__(self, name):
        try:
            return self._commands[name]
        except KeyError:
            raise ConfigurationError(
                "command %r not registered" % name,
                title="unknown command",
                input=name,
            ) from None

    def set_help(self, help, /):
        """set the description of the program itself (root command)."""
        self._commands[""]._help = _sanitize_help(CommandSpec, help)

    def set_command_help(self, help, /):
        """set the introduction printed above the list of commands."""
        self._command_help = _sanitize_help(CommandSpec, help)

    def set_compact_help(self, compact=True, /):
        """drop the blank separator lines of the help screen."""
        if not isinstance(compact, bool):
            raise TypeError("set_compact_help() argument must be a boolean")
        self._compact = compact

    def register_command(self, name, help, /):
        if name in self._commands:
            raise ConfigurationError(
                "command %r already registered" % name,
                title="duplicate command",
                input=name,
            )
        self._commands[name] = CommandSpec(name, help)
        logger.debug("registered command %r", name)

    def register_option(self, long, help, /, short=None, label=None, command=""):
        """
        register an option on `command` (the root command by default).

        parameters
        - long: long name, given as --long and used as result key.
        - help: help text.
        - short: one ASCII character given as -x, or None.
        - label: value name when the option requires a value, None for flags.
        - command: registered command the option belongs to.

        raises
        - ConfigurationError: `command` is not registered.
        - UsageError: `short` is not exactly one ASCII character, or is
          already used by another option of the same command.
        """
        spec = self[command]
        spec._add_option(OptionSpec(long, help, short, label))
        logger.debug("registered option %r (short=%r, label=%r) on command %r", long, short, label, command)

    def register_argument(self, name, help, /, required=True, command=""):
        """
        register a positional argument on `command`.

        arguments have to be registered in the order they are expected;
        required ones first.
        """
        spec = self[command]
        spec._add_argument(ArgSpec(name, help, required))
        logger.debug("registered %s argument %r on command %r", "required" if required else "optional", name, command)


__all__ = (
    "OptionSpec",
    "ArgSpec",
    "CommandSpec",
    "Registry",
)

r"""
Argtable argument-vector parsing and help screen.

Grammar
- `--name` (flag), `--name=value`, `--name value`
- `-x` (flag), `-x value`
- a value is taken from the next token only when that token does not look
  like an option itself (it does not match `--?\w`); `-` and plain words do.
- `--` ends option scanning; everything after it is positional.
- `-` alone is positional (stdin by convention), not an option.
- the first token not starting with `-` ends option scanning for the whole
  remainder; later tokens are never re-examined as options.
- when no command was selected yet and the first positional token names a
  registered command, it is consumed as the command and scanning starts over
  on the rest of the tokens with that command's option table.

Passes
- parse() runs at most two scans: the root pass and, when a command is
  detected, the command pass. Every scan builds its own option map; the maps
  are merged so that command options override root options of the same name.

Results
- get_cmd(): selected command or "".
- get_opt(name, default=False): True for flags, the string for valued options,
  `default` when not given. get_opt() returns a copy of the whole map.
- get_args(): leftover positional tokens.

Quick example:
    >>> options = Options(["-p", "status", "--long", "foo"], prog="tool")
    >>> options.register_option("plugins", "run on plugins only", "p")
    >>> options.register_command("status", "display status info")
    >>> options.register_option("long", "display long lines", "l", command="status")
    >>> options.parse()
    >>> options.get_cmd(), options.get_opt("plugins"), options.get_opt("long"), options.get_args()
    ('status', True, True, ['foo'])
"""
import itertools
import logging
import os.path
import re
import sys
from collections.abc import Iterable, Sequence
from typing import Literal

from .colors import Colors
from .faults import ArgvReadFailure, UnknownOptionError, OptionArgumentRequiredError, ArgumentCountError
from .registry import Registry
from .tables import TableFormatter
from .utils import *

logger = logging.getLogger(__name__)

type OptionValue = Literal[True] | str

# A token that would be taken for an option; never consumed as an option value
OPTION = re.compile(r"--?\w", re.ASCII)

DEFAULT_COMMAND_HELP = "This tool accepts a command as first parameter as outlined below:"


def _read_argv():
    """
    read the process argument vector (program name included).

    raises ArgvReadFailure when the interpreter has no usable sys.argv, as in
    some embedded interpreters.
    """
    try:
        argv = sys.argv
    except AttributeError:
        argv = None
    if (
            not isinstance(argv, Sequence) or
            isinstance(argv, str) or
            not all(isinstance(token, str) for token in argv)
    ):
        raise ArgvReadFailure(
            "could not read the process arguments",
            title="unreadable arguments",
            hint="pass the arguments explicitly: Options([...])",
        )
    return list(argv)


class Options(Registry):
    """
    Registry plus the argument-vector parser and help screen built on it.

    Parameters
    - args: tokens to parse, program name already stripped. When omitted,
      sys.argv is read: its first item is the program name.
    - prog: program name for the help screen and faults (__main__.__prog__, then
      the basename of sys.argv[0] by default).
    - colors: Colors for the help screen (terminal detection by default).
    """

    def __init__(self, args=Unset, /, *, prog=Unset, colors=Unset):
        super().__init__()

        if prog is Unset:
            prog = getattr(__import__("__main__"), "__prog__", Unset)

        if args is Unset:
            argv = _read_argv()
            prog = coalesce(prog, os.path.basename(argv[0]) if argv else "")
            args = argv[1:]
        elif isinstance(args, str) or not isinstance(args, Iterable):
            raise TypeError("Options() argument must be an iterable of strings")
        else:
            args = list(args)
            if not all(isinstance(token, str) for token in args):
                raise TypeError("Options() argument must be an iterable of strings")

        if prog is Unset:
            try:
                argv = _read_argv()
            except ArgvReadFailure:
                argv = []
            prog = os.path.basename(argv[0]) if argv else ""
        elif not isinstance(prog, str):
            raise TypeError("Options() 'prog' must be a string")

        if not isinstance(colors, Colors | Unset):
            raise TypeError("Options() 'colors' must be a Colors instance")

        self._tokens = tuple(args)
        self._prog = prog
        self._colors = Colors() if colors is Unset else colors

        self._command = ""
        self._options = {}
        self._args = list(self._tokens)

    @property
    def prog(self):
        return self._prog

    @property
    def colors(self):
        return self._colors

    def _scan(self, tokens, command, /):
        """
        one left-to-right pass over `tokens` in the scope of `command`.

        returns (values, remaining): the options found by this pass and the
        positional tokens left once option scanning stopped.
        """
        spec = self._commands[command]
        values = {}

        index = 0
        while index < len(tokens):
            token = tokens[index]

            # explicit end of options
            if token == "--":
                return values, list(tokens[index + 1:])

            # '-' is stdin; a word ends option scanning for good
            if token == "-" or not token.startswith("-"):
                return values, list(tokens[index:])

            if token.startswith("--"):
                long, separator, value = token[2:].partition("=")
                value = value if separator else None
                input = "--" + long
            else:
                long = spec.resolve(token[1:])
                value = None
                input = token

            if (option := spec.lookup(long)) is None:
                scope = "command %r" % command if command else "this program"
                raise UnknownOptionError(
                    "no such option %r" % input,
                    title="unknown option",
                    prog=self._prog,
                    input=input,
                    command=command,
                    index=index,
                    hint="check the options accepted by %s in the help screen" % scope,
                )

            if option.needs_argument:
                if value is None and index + 1 < len(tokens) and not OPTION.match(tokens[index + 1]):
                    index += 1
                    value = tokens[index]
                if value is None:
                    raise OptionArgumentRequiredError(
                        "option %r requires an argument" % input,
                        title="missing option value",
                        prog=self._prog,
                        input=input,
                        command=command,
                        index=index,
                        hint="give it as %s <%s> or --%s=<%s>" % (input, option.label, option.long, option.label),
                    )
                values[option.long] = value
            else:
                values[option.long] = True

            index += 1

        return values, []

    def parse(self):
        """
        parse the tokens given at construction against the registry.

        results replace those of any previous call.

        raises
        - UnknownOptionError: an option is not registered in the current scope.
        - OptionArgumentRequiredError: a valued option got no value.
        """
        command = ""
        tokens = list(self._tokens)
        options = {}

        while True:
            logger.debug("scanning %d tokens for command %r", len(tokens), command)
            values, remaining = self._scan(tokens, command)
            options |= values

            if command or not remaining or not remaining[0] or remaining[0] not in self._commands:
                break

            command, tokens = remaining[0], remaining[1:]
            logger.debug("detected command %r", command)

        self._command = command
        self._options = options
        self._args = remaining

    def check_arguments(self):
        """
        make sure the required positional arguments of the selected command
        were given.

        only the leading run of required arguments counts; the check is about
        numbers, not contents.

        raises ArgumentCountError when too few arguments are left.
        """
        arguments = self._commands[self._command].arguments
        required = sum(1 for _ in itertools.takewhile(lambda x: x.required, arguments))

        if required > len(self._args):
            raise ArgumentCountError(
                "not enough arguments: %d %s required, %d given" % (
                    required, pluralize("argument", required), len(self._args)
                ),
                title="not enough arguments",
                prog=self._prog,
                command=self._command,
                hint="expected %s" % " ".join("<%s>" % argument.name for argument in arguments[:required]),
            )
        return True

    def get_opt(self, name=None, default=False):
        """
        value of the option `name` (by long name, whatever spelling was used).

        - flags resolve to True, valued options to their string.
        - `default` is returned when the option was not given.
        - with no name, a copy of every resolved option is returned.
        """
        if name is None:
            return dict(self._options)
        return self._options.get(name, default)

    def get_cmd(self):
        return self._command

    def get_args(self):
        return list(self._args)

    def help(self):
        """
        build the help screen for every registered command.

        layout
        - USAGE line of the program, its description, OPTIONS, ARGUMENTS and
          the COMMANDS introduction, then one block per command with its
          usage line, description, options and arguments.
        - rows are laid out by TableFormatter in [margin, 30%, *] columns.
        - colors come from the "section-label", "option-name",
          "argument-name" and "command-name" palette entries.

        the result only depends on the registry, the program name and the
        colors, so repeated calls return the same string.
        """
        formatter = TableFormatter(self._colors)
        colors = self._colors
        gap = "" if self._compact else "\n"
        nested = len(self._commands) > 1

        text = []
        for name, spec in self._commands.items():
            options = spec.options
            arguments = spec.arguments

            # usage or command syntax line
            if not name:
                text.append(colors.wrap("USAGE:", "section-label") + "\n")
                line = "   " + self._prog
                margin = 2
            else:
                text.append(gap)
                line = colors.wrap("   " + name, "command-name")
                margin = 4

            if options:
                line += " " + colors.wrap("<OPTIONS>", "option-name")
            if not name and nested:
                line += " " + colors.wrap("<COMMAND> ...", "command-name")
            for argument in arguments:
                out = colors.wrap("<%s>" % argument.name, "argument-name")
                line += " " + (out if argument.required else "[%s]" % out)
            text.append(line + "\n")

            if spec.help:
                text.append(gap)
                text.append(formatter.format([margin, "*"], ["", spec.help]))

            if options:
                if not name:
                    text.append("\n" + colors.wrap("OPTIONS:", "section-label") + "\n")
                for option in options.values():
                    label = ""
                    if option.short:
                        label += "-" + option.short
                        if option.label:
                            label += " <%s>" % option.label
                        label += ", "
                    label += "--" + option.long
                    if option.label:
                        label += " <%s>" % option.label

                    text.append(gap)
                    text.append(formatter.format(
                        [margin, "30%", "*"],
                        ["", label, option.help],
                        ["", "option-name", ""]
                    ))

            if arguments:
                if not name:
                    text.append("\n" + colors.wrap("ARGUMENTS:", "section-label") + "\n")
                text.append(gap)
                for argument in arguments:
                    text.append(formatter.format(
                        [margin, "30%", "*"],
                        ["", "<%s>" % argument.name, argument.help],
                        ["", "argument-name", ""]
                    ))

            # head line and intro for the command blocks that follow
            if not name and nested:
                text.append("\n" + colors.wrap("COMMANDS:", "section-label") + "\n")
                text.append(formatter.format([margin, "*"], ["", coalesce(self._command_help, DEFAULT_COMMAND_HELP)]))

        return "".join(text)


__all__ = (
    "OptionValue",
    "Options",
)

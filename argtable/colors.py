"""
ANSI coloring for help screens and tables.

Colors are rich style definitions ("green", "bold cyan", "#FF4DA6", ...)
rendered into SGR escape sequences, so the produced strings can be measured
by argtable.display and embedded in any table cell.

Palette
- The help screen refers to colors by palette key (section-label, option-name,
  argument-name, command-name). A mapping named __styles__ in __main__
  overrides any entry; keys that are not in the palette are used as plain
  rich style definitions.

Support detection
- Colors(enabled=Unset) asks rich.console.Console whether stdout supports
  colors (honoring NO_COLOR, TERM=dumb and non-tty outputs).
"""
from collections import defaultdict

from rich.color import ColorSystem
from rich.console import Console
from rich.errors import StyleSyntaxError
from rich.style import Style

from .faults import ConfigurationError
from .utils import Unset, coalesce

PALETTE = {
    "section-label": "yellow",
    "option-name": "green",
    "argument-name": "cyan",
    "command-name": "magenta",
}

# Console.color_system names; undetected systems fall back to the 16 standard colors
SYSTEMS = {
    "standard": ColorSystem.STANDARD,
    "256": ColorSystem.EIGHT_BIT,
    "truecolor": ColorSystem.TRUECOLOR,
    "windows": ColorSystem.WINDOWS,
}


class Colors:
    """
    Wrap text in color escapes when enabled; pass it through otherwise.

    >>> colors = Colors(enabled=True)
    >>> colors.wrap("done", "green")
    '\\x1b[32mdone\\x1b[0m'
    """

    def __init__(self, enabled=Unset, /):
        if not isinstance(enabled, bool | Unset):
            raise TypeError("Colors() argument must be a boolean")
        console = Console()
        self._system = SYSTEMS.get(console.color_system, ColorSystem.STANDARD)
        self._enabled = coalesce(enabled, console.color_system is not None)

    @property
    def enabled(self):
        return self._enabled

    def enable(self):
        self._enabled = True

    def disable(self):
        self._enabled = False

    def style(self, name, /):
        """resolve a palette key (or a raw rich style definition) to a Style."""
        styles = defaultdict(lambda: name, PALETTE | getattr(__import__("__main__"), "__styles__", {}))
        try:
            return Style.parse(styles[name])
        except StyleSyntaxError as error:
            raise ConfigurationError("no such color %r" % name, title="unknown color", input=name) from error

    def wrap(self, text, color, /):
        """
        return `text` surrounded by the escapes of `color`.

        the color is validated even when disabled, so a typo fails the same
        way on every terminal.
        """
        style = self.style(color)
        if not self._enabled:
            return text
        return style.render(text, color_system=self._system)

    def __repr__(self):
        return "Colors(enabled=%r)" % self._enabled


__all__ = (
    "PALETTE",
    "Colors",
)

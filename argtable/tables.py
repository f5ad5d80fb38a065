r"""
Argtable table formatting.

Overview
- Column specifications
  • Fixed(width): exactly `width` columns.
  • Percent(percent): a share of what fixed columns leave over.
  • Wildcard(): whatever remains after fixed and percentage columns.
  • column(x): normalize the shorthand accepted everywhere a column is
    expected: 12 or "12" (fixed), "30%" (percent), "*" (wildcard).

- allocate(columns, width, border=" ")
  • Concrete integer widths that, together with one border between each pair
    of adjacent columns, add up to exactly `width`.

- wrap(text, width=75, brk="\n", cut=False)
  • Greedy word wrapper measuring display width (escapes excluded, one column
    per code point).

- TableFormatter
  • Lays cells out in a padded grid: wraps every cell to its column, pads the
    shorter columns of a row with blank lines, pads every line to its
    column's display width and optionally colors it.

Quick example:
    >>> formatter = TableFormatter(width=20, border="|")
    >>> formatter.format([4, "*"], ["-v", "be verbose"])
    '-v  |be verbose     \n'
"""
import logging
import re

from rich.console import Console

from . import display
from .colors import Colors
from .utils import *

logger = logging.getLogger(__name__)


class ColumnType(type):
    """
    Metaclass giving column specs a stable repr, equality and hashing built
    from the names in __introspectable__.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        def fields(self):
            return tuple(getattr(self, name) for name in type(self).__introspectable__)

        @rename("__repr__")
        def __repr__(self):
            return "%s(%s)" % (type(self).__name__, ", ".join(map(repr, fields(self))))
        self.__repr__ = __repr__

        @rename("__eq__")
        def __eq__(self, other):
            if type(self) is not type(other):
                return NotImplemented
            return fields(self) == fields(other)
        self.__eq__ = __eq__

        @rename("__hash__")
        def __hash__(self):
            return hash((type(self).__name__, *fields(self)))
        self.__hash__ = __hash__

        return self


class Fixed(metaclass=ColumnType):
    __introspectable__ = ("width",)

    def __init__(self, width, /):
        if not isinstance(width, int) or isinstance(width, bool):
            raise TypeError("fixed column width must be an integer")
        if width < 0:
            raise ValueError("fixed column width cannot be negative")
        self._width = width


class Percent(metaclass=ColumnType):
    __introspectable__ = ("percent",)

    def __init__(self, percent, /):
        if not isinstance(percent, int | float) or isinstance(percent, bool):
            raise TypeError("percent column share must be a number")
        if not 0 <= percent <= 100:
            raise ValueError("percent column share must be between 0 and 100")
        self._percent = percent


class Wildcard(metaclass=ColumnType):
    __introspectable__ = ()


def column(object, /):
    """
    normalize a column shorthand into a column spec.

    accepted forms
    - Fixed / Percent / Wildcard instances (returned unchanged)
    - int or digit string -> Fixed
    - "NN%" (integer or decimal share) -> Percent
    - "*" -> Wildcard
    """
    if isinstance(object, Fixed | Percent | Wildcard):
        return object
    if isinstance(object, int) and not isinstance(object, bool):
        return Fixed(object)
    if not isinstance(object, str):
        raise TypeError("column must be an integer, a string or a column spec")
    if object == "*":
        return Wildcard()
    if re.fullmatch(r"\d+", object):
        return Fixed(int(object))
    if match := re.fullmatch(r"(\d+(?:\.\d+)?)%", object):
        return Percent(float(match[1]))
    raise ValueError("unknown column format %r" % object)


def allocate(columns, width, /, border=" "):
    """
    compute concrete widths for `columns` within a total of `width` columns.

    algorithm
    - the border is paid once per gap: available = width - (n - 1) * width(border).
    - fixed columns take their width.
    - percent columns take floor(percent * rest / 100), where rest is what the
      fixed columns left over. the rounding shortfall against their combined
      share, floor(sum(percent) * rest / 100), goes to the last percent column.
    - wildcard columns share the remainder evenly (integer division), the last
      wildcard absorbing the division remainder.
    - without wildcards the last column absorbs the remainder.

    invariant: sum(result) + (n - 1) * width(border) == width.

    raises
    - ValueError: no columns, or fixed and percent columns need more than the
      available space.
    """
    if not (columns := list(map(column, columns))):
        raise ValueError("allocate() requires at least one column")

    available = width - (len(columns) - 1) * display.width(border)
    widths = [0] * len(columns)

    allocated = 0
    for index, spec in enumerate(columns):
        if isinstance(spec, Fixed):
            widths[index] = spec.width
            allocated += spec.width

    rest = available - allocated
    for index, spec in enumerate(columns):
        if isinstance(spec, Percent):
            widths[index] = int(spec.percent * rest // 100)
            allocated += widths[index]

    if percents := [index for index, spec in enumerate(columns) if isinstance(spec, Percent)]:
        share = int(sum(columns[index].percent for index in percents) * rest // 100)
        shortfall = share - sum(widths[index] for index in percents)
        widths[percents[-1]] += shortfall
        allocated += shortfall

    if (remain := available - allocated) < 0:
        raise ValueError("wanted column widths exceed available space (%d > %d)" % (allocated, available))

    if wildcards := [index for index, spec in enumerate(columns) if isinstance(spec, Wildcard)]:
        share, extra = divmod(remain, len(wildcards))
        for index in wildcards:
            widths[index] = share
        widths[wildcards[-1]] += extra
    else:
        widths[-1] += remain

    logger.debug("allocated %r for %r within %d columns", widths, columns, width)
    return widths


def wrap(text, width=75, /, brk="\n", cut=False):
    """
    greedy word wrap of `text` to `width` display columns.

    - `text` is split on `brk` first; every paragraph is right-trimmed and
      wrapped on its own, then the paragraphs are joined again with `brk`.
    - paragraphs that already fit are kept verbatim (inner spacing included);
      paragraphs that need wrapping are split on whitespace, so their runs of
      spaces collapse to single spaces.
    - a word wider than `width` is hard-split at the width boundary when `cut`
      is true (whole code points, escapes never split); otherwise it is put
      unsplit on a line of its own.
    """
    if width < 1:
        raise ValueError("wrap() width must be a positive integer")

    paragraphs = []
    for paragraph in text.split(brk):
        paragraph = paragraph.rstrip()
        if display.width(paragraph) <= width:
            paragraphs.append(paragraph)
            continue

        lines = []
        current = ""
        for word in paragraph.split():
            if current and display.width(current) + 1 + display.width(word) <= width:
                current += " " + word
                continue
            if current:
                lines.append(current)
            if cut:
                while display.width(word) > width:
                    head, word = display.cut(word, width)
                    lines.append(head)
            current = word
        if current:
            lines.append(current)
        paragraphs.append(brk.join(lines))

    return brk.join(paragraphs)


class TableFormatter:
    """
    Render table rows that may span several lines, optionally colored.

    Parameters
    - colors: Colors used for the per-column colors of format(); by default a
      Colors instance with terminal detection.
    - width: total output width; defaults to the console width minus one so
      a full row never triggers the terminal's own line wrap.
    - border: string placed between adjacent columns (its display width is
      accounted for by the allocator).
    """

    def __init__(self, colors=Unset, /, *, width=Unset, border=" "):
        if not isinstance(colors, Colors | Unset):
            raise TypeError("TableFormatter() colors must be a Colors instance")
        self._colors = Colors() if colors is Unset else colors
        self.width = coalesce(width, Console().width - 1)
        self.border = border

    @property
    def width(self):
        return self._width

    @width.setter
    def width(self, value):
        if not isinstance(value, int) or isinstance(value, bool):
            raise TypeError("table width must be an integer")
        if value < 1:
            raise ValueError("table width must be positive")
        self._width = value

    @property
    def border(self):
        return self._border

    @border.setter
    def border(self, value):
        if not isinstance(value, str):
            raise TypeError("table border must be a string")
        self._border = value

    @property
    def colors(self):
        return self._colors

    def format(self, columns, cells, colors=(), /):
        """
        lay out one table row (which may span several lines).

        parameters
        - columns: column specs or shorthands (see column()).
        - cells: one text per column; may contain escapes and newlines.
        - colors: optional color (palette key or rich style) per column;
          empty entries leave the column uncolored.

        returns the rendered lines, each terminated by a newline.
        """
        widths = allocate(columns, self._width, self._border)
        if len(cells) != len(widths):
            raise ValueError("format() expects %d cells but %d were given" % (len(widths), len(cells)))

        for index, (cell, width) in enumerate(zip(cells, widths)):
            if not width and cell:
                raise ValueError("column %d is too narrow for its content" % index)

        wrapped = [
            wrap(cell, width, "\n", True).split("\n") if width else [""]
            for cell, width in zip(cells, widths)
        ]
        height = max(map(len, wrapped))

        output = []
        for row in range(height):
            chunks = []
            for index, (lines, width) in enumerate(zip(wrapped, widths)):
                chunk = display.pad(lines[row] if row < len(lines) else "", width)
                if index < len(colors) and colors[index]:
                    chunk = self._colors.wrap(chunk, colors[index])
                chunks.append(chunk)
            output.append(self._border.join(chunks) + "\n")
        return "".join(output)


__all__ = (
    "Fixed",
    "Percent",
    "Wildcard",
    "column",
    "allocate",
    "wrap",
    "TableFormatter",
)

"""
Display width of terminal text.

Every width decision in the package (column allocation, word wrapping,
padding, help layout) goes through this module.

Rules
- ANSI CSI escape sequences (ESC '[' parameters intermediates final) occupy no
  columns and are never split.
- Every other code point occupies exactly one column, whatever its UTF-8
  length. East-Asian wide characters are not special-cased.
"""
import re

ESCAPE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")


def strip(text, /):
    """return `text` without its escape sequences."""
    return ESCAPE.sub("", text)


def width(text, /):
    """number of terminal columns `text` occupies."""
    if not isinstance(text, str):
        raise TypeError("width() argument must be a string")
    return len(strip(text))


def cut(text, columns, /):
    """
    split `text` after at most `columns` visible code points.

    returns (head, tail) with width(head) <= columns and head + tail == text.
    escape sequences are copied whole: those directly following the last
    visible code point of the head stay in the head, so a trailing reset
    code is not pushed to the next line.
    """
    if columns < 0:
        raise ValueError("cut() columns must be a non-negative integer")

    index = 0
    seen = 0
    while index < len(text):
        if match := ESCAPE.match(text, index):
            index = match.end()
            continue
        if seen == columns:
            break
        seen += 1
        index += 1
    return text[:index], text[index:]


def pad(text, columns, /, fill=" "):
    """right-pad `text` to `columns` display columns (never truncates)."""
    return text + fill * max(columns - width(text), 0)


__all__ = (
    "ESCAPE",
    "strip",
    "width",
    "cut",
    "pad",
)

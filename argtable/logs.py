"""
Logging setup for the argtable package.

Every module logs through `logging.getLogger(__name__)`, so all records live
under the "argtable" logger. The package installs a NullHandler on it and
never configures the root logger; applications either configure logging
themselves or call configure() to get rich-rendered records on stderr.
"""
import logging

from rich.console import Console
from rich.logging import RichHandler

logger = logging.getLogger("argtable")
logger.addHandler(logging.NullHandler())


def configure(level="WARNING", /, *, colorful=True):
    """
    attach a RichHandler to the "argtable" logger and set its level.

    calling it again only updates the level and colors of the handler
    installed the first time.

    parameters
    - level: logging level name or number.
    - colorful: when False, records are rendered without styles.
    """
    if isinstance(level, str):
        if not isinstance(resolved := logging.getLevelNamesMapping().get(level.upper()), int):
            raise ValueError("unknown logging level %r" % level)
        level = resolved
    elif not isinstance(level, int) or isinstance(level, bool):
        raise TypeError("configure() level must be a string or an integer")

    for handler in logger.handlers:
        if isinstance(handler, RichHandler):
            break
    else:
        handler = RichHandler(show_path=False)
        logger.addHandler(handler)

    handler.console = Console(stderr=True, no_color=not colorful, highlight=colorful)
    handler.setLevel(level)
    logger.setLevel(level)
    return handler


__all__ = (
    "logger",
    "configure",
)

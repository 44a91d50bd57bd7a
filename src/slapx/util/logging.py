""" Provides a logging formatter that understands Cleo style tags in the message and renders them as terminal colors
(or strips them, if the output is not a terminal). """

from __future__ import annotations

import logging

import typing_extensions as te
from cleo.formatters.formatter import Formatter  # type: ignore[import]

from slapx.util.cleo import add_default_styles


class TerminalColorFormatter(logging.Formatter):
    """A formatter that renders text decorated with HTML-style tags (such as `<subj>` or `<fg=red>`) using Cleo's
    formatter. If *decorated* is `False`, the tags are removed instead."""

    def __init__(self, fmt: str, decorated: bool = True) -> None:
        super().__init__(fmt)
        self.styles = Formatter(decorated=decorated)
        add_default_styles(self.styles)

    def format(self, record: logging.LogRecord) -> str:
        return self.styles.format(super().format(record))

    def install(self, target: te.Literal["tty", "notty"] | None = None) -> None:
        """Install the formatter on the stream handlers of the root logger that are attached to a TTY, or otherwise
        on all that are not attached to a TTY based on the *target* value. If no value is specified, it will install
        into TTY-attached stream handlers if the formatter is decorated."""

        if target is None:
            target = "tty" if self.styles.is_decorated() else "notty"

        for handler in logging.root.handlers:
            if isinstance(handler, logging.StreamHandler) and _isatty(handler.stream):
                if target == "tty":
                    handler.setFormatter(self)
            elif target == "notty":
                handler.setFormatter(self)


def _isatty(stream: object) -> bool:
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def configure_logging(debug: bool) -> None:
    """Configures the root logger for the command-line. Only warnings and errors are shown unless *debug* is enabled,
    in which case all messages are shown with some extra context."""

    if debug:
        fmt = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
        level = logging.DEBUG
    else:
        fmt = "%(message)s"
        level = logging.WARNING

    logging.basicConfig(level=level)
    TerminalColorFormatter(fmt, decorated=True).install("tty")
    TerminalColorFormatter(fmt, decorated=False).install("notty")

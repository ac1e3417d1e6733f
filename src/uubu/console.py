"""
Colored terminal output for uubu.

Every user-facing line goes through a Console, which owns the message
catalog and turns message identifiers into colored text.
"""

from __future__ import annotations

import sys
from typing import Optional, TextIO

from .i18n import MessageCatalog


class Color:
    """ANSI color codes."""
    RED = "\033[0;31m"
    GREEN = "\033[0;32m"
    YELLOW = "\033[1;33m"
    BLUE = "\033[0;34m"
    RESET = "\033[0m"


class Console:
    """Renders catalog messages to a text stream."""

    def __init__(
        self,
        catalog: MessageCatalog,
        stream: Optional[TextIO] = None,
        color: Optional[bool] = None,
    ):
        self.catalog = catalog
        self._stream = stream
        self._color = color

    @property
    def stream(self) -> TextIO:
        # Resolved lazily so redirected stdout (pytest capture) is honoured.
        return self._stream if self._stream is not None else sys.stdout

    @property
    def use_color(self) -> bool:
        if self._color is not None:
            return self._color
        isatty = getattr(self.stream, "isatty", None)
        return bool(isatty and isatty())

    def text(self, key: str, *args) -> str:
        return self.catalog.get(key, *args)

    def emit(self, color: str, message: str):
        """Write one line in the given color."""
        if self.use_color and color:
            message = f"{color}{message}{Color.RESET}"
        self.stream.write(message + "\n")
        self.stream.flush()

    def info(self, key: str, *args):
        self.emit(Color.BLUE, self.text(key, *args))

    def success(self, key: str, *args):
        self.emit(Color.GREEN, self.text(key, *args))

    def warning(self, key: str, *args):
        self.emit(Color.YELLOW, self.text(key, *args))

    def error(self, key: str, *args):
        self.emit(Color.RED, self.text(key, *args))

    def raw(self, text: str, newline: bool = True):
        """Write text verbatim, e.g. tool output."""
        self.stream.write(text + ("\n" if newline else ""))
        self.stream.flush()

    def blank(self):
        self.raw("")

    def prompt(self, key: str, *args):
        """Write a prompt without a trailing newline."""
        self.raw(self.text(key, *args), newline=False)

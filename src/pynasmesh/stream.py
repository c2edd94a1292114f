"""Character stream with one character of push-back and line counting."""

from __future__ import annotations

from typing import TextIO


class CharStream:
    """Reads a text stream one character at a time.

    Lines are pulled from the underlying stream lazily. Exactly one
    character can be pushed back, and it must be the last one read.
    :meth:`peek` does not use the push-back slot, so a character can be
    peeked at and the previous one still pushed back.

    Args:
        source: Any text stream supporting ``readline()``.
    """

    def __init__(self, source: TextIO) -> None:
        self._source = source
        self._buf = ""
        self._pos = 0
        self._next: str | None = None
        self._last: str | None = None
        self.line_number = 1

    def _next_line(self) -> str:
        if self._next is None:
            self._next = self._source.readline()
        return self._next

    def _advance_line(self) -> bool:
        line = self._next_line()
        if not line:
            return False
        self._buf = line
        self._pos = 0
        self._next = None
        return True

    def get(self) -> str:
        """Return the next character, or ``""`` at end of input."""
        if self._pos >= len(self._buf) and not self._advance_line():
            self._last = None
            return ""
        ch = self._buf[self._pos]
        self._pos += 1
        self._last = ch
        if ch == "\n":
            self.line_number += 1
        return ch

    def unget(self, ch: str) -> None:
        """Push back the character just returned by :meth:`get`."""
        if self._last is None or ch != self._last:
            msg = f"Cannot push back {ch!r}: it is not the last character read"
            raise RuntimeError(msg)
        self._pos -= 1
        self._last = None
        if ch == "\n":
            self.line_number -= 1

    def peek(self) -> str:
        """Return the next character without consuming it."""
        if self._pos < len(self._buf):
            return self._buf[self._pos]
        return self._next_line()[:1]

    @property
    def column(self) -> int:
        """Characters consumed from the current line."""
        return self._pos

    @property
    def at_eof(self) -> bool:
        return self.peek() == ""

    def rest_is_blank(self) -> bool:
        """Whether only blanks remain before the end of the current line."""
        return not self._buf[self._pos :].strip(" \t\r\n")

    def read_line(self) -> str | None:
        """Consume the rest of the current line, newline included.

        Returns the line text without its terminator, or None at end of
        input.
        """
        if self._pos >= len(self._buf) and not self._advance_line():
            self._last = None
            return None
        text = self._buf[self._pos :]
        self._pos = len(self._buf)
        self._last = None
        if text.endswith("\n"):
            self.line_number += 1
            text = text[:-1]
        return text.rstrip("\r")

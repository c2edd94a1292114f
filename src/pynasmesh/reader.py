"""Typed card reading on top of the column tokenizer."""

from __future__ import annotations

from pynasmesh.comments import CommentTracker
from pynasmesh.errors import MalformedNumber
from pynasmesh.models import FormatMode
from pynasmesh.stream import CharStream
from pynasmesh.tokenizer import CONTINUATION_CHARS, ColumnTokenizer


def repair_exponent(text: str) -> str:
    """Insert the missing ``e`` of a NASTRAN shorthand exponent.

    NASTRAN allows ``1.5-3`` for ``1.5e-3``. The first sign after the
    leading character gets an ``e`` in front of it unless it already has
    one. ``d``/``D`` exponents become ``e``.

    >>> repair_exponent("1.5-3")
    '1.5e-3'
    >>> repair_exponent("1.5E-3")
    '1.5E-3'
    >>> repair_exponent("-2.5+1")
    '-2.5e+1'
    """
    text = text.replace("d", "e").replace("D", "e")
    for i in range(1, len(text)):
        if text[i] in "+-":
            if text[i - 1] not in "eE":
                text = f"{text[:i]}e{text[i:]}"
            break
    return text


class CardReader:
    """Reads cards field by field.

    ``entry`` always holds the keyword of the card being read. Reading the
    next keyword first discards whatever is left of the current card,
    including continuation lines, then skips comment lines, feeding them to
    the comment tracker.

    Args:
        stream: Character stream positioned anywhere in the file.
        mode: Column layout.
        tracker: Receives every comment line seen between cards.
    """

    def __init__(
        self,
        stream: CharStream,
        mode: FormatMode,
        tracker: CommentTracker | None = None,
    ) -> None:
        self.stream = stream
        self.mode = mode
        self.tracker = tracker if tracker is not None else CommentTracker()
        self.tokenizer = ColumnTokenizer(stream, mode)
        self.entry = ""
        self._in_card = False

    @property
    def line_number(self) -> int:
        return self.stream.line_number

    def find_bulk(self) -> bool:
        """Skip everything up to and including the ``BEGIN BULK`` line."""
        while True:
            line = self.stream.read_line()
            if line is None:
                return False
            if line.lstrip().upper().startswith("BEGIN BULK"):
                return True

    def read_field(self) -> str:
        return self.tokenizer.next_field(self.mode.field_width)

    def read_int(self) -> int:
        line = self.line_number
        data = self.read_field()
        try:
            return int(data)
        except ValueError:
            raise MalformedNumber(data, "an integer", line) from None

    def read_float(self, default: float | None = None) -> float:
        """Read a real number, accepting NASTRAN shorthand exponents.

        Args:
            default: Value for a blank field. If None, a blank field is an
                error.
        """
        line = self.line_number
        data = self.read_field()
        if not data and default is not None:
            return default
        try:
            return float(repair_exponent(data))
        except ValueError:
            raise MalformedNumber(data, "a real number", line) from None

    def finish_card(self) -> None:
        """Discard the rest of the current card."""
        stream = self.stream
        stream.read_line()
        while stream.peek() in CONTINUATION_CHARS:
            stream.read_line()
        self._in_card = False

    def read_keyword(self) -> str:
        """Move to the next card and return its keyword.

        Returns ``""`` at end of input.
        """
        stream = self.stream
        if self._in_card:
            self.finish_card()
        while True:
            ch = stream.peek()
            if ch == "$":
                text = stream.read_line() or ""
                self.tracker.observe(text, stream.line_number)
                continue
            if ch == "":
                self.entry = ""
                return self.entry
            keyword = self.tokenizer.next_field(self.mode.keyword_width)
            self._in_card = True
            if keyword:
                break
            # Blank line.
            self.finish_card()

        # A trailing '*' marks the large field form of a card.
        if keyword.endswith("*"):
            keyword = keyword[:-1]
        self.entry = keyword.upper()
        return self.entry

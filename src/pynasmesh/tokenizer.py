"""Field extraction for small, large and free format bulk data."""

from __future__ import annotations

from pynasmesh.errors import FieldTooWide
from pynasmesh.models import MAX_FREE_FIELD_WIDTH, FormatMode
from pynasmesh.stream import CharStream

# Characters that start a continuation line.
CONTINUATION_CHARS = ("+", "*")

_STRIP = str.maketrans("", "", " \t\r")

# Fixed-format continuation markers start in column 73.
MARKER_COLUMN = 72


class ColumnTokenizer:
    """Splits a character stream into NASTRAN fields.

    Continuation lines are joined transparently: callers of
    :meth:`next_field` never see the continuation flag columns.

    Args:
        stream: The character stream to read from.
        mode: Column layout, fixed for the whole run.
    """

    def __init__(self, stream: CharStream, mode: FormatMode) -> None:
        self.stream = stream
        self.mode = mode

    def next_field(self, width: int) -> str:
        """Read the next field.

        Args:
            width: Number of columns, or 0 for a comma-delimited field.

        Returns:
            The field text with blanks and carriage returns removed.
        """
        stream = self.stream
        free = width == 0
        limit = MAX_FREE_FIELD_WIDTH if free else width
        chars: list[str] = []
        used = 0
        at_newline = False
        filled = True
        start = stream.column

        while used < limit:
            ch = stream.get()
            if ch == "" or ch == "\n" or (free and ch == ","):
                at_newline = ch == "\n"
                filled = False
                break
            # Carriage returns do not take up a column.
            if ch != "\r":
                used += 1
            chars.append(ch)

        if filled and free:
            at_newline = self._expect_delimiter()

        data = "".join(chars).translate(_STRIP)

        marker = self._is_marker(data, start)
        if filled and not free and marker and stream.rest_is_blank():
            # Trailing marker (or blank) columns: the line ends here.
            at_newline = self._skip_to_newline()

        if at_newline:
            if marker and stream.peek() in CONTINUATION_CHARS:
                self._skip_flag_field()
                return self.next_field(width)
            stream.unget("\n")
        return data

    def _is_marker(self, data: str, start: int) -> bool:
        """Whether a field can end a line that continues below."""
        if not data:
            return True
        if data[0] not in CONTINUATION_CHARS:
            return False
        if self.mode is FormatMode.FREE:
            # "+3.0" is a signed value, "+" or "+C1" a marker.
            return not (data[1:2].isdigit() or data[1:2] == ".")
        return start >= MARKER_COLUMN

    def _expect_delimiter(self) -> bool:
        """Consume the delimiter after a full-width free field."""
        stream = self.stream
        ch = stream.get()
        while ch == "\r":
            ch = stream.get()
        if ch in ("", ","):
            return False
        if ch == "\n":
            return True
        msg = f"Free format field longer than {MAX_FREE_FIELD_WIDTH} characters"
        raise FieldTooWide(msg, stream.line_number)

    def _skip_to_newline(self) -> bool:
        stream = self.stream
        while True:
            ch = stream.get()
            if ch == "\n":
                return True
            if ch == "":
                return False

    def _skip_flag_field(self) -> None:
        """Discard the first field of a continuation line."""
        stream = self.stream
        if self.mode is FormatMode.FREE:
            while True:
                ch = stream.get()
                if ch in ("", ","):
                    return
                if ch == "\n":
                    stream.unget(ch)
                    return
        else:
            for _ in range(8):
                ch = stream.get()
                if ch == "":
                    return
                if ch == "\n":
                    stream.unget(ch)
                    return

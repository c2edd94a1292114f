"""Tests for field extraction and continuation handling."""

from __future__ import annotations

import io

import pytest

from pynasmesh.errors import FieldTooWide
from pynasmesh.models import FormatMode
from pynasmesh.stream import CharStream
from pynasmesh.tokenizer import ColumnTokenizer
from tests.conftest import free_card, large_card, small_card


def _fields(text: str, mode: FormatMode, n: int) -> list[str]:
    tok = ColumnTokenizer(CharStream(io.StringIO(text)), mode)
    fields = [tok.next_field(mode.keyword_width)]
    fields += [tok.next_field(mode.field_width) for _ in range(n)]
    return fields


class TestSingleLine:
    @pytest.mark.parametrize(
        ("mode", "line"),
        [
            (FormatMode.SMALL, small_card("GRID", 12, "", 1.5, "-2.0")),
            (FormatMode.LARGE, large_card("GRID", 12, "", 1.5, "-2.0")),
            (FormatMode.FREE, free_card("GRID", 12, "", 1.5, "-2.0")),
        ],
    )
    def test_same_fields_in_every_format(self, mode: FormatMode, line: str) -> None:
        assert _fields(line + "\n", mode, 4) == ["GRID", "12", "", "1.5", "-2.0"]

    def test_reading_past_line_end_gives_blank_fields(self) -> None:
        fields = _fields(small_card("PSOLID", 1) + "\nGRID\n", FormatMode.SMALL, 3)
        assert fields == ["PSOLID", "1", "", ""]

    def test_newline_is_left_for_end_of_card(self) -> None:
        stream = CharStream(io.StringIO("PSHELL,7\nGRID"))
        tok = ColumnTokenizer(stream, FormatMode.FREE)
        tok.next_field(0)
        assert tok.next_field(0) == "7"
        assert stream.get() == "\n"

    def test_carriage_returns_are_dropped(self) -> None:
        fields = _fields("GRID    5       \r\n", FormatMode.SMALL, 2)
        assert fields == ["GRID", "5", ""]

    def test_free_format_blanks_are_stripped(self) -> None:
        assert _fields("GRID, 3 ,  , 1.0\n", FormatMode.FREE, 3) == ["GRID", "3", "", "1.0"]

    def test_free_format_field_too_wide(self) -> None:
        with pytest.raises(FieldTooWide):
            _fields("GRID," + "1" * 64 + "\n", FormatMode.FREE, 1)

    def test_free_format_field_at_max_width(self) -> None:
        value = "1" * 63
        assert _fields(f"GRID,{value},2\n", FormatMode.FREE, 2) == ["GRID", value, "2"]

    def test_explicit_plus_sign_does_not_shift_columns(self) -> None:
        line = small_card("GRID", 1, "", "+1.00000", "2.0", "3.0")
        assert _fields(line + "\n", FormatMode.SMALL, 5)[3:] == ["+1.00000", "2.0", "3.0"]


class TestContinuation:
    def test_small_with_marker(self) -> None:
        text = (
            small_card("CHEXA", 1, 10, 1, 2, 3, 4, 5, 6, "+C1")
            + "\n"
            + small_card("+C1", 7, 8)
            + "\n"
        )
        fields = _fields(text, FormatMode.SMALL, 10)
        assert fields == ["CHEXA", "1", "10", "1", "2", "3", "4", "5", "6", "7", "8"]

    def test_small_with_padded_marker(self) -> None:
        first = small_card("CHEXA", 1, 10, 1, 2, 3, 4, 5, 6).ljust(72) + "+C1".ljust(8)
        text = first + "\n" + small_card("+C1", 7, 8) + "\n"
        assert _fields(text, FormatMode.SMALL, 10)[-2:] == ["7", "8"]

    def test_small_without_marker(self) -> None:
        text = small_card("CPYRAM", 1, 10, 1, 2, 3) + "\n" + small_card("+", 4, 5) + "\n"
        assert _fields(text, FormatMode.SMALL, 7) == ["CPYRAM", "1", "10", "1", "2", "3", "4", "5"]

    def test_large_with_star_continuations(self) -> None:
        text = "\n".join(
            [
                large_card("CHEXA*", 1, 10, 1, 2, "*C1"),
                large_card("*C1", 3, 4, 5, 6, "*C2"),
                large_card("*C2", 7, 8),
                "",
            ]
        )
        fields = _fields(text, FormatMode.LARGE, 10)
        assert fields == ["CHEXA*", "1", "10", "1", "2", "3", "4", "5", "6", "7", "8"]

    def test_free_with_marker(self) -> None:
        text = "CHEXA,1,10,1,2,3,4,5,6,+C1\n+C1,7,8\n"
        assert _fields(text, FormatMode.FREE, 10)[-3:] == ["6", "7", "8"]

    def test_free_without_marker(self) -> None:
        text = "CTETRA,1,10,1,2\n+,3,4\n"
        assert _fields(text, FormatMode.FREE, 5) == ["CTETRA", "1", "10", "1", "2", "3", "4"]

    def test_flag_field_never_appears(self) -> None:
        text = small_card("CQUAD4", 9, 2, 11, 12, "", "", "", "", "+Q") + "\n+Q      13      14\n"
        fields = _fields(text, FormatMode.SMALL, 11)
        assert "+Q" not in fields
        assert fields[-3:] == ["13", "14", ""]

    def test_line_starting_with_other_text_is_not_continuation(self) -> None:
        text = small_card("PSOLID", 1, "+X") + "\nGRID    1\n"
        assert _fields(text, FormatMode.SMALL, 3) == ["PSOLID", "1", "+X", ""]

    def test_signed_value_is_not_a_marker(self) -> None:
        text = small_card("GRID", 1, "", 1.0, 2.0, "+3.00000") + "\n+       \n"
        assert _fields(text, FormatMode.SMALL, 5)[-1] == "+3.00000"

    def test_free_signed_value_is_not_a_marker(self) -> None:
        assert _fields("GRID,1,,1.,2.,+3.\n+,9\n", FormatMode.FREE, 5)[-1] == "+3."

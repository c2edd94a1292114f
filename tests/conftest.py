"""Shared test fixtures."""

from __future__ import annotations

import io
from collections.abc import Callable
from pathlib import Path

import pytest

from pynasmesh.comments import CommentTracker
from pynasmesh.models import FormatMode
from pynasmesh.reader import CardReader
from pynasmesh.stream import CharStream

DATA_DIR = Path(__file__).resolve().parent / "data"

# GRID ID, X, Y, Z of a unit tetrahedron
TET_POINTS = [
    (1, 0.0, 0.0, 0.0),
    (2, 1.0, 0.0, 0.0),
    (3, 0.0, 1.0, 0.0),
    (4, 0.0, 0.0, 1.0),
]


def small_card(*fields: object) -> str:
    """Format a single small-field line."""
    return "".join(f"{field!s:<8}" for field in fields).rstrip()


def large_card(name: str, *fields: object) -> str:
    """Format a single large-field line."""
    return (f"{name:<8}" + "".join(f"{field!s:<16}" for field in fields)).rstrip()


def free_card(*fields: object) -> str:
    return ",".join(str(field) for field in fields)


def bulk(*lines: str) -> str:
    """Wrap card lines in BEGIN BULK / ENDDATA."""
    return "\n".join(["BEGIN BULK", *lines, "ENDDATA"]) + "\n"


def tet_grids() -> list[str]:
    return [small_card("GRID", pid, "", x, y, z) for pid, x, y, z in TET_POINTS]


@pytest.fixture
def make_reader() -> Callable[..., CardReader]:
    """Build a CardReader over a string."""

    def _make(text: str, mode: FormatMode = FormatMode.SMALL) -> CardReader:
        return CardReader(CharStream(io.StringIO(text)), mode, CommentTracker())

    return _make


@pytest.fixture
def cube_small_path() -> Path:
    return DATA_DIR / "cube_small.dat"


@pytest.fixture
def cube_paths() -> dict[str, Path]:
    """The same hex cube written in each format."""
    return {name: DATA_DIR / f"cube_{name}.dat" for name in ("small", "large", "free")}


@pytest.fixture
def tet_deck() -> str:
    """One named tetrahedron, no boundary faces."""
    return bulk(
        *tet_grids(),
        small_card("CTETRA", 1, 1, 1, 2, 3, 4),
        "$ Property 1 solid",
        small_card("PSOLID", 1, 1),
    )


@pytest.fixture
def latin1_deck_path(tmp_path: Path) -> Path:
    """A deck with a cp1252 accented character in a property comment."""
    deck = bulk(
        *tet_grids(),
        small_card("CTRIA3", 1, 1, 1, 2, 3),
        "$ Property 1 caf\xe9 inlet",
        small_card("PSHELL", 1, 1, 0.1),
    )
    path = tmp_path / "latin1.dat"
    path.write_bytes(deck.encode("latin-1"))
    return path

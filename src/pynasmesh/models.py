"""Data models for assembled NASTRAN bulk data meshes."""

from __future__ import annotations

import enum
from collections import Counter
from dataclasses import dataclass, field

import numpy as np
import numpy.typing as npt

from pynasmesh.errors import DuplicatePoint, UnresolvedPointReference

# Hard cap on the length of a comma-delimited field.
MAX_FREE_FIELD_WIDTH = 63


class FormatMode(enum.Enum):
    """Column layout of a bulk data file.

    The value is the data field width; 0 means comma-delimited.
    """

    FREE = 0
    SMALL = 8
    LARGE = 16

    @property
    def field_width(self) -> int:
        return self.value

    @property
    def keyword_width(self) -> int:
        """Width of the first (keyword) field."""
        return 0 if self is FormatMode.FREE else 8

    @classmethod
    def from_name(cls, name: str) -> FormatMode:
        try:
            return cls[name.upper()]
        except KeyError:
            msg = f"Unknown format: {name!r}. Use 'small', 'large' or 'free'."
            raise ValueError(msg) from None


class CellShape(enum.Enum):
    """Volume element shapes, keyed by NASTRAN card name."""

    TET = ("CTETRA", 4)
    PYR = ("CPYRAM", 5)
    HEX = ("CHEXA", 8)

    def __init__(self, keyword: str, n_points: int) -> None:
        self.keyword = keyword
        self.n_points = n_points


class FaceShape(enum.Enum):
    """Surface element shapes, keyed by NASTRAN card name."""

    TRIA3 = ("CTRIA3", 3)
    QUAD4 = ("CQUAD4", 4)

    def __init__(self, keyword: str, n_points: int) -> None:
        self.keyword = keyword
        self.n_points = n_points


@dataclass(frozen=True)
class Cell:
    """A volume cell.

    Attributes:
        shape: Cell shape.
        vertices: 0-based point indices, in NASTRAN connectivity order.
        property_id: PSOLID property ID the cell belongs to.
    """

    shape: CellShape
    vertices: tuple[int, ...]
    property_id: int

    def __post_init__(self) -> None:
        if len(self.vertices) != self.shape.n_points:
            msg = f"{self.shape.keyword} needs {self.shape.n_points} vertices, got {len(self.vertices)}"
            raise ValueError(msg)


@dataclass(frozen=True)
class Face:
    """A boundary face.

    Attributes:
        shape: Face shape.
        vertices: 0-based point indices.
        property_id: PSHELL property ID the face belongs to.
    """

    shape: FaceShape
    vertices: tuple[int, ...]
    property_id: int

    def __post_init__(self) -> None:
        if len(self.vertices) != self.shape.n_points:
            msg = f"{self.shape.keyword} needs {self.shape.n_points} vertices, got {len(self.vertices)}"
            raise ValueError(msg)


class PointIndex:
    """Mapping from raw GRID IDs to 0-based point indices.

    IDs can be sparse and in any order; indices follow declaration order.
    """

    def __init__(self) -> None:
        self._index: dict[int, int] = {}

    def __len__(self) -> int:
        return len(self._index)

    def __contains__(self, point_id: object) -> bool:
        return point_id in self._index

    def is_declared(self, point_id: int) -> bool:
        return point_id in self._index

    def declare(self, point_id: int, line: int | None = None) -> int:
        """Assign the next index to ``point_id`` and return it."""
        if point_id in self._index:
            raise DuplicatePoint(point_id, line)
        index = len(self._index)
        self._index[point_id] = index
        return index

    def index_of(self, point_id: int, line: int | None = None) -> int:
        try:
            return self._index[point_id]
        except KeyError:
            raise UnresolvedPointReference(point_id, line) from None


@dataclass
class CellZone:
    """Named group of cells sharing a property ID.

    Attributes:
        name: Zone name, from a comment or synthesized.
        property_id: The PSOLID property ID.
        cells: Indices into the mesh cell list.
    """

    name: str
    property_id: int
    cells: list[int] = field(default_factory=list)


@dataclass
class Patch:
    """Named group of boundary faces sharing a property ID.

    Attributes:
        name: Patch name, from a comment or synthesized.
        property_id: The PSHELL property ID.
        faces: Faces in file order.
    """

    name: str
    property_id: int
    faces: list[Face] = field(default_factory=list)


@dataclass
class BulkEntities:
    """Raw output of one pass over the bulk data section.

    Attributes:
        points: (N, 3) array of point coordinates.
        point_ids: Original GRID IDs, parallel to ``points``.
        cells: Cells in file order.
        faces: Faces in file order.
        cell_groups: Cell indices keyed by property ID.
        face_groups: Face indices keyed by property ID.
        property_names: Declared property IDs and their comment names.
        complete: Whether ENDDATA was reached.
    """

    points: npt.NDArray[np.float64]
    point_ids: npt.NDArray[np.int64]
    cells: list[Cell] = field(default_factory=list)
    faces: list[Face] = field(default_factory=list)
    cell_groups: dict[int, list[int]] = field(default_factory=dict)
    face_groups: dict[int, list[int]] = field(default_factory=dict)
    property_names: dict[int, str | None] = field(default_factory=dict)
    complete: bool = False


@dataclass
class BulkMesh:
    """A renumbered mesh ready to hand to a mesh builder.

    Attributes:
        points: (N, 3) array of point coordinates.
        point_ids: Original GRID IDs, parallel to ``points``.
        cells: Cells in file order; vertices index into ``points``.
        faces: Faces in file order.
        patches: Face groups in ascending property ID order.
        zones: Cell groups in ascending property ID order.
    """

    points: npt.NDArray[np.float64]
    point_ids: npt.NDArray[np.int64]
    cells: list[Cell] = field(default_factory=list)
    faces: list[Face] = field(default_factory=list)
    patches: list[Patch] = field(default_factory=list)
    zones: list[CellZone] = field(default_factory=list)

    @property
    def n_points(self) -> int:
        return len(self.points)

    @property
    def n_cells(self) -> int:
        return len(self.cells)

    @property
    def n_faces(self) -> int:
        return len(self.faces)

    def cell_counts(self) -> dict[str, int]:
        """Number of cells per NASTRAN card name."""
        return dict(Counter(cell.shape.keyword for cell in self.cells))

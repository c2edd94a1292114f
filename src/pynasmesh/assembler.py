"""Card dispatch and entity assembly for one pass over the bulk data."""

from __future__ import annotations

import logging

import numpy as np

from pynasmesh.errors import DuplicateProperty, UnknownKeyword
from pynasmesh.models import (
    BulkEntities,
    Cell,
    CellShape,
    Face,
    FaceShape,
    PointIndex,
)
from pynasmesh.reader import CardReader

logger = logging.getLogger(__name__)

_CELL_SHAPES = {shape.keyword: shape for shape in CellShape}
_FACE_SHAPES = {shape.keyword: shape for shape in FaceShape}
_PROPERTY_CARDS = ("PSOLID", "PSHELL")


class BulkDataAssembler:
    """Reads cards until ENDDATA and collects points, cells and faces.

    Point references are translated to 0-based indices as they are read,
    so every GRID must come before the elements that use it. Cells and
    faces are grouped by property ID; naming the groups is left to
    :func:`pynasmesh.groups.resolve_groups`.

    Args:
        reader: Card reader positioned just after ``BEGIN BULK``.
    """

    def __init__(self, reader: CardReader) -> None:
        self.reader = reader
        self.point_index = PointIndex()
        self.coords: list[tuple[float, float, float]] = []
        self.point_ids: list[int] = []
        self.cells: list[Cell] = []
        self.faces: list[Face] = []
        self.cell_groups: dict[int, list[int]] = {}
        self.face_groups: dict[int, list[int]] = {}
        self.property_names: dict[int, str | None] = {}

    def assemble(self) -> BulkEntities:
        """Run the card loop and return everything that was read."""
        reader = self.reader
        complete = False

        logger.info("Start reading file.")
        reader.read_keyword()
        while True:
            entry = reader.entry
            if entry == "GRID":
                self._read_points()
            elif entry in _CELL_SHAPES:
                self._read_cells(_CELL_SHAPES[entry])
            elif entry in _FACE_SHAPES:
                self._read_faces(_FACE_SHAPES[entry])
            elif entry in _PROPERTY_CARDS:
                self._read_property()
            elif entry.startswith("ENDDATA"):
                complete = True
                logger.info("Finished reading file.")
                break
            elif entry == "":
                logger.warning("Reached end of input without ENDDATA.")
                break
            else:
                raise UnknownKeyword(entry, reader.line_number)

        logger.info(
            "Read %d points, %d cells, %d faces, %d properties.",
            len(self.coords),
            len(self.cells),
            len(self.faces),
            len(self.property_names),
        )
        return BulkEntities(
            points=np.array(self.coords, dtype=np.float64).reshape(-1, 3),
            point_ids=np.array(self.point_ids, dtype=np.int64),
            cells=self.cells,
            faces=self.faces,
            cell_groups=self.cell_groups,
            face_groups=self.face_groups,
            property_names=self.property_names,
            complete=complete,
        )

    def _read_vertices(self, n: int) -> tuple[int, ...]:
        reader = self.reader
        verts = []
        for _ in range(n):
            line = reader.line_number
            verts.append(self.point_index.index_of(reader.read_int(), line))
        return tuple(verts)

    # GRID  ID  CP  X1  X2  X3  CD  PS  SEID
    def _read_points(self) -> None:
        reader = self.reader
        start = len(self.coords)
        while reader.entry == "GRID":
            line = reader.line_number
            point_id = reader.read_int()
            # CP is ignored: coordinates are taken as basic.
            reader.read_field()
            # Blank coordinates default to 0.0.
            x = reader.read_float(0.0)
            y = reader.read_float(0.0)
            z = reader.read_float(0.0)
            self.point_index.declare(point_id, line)
            self.point_ids.append(point_id)
            self.coords.append((x, y, z))
            reader.read_keyword()
        logger.debug("Read %d GRID cards.", len(self.coords) - start)

    # CTETRA/CPYRAM/CHEXA  EID  PID  G1 ... Gn
    def _read_cells(self, shape: CellShape) -> None:
        reader = self.reader
        start = len(self.cells)
        while reader.entry == shape.keyword:
            reader.read_field()
            prop_id = reader.read_int()
            cell = Cell(shape, self._read_vertices(shape.n_points), prop_id)
            self.cell_groups.setdefault(prop_id, []).append(len(self.cells))
            self.cells.append(cell)
            reader.read_keyword()
        logger.debug("Read %d %s cards.", len(self.cells) - start, shape.keyword)

    # CTRIA3/CQUAD4  EID  PID  G1 ... Gn
    def _read_faces(self, shape: FaceShape) -> None:
        reader = self.reader
        start = len(self.faces)
        while reader.entry == shape.keyword:
            reader.read_field()
            prop_id = reader.read_int()
            face = Face(shape, self._read_vertices(shape.n_points), prop_id)
            self.face_groups.setdefault(prop_id, []).append(len(self.faces))
            self.faces.append(face)
            reader.read_keyword()
        logger.debug("Read %d %s cards.", len(self.faces) - start, shape.keyword)

    def _read_property(self) -> None:
        reader = self.reader
        card = reader.entry
        line = reader.line_number
        prop_id = reader.read_int()
        if prop_id in self.property_names:
            raise DuplicateProperty(prop_id, line)
        name = reader.tracker.name_for(line)
        self.property_names[prop_id] = name
        logger.debug("%s %d declared, name %r.", card, prop_id, name)
        reader.read_keyword()

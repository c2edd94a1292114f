"""Read a NASTRAN bulk data deck into a renumbered mesh."""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Literal, TextIO

from pynasmesh.assembler import BulkDataAssembler
from pynasmesh.builders import MeshBuilder
from pynasmesh.comments import CommentTracker
from pynasmesh.errors import FormatMarkerMissing, InputFileError
from pynasmesh.groups import resolve_groups
from pynasmesh.models import BulkMesh, FormatMode
from pynasmesh.reader import CardReader
from pynasmesh.stream import CharStream

logger = logging.getLogger(__name__)

FormatName = Literal["small", "large", "free"]


class NastranMeshReader:
    """Reads GRID, solid and shell element cards into a :class:`BulkMesh`.

    Each call to :meth:`read` uses fresh parser state, so one reader can
    be used for any number of files.

    Args:
        format: Column layout: "small" (default), "large" or "free".
        use_names: Name patches and zones after the comment line directly
            above their PSOLID/PSHELL card. If False, names are always
            synthesized ("patch_0", "cellZone_0", ...).
        strict_properties: Fail when an element uses a property ID that no
            PSOLID/PSHELL declares. By default such groups are kept and
            get a synthesized name.
        encoding: Encoding used to open input files. Undecodable bytes
            are replaced rather than rejected.
    """

    def __init__(
        self,
        format: FormatName | FormatMode = "small",
        use_names: bool = True,
        strict_properties: bool = False,
        encoding: str = "utf_8",
    ) -> None:
        if isinstance(format, FormatMode):
            self.format = format
        else:
            self.format = FormatMode.from_name(format)
        self.use_names = use_names
        self.strict_properties = strict_properties
        self.encoding = encoding

    def read(self, input_data: str | Path | TextIO) -> BulkMesh:
        """Read a bulk data deck.

        Args:
            input_data: A path to a ``.dat``/``.bdf`` file, the deck itself
                as a string (any string without a newline is taken as a
                path), or an open text stream.

        Returns:
            The assembled mesh.
        """
        if isinstance(input_data, Path) or (
            isinstance(input_data, str) and "\n" not in input_data
        ):
            path = Path(input_data)
            try:
                with path.open(encoding=self.encoding, errors="replace") as f:
                    return self._read_stream(f)
            except OSError as exc:
                msg = f"Cannot open file {path}: {exc.strerror or exc}"
                raise InputFileError(msg) from exc
        if isinstance(input_data, str):
            return self._read_stream(io.StringIO(input_data))
        return self._read_stream(input_data)

    def convert(self, input_data: str | Path | TextIO, builder: MeshBuilder) -> object:
        """Read a deck and pass the mesh to ``builder``.

        Returns whatever ``builder.build`` returns.
        """
        mesh = self.read(input_data)
        logger.info("Constructing the mesh.")
        return builder.build(mesh)

    def _read_stream(self, source: TextIO) -> BulkMesh:
        stream = CharStream(source)
        reader = CardReader(stream, self.format, CommentTracker())
        if not reader.find_bulk():
            msg = 'Cannot find "BEGIN BULK" entry'
            raise FormatMarkerMissing(msg)

        entities = BulkDataAssembler(reader).assemble()
        patches, zones = resolve_groups(
            entities,
            use_names=self.use_names,
            strict_properties=self.strict_properties,
        )
        return BulkMesh(
            points=entities.points,
            point_ids=entities.point_ids,
            cells=entities.cells,
            faces=entities.faces,
            patches=patches,
            zones=zones,
        )


def read(
    input_data: str | Path | TextIO,
    *,
    format: FormatName | FormatMode = "small",
    **kwargs: object,
) -> BulkMesh:
    """Convenience function to read a bulk data deck.

    Args:
        input_data: Path to a bulk data file, deck string or text stream.
        format: Column layout ("small", "large" or "free").
        **kwargs: Additional arguments passed to NastranMeshReader.

    Returns:
        The assembled mesh.
    """
    reader = NastranMeshReader(format=format, **kwargs)  # type: ignore[arg-type]
    return reader.read(input_data)

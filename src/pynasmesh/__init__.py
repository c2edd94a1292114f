"""pynasmesh - NASTRAN bulk data reader for volume meshes."""

from pynasmesh.builders import MeshBuilder, NpzMeshWriter
from pynasmesh.converter import NastranMeshReader, read
from pynasmesh.errors import (
    BulkDataError,
    DuplicatePoint,
    DuplicateProperty,
    FieldTooWide,
    FormatMarkerMissing,
    InputFileError,
    MalformedNumber,
    UndeclaredProperty,
    UnknownKeyword,
    UnresolvedPointReference,
)
from pynasmesh.models import (
    BulkMesh,
    Cell,
    CellShape,
    CellZone,
    Face,
    FaceShape,
    FormatMode,
    Patch,
)

__all__ = [
    "BulkDataError",
    "BulkMesh",
    "Cell",
    "CellShape",
    "CellZone",
    "DuplicatePoint",
    "DuplicateProperty",
    "Face",
    "FaceShape",
    "FieldTooWide",
    "FormatMarkerMissing",
    "FormatMode",
    "InputFileError",
    "MalformedNumber",
    "MeshBuilder",
    "NastranMeshReader",
    "NpzMeshWriter",
    "Patch",
    "UndeclaredProperty",
    "UnknownKeyword",
    "UnresolvedPointReference",
    "read",
]

__version__ = "0.1.0"

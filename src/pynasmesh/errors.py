"""Exceptions raised while reading NASTRAN bulk data."""

from __future__ import annotations


class BulkDataError(Exception):
    """Base class for all bulk data errors.

    Args:
        message: Description of the problem.
        line: Line number in the input where it was detected, if known.
    """

    def __init__(self, message: str, line: int | None = None) -> None:
        self.line = line
        if line is not None:
            message = f"{message} (line {line})"
        super().__init__(message)


class InputFileError(BulkDataError, OSError):
    """The input file could not be opened or read."""


class FormatMarkerMissing(BulkDataError):
    """No ``BEGIN BULK`` line was found."""


class MalformedNumber(BulkDataError):
    """A field that should hold a number does not."""

    def __init__(self, field: str, expected: str, line: int | None = None) -> None:
        self.field = field
        super().__init__(f"Expected {expected}, got {field!r}", line)


class FieldTooWide(BulkDataError):
    """A free-format field exceeds the maximum field width."""


class UnresolvedPointReference(BulkDataError):
    """An element references a GRID point that has not been declared yet."""

    def __init__(self, point_id: int, line: int | None = None) -> None:
        self.point_id = point_id
        super().__init__(f"Point {point_id} is referenced before it is declared", line)


class DuplicatePoint(BulkDataError):
    """A GRID point ID is declared twice."""

    def __init__(self, point_id: int, line: int | None = None) -> None:
        self.point_id = point_id
        super().__init__(f"Point {point_id} is declared more than once", line)


class DuplicateProperty(BulkDataError):
    """A PSOLID/PSHELL property ID is declared twice."""

    def __init__(self, property_id: int, line: int | None = None) -> None:
        self.property_id = property_id
        super().__init__(f"Property {property_id} is declared more than once", line)


class UndeclaredProperty(BulkDataError):
    """An element uses a property ID that no PSOLID/PSHELL declares."""

    def __init__(self, property_id: int) -> None:
        self.property_id = property_id
        super().__init__(f"Property {property_id} is used but never declared")


class UnknownKeyword(BulkDataError):
    """A card keyword outside the supported set was encountered."""

    def __init__(self, keyword: str, line: int | None = None) -> None:
        self.keyword = keyword
        super().__init__(f'Cannot process keyword: "{keyword}"', line)

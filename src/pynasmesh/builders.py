"""Consumers of an assembled :class:`~pynasmesh.models.BulkMesh`."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

import numpy as np

from pynasmesh.models import BulkMesh, CellShape

logger = logging.getLogger(__name__)


class MeshBuilder(Protocol):
    """Anything that turns a bulk mesh into its own representation."""

    def build(self, mesh: BulkMesh) -> object: ...


class NpzMeshWriter:
    """Stores a mesh in a compressed numpy archive.

    Array names in the archive:

    - ``points`` (N, 3) and ``point_ids`` (N,)
    - ``cells_<SHAPE>`` (n, k) connectivity and ``cell_index_<SHAPE>`` (n,)
      positions in the overall cell list, for each shape present
    - ``patch_names`` and ``zone_names``
    - ``patch_<i>`` (n, 4) face connectivity, -1 padded for triangles
    - ``zone_<i>`` cell indices

    Args:
        path: Output file. ``.npz`` is appended by numpy if missing.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def build(self, mesh: BulkMesh) -> Path:
        arrays: dict[str, np.ndarray] = {
            "points": mesh.points,
            "point_ids": mesh.point_ids,
        }
        for shape in CellShape:
            index = [i for i, cell in enumerate(mesh.cells) if cell.shape is shape]
            if not index:
                continue
            arrays[f"cells_{shape.name}"] = np.array(
                [mesh.cells[i].vertices for i in index], dtype=np.int64
            )
            arrays[f"cell_index_{shape.name}"] = np.array(index, dtype=np.int64)

        arrays["patch_names"] = np.array([p.name for p in mesh.patches], dtype=str)
        for i, patch in enumerate(mesh.patches):
            faces = np.full((len(patch.faces), 4), -1, dtype=np.int64)
            for j, face in enumerate(patch.faces):
                faces[j, : len(face.vertices)] = face.vertices
            arrays[f"patch_{i}"] = faces

        arrays["zone_names"] = np.array([z.name for z in mesh.zones], dtype=str)
        for i, zone in enumerate(mesh.zones):
            arrays[f"zone_{i}"] = np.array(zone.cells, dtype=np.int64)

        logger.info("Writing mesh to %s.", self.path)
        np.savez_compressed(self.path, **arrays)
        if self.path.suffix != ".npz":
            return self.path.with_name(self.path.name + ".npz")
        return self.path

"""Command-line entry point: ``nas2mesh``."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from pynasmesh.builders import NpzMeshWriter
from pynasmesh.converter import NastranMeshReader
from pynasmesh.errors import BulkDataError
from pynasmesh.models import BulkMesh

logger = logging.getLogger("pynasmesh")

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="nas2mesh",
        description="Convert a NASTRAN bulk data file to a mesh. Coordinates are not scaled.",
    )
    p.add_argument("input", type=Path, help=".dat file")
    p.add_argument(
        "--format",
        choices=["small", "large", "free"],
        default="small",
        help="Input format. small (default), large, free",
    )
    p.add_argument(
        "--no-names",
        action="store_true",
        help="Do not take patch/zone names from comments; use patch_N/cellZone_N",
    )
    p.add_argument(
        "--strict-properties",
        action="store_true",
        help="Fail on elements whose property ID is never declared",
    )
    p.add_argument("-o", "--output", type=Path, default=None, help="Write the mesh to this .npz file")
    p.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default="INFO",
        help="DEBUG/INFO/WARNING/ERROR",
    )
    return p


def summarize(mesh: BulkMesh) -> str:
    lines = [f"points: {mesh.n_points}"]
    for keyword, count in mesh.cell_counts().items():
        lines.append(f"{keyword}: {count}")
    lines.append(f"boundary faces: {mesh.n_faces}")
    for patch in mesh.patches:
        lines.append(f"patch {patch.name} (PID {patch.property_id}): {len(patch.faces)} faces")
    for zone in mesh.zones:
        lines.append(f"cellZone {zone.name} (PID {zone.property_id}): {len(zone.cells)} cells")
    return "\n".join(lines)


def run(args: argparse.Namespace) -> int:
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
    )
    reader = NastranMeshReader(
        format=args.format,
        use_names=not args.no_names,
        strict_properties=args.strict_properties,
    )
    try:
        mesh = reader.read(args.input)
        if args.output is not None:
            NpzMeshWriter(args.output).build(mesh)
    except (BulkDataError, OSError) as exc:
        logger.error("%s", exc)
        return 1
    print(summarize(mesh))
    logger.info("End")
    return 0


def main(argv: list[str] | None = None) -> int:
    return run(build_parser().parse_args(argv))


if __name__ == "__main__":
    sys.exit(main())

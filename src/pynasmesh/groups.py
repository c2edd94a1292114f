"""Turn property-ID keyed groups into named patches and cell zones."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence

from pynasmesh.errors import UndeclaredProperty
from pynasmesh.models import BulkEntities, CellZone, Patch

logger = logging.getLogger(__name__)

PATCH_PREFIX = "patch_"
ZONE_PREFIX = "cellZone_"


def resolve(
    groups: Mapping[int, Sequence[int]],
    names: Mapping[int, str | None],
    prefix: str,
    use_names: bool = True,
    strict: bool = False,
) -> list[tuple[str, int, list[int]]]:
    """Name groups in ascending property ID order.

    Empty groups are dropped. A group takes its comment name when
    ``use_names`` is set and one was recorded; otherwise it is called
    ``prefix`` followed by a counter that only advances for such groups.

    Args:
        groups: Member indices keyed by property ID.
        names: Declared property IDs and their recorded names.
        prefix: Prefix for synthesized names.
        use_names: Whether recorded names are used at all.
        strict: Raise :class:`UndeclaredProperty` for property IDs that
            were never declared.

    Returns:
        ``(name, property_id, members)`` tuples.
    """
    resolved = []
    n_synth = 0
    for prop_id in sorted(groups):
        members = list(groups[prop_id])
        if not members:
            continue
        if strict and prop_id not in names:
            raise UndeclaredProperty(prop_id)
        name = names.get(prop_id) if use_names else None
        if not name:
            name = f"{prefix}{n_synth}"
            n_synth += 1
        resolved.append((name, prop_id, members))
    return resolved


def resolve_groups(
    entities: BulkEntities,
    use_names: bool = True,
    strict_properties: bool = False,
) -> tuple[list[Patch], list[CellZone]]:
    """Build the patch and zone lists for an assembled mesh."""
    logger.info("Constructing patches.")
    patches = [
        Patch(name, prop_id, [entities.faces[i] for i in members])
        for name, prop_id, members in resolve(
            entities.face_groups,
            entities.property_names,
            PATCH_PREFIX,
            use_names,
            strict_properties,
        )
    ]
    zones = [
        CellZone(name, prop_id, members)
        for name, prop_id, members in resolve(
            entities.cell_groups,
            entities.property_names,
            ZONE_PREFIX,
            use_names,
            strict_properties,
        )
    ]
    for prop_id in entities.property_names:
        if prop_id not in entities.face_groups and prop_id not in entities.cell_groups:
            logger.debug("Property %d has no elements and is skipped.", prop_id)
    return patches, zones

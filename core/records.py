"""
Gall Records.

Immutable search records built from database rows, plus the
detachability coding and the display summary helper.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import IntEnum
from typing import Any


class Detachability(IntEnum):
    """Coded detachable value as stored in the gall table."""

    INTEGRAL = 0
    DETACHABLE = 1
    BOTH = 2

    @property
    def label(self) -> str:
        """Domain label offered by the detachable filter."""
        return DETACHABLE_LABELS[self]


DETACHABLE_LABELS = {
    Detachability.DETACHABLE: "yes",
    Detachability.INTEGRAL: "no",
    Detachability.BOTH: "unsure",
}


@dataclass(frozen=True)
class GallRecord:
    """
    One gall under search.

    Attributes:
        id: Stable gall id.
        species_id: Id of the gall species (used for links).
        name: Species name.
        alignment, cells, color, shape, walls: Single-valued attributes, None when unknown.
        detachable: Coded detachability, None when unknown.
        locations: Ordered location tags.
        textures: Ordered texture tags.
        description: Free text, display only.
        hosts: Host species names, display only.
    """

    id: int
    species_id: int = 0
    name: str = ""
    alignment: str | None = None
    cells: str | None = None
    color: str | None = None
    shape: str | None = None
    walls: str | None = None
    detachable: Detachability | None = None
    locations: tuple[str, ...] = ()
    textures: tuple[str, ...] = ()
    description: str | None = None
    hosts: tuple[str, ...] = ()


def _to_detachability(value: Any) -> Detachability | None:
    if value is None or value == "":
        return None
    try:
        return Detachability(int(value))
    except (TypeError, ValueError):
        return None


def record_from_row(row: Mapping[str, Any]) -> GallRecord:
    """Builds a GallRecord from a row dict as returned by utils.db."""
    return GallRecord(
        id=int(row["id"]),
        species_id=int(row.get("species_id") or 0),
        name=row.get("name") or "",
        alignment=row.get("alignment"),
        cells=row.get("cells"),
        color=row.get("color"),
        shape=row.get("shape"),
        walls=row.get("walls"),
        detachable=_to_detachability(row.get("detachable")),
        locations=tuple(row.get("locations") or ()),
        textures=tuple(row.get("textures") or ()),
        description=row.get("description"),
        hosts=tuple(row.get("hosts") or ()),
    )


def summarize_description(description: str | None, max_chars: int = 400) -> str:
    """Shortens a description for result lists, appending '...' when cut."""
    if not description:
        return ""
    if len(description) > max_chars:
        return description[:max_chars] + "..."
    return description

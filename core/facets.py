"""
Facet Registry.

Static table of the filterable gall attributes. Each entry names the
facet, how many values a record carries for it, and how to pull those
values out of a GallRecord. The predicate evaluator in search_core is a
single loop over this table.

Adding a facet means one FACETS entry plus its option source in
core.catalog_core.FACET_OPTION_TABLES.
"""

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from core.records import GallRecord


class Cardinality(str, Enum):
    SINGLE = "single"
    MULTI = "multi"


@dataclass(frozen=True)
class FacetSpec:
    """
    Declaration of one facet.

    Attributes:
        name: Query key (e.g. "color", "locations").
        label: Display label for the filter control.
        cardinality: SINGLE (one optional value) or MULTI (zero or more values).
        extractor: Pure function returning the record's value(s) for this facet.
        input_kind: "choice" (single selection or free text) or "multi" (multi-select).
    """

    name: str
    label: str
    cardinality: Cardinality
    extractor: Callable[[GallRecord], object]
    input_kind: str = "choice"

    @property
    def is_multi(self) -> bool:
        return self.cardinality is Cardinality.MULTI


def _detachable_label(record: GallRecord) -> str | None:
    if record.detachable is None:
        return None
    return record.detachable.label


FACETS: tuple[FacetSpec, ...] = (
    FacetSpec("locations", "Location", Cardinality.MULTI, lambda r: r.locations, "multi"),
    FacetSpec("detachable", "Detachable", Cardinality.SINGLE, _detachable_label),
    FacetSpec("textures", "Texture", Cardinality.MULTI, lambda r: r.textures, "multi"),
    FacetSpec("alignment", "Alignment", Cardinality.SINGLE, lambda r: r.alignment),
    FacetSpec("walls", "Walls", Cardinality.SINGLE, lambda r: r.walls),
    FacetSpec("cells", "Cells", Cardinality.SINGLE, lambda r: r.cells),
    FacetSpec("shape", "Shape", Cardinality.SINGLE, lambda r: r.shape),
    FacetSpec("color", "Color", Cardinality.SINGLE, lambda r: r.color),
)

_FACETS_BY_NAME = {facet.name: facet for facet in FACETS}


def get_facet(name: str) -> FacetSpec | None:
    """Returns the registry entry for `name`, or None for unknown facets."""
    return _FACETS_BY_NAME.get(name)


def describe_facets() -> list[dict]:
    """Registry as plain dicts for the UI layer."""
    return [
        {
            "name": facet.name,
            "label": facet.label,
            "cardinality": facet.cardinality.value,
            "input_kind": facet.input_kind,
        }
        for facet in FACETS
    ]

"""
Search Core - Faceted Predicate Evaluation.

Decides whether a gall satisfies a facet query. A query maps facet names
to a selected value: a string for single-choice facets, a sequence of
strings for multi-select facets. Missing keys, None, "" and empty
sequences are "don't care" and never exclude anything.

A record matches a query when every registered facet is satisfied:
- single facets compare the record's value to the query value exactly
- multi facets need at least one record tag in the query sequence
"""

import logging
from collections.abc import Collection, Iterable, Mapping
from types import MappingProxyType
from typing import Any

from core.facets import FACETS, FacetSpec, get_facet
from core.records import GallRecord

logger = logging.getLogger(__name__)

EMPTY_QUERY: Mapping[str, Any] = MappingProxyType({})


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Collection) and not isinstance(value, (str, bytes))


def is_dont_care(value: Any) -> bool:
    """True when a query value imposes no constraint."""
    if value is None:
        return True
    if isinstance(value, str):
        return value == ""
    if _is_sequence(value):
        return len(value) == 0
    return False


def does_satisfy(facet: FacetSpec, record: GallRecord, value: Any) -> bool:
    """
    Checks one facet of one record against the query value for that facet.

    Args:
        facet: Registry entry
        record: Candidate gall
        value: Query value for the facet (may be don't care)

    Returns:
        True if the facet does not constrain the record or the record meets it
    """
    if is_dont_care(value):
        return True

    extracted = facet.extractor(record)

    if facet.is_multi:
        wanted = (value,) if isinstance(value, str) else tuple(value)
        if not extracted:
            return False
        return any(tag and tag in wanted for tag in extracted)

    # First selection wins when a multi-select control drives a single facet.
    wanted = next(iter(value)) if _is_sequence(value) else value
    if not extracted:
        return False
    return extracted == wanted


def matches(record: GallRecord, query: Mapping[str, Any] | None) -> bool:
    """True iff every registered facet is satisfied (AND across facets)."""
    query = query or EMPTY_QUERY
    return all(
        does_satisfy(facet, record, query.get(facet.name)) for facet in FACETS
    )


def filter_records(
    records: Iterable[GallRecord], query: Mapping[str, Any] | None
) -> tuple[GallRecord, ...]:
    """Returns the matching records in their original order."""
    return tuple(record for record in records if matches(record, query))


def normalize_facet_value(field: str, value: Any) -> Any:
    """
    Converts a raw control value into the value stored in the query.

    Multi-select input for a single facet keeps only its first selection;
    sequences are stored as tuples; strings are kept whole.
    """
    if not _is_sequence(value):
        return value
    values = tuple(value)
    facet = get_facet(field)
    if facet is not None and not facet.is_multi and len(values) > 0:
        return values[0]
    return values


def merge_query(
    query: Mapping[str, Any] | None, field: str, value: Any
) -> Mapping[str, Any]:
    """Returns a new read-only query with `field` overwritten by `value`."""
    merged = dict(query or EMPTY_QUERY)
    merged[field] = normalize_facet_value(field, value)
    if get_facet(field) is None:
        logger.debug(f"Query key '{field}' is not a registered facet; it will be ignored")
    return MappingProxyType(merged)

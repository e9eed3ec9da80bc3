"""
Root Query - Host or Genus Candidate Lookup.

A root search selects either a host species or a host genus, never both.
The selector is validated before any lookup happens; the lookup itself
is a single call to a RootLookupInterface implementation.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass

from core.errors import InvalidRootSelector, RootLookupFailure
from core.records import GallRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HostSelector:
    """Root search on one host species name."""

    name: str
    kind = "host"


@dataclass(frozen=True)
class GenusSelector:
    """Root search on one host genus."""

    name: str
    kind = "genus"


RootSelector = HostSelector | GenusSelector


class RootLookupInterface(ABC):
    """
    Interface for fetching the candidate galls of a root search.

    Implementations raise on database or transport errors; the resolver
    wraps those in RootLookupFailure.
    """

    @abstractmethod
    def fetch_by_host(self, name: str) -> Sequence[GallRecord]:
        """Return all galls found on the named host species."""

    @abstractmethod
    def fetch_by_genus(self, name: str) -> Sequence[GallRecord]:
        """Return all galls found on hosts of the named genus."""


def _given(value: str | None) -> bool:
    return bool(value and value.strip())


def parse_root_selector(host: str | None = None, genus: str | None = None) -> RootSelector:
    """
    Builds a RootSelector from the two search form fields.

    Raises:
        InvalidRootSelector: If both or neither field is filled in.
    """
    has_host = _given(host)
    has_genus = _given(genus)
    if has_host and has_genus:
        raise InvalidRootSelector("Provide either a host or a genus, not both.")
    if not has_host and not has_genus:
        raise InvalidRootSelector(
            "You must provide a search selection, either a host species or a genus."
        )
    if has_host:
        return HostSelector(host.strip())
    return GenusSelector(genus.strip())


def resolve_root(selector: RootSelector, lookup: RootLookupInterface) -> tuple[GallRecord, ...]:
    """
    Fetches the candidate superset for a root selector with one lookup call.

    Raises:
        InvalidRootSelector: If `selector` is not a HostSelector or GenusSelector.
        RootLookupFailure: If the lookup raises.
    """
    if isinstance(selector, HostSelector):
        fetch = lookup.fetch_by_host
    elif isinstance(selector, GenusSelector):
        fetch = lookup.fetch_by_genus
    else:
        raise InvalidRootSelector(f"Unsupported root selector: {selector!r}")

    try:
        candidates = tuple(fetch(selector.name))
    except Exception as e:
        logger.error(f"Root lookup failed for {selector.kind} '{selector.name}': {e}")
        raise RootLookupFailure(
            f"Could not load galls for {selector.kind} '{selector.name}'."
        ) from e

    logger.info(
        f"Root lookup for {selector.kind} '{selector.name}' returned {len(candidates)} galls"
    )
    return candidates

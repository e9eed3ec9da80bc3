"""
Search Service - Web Layer Service for Faceted Search.

Keeps one SearchSession per browser session and turns search state into
JSON-ready payloads. Validation and filtering live in core.
"""

import logging
import threading
from collections import OrderedDict
from collections.abc import Callable
from typing import Any

from core import catalog_core, settings_core
from core.facets import describe_facets
from core.records import summarize_description
from core.root_query import RootLookupInterface, parse_root_selector
from core.search_session import SearchSession, SearchState

logger = logging.getLogger(__name__)

_sessions: "OrderedDict[str, SearchSession]" = OrderedDict()
_sessions_lock = threading.Lock()
# Tests swap this for a fake lookup.
_lookup_factory: Callable[[], RootLookupInterface] = catalog_core.SqliteGallLookup


def reset_sessions() -> None:
    """Drop all search sessions."""
    with _sessions_lock:
        _sessions.clear()


def session_count() -> int:
    with _sessions_lock:
        return len(_sessions)


def get_session(session_id: str) -> SearchSession:
    """
    Returns the search session for a browser session, creating it if needed.

    The least recently used session is evicted once the configured
    maximum is exceeded.
    """
    max_sessions = settings_core.get_max_search_sessions()
    with _sessions_lock:
        session = _sessions.get(session_id)
        if session is not None:
            _sessions.move_to_end(session_id)
            return session

        session = SearchSession(_lookup_factory())
        _sessions[session_id] = session
        while len(_sessions) > max_sessions:
            evicted_id, _ = _sessions.popitem(last=False)
            logger.debug(f"Evicted search session {evicted_id}")
        return session


# --- Payloads ---


def record_to_payload(record, max_chars: int) -> dict[str, Any]:
    return {
        "id": record.id,
        "species_id": record.species_id,
        "name": record.name,
        "hosts": list(record.hosts),
        "description": summarize_description(record.description, max_chars),
    }


def state_to_payload(state: SearchState) -> dict[str, Any]:
    """Serializes a search state for the UI."""
    max_chars = settings_core.get_description_max_chars()
    root = None
    if state.root is not None:
        root = {"kind": state.root.kind, "name": state.root.name}
    return {
        "phase": state.phase.value,
        "root": root,
        "query": {
            key: list(value) if isinstance(value, tuple) else value
            for key, value in state.query.items()
        },
        "count": len(state.displayed),
        "galls": [record_to_payload(r, max_chars) for r in state.displayed],
    }


# --- Operations ---


def submit_root(session_id: str, host: str | None, genus: str | None) -> dict[str, Any]:
    """
    Start a new root search on a host or a genus.

    Raises:
        InvalidRootSelector: If both or neither of host/genus are given.
        RootLookupFailure: If the database lookup fails.
    """
    selector = parse_root_selector(host, genus)
    state = get_session(session_id).submit_root(selector)
    return state_to_payload(state)


def edit_facet(session_id: str, field: str, value: Any) -> dict[str, Any]:
    """Apply one facet edit to the session's displayed galls."""
    state = get_session(session_id).edit_facet(field, value)
    return state_to_payload(state)


def get_state(session_id: str) -> dict[str, Any]:
    return state_to_payload(get_session(session_id).state)


def get_search_options() -> dict[str, Any]:
    """Root and facet option lists for the search controls."""
    return {
        "roots": catalog_core.get_root_options(),
        "facets": catalog_core.get_filter_options(),
    }


def get_facet_registry() -> list[dict]:
    return describe_facets()

"""
Search Session - Query/Filter State Coordinator.

Owns the (query, displayed set) pair of one user's search and replaces it
wholesale on every transition:

    EMPTY --submit_root--> LOADED --edit_facet--> FILTERED --edit_facet--> FILTERED
      any state --submit_root--> LOADED

Facet edits filter the *currently displayed* galls, not the root superset.
Within one root search the displayed set therefore only narrows: clearing
a facet updates the query but does not bring back galls an earlier pass
removed. Only a new root search starts over.
"""

import logging
import threading
from collections import deque
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from core.records import GallRecord
from core.root_query import RootLookupInterface, RootSelector, resolve_root
from core.search_core import EMPTY_QUERY, filter_records, merge_query

logger = logging.getLogger(__name__)


class SearchPhase(str, Enum):
    EMPTY = "empty"
    LOADED = "loaded"
    FILTERED = "filtered"


@dataclass(frozen=True)
class SearchState:
    """Immutable snapshot of one search."""

    phase: SearchPhase = SearchPhase.EMPTY
    root: RootSelector | None = None
    query: Mapping[str, Any] = field(default_factory=lambda: EMPTY_QUERY)
    displayed: tuple[GallRecord, ...] = ()


StateListener = Callable[[SearchState], None]


class SearchSession:
    def __init__(self, lookup: RootLookupInterface):
        self._lookup = lookup
        self._state = SearchState()
        self._lock = threading.Lock()
        self._pending_roots = 0
        self._listeners: list[StateListener] = []
        # States awaiting delivery, in the order they became current.
        self._outbox: deque[SearchState] = deque()
        self._delivering = False

    # ------------------------------------------------------------------
    # Observation
    # ------------------------------------------------------------------

    @property
    def state(self) -> SearchState:
        return self._state

    @property
    def root_pending(self) -> bool:
        with self._lock:
            return self._pending_roots > 0

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Registers a listener called with each new state. Returns an unsubscribe function."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def _deliver(self) -> None:
        """
        Sends queued states to listeners in the order they were set.

        Only one thread drains the outbox at a time; transitions made by
        other threads meanwhile (including from inside a listener) are
        queued and delivered by the draining thread after the current one.
        """
        with self._lock:
            if self._delivering:
                return
            self._delivering = True

        while True:
            with self._lock:
                if not self._outbox:
                    self._delivering = False
                    return
                state = self._outbox.popleft()
                listeners = list(self._listeners)
            for listener in listeners:
                try:
                    listener(state)
                except Exception as e:
                    logger.error(f"Search state listener failed: {e}", exc_info=True)

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def submit_root(self, selector: RootSelector) -> SearchState:
        """
        Runs a new root search and resets all facet state.

        On failure the RootLookupFailure propagates and the previous
        state is left untouched.
        """
        with self._lock:
            self._pending_roots += 1

        try:
            candidates = resolve_root(selector, self._lookup)
        except Exception:
            with self._lock:
                self._pending_roots -= 1
            raise

        # Last resolved wins: the fetched superset replaces everything.
        new_state = SearchState(
            phase=SearchPhase.LOADED,
            root=selector,
            query=EMPTY_QUERY,
            displayed=candidates,
        )
        with self._lock:
            self._pending_roots -= 1
            self._state = new_state
            self._outbox.append(new_state)

        self._deliver()
        return new_state

    def edit_facet(self, field_name: str, value: Any) -> SearchState:
        """
        Overwrites one facet in the query and filters the displayed galls.

        Ignored (current state returned) while a root search is in flight
        or before any root search has completed.
        """
        with self._lock:
            current = self._state
            if self._pending_roots > 0:
                logger.info(f"Ignoring edit of '{field_name}' while a root search is pending")
                return current
            if current.phase is SearchPhase.EMPTY:
                logger.debug(f"Ignoring edit of '{field_name}' before any root search")
                return current

            query = merge_query(current.query, field_name, value)
            displayed = filter_records(current.displayed, query)
            new_state = SearchState(
                phase=SearchPhase.FILTERED,
                root=current.root,
                query=query,
                displayed=displayed,
            )
            self._state = new_state
            self._outbox.append(new_state)

        logger.debug(
            f"Facet '{field_name}' edited: {len(current.displayed)} -> {len(displayed)} galls"
        )
        self._deliver()
        return new_state

"""
Catalog Core - Gall Database Access for Search.

SQLite implementation of the root lookup plus the option lists that
populate the search controls.
"""

import logging
from collections.abc import Sequence

from core.records import DETACHABLE_LABELS, GallRecord, record_from_row
from core.root_query import RootLookupInterface
from utils.db import (
    closing_connection,
    fetch_all_host_genera,
    fetch_all_host_names,
    fetch_galls_by_genus,
    fetch_galls_by_host,
    fetch_option_values,
)

logger = logging.getLogger(__name__)

# Facet name -> lookup table supplying its options.
# The detachable facet has fixed labels instead of a table.
FACET_OPTION_TABLES = {
    "locations": "location",
    "textures": "texture",
    "alignment": "alignment",
    "walls": "walls",
    "cells": "cells",
    "shape": "shape",
    "color": "color",
}


class SqliteGallLookup(RootLookupInterface):
    """Root lookup over the configured gall database."""

    def fetch_by_host(self, name: str) -> Sequence[GallRecord]:
        with closing_connection() as conn:
            rows = fetch_galls_by_host(conn, name)
        return [record_from_row(row) for row in rows]

    def fetch_by_genus(self, name: str) -> Sequence[GallRecord]:
        with closing_connection() as conn:
            rows = fetch_galls_by_genus(conn, name)
        return [record_from_row(row) for row in rows]


def get_root_options() -> dict[str, list[str]]:
    """
    Returns the host names and host genera offered by the root search form.

    Returns:
        Dictionary with "hosts" and "genera" lists (empty on DB errors)
    """
    try:
        with closing_connection() as conn:
            return {
                "hosts": fetch_all_host_names(conn),
                "genera": fetch_all_host_genera(conn),
            }
    except Exception as e:
        logger.error(f"Error reading root search options: {e}")
        return {"hosts": [], "genera": []}


def get_filter_options() -> dict[str, list[str]]:
    """
    Returns the full option list of every facet.

    Returns:
        Dictionary mapping facet names to their option values
    """
    options: dict[str, list[str]] = {
        "detachable": list(DETACHABLE_LABELS.values()),
    }
    try:
        with closing_connection() as conn:
            for facet_name, table in FACET_OPTION_TABLES.items():
                options[facet_name] = fetch_option_values(conn, table)
    except Exception as e:
        logger.error(f"Error reading facet options: {e}")
        for facet_name in FACET_OPTION_TABLES:
            options.setdefault(facet_name, [])
    return options

"""
GallSearch Database Module.

This package provides modular database access for the gall database.
All functions are re-exported here so callers can import from utils.db.

Usage:
    from utils.db import closing_connection, fetch_galls_by_host
    # or
    from utils.db.galls import fetch_galls_by_host
"""

# Connection and Schema
from utils.db.connection import (
    LOOKUP_TABLES,
    _get_db_path,
    _init_schema,
    closing_connection,
    get_connection,
)

# Gall Operations
from utils.db.galls import (
    fetch_galls_by_genus,
    fetch_galls_by_host,
    get_or_create_host,
    get_or_create_lookup,
    insert_gall,
)

# Option Lists
from utils.db.options import (
    fetch_all_host_genera,
    fetch_all_host_names,
    fetch_option_values,
)

__all__ = [
    # Connection
    "LOOKUP_TABLES",
    "_get_db_path",
    "_init_schema",
    "closing_connection",
    "get_connection",
    # Galls
    "fetch_galls_by_host",
    "fetch_galls_by_genus",
    "get_or_create_host",
    "get_or_create_lookup",
    "insert_gall",
    # Options
    "fetch_all_host_names",
    "fetch_all_host_genera",
    "fetch_option_values",
]

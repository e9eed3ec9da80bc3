"""
Option Lists.

Read-only queries that populate the root and facet selection controls.
"""

import sqlite3

from utils.db.connection import LOOKUP_TABLES


def fetch_all_host_names(conn: sqlite3.Connection) -> list[str]:
    rows = conn.execute("SELECT name FROM host ORDER BY name;").fetchall()
    return [row[0] for row in rows]


def fetch_all_host_genera(conn: sqlite3.Connection) -> list[str]:
    rows = conn.execute("SELECT DISTINCT genus FROM host ORDER BY genus;").fetchall()
    return [row[0] for row in rows]


def fetch_option_values(conn: sqlite3.Connection, table: str) -> list[str]:
    """Returns every value of one lookup table, sorted."""
    if table not in LOOKUP_TABLES:
        raise ValueError(f"Unknown lookup table: {table}")
    rows = conn.execute(f"SELECT {table} FROM {table} ORDER BY {table};").fetchall()
    return [row[0] for row in rows]

"""
Gall Query and Insert Operations.

This module handles fetching the candidate galls for a root search
(by host species or host genus) and inserting galls for seeding.
"""

import sqlite3
from typing import Any

from utils.db.connection import LOOKUP_TABLES

# Older SQLite builds cap bound parameters per statement at 999.
_MAX_SQL_VARIABLES = 500

_GALL_SELECT = """
    SELECT
        g.id AS id,
        g.species_id AS species_id,
        s.name AS name,
        s.description AS description,
        a.alignment AS alignment,
        c.cells AS cells,
        co.color AS color,
        sh.shape AS shape,
        w.walls AS walls,
        g.detachable AS detachable
    FROM gall g
    JOIN species s ON s.id = g.species_id
    LEFT JOIN alignment a ON a.id = g.alignment_id
    LEFT JOIN cells c ON c.id = g.cells_id
    LEFT JOIN color co ON co.id = g.color_id
    LEFT JOIN shape sh ON sh.id = g.shape_id
    LEFT JOIN walls w ON w.id = g.walls_id
"""


def _fetch_tags(
    conn: sqlite3.Connection, sql: str, gall_ids: list[int]
) -> dict[int, list[str]]:
    """Runs a (gall_id, tag) query for the given galls and groups tags per gall."""
    tags: dict[int, list[str]] = {}
    for start in range(0, len(gall_ids), _MAX_SQL_VARIABLES):
        chunk = gall_ids[start : start + _MAX_SQL_VARIABLES]
        placeholders = ",".join("?" for _ in chunk)
        rows = conn.execute(sql.format(placeholders=placeholders), chunk).fetchall()
        for gall_id, tag in rows:
            tags.setdefault(gall_id, []).append(tag)
    return tags


def _attach_tags(conn: sqlite3.Connection, rows: list) -> list[dict[str, Any]]:
    galls = [dict(row) for row in rows]
    gall_ids = [g["id"] for g in galls]

    locations = _fetch_tags(
        conn,
        """
        SELECT gl.gall_id, l.location
        FROM galllocation gl
        JOIN location l ON l.id = gl.location_id
        WHERE gl.gall_id IN ({placeholders})
        ORDER BY gl.gall_id, gl.rowid;
        """,
        gall_ids,
    )
    textures = _fetch_tags(
        conn,
        """
        SELECT gt.gall_id, t.texture
        FROM galltexture gt
        JOIN texture t ON t.id = gt.texture_id
        WHERE gt.gall_id IN ({placeholders})
        ORDER BY gt.gall_id, gt.rowid;
        """,
        gall_ids,
    )
    hosts = _fetch_tags(
        conn,
        """
        SELECT gh.gall_id, h.name
        FROM gallhost gh
        JOIN host h ON h.id = gh.host_id
        WHERE gh.gall_id IN ({placeholders})
        ORDER BY gh.gall_id, h.name;
        """,
        gall_ids,
    )

    for gall in galls:
        gall["locations"] = locations.get(gall["id"], [])
        gall["textures"] = textures.get(gall["id"], [])
        gall["hosts"] = hosts.get(gall["id"], [])
    return galls


def fetch_galls_by_host(conn: sqlite3.Connection, host_name: str) -> list[dict[str, Any]]:
    """Returns all galls found on the host species with the given name."""
    rows = conn.execute(
        _GALL_SELECT
        + """
        WHERE g.id IN (
            SELECT gh.gall_id
            FROM gallhost gh
            JOIN host h ON h.id = gh.host_id
            WHERE h.name = ?
        )
        ORDER BY s.name, g.id;
        """,
        (host_name,),
    ).fetchall()
    return _attach_tags(conn, rows)


def fetch_galls_by_genus(conn: sqlite3.Connection, genus: str) -> list[dict[str, Any]]:
    """Returns all galls found on any host species of the given host genus."""
    rows = conn.execute(
        _GALL_SELECT
        + """
        WHERE g.id IN (
            SELECT gh.gall_id
            FROM gallhost gh
            JOIN host h ON h.id = gh.host_id
            WHERE h.genus = ?
        )
        ORDER BY s.name, g.id;
        """,
        (genus,),
    ).fetchall()
    return _attach_tags(conn, rows)


# --- Inserts (seeding / tests) ---


def get_or_create_lookup(conn: sqlite3.Connection, table: str, value: str | None) -> int | None:
    """Returns the id of `value` in a lookup table, inserting it if missing."""
    if table not in LOOKUP_TABLES:
        raise ValueError(f"Unknown lookup table: {table}")
    if value is None:
        return None
    row = conn.execute(f"SELECT id FROM {table} WHERE {table} = ?", (value,)).fetchone()
    if row is not None:
        return row[0]
    cur = conn.execute(f"INSERT INTO {table} ({table}) VALUES (?)", (value,))
    return cur.lastrowid


def get_or_create_host(conn: sqlite3.Connection, name: str) -> int:
    """Returns the id of a host species; the genus is the first word of its name."""
    row = conn.execute("SELECT id FROM host WHERE name = ?", (name,)).fetchone()
    if row is not None:
        return row[0]
    genus = name.split()[0] if name.split() else name
    cur = conn.execute("INSERT INTO host (name, genus) VALUES (?, ?)", (name, genus))
    return cur.lastrowid


def insert_gall(conn: sqlite3.Connection, row: dict[str, Any]) -> int:
    """
    Inserts a gall species with its attributes, tags, and hosts.

    Args:
        conn: Open connection
        row: Dict with name, description, alignment, cells, color, shape, walls,
            detachable (int code or None), locations, textures, hosts

    Returns:
        The new gall id
    """
    cur = conn.execute(
        "INSERT INTO species (name, description) VALUES (?, ?)",
        (row["name"], row.get("description")),
    )
    species_id = cur.lastrowid

    cur = conn.execute(
        """
        INSERT INTO gall (
            species_id,
            alignment_id,
            cells_id,
            color_id,
            shape_id,
            walls_id,
            detachable
        ) VALUES (?, ?, ?, ?, ?, ?, ?);
        """,
        (
            species_id,
            get_or_create_lookup(conn, "alignment", row.get("alignment")),
            get_or_create_lookup(conn, "cells", row.get("cells")),
            get_or_create_lookup(conn, "color", row.get("color")),
            get_or_create_lookup(conn, "shape", row.get("shape")),
            get_or_create_lookup(conn, "walls", row.get("walls")),
            row.get("detachable"),
        ),
    )
    gall_id = cur.lastrowid

    for location in row.get("locations", []):
        conn.execute(
            "INSERT OR IGNORE INTO galllocation (gall_id, location_id) VALUES (?, ?)",
            (gall_id, get_or_create_lookup(conn, "location", location)),
        )
    for texture in row.get("textures", []):
        conn.execute(
            "INSERT OR IGNORE INTO galltexture (gall_id, texture_id) VALUES (?, ?)",
            (gall_id, get_or_create_lookup(conn, "texture", texture)),
        )
    for host in row.get("hosts", []):
        conn.execute(
            "INSERT OR IGNORE INTO gallhost (gall_id, host_id) VALUES (?, ?)",
            (gall_id, get_or_create_host(conn, host)),
        )

    conn.commit()
    return gall_id

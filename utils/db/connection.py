"""
Database Connection and Schema Management.

This module handles SQLite connection creation and schema initialization
for the gall database.
"""

import sqlite3
from contextlib import contextmanager
from pathlib import Path

from config import get_config

# Module-level cache: initialize schema once per database path.
# Tests patch DATA_DIR, so schema init must be keyed by db path (not process-global).
_schema_initialized_paths: set[Path] = set()

# Lookup tables backing the single-valued and multi-valued facets.
# Each table has an integer id and one text column of the same name.
LOOKUP_TABLES = (
    "alignment",
    "cells",
    "color",
    "shape",
    "walls",
    "location",
    "texture",
)


def _get_db_path() -> Path:
    cfg = get_config()
    data_dir = Path(cfg["DATA_DIR"])
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir / cfg["GALL_DB_FILENAME"]


def get_connection() -> sqlite3.Connection:
    global _schema_initialized_paths
    db_path = _get_db_path()
    conn = sqlite3.connect(db_path, check_same_thread=False)
    conn.execute("PRAGMA foreign_keys=ON;")
    if db_path not in _schema_initialized_paths:
        _init_schema(conn)
        _schema_initialized_paths.add(db_path)
    conn.row_factory = sqlite3.Row
    return conn


@contextmanager
def closing_connection():
    """Context manager that creates a DB connection and guarantees it is closed.

    IMPORTANT: `with sqlite3.Connection as conn:` only manages transactions
    (commit/rollback), it does NOT call conn.close(). This context manager
    ensures the file descriptor is released when the block exits.

    Usage:
        with closing_connection() as conn:
            conn.execute("SELECT ...")
    """
    conn = get_connection()
    try:
        yield conn
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def _init_schema(conn: sqlite3.Connection) -> None:
    for table in LOOKUP_TABLES:
        conn.execute(f"""
            CREATE TABLE IF NOT EXISTS {table} (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                {table} TEXT NOT NULL UNIQUE
            );
            """)

    conn.execute("""
        CREATE TABLE IF NOT EXISTS species (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL UNIQUE,
            description TEXT
        );
        """)

    conn.execute("""
        CREATE TABLE IF NOT EXISTS gall (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            species_id INTEGER NOT NULL,
            alignment_id INTEGER REFERENCES alignment(id),
            cells_id INTEGER REFERENCES cells(id),
            color_id INTEGER REFERENCES color(id),
            shape_id INTEGER REFERENCES shape(id),
            walls_id INTEGER REFERENCES walls(id),
            detachable INTEGER,
            FOREIGN KEY(species_id) REFERENCES species(id) ON DELETE CASCADE
        );
        """)
    conn.execute("CREATE INDEX IF NOT EXISTS idx_gall_species ON gall(species_id);")

    conn.execute("""
        CREATE TABLE IF NOT EXISTS host (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL UNIQUE,
            genus TEXT NOT NULL
        );
        """)
    conn.execute("CREATE INDEX IF NOT EXISTS idx_host_genus ON host(genus);")

    conn.execute("""
        CREATE TABLE IF NOT EXISTS gallhost (
            gall_id INTEGER NOT NULL,
            host_id INTEGER NOT NULL,
            PRIMARY KEY (gall_id, host_id),
            FOREIGN KEY(gall_id) REFERENCES gall(id) ON DELETE CASCADE,
            FOREIGN KEY(host_id) REFERENCES host(id) ON DELETE CASCADE
        );
        """)
    conn.execute("CREATE INDEX IF NOT EXISTS idx_gallhost_host ON gallhost(host_id);")

    conn.execute("""
        CREATE TABLE IF NOT EXISTS galllocation (
            gall_id INTEGER NOT NULL,
            location_id INTEGER NOT NULL,
            PRIMARY KEY (gall_id, location_id),
            FOREIGN KEY(gall_id) REFERENCES gall(id) ON DELETE CASCADE,
            FOREIGN KEY(location_id) REFERENCES location(id) ON DELETE CASCADE
        );
        """)

    conn.execute("""
        CREATE TABLE IF NOT EXISTS galltexture (
            gall_id INTEGER NOT NULL,
            texture_id INTEGER NOT NULL,
            PRIMARY KEY (gall_id, texture_id),
            FOREIGN KEY(gall_id) REFERENCES gall(id) ON DELETE CASCADE,
            FOREIGN KEY(texture_id) REFERENCES texture(id) ON DELETE CASCADE
        );
        """)

    conn.commit()

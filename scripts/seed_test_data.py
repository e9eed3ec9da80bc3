#!/usr/bin/env python3
"""
Seed Script for GallSearch Test Data

Creates a small, reproducible gall database for UI testing:
- Host species across a few genera (Quercus, Rosa, Salix)
- Galls with single-valued attributes (color, shape, walls, cells, alignment)
- Multi-valued location and texture tags
- All three detachable codes plus unknown values

Usage:
    python scripts/seed_test_data.py              # Fresh seed (clears existing)
    python scripts/seed_test_data.py --dry-run    # Show what would be created

Output:
    - data/galls.db (SQLite database)
"""

import argparse
import sqlite3
import sys
from pathlib import Path

# Add project root to path for imports
PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from utils.db import _init_schema, insert_gall  # noqa: E402

# =============================================================================
# Test Data
# =============================================================================

# detachable codes: 0 = integral, 1 = detachable, 2 = both
SEED_GALLS = [
    {
        "name": "Amphibolips confluenta",
        "description": "Large, round, spongy oak apple on the underside of leaves.",
        "color": "green", "shape": "round", "walls": "thin", "cells": "monothalamous",
        "alignment": "erect", "detachable": 1,
        "locations": ["leaf", "petiole"], "textures": ["smooth"],
        "hosts": ["Quercus rubra", "Quercus velutina"],
    },
    {
        "name": "Andricus quercuscalifornicus",
        "description": "California gall wasp. Produces the large oak apple on valley oak twigs.",
        "color": "tan", "shape": "round", "walls": "thick", "cells": "polythalamous",
        "alignment": None, "detachable": 0,
        "locations": ["stem"], "textures": ["smooth", "spotted"],
        "hosts": ["Quercus lobata"],
    },
    {
        "name": "Callirhytis quercuspunctata",
        "description": "Gouty oak gall. Woody swellings on twigs.",
        "color": "brown", "shape": "globular", "walls": "thick", "cells": "polythalamous",
        "alignment": None, "detachable": 0,
        "locations": ["stem", "bud"], "textures": ["woody"],
        "hosts": ["Quercus rubra", "Quercus palustris"],
    },
    {
        "name": "Neuroterus saltatorius",
        "description": "Jumping oak gall. Tiny seed-like galls that drop from the leaf.",
        "color": "brown", "shape": "round", "walls": None, "cells": "monothalamous",
        "alignment": None, "detachable": 2,
        "locations": ["leaf"], "textures": ["smooth"],
        "hosts": ["Quercus lobata", "Quercus garryana"],
    },
    {
        "name": "Diplolepis rosae",
        "description": "Mossy rose gall (Robin's pincushion).",
        "color": "red", "shape": "globular", "walls": None, "cells": "polythalamous",
        "alignment": None, "detachable": 1,
        "locations": ["stem", "bud"], "textures": ["hairy"],
        "hosts": ["Rosa canina", "Rosa multiflora"],
    },
    {
        "name": "Diplolepis polita",
        "description": None,
        "color": "red", "shape": "round", "walls": "thin", "cells": "monothalamous",
        "alignment": None, "detachable": None,
        "locations": ["leaf"], "textures": ["spiky"],
        "hosts": ["Rosa canina"],
    },
    {
        "name": "Rabdophaga strobiloides",
        "description": "Willow pinecone gall. A rosette of leaves at the tip of a twig.",
        "color": "green", "shape": "cone", "walls": None, "cells": "monothalamous",
        "alignment": "erect", "detachable": 0,
        "locations": ["bud"], "textures": [],
        "hosts": ["Salix discolor", "Salix eriocephala"],
    },
]


# =============================================================================
# Database Functions
# =============================================================================

def init_database(db_path: Path, clear: bool = True) -> sqlite3.Connection:
    """Initialize or reset the test database."""
    if clear and db_path.exists():
        db_path.unlink()
        print(f"  Cleared existing database: {db_path}")

    db_path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(db_path)
    conn.execute("PRAGMA foreign_keys=ON;")
    _init_schema(conn)
    return conn


def generate_test_data(db_path: Path, dry_run: bool = False) -> dict:
    """Insert all seed galls; returns counts of what was (or would be) created."""
    hosts = {host for gall in SEED_GALLS for host in gall["hosts"]}
    stats = {
        "galls": len(SEED_GALLS),
        "hosts": len(hosts),
        "genera": len({host.split()[0] for host in hosts}),
    }

    if dry_run:
        for gall in SEED_GALLS:
            print(f"  Would insert {gall['name']} on {', '.join(gall['hosts'])}")
        return stats

    conn = init_database(db_path)
    try:
        for gall in SEED_GALLS:
            insert_gall(conn, gall)
            print(f"  Inserted {gall['name']}")
    finally:
        conn.close()
    return stats


def main():
    parser = argparse.ArgumentParser(
        description="Generate test data for GallSearch UI testing"
    )
    parser.add_argument(
        "--data-dir", "-o",
        default="data",
        help="Data directory (default: data)"
    )
    parser.add_argument(
        "--db-filename",
        default="galls.db",
        help="Database filename (default: galls.db)"
    )
    parser.add_argument(
        "--dry-run", "-n",
        action="store_true",
        help="Show what would be created without writing the database"
    )

    args = parser.parse_args()
    db_path = Path(args.data_dir) / args.db_filename

    print("=" * 60)
    print("GallSearch Test Data Seed Script")
    print("=" * 60)
    print(f"Database: {db_path.absolute()}")
    print(f"Mode: {'DRY RUN' if args.dry_run else 'LIVE'}")
    print("=" * 60)

    stats = generate_test_data(db_path, dry_run=args.dry_run)

    print("\n" + "=" * 60)
    print("Summary")
    print("=" * 60)
    print(f"  Galls:   {stats['galls']}")
    print(f"  Hosts:   {stats['hosts']}")
    print(f"  Genera:  {stats['genera']}")
    if not args.dry_run:
        print("\nTest data generated successfully!")

    return 0


if __name__ == "__main__":
    sys.exit(main())

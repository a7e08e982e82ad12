"""Create the database (if needed) and apply database/schema.sql.

    python scripts/init_db.py           # schema only
    python scripts/init_db.py --seed    # schema, then database/seed.sql
"""

from __future__ import annotations

import argparse
import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.campus_portal.campus_portal.database.bootstrap import apply_schema, apply_seed, list_tables
from src.campus_portal.campus_portal.database.connection import DatabaseConnection


def main() -> None:
    parser = argparse.ArgumentParser(description="Apply the campus portal schema")
    parser.add_argument("--seed", action="store_true", help="also load database/seed.sql")
    args = parser.parse_args()

    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    conn = DatabaseConnection.from_settings(settings.DB_CONFIG)

    count = apply_schema(conn, REPO_ROOT / "database" / "schema.sql")
    tables = list_tables(conn)
    print(f"OK: schema.sql ({count} statements) -> {conn.config.label}")
    print(f"    tables ({len(tables)}): {', '.join(sorted(tables))}")

    if args.seed:
        count = apply_seed(conn, REPO_ROOT / "database" / "seed.sql")
        print(f"OK: seed.sql ({count} statements)")


if __name__ == "__main__":
    main()

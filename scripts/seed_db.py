"""Load demo rows (database/seed.sql) into an existing schema.

Seeded people have no identity-provider account; use scripts/create_admin.py
and the admin API to provision people who need to log in.
"""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.campus_portal.campus_portal.database.bootstrap import apply_seed
from src.campus_portal.campus_portal.database.connection import DatabaseConnection


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    conn = DatabaseConnection.from_settings(settings.DB_CONFIG)

    count = apply_seed(conn, REPO_ROOT / "database" / "seed.sql")
    print(f"OK: seed.sql ({count} statements) -> {conn.config.label}")


if __name__ == "__main__":
    main()

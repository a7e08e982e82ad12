"""Dump the configured database to backups/<database>_<timestamp>.sql.

Requires the `mysqldump` client on PATH. The password is passed through
MYSQL_PWD so it does not show up in the process list.
"""

from __future__ import annotations

import importlib
import os
import subprocess
import sys
from datetime import datetime
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.campus_portal.campus_portal.database.connection import DBConfig


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    db = DBConfig.from_dict(settings.DB_CONFIG)

    out_dir = REPO_ROOT / "backups"
    out_dir.mkdir(parents=True, exist_ok=True)
    out_file = out_dir / f"{db.database}_{datetime.now():%Y%m%d_%H%M%S}.sql"

    cmd = [
        "mysqldump",
        f"--host={db.host}",
        f"--port={db.port}",
        f"--user={db.user}",
        "--single-transaction",
        "--routines",
        "--hex-blob",
        db.database,
    ]
    env = dict(os.environ, MYSQL_PWD=db.password)

    try:
        with out_file.open("wb") as f:
            subprocess.run(cmd, stdout=f, stderr=subprocess.PIPE, env=env, check=True)
    except FileNotFoundError:
        out_file.unlink(missing_ok=True)
        raise SystemExit("`mysqldump` not found. Install the MySQL client tools and retry.")
    except subprocess.CalledProcessError as e:
        out_file.unlink(missing_ok=True)
        raise SystemExit(f"mysqldump failed: {e.stderr.decode(errors='replace').strip()}")

    print(f"OK: {db.label} -> {out_file}")


if __name__ == "__main__":
    main()

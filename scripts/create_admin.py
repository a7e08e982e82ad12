"""Provision an admin account (local row + User + identity account).

Admins cannot be created over HTTP; run this once per administrator:

    python scripts/create_admin.py --name "Ada Admin" --email ada@example.edu
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

from src.campus_portal.campus_portal.container import build_container
from src.campus_portal.campus_portal.database.connection import DatabaseConnection
from src.campus_portal.campus_portal.identity.firebase_client import FirebaseIdentityClient


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--name", required=True)
    parser.add_argument("--email", required=True)
    parser.add_argument("--password", help="Initial password; omitted -> generated, setup link printed")
    parser.add_argument("--dob", help="YYYY-MM-DD")
    args = parser.parse_args()

    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())

    with FirebaseIdentityClient(settings.FIREBASE_CONFIG) as identity:
        container = build_container(
            conn=DatabaseConnection.from_settings(settings.DB_CONFIG),
            identity=identity,
            legacy_dob_passwords=bool(getattr(settings, "LEGACY_DOB_PASSWORDS", False)),
        )
        result = container.admin_service.provision_admin(
            name=args.name,
            email=args.email,
            password=args.password,
            dob=args.dob,
        )

    print(f"OK: Admin created -> {result.record.email}")
    if result.password_setup_link:
        print(f"Password setup link: {result.password_setup_link}")


if __name__ == "__main__":
    main()

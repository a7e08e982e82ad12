"""Example: use the service layer directly (no Flask).

Controllers are thin; the use cases live in the services.
"""

import importlib
import sys

from config import get_settings_module

from src.campus_portal.campus_portal.container import build_container
from src.campus_portal.campus_portal.database.connection import DatabaseConnection
from src.campus_portal.campus_portal.identity.firebase_client import FirebaseIdentityClient


def main():
    email = sys.argv[1] if len(sys.argv) > 1 else "student@example.edu"
    settings = importlib.import_module(get_settings_module())

    with FirebaseIdentityClient(settings.FIREBASE_CONFIG) as identity:
        container = build_container(conn=DatabaseConnection.from_settings(settings.DB_CONFIG), identity=identity)
        summary = container.attendance_service.student_summary(email)
        print(summary.to_dict())


if __name__ == "__main__":
    main()

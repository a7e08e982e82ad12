from __future__ import annotations

import atexit
import importlib
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask
from werkzeug.exceptions import HTTPException, RequestEntityTooLarge

from config import get_settings_module

from .admin.controller import register as register_admin
from .announcements.controller import register as register_announcements
from .attendance.controller import register as register_attendance
from .calendars.controller import register as register_calendars
from .common.http import error
from .container import Container, build_container
from .core.constants import DEFAULT_SUMMARY_WINDOW_DAYS
from .core.exceptions import AuthenticationError, AuthorizationError, DomainError
from .database.bootstrap import apply_schema, apply_seed, list_tables
from .database.connection import DatabaseConnection
from .enrollments.controller import register as register_enrollments
from .faculty.controller import register as register_faculty
from .identity.firebase_client import FirebaseIdentityClient
from .students.controller import register as register_students
from .users.controller import register as register_users

_LOG_PREFIX = "[campus-portal]"


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        if isinstance(e, (AuthenticationError, AuthorizationError)):
            app.logger.warning("%s: %s", type(e).__name__, e)
        return error(str(e), e.status_code)

    @app.errorhandler(RequestEntityTooLarge)
    def handle_too_large(e: RequestEntityTooLarge):
        return error("Uploaded file is too large", 413)

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        return error(e.description or e.name, e.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        app.logger.exception("Unhandled error")
        message = str(e) if app.config["DEBUG"] else "Internal server error"
        return error(message, 500)


def _build_default_container(app: Flask, settings) -> Container:
    conn = DatabaseConnection.from_settings(getattr(settings, "DB_CONFIG"))
    sql_dir = Path(__file__).resolve().parents[3] / "database"
    debug = app.config["DEBUG"]

    if debug:
        print(f"{_LOG_PREFIX} settings={settings.__name__} db={conn.config.label} pool_size={conn.config.pool_size}")

    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        count = apply_schema(conn, sql_dir / "schema.sql")
        if debug:
            print(f"{_LOG_PREFIX} schema ready (statements={count}, tables={len(list_tables(conn))})")
    if bool(getattr(settings, "AUTO_SEED_DB", False)):
        count = apply_seed(conn, sql_dir / "seed.sql")
        if debug:
            print(f"{_LOG_PREFIX} seed ready (statements={count})")

    identity = FirebaseIdentityClient(getattr(settings, "FIREBASE_CONFIG", {})).initialize()
    atexit.register(identity.close)
    if debug:
        print(f"{_LOG_PREFIX} identity client initialized={identity.initialized}")

    return build_container(
        conn=conn,
        identity=identity,
        legacy_dob_passwords=bool(getattr(settings, "LEGACY_DOB_PASSWORDS", False)),
        summary_window_days=int(getattr(settings, "SUMMARY_WINDOW_DAYS", DEFAULT_SUMMARY_WINDOW_DAYS)),
    )


def create_app(container: Optional[Container] = None) -> Flask:
    """Application factory.

    Without a container the app wires MySQL repositories and the Firebase
    identity client from the active settings module.
    """

    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["MAX_CONTENT_LENGTH"] = getattr(settings, "MAX_CONTENT_LENGTH", None)

    if container is None:
        container = _build_default_container(app, settings)

    _register_error_handlers(app)

    register_users(app, container)
    register_admin(app, container)
    register_students(app, container)
    register_faculty(app, container)
    register_enrollments(app, container)
    register_attendance(app, container)
    register_announcements(app, container)
    register_calendars(app, container)

    return app

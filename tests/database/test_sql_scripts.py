from __future__ import annotations

from pathlib import Path

from src.campus_portal.campus_portal.database.bootstrap import split_statements
from src.campus_portal.campus_portal.database.connection import DBConfig

REPO_ROOT = Path(__file__).resolve().parents[2]


def test_split_ignores_comments_and_quoted_semicolons():
    sql = """
    -- header; not a statement
    CREATE TABLE a (id INT);
    INSERT INTO a VALUES ('x;y'), ("it's; fine");
    INSERT INTO a VALUES ('escaped \\' quote; still inside')
    """

    assert split_statements(sql) == [
        "CREATE TABLE a (id INT)",
        "INSERT INTO a VALUES ('x;y'), (\"it's; fine\")",
        "INSERT INTO a VALUES ('escaped \\' quote; still inside')",
    ]


def test_split_keeps_minus_signs():
    assert split_statements("SELECT 3 - 1; SELECT -2;") == ["SELECT 3 - 1", "SELECT -2"]


def test_schema_file_defines_every_table():
    statements = split_statements((REPO_ROOT / "database" / "schema.sql").read_text(encoding="utf-8"))
    created = " ".join(s for s in statements if s.upper().startswith("CREATE TABLE"))

    for table in ("users", "admin", "students", "faculty", "subject_enrollments", "attendance", "announcements", "calendars"):
        assert f"EXISTS {table} " in created or f"EXISTS {table}(" in created, table


def test_db_config_defaults_and_label():
    cfg = DBConfig.from_dict({"host": "db", "user": "app", "password": "pw", "database": "campus"})

    assert cfg.port == 3306
    assert cfg.pool_size == 0
    assert cfg.label == "app@db:3306/campus"
    assert "database" not in cfg.connect_kwargs(with_database=False)

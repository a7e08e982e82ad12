"""Apply database/schema.sql and database/seed.sql to the configured MySQL database."""

from __future__ import annotations

import re
from pathlib import Path

from .connection import DatabaseConnection
from .mysql_base import db_cursor

# Quoted literals, line comments, statement separators, then everything else.
_TOKEN = re.compile(r"""'(?:[^'\\]|\\.)*'|"(?:[^"\\]|\\.)*"|--[^\n]*|;|[^'";-]+|.""", re.DOTALL)

# The scripts name a database; the configured one is used instead.
_DATABASE_SWITCH = re.compile(r"^(CREATE\s+DATABASE|USE)\b", re.IGNORECASE)


def split_statements(sql: str) -> list[str]:
    """Split a script on top-level `;`, ignoring `--` comments and semicolons inside quotes."""

    statements: list[str] = []
    buf: list[str] = []
    for match in _TOKEN.finditer(sql):
        token = match.group(0)
        if token.startswith("--"):
            continue
        if token == ";":
            statements.append("".join(buf).strip())
            buf = []
        else:
            buf.append(token)
    statements.append("".join(buf).strip())
    return [s for s in statements if s]


def ensure_database(conn: DatabaseConnection) -> None:
    server = conn.connect(with_database=False)
    try:
        cur = server.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{conn.config.database}` "
            "CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        cur.close()
    finally:
        server.close()


def run_script(conn: DatabaseConnection, sql: str) -> int:
    """Execute every statement of `sql` in one cursor block; returns the statement count."""

    statements = [s for s in split_statements(sql) if not _DATABASE_SWITCH.match(s)]
    with db_cursor(conn, dictionary=False) as (_, cur):
        for statement in statements:
            cur.execute(statement)
    return len(statements)


def apply_schema(conn: DatabaseConnection, schema_path: str | Path) -> int:
    ensure_database(conn)
    return run_script(conn, Path(schema_path).read_text(encoding="utf-8"))


def apply_seed(conn: DatabaseConnection, seed_path: str | Path) -> int:
    return run_script(conn, Path(seed_path).read_text(encoding="utf-8"))


def list_tables(conn: DatabaseConnection) -> list[str]:
    with db_cursor(conn, dictionary=False) as (_, cur):
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]

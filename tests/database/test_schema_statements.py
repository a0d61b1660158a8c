from __future__ import annotations

from pathlib import Path

from src.attendance_api.attendance_api.database.bootstrap import schema_statements

SCHEMA = Path(__file__).resolve().parents[2] / "database" / "schema.sql"


def test_drops_database_selection_and_comments():
    sql = """
    CREATE DATABASE IF NOT EXISTS attendance_db;
    USE attendance_db;
    -- users
    CREATE TABLE a (id INT);
    CREATE TABLE b (id INT)
    """

    assert list(schema_statements(sql)) == ["CREATE TABLE a (id INT)", "CREATE TABLE b (id INT)"]


def test_semicolon_inside_literal_does_not_split():
    sql = "INSERT INTO t VALUES ('a;b'); INSERT INTO t VALUES (\"it\\\"s;\");"

    assert list(schema_statements(sql)) == [
        "INSERT INTO t VALUES ('a;b')",
        'INSERT INTO t VALUES ("it\\"s;")',
    ]


def test_shipped_schema_creates_the_three_tables():
    statements = list(schema_statements(SCHEMA.read_text(encoding="utf-8")))
    created = [s for s in statements if s.upper().startswith("CREATE TABLE")]

    assert len(created) == 3
    for table in ("users", "attendance_records", "leave_requests"):
        assert any(table in s.split("(")[0] for s in created)

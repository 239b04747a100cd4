from __future__ import annotations

from pathlib import Path

from src.school_attendance.school_attendance.database.bootstrap import _schema_statements


def test_schema_file_splits_into_create_table_statements():
    schema = Path(__file__).resolve().parents[2] / "database" / "schema.sql"

    statements = _schema_statements(schema.read_text(encoding="utf-8"))

    assert statements
    assert all(s.upper().startswith("CREATE TABLE") for s in statements)
    assert any("uq_student_date" in s for s in statements)


def test_semicolon_inside_quotes_does_not_split():
    sql = "USE other;\n-- note; here\nINSERT INTO t VALUES ('a;b');\nSELECT 1;"

    assert _schema_statements(sql) == ["INSERT INTO t VALUES ('a;b')", "SELECT 1"]

from __future__ import annotations

import logging
import re
from pathlib import Path

import mysql.connector

from .connection import DBConfig

logger = logging.getLogger(__name__)


# Statement terminator: a ';' with an even number of single quotes after it.
_STATEMENT_END = re.compile(r";(?=(?:[^']*'[^']*')*[^']*\Z)")


def _schema_statements(sql: str) -> list[str]:
    """Split schema.sql into executable statements.

    Comment lines, CREATE DATABASE and USE are dropped: the target database
    always comes from DB_CONFIG.
    """
    kept = [
        line
        for line in sql.splitlines()
        if not re.match(r"\s*(--|CREATE\s+DATABASE\b|USE\b)", line, re.IGNORECASE)
    ]
    return [stmt.strip() for stmt in _STATEMENT_END.split("\n".join(kept)) if stmt.strip()]


def _connect(target: DBConfig, *, with_database: bool = True):
    kwargs = {
        "host": target.host,
        "port": target.port,
        "user": target.user,
        "password": target.password,
        "use_pure": True,
    }
    if with_database:
        kwargs["database"] = target.database
    return mysql.connector.connect(**kwargs)


def ensure_database_exists(db_config: dict) -> None:
    target = DBConfig.from_dict(db_config)
    conn = _connect(target, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    """Apply schema.sql (idempotent: CREATE TABLE IF NOT EXISTS)."""
    target = DBConfig.from_dict(db_config)
    ensure_database_exists(db_config)

    statements = _schema_statements(Path(schema_path).read_text(encoding="utf-8"))

    conn = _connect(target)
    try:
        cur = conn.cursor()
        for stmt in statements:
            cur.execute(stmt)
        conn.commit()
        logger.info("Applied %d schema statements to %s", len(statements), target.database)
    finally:
        conn.close()


def list_tables(db_config: dict) -> list[str]:
    conn = _connect(DBConfig.from_dict(db_config))
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()

from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import SchoolClass
from .repository import ClassRepository


def _to_class(r: dict) -> SchoolClass:
    return SchoolClass(
        class_id=int(r["id"]),
        class_name=r["class_name"],
        grade_level=int(r["grade_level"]) if r.get("grade_level") is not None else None,
        academic_year=r.get("academic_year"),
    )


class MySQLClassRepository(ClassRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, class_id: int) -> Optional[SchoolClass]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, class_name, grade_level, academic_year
                FROM classes
                WHERE id=%s
                """,
                (int(class_id),),
            )
            r = fetchone(cur)
            return _to_class(r) if r else None


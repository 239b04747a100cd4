from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Student
from .repository import StudentRepository


def _to_student(r: dict) -> Student:
    return Student(
        student_id=int(r["id"]),
        nis=str(r["nis"]),
        full_name=r["full_name"],
        class_id=int(r["class_id"]),
        class_name=r["class_name"],
        is_active=bool(r["is_active"]),
    )


class MySQLStudentRepository(StudentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, student_id: int) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT s.id, s.student_id AS nis, s.full_name, s.class_id, s.is_active, c.class_name
                FROM students s
                JOIN classes c ON c.id = s.class_id
                WHERE s.id=%s
                """,
                (int(student_id),),
            )
            r = fetchone(cur)
            return _to_student(r) if r else None

    def list_active(self, class_id: Optional[int] = None) -> Sequence[Student]:
        clauses = ["s.is_active = TRUE"]
        params: list[object] = []
        if class_id is not None:
            clauses.append("s.class_id=%s")
            params.append(int(class_id))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT s.id, s.student_id AS nis, s.full_name, s.class_id, s.is_active, c.class_name
                FROM students s
                JOIN classes c ON c.id = s.class_id
                WHERE {where}
                ORDER BY s.full_name
                """,
                tuple(params),
            )
            return [_to_student(r) for r in fetchall(cur)]

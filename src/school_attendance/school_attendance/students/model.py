from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Student:
    """Domain entity: a student on a class roster.

    `nis` is the school's display id; `student_id` is the row key.
    """

    student_id: int
    nis: str
    full_name: str
    class_id: int
    class_name: str
    is_active: bool = True

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class SchoolClass:
    """Domain entity: a class (rombel) students belong to."""

    class_id: int
    class_name: str
    grade_level: Optional[int] = None
    academic_year: Optional[str] = None

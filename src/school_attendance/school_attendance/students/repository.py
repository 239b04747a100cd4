from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Student


class StudentRepository(Protocol):
    def get_by_id(self, student_id: int) -> Optional[Student]:
        raise NotImplementedError

    def list_active(self, class_id: Optional[int] = None) -> Sequence[Student]:
        """Active roster ordered by full name; all classes when class_id is None."""

        raise NotImplementedError

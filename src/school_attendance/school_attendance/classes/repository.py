from __future__ import annotations

from typing import Optional, Protocol

from .model import SchoolClass


class ClassRepository(Protocol):
    """Read-only class directory used for display-name resolution."""

    def get_by_id(self, class_id: int) -> Optional[SchoolClass]:
        raise NotImplementedError

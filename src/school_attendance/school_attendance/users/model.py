from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError


@dataclass(frozen=True)
class CurrentUser:
    """Caller identity placed into the Flask session by the auth layer.

    Only role and class_id matter here: they decide which classes a caller
    may report on.
    """

    user_id: int
    role: Role
    class_id: Optional[int] = None

    @classmethod
    def from_session(cls, session: Mapping[str, Any]) -> "CurrentUser":
        if "user_id" not in session:
            raise AuthenticationError("Access token required")
        try:
            role = Role(session.get("role"))
        except ValueError:
            raise AuthorizationError("Access denied")
        class_id = session.get("class_id")
        return cls(
            user_id=int(session["user_id"]),
            role=role,
            class_id=int(class_id) if class_id else None,
        )

    def class_scope(self, requested_class_id: Optional[int]) -> Optional[int]:
        """Class this caller may act on; None means every class (admin only)."""
        if self.role == Role.ADMIN:
            return requested_class_id
        if self.class_id is None:
            raise AuthorizationError("Access denied")
        if requested_class_id is not None and int(requested_class_id) != self.class_id:
            raise AuthorizationError("Cannot access data of another class")
        return self.class_id

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Optional

from werkzeug.security import check_password_hash

from ..core.enums import Role
from ..core.exceptions import AuthenticationError
from ..users.model import User
from ..users.repository import UserRepository

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"


@dataclass(frozen=True)
class SessionUser:
    """What we keep in the client session after login (never the password hash)."""

    id: int
    unique_id: str
    name: str
    email: Optional[str]
    role: Optional[Role]
    department_id: Optional[int]
    class_id: Optional[int]

    @classmethod
    def from_user(cls, user: User) -> "SessionUser":
        return cls(
            id=user.id,
            unique_id=user.unique_id,
            name=user.name,
            email=user.email,
            role=user.role,
            department_id=user.department_id,
            class_id=user.class_id,
        )

    def to_dict(self) -> dict:
        data = asdict(self)
        data["role"] = self.role.value if self.role else None
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "SessionUser":
        return cls(
            id=int(data["id"]),
            unique_id=str(data["unique_id"]),
            name=str(data["name"]),
            email=data.get("email"),
            role=Role.parse(data.get("role")),
            department_id=data.get("department_id"),
            class_id=data.get("class_id"),
        )


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, unique_id: str, password: str) -> SessionUser:
        """Return the session user for an active account with a matching password.

        Wrong id, wrong password and inactive status all raise the same
        AuthenticationError. Store failures propagate as BackendUnavailableError.
        """
        user = self._users.get_by_unique_id((unique_id or "").strip())
        if not user or not user.is_active:
            logger.warning("Login failed for %r: no active account", unique_id)
            raise AuthenticationError(INVALID_CREDENTIALS)

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            logger.warning("Login failed for %r: password mismatch", unique_id)
            raise AuthenticationError(INVALID_CREDENTIALS)

        logger.info("User %s logged in", user.unique_id)
        return SessionUser.from_user(user)

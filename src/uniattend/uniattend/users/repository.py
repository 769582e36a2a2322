from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Role, UserStatus
from .model import User


class UserRepository(Protocol):
    """Repository interface for User.

    Note (DIP): services depend on this interface, not on a concrete database.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_unique_id(self, unique_id: str) -> Optional[User]:
        raise NotImplementedError

    def list_all(self) -> Sequence[User]:
        """All users, newest first."""

        raise NotImplementedError

    def list_active_by_role(self, role: Role) -> Sequence[User]:
        raise NotImplementedError

    def list_active_by_department(self, department_id: int) -> Sequence[User]:
        raise NotImplementedError

    def create_user(
        self,
        *,
        unique_id: str,
        name: str,
        email: Optional[str],
        password_hash: str,
        role: Role,
        department_id: Optional[int],
        class_id: Optional[int],
        status: UserStatus,
    ) -> int:
        raise NotImplementedError

    def update_user(
        self,
        user_id: int,
        *,
        name: str,
        email: Optional[str],
        role: Role,
        department_id: Optional[int],
        class_id: Optional[int],
        status: UserStatus,
        password_hash: Optional[str] = None,
    ) -> bool:
        """Update profile fields; the password changes only when a hash is given."""

        raise NotImplementedError

    def delete_by_id(self, user_id: int) -> bool:
        raise NotImplementedError

    def count(self) -> int:
        raise NotImplementedError

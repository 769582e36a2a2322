from __future__ import annotations

import logging
from typing import Optional, Sequence

from werkzeug.security import generate_password_hash

from ..common.validators import optional_text, require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.enums import Role, UserStatus
from ..core.exceptions import AuthorizationError, ValidationError
from .model import User
from .repository import UserRepository

logger = logging.getLogger(__name__)


class UserService:
    """Use case: manage user accounts (admin) and look up users by role/department."""

    def __init__(self, users: UserRepository):
        self._users = users

    @staticmethod
    def _require_admin(current_role: Optional[Role]) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission to manage users")

    @staticmethod
    def _parse_role(value: object) -> Role:
        role = value if isinstance(value, Role) else Role.parse(value)
        if role is None:
            raise ValidationError("Invalid role")
        return role

    @staticmethod
    def _parse_status(value: object) -> UserStatus:
        try:
            return value if isinstance(value, UserStatus) else UserStatus(value)
        except ValueError:
            raise ValidationError("Invalid status")

    def get(self, user_id: int) -> Optional[User]:
        return self._users.get_by_id(int(user_id))

    def list_all(self) -> Sequence[User]:
        return self._users.list_all()

    def list_by_role(self, role: Role) -> Sequence[User]:
        """Active users holding `role`."""
        return self._users.list_active_by_role(role)

    def list_by_department(self, department_id: int) -> Sequence[User]:
        """Active users of a department; empty when there are none."""
        return self._users.list_active_by_department(int(department_id))

    def count(self) -> int:
        return self._users.count()

    def create_account(
        self,
        *,
        current_role: Optional[Role],
        unique_id: str,
        name: str,
        password: str,
        role: object,
        email: Optional[str] = None,
        department_id: Optional[int] = None,
        class_id: Optional[int] = None,
        status: object = UserStatus.ACTIVE,
    ) -> int:
        self._require_admin(current_role)

        unique_id = require_non_empty(unique_id, "User ID")
        name = require_non_empty(name, "Name")
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)

        if self._users.get_by_unique_id(unique_id):
            raise ValidationError("User ID already exists")

        user_id = self._users.create_user(
            unique_id=unique_id,
            name=name,
            email=optional_text(email),
            password_hash=generate_password_hash(password),
            role=self._parse_role(role),
            department_id=department_id or None,
            class_id=class_id or None,
            status=self._parse_status(status),
        )
        logger.info("User %s created (id=%s)", unique_id, user_id)
        return user_id

    def update_account(
        self,
        *,
        current_role: Optional[Role],
        user_id: int,
        name: str,
        role: object,
        status: object,
        email: Optional[str] = None,
        department_id: Optional[int] = None,
        class_id: Optional[int] = None,
        password: str = "",
    ) -> None:
        self._require_admin(current_role)

        if not self._users.get_by_id(int(user_id)):
            raise ValidationError("User not found")

        password_hash = None
        if password:
            require_min_length(password, "Password", MIN_PASSWORD_LENGTH)
            password_hash = generate_password_hash(password)

        ok = self._users.update_user(
            int(user_id),
            name=require_non_empty(name, "Name"),
            email=optional_text(email),
            role=self._parse_role(role),
            department_id=department_id or None,
            class_id=class_id or None,
            status=self._parse_status(status),
            password_hash=password_hash,
        )
        if not ok:
            raise ValidationError("Failed to update user")

    def delete_user(self, *, current_role: Optional[Role], current_user_id: int, user_id: int) -> None:
        self._require_admin(current_role)

        if int(user_id) == int(current_user_id):
            raise ValidationError("You cannot delete your own account")
        if not self._users.get_by_id(int(user_id)):
            raise ValidationError("User not found")
        if not self._users.delete_by_id(int(user_id)):
            raise ValidationError("Failed to delete user")
        logger.info("User id=%s deleted", user_id)

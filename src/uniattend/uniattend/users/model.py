from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Role, UserStatus


@dataclass(frozen=True)
class User:
    """Domain entity: User.

    Plain data object (no DB access). `role` is None when the store holds a
    role this application does not know.
    """

    id: int
    unique_id: str
    name: str
    email: Optional[str]
    password_hash: str
    role: Optional[Role]
    department_id: Optional[int]
    class_id: Optional[int]
    status: UserStatus = UserStatus.ACTIVE
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_active(self) -> bool:
        return self.status == UserStatus.ACTIVE

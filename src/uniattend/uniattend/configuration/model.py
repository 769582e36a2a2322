from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Department:
    id: int
    name: str
    short_name: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class Major:
    id: int
    name: str
    short_name: str
    department_id: int
    department_short_name: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class Subject:
    id: int
    name: str
    code: str
    credits: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

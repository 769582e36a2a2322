from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Department, Major, Subject


class DepartmentRepository(Protocol):
    def list_all(self) -> Sequence[Department]:
        """Ordered by name."""

        raise NotImplementedError

    def get_by_id(self, department_id: int) -> Optional[Department]:
        raise NotImplementedError

    def create(self, *, name: str, short_name: str) -> int:
        raise NotImplementedError

    def update(self, department_id: int, *, name: str, short_name: str) -> bool:
        raise NotImplementedError

    def delete(self, department_id: int) -> bool:
        raise NotImplementedError


class MajorRepository(Protocol):
    def list_all(self) -> Sequence[Major]:
        """Ordered by name, with the department short name joined in."""

        raise NotImplementedError

    def list_by_department(self, department_id: int) -> Sequence[Major]:
        raise NotImplementedError

    def get_by_id(self, major_id: int) -> Optional[Major]:
        raise NotImplementedError

    def create(self, *, name: str, short_name: str, department_id: int) -> int:
        raise NotImplementedError

    def update(self, major_id: int, *, name: str, short_name: str, department_id: int) -> bool:
        raise NotImplementedError

    def delete(self, major_id: int) -> bool:
        raise NotImplementedError


class SubjectRepository(Protocol):
    def list_all(self) -> Sequence[Subject]:
        raise NotImplementedError

    def get_by_id(self, subject_id: int) -> Optional[Subject]:
        raise NotImplementedError

    def get_by_code(self, code: str) -> Optional[Subject]:
        raise NotImplementedError

    def create(self, *, name: str, code: str, credits: int) -> int:
        raise NotImplementedError

    def update(self, subject_id: int, *, name: str, code: str, credits: int) -> bool:
        raise NotImplementedError

    def delete(self, subject_id: int) -> bool:
        raise NotImplementedError

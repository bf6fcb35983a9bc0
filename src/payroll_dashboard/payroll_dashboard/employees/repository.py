from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Branch, Employee, EmployeeContact


class EmployeeRepository(Protocol):
    """Repository interface for the roster.

    Note: services depend on this protocol, not on a concrete database.
    """

    def get_by_ids(self, employee_ids: Sequence[str]) -> Sequence[Employee]:
        raise NotImplementedError

    def list_active(self, *, branch_id: Optional[str] = None) -> Sequence[Employee]:
        """Active employees, ordered by full name."""

        raise NotImplementedError

    def list_contacts(self) -> Sequence[EmployeeContact]:
        raise NotImplementedError


class BranchRepository(Protocol):
    def get_by_id(self, branch_id: str) -> Optional[Branch]:
        raise NotImplementedError

    def get_by_ids(self, branch_ids: Sequence[str]) -> Sequence[Branch]:
        raise NotImplementedError

    def list_active(self) -> Sequence[Branch]:
        raise NotImplementedError

from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import Role


@dataclass(frozen=True)
class UserSession:
    """Who is making the current request.

    Built per request and passed into services explicitly; nothing about the
    caller is kept at module level.
    """

    email: str
    display_name: str
    role: Role
    branch_ids: frozenset[str] = frozenset()

    @property
    def is_super_admin(self) -> bool:
        return self.role == Role.SUPER_ADMIN

    def can_access_branch(self, branch_id: str) -> bool:
        return self.is_super_admin or branch_id in self.branch_ids

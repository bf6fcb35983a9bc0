from __future__ import annotations

from typing import Optional, Protocol

from .model import UserSession


class UserRoleRepository(Protocol):
    def get_active_by_email(self, email: str) -> Optional[UserSession]:
        raise NotImplementedError

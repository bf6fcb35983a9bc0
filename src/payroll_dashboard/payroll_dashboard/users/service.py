from __future__ import annotations

from ..common.validators import require_non_empty
from ..core.exceptions import AuthenticationError, AuthorizationError
from .model import UserSession
from .repository import UserRoleRepository


class SessionService:
    """Use case: resolve the caller's role for the current request.

    Identity itself is established upstream; the dashboard only maps a
    signed-in email onto its role and branch assignments.
    """

    def __init__(self, roles: UserRoleRepository):
        self._roles = roles

    def resolve(self, email: str | None) -> UserSession:
        if not email:
            raise AuthenticationError("Not signed in")

        user = self._roles.get_active_by_email(require_non_empty(email, "email").lower())
        if not user:
            raise AuthorizationError("No dashboard role assigned to this account")
        return user

    @staticmethod
    def require_branch(user: UserSession, branch_id: str) -> None:
        if not user.can_access_branch(branch_id):
            raise AuthorizationError("You do not manage this branch")

    @staticmethod
    def require_super_admin(user: UserSession) -> None:
        if not user.is_super_admin:
            raise AuthorizationError("Only super admins can do this")

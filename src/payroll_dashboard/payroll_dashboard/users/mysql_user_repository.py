from __future__ import annotations

import json
from typing import Any, Optional

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import UserSession
from .repository import UserRoleRepository


def _parse_branch_ids(value: Any) -> frozenset[str]:
    # Stored as a JSON array; tolerate NULL and empty strings.
    if not value:
        return frozenset()
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8")
    if isinstance(value, str):
        value = json.loads(value)
    return frozenset(str(v) for v in value)


class MySQLUserRoleRepository(UserRoleRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_active_by_email(self, email: str) -> Optional[UserSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT email, display_name, role, branch_ids
                FROM user_roles
                WHERE email=%s AND is_active=1
                """,
                (email,),
            )
            r = fetchone(cur)
            if not r:
                return None
            return UserSession(
                email=r["email"],
                display_name=r.get("display_name") or r["email"],
                role=Role(r["role"]),
                branch_ids=_parse_branch_ids(r.get("branch_ids")),
            )

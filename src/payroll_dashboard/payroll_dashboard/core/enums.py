from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Dashboard roles used for branch scoping."""

    SUPER_ADMIN = "super_admin"
    BRANCH_MANAGER = "branch_manager"


class AttendanceStatus(str, Enum):
    """Daily log status as stored in the database."""

    PRESENT = "present"
    LATE = "late"
    ABSENT = "absent"
    LEAVE = "leave"
    DAY_OFF = "day_off"
    EXTRA_SHIFT = "extra_shift"


class LeaveType(str, Enum):
    ANNUAL = "annual"
    SICK = "sick"
    MATERNITY = "maternity"
    PATERNITY = "paternity"
    COMPASSIONATE = "compassionate"
    UNPAID = "unpaid"


class Position(str, Enum):
    MANAGER = "manager"
    ASSISTANT_MANAGER = "assistant_manager"
    CASHIER = "cashier"
    IT_TECHNICIAN = "it_technician"
    SECURITY = "security"
    CLEANER = "cleaner"
    BIKER = "biker"
    CALL_CENTER_AGENT = "call_center_agent"


class EmploymentStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"

from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Session role used for access checks."""

    ADMIN = "admin"
    EMPLOYEE = "employee"


class EmployeeStatus(str, Enum):
    ACTIVE = "active"
    ARCHIVED = "archived"


class AttendanceStatus(str, Enum):
    PRESENT = "present"


class LeaveType(str, Enum):
    SICK = "Sick"
    VACATION = "Vacation"
    EMERGENCY = "Emergency"
    PERSONAL = "Personal"
    BEREAVEMENT = "Bereavement"
    OTHER = "Other"


class LeaveStatus(str, Enum):
    """Leave workflow. Only PENDING can transition; the rest are terminal."""

    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"
    CANCELLED = "Cancelled"


class PayslipStatus(str, Enum):
    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class PeriodType(str, Enum):
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class DeductionPolicy(str, Enum):
    PER_EMPLOYEE = "per_employee"
    FLAT = "flat"


class RateBasis(str, Enum):
    DAILY = "daily"
    ANNUAL = "annual"


class PayrollWarning(str, Enum):
    ZERO_ATTENDANCE = "ZERO_ATTENDANCE"
    NEGATIVE_NET_PAY = "NEGATIVE_NET_PAY"
    EXISTING_PAYSLIP = "EXISTING_PAYSLIP"
    PAYSLIP_APPROVED = "PAYSLIP_APPROVED"

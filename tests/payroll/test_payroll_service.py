from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal

import pytest

from src.payroll_system.payroll_system.core.enums import PayrollWarning, PayslipStatus, PeriodType
from src.payroll_system.payroll_system.core.exceptions import (
    ConfirmationRequiredError,
    NotFoundError,
    PayslipLockedError,
    StateConflictError,
    ValidationError,
)
from src.payroll_system.payroll_system.payroll.periods import period_for_start

WEEK = period_for_start(PeriodType.WEEKLY, date(2025, 3, 10))
NEXT_WEEK = period_for_start(PeriodType.WEEKLY, date(2025, 3, 17))


def _work(attendance_repo, days: int, *, start: date = WEEK.start, late_minutes: int = 0):
    for i in range(days):
        attendance_repo.add("E001", start + timedelta(days=i), late_minutes=late_minutes)


def test_full_week_preview(payroll_service, attendance_repo):
    _work(attendance_repo, 6)

    preview = payroll_service.calculate("E001", WEEK)

    assert preview.summary.payable_days == 6
    assert preview.breakdown.gross_pay == Decimal("3060.00")
    assert preview.breakdown.total_deductions == Decimal("750.00")
    assert preview.breakdown.net_pay == Decimal("2310.00")
    assert preview.existing is None
    assert preview.warnings == ()


def test_calculate_writes_nothing(payroll_service, attendance_repo, payslips_repo):
    _work(attendance_repo, 3)
    payroll_service.calculate("E001", WEEK)
    assert len(payslips_repo) == 0


def test_confirm_twice_keeps_one_identical_payslip(payroll_service, attendance_repo, payslips_repo):
    _work(attendance_repo, 4, late_minutes=15)

    first = payroll_service.confirm("E001", WEEK)
    second = payroll_service.confirm("E001", WEEK)

    assert len(payslips_repo) == 1
    assert first == second
    assert first.late_minutes == 60
    assert first.status == PayslipStatus.PENDING


def test_approved_payslip_is_locked_until_rejected(payroll_service, attendance_repo, payslips_repo):
    _work(attendance_repo, 3)
    slip = payroll_service.confirm("E001", WEEK)
    payroll_service.approve(slip.payslip_id)

    preview = payroll_service.calculate("E001", WEEK)
    assert preview.locked
    assert PayrollWarning.PAYSLIP_APPROVED in preview.warnings

    with pytest.raises(PayslipLockedError):
        payroll_service.confirm("E001", WEEK)
    assert payslips_repo.get_by_id(slip.payslip_id).net_pay == slip.net_pay

    payroll_service.reject(slip.payslip_id)
    _work(attendance_repo, 5)
    redone = payroll_service.confirm("E001", WEEK)

    assert redone.payslip_id == slip.payslip_id
    assert redone.status == PayslipStatus.PENDING
    assert redone.payable_days == 5
    assert redone.net_pay > slip.net_pay


def test_payslip_approved_between_check_and_write_is_not_overwritten(payroll_service, attendance_repo, payslips_repo, monkeypatch):
    _work(attendance_repo, 2)
    monkeypatch.setattr(payslips_repo, "upsert_payslip", lambda payslip: None)

    with pytest.raises(PayslipLockedError):
        payroll_service.confirm("E001", WEEK)


def test_existing_pending_payslip_is_flagged(payroll_service, attendance_repo):
    _work(attendance_repo, 2)
    payroll_service.confirm("E001", WEEK)

    preview = payroll_service.calculate("E001", WEEK)

    assert PayrollWarning.EXISTING_PAYSLIP in preview.warnings
    assert not preview.locked


def test_zero_attendance_needs_acknowledgement(payroll_service, payslips_repo):
    preview = payroll_service.calculate("E001", WEEK)
    assert preview.breakdown.gross_pay == Decimal("0.00")
    assert PayrollWarning.ZERO_ATTENDANCE in preview.warnings

    with pytest.raises(ConfirmationRequiredError) as exc:
        payroll_service.confirm("E001", WEEK)
    assert "ZERO_ATTENDANCE" in exc.value.warnings
    assert len(payslips_repo) == 0

    slip = payroll_service.confirm("E001", WEEK, acknowledge_zero=True)
    assert slip.net_pay == Decimal("0.00")
    assert slip.total_deductions == Decimal("0.00")
    assert len(payslips_repo) == 1


def test_approved_zero_payslip_reports_lock_before_asking_for_acknowledgement(payroll_service):
    slip = payroll_service.confirm("E001", WEEK, acknowledge_zero=True)
    payroll_service.approve(slip.payslip_id)

    with pytest.raises(PayslipLockedError):
        payroll_service.confirm("E001", WEEK)


def test_approved_leave_is_paid(payroll_service, attendance_repo, leaves_repo):
    _work(attendance_repo, 3)
    leaves_repo.add("E001", date(2025, 3, 13), date(2025, 3, 20))

    slip = payroll_service.confirm("E001", WEEK)

    assert (slip.days_worked, slip.leave_days, slip.payable_days) == (3, 3, 6)


def test_manual_late_minutes_replace_the_attendance_total(payroll_service, attendance_repo):
    _work(attendance_repo, 6, late_minutes=30)

    auto = payroll_service.calculate("E001", WEEK)
    manual = payroll_service.calculate("E001", WEEK, late_minutes=60)

    assert auto.breakdown.late_minutes == 180
    assert manual.breakdown.late_deduction == Decimal("63.75")

    with pytest.raises(ValidationError):
        payroll_service.calculate("E001", WEEK, late_minutes=-1)
    with pytest.raises(ValidationError):
        payroll_service.calculate("E001", WEEK, late_minutes=6 * 8 * 60 + 1)


def test_archived_employee_is_paid_only_up_to_the_archive_date(payroll_service, employees_repo, attendance_repo):
    _work(attendance_repo, 2)
    employees_repo.archive(employee=employees_repo.get_employee("E001"))

    slip = payroll_service.confirm("E001", WEEK)
    assert slip.payable_days == 2

    with pytest.raises(ValidationError):
        payroll_service.calculate("E001", NEXT_WEEK)


def test_unknown_employee(payroll_service):
    with pytest.raises(NotFoundError):
        payroll_service.calculate("NOPE", WEEK)


def test_status_transitions(payroll_service, attendance_repo):
    _work(attendance_repo, 1)
    slip = payroll_service.confirm("E001", WEEK)

    assert payroll_service.approve(slip.payslip_id).status == PayslipStatus.APPROVED
    with pytest.raises(StateConflictError):
        payroll_service.approve(slip.payslip_id)

    assert payroll_service.reject(slip.payslip_id).status == PayslipStatus.REJECTED
    with pytest.raises(StateConflictError):
        payroll_service.approve(slip.payslip_id)

    with pytest.raises(NotFoundError):
        payroll_service.reject(999)


def test_employee_payslips_filter_by_period_start_month(payroll_service, attendance_repo):
    _work(attendance_repo, 1)
    _work(attendance_repo, 1, start=date(2025, 3, 31))
    payroll_service.confirm("E001", WEEK)
    payroll_service.confirm("E001", period_for_start(PeriodType.WEEKLY, date(2025, 3, 31)))

    march = payroll_service.employee_payslips("E001", year=2025, month=3)
    april = payroll_service.employee_payslips("E001", year="2025", month="4")

    assert [s.period_start for s in march] == [date(2025, 3, 31), date(2025, 3, 10)]
    assert april == []

    with pytest.raises(ValidationError):
        payroll_service.employee_payslips("E001", year=2025, month=13)


def test_periods_for_the_picker(payroll_service):
    periods = payroll_service.periods(PeriodType.MONTHLY, today=date(2025, 3, 12))
    assert len(periods) == 8
    assert periods[0].start == date(2025, 3, 1)
    assert periods[-1].start == date(2024, 8, 1)

from __future__ import annotations

from decimal import Decimal

import pytest

from src.payroll_system.payroll_system.core.exceptions import NotFoundError, StateConflictError, ValidationError
from src.payroll_system.payroll_system.employees.model import Employee
from src.payroll_system.payroll_system.employees.service import DeductionBounds, EmployeeService


@pytest.fixture
def service(employees_repo):
    employees_repo.add(Employee(employee_id="E002", name="Ben Reyes", role="Stocker"))
    return EmployeeService(employees_repo, bounds=DeductionBounds(maximum=Decimal("1000.00")))


def _fields(**overrides):
    fields = dict(
        name="Ana Cruz",
        role="Supervisor",
        daily_rate="650",
        sss_deduction="310",
        philhealth_deduction="255.5",
        pagibig_deduction="200",
    )
    fields.update(overrides)
    return fields


def test_update_compensation_rounds_to_centavos(service):
    emp = service.update_compensation("E001", **_fields())

    assert emp.role == "Supervisor"
    assert emp.daily_rate == Decimal("650.00")
    assert emp.philhealth_deduction == Decimal("255.50")


def test_update_compensation_validation(service):
    with pytest.raises(ValidationError) as exc:
        service.update_compensation("E001", **_fields(daily_rate="-1"))
    assert exc.value.field == "daily_rate"

    with pytest.raises(ValidationError) as exc:
        service.update_compensation("E001", **_fields(sss_deduction="1000.01"))
    assert exc.value.field == "sss_deduction"

    with pytest.raises(ValidationError):
        service.update_compensation("E001", **_fields(name=""))

    with pytest.raises(ValidationError):
        service.update_compensation("E001", **_fields(pagibig_deduction="abc"))

    with pytest.raises(NotFoundError):
        service.update_compensation("E404", **_fields())


def test_bulk_update_deductions(service, employees_repo):
    updated = service.bulk_update_deductions(
        ["E001", "E002"], sss_deduction="100", philhealth_deduction="50", pagibig_deduction="25"
    )

    assert updated == 2
    assert employees_repo.get_employee("E002").sss_deduction == Decimal("100.00")

    with pytest.raises(ValidationError):
        service.bulk_update_deductions([], sss_deduction="1", philhealth_deduction="1", pagibig_deduction="1")


def test_archive_and_restore(service):
    service.archive("E001")

    assert [e.employee_id for e in service.list_active()] == ["E002"]
    assert service.list_archived()[0].salary == Decimal("510.00")
    assert service.list_archived()[0].archived_at.date().isoformat() == "2025-03-12"

    with pytest.raises(StateConflictError):
        service.archive("E001")

    service.restore("E001")
    assert service.list_archived() == []
    assert not service.get("E001").is_archived

    with pytest.raises(StateConflictError):
        service.restore("E001")

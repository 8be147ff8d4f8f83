"""Example: preview a payslip through the service layer (no Flask).

Usage: python examples/example_usage.py EMPLOYEE_ID [weekly|monthly] [offset]
"""

import importlib
import sys

from config import get_settings_module

from src.payroll_system.payroll_system.common.datetime_utils import now_local
from src.payroll_system.payroll_system.common.money import format_currency
from src.payroll_system.payroll_system.container import build_container
from src.payroll_system.payroll_system.core.enums import PeriodType
from src.payroll_system.payroll_system.payroll.periods import resolve_period


def main(argv):
    if not argv:
        print(__doc__)
        return 2

    employee_id = argv[0]
    period_type = PeriodType(argv[1]) if len(argv) > 1 else PeriodType.WEEKLY
    offset = int(argv[2]) if len(argv) > 2 else 0

    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, payroll=getattr(settings, "PAYROLL", {}))

    period = resolve_period(period_type, now_local().date(), offset)
    preview = container.payroll_service.calculate(employee_id, period)
    b = preview.breakdown

    print(f"{preview.employee_name} ({preview.employee_id}) {period.label}")
    print(f"  payable days : {preview.summary.payable_days} / {preview.summary.max_days}")
    print(f"  gross pay    : {format_currency(b.gross_pay)}")
    print(f"  deductions   : {format_currency(b.total_deductions)} (late {b.late_minutes} min)")
    print(f"  net pay      : {format_currency(b.net_pay)}")
    if preview.warnings:
        print("  warnings     : " + ", ".join(w.value for w in preview.warnings))
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))

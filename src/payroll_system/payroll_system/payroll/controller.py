from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import now_local, parse_iso_date
from ..common.http import admin_required, current_user_id, date_arg, employee_required, json_body, to_json
from ..container import Container
from ..core.enums import PayslipStatus, PeriodType
from ..core.exceptions import ValidationError
from .model import PayrollPreview
from .periods import PayPeriod, period_for_start, resolve_period


def _period_json(period: PayPeriod) -> dict:
    return {
        "period_type": period.period_type.value,
        "start": period.start.isoformat(),
        "end": period.end.isoformat(),
        "label": period.label,
    }


def _preview_json(preview: PayrollPreview) -> dict:
    return {
        "employee_id": preview.employee_id,
        "employee_name": preview.employee_name,
        "period": _period_json(preview.period),
        "summary": to_json(preview.summary),
        "breakdown": to_json(preview.breakdown),
        "existing": to_json(preview.existing),
        "warnings": [w.value for w in preview.warnings],
        "locked": preview.locked,
    }


def register(app: Flask, container: Container) -> None:
    svc = container.payroll_service

    def _period_type(value) -> PeriodType:
        try:
            return PeriodType(value or container.default_period_type.value)
        except ValueError:
            raise ValidationError("period_type must be weekly or monthly", field="period_type")

    def _period_from(data: dict) -> PayPeriod:
        period_type = _period_type(data.get("period_type"))
        if data.get("period_start"):
            return period_for_start(period_type, date_arg(data, "period_start"))
        try:
            offset = int(data.get("offset") or 0)
        except (TypeError, ValueError):
            raise ValidationError("offset must be a whole number", field="offset")
        return resolve_period(period_type, now_local().date(), offset)

    def _late_minutes(data: dict):
        value = data.get("late_minutes")
        if value is None or str(value).strip() == "":
            return None
        return value

    def _employee_id(data: dict) -> str:
        employee_id = str(data.get("employee_id") or "").strip()
        if not employee_id:
            raise ValidationError("Select an employee", field="employee_id")
        return employee_id

    @app.route("/api/payroll/periods", methods=["GET"], endpoint="payroll_periods")
    @admin_required
    def payroll_periods():
        periods = svc.periods(_period_type(request.args.get("type")))
        return jsonify([_period_json(p) for p in periods])

    @app.route("/api/payroll/calculate", methods=["POST"], endpoint="payroll_calculate")
    @admin_required
    def payroll_calculate():
        data = json_body()
        preview = svc.calculate(_employee_id(data), _period_from(data), late_minutes=_late_minutes(data))
        return jsonify(_preview_json(preview))

    @app.route("/api/payroll/confirm", methods=["POST"], endpoint="payroll_confirm")
    @admin_required
    def payroll_confirm():
        data = json_body()
        payslip = svc.confirm(
            _employee_id(data),
            _period_from(data),
            late_minutes=_late_minutes(data),
            acknowledge_zero=bool(data.get("acknowledge_zero")),
        )
        container.change_feed.publish("payslips", "upsert", payslip.payslip_id)
        return jsonify(to_json(payslip)), 201

    @app.route("/api/payslips", methods=["GET"], endpoint="payslips_list")
    @admin_required
    def payslips_list():
        status = request.args.get("status")
        period_start = request.args.get("period_start")
        try:
            status_filter = PayslipStatus(status) if status else None
        except ValueError:
            raise ValidationError("Unknown payslip status", field="status")
        slips = svc.list_payslips(
            employee_id=request.args.get("employee_id") or None,
            status=status_filter,
            period_start=parse_iso_date(period_start, "period_start") if period_start else None,
        )
        return jsonify(to_json(slips))

    @app.route("/api/payslips/<int:payslip_id>", methods=["GET"], endpoint="payslip_detail")
    @admin_required
    def payslip_detail(payslip_id: int):
        return jsonify(to_json(svc.get_payslip(payslip_id)))

    @app.route("/api/payslips/<int:payslip_id>/approve", methods=["POST"], endpoint="payslip_approve")
    @admin_required
    def payslip_approve(payslip_id: int):
        payslip = svc.approve(payslip_id)
        container.change_feed.publish("payslips", "approve", payslip_id)
        return jsonify(to_json(payslip))

    @app.route("/api/payslips/<int:payslip_id>/reject", methods=["POST"], endpoint="payslip_reject")
    @admin_required
    def payslip_reject(payslip_id: int):
        payslip = svc.reject(payslip_id)
        container.change_feed.publish("payslips", "reject", payslip_id)
        return jsonify(to_json(payslip))

    @app.route("/api/me/payslips", methods=["GET"], endpoint="my_payslips")
    @employee_required
    def my_payslips():
        today = now_local().date()
        slips = svc.employee_payslips(
            current_user_id(),
            year=request.args.get("year") or today.year,
            month=request.args.get("month") or today.month,
        )
        return jsonify(to_json(slips))

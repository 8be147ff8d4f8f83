from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import (
    admin_required,
    current_role,
    current_user_id,
    date_arg,
    json_body,
    login_required,
    to_json,
)
from ..container import Container
from ..core.enums import LeaveStatus, Role
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    svc = container.leave_service

    @app.route("/api/leaves", methods=["POST"], endpoint="leave_submit")
    @login_required
    def leave_submit():
        data = json_body()
        leave_id = svc.submit(
            current_role=current_role(),
            employee_id=current_user_id(),
            leave_type=str(data.get("leave_type") or ""),
            start_date=date_arg(data, "start_date"),
            end_date=date_arg(data, "end_date"),
            reason=str(data.get("reason") or ""),
        )
        container.change_feed.publish("leave_requests", "create", leave_id)
        return jsonify({"leave_id": leave_id, "status": LeaveStatus.PENDING.value}), 201

    @app.route("/api/leaves/<int:leave_id>/cancel", methods=["POST"], endpoint="leave_cancel")
    @login_required
    def leave_cancel(leave_id: int):
        svc.cancel(current_role=current_role(), employee_id=current_user_id(), leave_id=leave_id)
        container.change_feed.publish("leave_requests", "cancel", leave_id)
        return jsonify({"leave_id": leave_id, "status": LeaveStatus.CANCELLED.value})

    @app.route("/api/leaves", methods=["GET"], endpoint="leave_list")
    @login_required
    def leave_list():
        status = request.args.get("status")
        try:
            status_filter = LeaveStatus(status) if status else None
        except ValueError:
            raise ValidationError("Unknown leave status", field="status")

        # Employees only ever see their own requests.
        if current_role() == Role.ADMIN:
            employee_id = request.args.get("employee_id") or None
        else:
            employee_id = current_user_id()
        return jsonify(to_json(svc.list_requests(employee_id=employee_id, status=status_filter)))

    @app.route("/api/leaves/<int:leave_id>/approve", methods=["POST"], endpoint="leave_approve")
    @admin_required
    def leave_approve(leave_id: int):
        svc.approve(current_role=current_role(), leave_id=leave_id)
        container.change_feed.publish("leave_requests", "approve", leave_id)
        return jsonify({"leave_id": leave_id, "status": LeaveStatus.APPROVED.value})

    @app.route("/api/leaves/<int:leave_id>/reject", methods=["POST"], endpoint="leave_reject")
    @admin_required
    def leave_reject(leave_id: int):
        data = json_body()
        svc.reject(current_role=current_role(), leave_id=leave_id, admin_comment=str(data.get("admin_comment") or ""))
        container.change_feed.publish("leave_requests", "reject", leave_id)
        return jsonify({"leave_id": leave_id, "status": LeaveStatus.REJECTED.value})

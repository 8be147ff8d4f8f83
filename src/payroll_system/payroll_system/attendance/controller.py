from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import admin_required, current_user_id, date_arg, employee_required, to_json
from ..container import Container


def register(app: Flask, container: Container) -> None:
    svc = container.attendance_service

    @app.route("/api/attendance/time-in", methods=["POST"], endpoint="attendance_time_in")
    @employee_required
    def attendance_time_in():
        record = svc.time_in(current_user_id())
        container.change_feed.publish("attendance", "time_in", record.attendance_id)
        return jsonify(to_json(record))

    @app.route("/api/attendance/time-out", methods=["POST"], endpoint="attendance_time_out")
    @employee_required
    def attendance_time_out():
        record = svc.time_out(current_user_id())
        container.change_feed.publish("attendance", "time_out", record.attendance_id)
        return jsonify(to_json(record))

    @app.route("/api/attendance/cancel", methods=["POST"], endpoint="attendance_cancel")
    @employee_required
    def attendance_cancel():
        employee_id = current_user_id()
        svc.cancel_time_in(employee_id)
        container.change_feed.publish("attendance", "cancel", employee_id)
        return jsonify({"cancelled": True})

    @app.route("/api/attendance/me", methods=["GET"], endpoint="attendance_me")
    @employee_required
    def attendance_me():
        employee_id = current_user_id()
        return jsonify(
            {
                "today": to_json(svc.today(employee_id)),
                "history": to_json(svc.history(employee_id)),
            }
        )

    @app.route("/api/attendance", methods=["GET"], endpoint="attendance_list")
    @admin_required
    def attendance_list():
        args = request.args
        records = svc.list_range(
            start=date_arg(args, "start"),
            end=date_arg(args, "end"),
            employee_id=args.get("employee_id") or None,
        )
        return jsonify(to_json(records))

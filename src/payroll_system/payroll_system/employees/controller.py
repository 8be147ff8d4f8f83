from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import admin_required, json_body, to_json
from ..container import Container


def _employee_json(emp) -> dict:
    data = to_json(emp)
    data["is_archived"] = emp.is_archived
    return data


def register(app: Flask, container: Container) -> None:
    svc = container.employee_service

    @app.route("/api/employees", methods=["GET"], endpoint="employees_list")
    @admin_required
    def employees_list():
        return jsonify([_employee_json(e) for e in svc.list_active()])

    @app.route("/api/employees/archived", methods=["GET"], endpoint="employees_archived")
    @admin_required
    def employees_archived():
        return jsonify(to_json(svc.list_archived()))

    @app.route("/api/employees/<employee_id>", methods=["PUT"], endpoint="employee_update")
    @admin_required
    def employee_update(employee_id: str):
        data = json_body()
        current = svc.get(employee_id)
        emp = svc.update_compensation(
            employee_id,
            name=data.get("name", current.name),
            role=data.get("role", current.role),
            daily_rate=data.get("daily_rate", current.daily_rate),
            sss_deduction=data.get("sss_deduction", current.sss_deduction),
            philhealth_deduction=data.get("philhealth_deduction", current.philhealth_deduction),
            pagibig_deduction=data.get("pagibig_deduction", current.pagibig_deduction),
        )
        container.change_feed.publish("employees", "update", emp.employee_id)
        return jsonify(_employee_json(emp))

    @app.route("/api/employees/bulk-deductions", methods=["POST"], endpoint="employees_bulk_deductions")
    @admin_required
    def employees_bulk_deductions():
        data = json_body()
        ids = data.get("employee_ids") or []
        if not isinstance(ids, list):
            ids = [ids]
        updated = svc.bulk_update_deductions(
            ids,
            sss_deduction=data.get("sss_deduction"),
            philhealth_deduction=data.get("philhealth_deduction"),
            pagibig_deduction=data.get("pagibig_deduction"),
        )
        container.change_feed.publish("employees", "bulk_update", ",".join(str(i) for i in ids))
        return jsonify({"updated": updated})

    @app.route("/api/employees/<employee_id>/archive", methods=["POST"], endpoint="employee_archive")
    @admin_required
    def employee_archive(employee_id: str):
        svc.archive(employee_id)
        container.change_feed.publish("employees", "archive", employee_id)
        return jsonify({"employee_id": employee_id, "status": "archived"})

    @app.route("/api/employees/<employee_id>/restore", methods=["POST"], endpoint="employee_restore")
    @admin_required
    def employee_restore(employee_id: str):
        svc.restore(employee_id)
        container.change_feed.publish("employees", "restore", employee_id)
        return jsonify({"employee_id": employee_id, "status": "active"})

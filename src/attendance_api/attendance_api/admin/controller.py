from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import json_body, query_date
from ..container import Container
from ..users.guards import current_user


def register(app: Flask, container: Container) -> None:
    admin_required = container.guards.admin_required

    @app.route("/api/admin/employees", methods=["GET"], endpoint="admin_employees")
    @admin_required
    def employees():
        return jsonify([u.to_public_dict() for u in container.user_service.list_employees()])

    @app.route("/api/admin/attendance/<int:user_id>", methods=["GET"], endpoint="admin_employee_attendance")
    @admin_required
    def employee_attendance(user_id: int):
        records = container.attendance_service.get_my_attendance(
            user_id,
            start=query_date("startDate"),
            end=query_date("endDate"),
        )
        return jsonify([r.to_dict() for r in records])

    @app.route("/api/admin/summary", methods=["GET"], endpoint="admin_summary")
    @admin_required
    def summary():
        return jsonify(
            {
                "totalEmployees": container.user_service.count_employees(),
                "presentToday": container.attendance_service.count_present_today(),
                "pendingLeaves": container.leave_service.count_pending(),
            }
        )

    @app.route("/api/admin/leaves", methods=["GET"], endpoint="admin_leaves")
    @admin_required
    def leaves():
        rows = container.leave_service.list_all(current_user(), status=request.args.get("status"))
        return jsonify([lv.to_dict() for lv in rows])

    @app.route("/api/admin/leaves/<int:leave_id>", methods=["PUT"], endpoint="admin_decide_leave")
    @admin_required
    def decide_leave(leave_id: int):
        body = json_body()
        leave = container.leave_service.decide(
            current_user(),
            leave_id,
            status=body.get("status"),
            comments=body.get("comments"),
        )
        return jsonify(leave.to_dict())

from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import json_body, optional_int, query_date, query_int
from ..users.guards import current_user
from ..container import Container


def register(app: Flask, container: Container) -> None:
    guards = container.guards
    service = container.attendance_service

    @app.route("/api/attendance/checkin", methods=["POST"], endpoint="attendance_checkin")
    @guards.login_required
    def checkin():
        body = json_body()
        record = service.check_in(current_user().user_id, notes=body.get("notes"))
        return jsonify({"message": "Checked in successfully", "attendance": record.to_dict()}), 201

    @app.route("/api/attendance/checkout", methods=["PUT"], endpoint="attendance_checkout")
    @guards.login_required
    def checkout():
        body = json_body()
        record = service.check_out(
            current_user().user_id,
            notes=body.get("notes"),
            attendance_id=optional_int(body.get("attendanceId"), "attendanceId"),
        )
        return jsonify({"message": "Checked out successfully", "attendance": record.to_dict()})

    @app.route("/api/attendance/today", methods=["GET"], endpoint="attendance_today")
    @guards.login_required
    def today():
        return jsonify(service.get_todays_attendance(current_user().user_id).to_dict())

    @app.route("/api/attendance/me", methods=["GET"], endpoint="attendance_me")
    @guards.login_required
    def my_attendance():
        records = service.get_my_attendance(
            current_user().user_id,
            start=query_date("start"),
            end=query_date("end"),
        )
        return jsonify([r.to_dict() for r in records])

    @app.route("/api/attendance", methods=["GET"], endpoint="attendance_all")
    @guards.admin_required
    def all_attendance():
        rows = service.get_all_attendance(
            start=query_date("start"),
            end=query_date("end"),
            user_id=query_int("userId"),
            status=request.args.get("status"),
        )
        return jsonify([r.to_dict() for r in rows])

    @app.route("/api/attendance/<int:attendance_id>", methods=["PUT"], endpoint="attendance_update")
    @guards.admin_required
    def update_attendance(attendance_id: int):
        record = service.update_attendance(attendance_id, json_body())
        return jsonify(record.to_dict())

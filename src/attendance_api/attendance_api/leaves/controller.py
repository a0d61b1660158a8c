from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import json_body
from ..container import Container
from ..users.guards import current_user


def register(app: Flask, container: Container) -> None:
    guards = container.guards
    service = container.leave_service

    @app.route("/api/leaves", methods=["POST"], endpoint="leaves_create")
    @guards.login_required
    def create_leave():
        body = json_body()
        leave = service.create(
            current_user(),
            leave_type=body.get("leaveType"),
            start_date=body.get("startDate"),
            end_date=body.get("endDate"),
            reason=body.get("reason"),
        )
        return jsonify(leave.to_dict()), 201

    @app.route("/api/leaves/me", methods=["GET"], endpoint="leaves_me")
    @guards.login_required
    def my_leaves():
        return jsonify([lv.to_dict() for lv in service.list_mine(current_user())])

    @app.route("/api/leaves/employee/<int:user_id>", methods=["GET"], endpoint="leaves_for_employee")
    @guards.login_required
    def employee_leaves(user_id: int):
        return jsonify([lv.to_dict() for lv in service.list_for_user(current_user(), user_id)])

    @app.route("/api/leaves/<int:leave_id>", methods=["PUT"], endpoint="leaves_update")
    @guards.login_required
    def update_leave(leave_id: int):
        leave = service.update(current_user(), leave_id, json_body())
        return jsonify(leave.to_dict())

    @app.route("/api/leaves/<int:leave_id>", methods=["DELETE"], endpoint="leaves_delete")
    @guards.login_required
    def delete_leave(leave_id: int):
        service.delete(current_user(), leave_id)
        return jsonify({"message": "Leave request removed"})

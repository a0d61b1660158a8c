from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import json_body
from ..container import Container
from .guards import current_user


def register(app: Flask, container: Container) -> None:
    auth = container.auth_service

    @app.route("/api/auth/register", methods=["POST"], endpoint="auth_register")
    def register_account():
        body = json_body()
        result = auth.register(
            name=body.get("name"),
            email=body.get("email"),
            password=body.get("password"),
            employee_id=body.get("employeeId"),
            department=body.get("department"),
            position=body.get("position"),
        )
        return jsonify({"token": result.token, "user": result.user.to_public_dict()}), 201

    @app.route("/api/auth/login", methods=["POST"], endpoint="auth_login")
    def login():
        body = json_body()
        result = auth.authenticate(body.get("email"), body.get("password"))
        return jsonify({"token": result.token, "user": result.user.to_public_dict()})

    @app.route("/api/auth/me", methods=["GET"], endpoint="auth_me")
    @container.guards.login_required
    def me():
        return jsonify(current_user().to_public_dict())

from __future__ import annotations

from flask import Flask, jsonify

from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/health", methods=["GET"], endpoint="health")
    def health():
        db_up = container.health_check()
        if not db_up:
            app.logger.warning("health check: database unreachable")
        body = {"status": "ok" if db_up else "degraded", "database": "up" if db_up else "down"}
        return jsonify(body), 200 if db_up else 503

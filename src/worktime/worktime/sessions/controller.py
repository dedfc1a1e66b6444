from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..core.enums import Role
from ..core.exceptions import (
    AlreadyActiveError,
    AuthorizationError,
    NotActiveError,
    PersistenceError,
    ValidationError,
)
from ..container import Container

logger = logging.getLogger(__name__)


def current_role() -> Role:
    """Role asserted by the dispatcher; authorization itself happens upstream."""
    return Role.ADMIN if request.headers.get("X-Role", "").lower() == Role.ADMIN.value else Role.MEMBER


def register(app: Flask, container: Container) -> None:
    def _payload() -> dict:
        return request.get_json(silent=True) or {}

    @app.route("/api/clock-in", methods=["POST"], endpoint="clock_in")
    def clock_in():
        data = _payload()
        try:
            start = container.session_service.clock_in(
                str(data.get("actor_id", "")),
                str(data.get("tenant_id", "")),
                display_name=data.get("display_name"),
            )
        except AlreadyActiveError as e:
            return jsonify({"success": False, "error": "already_active", "message": str(e)}), 409
        except ValidationError as e:
            return jsonify({"success": False, "error": "invalid", "message": str(e)}), 400
        except Exception:
            logger.exception("Clock-in failed")
            return jsonify({"success": False, "error": "internal", "message": "System error while clocking in"}), 500

        return jsonify({
            "success": True,
            "start_time": start.isoformat(),
            "message": f"Work session started at {start.strftime('%H:%M:%S')}!",
        }), 200

    @app.route("/api/clock-out", methods=["POST"], endpoint="clock_out")
    def clock_out():
        data = _payload()
        try:
            result = container.session_service.clock_out(
                str(data.get("actor_id", "")),
                str(data.get("tenant_id", "")),
                display_name=data.get("display_name"),
            )
        except NotActiveError as e:
            return jsonify({"success": False, "error": "not_active", "message": str(e)}), 409
        except ValidationError as e:
            return jsonify({"success": False, "error": "invalid", "message": str(e)}), 400
        except PersistenceError:
            return jsonify({
                "success": False,
                "error": "persistence",
                "message": "Your session could not be saved.",
            }), 500
        except Exception:
            logger.exception("Clock-out failed")
            return jsonify({"success": False, "error": "internal", "message": "System error while clocking out"}), 500

        s = result.session
        return jsonify({
            "success": True,
            "session": {
                "actor_id": s.actor_id,
                "tenant_id": s.tenant_id,
                "start_time": s.start_time.isoformat(),
                "end_time": s.end_time.isoformat(),
                "duration_hours": s.duration_hours,
            },
            "duration": result.formatted_duration,
            "total": result.formatted_total,
            "summary": result.summary.to_payload(),
        }), 200

    @app.route("/api/status", methods=["GET"], endpoint="status")
    def status():
        try:
            rows = container.session_service.status(current_role=current_role())
        except AuthorizationError as e:
            return jsonify({"success": False, "error": "forbidden", "message": str(e)}), 403

        if not rows:
            return jsonify({"success": True, "active": [], "message": "No members are currently clocked in."}), 200

        return jsonify({
            "success": True,
            "active": [
                {
                    "actor_id": r.actor_id,
                    "display_name": r.display_name,
                    "since": r.since.isoformat(),
                    "elapsed": r.elapsed,
                }
                for r in rows
            ],
        }), 200

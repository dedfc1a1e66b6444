from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.validators import require_non_empty
from ..core.exceptions import LookupFailedError, PersistenceError, ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/members/<actor_id>", methods=["PUT"], endpoint="upsert_member")
    def upsert_member(actor_id: str):
        data = request.get_json(silent=True) or {}
        try:
            name = require_non_empty(data.get("display_name"), "display_name")
            container.members_repo.upsert(actor_id, name)
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except PersistenceError:
            return jsonify({"success": False, "message": "Could not save the member."}), 500
        return jsonify({"success": True, "actor_id": actor_id, "display_name": name}), 200

    @app.route("/api/members/<actor_id>", methods=["GET"], endpoint="get_member")
    def get_member(actor_id: str):
        try:
            name = container.members_repo.display_name(actor_id)
        except LookupFailedError as e:
            return jsonify({"success": False, "message": str(e)}), 404
        return jsonify({"success": True, "actor_id": actor_id, "display_name": name}), 200

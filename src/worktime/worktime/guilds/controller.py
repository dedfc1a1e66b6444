from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..core.enums import ConfigField
from ..core.exceptions import AuthorizationError, PersistenceError, ValidationError
from ..container import Container
from ..sessions.controller import current_role

logger = logging.getLogger(__name__)

_FIELD_LABELS = {
    ConfigField.LOG: "Log channel",
    ConfigField.ADMIN_LOG: "Admin log channel",
    ConfigField.WEEKLY_SUMMARY: "Weekly summary channel",
}


def register(app: Flask, container: Container) -> None:
    @app.route("/api/guilds/<tenant_id>/config", methods=["GET"], endpoint="guild_config")
    def guild_config(tenant_id: str):
        try:
            config = container.guild_config_service.get(tenant_id)
        except PersistenceError:
            logger.exception("Could not load configuration for %s", tenant_id)
            return jsonify({"success": False, "message": "Could not load the configuration."}), 500
        return jsonify({"success": True, "config": config.to_dict()}), 200

    @app.route("/api/guilds/<tenant_id>/channels/<slug>", methods=["PUT"], endpoint="set_guild_channel")
    def set_guild_channel(tenant_id: str, slug: str):
        try:
            field = ConfigField.from_slug(slug)
        except ValueError as e:
            return jsonify({"success": False, "message": str(e)}), 404

        data = request.get_json(silent=True) or {}
        try:
            config = container.guild_config_service.set_channel(
                current_role=current_role(),
                tenant_id=tenant_id,
                field=field,
                channel_id=str(data.get("channel_id", "")),
            )
        except AuthorizationError as e:
            return jsonify({"success": False, "message": str(e)}), 403
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except PersistenceError:
            logger.exception("Error saving configuration for %s", tenant_id)
            return jsonify({"success": False, "message": "An error occurred while saving the configuration."}), 500

        channel_id = config.channel_for(field)
        return jsonify({
            "success": True,
            "config": config.to_dict(),
            "message": f"{_FIELD_LABELS[field]} set: <#{channel_id}>",
        }), 200

    @app.route("/api/guilds/<tenant_id>/panel", methods=["POST"], endpoint="post_panel")
    def post_panel(tenant_id: str):
        data = request.get_json(silent=True) or {}
        channel_id = str(data.get("channel_id", "")).strip()
        if not channel_id:
            return jsonify({"success": False, "message": "channel_id is required"}), 400
        try:
            posted = container.session_service.post_panel(tenant_id, channel_id)
        except PersistenceError:
            logger.exception("Could not post panel for %s", tenant_id)
            return jsonify({"success": False, "message": "Could not post the panel."}), 500
        if not posted:
            return jsonify({"success": False, "message": "Unknown channel for this server."}), 404
        return jsonify({"success": True}), 200

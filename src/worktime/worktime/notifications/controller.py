from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/channels/<channel_id>/notices", methods=["GET"], endpoint="channel_notices")
    def channel_notices(channel_id: str):
        after = request.args.get("after", default=0, type=int)
        limit = min(request.args.get("limit", default=50, type=int), 200)
        items = container.notifier.list_for_channel(channel_id, after=after, limit=limit)
        return jsonify({"success": True, "notices": [n.to_dict() for n in items]}), 200

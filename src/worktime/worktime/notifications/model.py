from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional


@dataclass(frozen=True)
class NoticeField:
    name: str
    value: str
    inline: bool = True


@dataclass(frozen=True)
class Notice:
    """Structured message handed to the chat adapter for rendering.

    Note: carries no platform-specific markup beyond bold markers in the
    description; the adapter decides how to draw it.
    """

    title: Optional[str] = None
    description: Optional[str] = None
    color: Optional[int] = None
    footer: Optional[str] = None
    timestamp: Optional[datetime] = None
    fields: tuple[NoticeField, ...] = field(default_factory=tuple)

    def to_payload(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "description": self.description,
            "color": self.color,
            "footer": self.footer,
            "timestamp": self.timestamp.isoformat() if self.timestamp else None,
            "fields": [{"name": f.name, "value": f.value, "inline": f.inline} for f in self.fields],
        }

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "Notice":
        ts = payload.get("timestamp")
        return cls(
            title=payload.get("title"),
            description=payload.get("description"),
            color=payload.get("color"),
            footer=payload.get("footer"),
            timestamp=datetime.fromisoformat(ts) if ts else None,
            fields=tuple(
                NoticeField(name=f["name"], value=f["value"], inline=bool(f.get("inline", True)))
                for f in payload.get("fields") or []
            ),
        )


@dataclass(frozen=True)
class StoredNotice:
    """Read-model: one outbox row as delivered to the adapter."""

    notice_id: int
    tenant_id: str
    channel_id: str
    notice: Notice
    created_at: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "notice_id": self.notice_id,
            "tenant_id": self.tenant_id,
            "channel_id": self.channel_id,
            "created_at": self.created_at.isoformat(),
            **self.notice.to_payload(),
        }

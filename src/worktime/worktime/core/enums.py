from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Caller role asserted by the dispatcher; used to gate admin commands."""

    ADMIN = "admin"
    MEMBER = "member"


class ConfigField(str, Enum):
    """Per-tenant channel slots; value is the column name in guild_configs."""

    LOG = "log_channel_id"
    ADMIN_LOG = "admin_log_channel_id"
    WEEKLY_SUMMARY = "weekly_summary_channel_id"

    @classmethod
    def from_slug(cls, slug: str) -> "ConfigField":
        mapping = {
            "log": cls.LOG,
            "admin-log": cls.ADMIN_LOG,
            "weekly-summary": cls.WEEKLY_SUMMARY,
        }
        try:
            return mapping[slug]
        except KeyError:
            raise ValueError(f"Unknown channel field: {slug!r}") from None

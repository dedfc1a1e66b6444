from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

from ..core.enums import ConfigField


@dataclass(frozen=True)
class GuildConfig:
    """Domain entity: per-tenant channel configuration (one row per tenant)."""

    tenant_id: str
    log_channel_id: Optional[str] = None
    admin_log_channel_id: Optional[str] = None
    weekly_summary_channel_id: Optional[str] = None

    def channel_for(self, field: ConfigField) -> Optional[str]:
        return getattr(self, field.value)

    def with_field(self, field: ConfigField, value: Optional[str]) -> "GuildConfig":
        return replace(self, **{field.value: value})

    def to_dict(self) -> dict:
        return {
            "tenant_id": self.tenant_id,
            "log_channel_id": self.log_channel_id,
            "admin_log_channel_id": self.admin_log_channel_id,
            "weekly_summary_channel_id": self.weekly_summary_channel_id,
        }

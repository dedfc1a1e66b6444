from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import ConfigField
from .model import GuildConfig


class GuildConfigStore(Protocol):
    """Repository interface for per-tenant configuration.

    Note: get-or-create and field-level upsert must behave the same whatever
    storage sits behind it.
    """

    def get_or_create(self, tenant_id: str) -> GuildConfig:
        raise NotImplementedError

    def set_field(self, tenant_id: str, field: ConfigField, value: Optional[str]) -> None:
        raise NotImplementedError

    def list_with_summary_channel(self) -> Sequence[GuildConfig]:
        raise NotImplementedError

from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import ConfigField
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import GuildConfig
from .repository import GuildConfigStore


def _to_config(r: dict) -> GuildConfig:
    return GuildConfig(
        tenant_id=r["tenant_id"],
        log_channel_id=r.get("log_channel_id"),
        admin_log_channel_id=r.get("admin_log_channel_id"),
        weekly_summary_channel_id=r.get("weekly_summary_channel_id"),
    )


class MySQLGuildConfigRepository(GuildConfigStore):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_or_create(self, tenant_id: str) -> GuildConfig:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT IGNORE INTO guild_configs(tenant_id) VALUES(%s)",
                (tenant_id,),
            )
            cur.execute(
                """
                SELECT tenant_id, log_channel_id, admin_log_channel_id, weekly_summary_channel_id
                FROM guild_configs
                WHERE tenant_id=%s
                """,
                (tenant_id,),
            )
            row = fetchone(cur)
            return _to_config(row) if row else GuildConfig(tenant_id=tenant_id)

    def set_field(self, tenant_id: str, field: ConfigField, value: Optional[str]) -> None:
        column = field.value
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                INSERT INTO guild_configs(tenant_id, {column})
                VALUES(%s,%s)
                ON DUPLICATE KEY UPDATE {column}=VALUES({column})
                """,
                (tenant_id, value),
            )

    def list_with_summary_channel(self) -> Sequence[GuildConfig]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT tenant_id, log_channel_id, admin_log_channel_id, weekly_summary_channel_id
                FROM guild_configs
                WHERE weekly_summary_channel_id IS NOT NULL
                """
            )
            return [_to_config(r) for r in fetchall(cur)]

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from .common.datetime_utils import now_local
from .database.connection import DBConfig, DatabaseConnection
from .guilds.mysql_guild_config_repository import MySQLGuildConfigRepository
from .guilds.repository import GuildConfigStore
from .guilds.service import GuildConfigService
from .members.mysql_member_repository import MySQLMemberRepository
from .members.repository import MemberDirectory
from .notifications.gateway import NotificationGateway
from .notifications.mysql_outbox import MySQLNoticeOutbox
from .rollup.scheduler import WeeklyRollupScheduler
from .sessions.mysql_session_repository import MySQLSessionRepository
from .sessions.registry import ActiveSessionRegistry
from .sessions.repository import SessionStore
from .sessions.service import WorkSessionService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    sessions_repo: SessionStore
    guild_configs_repo: GuildConfigStore
    members_repo: MemberDirectory
    notifier: NotificationGateway

    registry: ActiveSessionRegistry
    session_service: WorkSessionService
    guild_config_service: GuildConfigService
    rollup: WeeklyRollupScheduler


def assemble(
    *,
    sessions_repo: SessionStore,
    guild_configs_repo: GuildConfigStore,
    members_repo: MemberDirectory,
    notifier: NotificationGateway,
    conn: Optional[DatabaseConnection] = None,
    registry: Optional[ActiveSessionRegistry] = None,
    rollup_options: Optional[dict] = None,
    clock: Callable[[], datetime] = now_local,
) -> Container:
    """Wire services over the given stores (MySQL in production, fakes in tests)."""
    registry = registry or ActiveSessionRegistry(clock=clock)
    session_service = WorkSessionService(
        registry, sessions_repo, guild_configs_repo, members_repo, notifier, clock=clock
    )
    guild_config_service = GuildConfigService(guild_configs_repo, notifier)
    options = {"clock": clock, **(rollup_options or {})}
    rollup = WeeklyRollupScheduler(guild_configs_repo, sessions_repo, members_repo, notifier, **options)

    return Container(
        conn=conn,
        sessions_repo=sessions_repo,
        guild_configs_repo=guild_configs_repo,
        members_repo=members_repo,
        notifier=notifier,
        registry=registry,
        session_service=session_service,
        guild_config_service=guild_config_service,
        rollup=rollup,
    )


def build_container(*, db_config: dict, rollup_options: Optional[dict] = None) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return assemble(
        conn=conn,
        sessions_repo=MySQLSessionRepository(conn),
        guild_configs_repo=MySQLGuildConfigRepository(conn),
        members_repo=MySQLMemberRepository(conn),
        notifier=MySQLNoticeOutbox(conn),
        rollup_options=rollup_options,
    )

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from ..common.datetime_utils import format_hours, now_local
from ..common.validators import require_non_empty
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, DomainError, PersistenceError
from ..guilds.model import GuildConfig
from ..guilds.repository import GuildConfigStore
from ..members.repository import MemberDirectory
from ..notifications import notices
from ..notifications.gateway import NotificationGateway
from ..notifications.model import Notice
from .model import ActiveStatusRow, WorkSession
from .registry import ActiveSessionRegistry
from .repository import SessionStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClockOutResult:
    session: WorkSession
    total_hours: Optional[float]
    summary: Notice

    @property
    def formatted_duration(self) -> str:
        return format_hours(self.session.duration_hours)

    @property
    def formatted_total(self) -> Optional[str]:
        return format_hours(self.total_hours) if self.total_hours is not None else None


class WorkSessionService:
    """Use cases behind the clock-in / clock-out / status commands."""

    def __init__(
        self,
        registry: ActiveSessionRegistry,
        sessions: SessionStore,
        configs: GuildConfigStore,
        members: MemberDirectory,
        notifier: NotificationGateway,
        *,
        clock: Callable[[], datetime] = now_local,
    ):
        self._registry = registry
        self._sessions = sessions
        self._configs = configs
        self._members = members
        self._notifier = notifier
        self._clock = clock

    def clock_in(self, actor_id: str, tenant_id: str, *, display_name: Optional[str] = None) -> datetime:
        actor_id = require_non_empty(actor_id, "actor_id")
        tenant_id = require_non_empty(tenant_id, "tenant_id")

        start = self._registry.clock_in(actor_id)

        name = self._remember_name(actor_id, display_name)
        config = self._config_for(tenant_id)
        self._send_admin_log(
            config,
            notices.session_started_notice(actor_id=actor_id, display_name=name, start=start),
        )
        return start

    def clock_out(self, actor_id: str, tenant_id: str, *, display_name: Optional[str] = None) -> ClockOutResult:
        actor_id = require_non_empty(actor_id, "actor_id")
        tenant_id = require_non_empty(tenant_id, "tenant_id")

        start, end = self._registry.clock_out(actor_id)
        session = WorkSession.closed(actor_id=actor_id, tenant_id=tenant_id, start_time=start, end_time=end)

        # The open entry is already gone; a failed write loses it for good.
        try:
            self._sessions.append(session)
        except PersistenceError:
            logger.exception("Failed to persist work session for %s in %s", actor_id, tenant_id)
            raise

        total: Optional[float]
        try:
            total = self._sessions.sum_duration_hours(actor_id, tenant_id)
        except PersistenceError:
            logger.exception("Failed to compute running total for %s in %s", actor_id, tenant_id)
            total = None

        name = self._remember_name(actor_id, display_name)
        config = self._config_for(tenant_id)
        self._send_admin_log(
            config,
            notices.session_ended_notice(
                actor_id=actor_id,
                display_name=name,
                duration_hours=session.duration_hours,
                total_hours=total,
                end=end,
            ),
        )

        return ClockOutResult(
            session=session,
            total_hours=total,
            summary=notices.session_summary_notice(duration_hours=session.duration_hours, end=end),
        )

    def status(self, *, current_role: Role, now: Optional[datetime] = None) -> list[ActiveStatusRow]:
        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission to use this command.")

        now = now or self._clock()
        rows: list[ActiveStatusRow] = []
        for actor_id, since in self._registry.list_active():
            elapsed = round((now - since).total_seconds() / 3600.0, 2)
            rows.append(
                ActiveStatusRow(
                    actor_id=actor_id,
                    display_name=self._lookup_name(actor_id) or actor_id,
                    since=since,
                    elapsed=format_hours(elapsed),
                )
            )
        return rows

    def post_panel(self, tenant_id: str, channel_id: str) -> bool:
        """Send the work-control panel notice; False when the channel is unknown."""
        channel = self._notifier.resolve_channel(tenant_id, channel_id)
        if channel is None:
            return False
        channel.send(notices.panel_notice())
        return True

    def _remember_name(self, actor_id: str, display_name: Optional[str]) -> str:
        if display_name and display_name.strip():
            try:
                self._members.upsert(actor_id, display_name.strip())
            except PersistenceError:
                logger.warning("Could not store display name for %s", actor_id, exc_info=True)
            return display_name.strip()
        return self._lookup_name(actor_id) or actor_id

    def _lookup_name(self, actor_id: str) -> Optional[str]:
        try:
            return self._members.display_name(actor_id)
        except DomainError:
            return None

    def _config_for(self, tenant_id: str) -> GuildConfig:
        try:
            return self._configs.get_or_create(tenant_id)
        except PersistenceError:
            logger.exception("Error loading configuration for %s", tenant_id)
            return GuildConfig(tenant_id=tenant_id)

    def _send_admin_log(self, config: GuildConfig, notice: Notice) -> None:
        if not config.admin_log_channel_id:
            return
        try:
            channel = self._notifier.resolve_channel(config.tenant_id, config.admin_log_channel_id)
            if channel is None:
                logger.info("Admin log channel %s not found for %s", config.admin_log_channel_id, config.tenant_id)
                return
            channel.send(notice)
        except DomainError:
            logger.warning("Failed to send admin log notice for %s", config.tenant_id, exc_info=True)

from __future__ import annotations

import logging
from datetime import datetime, time, timedelta
from typing import Callable, Optional

from apscheduler.jobstores.base import JobLookupError
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.schedulers.base import BaseScheduler
from apscheduler.triggers.cron import CronTrigger
from apscheduler.triggers.date import DateTrigger
from apscheduler.util import astimezone

from ..common.datetime_utils import now_local
from ..core.constants import (
    DEFAULT_RESET_DELAY_SECONDS,
    DEFAULT_SUMMARY_DAY_OF_WEEK,
    DEFAULT_SUMMARY_HOUR,
    DEFAULT_SUMMARY_MINUTE,
)
from ..guilds.model import GuildConfig
from ..guilds.repository import GuildConfigStore
from ..members.repository import MemberDirectory
from ..notifications import notices
from ..notifications.gateway import NotificationGateway
from ..sessions.repository import SessionStore
from .summary import WeeklySummary, compute_summary

logger = logging.getLogger(__name__)

WEEKLY_JOB_ID = "weekly-rollup"
RESET_JOB_PREFIX = "weekly-reset:"


class WeeklyRollupScheduler:
    """Weekly summary-and-reset over every tenant with a summary channel.

    Two scheduled units: the recurring rollup (:meth:`run_once`) and, per
    tenant, a one-shot deferred reset (:meth:`reset_tenant`) keyed
    ``weekly-reset:<tenant_id>`` so it can be inspected or cancelled.

    The rollup reads the tenant's whole stored history. It only means "this
    week" because the previous firing's reset cleared everything; a missed
    reset is double-counted on the next firing.
    """

    def __init__(
        self,
        configs: GuildConfigStore,
        sessions: SessionStore,
        members: MemberDirectory,
        notifier: NotificationGateway,
        *,
        scheduler: Optional[BaseScheduler] = None,
        day_of_week: str = DEFAULT_SUMMARY_DAY_OF_WEEK,
        hour: int = DEFAULT_SUMMARY_HOUR,
        minute: int = DEFAULT_SUMMARY_MINUTE,
        reset_delay_seconds: int = DEFAULT_RESET_DELAY_SECONDS,
        timezone: Optional[str] = None,
        clock: Callable[[], datetime] = now_local,
    ):
        self._configs = configs
        self._sessions = sessions
        self._members = members
        self._notifier = notifier
        self._timezone = timezone
        self._tz = astimezone(timezone) if timezone else None
        self._scheduler = scheduler or (
            BackgroundScheduler(timezone=timezone) if timezone else BackgroundScheduler()
        )
        self._day_of_week = day_of_week
        self._fire_at = time(int(hour), int(minute))
        self._reset_delay = timedelta(seconds=int(reset_delay_seconds))
        self._clock = clock

    @property
    def scheduler(self) -> BaseScheduler:
        return self._scheduler

    def start(self) -> None:
        self._scheduler.add_job(
            self.run_once,
            CronTrigger(
                day_of_week=self._day_of_week,
                hour=self._fire_at.hour,
                minute=self._fire_at.minute,
                timezone=self._timezone,
            ),
            id=WEEKLY_JOB_ID,
            name="Weekly summary",
            replace_existing=True,
            max_instances=1,
            coalesce=True,
        )
        self._scheduler.start()
        logger.info(
            "Weekly summary scheduled: %s at %s (reset delay %ss)",
            self._day_of_week,
            self._fire_at.strftime("%H:%M"),
            int(self._reset_delay.total_seconds()),
        )

    def shutdown(self, *, wait: bool = False) -> None:
        if self._scheduler.running:
            self._scheduler.shutdown(wait=wait)

    def run_once(self, now: Optional[datetime] = None) -> list[WeeklySummary]:
        """One full pass over all candidate tenants; never raises."""
        now = self._in_zone(now or self._clock())
        logger.info("Running scheduled task: weekly summary")

        try:
            configs = list(self._configs.list_with_summary_channel())
        except Exception:
            logger.exception("Could not load tenants with a weekly summary channel")
            return []

        sent: list[WeeklySummary] = []
        for config in configs:
            try:
                summary = self._process_tenant(config, now)
            except Exception:
                logger.exception("Error processing tenant %s", config.tenant_id)
                continue
            if summary is not None:
                sent.append(summary)
        return sent

    def _process_tenant(self, config: GuildConfig, now: datetime) -> Optional[WeeklySummary]:
        channel_id = config.weekly_summary_channel_id
        if not channel_id:
            return None

        channel = self._notifier.resolve_channel(config.tenant_id, channel_id)
        if channel is None:
            logger.info("Weekly summary channel %s not found for tenant %s", channel_id, config.tenant_id)
            return None

        sessions = self._sessions.all_for_tenant(config.tenant_id)
        summary = compute_summary(
            config.tenant_id,
            sessions,
            now=now,
            end_at=self._fire_at,
            resolve_name=self._members.display_name,
        )

        channel.send(notices.weekly_summary_notice(title=summary.title, rows=summary.rows, now=now))
        logger.info(
            "Weekly summary sent for tenant %s (%d members). Resetting totals in %ss",
            config.tenant_id,
            len(summary.rows),
            int(self._reset_delay.total_seconds()),
        )

        self.schedule_reset(config.tenant_id, channel_id, now=now)
        return summary

    def schedule_reset(self, tenant_id: str, channel_id: str, *, now: Optional[datetime] = None):
        """Queue the deferred history wipe; replaces a still-pending one for the tenant."""
        run_date = self._in_zone(now or self._clock()) + self._reset_delay
        return self._scheduler.add_job(
            self.reset_tenant,
            DateTrigger(run_date=run_date, timezone=self._timezone),
            args=[tenant_id, channel_id],
            id=RESET_JOB_PREFIX + tenant_id,
            name=f"Weekly reset {tenant_id}",
            replace_existing=True,
            misfire_grace_time=None,
        )

    def reset_tenant(self, tenant_id: str, channel_id: str) -> None:
        """Delete the tenant's session history and confirm; failures are logged, not retried."""
        try:
            removed = self._sessions.delete_all_for_tenant(tenant_id)
            logger.info("Reset %d work sessions for tenant %s", removed, tenant_id)

            channel = self._notifier.resolve_channel(tenant_id, channel_id)
            if channel is None:
                logger.info("Reset confirmation skipped; channel %s gone for tenant %s", channel_id, tenant_id)
                return
            channel.send(notices.reset_confirmation_notice())
        except Exception:
            logger.exception("Error resetting totals for tenant %s", tenant_id)

    def cancel_pending_reset(self, tenant_id: str) -> bool:
        try:
            self._scheduler.remove_job(RESET_JOB_PREFIX + tenant_id)
        except JobLookupError:
            return False
        logger.info("Cancelled pending reset for tenant %s", tenant_id)
        return True

    def pending_resets(self) -> list[str]:
        return sorted(
            job.id[len(RESET_JOB_PREFIX):]
            for job in self._scheduler.get_jobs()
            if job.id.startswith(RESET_JOB_PREFIX)
        )

    def _in_zone(self, moment: datetime) -> datetime:
        """Express ``moment`` in the configured zone; naive values are taken as system local time."""
        if self._tz is None:
            return moment
        return moment.astimezone(self._tz)

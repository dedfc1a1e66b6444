from __future__ import annotations

import os
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Callable, Optional

import pytest
from apscheduler.jobstores.base import JobLookupError

os.environ.setdefault("APP_ENV", "testing")

from src.worktime.worktime.container import assemble
from src.worktime.worktime.core.enums import ConfigField
from src.worktime.worktime.core.exceptions import LookupFailedError, PersistenceError
from src.worktime.worktime.guilds.model import GuildConfig
from src.worktime.worktime.notifications.model import Notice, StoredNotice
from src.worktime.worktime.sessions.model import WorkSession


class FakeClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


class InMemorySessions:
    def __init__(self):
        self.rows: list[WorkSession] = []
        self.fail_append = False
        self.fail_delete_for: set[str] = set()

    def append(self, session: WorkSession) -> None:
        if self.fail_append:
            raise PersistenceError("write failed")
        self.rows.append(session)

    def sum_duration_hours(self, actor_id: str, tenant_id: str) -> float:
        return sum(s.duration_hours for s in self.rows if s.actor_id == actor_id and s.tenant_id == tenant_id)

    def all_for_tenant(self, tenant_id: str):
        return [s for s in self.rows if s.tenant_id == tenant_id]

    def delete_all_for_tenant(self, tenant_id: str) -> int:
        if tenant_id in self.fail_delete_for:
            raise PersistenceError("delete failed")
        before = len(self.rows)
        self.rows = [s for s in self.rows if s.tenant_id != tenant_id]
        return before - len(self.rows)


class InMemoryGuildConfigs:
    def __init__(self):
        self.rows: dict[str, GuildConfig] = {}
        self.fail_reads = False

    def get_or_create(self, tenant_id: str) -> GuildConfig:
        if self.fail_reads:
            raise PersistenceError("read failed")
        return self.rows.setdefault(tenant_id, GuildConfig(tenant_id=tenant_id))

    def set_field(self, tenant_id: str, field: ConfigField, value: Optional[str]) -> None:
        current = self.rows.get(tenant_id) or GuildConfig(tenant_id=tenant_id)
        self.rows[tenant_id] = current.with_field(field, value)

    def list_with_summary_channel(self):
        return [c for c in self.rows.values() if c.weekly_summary_channel_id]


class InMemoryMembers:
    def __init__(self, names: Optional[dict[str, str]] = None):
        self.names = dict(names or {})

    def display_name(self, actor_id: str) -> str:
        try:
            return self.names[actor_id]
        except KeyError:
            raise LookupFailedError(f"Unknown member {actor_id}") from None

    def upsert(self, actor_id: str, display_name: str) -> None:
        self.names[actor_id] = display_name


@dataclass
class RecordingChannel:
    channel_id: str
    tenant_id: str
    sent: list[Notice]

    def send(self, notice: Notice) -> None:
        self.sent.append(notice)


class FakeNotifier:
    def __init__(self):
        self.channels: set[tuple[str, str]] = set()
        self.sent: dict[str, list[Notice]] = {}

    def register_channel(self, tenant_id: str, channel_id: str) -> None:
        self.channels.add((tenant_id, channel_id))

    def resolve_channel(self, tenant_id: str, channel_id: str):
        if (tenant_id, channel_id) not in self.channels:
            return None
        return RecordingChannel(channel_id, tenant_id, self.sent.setdefault(channel_id, []))

    def list_for_channel(self, channel_id: str, *, after: int = 0, limit: int = 50):
        items = [
            StoredNotice(
                notice_id=i,
                tenant_id=next((t for t, c in self.channels if c == channel_id), ""),
                channel_id=channel_id,
                notice=n,
                created_at=datetime(2026, 10, 12, 10, 0),
            )
            for i, n in enumerate(self.sent.get(channel_id, []), start=1)
        ]
        return [n for n in items if n.notice_id > after][:limit]


@dataclass
class FakeJob:
    id: str
    func: Callable
    args: list[Any]
    trigger: Any
    kwargs: dict[str, Any] = field(default_factory=dict)


class FakeScheduler:
    """Stands in for a BackgroundScheduler; jobs run only when a test says so."""

    def __init__(self):
        self.jobs: dict[str, FakeJob] = {}
        self.running = False

    def add_job(self, func, trigger=None, args=None, id=None, replace_existing=False, **kwargs):
        if id in self.jobs and not replace_existing:
            raise ValueError(f"duplicate job {id}")
        job = FakeJob(id=id, func=func, args=list(args or []), trigger=trigger, kwargs=kwargs)
        self.jobs[id] = job
        return job

    def remove_job(self, job_id):
        if job_id not in self.jobs:
            raise JobLookupError(job_id)
        del self.jobs[job_id]

    def get_jobs(self):
        return list(self.jobs.values())

    def run_job(self, job_id):
        job = self.jobs.pop(job_id)
        return job.func(*job.args)

    def start(self):
        self.running = True

    def shutdown(self, wait=True):
        self.running = False


@pytest.fixture
def fixed_now() -> datetime:
    # A Monday, at the default firing time.
    return datetime(2026, 10, 12, 10, 0, 0)


@pytest.fixture
def clock(fixed_now) -> FakeClock:
    return FakeClock(fixed_now)


@pytest.fixture
def sessions() -> InMemorySessions:
    return InMemorySessions()


@pytest.fixture
def guild_configs() -> InMemoryGuildConfigs:
    return InMemoryGuildConfigs()


@pytest.fixture
def members() -> InMemoryMembers:
    return InMemoryMembers()


@pytest.fixture
def notifier() -> FakeNotifier:
    return FakeNotifier()


@pytest.fixture
def fake_scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture
def container(sessions, guild_configs, members, notifier, fake_scheduler, clock):
    return assemble(
        sessions_repo=sessions,
        guild_configs_repo=guild_configs,
        members_repo=members,
        notifier=notifier,
        rollup_options={"scheduler": fake_scheduler},
        clock=clock,
    )

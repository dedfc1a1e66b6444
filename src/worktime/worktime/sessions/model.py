from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..common.datetime_utils import hours_between


@dataclass(frozen=True)
class WorkSession:
    """Domain entity: one completed work session (immutable once stored)."""

    actor_id: str
    tenant_id: str
    start_time: datetime
    end_time: datetime
    duration_hours: float

    @classmethod
    def closed(cls, *, actor_id: str, tenant_id: str, start_time: datetime, end_time: datetime) -> "WorkSession":
        return cls(
            actor_id=actor_id,
            tenant_id=tenant_id,
            start_time=start_time,
            end_time=end_time,
            duration_hours=hours_between(start_time, end_time),
        )


@dataclass(frozen=True)
class ActiveStatusRow:
    """Read-model for the operator status query."""

    actor_id: str
    display_name: str
    since: datetime
    elapsed: str

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime, time
from typing import Callable, Iterable

from ..common.datetime_utils import format_day_month, week_window
from ..core.constants import SUMMARY_WINDOW_DAYS
from ..core.exceptions import DomainError
from ..sessions.model import WorkSession

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WeeklySummary:
    tenant_id: str
    title: str
    totals: dict[str, float]
    rows: list[tuple[str, float]]
    unresolved: list[str] = field(default_factory=list)


def aggregate_hours(sessions: Iterable[WorkSession]) -> dict[str, float]:
    totals: dict[str, float] = defaultdict(float)
    for s in sessions:
        totals[s.actor_id] += float(s.duration_hours)
    return dict(totals)


def summary_title(now: datetime, *, end_at: time, days: int = SUMMARY_WINDOW_DAYS) -> str:
    """Presentational label only; it does not filter which sessions are counted."""
    start, end = week_window(now, days=days, end_at=end_at)
    return f"WEEK OF {format_day_month(start)} TO {format_day_month(end)}"


def compute_summary(
    tenant_id: str,
    sessions: Iterable[WorkSession],
    *,
    now: datetime,
    end_at: time,
    resolve_name: Callable[[str], str],
) -> WeeklySummary:
    """Aggregate every stored session of the tenant into one summary.

    Actors whose display name cannot be resolved are left out of ``rows`` but
    kept in ``totals``.
    """
    totals = aggregate_hours(sessions)

    rows: list[tuple[str, float]] = []
    unresolved: list[str] = []
    for actor_id, hours in sorted(totals.items(), key=lambda kv: kv[1], reverse=True):
        try:
            rows.append((resolve_name(actor_id), hours))
        except DomainError:
            logger.warning("Could not resolve member %s for tenant %s", actor_id, tenant_id, exc_info=True)
            unresolved.append(actor_id)

    return WeeklySummary(
        tenant_id=tenant_id,
        title=summary_title(now, end_at=end_at),
        totals=totals,
        rows=rows,
        unresolved=unresolved,
    )

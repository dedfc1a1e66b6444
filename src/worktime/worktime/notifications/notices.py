"""Builders for every notice the service emits.

Wording lives here so services only decide *when* to notify.
"""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional

from ..common.datetime_utils import format_hours
from ..core.constants import SESSION_NOTICE_COLOR, SUMMARY_NOTICE_COLOR
from .model import Notice, NoticeField

RESET_CONFIRMATION = "All totals have been reset for the new week."


def _stamp(value: datetime) -> str:
    return value.strftime("%Y-%m-%d %H:%M:%S")


def panel_notice() -> Notice:
    return Notice(
        title="Work Control",
        description='Press "Clock in" to start counting your work time. Press "Clock out" to finish.',
    )


def session_started_notice(*, actor_id: str, display_name: str, start: datetime) -> Notice:
    return Notice(
        title="Work Session Started",
        description=f"**Member:** {display_name}\n**Start:** {_stamp(start)}",
        color=SESSION_NOTICE_COLOR,
        footer=f"ID: {actor_id}",
    )


def session_summary_notice(*, duration_hours: float, end: datetime) -> Notice:
    return Notice(
        title="Your Work Session Summary",
        description=f"**Session duration:** {format_hours(duration_hours)}\n**End:** {_stamp(end)}",
        color=SESSION_NOTICE_COLOR,
    )


def session_ended_notice(
    *,
    actor_id: str,
    display_name: str,
    duration_hours: float,
    total_hours: Optional[float],
    end: datetime,
) -> Notice:
    lines = [
        f"**Member:** {display_name}",
        f"**Duration:** {format_hours(duration_hours)}",
    ]
    if total_hours is not None:
        lines.append(f"**Running total:** {format_hours(total_hours)}")
    lines.append(f"**End:** {_stamp(end)}")
    return Notice(
        title="Work Session Ended",
        description="\n".join(lines),
        color=SESSION_NOTICE_COLOR,
        footer=f"ID: {actor_id}",
    )


def weekly_summary_notice(*, title: str, rows: Iterable[tuple[str, float]], now: datetime) -> Notice:
    return Notice(
        title=title,
        description="Summary of hours worked this week:",
        color=SUMMARY_NOTICE_COLOR,
        timestamp=now,
        fields=tuple(NoticeField(name=name, value=format_hours(hours)) for name, hours in rows),
    )


def reset_confirmation_notice() -> Notice:
    return Notice(description=f"**{RESET_CONFIRMATION}**")

from __future__ import annotations

import math
from datetime import datetime, time, timedelta

from ..core.constants import DURATION_DECIMALS


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def hours_between(start: datetime, end: datetime) -> float:
    """Elapsed hours between two instants, rounded the way sessions are stored."""
    seconds = (end - start).total_seconds()
    return round(seconds / 3600.0, DURATION_DECIMALS)


def format_hours(value: float) -> str:
    """Render fractional hours as ``"<h>h <m>m"``.

    Minutes are rounded half-up; a result of 60 minutes carries into the hour.
    """
    hours = math.floor(value)
    minutes = math.floor((value - hours) * 60 + 0.5)
    if minutes >= 60:
        hours += 1
        minutes -= 60
    return f"{int(hours)}h {int(minutes)}m"


def week_window(now: datetime, *, days: int, end_at: time) -> tuple[datetime, datetime]:
    """Label window for a weekly summary: ``days`` back at midnight to today at ``end_at``."""
    start = datetime.combine((now - timedelta(days=days)).date(), time.min)
    end = datetime.combine(now.date(), end_at)
    return start, end


def format_day_month(value: datetime) -> str:
    return f"{value.day} {value.strftime('%B')}".upper()

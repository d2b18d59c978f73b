"""Dashboard statistics.

All day-level comparisons are done on calendar dates, never on instant
ranges: two timestamps on the same date land in the same bucket whatever
their time of day.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, tzinfo
from typing import Iterable, Optional
from zoneinfo import ZoneInfo

from sqlmodel import Session, col, select

from taskboard.core.clock import as_utc, utcnow
from taskboard.models.task import Task, TaskPriority, TaskStatus
from taskboard.schemas.task import ChartPoint, TaskStats

CHART_DAYS = 7


def _calendar_date(value: datetime, tz: Optional[tzinfo]) -> date:
    # stored timestamps are UTC; they come back naive or aware depending on the driver
    value = as_utc(value)
    if tz is not None:
        value = value.astimezone(tz)
    return value.date()


def compute_stats(tasks: Iterable[Task], now: datetime, tz: Optional[tzinfo] = None) -> TaskStats:
    """Pure aggregation over a user's live tasks relative to ``now``."""
    today = _calendar_date(now, tz)
    days = [today - timedelta(days=offset) for offset in range(CHART_DAYS - 1, -1, -1)]
    completed_per_day = dict.fromkeys(days, 0)

    stats = TaskStats()
    for task in tasks:
        stats.total += 1
        done = task.status == TaskStatus.COMPLETED.value
        if done:
            stats.completed += 1
            if task.updated_at is not None:
                day = _calendar_date(task.updated_at, tz)
                if day in completed_per_day:
                    completed_per_day[day] += 1
            continue

        if task.priority == TaskPriority.HIGH.value:
            stats.high += 1
        if task.due_date is not None:
            due = _calendar_date(task.due_date, tz)
            if due == today:
                stats.due_today += 1
            elif due < today:
                stats.overdue += 1

    stats.pending = stats.total - stats.completed
    stats.chart_data = [
        ChartPoint(date=day.strftime("%a"), count=completed_per_day[day]) for day in days
    ]
    return stats


def resolve_timezone(name: Optional[str]) -> Optional[tzinfo]:
    return ZoneInfo(name) if name else None


def get_stats(
    db: Session,
    user_id: int,
    *,
    now: Optional[datetime] = None,
    tz: Optional[tzinfo] = None,
) -> TaskStats:
    tasks = db.exec(
        select(Task).where(Task.user_id == user_id, col(Task.deleted_at).is_(None))
    ).all()
    return compute_stats(tasks, now or utcnow(), tz)

"""Calendar-day helpers shared by streaks and leaderboard windows.

Days are zero-padded ``YYYY-MM-DD`` strings. Because of the padding,
lexicographic order equals chronological order, and window filters rely on
plain string comparison instead of re-parsing every row.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta, timezone
from typing import Iterator, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from streakboard.domain.leaderboards.models import LeaderboardPeriod

logger = logging.getLogger(__name__)


def parse_day(value: str) -> date:
	return date.fromisoformat(value)


def format_day(value: date) -> str:
	return value.isoformat()


def previous_day(day: str) -> str:
	return format_day(parse_day(day) - timedelta(days=1))


def next_day(day: str) -> str:
	return format_day(parse_day(day) + timedelta(days=1))


def iter_days(start: str, end: str) -> Iterator[str]:
	"""Yield every day from ``start`` through ``end`` inclusive."""

	cursor = parse_day(start)
	last = parse_day(end)
	while cursor <= last:
		yield format_day(cursor)
		cursor += timedelta(days=1)


def week_start(day: str) -> str:
	"""Monday of the week containing ``day``; Sunday belongs to the week before it."""

	value = parse_day(day)
	return format_day(value - timedelta(days=value.weekday()))


def month_start(day: str) -> str:
	return f"{day[:7]}-01"


def year_start(day: str) -> str:
	return f"{day[:4]}-01-01"


def window_start(period: LeaderboardPeriod, today: str) -> Optional[str]:
	"""First day counted for ``period``; ``None`` for all-time (not window based)."""

	if period is LeaderboardPeriod.DAILY:
		return today
	if period is LeaderboardPeriod.WEEKLY:
		return week_start(today)
	if period is LeaderboardPeriod.MONTHLY:
		return month_start(today)
	return None


def earliest_window_start(today: str) -> str:
	"""Oldest day any windowed period needs (a week can start in the previous month)."""

	return min(week_start(today), month_start(today))


def in_window(day: str, start: str, end: str) -> bool:
	return start <= day <= end


def resolve_zone(name: Optional[str]) -> ZoneInfo:
	try:
		return ZoneInfo(name or "UTC")
	except (ZoneInfoNotFoundError, ValueError):
		logger.warning("Unknown timezone, falling back to UTC", extra={"tz": name})
		return ZoneInfo("UTC")


def today_in_timezone(tz_name: Optional[str], *, now: Optional[datetime] = None) -> str:
	"""Calendar day for ``now`` (default: current instant) as seen in ``tz_name``."""

	instant = now or datetime.now(timezone.utc)
	if instant.tzinfo is None:
		instant = instant.replace(tzinfo=timezone.utc)
	return format_day(instant.astimezone(resolve_zone(tz_name)).date())

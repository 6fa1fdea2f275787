"""Consecutive-day streak calculation."""

from __future__ import annotations

from typing import Iterable, Protocol

from streakboard.domain.leaderboards import dates
from streakboard.domain.leaderboards.models import StreakResult


class DayRecord(Protocol):
	date: str
	count: int


def calculate_streak(records: Iterable[DayRecord], today: str) -> StreakResult:
	"""Return the current and longest run of active days ending no later than ``today``.

	``records`` may arrive in any order and may skip days; a missing day counts
	as zero activity. If ``today`` has no activity yet the current streak is
	counted from yesterday, so an unfinished day never breaks a streak.
	"""

	records = list(records)
	active = {record.date for record in records if record.count > 0}
	if not active:
		return StreakResult()

	current = 0
	cursor = today if today in active else dates.previous_day(today)
	while cursor in active:
		current += 1
		cursor = dates.previous_day(cursor)

	longest = 0
	run = 0
	first_day = min(record.date for record in records)
	for day in dates.iter_days(first_day, today):
		if day in active:
			run += 1
			longest = max(longest, run)
		else:
			run = 0

	return StreakResult(current_streak=current, longest_streak=max(longest, current))

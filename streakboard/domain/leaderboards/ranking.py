"""Score aggregation and competition ranking for leaderboard periods."""

from __future__ import annotations

from collections import defaultdict
from typing import Dict, Iterable, List, Mapping, Sequence, Tuple

from streakboard.domain.leaderboards import dates
from streakboard.domain.leaderboards.models import (
	DailyActivityRecord,
	LeaderboardPeriod,
	RankedScore,
	User,
)


def sum_activity(records: Iterable[DailyActivityRecord], *, start: str, end: str) -> Dict[str, int]:
	"""Per-user sum of counts for days in ``[start, end]``."""

	totals: Dict[str, int] = defaultdict(int)
	for record in records:
		if dates.in_window(record.date, start, end):
			totals[record.user_id] += record.count
	return dict(totals)


def period_scores(
	period: LeaderboardPeriod,
	users: Sequence[User],
	activity: Sequence[DailyActivityRecord],
	today: str,
) -> List[Tuple[str, int]]:
	"""Score every user for ``period``; users without activity score 0."""

	start = dates.window_start(period, today)
	if start is None:
		# all-time comes from stored totals, not activity rows
		return [(user.id, user.all_time_score) for user in users]
	totals = sum_activity(activity, start=start, end=today)
	return [(user.id, totals.get(user.id, 0)) for user in users]


def rank_scores(values: Iterable[Tuple[str, int]]) -> List[RankedScore]:
	"""Assign competition ranks: ties share a rank and the next lower score skips ahead.

	Scores ``[300, 300, 100]`` rank ``[1, 1, 3]``. Tied users are listed by user id.
	"""

	ordered = sorted(values, key=lambda item: (-item[1], item[0]))
	rows: List[RankedScore] = []
	rank = 1
	for idx, (user_id, score) in enumerate(ordered):
		if idx > 0 and score < ordered[idx - 1][1]:
			rank = idx + 1
		rows.append(RankedScore(user_id=user_id, score=score, rank=rank))
	return rows


def rank_map(rows: Iterable[RankedScore]) -> Mapping[str, int]:
	return {row.user_id: row.rank for row in rows}

"""Per-user stats refresh: streaks, rolling total and weekly breakdown."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from streakboard.domain.leaderboards import dates
from streakboard.domain.leaderboards.errors import UserNotFoundError
from streakboard.domain.leaderboards.models import DayCount, StreakResult, User, UserStatsSummary
from streakboard.domain.leaderboards.repository import StatsRepository
from streakboard.domain.leaderboards.service import LeaderboardService
from streakboard.domain.leaderboards.streaks import calculate_streak
from streakboard.obs import metrics as obs_metrics
from streakboard.settings import settings

logger = logging.getLogger(__name__)


class UserStatsService:
	"""Keeps a user's stored streak counters and rolling total in line with activity."""

	def __init__(
		self,
		stats_repo: StatsRepository,
		leaderboards: Optional[LeaderboardService] = None,
	) -> None:
		self._stats = stats_repo
		self._leaderboards = leaderboards

	async def _load_user(self, user_id: str) -> User:
		user = await self._stats.get_user(user_id)
		if user is None:
			raise UserNotFoundError(user_id)
		return user

	async def get_streak(self, user_id: str, *, now: Optional[datetime] = None) -> StreakResult:
		"""Compute the streak on demand against the user's own calendar day."""

		user = await self._load_user(user_id)
		today = dates.today_in_timezone(user.timezone, now=now)
		records = await self._stats.list_activity_for_user(user_id)
		return calculate_streak(records, today)

	async def refresh_user_stats(
		self,
		user_id: str,
		*,
		now: Optional[datetime] = None,
		recompute: bool = True,
	) -> UserStatsSummary:
		"""Recalculate and store streaks and the current-year total for one user.

		The stored longest streak never decreases, even if older activity rows
		have since been pruned. With ``recompute`` the shared leaderboards are
		rebuilt too and the user's all-time rank is included in the summary.
		"""

		user = await self._load_user(user_id)
		today = dates.today_in_timezone(user.timezone, now=now)
		records = list(await self._stats.list_activity_for_user(user_id))
		streak = calculate_streak(records, today)

		first_of_year = dates.year_start(today)
		rolling_total = sum(r.count for r in records if dates.in_window(r.date, first_of_year, today))
		longest = max(streak.longest_streak, user.longest_streak)
		await self._stats.update_user_stats(
			user_id,
			rolling_total=rolling_total,
			current_streak=streak.current_streak,
			longest_streak=longest,
		)
		obs_metrics.inc_streak_refresh()

		by_day = {r.date: r.count for r in records}
		weekly = [DayCount(date=day, count=by_day.get(day, 0)) for day in dates.iter_days(dates.week_start(today), today)]

		rank: Optional[int] = None
		if recompute and self._leaderboards is not None:
			ranks = await self._leaderboards.recompute_leaderboard(now=now)
			rank = ranks.get(user_id)

		logger.info(
			"user_stats_refreshed",
			extra={"user": user_id, "day": today, "current_streak": streak.current_streak},
		)
		return UserStatsSummary(
			user_id=user_id,
			today=today,
			today_count=by_day.get(today, 0),
			daily_goal=settings.default_daily_goal if user.daily_goal is None else user.daily_goal,
			current_streak=streak.current_streak,
			longest_streak=longest,
			total_score=rolling_total + (user.historical_total or 0),
			weekly=weekly,
			rank=rank,
		)

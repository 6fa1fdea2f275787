"""Domain models for contribution streaks & leaderboards."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class LeaderboardPeriod(str, Enum):
	"""Supported leaderboard periods, in write order."""

	DAILY = "daily"
	WEEKLY = "weekly"
	MONTHLY = "monthly"
	ALL_TIME = "all_time"


@dataclass(slots=True)
class User:
	"""User row as seen by the stats engine.

	Only ``rolling_total`` and ``historical_total`` feed the leaderboard; the
	remaining fields are maintained by the per-user stats refresh.
	"""

	id: str
	rolling_total: Optional[int] = 0
	historical_total: Optional[int] = 0
	current_streak: int = 0
	longest_streak: int = 0
	timezone: str = "UTC"
	daily_goal: Optional[int] = None

	@property
	def all_time_score(self) -> int:
		return (self.rolling_total or 0) + (self.historical_total or 0)


@dataclass(frozen=True, slots=True)
class DailyActivityRecord:
	"""Contribution count for one user on one calendar day (``YYYY-MM-DD``)."""

	user_id: str
	date: str
	count: int


@dataclass(frozen=True, slots=True)
class RankedScore:
	user_id: str
	score: int
	rank: int


@dataclass(frozen=True, slots=True)
class LeaderboardEntry:
	"""Persisted leaderboard row, unique per ``(user_id, period)``."""

	user_id: str
	period: LeaderboardPeriod
	score: int
	rank: int
	updated_at: datetime

	@property
	def key(self) -> tuple[str, str]:
		return (self.user_id, self.period.value)


@dataclass(frozen=True, slots=True)
class StreakResult:
	current_streak: int = 0
	longest_streak: int = 0


@dataclass(frozen=True, slots=True)
class DayCount:
	date: str
	count: int


@dataclass(slots=True)
class UserStatsSummary:
	"""Result of refreshing a single user's stats."""

	user_id: str
	today: str
	today_count: int
	daily_goal: int
	current_streak: int
	longest_streak: int
	total_score: int
	weekly: list[DayCount]
	rank: Optional[int] = None

	@property
	def goal_met(self) -> bool:
		return self.today_count >= self.daily_goal

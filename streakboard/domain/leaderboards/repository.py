"""Storage contracts for activity sources and leaderboard tables."""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Protocol, Sequence, Tuple

from streakboard.domain.leaderboards.models import (
	DailyActivityRecord,
	LeaderboardEntry,
	LeaderboardPeriod,
	User,
)


class StatsRepository(Protocol):
	"""Read side for users and daily activity, plus the per-user stats write-back."""

	async def list_users(self) -> Sequence[User]:
		...

	async def list_activity_since(self, day: str) -> Sequence[DailyActivityRecord]:
		...

	async def get_user(self, user_id: str) -> Optional[User]:
		...

	async def list_activity_for_user(self, user_id: str) -> Sequence[DailyActivityRecord]:
		...

	async def update_user_stats(
		self,
		user_id: str,
		*,
		rolling_total: int,
		current_streak: int,
		longest_streak: int,
	) -> None:
		...


class LeaderboardRepository(Protocol):
	"""Write side keyed by ``(user_id, period)``."""

	async def upsert_leaderboard_rows(self, rows: Sequence[LeaderboardEntry]) -> None:
		...

	async def list_leaderboard(
		self,
		period: LeaderboardPeriod,
		*,
		limit: int = 50,
		user_ids: Optional[Sequence[str]] = None,
	) -> Sequence[LeaderboardEntry]:
		...


class InMemoryStatsRepository(StatsRepository):
	"""Reference repository used in tests and developer environments."""

	def __init__(
		self,
		users: Iterable[User] = (),
		activity: Iterable[DailyActivityRecord] = (),
	) -> None:
		self.users: Dict[str, User] = {user.id: user for user in users}
		self.activity: Dict[Tuple[str, str], DailyActivityRecord] = {}
		for record in activity:
			self.add_activity(record)

	def add_user(self, user: User) -> None:
		self.users[user.id] = user

	def add_activity(self, record: DailyActivityRecord) -> None:
		self.activity[(record.user_id, record.date)] = record

	async def list_users(self) -> Sequence[User]:
		return list(self.users.values())

	async def list_activity_since(self, day: str) -> Sequence[DailyActivityRecord]:
		return [record for record in self.activity.values() if record.date >= day]

	async def get_user(self, user_id: str) -> Optional[User]:
		return self.users.get(user_id)

	async def list_activity_for_user(self, user_id: str) -> Sequence[DailyActivityRecord]:
		rows = [record for record in self.activity.values() if record.user_id == user_id]
		return sorted(rows, key=lambda record: record.date, reverse=True)

	async def update_user_stats(
		self,
		user_id: str,
		*,
		rolling_total: int,
		current_streak: int,
		longest_streak: int,
	) -> None:
		user = self.users[user_id]
		user.rolling_total = rolling_total
		user.current_streak = current_streak
		user.longest_streak = longest_streak


class InMemoryLeaderboardRepository(LeaderboardRepository):
	"""Dict-backed leaderboard table; ``batches`` records every upsert call."""

	def __init__(self) -> None:
		self.rows: Dict[Tuple[str, str], LeaderboardEntry] = {}
		self.batches: List[List[LeaderboardEntry]] = []

	async def upsert_leaderboard_rows(self, rows: Sequence[LeaderboardEntry]) -> None:
		self.batches.append(list(rows))
		for row in rows:
			self.rows[row.key] = row

	async def list_leaderboard(
		self,
		period: LeaderboardPeriod,
		*,
		limit: int = 50,
		user_ids: Optional[Sequence[str]] = None,
	) -> Sequence[LeaderboardEntry]:
		wanted = set(user_ids) if user_ids is not None else None
		rows = [
			row
			for row in self.rows.values()
			if row.period is period and (wanted is None or row.user_id in wanted)
		]
		rows.sort(key=lambda row: (row.rank, row.user_id))
		return rows[:limit]

"""PostgreSQL-backed repositories for activity and leaderboard tables."""

from __future__ import annotations

from typing import Optional, Sequence

import asyncpg

from streakboard.domain.leaderboards.models import (
	DailyActivityRecord,
	LeaderboardEntry,
	LeaderboardPeriod,
	User,
)
from streakboard.domain.leaderboards.repository import LeaderboardRepository, StatsRepository


def _row_to_user(row: asyncpg.Record) -> User:
	return User(
		id=str(row["id"]),
		rolling_total=row["rolling_total"],
		historical_total=row["historical_total"],
		current_streak=int(row["current_streak"] or 0),
		longest_streak=int(row["longest_streak"] or 0),
		timezone=row["timezone"] or "UTC",
		daily_goal=None if row["daily_goal"] is None else int(row["daily_goal"]),
	)


def _row_to_activity(row: asyncpg.Record) -> DailyActivityRecord:
	return DailyActivityRecord(
		user_id=str(row["user_id"]),
		date=str(row["date"]),
		count=int(row["count"]),
	)


def _row_to_entry(row: asyncpg.Record) -> LeaderboardEntry:
	return LeaderboardEntry(
		user_id=str(row["user_id"]),
		period=LeaderboardPeriod(str(row["period"])),
		score=int(row["score"]),
		rank=int(row["rank"]),
		updated_at=row["updated_at"],
	)


_USER_COLUMNS = "id, rolling_total, historical_total, current_streak, longest_streak, timezone, daily_goal"


class PostgresStatsRepository(StatsRepository):
	"""Reads users and ``daily_activity`` rows using asyncpg.

	``daily_activity.date`` is stored as ``YYYY-MM-DD`` text so range filters
	compare the same way the domain layer does.
	"""

	def __init__(self, pool: asyncpg.Pool) -> None:
		self._pool = pool

	async def list_users(self) -> Sequence[User]:
		rows = await self._pool.fetch(f"SELECT {_USER_COLUMNS} FROM users ORDER BY id")
		return [_row_to_user(row) for row in rows]

	async def list_activity_since(self, day: str) -> Sequence[DailyActivityRecord]:
		rows = await self._pool.fetch(
			'SELECT user_id, date, "count" FROM daily_activity WHERE date >= $1',
			day,
		)
		return [_row_to_activity(row) for row in rows]

	async def get_user(self, user_id: str) -> Optional[User]:
		row = await self._pool.fetchrow(f"SELECT {_USER_COLUMNS} FROM users WHERE id = $1", user_id)
		if row is None:
			return None
		return _row_to_user(row)

	async def list_activity_for_user(self, user_id: str) -> Sequence[DailyActivityRecord]:
		rows = await self._pool.fetch(
			'SELECT user_id, date, "count" FROM daily_activity WHERE user_id = $1 ORDER BY date DESC',
			user_id,
		)
		return [_row_to_activity(row) for row in rows]

	async def update_user_stats(
		self,
		user_id: str,
		*,
		rolling_total: int,
		current_streak: int,
		longest_streak: int,
	) -> None:
		await self._pool.execute(
			"""
			UPDATE users
			SET rolling_total = $2,
				current_streak = $3,
				longest_streak = $4
			WHERE id = $1
			""",
			user_id,
			rolling_total,
			current_streak,
			longest_streak,
		)


class PostgresLeaderboardRepository(LeaderboardRepository):
	"""Upserts into ``leaderboard_cache`` keyed by ``(user_id, period)``."""

	def __init__(self, pool: asyncpg.Pool) -> None:
		self._pool = pool

	async def upsert_leaderboard_rows(self, rows: Sequence[LeaderboardEntry]) -> None:
		if not rows:
			return
		records = [(row.user_id, row.period.value, row.score, row.rank, row.updated_at) for row in rows]
		async with self._pool.acquire() as conn:
			async with conn.transaction():
				await conn.executemany(
					"""
					INSERT INTO leaderboard_cache (user_id, period, score, rank, updated_at)
					VALUES ($1, $2, $3, $4, $5)
					ON CONFLICT (user_id, period)
					DO UPDATE SET score = EXCLUDED.score,
						rank = EXCLUDED.rank,
						updated_at = EXCLUDED.updated_at
					""",
					records,
				)

	async def list_leaderboard(
		self,
		period: LeaderboardPeriod,
		*,
		limit: int = 50,
		user_ids: Optional[Sequence[str]] = None,
	) -> Sequence[LeaderboardEntry]:
		if user_ids is None:
			rows = await self._pool.fetch(
				"""
				SELECT user_id, period, score, rank, updated_at
				FROM leaderboard_cache
				WHERE period = $1
				ORDER BY rank ASC, user_id ASC
				LIMIT $2
				""",
				period.value,
				limit,
			)
		else:
			rows = await self._pool.fetch(
				"""
				SELECT user_id, period, score, rank, updated_at
				FROM leaderboard_cache
				WHERE period = $1 AND user_id = ANY($2::text[])
				ORDER BY rank ASC, user_id ASC
				LIMIT $3
				""",
				period.value,
				list(user_ids),
				limit,
			)
		return [_row_to_entry(row) for row in rows]

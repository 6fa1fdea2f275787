"""FastAPI dependency providers wiring services to the Postgres repositories."""

from __future__ import annotations

from streakboard.domain.leaderboards.service import LeaderboardService
from streakboard.domain.leaderboards.stats import UserStatsService
from streakboard.infra.postgres import get_pool
from streakboard.infra.stats_repo import PostgresLeaderboardRepository, PostgresStatsRepository


async def get_leaderboard_service() -> LeaderboardService:
	pool = await get_pool()
	return LeaderboardService(PostgresStatsRepository(pool), PostgresLeaderboardRepository(pool))


async def get_user_stats_service() -> UserStatsService:
	pool = await get_pool()
	stats_repo = PostgresStatsRepository(pool)
	return UserStatsService(
		stats_repo,
		LeaderboardService(stats_repo, PostgresLeaderboardRepository(pool)),
	)

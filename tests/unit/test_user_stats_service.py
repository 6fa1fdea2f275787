from datetime import datetime, timezone

import pytest

from streakboard.domain.leaderboards.errors import UserNotFoundError
from streakboard.domain.leaderboards.models import DailyActivityRecord, DayCount, StreakResult, User
from streakboard.domain.leaderboards.repository import InMemoryStatsRepository
from streakboard.domain.leaderboards.stats import UserStatsService
from streakboard.settings import settings

from tests.conftest import FIXED_NOW


def activity(user_id, *pairs):
	return [DailyActivityRecord(user_id=user_id, date=day, count=count) for day, count in pairs]


@pytest.mark.asyncio
async def test_refresh_updates_stored_stats():
	repo = InMemoryStatsRepository(
		users=[User(id="u1", rolling_total=0, historical_total=40, longest_streak=0)],
		activity=activity(
			"u1",
			("2025-12-31", 9),
			("2026-02-16", 1),
			("2026-02-17", 2),
			("2026-02-18", 3),
		),
	)
	service = UserStatsService(repo)

	summary = await service.refresh_user_stats("u1", now=FIXED_NOW)

	stored = repo.users["u1"]
	assert stored.rolling_total == 6
	assert stored.current_streak == 3
	assert stored.longest_streak == 3
	assert summary.today == "2026-02-18"
	assert summary.today_count == 3
	assert summary.total_score == 46
	assert summary.rank is None
	assert summary.weekly == [
		DayCount(date="2026-02-16", count=1),
		DayCount(date="2026-02-17", count=2),
		DayCount(date="2026-02-18", count=3),
	]


@pytest.mark.asyncio
async def test_refresh_keeps_larger_stored_longest_streak():
	repo = InMemoryStatsRepository(
		users=[User(id="u1", longest_streak=12)],
		activity=activity("u1", ("2026-02-18", 1)),
	)
	summary = await UserStatsService(repo).refresh_user_stats("u1", now=FIXED_NOW)

	assert summary.current_streak == 1
	assert summary.longest_streak == 12
	assert repo.users["u1"].longest_streak == 12


@pytest.mark.asyncio
async def test_weekly_breakdown_fills_missing_days():
	repo = InMemoryStatsRepository(
		users=[User(id="u1")],
		activity=activity("u1", ("2026-02-17", 4)),
	)
	summary = await UserStatsService(repo).refresh_user_stats("u1", now=FIXED_NOW)

	assert [day.count for day in summary.weekly] == [0, 4, 0]
	assert summary.current_streak == 1
	assert summary.goal_met is False


@pytest.mark.asyncio
async def test_refresh_uses_user_timezone():
	# 03:00 UTC on the 18th is still the 17th in New York
	repo = InMemoryStatsRepository(
		users=[User(id="u1", timezone="America/New_York", daily_goal=2)],
		activity=activity("u1", ("2026-02-16", 1), ("2026-02-17", 2)),
	)
	summary = await UserStatsService(repo).refresh_user_stats(
		"u1",
		now=datetime(2026, 2, 18, 3, 0, tzinfo=timezone.utc),
	)

	assert summary.today == "2026-02-17"
	assert summary.today_count == 2
	assert summary.goal_met is True
	assert summary.current_streak == 2


@pytest.mark.asyncio
async def test_refresh_with_recompute_returns_all_time_rank(user_stats_service, leaderboard_repo):
	summary = await user_stats_service.refresh_user_stats("bob", now=FIXED_NOW)

	# bob's rolling total is rebuilt from this year's activity: 10 + historical 50
	assert summary.total_score == 60
	assert summary.rank == 3
	assert leaderboard_repo.rows[("bob", "all_time")].score == 60


@pytest.mark.asyncio
async def test_get_streak_does_not_persist():
	repo = InMemoryStatsRepository(
		users=[User(id="u1", current_streak=99)],
		activity=activity("u1", ("2026-02-17", 1), ("2026-02-16", 1)),
	)
	result = await UserStatsService(repo).get_streak("u1", now=FIXED_NOW)

	assert result == StreakResult(current_streak=2, longest_streak=2)
	assert repo.users["u1"].current_streak == 99


@pytest.mark.asyncio
async def test_unknown_user_raises():
	service = UserStatsService(InMemoryStatsRepository())
	with pytest.raises(UserNotFoundError):
		await service.refresh_user_stats("missing", now=FIXED_NOW)
	with pytest.raises(UserNotFoundError):
		await service.get_streak("missing", now=FIXED_NOW)


@pytest.mark.asyncio
async def test_unset_daily_goal_uses_configured_default(monkeypatch):
	monkeypatch.setattr(settings, "default_daily_goal", 3)
	repo = InMemoryStatsRepository(
		users=[User(id="u1")],
		activity=activity("u1", ("2026-02-18", 3)),
	)
	summary = await UserStatsService(repo).refresh_user_stats("u1", now=FIXED_NOW)

	assert summary.daily_goal == 3
	assert summary.goal_met is True


@pytest.mark.asyncio
async def test_zero_daily_goal_is_kept():
	repo = InMemoryStatsRepository(users=[User(id="u1", daily_goal=0)])
	summary = await UserStatsService(repo).refresh_user_stats("u1", now=FIXED_NOW)

	assert summary.daily_goal == 0
	assert summary.goal_met is True

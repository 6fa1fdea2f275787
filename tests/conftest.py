from datetime import datetime, timezone

import pytest
import pytest_asyncio
from fakeredis.aioredis import FakeRedis
from httpx import ASGITransport, AsyncClient

from streakboard.api import deps
from streakboard.domain.leaderboards.models import DailyActivityRecord, User
from streakboard.domain.leaderboards.repository import (
	InMemoryLeaderboardRepository,
	InMemoryStatsRepository,
)
from streakboard.domain.leaderboards.service import LeaderboardService
from streakboard.domain.leaderboards.stats import UserStatsService
from streakboard.infra import postgres
from streakboard.main import app
from streakboard.settings import settings

# Wednesday
FIXED_NOW = datetime(2026, 2, 18, 15, 30, tzinfo=timezone.utc)


@pytest_asyncio.fixture(autouse=True)
async def fake_redis():
	from streakboard.infra.redis import redis_client, set_redis_client

	original = redis_client._client
	client = FakeRedis(decode_responses=True)
	set_redis_client(client)
	try:
		yield client
	finally:
		set_redis_client(original)
		await client.flushall()


@pytest.fixture(autouse=True)
def patch_postgres(monkeypatch):
	async def _noop():
		return None

	monkeypatch.setattr(postgres, "init_pool", _noop)
	monkeypatch.setattr(postgres, "close_pool", _noop)


@pytest.fixture
def stats_repo():
	return InMemoryStatsRepository(
		users=[
			User(id="alice", rolling_total=100, historical_total=200),
			User(id="bob", rolling_total=50, historical_total=50),
			User(id="carol", rolling_total=100, historical_total=200),
		],
		activity=[
			DailyActivityRecord(user_id="alice", date="2026-02-16", count=2),
			DailyActivityRecord(user_id="alice", date="2026-02-18", count=3),
			DailyActivityRecord(user_id="bob", date="2026-02-17", count=10),
			DailyActivityRecord(user_id="carol", date="2026-02-13", count=4),
		],
	)


@pytest.fixture
def leaderboard_repo():
	return InMemoryLeaderboardRepository()


@pytest.fixture
def leaderboard_service(stats_repo, leaderboard_repo):
	return LeaderboardService(stats_repo, leaderboard_repo, batch_size=2, clock=lambda: FIXED_NOW)


@pytest.fixture
def user_stats_service(stats_repo, leaderboard_service):
	return UserStatsService(stats_repo, leaderboard_service)


@pytest.fixture
def admin_token():
	original = settings.obs_admin_token
	settings.obs_admin_token = "test-admin-token"
	try:
		yield settings.obs_admin_token
	finally:
		settings.obs_admin_token = original


@pytest_asyncio.fixture
async def api_client(leaderboard_service, user_stats_service):
	async def _leaderboards():
		return leaderboard_service

	async def _user_stats():
		return user_stats_service

	app.dependency_overrides[deps.get_leaderboard_service] = _leaderboards
	app.dependency_overrides[deps.get_user_stats_service] = _user_stats
	transport = ASGITransport(app=app)
	try:
		async with AsyncClient(transport=transport, base_url="http://testserver") as client:
			yield client
	finally:
		app.dependency_overrides.clear()

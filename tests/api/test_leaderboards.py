import pytest


@pytest.mark.asyncio
async def test_leaderboard_endpoint_returns_ranked_rows(api_client, leaderboard_service):
	await leaderboard_service.recompute_leaderboard()

	response = await api_client.get("/leaderboards/weekly")
	assert response.status_code == 200
	payload = response.json()
	assert payload["period"] == "weekly"
	assert [(row["user_id"], row["score"], row["rank"]) for row in payload["items"]] == [
		("bob", 10, 1),
		("alice", 5, 2),
		("carol", 0, 3),
	]
	assert "X-Request-Id" in response.headers


@pytest.mark.asyncio
async def test_leaderboard_endpoint_friends_filter(api_client, leaderboard_service):
	await leaderboard_service.recompute_leaderboard()

	response = await api_client.get(
		"/leaderboards/all_time",
		params=[("user_ids", "bob"), ("user_ids", "carol")],
	)
	assert response.status_code == 200
	assert [(row["user_id"], row["rank"]) for row in response.json()["items"]] == [
		("carol", 1),
		("bob", 3),
	]


@pytest.mark.asyncio
async def test_leaderboard_endpoint_empty_before_first_run(api_client):
	response = await api_client.get("/leaderboards/daily")
	assert response.status_code == 200
	assert response.json()["items"] == []


@pytest.mark.asyncio
async def test_unknown_period_is_rejected(api_client):
	response = await api_client.get("/leaderboards/yearly")
	assert response.status_code == 422
	assert response.json()["detail"] == "validation_error"


@pytest.mark.asyncio
async def test_limit_bounds(api_client):
	response = await api_client.get("/leaderboards/daily", params={"limit": 0})
	assert response.status_code == 422

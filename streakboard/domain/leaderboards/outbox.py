"""Outbox helpers for the leaderboards event stream."""

from __future__ import annotations

from typing import Any, Dict

from streakboard.infra.redis import redis_client
from streakboard.settings import settings

LEADERBOARD_STREAM = "x:leaderboards.events"


async def append_event(event_type: str, payload: Dict[str, Any]) -> None:
	"""Append a structured event to the leaderboards stream."""

	body = {"type": event_type, **{k: str(v) for k, v in payload.items()}}
	await redis_client.xadd(
		LEADERBOARD_STREAM,
		body,
		maxlen=settings.leaderboard_events_maxlen,
		approximate=False,
	)


async def record_snapshot(period: str, today: str, entries: int, batches: int) -> None:
	await append_event(
		"snapshot",
		{"period": period, "day": today, "entries": entries, "batches": batches},
	)


async def record_recompute(today: str, users: int, duration_ms: float) -> None:
	await append_event(
		"recompute",
		{"day": today, "users": users, "duration_ms": round(duration_ms, 3)},
	)

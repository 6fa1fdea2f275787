"""Service layer for leaderboard recomputation and reads."""

from __future__ import annotations

import logging
import time
from datetime import datetime, timezone
from typing import Awaitable, Callable, Dict, Iterator, List, Optional, Sequence

from streakboard.domain.leaderboards import dates, outbox, ranking
from streakboard.domain.leaderboards.errors import LeaderboardPersistError
from streakboard.domain.leaderboards.models import LeaderboardEntry, LeaderboardPeriod
from streakboard.domain.leaderboards.repository import LeaderboardRepository, StatsRepository
from streakboard.obs import metrics as obs_metrics
from streakboard.settings import settings

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
	return datetime.now(timezone.utc)


def _chunks(rows: Sequence[LeaderboardEntry], size: int) -> Iterator[Sequence[LeaderboardEntry]]:
	for offset in range(0, len(rows), size):
		yield rows[offset : offset + size]


class LeaderboardService:
	"""Recomputes the daily, weekly, monthly and all-time tables from source data.

	Every run rebuilds all four tables from scratch and upserts them keyed by
	``(user_id, period)``, so overlapping or repeated runs converge on the same
	rows and a failed run is recovered by simply running again.
	"""

	def __init__(
		self,
		stats_repo: StatsRepository,
		leaderboard_repo: LeaderboardRepository,
		*,
		batch_size: Optional[int] = None,
		timezone_name: Optional[str] = None,
		clock: Callable[[], datetime] = _utcnow,
	) -> None:
		size = settings.leaderboard_upsert_batch_size if batch_size is None else batch_size
		if size < 1:
			raise ValueError("batch_size must be >= 1")
		self._stats = stats_repo
		self._leaderboards = leaderboard_repo
		self._batch_size = size
		self._timezone = timezone_name or settings.leaderboard_timezone
		self._clock = clock

	@property
	def batch_size(self) -> int:
		return self._batch_size

	async def recompute_leaderboard(self, *, now: Optional[datetime] = None) -> Dict[str, int]:
		"""Rebuild every period table and return ``user_id -> all-time rank``."""

		started = time.perf_counter()
		now = now or self._clock()
		today = dates.today_in_timezone(self._timezone, now=now)
		users = list(await self._stats.list_users())
		if not users:
			logger.info("leaderboard_recompute_skipped", extra={"day": today, "users": 0})
			obs_metrics.record_recompute("empty")
			return {}

		activity = list(await self._stats.list_activity_since(dates.earliest_window_start(today)))
		all_time: Dict[str, int] = {}
		try:
			for period in LeaderboardPeriod:
				ranked = ranking.rank_scores(ranking.period_scores(period, users, activity, today))
				entries = [
					LeaderboardEntry(
						user_id=row.user_id,
						period=period,
						score=row.score,
						rank=row.rank,
						updated_at=now,
					)
					for row in ranked
				]
				batches = await self._write_period(period, entries)
				obs_metrics.inc_rows_written(period.value, len(entries))
				await self._publish("snapshot", outbox.record_snapshot(period.value, today, len(entries), batches))
				if period is LeaderboardPeriod.ALL_TIME:
					all_time = dict(ranking.rank_map(ranked))
		except LeaderboardPersistError:
			obs_metrics.record_recompute("error")
			raise

		elapsed = time.perf_counter() - started
		obs_metrics.record_recompute("ok", duration_seconds=elapsed)
		await self._publish("recompute", outbox.record_recompute(today, len(users), elapsed * 1000))
		logger.info(
			"leaderboard_recompute_finished",
			extra={
				"day": today,
				"users": len(users),
				"activity_rows": len(activity),
				"duration_ms": round(elapsed * 1000, 3),
			},
		)
		return all_time

	async def _write_period(self, period: LeaderboardPeriod, entries: List[LeaderboardEntry]) -> int:
		written = 0
		for index, chunk in enumerate(_chunks(entries, self._batch_size)):
			try:
				await self._leaderboards.upsert_leaderboard_rows(chunk)
			except Exception as exc:
				obs_metrics.inc_batch_failed(period.value)
				logger.error(
					"leaderboard_batch_failed",
					extra={"period": period.value, "batch_index": index, "batch_rows": len(chunk)},
					exc_info=True,
				)
				raise LeaderboardPersistError(period.value, index) from exc
			written += 1
		return written

	async def _publish(self, event: str, emit: Awaitable[None]) -> None:
		# Stream failures never fail the run.
		try:
			await emit
		except Exception:
			obs_metrics.inc_event_failed(event)
			logger.warning("leaderboard_event_failed", extra={"event": event}, exc_info=True)

	async def get_leaderboard(
		self,
		period: LeaderboardPeriod,
		*,
		limit: int = 50,
		user_ids: Optional[Sequence[str]] = None,
	) -> List[LeaderboardEntry]:
		"""Ranked rows for ``period``; ``user_ids`` narrows to a friends-style subset."""

		if limit < 1:
			raise ValueError("limit must be >= 1")
		rows = await self._leaderboards.list_leaderboard(period, limit=limit, user_ids=user_ids)
		return list(rows)

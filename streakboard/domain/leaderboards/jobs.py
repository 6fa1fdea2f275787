"""Background jobs for recomputing leaderboards."""

from __future__ import annotations

import logging
import time
from typing import Dict, Optional

from streakboard.domain.leaderboards.service import LeaderboardService
from streakboard.infra.postgres import get_pool
from streakboard.infra.stats_repo import PostgresLeaderboardRepository, PostgresStatsRepository
from streakboard.obs import logging as obs_logging
from streakboard.obs import metrics as obs_metrics

logger = logging.getLogger(__name__)

JOB_NAME = "leaderboard_recompute"


async def build_service() -> LeaderboardService:
	pool = await get_pool()
	return LeaderboardService(PostgresStatsRepository(pool), PostgresLeaderboardRepository(pool))


async def recompute_leaderboards(service: Optional[LeaderboardService] = None) -> Dict[str, int]:
	"""Entry point for the scheduled and ops-triggered recompute."""

	tokens = obs_logging.bind_context(job=JOB_NAME)
	start = time.perf_counter()
	try:
		if service is None:
			service = await build_service()
		ranks = await service.recompute_leaderboard()
	except Exception:
		obs_metrics.record_job_run(JOB_NAME, result="error")
		logger.exception("leaderboard_job_failed")
		raise
	else:
		obs_metrics.record_job_run(JOB_NAME, result="ok", duration_seconds=time.perf_counter() - start)
		return ranks
	finally:
		obs_logging.reset_context(tokens)

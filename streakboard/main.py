"""FastAPI application entrypoint."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from streakboard.api import leaderboards, ops, stats
from streakboard.api.errors import install_error_handlers
from streakboard.domain.leaderboards import jobs as leaderboard_jobs
from streakboard.infra import postgres
from streakboard.infra.scheduler import JobScheduler
from streakboard.obs import init as obs_init
from streakboard.settings import settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
	await postgres.init_pool()
	scheduler: JobScheduler | None = None
	if settings.leaderboard_scheduler_enabled:
		scheduler = JobScheduler()
		scheduler.start()
		scheduler.schedule_every(
			leaderboard_jobs.JOB_NAME,
			leaderboard_jobs.recompute_leaderboards,
			minutes=settings.leaderboard_recompute_interval_minutes,
		)
		logger.info(
			"leaderboard_scheduler_started",
			extra={"interval_minutes": settings.leaderboard_recompute_interval_minutes},
		)
	app.state.scheduler = scheduler
	try:
		yield
	finally:
		if scheduler is not None:
			scheduler.shutdown()
		await postgres.close_pool()


app = FastAPI(title="streakboard", lifespan=lifespan)
obs_init(app)
install_error_handlers(app)
app.include_router(leaderboards.router)
app.include_router(stats.router)
app.include_router(ops.router)

"""FastAPI routes for per-user streaks and stats."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from streakboard.api.deps import get_user_stats_service
from streakboard.domain.leaderboards.schemas import StreakSummarySchema, UserStatsSchema
from streakboard.domain.leaderboards.stats import UserStatsService

router = APIRouter(prefix="/stats", tags=["stats"])


@router.get("/{user_id}/streak", response_model=StreakSummarySchema)
async def streak_endpoint(
	user_id: str,
	service: UserStatsService = Depends(get_user_stats_service),
) -> StreakSummarySchema:
	return StreakSummarySchema.from_result(await service.get_streak(user_id))


@router.post("/{user_id}/refresh", response_model=UserStatsSchema)
async def refresh_endpoint(
	user_id: str,
	recompute: bool = Query(default=True, description="Also rebuild the shared leaderboards"),
	service: UserStatsService = Depends(get_user_stats_service),
) -> UserStatsSchema:
	summary = await service.refresh_user_stats(user_id, recompute=recompute)
	return UserStatsSchema.from_summary(summary)

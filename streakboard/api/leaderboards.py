"""FastAPI routes for leaderboards."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query

from streakboard.api.deps import get_leaderboard_service
from streakboard.domain.leaderboards.models import LeaderboardPeriod
from streakboard.domain.leaderboards.schemas import LeaderboardResponseSchema, LeaderboardRowSchema
from streakboard.domain.leaderboards.service import LeaderboardService

router = APIRouter(prefix="/leaderboards", tags=["leaderboards"])


@router.get("/{period}", response_model=LeaderboardResponseSchema)
async def leaderboard_endpoint(
	period: LeaderboardPeriod,
	limit: int = Query(default=50, ge=1, le=500),
	user_ids: Optional[list[str]] = Query(default=None, description="Restrict to these users (friends view)"),
	service: LeaderboardService = Depends(get_leaderboard_service),
) -> LeaderboardResponseSchema:
	rows = await service.get_leaderboard(period, limit=limit, user_ids=user_ids)
	return LeaderboardResponseSchema(
		period=period,
		items=[LeaderboardRowSchema.from_entry(row) for row in rows],
	)

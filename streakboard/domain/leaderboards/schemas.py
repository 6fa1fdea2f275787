"""Pydantic schemas for leaderboards & streaks APIs."""

from __future__ import annotations

from datetime import datetime
from typing import Dict, Optional

from pydantic import BaseModel, Field

from streakboard.domain.leaderboards.models import (
	LeaderboardEntry,
	LeaderboardPeriod,
	StreakResult,
	UserStatsSummary,
)


class LeaderboardRowSchema(BaseModel):
	rank: int = Field(..., ge=1)
	user_id: str
	score: int = Field(..., ge=0)
	updated_at: datetime

	@classmethod
	def from_entry(cls, entry: LeaderboardEntry) -> "LeaderboardRowSchema":
		return cls(rank=entry.rank, user_id=entry.user_id, score=entry.score, updated_at=entry.updated_at)


class LeaderboardResponseSchema(BaseModel):
	period: LeaderboardPeriod
	items: list[LeaderboardRowSchema]


class StreakSummarySchema(BaseModel):
	current: int = 0
	best: int = 0

	@classmethod
	def from_result(cls, result: StreakResult) -> "StreakSummarySchema":
		return cls(current=result.current_streak, best=result.longest_streak)


class DayCountSchema(BaseModel):
	date: str
	count: int


class UserStatsSchema(BaseModel):
	user_id: str
	today: str
	today_count: int
	daily_goal: int
	goal_met: bool
	current_streak: int
	longest_streak: int
	total_score: int
	weekly: list[DayCountSchema] = Field(default_factory=list)
	rank: Optional[int] = None

	@classmethod
	def from_summary(cls, summary: UserStatsSummary) -> "UserStatsSchema":
		return cls(
			user_id=summary.user_id,
			today=summary.today,
			today_count=summary.today_count,
			daily_goal=summary.daily_goal,
			goal_met=summary.goal_met,
			current_streak=summary.current_streak,
			longest_streak=summary.longest_streak,
			total_score=summary.total_score,
			weekly=[DayCountSchema(date=day.date, count=day.count) for day in summary.weekly],
			rank=summary.rank,
		)


class RecomputeResponseSchema(BaseModel):
	status: str = "ok"
	users: int
	ranks: Dict[str, int] = Field(default_factory=dict)

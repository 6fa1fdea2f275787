"""Streak calculation and leaderboard ranking."""

from streakboard.domain.leaderboards.ranking import rank_scores
from streakboard.domain.leaderboards.streaks import calculate_streak

__all__ = ["calculate_streak", "rank_scores"]

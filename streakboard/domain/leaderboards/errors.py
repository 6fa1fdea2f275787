"""Exceptions raised by the leaderboard & stats services."""

from __future__ import annotations


class LeaderboardError(Exception):
	"""Base error for the stats domain."""


class LeaderboardPersistError(LeaderboardError):
	"""An upsert batch failed; earlier batches stay committed and the run is aborted."""

	def __init__(self, period: str, batch_index: int) -> None:
		super().__init__(f"failed to persist {period} leaderboard batch {batch_index}")
		self.period = period
		self.batch_index = batch_index


class UserNotFoundError(LeaderboardError):
	def __init__(self, user_id: str) -> None:
		super().__init__(f"user {user_id} not found")
		self.user_id = user_id

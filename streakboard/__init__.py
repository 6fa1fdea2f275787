"""Contribution streaks and multi-period leaderboards."""

__version__ = "0.1.0"

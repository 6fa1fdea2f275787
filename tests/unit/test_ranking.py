from streakboard.domain.leaderboards import ranking
from streakboard.domain.leaderboards.models import DailyActivityRecord, LeaderboardPeriod, User


def ranks_of(rows):
	return {row.user_id: row.rank for row in rows}


def test_ties_share_rank_and_leave_gap():
	rows = ranking.rank_scores([("A", 300), ("B", 100), ("C", 300)])
	assert ranks_of(rows) == {"A": 1, "C": 1, "B": 3}
	assert [row.user_id for row in rows] == ["A", "C", "B"]


def test_ties_in_the_middle():
	rows = ranking.rank_scores([("a", 50), ("b", 40), ("c", 40), ("d", 40), ("e", 10)])
	assert [row.rank for row in rows] == [1, 2, 2, 2, 5]


def test_all_equal_scores_share_first_place():
	rows = ranking.rank_scores([("x", 0), ("y", 0), ("z", 0)])
	assert [row.rank for row in rows] == [1, 1, 1]


def test_rank_is_one_plus_strictly_higher_count():
	values = [("u1", 7), ("u2", 3), ("u3", 7), ("u4", 9), ("u5", 3), ("u6", 0)]
	rows = ranking.rank_scores(values)
	for row in rows:
		higher = sum(1 for _, score in values if score > row.score)
		assert row.rank == higher + 1


def test_empty_input():
	assert ranking.rank_scores([]) == []


def test_tie_order_is_by_user_id_regardless_of_input_order():
	forward = ranking.rank_scores([("b", 5), ("a", 5), ("c", 5)])
	backward = ranking.rank_scores([("c", 5), ("a", 5), ("b", 5)])
	assert forward == backward
	assert [row.user_id for row in forward] == ["a", "b", "c"]


def test_sum_activity_respects_both_bounds():
	records = [
		DailyActivityRecord(user_id="a", date="2026-01-31", count=100),
		DailyActivityRecord(user_id="a", date="2026-02-01", count=1),
		DailyActivityRecord(user_id="a", date="2026-02-18", count=2),
		DailyActivityRecord(user_id="a", date="2026-02-19", count=50),
		DailyActivityRecord(user_id="b", date="2026-02-10", count=4),
	]
	assert ranking.sum_activity(records, start="2026-02-01", end="2026-02-18") == {"a": 3, "b": 4}


def test_period_scores_include_every_user():
	users = [User(id="a"), User(id="b"), User(id="c")]
	activity = [
		DailyActivityRecord(user_id="a", date="2026-02-18", count=2),
		DailyActivityRecord(user_id="ghost", date="2026-02-18", count=9),
	]
	scores = ranking.period_scores(LeaderboardPeriod.DAILY, users, activity, "2026-02-18")
	assert scores == [("a", 2), ("b", 0), ("c", 0)]


def test_all_time_scores_come_from_user_totals():
	users = [
		User(id="a", rolling_total=10, historical_total=5),
		User(id="b", rolling_total=None, historical_total=7),
	]
	activity = [DailyActivityRecord(user_id="a", date="2026-02-18", count=1000)]
	scores = ranking.period_scores(LeaderboardPeriod.ALL_TIME, users, activity, "2026-02-18")
	assert scores == [("a", 15), ("b", 7)]

"""Central registry for Prometheus metrics used across the service."""

from __future__ import annotations

from prometheus_client import Counter, Gauge, Histogram


REQUEST_COUNTER = Counter(
	"streakboard_http_requests_total",
	"Total HTTP requests processed",
	["route", "method", "status"],
)

REQUEST_LATENCY = Histogram(
	"streakboard_http_request_duration_seconds",
	"HTTP request latency in seconds",
	["route", "method"],
	buckets=(0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.0, 5.0),
)

LEADERBOARD_RECOMPUTES = Counter(
	"streakboard_leaderboard_recomputes_total",
	"Leaderboard recompute runs",
	["result"],
)

LEADERBOARD_RECOMPUTE_DURATION = Histogram(
	"streakboard_leaderboard_recompute_duration_seconds",
	"Duration of full leaderboard recomputes",
	buckets=(0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0),
)

LEADERBOARD_ROWS_WRITTEN = Counter(
	"streakboard_leaderboard_rows_written_total",
	"Leaderboard rows upserted",
	["period"],
)

LEADERBOARD_BATCHES_FAILED = Counter(
	"streakboard_leaderboard_batches_failed_total",
	"Leaderboard upsert batches that raised",
	["period"],
)

LEADERBOARD_EVENTS_FAILED = Counter(
	"streakboard_leaderboard_events_failed_total",
	"Leaderboard stream events that could not be appended",
	["event"],
)

STREAK_REFRESHES = Counter(
	"streakboard_streak_refreshes_total",
	"Per-user stats refreshes",
)

BACKGROUND_RUNS = Counter(
	"streakboard_background_runs_total",
	"Background job executions",
	["name", "result"],
)

BACKGROUND_DURATION = Histogram(
	"streakboard_background_duration_seconds",
	"Background job duration",
	["name"],
)

REDIS_UP = Gauge("streakboard_redis_up", "Redis availability (1 up, 0 down)")
REDIS_LATENCY = Histogram("streakboard_redis_ping_seconds", "Redis ping latency")
POSTGRES_UP = Gauge("streakboard_postgres_up", "Postgres availability (1 up, 0 down)")
POSTGRES_LATENCY = Histogram("streakboard_postgres_ping_seconds", "Postgres ping latency")


def observe_request(route: str, method: str, status: int, duration_seconds: float) -> None:
	REQUEST_COUNTER.labels(route=route, method=method, status=str(status)).inc()
	REQUEST_LATENCY.labels(route=route, method=method).observe(duration_seconds)


def record_recompute(result: str, *, duration_seconds: float | None = None) -> None:
	LEADERBOARD_RECOMPUTES.labels(result=result).inc()
	if duration_seconds is not None:
		LEADERBOARD_RECOMPUTE_DURATION.observe(duration_seconds)


def inc_rows_written(period: str, count: int) -> None:
	if count <= 0:
		return
	LEADERBOARD_ROWS_WRITTEN.labels(period=period).inc(count)


def inc_batch_failed(period: str) -> None:
	LEADERBOARD_BATCHES_FAILED.labels(period=period).inc()


def inc_event_failed(event: str) -> None:
	LEADERBOARD_EVENTS_FAILED.labels(event=event).inc()


def inc_streak_refresh() -> None:
	STREAK_REFRESHES.inc()


def mark_redis(ok: bool, *, latency_seconds: float | None = None) -> None:
	REDIS_UP.set(1 if ok else 0)
	if latency_seconds is not None:
		REDIS_LATENCY.observe(latency_seconds)


def mark_postgres(ok: bool, *, latency_seconds: float | None = None) -> None:
	POSTGRES_UP.set(1 if ok else 0)
	if latency_seconds is not None:
		POSTGRES_LATENCY.observe(latency_seconds)


def record_job_run(name: str, *, result: str, duration_seconds: float | None = None) -> None:
	BACKGROUND_RUNS.labels(name=name, result=result).inc()
	if duration_seconds is not None:
		BACKGROUND_DURATION.labels(name=name).observe(duration_seconds)

from pathlib import Path

from streakboard.infra import migrations


def test_pending_migrations_skips_applied_and_sorts():
	paths = [Path("0002_more.sql"), Path("0001_stats_leaderboards.sql"), Path("0003_later.sql")]
	pending = migrations.pending_migrations(paths, applied=["0002"])
	assert [path.name for path in pending] == ["0001_stats_leaderboards.sql", "0003_later.sql"]


def test_bundled_migration_is_discovered():
	files = sorted(migrations.MIGRATIONS_DIR.glob("*.sql"))
	assert [migrations.migration_version(path) for path in files] == ["0001"]
	sql = files[0].read_text()
	assert "PRIMARY KEY (user_id, period)" in sql

"""Apply ``migrations/*.sql`` in order, recording versions in ``schema_migrations``.

Run with ``python -m streakboard.infra.migrations``.
"""

from __future__ import annotations

import asyncio
import logging
import pathlib
from typing import Iterable, List

import asyncpg

from streakboard.infra import postgres

logger = logging.getLogger(__name__)

MIGRATIONS_DIR = pathlib.Path(__file__).resolve().parents[2] / "migrations"


def migration_version(path: pathlib.Path) -> str:
	return path.name.split("_", 1)[0]


def pending_migrations(paths: Iterable[pathlib.Path], applied: Iterable[str]) -> List[pathlib.Path]:
	done = set(applied)
	return [path for path in sorted(paths) if migration_version(path) not in done]


async def apply_migrations(pool: asyncpg.Pool, directory: pathlib.Path = MIGRATIONS_DIR) -> List[str]:
	async with pool.acquire() as conn:
		await conn.execute(
			"""
			CREATE TABLE IF NOT EXISTS schema_migrations (
				version TEXT PRIMARY KEY,
				applied_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
			)
			"""
		)
		applied = [row["version"] for row in await conn.fetch("SELECT version FROM schema_migrations")]
		versions: List[str] = []
		for path in pending_migrations(directory.glob("*.sql"), applied):
			version = migration_version(path)
			async with conn.transaction():
				await conn.execute(path.read_text())
				await conn.execute("INSERT INTO schema_migrations (version) VALUES ($1)", version)
			logger.info("migration_applied", extra={"version": version, "file": path.name})
			versions.append(version)
	return versions


async def main() -> None:
	pool = await postgres.init_pool()
	try:
		await apply_migrations(pool)
	finally:
		await postgres.close_pool()


if __name__ == "__main__":
	from streakboard.obs import logging as obs_logging

	obs_logging.configure_logging()
	asyncio.run(main())

"""Apply the bundled SQL migrations in lexical order, once each."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import asyncpg

logger = logging.getLogger(__name__)

MIGRATIONS_DIR = Path(__file__).resolve().parents[1] / "migrations"


async def apply_migrations(pool: asyncpg.Pool, directory: Optional[Path] = None) -> list[str]:
	"""Execute pending ``*.sql`` files from ``directory`` and return their names.

	Applied versions are recorded in ``schema_migrations``; each file runs in its
	own transaction together with its bookkeeping row.
	"""
	directory = directory or MIGRATIONS_DIR
	paths = sorted(directory.glob("*.sql"))
	applied: list[str] = []
	async with pool.acquire() as conn:
		await conn.execute(
			"""
			CREATE TABLE IF NOT EXISTS schema_migrations (
				version TEXT PRIMARY KEY,
				applied_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
			)
			"""
		)
		rows = await conn.fetch("SELECT version FROM schema_migrations")
		done = {row["version"] for row in rows}
		for path in paths:
			if path.name in done:
				continue
			async with conn.transaction():
				await conn.execute(path.read_text(encoding="utf-8"))
				await conn.execute("INSERT INTO schema_migrations (version) VALUES ($1)", path.name)
			logger.info("migration applied", extra={"migration": path.name})
			applied.append(path.name)
	return applied

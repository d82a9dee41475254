"""AsyncPG pool shared by the Postgres-backed social store."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

import asyncpg

from app.settings import settings

logger = logging.getLogger(__name__)

_pool: Optional[asyncpg.Pool] = None
_pool_lock = asyncio.Lock()


async def init_pool() -> asyncpg.Pool:
	"""Create the pool once; concurrent first callers share the same pool."""

	global _pool
	if _pool is not None:
		return _pool
	async with _pool_lock:
		if _pool is None:
			_pool = await asyncpg.create_pool(
				dsn=settings.postgres_url,
				min_size=settings.postgres_min_pool_size,
				max_size=settings.postgres_max_pool_size,
				command_timeout=settings.postgres_command_timeout_seconds,
			)
			logger.info(
				"postgres_pool_ready",
				extra={"min_size": settings.postgres_min_pool_size, "max_size": settings.postgres_max_pool_size},
			)
	return _pool


def set_pool(pool: Optional[asyncpg.Pool]) -> None:
	global _pool
	_pool = pool


async def get_pool() -> asyncpg.Pool:
	return _pool if _pool is not None else await init_pool()


async def close_pool() -> None:
	global _pool
	pool, _pool = _pool, None
	if pool is not None:
		await pool.close()
		logger.info("postgres_pool_closed")

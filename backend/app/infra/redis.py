"""Redis client used by the Redis-backed search corpus.

``redis_client`` is a proxy whose target can be replaced at runtime, so modules
that imported it keep working when tests swap in fakeredis.
"""

from __future__ import annotations

import redis.asyncio as redis

from app.settings import settings


class RedisProxy:
	"""Forwards attribute access to the current Redis client."""

	def __init__(self, client: redis.Redis):
		self._client: redis.Redis = client

	@property
	def client(self) -> redis.Redis:
		return self._client

	def set_client(self, client: redis.Redis) -> None:
		self._client = client

	def __getattr__(self, item):
		return getattr(self._client, item)


def build_client(url: str) -> redis.Redis:
	# Connections are opened lazily on the first command
	return redis.from_url(url, decode_responses=True)


redis_client: RedisProxy = RedisProxy(build_client(settings.redis_url))


def set_redis_client(client: redis.Redis) -> None:
	redis_client.set_client(client)


async def close_redis() -> None:
	await redis_client.client.aclose()

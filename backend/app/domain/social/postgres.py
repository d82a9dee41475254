"""Postgres-backed implementation of the social read contracts."""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Optional

import asyncpg

from app.domain.social.exceptions import DependencyUnavailable, UserNotFound
from app.domain.social.models import PendingRelationship, Post, User
from app.infra.postgres import get_pool

logger = logging.getLogger(__name__)

PoolFactory = Callable[[], Awaitable[asyncpg.Pool]]

_USER_COLUMNS = "id, username, name, surname, country, profile_picture_url"

_ALL_USERS_SQL = f"SELECT {_USER_COLUMNS} FROM users ORDER BY id"

_USER_SQL = f"SELECT {_USER_COLUMNS} FROM users WHERE id = $1"

_FRIENDS_SQL = """
SELECT friend_id
FROM friendships
WHERE user_id = $1 AND status = 'accepted'
"""

_FRIENDS_COUNT_SQL = """
SELECT COUNT(*) AS cnt
FROM friendships
WHERE user_id = $1 AND status = 'accepted'
"""

_POSTS_BY_AUTHOR_SQL = """
SELECT id, author_id, lat, lon, created_at
FROM posts
WHERE author_id = $1
ORDER BY created_at DESC
"""

_PENDING_BY_SENDER_SQL = """
SELECT from_user_id, to_user_id
FROM invitations
WHERE from_user_id = $1 AND status = 'sent'
"""

_PENDING_BY_RECEIVER_SQL = """
SELECT from_user_id, to_user_id
FROM invitations
WHERE to_user_id = $1 AND status = 'sent'
"""

_DRIVER_ERRORS = (asyncpg.PostgresError, asyncpg.InterfaceError, OSError)


class PostgresSocialStore:
	"""Reads users, friendships, pending invitations and posts through asyncpg."""

	def __init__(self, pool_factory: Optional[PoolFactory] = None) -> None:
		self._pool_factory = pool_factory or get_pool

	async def _fetch(self, query: str, *args: Any) -> list[asyncpg.Record]:
		try:
			pool = await self._pool_factory()
			async with pool.acquire() as conn:
				return list(await conn.fetch(query, *args))
		except _DRIVER_ERRORS as exc:
			logger.warning("postgres_read_failed", extra={"error": type(exc).__name__})
			raise DependencyUnavailable("postgres") from exc

	async def _fetchrow(self, query: str, *args: Any) -> Optional[asyncpg.Record]:
		try:
			pool = await self._pool_factory()
			async with pool.acquire() as conn:
				return await conn.fetchrow(query, *args)
		except _DRIVER_ERRORS as exc:
			logger.warning("postgres_read_failed", extra={"error": type(exc).__name__})
			raise DependencyUnavailable("postgres") from exc

	async def get_all_users(self) -> list[User]:
		rows = await self._fetch(_ALL_USERS_SQL)
		return [User.from_record(row) for row in rows]

	async def get_user(self, user_id: str) -> User:
		row = await self._fetchrow(_USER_SQL, user_id)
		if row is None:
			raise UserNotFound(user_id)
		return User.from_record(row)

	async def get_all_friends_of_user(self, user_id: str) -> set[str]:
		rows = await self._fetch(_FRIENDS_SQL, user_id)
		return {str(row["friend_id"]) for row in rows}

	async def get_friends_count_of_user(self, user_id: str) -> int:
		row = await self._fetchrow(_FRIENDS_COUNT_SQL, user_id)
		return int(row["cnt"]) if row is not None else 0

	async def get_all_posts_by_author(self, author_id: str) -> list[Post]:
		rows = await self._fetch(_POSTS_BY_AUTHOR_SQL, author_id)
		return [Post.from_record(row) for row in rows]

	async def get_all_posts_by_given_author(self, author_id: str) -> list[Post]:
		return await self.get_all_posts_by_author(author_id)

	async def get_all_pending_relationships_by_sender(self, user_id: str) -> list[PendingRelationship]:
		rows = await self._fetch(_PENDING_BY_SENDER_SQL, user_id)
		return [PendingRelationship.from_record(row) for row in rows]

	async def get_all_pending_relationships_by_receiver(self, user_id: str) -> list[PendingRelationship]:
		rows = await self._fetch(_PENDING_BY_RECEIVER_SQL, user_id)
		return [PendingRelationship.from_record(row) for row in rows]

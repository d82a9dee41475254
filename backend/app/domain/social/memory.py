"""In-memory social store used by tests and the ``memory`` store backend."""

from __future__ import annotations

import asyncio
from typing import Iterable, Optional

from app.domain.social.exceptions import UserNotFound
from app.domain.social.models import PendingRelationship, Post, User


class InMemorySocialStore:
	"""Implements every read contract in ``repositories`` over plain dicts.

	Friendships are undirected: seeding ``("a", "b")`` makes each a friend of
	the other.
	"""

	def __init__(self) -> None:
		self._lock = asyncio.Lock()
		self.users: dict[str, User] = {}
		self.friends: dict[str, set[str]] = {}
		self.requests: list[PendingRelationship] = []
		self.posts: dict[str, list[Post]] = {}

	async def reset(self) -> None:
		async with self._lock:
			self.users.clear()
			self.friends.clear()
			self.requests.clear()
			self.posts.clear()

	async def seed(
		self,
		*,
		users: Iterable[User] | None = None,
		friendships: Iterable[tuple[str, str]] | None = None,
		requests: Iterable[PendingRelationship] | None = None,
		posts: Iterable[Post] | None = None,
	) -> None:
		async with self._lock:
			self.users = {user.user_id: user for user in users or []}
			self.friends = {}
			for a, b in friendships or []:
				if a == b:
					continue
				self.friends.setdefault(a, set()).add(b)
				self.friends.setdefault(b, set()).add(a)
			self.requests = list(requests or [])
			self.posts = {}
			for post in posts or []:
				self.posts.setdefault(post.author_id, []).append(post)

	async def get_all_users(self) -> list[User]:
		async with self._lock:
			return list(self.users.values())

	async def get_user(self, user_id: str) -> User:
		async with self._lock:
			user: Optional[User] = self.users.get(user_id)
		if user is None:
			raise UserNotFound(user_id)
		return user

	async def get_all_friends_of_user(self, user_id: str) -> set[str]:
		async with self._lock:
			return set(self.friends.get(user_id, ()))

	async def get_friends_count_of_user(self, user_id: str) -> int:
		async with self._lock:
			return len(self.friends.get(user_id, ()))

	async def get_all_posts_by_author(self, author_id: str) -> list[Post]:
		async with self._lock:
			return list(self.posts.get(author_id, ()))

	async def get_all_posts_by_given_author(self, author_id: str) -> list[Post]:
		return await self.get_all_posts_by_author(author_id)

	async def get_all_pending_relationships_by_sender(self, user_id: str) -> list[PendingRelationship]:
		async with self._lock:
			return [req for req in self.requests if req.sender_id == user_id]

	async def get_all_pending_relationships_by_receiver(self, user_id: str) -> list[PendingRelationship]:
		async with self._lock:
			return [req for req in self.requests if req.receiver_id == user_id]

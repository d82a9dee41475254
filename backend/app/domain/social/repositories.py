"""Read-only storage contracts consumed by search and recommendations."""

from __future__ import annotations

from typing import Protocol, Sequence

from app.domain.social.models import PendingRelationship, Post, User


class UserStore(Protocol):
	async def get_all_users(self) -> Sequence[User]:
		...

	async def get_user(self, user_id: str) -> User:
		"""Return the user or raise ``UserNotFound``."""
		...


class FriendGraph(Protocol):
	async def get_all_friends_of_user(self, user_id: str) -> set[str]:
		...

	async def get_friends_count_of_user(self, user_id: str) -> int:
		...


class PostStore(Protocol):
	async def get_all_posts_by_author(self, author_id: str) -> Sequence[Post]:
		...

	async def get_all_posts_by_given_author(self, author_id: str) -> Sequence[Post]:
		"""Same result as ``get_all_posts_by_author``; used when reading someone else's posts."""
		...


class RelationshipStore(Protocol):
	async def get_all_pending_relationships_by_sender(self, user_id: str) -> Sequence[PendingRelationship]:
		...

	async def get_all_pending_relationships_by_receiver(self, user_id: str) -> Sequence[PendingRelationship]:
		...

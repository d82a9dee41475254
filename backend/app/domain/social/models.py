"""Domain models for users, friendships, friend requests and posts."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Mapping, Optional

RecordLike = Mapping[str, Any]


def _as_aware(value: datetime) -> datetime:
	if value.tzinfo is None:
		return value.replace(tzinfo=timezone.utc)
	return value


@dataclass(slots=True, frozen=True)
class User:
	"""Full user profile as owned by the user store."""

	user_id: str
	username: str
	name: str = ""
	surname: str = ""
	country: str = ""
	profile_picture_url: Optional[str] = None

	@property
	def display_name(self) -> str:
		return f"{self.name} {self.surname}".strip()

	def to_simple(self) -> "SimpleUser":
		return SimpleUser(
			user_id=self.user_id,
			username=self.username,
			profile_picture_url=self.profile_picture_url,
		)

	@classmethod
	def from_record(cls, record: RecordLike) -> "User":
		return cls(
			user_id=str(record["id"]),
			username=record["username"],
			name=record.get("name") or "",
			surname=record.get("surname") or "",
			country=record.get("country") or "",
			profile_picture_url=record.get("profile_picture_url"),
		)


@dataclass(slots=True, frozen=True)
class SimpleUser:
	"""Minimal public profile attached to recommendations."""

	user_id: str
	username: str
	profile_picture_url: Optional[str] = None


@dataclass(slots=True, frozen=True)
class GeoPoint:
	latitude: float
	longitude: float


@dataclass(slots=True, frozen=True)
class Post:
	"""A post as seen by the recommender: author, optional location, creation time."""

	post_id: str
	author_id: str
	created_at: datetime
	location: Optional[GeoPoint] = None

	@classmethod
	def from_record(cls, record: RecordLike) -> "Post":
		lat = record.get("lat")
		lon = record.get("lon")
		location = GeoPoint(float(lat), float(lon)) if lat is not None and lon is not None else None
		return cls(
			post_id=str(record["id"]),
			author_id=str(record["author_id"]),
			created_at=_as_aware(record["created_at"]),
			location=location,
		)


@dataclass(slots=True, frozen=True)
class PendingRelationship:
	"""A friend request that has been sent but not yet accepted or declined."""

	sender_id: str
	receiver_id: str

	@classmethod
	def from_record(cls, record: RecordLike) -> "PendingRelationship":
		return cls(sender_id=str(record["from_user_id"]), receiver_id=str(record["to_user_id"]))

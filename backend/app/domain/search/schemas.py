"""Pydantic schemas for the user search API."""

from __future__ import annotations

from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, Field

from app.domain.social.models import User


class SearchUsersRequest(BaseModel):
	query: str = Field(..., max_length=120, description="Raw user input")
	limit: int = Field(default=20, le=100)
	exclude_ids: list[str] = Field(default_factory=list, description="User ids never to return")


class UserOut(BaseModel):
	user_id: str
	username: str
	name: str = ""
	surname: str = ""
	country: str = ""
	profile_picture_url: Optional[str] = None

	@classmethod
	def from_user(cls, user: User) -> "UserOut":
		return cls(
			user_id=user.user_id,
			username=user.username,
			name=user.name,
			surname=user.surname,
			country=user.country,
			profile_picture_url=user.profile_picture_url,
		)


class CorpusRebuildResponse(BaseModel):
	entries: int = Field(..., ge=0)


T = TypeVar("T")


class ListResponse(BaseModel, Generic[T]):
	items: list[T]
	cursor: Optional[str] = None

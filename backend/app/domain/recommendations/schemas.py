"""Schemas for the friend recommendations API."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel

from app.domain.recommendations.models import RecommendationResult


class SimpleUserOut(BaseModel):
	user_id: str
	username: str
	profile_picture_url: Optional[str] = None


class RecommendationOut(BaseModel):
	user: SimpleUserOut
	reason: str

	@classmethod
	def from_result(cls, result: RecommendationResult) -> "RecommendationOut":
		return cls(
			user=SimpleUserOut(
				user_id=result.user.user_id,
				username=result.user.username,
				profile_picture_url=result.user.profile_picture_url,
			),
			reason=result.reason,
		)

"""Domain models for friend recommendations."""

from __future__ import annotations

from dataclasses import dataclass

from app.domain.social.models import SimpleUser


@dataclass(slots=True, frozen=True)
class MutualFriendsScore:
	score: float
	mutual_friends_count: int


@dataclass(slots=True, frozen=True)
class GeoActivityScore:
	score: float
	recent_posts_count: int


@dataclass(slots=True, frozen=True)
class CandidateActivity:
	"""Per-candidate inputs gathered from the stores before normalisation."""

	user_id: str
	friends_count: int
	distance: float
	recent_posts_count: int


@dataclass(slots=True, frozen=True)
class CandidateScore:
	user: SimpleUser
	score: float
	reason: str


@dataclass(slots=True, frozen=True)
class RecommendationResult:
	"""A suggested user and the human-readable reason for the suggestion."""

	user: SimpleUser
	reason: str

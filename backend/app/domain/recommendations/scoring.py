"""Scoring helpers for friend recommendations."""

from __future__ import annotations

import math
from collections import Counter
from datetime import datetime, timedelta
from typing import Iterable, Mapping, Sequence

from app.domain.recommendations.models import GeoActivityScore, MutualFriendsScore
from app.domain.social.models import GeoPoint, Post

MUTUAL_FRIENDS_WEIGHT = 0.5
POPULARITY_WEIGHT = 0.2
GEO_ACTIVITY_WEIGHT = 0.3

RECENT_POSTS_WINDOW = timedelta(days=30)

ORIGIN = GeoPoint(0.0, 0.0)


def friends_of_friends(
	current_user_id: str,
	current_friends: set[str],
	friends_by_friend: Iterable[set[str]],
) -> dict[str, int]:
	"""Map every user at distance 2 from the current user to their mutual friend count.

	Each friend contributes one path to every one of its own friends, so the
	count is the number of mutual friends.
	"""

	counts: Counter[str] = Counter()
	for friends_of_friend in friends_by_friend:
		for candidate_id in friends_of_friend:
			if candidate_id == current_user_id or candidate_id in current_friends:
				continue
			counts[candidate_id] += 1
	return dict(counts)


def mutual_friends_score(user_id: str, fof_counts: Mapping[str, int], max_mutual_friends: int) -> MutualFriendsScore:
	count = fof_counts.get(user_id, 0)
	score = count / max_mutual_friends if max_mutual_friends else 0.0
	return MutualFriendsScore(score=score, mutual_friends_count=count)


def popularity_score(friends_count: int, max_friends: int) -> float:
	return friends_count / max_friends if max_friends else 0.0


def geo_activity_score(distance: float, recent_posts: int, max_distance: float, max_recent_posts: int) -> GeoActivityScore:
	"""Proximity times activity; zero recent posts means zero regardless of distance."""

	proximity = (max_distance - distance) / max_distance if max_distance else 1.0
	activity = recent_posts / max_recent_posts if max_recent_posts else 0.0
	return GeoActivityScore(score=proximity * activity, recent_posts_count=recent_posts)


def mean_location(posts: Iterable[Post]) -> GeoPoint:
	"""Average location of the geotagged posts, or the origin when there are none."""

	located = [post.location for post in posts if post.location is not None]
	if not located:
		return ORIGIN
	return GeoPoint(
		latitude=sum(point.latitude for point in located) / len(located),
		longitude=sum(point.longitude for point in located) / len(located),
	)


def distance(a: GeoPoint, b: GeoPoint) -> float:
	"""Euclidean distance in raw degrees."""

	return math.hypot(a.latitude - b.latitude, a.longitude - b.longitude)


def recent_posts_count(posts: Sequence[Post], now: datetime) -> int:
	threshold = now - RECENT_POSTS_WINDOW
	return sum(1 for post in posts if post.created_at >= threshold)


def _plural(count: int, word: str) -> str:
	return word if count == 1 else f"{word}s"


def suggestion_reason(
	mutual_contribution: float,
	popularity_contribution: float,
	geo_activity_contribution: float,
	*,
	mutual_friends_count: int,
	country: str,
	recent_posts_count: int,
) -> str:
	"""Reason of the largest contribution; ties go to mutual, then popularity, then geo-activity."""

	best = max(mutual_contribution, popularity_contribution, geo_activity_contribution)
	if mutual_contribution == best:
		return f"shares {mutual_friends_count} common {_plural(mutual_friends_count, 'friend')} with you"
	if popularity_contribution == best:
		return f"is popular in {country}"
	return f"recently posted {recent_posts_count} {_plural(recent_posts_count, 'time')} near you"

"""Friend recommendations: people the current user may want to follow.

Three signals are computed per candidate, each normalised to [0, 1] across
the candidate pool of the call:

* mutual friends: number of length-2 paths from the current user,
* popularity: the candidate's friend count,
* geo-activity: proximity of the candidate's mean post location times the
  number of posts they made recently.

The weighted sum ranks candidates; the largest weighted signal picks the
reason shown next to the suggestion.
"""

from __future__ import annotations

import logging
import time
from datetime import datetime, timezone
from typing import Callable, Optional

from app.domain.recommendations import scoring
from app.domain.recommendations.models import CandidateActivity, CandidateScore, RecommendationResult
from app.domain.social.exceptions import InvalidArgument, UserNotFound
from app.domain.social.models import GeoPoint, User
from app.domain.social.repositories import FriendGraph, PostStore, RelationshipStore, UserStore
from app.infra.concurrency import gather_bounded
from app.obs import metrics as obs_metrics

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 10
DEFAULT_FETCH_CONCURRENCY = 8

Clock = Callable[[], datetime]


def _utcnow() -> datetime:
	return datetime.now(timezone.utc)


class UserRecommender:
	"""Recommends users to follow, never suggesting friends or pending requests."""

	def __init__(
		self,
		user_store: UserStore,
		friend_graph: FriendGraph,
		post_store: PostStore,
		relationship_store: RelationshipStore,
		*,
		fetch_concurrency: int = DEFAULT_FETCH_CONCURRENCY,
		clock: Optional[Clock] = None,
	) -> None:
		self._users = user_store
		self._friends = friend_graph
		self._posts = post_store
		self._relationships = relationship_store
		self._fetch_concurrency = fetch_concurrency
		self._clock = clock or _utcnow

	async def get_recommended_users(self, current_user_id: str, limit: int = DEFAULT_LIMIT) -> list[RecommendationResult]:
		if limit < 0:
			raise InvalidArgument("limit_must_be_non_negative")
		start = time.perf_counter()
		try:
			candidates, results = await self._recommend(current_user_id, limit)
		except Exception:
			obs_metrics.observe_recommendations("error", time.perf_counter() - start)
			raise
		elapsed = time.perf_counter() - start
		obs_metrics.observe_recommendations("ok", elapsed, candidates)
		logger.info(
			"recommendations_computed",
			extra={
				"candidates": candidates,
				"results": len(results),
				"took_ms": round(elapsed * 1000, 3),
			},
		)
		return results

	async def _recommend(self, current_user_id: str, limit: int) -> tuple[int, list[RecommendationResult]]:
		users = await self._users.get_all_users()
		if not any(user.user_id == current_user_id for user in users):
			raise UserNotFound(current_user_id)

		current_friends = await self._friends.get_all_friends_of_user(current_user_id)
		sent = await self._relationships.get_all_pending_relationships_by_sender(current_user_id)
		received = await self._relationships.get_all_pending_relationships_by_receiver(current_user_id)

		excluded = {current_user_id} | current_friends
		excluded.update(request.receiver_id for request in sent)
		excluded.update(request.sender_id for request in received)
		candidates = [user for user in users if user.user_id not in excluded]
		if not candidates or limit == 0:
			return len(candidates), []

		friends_by_friend = await gather_bounded(
			sorted(current_friends),
			self._friends.get_all_friends_of_user,
			limit=self._fetch_concurrency,
		)
		fof_counts = scoring.friends_of_friends(current_user_id, current_friends, friends_by_friend)
		max_mutual_friends = max(fof_counts.values(), default=0)

		current_location = scoring.mean_location(await self._posts.get_all_posts_by_author(current_user_id))
		now = self._clock()
		activities = await gather_bounded(
			candidates,
			lambda user: self._candidate_activity(user, current_location, now),
			limit=self._fetch_concurrency,
		)
		max_friends = max((activity.friends_count for activity in activities), default=0)
		max_distance = max((activity.distance for activity in activities), default=0.0)
		max_recent_posts = max((activity.recent_posts_count for activity in activities), default=0)

		scored: list[CandidateScore] = []
		for user, activity in zip(candidates, activities):
			mutual = scoring.mutual_friends_score(user.user_id, fof_counts, max_mutual_friends)
			popularity = scoring.popularity_score(activity.friends_count, max_friends)
			geo_activity = scoring.geo_activity_score(
				activity.distance,
				activity.recent_posts_count,
				max_distance,
				max_recent_posts,
			)

			mutual_contribution = scoring.MUTUAL_FRIENDS_WEIGHT * mutual.score
			popularity_contribution = scoring.POPULARITY_WEIGHT * popularity
			geo_activity_contribution = scoring.GEO_ACTIVITY_WEIGHT * geo_activity.score
			final_score = mutual_contribution + popularity_contribution + geo_activity_contribution
			if final_score == 0:
				continue

			reason = scoring.suggestion_reason(
				mutual_contribution,
				popularity_contribution,
				geo_activity_contribution,
				mutual_friends_count=mutual.mutual_friends_count,
				country=user.country,
				recent_posts_count=geo_activity.recent_posts_count,
			)
			scored.append(CandidateScore(user=user.to_simple(), score=final_score, reason=reason))

		scored.sort(key=lambda candidate: candidate.score, reverse=True)
		return len(candidates), [RecommendationResult(user=c.user, reason=c.reason) for c in scored[:limit]]

	async def _candidate_activity(self, user: User, current_location: GeoPoint, now: datetime) -> CandidateActivity:
		friends_count = await self._friends.get_friends_count_of_user(user.user_id)
		posts = await self._posts.get_all_posts_by_given_author(user.user_id)
		return CandidateActivity(
			user_id=user.user_id,
			friends_count=friends_count,
			distance=scoring.distance(current_location, scoring.mean_location(posts)),
			recent_posts_count=scoring.recent_posts_count(posts, now),
		)

"""Service layer for user search."""

from __future__ import annotations

import logging
import time
from typing import Collection, Optional

from app.domain.search.corpus import SearchCorpusProvider
from app.domain.search.engine import SearchEngine, split_query
from app.domain.social.exceptions import InvalidArgument
from app.domain.social.models import User
from app.domain.social.repositories import UserStore
from app.infra.concurrency import gather_bounded
from app.obs import metrics as obs_metrics

logger = logging.getLogger(__name__)

DEFAULT_FETCH_CONCURRENCY = 8


class UserIndex:
	"""Determines and ranks the users matching a search query.

	The corpus provider supplies the indexable strings, the engine ranks them
	and the user store resolves the surviving ids into full profiles.
	"""

	def __init__(
		self,
		search_data_provider: SearchCorpusProvider,
		user_store: UserStore,
		search_engine: Optional[SearchEngine] = None,
		*,
		fetch_concurrency: int = DEFAULT_FETCH_CONCURRENCY,
	) -> None:
		self._provider = search_data_provider
		self._users = user_store
		self._engine = search_engine or SearchEngine()
		self._fetch_concurrency = fetch_concurrency

	async def users_matching(
		self,
		query: str,
		limit: int,
		exclude_ids: Collection[str] = (),
	) -> list[User]:
		"""Return at most ``limit`` distinct users matching ``query``, best first."""

		if limit < 0:
			raise InvalidArgument("limit_must_be_non_negative")
		if not split_query(query) or limit == 0:
			return []

		start = time.perf_counter()
		try:
			if await self._provider.data_needs_update():
				obs_metrics.inc_corpus_invalidation()
				await self._provider.invalidate_cache()
			search_data = await self._provider.get_search_data()

			excluded = set(exclude_ids)
			user_ids: list[str] = []
			seen: set[str] = set()
			for match in self._engine.search(query, search_data.keys()):
				user_id = search_data.get(match.string)
				if user_id is None or user_id in excluded or user_id in seen:
					continue
				seen.add(user_id)
				user_ids.append(user_id)
				if len(user_ids) >= limit:
					break

			users = await gather_bounded(user_ids, self._users.get_user, limit=self._fetch_concurrency)
		except Exception:
			obs_metrics.observe_search("error", time.perf_counter() - start)
			raise

		elapsed = time.perf_counter() - start
		obs_metrics.observe_search("ok", elapsed, len(users))
		logger.info(
			"search_completed",
			extra={"words": len(split_query(query)), "results": len(users), "took_ms": round(elapsed * 1000, 3)},
		)
		return users

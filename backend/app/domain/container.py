"""Lightweight service container wiring stores, corpus and services from settings."""

from __future__ import annotations

from typing import Optional

from app.domain.recommendations.service import UserRecommender
from app.domain.search.corpus import (
	CorpusStorage,
	FileSearchDataStorage,
	RedisSearchDataStorage,
	SearchDataProvider,
	SearchDataUpdater,
)
from app.domain.search.engine import SearchEngine
from app.domain.search.service import UserIndex
from app.domain.social.memory import InMemorySocialStore
from app.domain.social.postgres import PostgresSocialStore
from app.infra.redis import redis_client
from app.settings import settings


class DiscoveryContainer:
	"""Holds one instance of each collaborator for the lifetime of the process.

	``store`` serves every social read contract (users, friendships, pending
	requests, posts).
	"""

	def __init__(self, store, corpus_storage: CorpusStorage) -> None:
		self.store = store
		self.corpus_storage = corpus_storage
		self.search_data_provider = SearchDataProvider(corpus_storage)
		self.search_data_updater = SearchDataUpdater(store, corpus_storage)
		self.user_index = UserIndex(
			self.search_data_provider,
			store,
			SearchEngine(settings.search_word_start_factor, settings.search_word_end_factor),
			fetch_concurrency=settings.discovery_fetch_concurrency,
		)
		self.user_recommender = UserRecommender(
			store,
			store,
			store,
			store,
			fetch_concurrency=settings.discovery_fetch_concurrency,
		)


def _build_store():
	backend = settings.discovery_store_backend
	if backend == "memory":
		return InMemorySocialStore()
	if backend == "postgres":
		return PostgresSocialStore()
	raise ValueError(f"unknown discovery_store_backend: {backend}")


def _build_corpus_storage() -> CorpusStorage:
	backend = settings.search_corpus_backend
	if backend == "file":
		return FileSearchDataStorage(settings.search_corpus_path)
	if backend == "redis":
		return RedisSearchDataStorage(redis_client, settings.search_corpus_redis_key)
	raise ValueError(f"unknown search_corpus_backend: {backend}")


_container: Optional[DiscoveryContainer] = None


def get_container() -> DiscoveryContainer:
	global _container
	if _container is None:
		_container = DiscoveryContainer(_build_store(), _build_corpus_storage())
	return _container


def set_container(container: Optional[DiscoveryContainer]) -> None:
	global _container
	_container = container

"""Search corpus: the indexable strings mapped to user ids, and its caching.

The corpus lives in a storage backend (a JSON file or a Redis hash). Each
storage exposes a version token that changes on every write, which lets a
``SearchDataProvider`` tell when its cached copy went stale.
"""

from __future__ import annotations

import asyncio
import json
import logging
import os
from pathlib import Path
from typing import Mapping, Optional, Protocol

from redis.exceptions import RedisError

from app.domain.social.exceptions import DependencyUnavailable
from app.domain.social.models import User
from app.domain.social.repositories import UserStore
from app.obs import metrics as obs_metrics

logger = logging.getLogger(__name__)

EMPTY_VERSION = "0"


class CorpusStorage(Protocol):
	async def read(self) -> tuple[dict[str, str], str]:
		"""Return the corpus together with the version it was read at."""
		...

	async def version(self) -> str:
		...

	async def write(self, data: Mapping[str, str]) -> None:
		...


class SearchCorpusProvider(Protocol):
	async def get_search_data(self) -> Mapping[str, str]:
		...

	async def data_needs_update(self) -> bool:
		...

	async def invalidate_cache(self) -> None:
		...


class FileSearchDataStorage:
	"""Keeps the corpus in a local JSON object file.

	Writes land in a temporary file first and atomically replace the target.
	"""

	def __init__(self, path: str | os.PathLike[str]) -> None:
		self._path = Path(path)

	@property
	def path(self) -> Path:
		return self._path

	def _version_of(self, stat: os.stat_result) -> str:
		return f"{stat.st_ino}:{stat.st_mtime_ns}:{stat.st_size}"

	def _read_sync(self) -> tuple[dict[str, str], str]:
		try:
			stat = self._path.stat()
			raw = self._path.read_text(encoding="utf-8")
		except FileNotFoundError:
			return {}, EMPTY_VERSION
		except OSError as exc:
			raise DependencyUnavailable("search_corpus_file") from exc
		try:
			payload = json.loads(raw)
		except ValueError as exc:
			raise DependencyUnavailable("search_corpus_file", "corrupt_corpus") from exc
		if not isinstance(payload, dict):
			raise DependencyUnavailable("search_corpus_file", "corrupt_corpus")
		return {str(key): str(value) for key, value in payload.items()}, self._version_of(stat)

	def _version_sync(self) -> str:
		try:
			return self._version_of(self._path.stat())
		except FileNotFoundError:
			return EMPTY_VERSION
		except OSError as exc:
			raise DependencyUnavailable("search_corpus_file") from exc

	def _write_sync(self, data: Mapping[str, str]) -> None:
		tmp_path = self._path.with_name(self._path.name + ".tmp")
		try:
			self._path.parent.mkdir(parents=True, exist_ok=True)
			tmp_path.write_text(json.dumps(dict(data), ensure_ascii=False), encoding="utf-8")
			os.replace(tmp_path, self._path)
		except OSError as exc:
			raise DependencyUnavailable("search_corpus_file") from exc

	async def read(self) -> tuple[dict[str, str], str]:
		return await asyncio.to_thread(self._read_sync)

	async def version(self) -> str:
		return await asyncio.to_thread(self._version_sync)

	async def write(self, data: Mapping[str, str]) -> None:
		await asyncio.to_thread(self._write_sync, data)


class RedisSearchDataStorage:
	"""Keeps the corpus in a Redis hash next to an ``INCR`` version counter."""

	def __init__(self, client, key: str) -> None:
		self._client = client
		self._key = key
		self._version_key = f"{key}:version"

	async def read(self) -> tuple[dict[str, str], str]:
		try:
			async with self._client.pipeline(transaction=True) as pipe:
				pipe.hgetall(self._key)
				pipe.get(self._version_key)
				data, version = await pipe.execute()
		except RedisError as exc:
			raise DependencyUnavailable("redis") from exc
		return dict(data or {}), str(version or EMPTY_VERSION)

	async def version(self) -> str:
		try:
			version = await self._client.get(self._version_key)
		except RedisError as exc:
			raise DependencyUnavailable("redis") from exc
		return str(version or EMPTY_VERSION)

	async def write(self, data: Mapping[str, str]) -> None:
		try:
			async with self._client.pipeline(transaction=True) as pipe:
				pipe.delete(self._key)
				if data:
					pipe.hset(self._key, mapping=dict(data))
				pipe.incr(self._version_key)
				await pipe.execute()
		except RedisError as exc:
			raise DependencyUnavailable("redis") from exc


class SearchDataProvider:
	"""Serves the corpus from an in-process cache, re-reading storage on demand."""

	def __init__(self, storage: CorpusStorage) -> None:
		self._storage = storage
		self._cache: Optional[dict[str, str]] = None
		self._version: Optional[str] = None
		self._lock = asyncio.Lock()

	async def get_search_data(self) -> Mapping[str, str]:
		cache = self._cache
		if cache is not None:
			return cache
		async with self._lock:
			if self._cache is None:
				data, version = await self._storage.read()
				self._cache, self._version = data, version
				logger.debug("search_corpus_loaded", extra={"entries": len(data), "version": version})
			return self._cache

	async def data_needs_update(self) -> bool:
		if self._cache is None:
			return False
		return await self._storage.version() != self._version

	async def invalidate_cache(self) -> None:
		self._cache = None
		self._version = None


def search_string(user: User) -> str:
	"""Indexable representation of a user: name, surname and username."""

	return " ".join(part for part in (user.name, user.surname, user.username) if part)


class SearchDataUpdater:
	"""Rebuilds the corpus from the current state of the user store."""

	def __init__(self, user_store: UserStore, storage: CorpusStorage) -> None:
		self._user_store = user_store
		self._storage = storage

	async def update_search_data(self) -> int:
		users = await self._user_store.get_all_users()
		index = {search_string(user): user.user_id for user in users}
		await self._storage.write(index)
		obs_metrics.inc_corpus_rebuild()
		logger.info("search_corpus_rebuilt", extra={"entries": len(index)})
		return len(index)

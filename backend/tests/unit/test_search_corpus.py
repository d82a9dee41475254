import json

import pytest

from app.domain.search.corpus import (
	EMPTY_VERSION,
	FileSearchDataStorage,
	RedisSearchDataStorage,
	SearchDataProvider,
	SearchDataUpdater,
	search_string,
)
from app.domain.social.exceptions import DependencyUnavailable
from app.domain.social.memory import InMemorySocialStore
from app.domain.social.models import User


class _CountingStorage:
	def __init__(self, inner) -> None:
		self.inner = inner
		self.reads = 0

	async def read(self):
		self.reads += 1
		return await self.inner.read()

	async def version(self):
		return await self.inner.version()

	async def write(self, data):
		await self.inner.write(data)


def test_search_string_skips_missing_parts():
	assert search_string(User(user_id="1", username="jona82", name="Jonathan", surname="Meier")) == "Jonathan Meier jona82"
	assert search_string(User(user_id="2", username="solo")) == "solo"


@pytest.mark.asyncio
async def test_missing_file_reads_as_empty_corpus(tmp_path):
	storage = FileSearchDataStorage(tmp_path / "absent" / "corpus.json")
	assert await storage.read() == ({}, EMPTY_VERSION)
	assert await storage.version() == EMPTY_VERSION


@pytest.mark.asyncio
async def test_file_write_replaces_content_and_changes_version(tmp_path):
	path = tmp_path / "nested" / "corpus.json"
	storage = FileSearchDataStorage(path)
	await storage.write({"Ann Smith annsmith": "u2"})
	data, first_version = await storage.read()
	assert data == {"Ann Smith annsmith": "u2"}
	assert first_version != EMPTY_VERSION

	await storage.write({"Léo Martin leo": "u5"})
	data, second_version = await storage.read()
	assert data == {"Léo Martin leo": "u5"}
	assert second_version != first_version
	assert json.loads(path.read_text(encoding="utf-8")) == {"Léo Martin leo": "u5"}
	assert not path.with_name(path.name + ".tmp").exists()


@pytest.mark.asyncio
async def test_corrupt_file_is_reported(tmp_path):
	path = tmp_path / "corpus.json"
	path.write_text("{not json", encoding="utf-8")
	with pytest.raises(DependencyUnavailable) as exc_info:
		await FileSearchDataStorage(path).read()
	assert exc_info.value.reason == "corrupt_corpus"


@pytest.mark.asyncio
async def test_non_object_file_is_reported(tmp_path):
	path = tmp_path / "corpus.json"
	path.write_text("[1, 2]", encoding="utf-8")
	with pytest.raises(DependencyUnavailable):
		await FileSearchDataStorage(path).read()


@pytest.mark.asyncio
async def test_redis_storage_round_trips_with_version(fake_redis):
	storage = RedisSearchDataStorage(fake_redis, "search:corpus")
	assert await storage.read() == ({}, EMPTY_VERSION)

	await storage.write({"Ann Smith annsmith": "u2", "Paul Atreides paulo": "u4"})
	data, version = await storage.read()
	assert data == {"Ann Smith annsmith": "u2", "Paul Atreides paulo": "u4"}
	assert version == "1"

	await storage.write({})
	assert await storage.read() == ({}, "2")


@pytest.mark.asyncio
async def test_provider_caches_until_invalidated(tmp_path):
	storage = _CountingStorage(FileSearchDataStorage(tmp_path / "corpus.json"))
	await storage.write({"Ann Smith annsmith": "u2"})
	provider = SearchDataProvider(storage)

	assert await provider.data_needs_update() is False
	assert await provider.get_search_data() == {"Ann Smith annsmith": "u2"}
	assert await provider.get_search_data() == {"Ann Smith annsmith": "u2"}
	assert storage.reads == 1
	assert await provider.data_needs_update() is False

	await storage.write({"Paul Atreides paulo": "u4"})
	assert await provider.data_needs_update() is True
	# the stale cache keeps being served until it is dropped
	assert await provider.get_search_data() == {"Ann Smith annsmith": "u2"}

	await provider.invalidate_cache()
	assert await provider.get_search_data() == {"Paul Atreides paulo": "u4"}
	assert storage.reads == 2
	assert await provider.data_needs_update() is False


@pytest.mark.asyncio
async def test_updater_writes_one_entry_per_user(fake_redis):
	store = InMemorySocialStore()
	await store.seed(
		users=[
			User(user_id="u1", username="jona82", name="Jonathan", surname="Meier"),
			User(user_id="u2", username="annsmith", name="Ann", surname="Smith"),
		]
	)
	storage = RedisSearchDataStorage(fake_redis, "search:corpus")
	entries = await SearchDataUpdater(store, storage).update_search_data()
	assert entries == 2
	data, _ = await storage.read()
	assert data == {"Jonathan Meier jona82": "u1", "Ann Smith annsmith": "u2"}


@pytest.mark.asyncio
async def test_provider_sees_rebuild_through_version(tmp_path):
	store = InMemorySocialStore()
	await store.seed(users=[User(user_id="u1", username="jona82", name="Jonathan")])
	storage = FileSearchDataStorage(tmp_path / "corpus.json")
	updater = SearchDataUpdater(store, storage)
	provider = SearchDataProvider(storage)

	await updater.update_search_data()
	assert await provider.get_search_data() == {"Jonathan jona82": "u1"}

	await store.seed(users=[User(user_id="u2", username="annsmith", name="Ann")])
	await updater.update_search_data()
	assert await provider.data_needs_update() is True

import sys
from pathlib import Path

import pytest
import pytest_asyncio
from fakeredis.aioredis import FakeRedis
from httpx import ASGITransport, AsyncClient

# Ensure backend package is importable when tests run from repo root
BACKEND_ROOT = Path(__file__).resolve().parents[1]
if str(BACKEND_ROOT) not in sys.path:
	sys.path.insert(0, str(BACKEND_ROOT))

from app.domain import container as container_module
from app.domain.container import DiscoveryContainer
from app.domain.search.corpus import FileSearchDataStorage
from app.domain.social.memory import InMemorySocialStore
from app.main import app
from app.settings import settings


@pytest_asyncio.fixture
async def fake_redis():
	from app.infra.redis import redis_client, set_redis_client

	original = redis_client.client
	client = FakeRedis(decode_responses=True)
	set_redis_client(client)
	try:
		yield client
	finally:
		set_redis_client(original)
		await client.flushall()


@pytest.fixture
def social_store():
	return InMemorySocialStore()


@pytest.fixture
def corpus_storage(tmp_path):
	return FileSearchDataStorage(tmp_path / "search_data.json")


@pytest.fixture
def discovery_container(social_store, corpus_storage):
	container = DiscoveryContainer(social_store, corpus_storage)
	container_module.set_container(container)
	try:
		yield container
	finally:
		container_module.set_container(None)


@pytest.fixture
def admin_token(monkeypatch):
	monkeypatch.setattr(settings, "obs_admin_token", "test-admin-token")
	return "test-admin-token"


@pytest_asyncio.fixture
async def api_client(discovery_container):
	transport = ASGITransport(app=app)
	async with AsyncClient(transport=transport, base_url="http://testserver") as client:
		yield client

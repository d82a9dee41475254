import pytest

from app.domain.social.models import User

USERS = [
	User(user_id="u1", username="jona82", name="Jonathan", surname="Meier", country="Switzerland"),
	User(user_id="u2", username="annsmith", name="Ann", surname="Smith", country="Ireland"),
	User(user_id="u3", username="leo", name="Léonard", surname="Dupont", country="France"),
]


async def _seed(social_store, discovery_container) -> None:
	await social_store.seed(users=USERS)
	await discovery_container.search_data_updater.update_search_data()


@pytest.mark.asyncio
async def test_search_users_endpoint(api_client, social_store, discovery_container):
	await _seed(social_store, discovery_container)

	response = await api_client.post("/search", json={"query": "jona82", "limit": 5})
	payload = response.json()
	assert response.status_code == 200
	assert [item["user_id"] for item in payload["items"]] == ["u1"]
	assert payload["items"][0]["name"] == "Jonathan"
	assert payload["cursor"] is None
	assert response.headers["X-Request-Id"]


@pytest.mark.asyncio
async def test_search_is_accent_insensitive_and_honours_exclusions(api_client, social_store, discovery_container):
	await _seed(social_store, discovery_container)

	response = await api_client.post("/search", json={"query": "leo"})
	assert [item["username"] for item in response.json()["items"]] == ["leo"]

	response = await api_client.post("/search", json={"query": "leo", "exclude_ids": ["u3"]})
	assert response.json()["items"] == []


@pytest.mark.asyncio
async def test_search_sees_rebuilt_corpus(api_client, social_store, discovery_container):
	await _seed(social_store, discovery_container)
	assert (await api_client.post("/search", json={"query": "paul"})).json()["items"] == []

	await social_store.seed(users=USERS + [User(user_id="u4", username="paulo", name="Paul", surname="Atreides")])
	await discovery_container.search_data_updater.update_search_data()

	response = await api_client.post("/search", json={"query": "paul"})
	assert [item["user_id"] for item in response.json()["items"]] == ["u4"]


@pytest.mark.asyncio
async def test_search_rejects_negative_limit(api_client, social_store, discovery_container):
	await _seed(social_store, discovery_container)

	response = await api_client.post("/search", json={"query": "ann", "limit": -1})
	payload = response.json()
	assert response.status_code == 400
	assert payload["detail"] == "limit_must_be_non_negative"
	assert payload["request_id"] == response.headers["X-Request-Id"]


@pytest.mark.asyncio
async def test_search_validation_error_envelope(api_client):
	response = await api_client.post("/search", json={"limit": 5})
	payload = response.json()
	assert response.status_code == 422
	assert payload["detail"] == "validation_error"
	assert payload["errors"][0]["loc"] == ["body", "query"]
	assert "request_id" in payload


@pytest.mark.asyncio
async def test_search_unresolvable_user_is_not_found(api_client, social_store, corpus_storage):
	await social_store.seed(users=USERS)
	await corpus_storage.write({"Ghost User ghost": "missing"})

	response = await api_client.post("/search", json={"query": "ghost"})
	assert response.status_code == 404
	assert response.json()["detail"] == "user_not_found"


@pytest.mark.asyncio
async def test_corrupt_corpus_is_service_unavailable(api_client, corpus_storage):
	corpus_storage.path.write_text("{broken", encoding="utf-8")

	response = await api_client.post("/search", json={"query": "ann"})
	assert response.status_code == 503
	assert response.json()["detail"] == "corrupt_corpus"


@pytest.mark.asyncio
async def test_corpus_rebuild_requires_admin(api_client, social_store, admin_token):
	await social_store.seed(users=USERS)

	response = await api_client.post("/search/corpus/rebuild")
	assert response.status_code == 403
	assert response.json()["detail"] == "forbidden"

	response = await api_client.post("/search/corpus/rebuild", headers={"X-Admin-Token": admin_token})
	assert response.status_code == 200
	assert response.json() == {"entries": 3}

	response = await api_client.post("/search", json={"query": "ann"})
	assert [item["user_id"] for item in response.json()["items"]] == ["u2"]

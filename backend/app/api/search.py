"""REST endpoints for user search and the search corpus."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from app.api.errors import map_domain_error
from app.api.ops import require_admin
from app.domain.container import get_container
from app.domain.search import schemas
from app.domain.social.exceptions import DiscoveryError

router = APIRouter(tags=["search"])


@router.post("/search", response_model=schemas.ListResponse[schemas.UserOut])
async def search_users_endpoint(payload: schemas.SearchUsersRequest) -> schemas.ListResponse[schemas.UserOut]:
	container = get_container()
	try:
		users = await container.user_index.users_matching(payload.query, payload.limit, payload.exclude_ids)
	except DiscoveryError as exc:
		raise map_domain_error(exc) from exc
	return schemas.ListResponse[schemas.UserOut](items=[schemas.UserOut.from_user(user) for user in users])


@router.post("/search/corpus/rebuild", response_model=schemas.CorpusRebuildResponse)
async def rebuild_corpus_endpoint(_: None = Depends(require_admin)) -> schemas.CorpusRebuildResponse:
	container = get_container()
	try:
		entries = await container.search_data_updater.update_search_data()
	except DiscoveryError as exc:
		raise map_domain_error(exc) from exc
	return schemas.CorpusRebuildResponse(entries=entries)

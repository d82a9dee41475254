"""REST endpoint for friend recommendations."""

from __future__ import annotations

from fastapi import APIRouter, Query

from app.api.errors import map_domain_error
from app.domain.container import get_container
from app.domain.recommendations.schemas import RecommendationOut
from app.domain.search.schemas import ListResponse
from app.domain.social.exceptions import DiscoveryError

router = APIRouter(tags=["recommendations"])


@router.get("/recommendations/{user_id}", response_model=ListResponse[RecommendationOut])
async def recommendations_endpoint(
	user_id: str,
	limit: int = Query(default=10, le=100),
) -> ListResponse[RecommendationOut]:
	container = get_container()
	try:
		results = await container.user_recommender.get_recommended_users(user_id, limit)
	except DiscoveryError as exc:
		raise map_domain_error(exc) from exc
	return ListResponse[RecommendationOut](items=[RecommendationOut.from_result(result) for result in results])

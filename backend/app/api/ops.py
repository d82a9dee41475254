"""Operations endpoints: liveness, readiness, metrics and the admin guard."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException, Response, status
from fastapi.responses import JSONResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from app.domain.container import get_container
from app.domain.social.exceptions import DependencyUnavailable
from app.settings import settings

logger = logging.getLogger(__name__)

router = APIRouter(tags=["ops"])


def _bearer_or_header(x_admin_token: Optional[str], authorization: Optional[str]) -> Optional[str]:
	if x_admin_token:
		return x_admin_token
	scheme, _, credentials = (authorization or "").partition(" ")
	if scheme.lower() == "bearer" and credentials:
		return credentials
	return None


async def require_admin(
	x_admin_token: Optional[str] = Header(default=None, alias="X-Admin-Token"),
	authorization: Optional[str] = Header(default=None, alias="Authorization"),
) -> None:
	expected = settings.obs_admin_token
	if not expected:
		# No configured token means no admin access at all
		raise HTTPException(status.HTTP_403_FORBIDDEN, detail="admin_token_not_configured")
	if _bearer_or_header(x_admin_token, authorization) != expected:
		raise HTTPException(status.HTTP_403_FORBIDDEN, detail="forbidden")


async def require_metrics_access(
	x_admin_token: Optional[str] = Header(default=None, alias="X-Admin-Token"),
	authorization: Optional[str] = Header(default=None, alias="Authorization"),
) -> None:
	if not settings.obs_metrics_public:
		await require_admin(x_admin_token=x_admin_token, authorization=authorization)


@router.get("/health/live")
async def health_live() -> dict[str, str]:
	return {"status": "ok", "service": settings.service_name, "commit": settings.git_commit}


@router.get("/health/ready")
async def health_ready() -> Response:
	"""Ready once the search corpus storage answers a version probe."""

	try:
		version = await get_container().corpus_storage.version()
	except DependencyUnavailable as exc:
		logger.warning("readiness_failed", extra={"dependency": exc.dependency})
		return JSONResponse(
			{"status": "unavailable", "dependency": exc.dependency},
			status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
		)
	return JSONResponse({"status": "ok", "corpus_version": version})


@router.get("/metrics")
async def prometheus_metrics(_: None = Depends(require_metrics_access)) -> Response:
	return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

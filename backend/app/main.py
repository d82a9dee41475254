"""FastAPI application entrypoint."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.api import ops, recommendations, search
from app.api.errors import install_error_handlers
from app.infra import postgres
from app.infra import redis as redis_infra
from app.obs import init as obs_init
from app.settings import settings


@asynccontextmanager
async def lifespan(app: FastAPI):
	if settings.discovery_store_backend == "postgres":
		await postgres.init_pool()
	try:
		yield
	finally:
		await postgres.close_pool()
		if settings.search_corpus_backend == "redis":
			await redis_infra.close_redis()


app = FastAPI(title="User Discovery Engine", lifespan=lifespan)
install_error_handlers(app)
obs_init(app)

app.include_router(search.router)
app.include_router(recommendations.router)
app.include_router(ops.router)

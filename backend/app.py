"""
FastAPI application entry point for the backend.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from backend.config import Settings
from backend.cors import ALLOWED_ORIGINS, install_cors
from backend.db import MessageStore, SqlMessageStore
from backend.routes import pages_router, router
from models.gemini import GeminiClient, TextGenerator

logger = logging.getLogger(__name__)


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    yield
    logger.info("Shutting down, closing message store")
    app.state.message_store.close()


async def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


def create_app(
    settings: Settings,
    store: Optional[MessageStore] = None,
    ai_client: Optional[TextGenerator] = None,
) -> FastAPI:
    if store is None:
        store = SqlMessageStore(settings.database_url)
    if ai_client is None:
        ai_client = GeminiClient(
            api_key=settings.gemini_api_key,
            model=settings.gemini_model,
            timeout_seconds=settings.ai_timeout_seconds,
        )

    app = FastAPI(
        title="Contact & AI Backend (FastAPI)", version="0.1.0", lifespan=_lifespan
    )
    app.state.settings = settings
    app.state.message_store = store
    app.state.ai_client = ai_client

    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    install_cors(app, ALLOWED_ORIGINS)

    app.include_router(router, prefix=settings.api_prefix)
    app.include_router(pages_router)
    return app

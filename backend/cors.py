"""
Origin allow-list enforcement.

CORSMiddleware only decides which response headers to send; it still lets
the request through to the route. OriginGateMiddleware runs in front of it
and refuses requests from unknown origins outright.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.datastructures import Headers
from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Receive, Scope, Send

logger = logging.getLogger(__name__)

ALLOWED_ORIGINS = (
    "https://frontend-seven-omega-51.vercel.app",
    "https://pratik-xi.vercel.app",
    "http://localhost:5500",
    "http://127.0.0.1:5500",
    "http://localhost:3000",
    "http://127.0.0.1:3000",
)

CORS_REJECTED_MESSAGE = "Not allowed by CORS"


def is_origin_allowed(origin: Optional[str], allowed: Iterable[str]) -> bool:
    """Requests without an Origin are allowed; otherwise exact match only."""
    if not origin:
        return True
    return origin in allowed


class OriginGateMiddleware:
    def __init__(self, app: ASGIApp, allowed_origins: Iterable[str] = ALLOWED_ORIGINS):
        self.app = app
        self.allowed_origins = frozenset(allowed_origins)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        origin = Headers(scope=scope).get("origin")
        if not is_origin_allowed(origin, self.allowed_origins):
            logger.warning(
                "Rejected %s %s from origin %s",
                scope["method"],
                scope["path"],
                origin,
            )
            response = JSONResponse(
                status_code=403, content={"error": CORS_REJECTED_MESSAGE}
            )
            await response(scope, receive, send)
            return

        await self.app(scope, receive, send)


def install_cors(app: FastAPI, allowed_origins: Iterable[str] = ALLOWED_ORIGINS) -> None:
    origins = list(allowed_origins)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )
    # Starlette runs middleware in reverse registration order: the gate is outermost.
    app.add_middleware(OriginGateMiddleware, allowed_origins=origins)

"""
Dependency wiring for the FastAPI app.

Settings, the message store and the AI client are built once in
create_app() and attached to app.state; routes receive them from here.
"""

from __future__ import annotations

import json

from fastapi import HTTPException, Request

from backend.config import Settings
from backend.db import MessageStore
from models.gemini import TextGenerator

INVALID_BODY_MESSAGE = "Invalid request body"


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_message_store(request: Request) -> MessageStore:
    return request.app.state.message_store


def get_ai_client(request: Request) -> TextGenerator:
    return request.app.state.ai_client


async def get_json_body(request: Request) -> dict:
    """
    Return the JSON object sent with the request.

    Requests without a body, with a non-JSON content type, or whose JSON is
    not an object yield an empty dict. Only unparseable JSON is rejected.
    """
    body = await request.body()
    if not body:
        return {}

    media_type = request.headers.get("content-type", "").split(";")[0].strip().lower()
    if media_type != "application/json" and not media_type.endswith("+json"):
        return {}

    try:
        data = json.loads(body)
    except ValueError:
        raise HTTPException(status_code=400, detail=INVALID_BODY_MESSAGE)
    return data if isinstance(data, dict) else {}

"""
HTTP routes for the backend API.
"""

from __future__ import annotations

import logging
import secrets

from typing import Type, TypeVar

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, ValidationError

from backend.config import Settings
from backend.db import MessageRecord, MessageStore
from backend.dependencies import (
    INVALID_BODY_MESSAGE,
    get_ai_client,
    get_json_body,
    get_message_store,
    get_settings,
)
from backend.schemas import (
    AiRequest,
    AiResponse,
    ContactRequest,
    ContactResponse,
    ErrorResponse,
    MessageResponse,
    MessagesRequest,
)
from models.gemini import TextGenerator

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

router = APIRouter()
pages_router = APIRouter()

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    401: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def _json_body_doc(model: Type[BaseModel]) -> dict:
    return {
        "requestBody": {
            "content": {"application/json": {"schema": model.model_json_schema()}}
        }
    }


def parse_payload(model: Type[T], body: dict) -> T:
    try:
        return model.model_validate(body)
    except ValidationError as exc:
        logger.info("Rejected %s payload: %s", model.__name__, exc.errors())
        raise HTTPException(status_code=400, detail=INVALID_BODY_MESSAGE)


TEST_PAGE_TEMPLATE = """
<html>
  <body style="font-family: sans-serif;">
    <h2>Gemini AI Test</h2>
    <input id="prompt" style="width:300px" placeholder="Enter prompt..." />
    <button onclick="send()">Ask</button>
    <pre id="output"></pre>
    <script>
      async function send() {
        const res = await fetch('__AI_PATH__', {
          method: 'POST',
          headers: {'Content-Type':'application/json'},
          body: JSON.stringify({ prompt: document.getElementById('prompt').value })
        });
        const data = await res.json();
        document.getElementById('output').innerText = data.text || data.error;
      }
    </script>
  </body>
</html>
"""


@router.post(
    "/ai",
    response_model=AiResponse,
    responses=ERROR_RESPONSES,
    openapi_extra=_json_body_doc(AiRequest),
)
async def generate_ai_response(
    body: dict = Depends(get_json_body),
    ai_client: TextGenerator = Depends(get_ai_client),
):
    payload = parse_payload(AiRequest, body)
    if not payload.prompt:
        raise HTTPException(status_code=400, detail="Prompt is required")

    try:
        text = await ai_client.generate_text(payload.prompt)
    except Exception:
        logger.exception("AI API error")
        raise HTTPException(status_code=500, detail="Failed to get AI response")
    return AiResponse(text=text)


@router.post(
    "/contact",
    response_model=ContactResponse,
    status_code=201,
    responses=ERROR_RESPONSES,
    openapi_extra=_json_body_doc(ContactRequest),
)
def submit_contact(
    body: dict = Depends(get_json_body),
    store: MessageStore = Depends(get_message_store),
):
    payload = parse_payload(ContactRequest, body)
    if not payload.name or not payload.email or not payload.message:
        raise HTTPException(status_code=400, detail="Please fill all required fields")

    record = MessageRecord(
        name=payload.name,
        email=payload.email,
        phone=payload.phone,
        message=payload.message,
    )
    try:
        store.save_message(record)
    except Exception:
        logger.exception("Contact form error")
        raise HTTPException(status_code=500, detail="Failed to save message")
    logger.info("Saved contact message %s", record.id)
    return ContactResponse(success=True, message="Message saved!")


@router.post(
    "/messages",
    response_model=list[MessageResponse],
    responses=ERROR_RESPONSES,
    openapi_extra=_json_body_doc(MessagesRequest),
)
def list_messages(
    body: dict = Depends(get_json_body),
    store: MessageStore = Depends(get_message_store),
    settings: Settings = Depends(get_settings),
):
    """
    Return every stored message, newest first, to callers holding the admin password.
    """
    password = MessagesRequest.model_validate(body).password
    if not isinstance(password, str) or not secrets.compare_digest(
        password.encode("utf-8"), settings.admin_password.encode("utf-8")
    ):
        raise HTTPException(status_code=401, detail="Unauthorized")

    try:
        records = store.list_messages()
    except Exception:
        logger.exception("Message listing error")
        raise HTTPException(status_code=500, detail="Failed to fetch messages")
    return [MessageResponse(**record.as_dict()) for record in records]


@pages_router.get("/", response_class=HTMLResponse, include_in_schema=False)
def test_page(settings: Settings = Depends(get_settings)):
    return TEST_PAGE_TEMPLATE.replace("__AI_PATH__", f"{settings.api_prefix}/ai")

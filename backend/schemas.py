"""
Pydantic schemas for the FastAPI backend.

Request fields are optional so that presence checks in the handlers,
not framework validation, decide the error message.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal, Optional

from pydantic import BaseModel


class AiRequest(BaseModel):
    prompt: Optional[str] = None


class AiResponse(BaseModel):
    text: str


class ContactRequest(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    message: Optional[str] = None


class ContactResponse(BaseModel):
    success: Literal[True]
    message: str


class MessagesRequest(BaseModel):
    # Any JSON value; anything but the exact secret string is a mismatch.
    password: Any = None


class MessageResponse(BaseModel):
    id: str
    name: str
    email: str
    phone: Optional[str] = None
    message: str
    createdAt: datetime


class ErrorResponse(BaseModel):
    error: str

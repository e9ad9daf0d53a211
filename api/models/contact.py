"""Pydantic models for contact and admin endpoints."""

from pydantic import BaseModel
from typing import Literal, Optional, Union


class ContactRequest(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    message: Optional[str] = None
    captcha: Optional[Union[str, int]] = None
    captchaId: Optional[str] = None


class ContactMessage(BaseModel):
    id: str
    name: str
    email: str
    message: str
    timestamp: str
    ip: Optional[str] = None
    userAgent: Optional[str] = None
    status: Literal['new', 'read'] = 'new'
    readAt: Optional[str] = None


class ContactResponse(BaseModel):
    success: bool = True
    message: str
    id: str


class MessagesResponse(BaseModel):
    success: bool = True
    messages: list[ContactMessage]
    total: int


class MarkReadResponse(BaseModel):
    success: bool = True
    message: str


class ClearResponse(BaseModel):
    success: bool = True
    message: str
    deleted: int


class CaptchaResponse(BaseModel):
    id: str
    question: str


class HealthResponse(BaseModel):
    status: str
    timestamp: str
    service: str

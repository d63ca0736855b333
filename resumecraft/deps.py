"""FastAPI dependencies that hand out the collaborators stored on app.state."""

from __future__ import annotations

from fastapi import Request

from .config import Settings
from .enhancer import DocumentEnhancer
from .payments import PaymentGateway
from .store import DocumentStore


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_enhancer(request: Request) -> DocumentEnhancer:
    return request.app.state.enhancer


def get_store(request: Request) -> DocumentStore:
    return request.app.state.store


def get_payments(request: Request) -> PaymentGateway:
    return request.app.state.payments

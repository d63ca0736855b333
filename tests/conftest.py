"""Shared test fixtures."""

from __future__ import annotations

import hashlib
import hmac
import json
import time
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from resumecraft.auth import create_token
from resumecraft.config import Settings
from resumecraft.generation import GenerationError
from resumecraft.main import create_app
from resumecraft.payments import PaymentGateway
from resumecraft.store import DocumentStore


class StubGenerator:
    """Records prompts and returns a canned reply, or raises when `fail` is set."""

    def __init__(self, reply: str = "", fail: bool = False):
        self.reply = reply
        self.fail = fail
        self.calls: list[tuple[str, str]] = []

    def generate(self, system_prompt: str, user_prompt: str) -> str:
        self.calls.append((system_prompt, user_prompt))
        if self.fail:
            raise GenerationError("Failed to generate AI content")
        return self.reply


@pytest.fixture
def settings() -> Settings:
    return Settings(
        openai_api_key="sk-test",
        jwt_secret="test-secret-0123456789abcdef0123456789",
        stripe_secret_key="sk_test_123",
        stripe_webhook_secret="whsec_test",
        client_url="https://app.example.com",
    )


@pytest.fixture
def generator() -> StubGenerator:
    return StubGenerator(reply="Experienced professional.")


@pytest.fixture
def store() -> DocumentStore:
    return DocumentStore.from_url("sqlite://")


@pytest.fixture
def payments() -> PaymentGateway:
    return MagicMock(spec=PaymentGateway)


@pytest.fixture
def gateway(settings) -> PaymentGateway:
    return PaymentGateway(
        secret_key=settings.stripe_secret_key,
        webhook_secret=settings.stripe_webhook_secret,
        client_url=settings.client_url,
    )


@pytest.fixture
def stripe_client(settings, generator, store, gateway) -> TestClient:
    """Client wired to a real PaymentGateway; patch the stripe SDK calls per test."""
    app = create_app(settings, generator=generator, store=store, payments=gateway)
    return TestClient(app)


def signed_webhook(event: dict, secret: str) -> tuple[bytes, str]:
    """Serialize an event and build a matching Stripe-Signature header."""
    payload = json.dumps(event).encode("utf-8")
    timestamp = int(time.time())
    signed = f"{timestamp}.".encode("utf-8") + payload
    digest = hmac.new(secret.encode("utf-8"), signed, hashlib.sha256).hexdigest()
    return payload, f"t={timestamp},v1={digest}"


@pytest.fixture
def client(settings, generator, store, payments) -> TestClient:
    app = create_app(settings, generator=generator, store=store, payments=payments)
    return TestClient(app)


@pytest.fixture
def auth_headers(settings) -> dict:
    token = create_token(settings, "user-1", "ada@example.com")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def other_auth_headers(settings) -> dict:
    token = create_token(settings, "user-2", "bob@example.com")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def sample_resume() -> dict:
    return {
        "personalInfo": {"name": "Ada Lovelace", "location": "London", "email": "ada@example.com"},
        "education": [
            {"degree": "BSc Mathematics", "institution": "University of London", "date": "1835"},
        ],
        "experience": [
            {
                "position": "Analyst",
                "company": "Analytical Engine Co",
                "date": "1842-1843",
                "description": "Wrote the first published algorithm.",
            },
        ],
        "skills": [{"category": "Languages", "skills": "Go, Python"}],
        "summary": "Mathematician.",
    }


@pytest.fixture
def sample_cover_letter() -> dict:
    return {
        "personalInfo": {"name": "Ada Lovelace", "location": "London"},
        "recipientInfo": {"name": "Charles Babbage", "title": "Director", "company": "Engines Ltd"},
        "jobInfo": {"title": "Programmer", "reference": "REF-42"},
        "experience": "I programmed engines.",
        "closing": "Kind regards.",
    }

"""Application settings loaded from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

DEFAULT_CORS_ORIGINS = ("http://localhost:3000", "http://127.0.0.1:3000")

DEFAULT_PRODUCT_IDS = {
    "basic": "prod_S3zgSNsoc2gdbw",
    "pro": "prod_S3zg0vtAQQpt0Q",
}


def parse_cors_origins(value: Optional[str]) -> Tuple[str, ...]:
    if not value:
        return DEFAULT_CORS_ORIGINS
    origins = tuple(o.strip() for o in value.split(",") if o.strip())
    return origins or DEFAULT_CORS_ORIGINS


@dataclass(frozen=True)
class Settings:
    openai_api_key: str = ""
    openai_model: str = "gpt-4o"
    jwt_secret: str = ""
    jwt_algorithm: str = "HS256"
    database_url: str = "sqlite://"
    stripe_secret_key: str = ""
    stripe_webhook_secret: str = ""
    stripe_products: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_PRODUCT_IDS))
    client_url: str = "http://localhost:3000"
    cors_origins: Tuple[str, ...] = DEFAULT_CORS_ORIGINS
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from os.environ (call load_dotenv() first)."""
        env = os.environ
        return cls(
            openai_api_key=env.get("OPENAI_API_KEY", "").strip(),
            openai_model=(env.get("OPENAI_MODEL") or "gpt-4o").strip(),
            jwt_secret=env.get("JWT_SECRET", "").strip(),
            jwt_algorithm=(env.get("JWT_ALGORITHM") or "HS256").strip(),
            database_url=(env.get("DATABASE_URL") or "sqlite://").strip(),
            stripe_secret_key=env.get("STRIPE_SECRET_KEY", "").strip(),
            stripe_webhook_secret=env.get("STRIPE_WEBHOOK_SECRET", "").strip(),
            stripe_products={
                "basic": (env.get("STRIPE_PRODUCT_BASIC") or DEFAULT_PRODUCT_IDS["basic"]).strip(),
                "pro": (env.get("STRIPE_PRODUCT_PRO") or DEFAULT_PRODUCT_IDS["pro"]).strip(),
            },
            client_url=(env.get("CLIENT_URL") or "http://localhost:3000").strip().rstrip("/"),
            cors_origins=parse_cors_origins(env.get("CORS_ALLOW_ORIGINS")),
            log_level=(env.get("LOG_LEVEL") or "INFO").strip().upper(),
        )

from __future__ import annotations

import logging
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import Settings
from .enhancer import DocumentEnhancer, Generator
from .generation import GenerationClient
from .payments import PaymentGateway
from .routers.payment import router as payment_router
from .routers.records import cover_letter_router, resume_router
from .store import DocumentStore

# -------------------------------------------------
# Setup
# -------------------------------------------------

load_dotenv()
logger = logging.getLogger(__name__)


def _warn_missing(settings: Settings) -> None:
    if not settings.openai_api_key:
        logger.warning("OPENAI_API_KEY is missing. Records will be saved without AI enhancement.")
    if not settings.jwt_secret:
        logger.warning("JWT_SECRET is missing. Every authenticated route will answer 401.")
    if not settings.stripe_secret_key:
        logger.warning("STRIPE_SECRET_KEY is missing. Checkout requests will fail.")
    if settings.database_url in ("sqlite://", "sqlite:///:memory:"):
        logger.warning("DATABASE_URL is not set. Using an in-memory database; data resets on restart.")


# -------------------------------------------------
# Error envelope
# -------------------------------------------------

async def http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content={"success": False, "message": "Invalid request body", "errors": jsonable_errors(exc)},
    )


def jsonable_errors(exc: RequestValidationError) -> list:
    return [{"loc": list(e.get("loc", ())), "msg": e.get("msg", "")} for e in exc.errors()]


# -------------------------------------------------
# App
# -------------------------------------------------

def create_app(
    settings: Optional[Settings] = None,
    *,
    generator: Optional[Generator] = None,
    store: Optional[DocumentStore] = None,
    payments: Optional[PaymentGateway] = None,
) -> FastAPI:
    settings = settings or Settings.from_env()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    _warn_missing(settings)

    app = FastAPI(title="ResumeCraft API", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(StarletteHTTPException, http_error)
    app.add_exception_handler(RequestValidationError, validation_error)

    app.state.settings = settings
    app.state.enhancer = DocumentEnhancer(
        generator or GenerationClient(api_key=settings.openai_api_key, model=settings.openai_model)
    )
    app.state.store = store or DocumentStore.from_url(settings.database_url)
    app.state.payments = payments or PaymentGateway(
        secret_key=settings.stripe_secret_key,
        webhook_secret=settings.stripe_webhook_secret,
        client_url=settings.client_url,
    )

    app.include_router(resume_router)
    app.include_router(cover_letter_router)
    app.include_router(payment_router)

    # -------------------------------------------------
    # Routes
    # -------------------------------------------------

    @app.get("/")
    def index():
        return {"ok": True, "routes": ["/healthz", "/api/resume", "/api/cover-letter", "/api/payment", "/docs"]}

    @app.get("/healthz")
    async def healthz():
        return {"ok": True}

    return app


app = create_app()

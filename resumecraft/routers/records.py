"""Generate / fetch / list endpoints shared by resumes and cover letters."""

from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError

from ..auth import get_current_user
from ..deps import get_enhancer, get_store
from ..enhancer import DocumentEnhancer
from ..model import AuthUser
from ..schemas import ApiResponse
from ..store import COVER_LETTERS, RESUMES, DocumentStore

logger = logging.getLogger(__name__)


def make_router(prefix: str, collection: str, label: str, enhance: str) -> APIRouter:
    """Build the router for one record kind.

    `enhance` names the DocumentEnhancer method applied before saving.
    """
    router = APIRouter(prefix=prefix, tags=[collection])
    noun = label.lower()

    @router.post(
        "/generate",
        status_code=201,
        response_model=ApiResponse,
        response_model_exclude_unset=True,
    )
    def generate(
        record: Dict[str, Any] = Body(...),
        user: AuthUser = Depends(get_current_user),
        enhancer: DocumentEnhancer = Depends(get_enhancer),
        store: DocumentStore = Depends(get_store),
    ):
        logger.info("%s.generate user=%s", collection, user.id)
        try:
            enhanced = getattr(enhancer, enhance)(record)
            data = {**enhanced, "userId": user.id}
        except Exception:
            logger.exception("%s generation failed", noun)
            raise HTTPException(status_code=500, detail=f"Failed to generate {noun}")

        try:
            saved = store.create(collection, data)
        except SQLAlchemyError:
            logger.exception("Database save error")
            # still hand back the enhanced record
            return ApiResponse(
                success=True,
                data=data,
                warning=f"{label} was enhanced but could not be saved to database",
            )
        return ApiResponse(success=True, data=saved)

    @router.get("/{record_id}", response_model=ApiResponse, response_model_exclude_unset=True)
    def get_one(
        record_id: str,
        user: AuthUser = Depends(get_current_user),
        store: DocumentStore = Depends(get_store),
    ):
        try:
            found = store.find_by_id(collection, record_id)
        except SQLAlchemyError:
            logger.exception("Get %s error", noun)
            raise HTTPException(status_code=500, detail=f"Failed to retrieve {noun}")

        if found is None:
            raise HTTPException(status_code=404, detail=f"{label} not found")
        if found.get("userId") != user.id:
            raise HTTPException(status_code=403, detail=f"Not authorized to access this {noun}")
        return ApiResponse(success=True, data=found)

    @router.get("", response_model=ApiResponse, response_model_exclude_unset=True)
    def list_mine(
        user: AuthUser = Depends(get_current_user),
        store: DocumentStore = Depends(get_store),
    ):
        try:
            found = store.find_by_user_id(collection, user.id)
        except SQLAlchemyError:
            logger.exception("Get %ss error", noun)
            raise HTTPException(status_code=500, detail=f"Failed to retrieve {noun}s")
        return ApiResponse(success=True, data=found)

    return router


resume_router = make_router("/api/resume", RESUMES, "Resume", "enhance_resume")
cover_letter_router = make_router("/api/cover-letter", COVER_LETTERS, "Cover letter", "enhance_cover_letter")

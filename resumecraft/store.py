"""Document store for resumes, cover letters and users on top of SQLAlchemy."""

from __future__ import annotations

import datetime
import logging
import uuid
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

from sqlalchemy import JSON, DateTime, Integer, String, create_engine, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Mapped, Session, declarative_base, mapped_column, sessionmaker
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)

Base = declarative_base()

RESUMES = "resumes"
COVER_LETTERS = "coverLetters"
USERS = "users"


class Document(Base):
    __tablename__ = "documents"
    pk: Mapped[int] = mapped_column(Integer, primary_key=True)
    collection: Mapped[str] = mapped_column(String(64), index=True)
    doc_id: Mapped[str] = mapped_column(String(64), index=True)
    user_id: Mapped[Optional[str]] = mapped_column(String(255), index=True, nullable=True)
    data: Mapped[dict] = mapped_column(JSON)
    created_at: Mapped[datetime.datetime] = mapped_column(DateTime)


def make_engine(url: str) -> Engine:
    if url in ("sqlite://", "sqlite:///:memory:"):
        # one shared connection, or every session would see its own empty database
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
            future=True,
        )
    return create_engine(url, future=True)


def _now() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


def _to_record(doc: Document) -> Dict[str, Any]:
    return {**doc.data, "id": doc.doc_id}


class DocumentStore:
    """Schemaless JSON records grouped by collection name."""

    def __init__(self, engine: Engine):
        self.engine = engine
        self._sessions = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)

    @classmethod
    def from_url(cls, url: str) -> "DocumentStore":
        store = cls(make_engine(url))
        store.init_db()
        return store

    def init_db(self) -> None:
        Base.metadata.create_all(bind=self.engine)

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Provide a transactional scope around a series of operations."""
        session = self._sessions()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def create(self, collection: str, data: Dict[str, Any]) -> Dict[str, Any]:
        created = _now()
        record = {k: v for k, v in data.items() if k != "id"}
        record["createdAt"] = created.isoformat()
        doc = Document(
            collection=collection,
            doc_id=uuid.uuid4().hex,
            user_id=_user_key(data.get("userId")),
            data=record,
            created_at=created,
        )
        with self.session() as s:
            s.add(doc)
        logger.info("store.create collection=%s id=%s", collection, doc.doc_id)
        return _to_record(doc)

    def find_by_id(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        with self.session() as s:
            doc = s.scalars(
                select(Document).where(Document.collection == collection, Document.doc_id == doc_id)
            ).first()
            return _to_record(doc) if doc is not None else None

    def find_by_user_id(self, collection: str, user_id: str) -> List[Dict[str, Any]]:
        with self.session() as s:
            docs = s.scalars(
                select(Document)
                .where(Document.collection == collection, Document.user_id == _user_key(user_id))
                .order_by(Document.created_at, Document.pk)
            ).all()
            return [_to_record(d) for d in docs]

    def update(self, collection: str, doc_id: str, fields: Dict[str, Any]) -> Dict[str, Any]:
        """Merge `fields` into the document, creating it when it does not exist."""
        with self.session() as s:
            doc = s.scalars(
                select(Document).where(Document.collection == collection, Document.doc_id == doc_id)
            ).first()
            if doc is None:
                doc = Document(
                    collection=collection,
                    doc_id=doc_id,
                    user_id=doc_id if collection == USERS else None,
                    data={"createdAt": _now().isoformat()},
                    created_at=_now(),
                )
                s.add(doc)
            # reassign so the JSON column is flagged dirty
            doc.data = {**doc.data, **fields, "updatedAt": _now().isoformat()}
        logger.info("store.update collection=%s id=%s fields=%s", collection, doc_id, ",".join(fields))
        return _to_record(doc)


def _user_key(user_id: Any) -> Optional[str]:
    return None if user_id is None else str(user_id)

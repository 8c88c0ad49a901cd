from __future__ import annotations

import datetime as dt
import json
import logging

from sqlalchemy import DateTime, String, Text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Mapped, mapped_column

from hesab.db import init_db, new_session
from hesab.db_base import Base
from hesab.domain.models import FinancialDocument
from hesab.errors import DocumentFormatError, PersistenceError
from hesab.repositories.document_codec import document_from_record, document_to_record
from hesab.repositories.document_repository import DOCUMENT_KEY, DocumentRepository

logger = logging.getLogger(__name__)


class DocumentRow(Base):
    __tablename__ = "documents"

    key: Mapped[str] = mapped_column(String(64), primary_key=True)
    payload: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), nullable=False)


class SqlDocumentRepository(DocumentRepository):
    """
    Same contract as JsonDocumentRepository, backed by a one-row-per-key table.
    The document is stored as serialized JSON text, never split into tables.
    """

    def __init__(self, *, database_url: str | None = None, key: str = DOCUMENT_KEY) -> None:
        self._url = database_url
        self._key = key
        try:
            init_db(database_url)
        except SQLAlchemyError as e:
            raise PersistenceError(f"cannot initialise database: {e}") from e

    def load(self) -> FinancialDocument | None:
        try:
            with new_session(self._url) as s:
                row = s.get(DocumentRow, self._key)
                raw = row.payload if row is not None else None
        except SQLAlchemyError as e:
            raise PersistenceError(f"cannot read document '{self._key}': {e}") from e

        if raw is None:
            return None

        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as e:
            raise DocumentFormatError(f"document '{self._key}': invalid JSON ({e})") from e

        logger.info("Loaded document '%s' from database", self._key)
        return document_from_record(payload)

    def save(self, document: FinancialDocument) -> None:
        raw = json.dumps(document_to_record(document), ensure_ascii=False)
        now = dt.datetime.now(dt.timezone.utc)

        try:
            with new_session(self._url) as s:
                row = s.get(DocumentRow, self._key)
                if row is None:
                    s.add(DocumentRow(key=self._key, payload=raw, updated_at=now))
                else:
                    row.payload = raw
                    row.updated_at = now
                s.commit()
        except SQLAlchemyError as e:
            raise PersistenceError(f"cannot write document '{self._key}': {e}") from e

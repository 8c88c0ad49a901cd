from __future__ import annotations

import json
import logging
from pathlib import Path

from hesab.domain.models import FinancialDocument
from hesab.errors import DocumentFormatError, PersistenceError
from hesab.repositories.document_codec import document_from_record, document_to_record
from hesab.repositories.document_repository import DocumentRepository

logger = logging.getLogger(__name__)


class JsonDocumentRepository(DocumentRepository):
    """
    Whole document in one JSON file.
    - load(): None when the file does not exist yet (first run)
    - save(): replaces the file atomically (tmp + rename)
    """

    def __init__(self, *, document_path: Path) -> None:
        self._path = document_path

    def load(self) -> FinancialDocument | None:
        if not self._path.exists():
            return None

        try:
            raw = self._path.read_text(encoding="utf-8")
        except OSError as e:
            raise PersistenceError(f"cannot read {self._path}: {e}") from e

        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as e:
            raise DocumentFormatError(f"{self._path.name}: invalid JSON ({e})") from e

        doc = document_from_record(payload)
        logger.info("Loaded document from %s", self._path)
        return doc

    def save(self, document: FinancialDocument) -> None:
        payload = document_to_record(document)
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp = self._path.with_suffix(self._path.suffix + ".tmp")
            tmp.write_text(
                json.dumps(payload, ensure_ascii=False, indent=2) + "\n",
                encoding="utf-8",
            )
            tmp.replace(self._path)
        except OSError as e:
            raise PersistenceError(f"cannot write {self._path}: {e}") from e
        logger.debug("Saved document to %s", self._path)

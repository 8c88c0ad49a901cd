from __future__ import annotations

from dataclasses import dataclass, field
import json

from hesab.domain.models import FinancialDocument
from hesab.repositories.document_codec import document_from_record, document_to_record
from hesab.repositories.document_repository import DOCUMENT_KEY


@dataclass
class InMemoryDocumentRepository:
    """
    Key/value blob store kept in a dict.
    Documents go through the same codec as the real stores, so what comes
    back from load() is a decoded copy, never the saved object itself.
    """
    _blobs: dict[str, str] = field(default_factory=dict)
    save_count: int = 0

    def load(self) -> FinancialDocument | None:
        raw = self._blobs.get(DOCUMENT_KEY)
        if raw is None:
            return None
        return document_from_record(json.loads(raw))

    def save(self, document: FinancialDocument) -> None:
        self._blobs[DOCUMENT_KEY] = json.dumps(document_to_record(document), ensure_ascii=False)
        self.save_count += 1

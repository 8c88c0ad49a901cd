from __future__ import annotations

from typing import Protocol

from hesab.domain.models import FinancialDocument

# The whole document lives under this one logical key.
DOCUMENT_KEY = "current_data"


class DocumentRepository(Protocol):
    def load(self) -> FinancialDocument | None: ...
    def save(self, document: FinancialDocument) -> None: ...

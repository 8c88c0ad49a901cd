from __future__ import annotations

from functools import lru_cache

from hesab.repositories.document_repository import DocumentRepository
from hesab.repositories.json_document_repository import JsonDocumentRepository
from hesab.repositories.sql_document_repository import SqlDocumentRepository
from hesab.services.finance_service import FinanceService
from hesab.settings import get_settings


@lru_cache
def get_document_repo() -> DocumentRepository:
    # If HESAB_DATABASE_URL is set -> use SQL repo (Postgres/SQLite)
    settings = get_settings()
    if settings.database_url:
        return SqlDocumentRepository(database_url=settings.database_url)
    return JsonDocumentRepository(document_path=settings.document_path)


@lru_cache
def get_finance_service() -> FinanceService:
    return FinanceService(get_document_repo())


def get_ready_finance_service() -> FinanceService:
    # retries the load when startup could not read the document
    service = get_finance_service()
    service.ensure_loaded()
    return service

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from hesab.api.deps import get_finance_service
from hesab.errors import DocumentFormatError, DocumentNotReadyError, HesabError, PersistenceError
from hesab.settings import configure_logging

from hesab.api.routes.health import router as health_router
from hesab.api.routes.members import router as members_router
from hesab.api.routes.assets import router as assets_router
from hesab.api.routes.liabilities import router as liabilities_router
from hesab.api.routes.incomes import router as incomes_router
from hesab.api.routes.reports import router as reports_router

logger = logging.getLogger(__name__)

app = FastAPI(title="hesab API", version="0.1.0")


@app.on_event("startup")
def _startup_load_document() -> None:
    configure_logging()
    try:
        get_finance_service().load()
    except HesabError:
        # stay up unloaded; routes retry the load and report the failure
        logger.exception("Could not load the document at startup")


@app.exception_handler(DocumentNotReadyError)
def _not_ready(request: Request, exc: DocumentNotReadyError) -> JSONResponse:
    return JSONResponse(status_code=503, content={"detail": "Document not loaded yet"})


@app.exception_handler(PersistenceError)
def _storage_failed(request: Request, exc: PersistenceError) -> JSONResponse:
    logger.exception("Storage failure on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=503, content={"detail": "Storage unavailable"})


@app.exception_handler(DocumentFormatError)
def _document_corrupt(request: Request, exc: DocumentFormatError) -> JSONResponse:
    logger.exception("Stored document is unreadable: %s", exc)
    return JSONResponse(status_code=500, content={"detail": "Stored document is unreadable"})


app.include_router(health_router)
app.include_router(members_router)
app.include_router(assets_router)
app.include_router(liabilities_router)
app.include_router(incomes_router)
app.include_router(reports_router)

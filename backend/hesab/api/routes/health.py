from fastapi import APIRouter

from hesab.api.deps import get_finance_service

router = APIRouter(tags=["health"])


@router.get("/health")
def health() -> dict:
    return {"status": "ok", "ready": get_finance_service().is_ready}

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Response

from hesab.api.deps import get_ready_finance_service
from hesab.api.mappers.finance_mapper import income_to_response
from hesab.api.schemas.incomes import IncomeCreateRequest, IncomeResponse
from hesab.errors import UnknownMemberError

router = APIRouter(prefix="/incomes", tags=["incomes"])


@router.get("", response_model=list[IncomeResponse])
def list_incomes() -> list[IncomeResponse]:
    doc = get_ready_finance_service().document
    return [income_to_response(i, doc) for i in doc.incomes]


@router.post("", response_model=IncomeResponse, status_code=201)
def create_income(payload: IncomeCreateRequest) -> IncomeResponse:
    service = get_ready_finance_service()
    try:
        income = service.add_income(
            member_id=payload.member_id,
            source=payload.source.strip(),
            amount=payload.amount,
            is_recurring=payload.is_recurring,
        )
    except UnknownMemberError:
        raise HTTPException(status_code=422, detail="Unknown member_id")
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    return income_to_response(income, service.document)


@router.delete("/{income_id}", status_code=204)
def delete_income(income_id: str) -> Response:
    try:
        get_ready_finance_service().delete_income(income_id)
    except KeyError:
        raise HTTPException(status_code=404, detail="Income not found")
    return Response(status_code=204)

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Response

from hesab.api.deps import get_ready_finance_service
from hesab.api.mappers.finance_mapper import liability_to_response
from hesab.api.schemas.liabilities import (
    InstallmentAmountUpdateRequest,
    LiabilityCreateRequest,
    LiabilityResponse,
)
from hesab.domain.models import RepaymentType
from hesab.errors import UnknownMemberError

router = APIRouter(prefix="/liabilities", tags=["liabilities"])


@router.get("", response_model=list[LiabilityResponse])
def list_liabilities() -> list[LiabilityResponse]:
    doc = get_ready_finance_service().document
    return [liability_to_response(l, doc) for l in doc.liabilities]


@router.post("", response_model=LiabilityResponse, status_code=201)
def create_liability(payload: LiabilityCreateRequest) -> LiabilityResponse:
    try:
        repayment_type = RepaymentType(payload.repayment_type.strip())
    except ValueError:
        raise HTTPException(status_code=422, detail="Invalid repayment_type")

    service = get_ready_finance_service()
    try:
        liability = service.create_liability(
            member_id=payload.member_id,
            title=payload.title.strip(),
            total_amount=payload.total_amount,
            repayment_type=repayment_type,
            start_date=payload.start_date,
            installment_count=payload.installment_count,
            description=payload.description,
        )
    except UnknownMemberError:
        raise HTTPException(status_code=422, detail="Unknown member_id")
    except ValueError as e:
        # e.g. total_amount == 0
        raise HTTPException(status_code=422, detail=str(e))

    return liability_to_response(liability, service.document)


@router.delete("/{liability_id}", status_code=204)
def delete_liability(liability_id: str) -> Response:
    try:
        get_ready_finance_service().delete_liability(liability_id)
    except KeyError:
        raise HTTPException(status_code=404, detail="Liability not found")
    return Response(status_code=204)


@router.post("/{liability_id}/installments/{installment_id}/toggle", response_model=LiabilityResponse)
def toggle_installment(liability_id: str, installment_id: str) -> LiabilityResponse:
    service = get_ready_finance_service()
    try:
        liability = service.toggle_installment_paid(liability_id, installment_id)
    except KeyError:
        raise HTTPException(status_code=404, detail="Installment not found")
    return liability_to_response(liability, service.document)


@router.patch("/{liability_id}/installments/{installment_id}", response_model=LiabilityResponse)
def update_installment_amount(
    liability_id: str,
    installment_id: str,
    payload: InstallmentAmountUpdateRequest,
) -> LiabilityResponse:
    """Edits one installment; the liability total is recomputed from all installments."""
    service = get_ready_finance_service()
    try:
        liability = service.update_installment_amount(liability_id, installment_id, payload.amount)
    except KeyError:
        raise HTTPException(status_code=404, detail="Installment not found")
    return liability_to_response(liability, service.document)

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Response

from hesab.api.deps import get_ready_finance_service
from hesab.api.mappers.finance_mapper import member_to_response
from hesab.api.schemas.members import MemberCreateRequest, MemberResponse

router = APIRouter(prefix="/members", tags=["members"])


@router.get("", response_model=list[MemberResponse])
def list_members() -> list[MemberResponse]:
    doc = get_ready_finance_service().document
    return [member_to_response(m) for m in doc.members]


@router.post("", response_model=MemberResponse, status_code=201)
def create_member(payload: MemberCreateRequest) -> MemberResponse:
    service = get_ready_finance_service()
    try:
        member = service.add_member(payload.name.strip())
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return member_to_response(member)


@router.delete("/{member_id}", status_code=204)
def delete_member(member_id: str) -> Response:
    """Removes the member together with all of their assets, liabilities and incomes."""
    try:
        get_ready_finance_service().delete_member(member_id)
    except KeyError:
        raise HTTPException(status_code=404, detail="Member not found")
    return Response(status_code=204)

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query, Response

from hesab.api.deps import get_ready_finance_service
from hesab.api.mappers.finance_mapper import asset_to_response
from hesab.api.schemas.assets import AssetAmountUpdateRequest, AssetCreateRequest, AssetResponse
from hesab.domain.models import AssetType
from hesab.errors import UnknownMemberError

router = APIRouter(prefix="/assets", tags=["assets"])


@router.get("", response_model=list[AssetResponse])
def list_assets(member_id: str | None = Query(default=None)) -> list[AssetResponse]:
    doc = get_ready_finance_service().document
    assets = doc.assets
    if member_id is not None:
        assets = tuple(a for a in assets if a.member_id == member_id)
    return [asset_to_response(a, doc) for a in assets]


@router.post("", response_model=AssetResponse, status_code=201)
def create_asset(payload: AssetCreateRequest) -> AssetResponse:
    try:
        asset_type = AssetType(payload.type.strip())
    except ValueError:
        raise HTTPException(status_code=422, detail="Invalid asset type")

    service = get_ready_finance_service()
    try:
        asset = service.add_asset(
            member_id=payload.member_id,
            asset_type=asset_type,
            title=payload.title.strip(),
            amount=payload.amount,
        )
    except UnknownMemberError:
        raise HTTPException(status_code=422, detail="Unknown member_id")
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    return asset_to_response(asset, service.document)


@router.patch("/{asset_id}", response_model=AssetResponse)
def update_asset_amount(asset_id: str, payload: AssetAmountUpdateRequest) -> AssetResponse:
    service = get_ready_finance_service()
    try:
        asset = service.update_asset_amount(asset_id, payload.amount)
    except KeyError:
        raise HTTPException(status_code=404, detail="Asset not found")
    return asset_to_response(asset, service.document)


@router.delete("/{asset_id}", status_code=204)
def delete_asset(asset_id: str) -> Response:
    try:
        get_ready_finance_service().delete_asset(asset_id)
    except KeyError:
        raise HTTPException(status_code=404, detail="Asset not found")
    return Response(status_code=204)

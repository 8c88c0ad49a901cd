from pydantic import BaseModel, Field

from hesab.api.schemas.common import AmountIn


class AssetCreateRequest(BaseModel):
    member_id: str = Field(min_length=1)
    type: str = Field(min_length=1, examples=["CASH", "BANK_ACCOUNT"])
    title: str = Field(min_length=1)
    amount: AmountIn


class AssetAmountUpdateRequest(BaseModel):
    amount: AmountIn


class AssetResponse(BaseModel):
    id: str
    member_id: str
    member_name: str
    type: str
    type_label: str
    title: str
    amount: int
    amount_display: str

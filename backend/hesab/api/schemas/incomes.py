from pydantic import BaseModel, Field

from hesab.api.schemas.common import AmountIn


class IncomeCreateRequest(BaseModel):
    member_id: str = Field(min_length=1)
    source: str = Field(min_length=1)
    amount: AmountIn
    is_recurring: bool = True


class IncomeResponse(BaseModel):
    id: str
    member_id: str
    member_name: str
    source: str
    amount: int
    amount_display: str
    is_recurring: bool

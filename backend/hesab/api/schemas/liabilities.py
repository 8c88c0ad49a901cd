from __future__ import annotations

import datetime as dt
from pydantic import BaseModel, Field

from hesab.api.schemas.common import AmountIn


class LiabilityCreateRequest(BaseModel):
    member_id: str = Field(min_length=1)
    title: str = Field(min_length=1)
    total_amount: AmountIn
    repayment_type: str = "INSTALLMENT"
    installment_count: int = Field(default=12, ge=1)
    start_date: dt.date
    description: str = ""


class InstallmentAmountUpdateRequest(BaseModel):
    amount: AmountIn


class InstallmentResponse(BaseModel):
    id: str
    due_date: dt.date
    due_date_jalali: str
    amount: int
    amount_display: str
    is_paid: bool


class LiabilityResponse(BaseModel):
    id: str
    member_id: str
    member_name: str
    title: str
    total_amount: int
    total_amount_display: str
    repayment_type: str
    repayment_type_label: str
    start_date: dt.date
    start_date_jalali: str
    description: str
    paid_count: int
    total_count: int
    remaining_amount: int
    remaining_amount_display: str
    installments: list[InstallmentResponse]

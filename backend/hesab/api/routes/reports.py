from __future__ import annotations

import datetime as dt
import logging

from fastapi import APIRouter, HTTPException, Query

from hesab.api.deps import get_ready_finance_service
from hesab.api.schemas.reports import (
    AssetTypeTotalOut,
    DashboardResponse,
    ForecastMonthOut,
    MemberSummaryOut,
    MonthlyRepaymentOut,
    RepaymentLineOut,
)
from hesab.domain.amounts import format_amount
from hesab.domain.jalali import jalali_month_label
from hesab.engine.reports import FORECAST_MONTHS

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/reports", tags=["reports"])

# latest month a forecast can start in without running past date.max
_LAST_FORECAST_START = dt.date(dt.date.max.year, 13 - FORECAST_MONTHS, 1)


@router.get("/dashboard", response_model=DashboardResponse)
def get_dashboard() -> DashboardResponse:
    d = get_ready_finance_service().dashboard()
    return DashboardResponse(
        total_assets=d.total_assets,
        outstanding_liabilities=d.outstanding_liabilities,
        paid_liabilities=d.paid_liabilities,
        net_worth=d.net_worth,
        total_assets_display=format_amount(d.total_assets),
        outstanding_liabilities_display=format_amount(d.outstanding_liabilities),
        net_worth_display=format_amount(d.net_worth),
        asset_distribution=[
            AssetTypeTotalOut(type=x.type.value, label=x.type.label, total=x.total)
            for x in d.asset_distribution
        ],
    )


@router.get("/members", response_model=list[MemberSummaryOut])
def get_member_summaries() -> list[MemberSummaryOut]:
    return [
        MemberSummaryOut(
            member_id=s.member_id,
            name=s.name,
            assets=s.assets,
            liabilities=s.liabilities,
            monthly_income=s.monthly_income,
            net=s.net,
        )
        for s in get_ready_finance_service().member_summaries()
    ]


@router.get("/repayments", response_model=list[MonthlyRepaymentOut])
def get_monthly_repayments() -> list[MonthlyRepaymentOut]:
    out = []
    for m in get_ready_finance_service().monthly_repayments():
        year, month = (int(x) for x in m.month.split("-"))
        out.append(
            MonthlyRepaymentOut(
                month=m.month,
                month_label=jalali_month_label(dt.date(year, month, 1)),
                total=m.total,
                total_display=format_amount(m.total),
                lines=[
                    RepaymentLineOut(
                        title=x.title,
                        amount=x.amount,
                        member_name=x.member_name,
                        is_paid=x.is_paid,
                    )
                    for x in m.lines
                ],
            )
        )
    return out


@router.get("/forecast", response_model=list[ForecastMonthOut])
def get_forecast(today: dt.date | None = Query(default=None)) -> list[ForecastMonthOut]:
    if today is not None and today.replace(day=1) > _LAST_FORECAST_START:
        raise HTTPException(status_code=422, detail="today is too late for a 12-month forecast")

    months = get_ready_finance_service().forecast(today=today)
    logger.debug("Forecast computed for %d months", len(months))
    return [
        ForecastMonthOut(
            month=m.month,
            label=m.label,
            income=m.income,
            expenses=m.expenses,
            balance=m.balance,
        )
        for m in months
    ]

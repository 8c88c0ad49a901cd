from __future__ import annotations

from dataclasses import dataclass
import datetime as dt

from hesab.domain.jalali import jalali_month_label
from hesab.domain.models import AssetType, FinancialDocument, Liability, Member
from hesab.domain.schedule import add_months

FORECAST_MONTHS = 12


@dataclass(frozen=True)
class AssetTypeTotal:
    type: AssetType
    total: int


@dataclass(frozen=True)
class MemberSummary:
    member_id: str
    name: str
    assets: int
    liabilities: int
    monthly_income: int
    net: int


@dataclass(frozen=True)
class RepaymentLine:
    title: str
    amount: int
    member_name: str
    is_paid: bool


@dataclass(frozen=True)
class MonthlyRepayment:
    month: str  # "YYYY-MM"
    total: int
    lines: tuple[RepaymentLine, ...]


@dataclass(frozen=True)
class ForecastMonth:
    month: str  # "YYYY-MM"
    label: str
    income: int
    expenses: int
    balance: int


@dataclass(frozen=True)
class LiabilityProgress:
    liability_id: str
    paid_count: int
    total_count: int
    remaining_amount: int


@dataclass(frozen=True)
class DashboardSummary:
    total_assets: int
    outstanding_liabilities: int
    paid_liabilities: int
    net_worth: int
    asset_distribution: tuple[AssetTypeTotal, ...]


def _month_key(d: dt.date) -> str:
    return f"{d.year:04d}-{d.month:02d}"


def total_assets(doc: FinancialDocument) -> int:
    return sum(a.amount for a in doc.assets)


def outstanding_liabilities(doc: FinancialDocument) -> int:
    return sum(l.remaining_amount for l in doc.liabilities)


def paid_liabilities(doc: FinancialDocument) -> int:
    return sum(l.paid_amount for l in doc.liabilities)


def net_worth(doc: FinancialDocument) -> int:
    return total_assets(doc) - outstanding_liabilities(doc)


def recurring_income_total(doc: FinancialDocument) -> int:
    return sum(i.amount for i in doc.incomes if i.is_recurring)


def asset_distribution(doc: FinancialDocument) -> list[AssetTypeTotal]:
    """Sum per asset type, types in first-seen order."""
    acc: dict[AssetType, int] = {}
    for a in doc.assets:
        acc[a.type] = acc.get(a.type, 0) + a.amount
    return [AssetTypeTotal(type=t, total=v) for t, v in acc.items()]


def dashboard_summary(doc: FinancialDocument) -> DashboardSummary:
    return DashboardSummary(
        total_assets=total_assets(doc),
        outstanding_liabilities=outstanding_liabilities(doc),
        paid_liabilities=paid_liabilities(doc),
        net_worth=net_worth(doc),
        asset_distribution=tuple(asset_distribution(doc)),
    )


def member_summary(doc: FinancialDocument, member: Member) -> MemberSummary:
    assets = sum(a.amount for a in doc.assets if a.member_id == member.id)
    liabilities = sum(l.remaining_amount for l in doc.liabilities if l.member_id == member.id)
    monthly_income = sum(
        i.amount for i in doc.incomes
        if i.member_id == member.id and i.is_recurring
    )
    return MemberSummary(
        member_id=member.id,
        name=member.name,
        assets=assets,
        liabilities=liabilities,
        monthly_income=monthly_income,
        net=assets - liabilities,
    )


def member_summaries(doc: FinancialDocument) -> list[MemberSummary]:
    return [member_summary(doc, m) for m in doc.members]


def liability_progress(liability: Liability) -> LiabilityProgress:
    return LiabilityProgress(
        liability_id=liability.id,
        paid_count=liability.paid_count,
        total_count=len(liability.installments),
        remaining_amount=liability.remaining_amount,
    )


def monthly_repayment_breakdown(doc: FinancialDocument) -> list[MonthlyRepayment]:
    """
    Every installment of every liability grouped by due month.
    Months ascending; lines keep liability order then installment order.
    """
    totals: dict[str, int] = {}
    lines: dict[str, list[RepaymentLine]] = {}

    for l in doc.liabilities:
        member_name = doc.member_name(l.member_id)
        for ins in l.installments:
            key = _month_key(ins.due_date)
            totals[key] = totals.get(key, 0) + ins.amount
            lines.setdefault(key, []).append(
                RepaymentLine(
                    title=l.title,
                    amount=ins.amount,
                    member_name=member_name,
                    is_paid=ins.is_paid,
                )
            )

    # "YYYY-MM" sorts chronologically
    return [
        MonthlyRepayment(month=key, total=totals[key], lines=tuple(lines[key]))
        for key in sorted(totals)
    ]


def balance_forecast(doc: FinancialDocument, *, today: dt.date | None = None) -> list[ForecastMonth]:
    """
    Current month and the next 11.
    Income is the flat recurring total every month; expenses are the
    installments (paid or not) due in that calendar month.
    """
    first = (today or dt.date.today()).replace(day=1)
    income = recurring_income_total(doc)

    expenses_by_month: dict[str, int] = {}
    for l in doc.liabilities:
        for ins in l.installments:
            key = _month_key(ins.due_date)
            expenses_by_month[key] = expenses_by_month.get(key, 0) + ins.amount

    out: list[ForecastMonth] = []
    for offset in range(FORECAST_MONTHS):
        d = add_months(first, offset)
        key = _month_key(d)
        expenses = expenses_by_month.get(key, 0)
        out.append(
            ForecastMonth(
                month=key,
                label=jalali_month_label(d),
                income=income,
                expenses=expenses,
                balance=income - expenses,
            )
        )
    return out

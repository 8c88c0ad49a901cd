from __future__ import annotations

from hesab.api.schemas.assets import AssetResponse
from hesab.api.schemas.incomes import IncomeResponse
from hesab.api.schemas.liabilities import InstallmentResponse, LiabilityResponse
from hesab.api.schemas.members import MemberResponse
from hesab.domain.amounts import format_amount
from hesab.domain.jalali import format_jalali
from hesab.domain.models import Asset, FinancialDocument, Income, Liability, Member


def member_to_response(m: Member) -> MemberResponse:
    return MemberResponse(id=m.id, name=m.name)


def asset_to_response(a: Asset, doc: FinancialDocument) -> AssetResponse:
    return AssetResponse(
        id=a.id,
        member_id=a.member_id,
        member_name=doc.member_name(a.member_id),
        type=a.type.value,
        type_label=a.type.label,
        title=a.title,
        amount=a.amount,
        amount_display=format_amount(a.amount),
    )


def liability_to_response(l: Liability, doc: FinancialDocument) -> LiabilityResponse:
    return LiabilityResponse(
        id=l.id,
        member_id=l.member_id,
        member_name=doc.member_name(l.member_id),
        title=l.title,
        total_amount=l.total_amount,
        total_amount_display=format_amount(l.total_amount),
        repayment_type=l.repayment_type.value,
        repayment_type_label=l.repayment_type.label,
        start_date=l.start_date,
        start_date_jalali=format_jalali(l.start_date.isoformat()),
        description=l.description,
        paid_count=l.paid_count,
        total_count=len(l.installments),
        remaining_amount=l.remaining_amount,
        remaining_amount_display=format_amount(l.remaining_amount),
        installments=[
            InstallmentResponse(
                id=i.id,
                due_date=i.due_date,
                due_date_jalali=format_jalali(i.due_date.isoformat()),
                amount=i.amount,
                amount_display=format_amount(i.amount),
                is_paid=i.is_paid,
            )
            for i in l.installments
        ],
    )


def income_to_response(i: Income, doc: FinancialDocument) -> IncomeResponse:
    return IncomeResponse(
        id=i.id,
        member_id=i.member_id,
        member_name=doc.member_name(i.member_id),
        source=i.source,
        amount=i.amount,
        amount_display=format_amount(i.amount),
        is_recurring=i.is_recurring,
    )

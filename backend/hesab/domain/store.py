"""
Mutations of the FinancialDocument.

Every function takes the current document and returns a new one; nothing is
mutated in place. Callers own the read -> mutate -> save cycle (see
hesab.services.finance_service).

Unknown ids are no-ops: the document comes back unchanged.
"""
from __future__ import annotations

from dataclasses import replace
import datetime as dt
from typing import Sequence

from hesab.domain.ids import new_id
from hesab.domain.models import (
    Asset,
    AssetType,
    FinancialDocument,
    Income,
    Installment,
    Liability,
    Member,
    RepaymentType,
)


# ---------- members ----------

def add_member(doc: FinancialDocument, name: str) -> tuple[FinancialDocument, Member]:
    member = Member.create(name)
    return replace(doc, members=doc.members + (member,)), member


def delete_member(doc: FinancialDocument, member_id: str) -> FinancialDocument:
    # cascade: nothing may keep pointing at the removed member
    return replace(
        doc,
        members=tuple(m for m in doc.members if m.id != member_id),
        assets=tuple(a for a in doc.assets if a.member_id != member_id),
        liabilities=tuple(l for l in doc.liabilities if l.member_id != member_id),
        incomes=tuple(i for i in doc.incomes if i.member_id != member_id),
    )


# ---------- assets ----------

def add_asset(
    doc: FinancialDocument,
    *,
    member_id: str,
    asset_type: AssetType,
    title: str,
    amount: int,
) -> tuple[FinancialDocument, Asset]:
    asset = Asset(id=new_id(), member_id=member_id, type=asset_type, title=title, amount=amount)
    return replace(doc, assets=doc.assets + (asset,)), asset


def update_asset_amount(doc: FinancialDocument, asset_id: str, amount: int) -> FinancialDocument:
    return replace(
        doc,
        assets=tuple(replace(a, amount=amount) if a.id == asset_id else a for a in doc.assets),
    )


def delete_asset(doc: FinancialDocument, asset_id: str) -> FinancialDocument:
    return replace(doc, assets=tuple(a for a in doc.assets if a.id != asset_id))


# ---------- liabilities ----------

def add_liability(
    doc: FinancialDocument,
    *,
    member_id: str,
    title: str,
    total_amount: int,
    repayment_type: RepaymentType,
    installments: Sequence[Installment],
    start_date: dt.date,
    description: str = "",
) -> tuple[FinancialDocument, Liability]:
    """The schedule comes pre-generated (hesab.domain.schedule); only the liability id is new."""
    liability = Liability(
        id=new_id(),
        member_id=member_id,
        title=title,
        total_amount=total_amount,
        repayment_type=repayment_type,
        installments=tuple(installments),
        start_date=start_date,
        description=description,
    )
    return replace(doc, liabilities=doc.liabilities + (liability,)), liability


def delete_liability(doc: FinancialDocument, liability_id: str) -> FinancialDocument:
    # installments go with their parent
    return replace(doc, liabilities=tuple(l for l in doc.liabilities if l.id != liability_id))


def _map_liability(doc: FinancialDocument, liability_id: str, fn) -> FinancialDocument:
    return replace(
        doc,
        liabilities=tuple(fn(l) if l.id == liability_id else l for l in doc.liabilities),
    )


def toggle_installment_paid(
    doc: FinancialDocument,
    liability_id: str,
    installment_id: str,
) -> FinancialDocument:
    def toggle(l: Liability) -> Liability:
        return replace(
            l,
            installments=tuple(
                replace(i, is_paid=not i.is_paid) if i.id == installment_id else i
                for i in l.installments
            ),
        )

    return _map_liability(doc, liability_id, toggle)


def update_installment_amount(
    doc: FinancialDocument,
    liability_id: str,
    installment_id: str,
    new_amount: int,
) -> FinancialDocument:
    """
    Set one installment's amount and recompute the parent's total_amount.
    This is the only operation that moves total_amount away from the
    amount the liability was created with.
    """
    def update(l: Liability) -> Liability:
        installments = tuple(
            replace(i, amount=new_amount) if i.id == installment_id else i
            for i in l.installments
        )
        return replace(
            l,
            installments=installments,
            total_amount=sum(i.amount for i in installments),
        )

    return _map_liability(doc, liability_id, update)


# ---------- incomes ----------

def add_income(
    doc: FinancialDocument,
    *,
    member_id: str,
    source: str,
    amount: int,
    is_recurring: bool = True,
) -> tuple[FinancialDocument, Income]:
    income = Income(
        id=new_id(),
        member_id=member_id,
        source=source,
        amount=amount,
        is_recurring=is_recurring,
    )
    return replace(doc, incomes=doc.incomes + (income,)), income


def delete_income(doc: FinancialDocument, income_id: str) -> FinancialDocument:
    return replace(doc, incomes=tuple(i for i in doc.incomes if i.id != income_id))

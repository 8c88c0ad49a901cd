from __future__ import annotations

import datetime as dt
import logging
import threading
from typing import Callable, TypeVar

from hesab.domain import store
from hesab.domain.models import (
    Asset,
    AssetType,
    FinancialDocument,
    Income,
    Liability,
    Member,
    RepaymentType,
)
from hesab.domain.schedule import generate_schedule
from hesab.engine import reports
from hesab.errors import DocumentNotReadyError, UnknownMemberError
from hesab.repositories.document_repository import DocumentRepository

logger = logging.getLogger(__name__)

T = TypeVar("T")


class FinanceService:
    """
    Owns the current FinancialDocument and its read -> mutate -> save cycle.

    - Nothing is accepted before load() has run.
    - Mutations are serialized by a lock and saved synchronously, so saves
      reach the repository in mutation order.
    - If save() fails the error propagates and the in-memory document keeps
      its previous value.
    """

    def __init__(self, repository: DocumentRepository) -> None:
        self._repo = repository
        self._lock = threading.Lock()
        self._doc: FinancialDocument | None = None

    # ---------- lifecycle ----------

    @property
    def is_ready(self) -> bool:
        return self._doc is not None

    def load(self) -> FinancialDocument:
        with self._lock:
            return self._load_unlocked()

    def ensure_loaded(self) -> FinancialDocument:
        """Load on first use; a failed load is retried on the next call."""
        with self._lock:
            if self._doc is None:
                return self._load_unlocked()
            return self._doc

    def _load_unlocked(self) -> FinancialDocument:
        doc = self._repo.load()
        if doc is None:
            logger.info("No saved document, starting empty")
            doc = FinancialDocument.empty()
        self._doc = doc
        return doc

    @property
    def document(self) -> FinancialDocument:
        if self._doc is None:
            raise DocumentNotReadyError("document not loaded yet")
        return self._doc

    def _commit(self, mutate: Callable[[FinancialDocument], tuple[FinancialDocument, T]]) -> T:
        with self._lock:
            if self._doc is None:
                raise DocumentNotReadyError("document not loaded yet")
            new_doc, result = mutate(self._doc)
            self._repo.save(new_doc)
            self._doc = new_doc
            return result

    def _require_member(self, doc: FinancialDocument, member_id: str) -> None:
        if doc.find_member(member_id) is None:
            raise UnknownMemberError(member_id)

    # ---------- members ----------

    def add_member(self, name: str) -> Member:
        return self._commit(lambda doc: store.add_member(doc, name))

    def delete_member(self, member_id: str) -> None:
        def mutate(doc: FinancialDocument):
            if doc.find_member(member_id) is None:
                raise KeyError(f"unknown member_id '{member_id}'")
            return store.delete_member(doc, member_id), None

        self._commit(mutate)

    # ---------- assets ----------

    def add_asset(self, *, member_id: str, asset_type: AssetType, title: str, amount: int) -> Asset:
        def mutate(doc: FinancialDocument):
            self._require_member(doc, member_id)
            return store.add_asset(
                doc, member_id=member_id, asset_type=asset_type, title=title, amount=amount
            )

        return self._commit(mutate)

    def update_asset_amount(self, asset_id: str, amount: int) -> Asset:
        def mutate(doc: FinancialDocument):
            if doc.find_asset(asset_id) is None:
                raise KeyError(f"unknown asset_id '{asset_id}'")
            new_doc = store.update_asset_amount(doc, asset_id, amount)
            return new_doc, new_doc.find_asset(asset_id)

        return self._commit(mutate)

    def delete_asset(self, asset_id: str) -> None:
        def mutate(doc: FinancialDocument):
            if doc.find_asset(asset_id) is None:
                raise KeyError(f"unknown asset_id '{asset_id}'")
            return store.delete_asset(doc, asset_id), None

        self._commit(mutate)

    # ---------- liabilities ----------

    def create_liability(
        self,
        *,
        member_id: str,
        title: str,
        total_amount: int,
        repayment_type: RepaymentType,
        start_date: dt.date,
        installment_count: int = 1,
        description: str = "",
    ) -> Liability:
        """Generate the installment schedule, then add the liability."""
        installments = generate_schedule(
            total_amount=total_amount,
            start_date=start_date,
            repayment_type=repayment_type,
            installment_count=installment_count,
        )

        def mutate(doc: FinancialDocument):
            self._require_member(doc, member_id)
            return store.add_liability(
                doc,
                member_id=member_id,
                title=title,
                total_amount=total_amount,
                repayment_type=repayment_type,
                installments=installments,
                start_date=start_date,
                description=description,
            )

        return self._commit(mutate)

    def delete_liability(self, liability_id: str) -> None:
        def mutate(doc: FinancialDocument):
            if doc.find_liability(liability_id) is None:
                raise KeyError(f"unknown liability_id '{liability_id}'")
            return store.delete_liability(doc, liability_id), None

        self._commit(mutate)

    def _require_installment(self, doc: FinancialDocument, liability_id: str, installment_id: str) -> None:
        liability = doc.find_liability(liability_id)
        if liability is None:
            raise KeyError(f"unknown liability_id '{liability_id}'")
        if liability.find_installment(installment_id) is None:
            raise KeyError(f"unknown installment_id '{installment_id}'")

    def toggle_installment_paid(self, liability_id: str, installment_id: str) -> Liability:
        def mutate(doc: FinancialDocument):
            self._require_installment(doc, liability_id, installment_id)
            new_doc = store.toggle_installment_paid(doc, liability_id, installment_id)
            return new_doc, new_doc.find_liability(liability_id)

        return self._commit(mutate)

    def update_installment_amount(self, liability_id: str, installment_id: str, new_amount: int) -> Liability:
        def mutate(doc: FinancialDocument):
            self._require_installment(doc, liability_id, installment_id)
            new_doc = store.update_installment_amount(doc, liability_id, installment_id, new_amount)
            return new_doc, new_doc.find_liability(liability_id)

        return self._commit(mutate)

    # ---------- incomes ----------

    def add_income(self, *, member_id: str, source: str, amount: int, is_recurring: bool = True) -> Income:
        def mutate(doc: FinancialDocument):
            self._require_member(doc, member_id)
            return store.add_income(
                doc, member_id=member_id, source=source, amount=amount, is_recurring=is_recurring
            )

        return self._commit(mutate)

    def delete_income(self, income_id: str) -> None:
        def mutate(doc: FinancialDocument):
            if doc.find_income(income_id) is None:
                raise KeyError(f"unknown income_id '{income_id}'")
            return store.delete_income(doc, income_id), None

        self._commit(mutate)

    # ---------- reports ----------

    def dashboard(self) -> reports.DashboardSummary:
        return reports.dashboard_summary(self.document)

    def member_summaries(self) -> list[reports.MemberSummary]:
        return reports.member_summaries(self.document)

    def monthly_repayments(self) -> list[reports.MonthlyRepayment]:
        return reports.monthly_repayment_breakdown(self.document)

    def forecast(self, *, today: dt.date | None = None) -> list[reports.ForecastMonth]:
        return reports.balance_forecast(self.document, today=today)

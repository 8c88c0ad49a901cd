from __future__ import annotations

from dataclasses import dataclass, field
import datetime as dt
from enum import Enum

from hesab.domain.ids import new_id

# Shown wherever a member lookup fails (e.g. a stale member_id in a report).
UNKNOWN_MEMBER_NAME = "نامشخص"


class AssetType(str, Enum):
    CASH = "CASH"
    BANK_ACCOUNT = "BANK_ACCOUNT"
    GOLD_CURRENCY = "GOLD_CURRENCY"
    REAL_ESTATE = "REAL_ESTATE"
    VEHICLE = "VEHICLE"
    OTHER = "OTHER"

    @property
    def label(self) -> str:
        return _ASSET_TYPE_LABELS[self]


_ASSET_TYPE_LABELS = {
    AssetType.CASH: "موجودی نقد",
    AssetType.BANK_ACCOUNT: "حساب بانکی",
    AssetType.GOLD_CURRENCY: "طلا و ارز",
    AssetType.REAL_ESTATE: "املاک",
    AssetType.VEHICLE: "خودرو",
    AssetType.OTHER: "سایر دارایی‌ها",
}


class RepaymentType(str, Enum):
    INSTALLMENT = "INSTALLMENT"
    LUMP_SUM = "LUMP_SUM"

    @property
    def label(self) -> str:
        return "اقساطی" if self is RepaymentType.INSTALLMENT else "یکجا"


def _is_int(value: object) -> bool:
    # bool is an int subclass, never a valid amount
    return isinstance(value, int) and not isinstance(value, bool)


def _require_id(value: object, what: str) -> None:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"{what} must be a non-empty string")


def _require_text(value: object, what: str) -> None:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"{what} cannot be empty")


def _require_amount(value: object, what: str) -> None:
    if not _is_int(value):
        raise ValueError(f"{what} must be an integer")
    if value < 0:
        raise ValueError(f"{what} cannot be negative")


# Member: one person of the household; every other record points at one
@dataclass(frozen=True)
class Member:
    # id: opaque unique id (uuid4 string)
    id: str

    # name: display name ("Ali", "Sara", ...)
    name: str

    # Factory method: builds a Member with a fresh id
    @classmethod
    def create(cls, name: str) -> "Member":
        return cls(id=new_id(), name=name)

    def __post_init__(self) -> None:
        _require_id(self.id, "member.id")

        # blank names are rejected
        _require_text(self.name, "member.name")


# Asset: something a member owns, valued in toman
@dataclass(frozen=True)
class Asset:
    id: str

    # member_id: owner (a Member id)
    member_id: str

    # type: category used by the distribution report
    type: AssetType

    # title: free label ("Savings account", "Pride 131", ...)
    title: str

    # amount: current value in toman (integer >= 0)
    amount: int

    def __post_init__(self) -> None:
        _require_id(self.id, "asset.id")
        _require_id(self.member_id, "asset.member_id")

        # 1) The category must be one of the known types
        if not isinstance(self.type, AssetType):
            raise ValueError("asset.type must be an AssetType")

        # 2) Title not blank, amount a non-negative integer
        _require_text(self.title, "asset.title")
        _require_amount(self.amount, "asset.amount")


# Installment: one scheduled payment of a liability
@dataclass(frozen=True)
class Installment:
    id: str

    # due_date: Gregorian date the payment falls due
    due_date: dt.date

    # amount: toman due on that date
    amount: int

    # is_paid: flipped by the toggle operation, never by amount edits
    is_paid: bool = False

    def __post_init__(self) -> None:
        _require_id(self.id, "installment.id")
        if not isinstance(self.due_date, dt.date):
            raise ValueError("installment.due_date must be a date")
        _require_amount(self.amount, "installment.amount")

        # a strict bool, so "false" from a payload cannot slip through
        if not isinstance(self.is_paid, bool):
            raise ValueError("installment.is_paid must be a bool")


@dataclass(frozen=True)
class Liability:
    """
    A debt owed by a member.

    total_amount is a cache of sum(installments.amount). It is only ever
    recomputed by the installment amount edit; every other change keeps it.
    """
    id: str
    member_id: str
    title: str
    total_amount: int

    # repayment_type: INSTALLMENT (monthly schedule) or LUMP_SUM (single payment)
    repayment_type: RepaymentType

    # installments: schedule in due-date order
    installments: tuple[Installment, ...]

    # start_date: due date of the first installment
    start_date: dt.date
    description: str = ""

    def __post_init__(self) -> None:
        _require_id(self.id, "liability.id")
        _require_id(self.member_id, "liability.member_id")
        _require_text(self.title, "liability.title")
        _require_amount(self.total_amount, "liability.total_amount")
        if not isinstance(self.repayment_type, RepaymentType):
            raise ValueError("liability.repayment_type must be a RepaymentType")
        if not isinstance(self.start_date, dt.date):
            raise ValueError("liability.start_date must be a date")
        if not isinstance(self.description, str):
            raise ValueError("liability.description must be a string")

        # accept any sequence, store a tuple
        object.__setattr__(self, "installments", tuple(self.installments))
        if not self.installments:
            raise ValueError("liability must have at least one installment")
        if any(not isinstance(i, Installment) for i in self.installments):
            raise ValueError("liability.installments must contain Installment objects")

        # 1) Lump sum means one payment
        if self.repayment_type is RepaymentType.LUMP_SUM and len(self.installments) != 1:
            raise ValueError("a lump-sum liability has exactly one installment")

        # 2) The cached total matches the schedule
        if self.total_amount != sum(i.amount for i in self.installments):
            raise ValueError("liability.total_amount must equal the sum of its installments")

    @property
    def paid_count(self) -> int:
        return sum(1 for i in self.installments if i.is_paid)

    @property
    def remaining_amount(self) -> int:
        return sum(i.amount for i in self.installments if not i.is_paid)

    @property
    def paid_amount(self) -> int:
        return sum(i.amount for i in self.installments if i.is_paid)

    def find_installment(self, installment_id: str) -> Installment | None:
        for i in self.installments:
            if i.id == installment_id:
                return i
        return None


# Income: money a member earns; amount is per month
@dataclass(frozen=True)
class Income:
    id: str
    member_id: str
    source: str
    amount: int

    # is_recurring: only recurring income counts in the monthly forecast
    is_recurring: bool = True

    def __post_init__(self) -> None:
        _require_id(self.id, "income.id")
        _require_id(self.member_id, "income.member_id")
        _require_text(self.source, "income.source")
        _require_amount(self.amount, "income.amount")
        if not isinstance(self.is_recurring, bool):
            raise ValueError("income.is_recurring must be a bool")


@dataclass(frozen=True)
class FinancialDocument:
    """Aggregate root: the whole unit of persistence."""
    members: tuple[Member, ...] = field(default_factory=tuple)
    assets: tuple[Asset, ...] = field(default_factory=tuple)
    liabilities: tuple[Liability, ...] = field(default_factory=tuple)
    incomes: tuple[Income, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        for name in ("members", "assets", "liabilities", "incomes"):
            object.__setattr__(self, name, tuple(getattr(self, name)))

    @classmethod
    def empty(cls) -> "FinancialDocument":
        return cls()

    def find_member(self, member_id: str) -> Member | None:
        for m in self.members:
            if m.id == member_id:
                return m
        return None

    def member_name(self, member_id: str) -> str:
        m = self.find_member(member_id)
        return m.name if m is not None else UNKNOWN_MEMBER_NAME

    def find_asset(self, asset_id: str) -> Asset | None:
        for a in self.assets:
            if a.id == asset_id:
                return a
        return None

    def find_liability(self, liability_id: str) -> Liability | None:
        for l in self.liabilities:
            if l.id == liability_id:
                return l
        return None

    def find_income(self, income_id: str) -> Income | None:
        for i in self.incomes:
            if i.id == income_id:
                return i
        return None

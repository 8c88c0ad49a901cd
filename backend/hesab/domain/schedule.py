from __future__ import annotations

import calendar
import datetime as dt

from hesab.domain.ids import new_id
from hesab.domain.models import Installment, RepaymentType


def add_months(d: dt.date, months: int) -> dt.date:
    """
    Same day-of-month `months` later, rolling over years.
    Days past the end of the target month are clamped (Jan 31 + 1 -> Feb 28/29).
    """
    # zero-based month index from January of d.year; // and % carry the year
    index = d.month - 1 + months
    year = d.year + index // 12
    month = index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return d.replace(year=year, month=month, day=min(d.day, last_day))


def generate_schedule(
    *,
    total_amount: int,
    start_date: dt.date,
    repayment_type: RepaymentType,
    installment_count: int = 1,
) -> list[Installment]:
    """
    Build the installments of a new liability.

    Lump sum: one installment on start_date for the whole amount.
    Installment: `installment_count` monthly installments starting on
    start_date; each is total // count, the last one takes the remainder so
    the amounts always sum to total_amount.
    """
    if isinstance(total_amount, bool) or not isinstance(total_amount, int) or total_amount <= 0:
        raise ValueError("total_amount must be a positive integer")
    if not isinstance(repayment_type, RepaymentType):
        raise ValueError("repayment_type must be a RepaymentType")

    # Lump sum: single payment, installment_count ignored
    if repayment_type is RepaymentType.LUMP_SUM:
        return [Installment(id=new_id(), due_date=start_date, amount=total_amount, is_paid=False)]

    if isinstance(installment_count, bool) or not isinstance(installment_count, int) or installment_count <= 0:
        raise ValueError("installment_count must be a positive integer")

    # equal shares, rounded down
    base = total_amount // installment_count
    # the last one takes the remainder
    last = total_amount - base * (installment_count - 1)

    # one installment per month, first one on start_date
    out: list[Installment] = []
    for i in range(installment_count):
        out.append(
            Installment(
                id=new_id(),
                due_date=add_months(start_date, i),
                amount=last if i == installment_count - 1 else base,
                is_paid=False,
            )
        )
    return out

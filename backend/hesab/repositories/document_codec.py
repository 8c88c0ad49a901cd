from __future__ import annotations

import datetime as dt
from typing import Any

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
from hesab.errors import DocumentFormatError

SCHEMA_VERSION = 1


# ---------- encode ----------

def document_to_record(doc: FinancialDocument) -> dict:
    return {
        "version": SCHEMA_VERSION,
        "members": [{"id": m.id, "name": m.name} for m in doc.members],
        "assets": [
            {
                "id": a.id,
                "member_id": a.member_id,
                "type": a.type.value,
                "title": a.title,
                "amount": a.amount,
            }
            for a in doc.assets
        ],
        "liabilities": [_liability_to_record(l) for l in doc.liabilities],
        "incomes": [
            {
                "id": i.id,
                "member_id": i.member_id,
                "source": i.source,
                "amount": i.amount,
                "is_recurring": i.is_recurring,
            }
            for i in doc.incomes
        ],
    }


def _liability_to_record(l: Liability) -> dict:
    return {
        "id": l.id,
        "member_id": l.member_id,
        "title": l.title,
        "total_amount": l.total_amount,
        "repayment_type": l.repayment_type.value,
        "start_date": l.start_date.isoformat(),
        "description": l.description,
        "installments": [
            {
                "id": i.id,
                "due_date": i.due_date.isoformat(),
                "amount": i.amount,
                "is_paid": i.is_paid,
            }
            for i in l.installments
        ],
    }


# ---------- decode ----------

def document_from_record(payload: Any) -> FinancialDocument:
    if not isinstance(payload, dict):
        raise DocumentFormatError("document: root must be an object")
    if payload.get("version") != SCHEMA_VERSION:
        raise DocumentFormatError(f"document: version must be {SCHEMA_VERSION}")

    for key in ("members", "assets", "liabilities", "incomes"):
        if key not in payload or not isinstance(payload[key], list):
            raise DocumentFormatError(f"document: '{key}' must be a list")

    try:
        members = [_member(r, f"members[{i}]") for i, r in enumerate(payload["members"])]
        assets = [_asset(r, f"assets[{i}]") for i, r in enumerate(payload["assets"])]
        liabilities = [_liability(r, f"liabilities[{i}]") for i, r in enumerate(payload["liabilities"])]
        incomes = [_income(r, f"incomes[{i}]") for i, r in enumerate(payload["incomes"])]
    except DocumentFormatError:
        raise
    except ValueError as e:
        # invariant broken in a domain constructor
        raise DocumentFormatError(f"document: {e}") from e

    return FinancialDocument(
        members=tuple(members),
        assets=tuple(assets),
        liabilities=tuple(liabilities),
        incomes=tuple(incomes),
    )


def _member(r: Any, ctx: str) -> Member:
    obj = _require_obj(r, ctx)
    return Member(id=_req_str(obj, "id", ctx=ctx), name=_req_str(obj, "name", ctx=ctx))


def _asset(r: Any, ctx: str) -> Asset:
    obj = _require_obj(r, ctx)
    type_str = _req_str(obj, "type", ctx=ctx)
    try:
        asset_type = AssetType(type_str)
    except ValueError:
        raise DocumentFormatError(f"document: {ctx}.type invalid (got '{type_str}')")

    return Asset(
        id=_req_str(obj, "id", ctx=ctx),
        member_id=_req_str(obj, "member_id", ctx=ctx),
        type=asset_type,
        title=_req_str(obj, "title", ctx=ctx),
        amount=_req_int(obj, "amount", ctx=ctx),
    )


def _installment(r: Any, ctx: str) -> Installment:
    obj = _require_obj(r, ctx)
    return Installment(
        id=_req_str(obj, "id", ctx=ctx),
        due_date=_req_date(obj, "due_date", ctx=ctx),
        amount=_req_int(obj, "amount", ctx=ctx),
        is_paid=_req_bool(obj, "is_paid", ctx=ctx),
    )


def _liability(r: Any, ctx: str) -> Liability:
    obj = _require_obj(r, ctx)
    rt_str = _req_str(obj, "repayment_type", ctx=ctx)
    try:
        repayment_type = RepaymentType(rt_str)
    except ValueError:
        raise DocumentFormatError(f"document: {ctx}.repayment_type invalid (got '{rt_str}')")

    raw_installments = obj.get("installments")
    if not isinstance(raw_installments, list):
        raise DocumentFormatError(f"document: {ctx}.installments must be a list")

    description = obj.get("description", "")
    if not isinstance(description, str):
        raise DocumentFormatError(f"document: {ctx}.description must be a string")

    return Liability(
        id=_req_str(obj, "id", ctx=ctx),
        member_id=_req_str(obj, "member_id", ctx=ctx),
        title=_req_str(obj, "title", ctx=ctx),
        total_amount=_req_int(obj, "total_amount", ctx=ctx),
        repayment_type=repayment_type,
        installments=tuple(
            _installment(x, f"{ctx}.installments[{i}]") for i, x in enumerate(raw_installments)
        ),
        start_date=_req_date(obj, "start_date", ctx=ctx),
        description=description,
    )


def _income(r: Any, ctx: str) -> Income:
    obj = _require_obj(r, ctx)
    return Income(
        id=_req_str(obj, "id", ctx=ctx),
        member_id=_req_str(obj, "member_id", ctx=ctx),
        source=_req_str(obj, "source", ctx=ctx),
        amount=_req_int(obj, "amount", ctx=ctx),
        is_recurring=_req_bool(obj, "is_recurring", ctx=ctx),
    )


# ---------- helpers ----------

def _require_obj(r: Any, ctx: str) -> dict:
    if not isinstance(r, dict):
        raise DocumentFormatError(f"document: {ctx} must be an object")
    return r


def _req_str(obj: dict, key: str, *, ctx: str) -> str:
    if key not in obj:
        raise DocumentFormatError(f"document: {ctx} missing field '{key}'")
    val = obj[key]
    if not isinstance(val, str):
        raise DocumentFormatError(f"document: {ctx}.{key} must be a string")
    return val


def _req_int(obj: dict, key: str, *, ctx: str) -> int:
    if key not in obj:
        raise DocumentFormatError(f"document: {ctx} missing field '{key}'")
    val = obj[key]
    if isinstance(val, bool) or not isinstance(val, int):
        raise DocumentFormatError(f"document: {ctx}.{key} must be an integer")
    return val


def _req_bool(obj: dict, key: str, *, ctx: str) -> bool:
    if key not in obj:
        raise DocumentFormatError(f"document: {ctx} missing field '{key}'")
    val = obj[key]
    if not isinstance(val, bool):
        raise DocumentFormatError(f"document: {ctx}.{key} must be a boolean")
    return val


def _req_date(obj: dict, key: str, *, ctx: str) -> dt.date:
    value = _req_str(obj, key, ctx=ctx)
    try:
        return dt.date.fromisoformat(value)
    except ValueError as e:
        raise DocumentFormatError(f"document: {ctx}.{key} must be ISO date YYYY-MM-DD") from e

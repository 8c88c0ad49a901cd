import datetime as dt
import json

import pytest

from hesab.domain import store
from hesab.domain.models import AssetType, FinancialDocument, RepaymentType
from hesab.domain.schedule import generate_schedule
from hesab.errors import DocumentFormatError, PersistenceError
from hesab.repositories.document_codec import document_from_record, document_to_record
from hesab.repositories.in_memory_document_repository import InMemoryDocumentRepository
from hesab.repositories.json_document_repository import JsonDocumentRepository
from hesab.repositories.sql_document_repository import SqlDocumentRepository


def make_doc() -> FinancialDocument:
    doc, ali = store.add_member(FinancialDocument.empty(), "علی")
    doc, _ = store.add_asset(doc, member_id=ali.id, asset_type=AssetType.REAL_ESTATE, title="Flat", amount=9_000_000)
    doc, liability = store.add_liability(
        doc,
        member_id=ali.id,
        title="Mortgage",
        total_amount=1000,
        repayment_type=RepaymentType.INSTALLMENT,
        installments=generate_schedule(
            total_amount=1000,
            start_date=dt.date(2024, 1, 31),
            repayment_type=RepaymentType.INSTALLMENT,
            installment_count=3,
        ),
        start_date=dt.date(2024, 1, 31),
        description="bank",
    )
    doc = store.toggle_installment_paid(doc, liability.id, liability.installments[0].id)
    doc, _ = store.add_income(doc, member_id=ali.id, source="Salary", amount=5_000_000)
    return doc


# ---------- codec ----------

def test_codec_round_trip():
    doc = make_doc()
    assert document_from_record(document_to_record(doc)) == doc


def test_codec_record_shape():
    rec = document_to_record(make_doc())
    assert rec["version"] == 1
    assert rec["liabilities"][0]["installments"][1]["due_date"] == "2024-02-29"
    assert rec["liabilities"][0]["repayment_type"] == "INSTALLMENT"
    assert rec["assets"][0]["type"] == "REAL_ESTATE"


@pytest.mark.parametrize(
    "mutate",
    [
        lambda r: r.update(version=2),
        lambda r: r.pop("incomes"),
        lambda r: r["assets"][0].update(type="YACHT"),
        lambda r: r["assets"][0].update(amount="12"),
        lambda r: r["liabilities"][0].update(total_amount=1),
        lambda r: r["liabilities"][0]["installments"][0].update(due_date="31/01/2024"),
        lambda r: r["incomes"][0].pop("is_recurring"),
        lambda r: r["members"].append("not an object"),
    ],
)
def test_codec_rejects_malformed_records(mutate):
    rec = document_to_record(make_doc())
    mutate(rec)
    with pytest.raises(DocumentFormatError):
        document_from_record(rec)


def test_codec_rejects_non_object_root():
    with pytest.raises(DocumentFormatError):
        document_from_record([])


# ---------- json ----------

def test_json_load_missing_file_is_none(tmp_path):
    repo = JsonDocumentRepository(document_path=tmp_path / "finance_data.json")
    assert repo.load() is None


def test_json_save_then_load(tmp_path):
    path = tmp_path / "nested" / "finance_data.json"
    repo = JsonDocumentRepository(document_path=path)
    doc = make_doc()

    repo.save(doc)

    assert path.exists()
    assert not path.with_suffix(".json.tmp").exists()
    assert json.loads(path.read_text(encoding="utf-8"))["version"] == 1
    assert repo.load() == doc


def test_json_save_replaces_previous(tmp_path):
    repo = JsonDocumentRepository(document_path=tmp_path / "finance_data.json")
    repo.save(make_doc())
    repo.save(FinancialDocument.empty())
    assert repo.load() == FinancialDocument.empty()


def test_json_invalid_content(tmp_path):
    path = tmp_path / "finance_data.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(DocumentFormatError):
        JsonDocumentRepository(document_path=path).load()


def test_json_unwritable_location_raises_persistence_error(tmp_path):
    blocker = tmp_path / "file.txt"
    blocker.write_text("x", encoding="utf-8")
    repo = JsonDocumentRepository(document_path=blocker / "finance_data.json")

    with pytest.raises(PersistenceError):
        repo.save(make_doc())


# ---------- sql ----------

def test_sql_save_then_load(tmp_path):
    repo = SqlDocumentRepository(database_url=f"sqlite:///{(tmp_path / 'hesab.db').as_posix()}")
    assert repo.load() is None

    doc = make_doc()
    repo.save(doc)
    assert repo.load() == doc

    repo.save(FinancialDocument.empty())
    assert repo.load() == FinancialDocument.empty()


def test_sql_keys_are_independent(tmp_path):
    url = f"sqlite:///{(tmp_path / 'hesab.db').as_posix()}"
    main = SqlDocumentRepository(database_url=url)
    other = SqlDocumentRepository(database_url=url, key="other")

    main.save(make_doc())
    assert other.load() is None


# ---------- in memory ----------

def test_in_memory_returns_decoded_copy():
    repo = InMemoryDocumentRepository()
    assert repo.load() is None

    doc = make_doc()
    repo.save(doc)
    loaded = repo.load()

    assert loaded == doc
    assert loaded is not doc
    assert repo.save_count == 1

import json

import pytest
from fastapi.testclient import TestClient

from hesab.api.deps import get_document_repo, get_finance_service
from hesab.api.main import app


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    monkeypatch.setenv("HESAB_DATA_DIR", str(tmp_path))
    monkeypatch.delenv("HESAB_DATABASE_URL", raising=False)
    get_document_repo.cache_clear()
    get_finance_service.cache_clear()

    yield tmp_path

    get_document_repo.cache_clear()
    get_finance_service.cache_clear()


@pytest.fixture
def client(data_dir):
    with TestClient(app) as c:
        yield c


def _member(client, name="Ali") -> str:
    r = client.post("/members", json={"name": name})
    assert r.status_code == 201, r.text
    return r.json()["id"]


def test_health_reports_ready(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok", "ready": True}


def test_member_crud_and_persistence(client, tmp_path):
    ali = _member(client)

    r = client.get("/members")
    assert r.json() == [{"id": ali, "name": "Ali"}]

    saved = json.loads((tmp_path / "finance_data.json").read_text(encoding="utf-8"))
    assert saved["members"][0]["id"] == ali


def test_asset_accepts_grouped_amount(client):
    ali = _member(client)

    r = client.post(
        "/assets",
        json={"member_id": ali, "type": "BANK_ACCOUNT", "title": "Savings", "amount": "1,500,000"},
    )
    assert r.status_code == 201, r.text
    body = r.json()
    assert body["amount"] == 1_500_000
    assert body["amount_display"] == "۱٬۵۰۰٬۰۰۰ تومان"
    assert body["member_name"] == "Ali"
    assert body["type_label"] == "حساب بانکی"

    r = client.patch(f"/assets/{body['id']}", json={"amount": 2_000})
    assert r.status_code == 200
    assert r.json()["amount"] == 2_000

    assert client.delete(f"/assets/{body['id']}").status_code == 204
    assert client.get("/assets").json() == []


def test_asset_validation(client):
    ali = _member(client)

    r = client.post("/assets", json={"member_id": ali, "type": "YACHT", "title": "Boat", "amount": 1})
    assert r.status_code == 422

    r = client.post("/assets", json={"member_id": "ghost", "type": "CASH", "title": "Wallet", "amount": 1})
    assert r.status_code == 422

    r = client.post("/assets", json={"member_id": ali, "type": "CASH", "title": "Wallet", "amount": -5})
    assert r.status_code == 422

    assert client.patch("/assets/nope", json={"amount": 1}).status_code == 404


def test_liability_flow(client):
    ali = _member(client)

    r = client.post(
        "/liabilities",
        json={
            "member_id": ali,
            "title": "Car loan",
            "total_amount": 1000,
            "repayment_type": "INSTALLMENT",
            "installment_count": 3,
            "start_date": "2024-01-01",
        },
    )
    assert r.status_code == 201, r.text
    l = r.json()
    assert [i["amount"] for i in l["installments"]] == [333, 333, 334]
    assert [i["due_date"] for i in l["installments"]] == ["2024-01-01", "2024-02-01", "2024-03-01"]
    assert l["installments"][0]["due_date_jalali"] == "۱۴۰۲/۱۰/۱۱"
    assert l["total_count"] == 3

    first = l["installments"][0]["id"]
    r = client.post(f"/liabilities/{l['id']}/installments/{first}/toggle")
    assert r.status_code == 200
    assert r.json()["installments"][0]["is_paid"] is True
    assert r.json()["total_amount"] == 1000
    assert r.json()["remaining_amount"] == 667

    r = client.patch(f"/liabilities/{l['id']}/installments/{first}", json={"amount": "500"})
    assert r.status_code == 200
    assert r.json()["total_amount"] == 1167

    assert client.post(f"/liabilities/{l['id']}/installments/nope/toggle").status_code == 404

    assert client.delete(f"/liabilities/{l['id']}").status_code == 204
    assert client.get("/liabilities").json() == []


def test_liability_rejects_zero_total_and_bad_type(client):
    ali = _member(client)
    base = {"member_id": ali, "title": "Loan", "start_date": "2024-01-01"}

    assert client.post("/liabilities", json=base | {"total_amount": "abc"}).status_code == 422
    assert client.post("/liabilities", json=base | {"total_amount": 10, "repayment_type": "WEEKLY"}).status_code == 422


def test_delete_member_cascades(client):
    ali = _member(client)
    client.post("/assets", json={"member_id": ali, "type": "CASH", "title": "Wallet", "amount": 1})
    client.post("/incomes", json={"member_id": ali, "source": "Salary", "amount": 10})
    client.post(
        "/liabilities",
        json={"member_id": ali, "title": "Loan", "total_amount": 10, "repayment_type": "LUMP_SUM", "start_date": "2024-01-01"},
    )

    assert client.delete(f"/members/{ali}").status_code == 204
    assert client.delete(f"/members/{ali}").status_code == 404

    for path in ("/members", "/assets", "/incomes", "/liabilities"):
        assert client.get(path).json() == []


def test_reports(client):
    ali = _member(client)
    client.post("/incomes", json={"member_id": ali, "source": "Salary", "amount": 5_000_000})
    client.post("/incomes", json={"member_id": ali, "source": "Gift", "amount": 1, "is_recurring": False})
    client.post("/assets", json={"member_id": ali, "type": "CASH", "title": "Wallet", "amount": 3_000})
    client.post(
        "/liabilities",
        json={
            "member_id": ali,
            "title": "Phone",
            "total_amount": 1_000,
            "installment_count": 2,
            "start_date": "2024-03-10",
        },
    )

    d = client.get("/reports/dashboard").json()
    assert d["total_assets"] == 3_000
    assert d["outstanding_liabilities"] == 1_000
    assert d["net_worth"] == 2_000
    assert d["asset_distribution"] == [{"type": "CASH", "label": "موجودی نقد", "total": 3_000}]

    members = client.get("/reports/members").json()
    assert members[0]["monthly_income"] == 5_000_000
    assert members[0]["net"] == 2_000

    repayments = client.get("/reports/repayments").json()
    assert [m["month"] for m in repayments] == ["2024-03", "2024-04"]
    assert repayments[0]["lines"][0]["member_name"] == "Ali"

    forecast = client.get("/reports/forecast", params={"today": "2024-03-15"}).json()
    assert len(forecast) == 12
    assert forecast[0]["expenses"] == 500
    assert forecast[0]["balance"] == 5_000_000 - 500
    assert forecast[2]["expenses"] == 0


def test_forecast_rejects_window_past_year_9999(client):
    r = client.get("/reports/forecast", params={"today": "9999-06-01"})
    assert r.status_code == 422

    r = client.get("/reports/forecast", params={"today": "9999-01-20"})
    assert r.status_code == 200
    assert r.json()[-1]["month"] == "9999-12"


def test_corrupt_document_does_not_stop_startup(data_dir):
    path = data_dir / "finance_data.json"
    path.write_text("{not json", encoding="utf-8")

    with TestClient(app) as c:
        assert c.get("/health").json() == {"status": "ok", "ready": False}

        r = c.get("/members")
        assert r.status_code == 500
        assert r.json() == {"detail": "Stored document is unreadable"}
        assert c.post("/members", json={"name": "Ali"}).status_code == 500
        assert path.read_text(encoding="utf-8") == "{not json"

        # once the file is gone the next request loads an empty document
        path.unlink()
        assert c.get("/members").json() == []
        assert c.get("/health").json()["ready"] is True


def test_unreadable_storage_returns_503(data_dir):
    # a directory where the file should be makes every read fail
    (data_dir / "finance_data.json").mkdir()

    with TestClient(app) as c:
        assert c.get("/health").json()["ready"] is False

        r = c.get("/reports/dashboard")
        assert r.status_code == 503
        assert r.json() == {"detail": "Storage unavailable"}


def test_failed_save_returns_503_and_keeps_document(client, data_dir):
    ali = _member(client)
    (data_dir / "finance_data.json.tmp").mkdir()

    r = client.post("/members", json={"name": "Sara"})
    assert r.status_code == 503
    assert r.json() == {"detail": "Storage unavailable"}

    assert [m["id"] for m in client.get("/members").json()] == [ali]

"""Mini README: Tests for the FastAPI intent routes.

The application is built around an in-memory ledger so each test starts
from a clean slate without touching the configured data directory.
"""

from __future__ import annotations

from itertools import count

import pytest
from fastapi.testclient import TestClient

from budgetbite.export import DashboardRasteriser
from budgetbite.interface import create_application
from budgetbite.ledger import LedgerStore
from budgetbite.storage import InMemoryKeyValueStore


@pytest.fixture()
def client() -> TestClient:
    ticks = count(1_717_000_000_000, 1000)
    store = LedgerStore(InMemoryKeyValueStore(), clock=lambda: next(ticks))
    app = create_application(store=store, rasteriser=DashboardRasteriser(scale=1))
    return TestClient(app)


def test_add_expense_and_read_analytics(client: TestClient) -> None:
    client.post("/budget", data={"value": "1000"})
    response = client.post("/expenses", data={"name": "coffee", "amount": "5"})

    assert response.status_code == 200
    payload = response.json()
    assert payload["added"]["name"] == "COFFEE"
    analytics = client.get("/ledger").json()["analytics"]
    assert analytics["total"] == pytest.approx(5.0)
    assert analytics["safe_to_spend"] == pytest.approx(995.0)
    assert analytics["usage_ratio"] == pytest.approx(0.005)
    assert analytics["per_item"][0]["budget_share_percent"] == pytest.approx(0.5)


def test_overflowing_total_is_served_as_null(client: TestClient) -> None:
    client.post("/expenses", data={"name": "yacht", "amount": "1e308"})
    client.post("/expenses", data={"name": "jet", "amount": "1e308"})

    response = client.get("/ledger")

    assert response.status_code == 200
    analytics = response.json()["analytics"]
    assert analytics["total"] is None
    assert analytics["safe_to_spend"] is None
    assert analytics["is_over_budget"] is True


def test_invalid_expense_is_ignored(client: TestClient) -> None:
    response = client.post("/expenses", data={"name": "coffee", "amount": "lots"})

    assert response.status_code == 200
    assert response.json()["added"] is False
    ledger = client.get("/ledger").json()
    assert ledger["expenses"] == []
    assert ledger["analytics"]["per_item"][0]["name"] == "EMPTY"


def test_remove_and_clear(client: TestClient) -> None:
    added = client.post("/expenses", data={"name": "rent", "amount": "1200"}).json()["added"]
    client.post("/expenses", data={"name": "food", "amount": "300"})

    removed = client.delete(f"/expenses/{added['id']}").json()
    assert removed["removed"] is True
    assert [expense["name"] for expense in removed["expenses"]] == ["FOOD"]
    assert client.delete("/expenses/42").json()["removed"] is False

    cleared = client.post("/expenses/clear").json()
    assert cleared["expenses"] == []


def test_budget_and_currency_validation(client: TestClient) -> None:
    assert client.post("/budget", data={"value": "-5"}).status_code == 400
    assert client.post("/currency", data={"code": "JPY"}).status_code == 400

    response = client.post("/currency", data={"code": "eur"})
    assert response.status_code == 200
    assert response.json()["currency"] == "EUR"
    assert response.json()["currency_symbol"] == "€"


def test_currencies_listing(client: TestClient) -> None:
    codes = [entry["code"] for entry in client.get("/currencies").json()["currencies"]]
    assert codes == ["USD", "BDT", "EUR", "GBP"]


def test_csv_download(client: TestClient) -> None:
    client.post("/expenses", data={"name": "tea", "amount": "3"})
    response = client.get("/export/csv")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert 'filename="budget-report.csv"' in response.headers["content-disposition"]
    assert response.text.split("\n")[0] == "Date,Item,Amount (USD),% of Budget"


def test_image_and_document_downloads(client: TestClient) -> None:
    client.post("/expenses", data={"name": "tea", "amount": "3"})

    image = client.get("/export/image")
    assert image.headers["content-type"] == "image/png"
    assert image.content.startswith(b"\x89PNG")

    document = client.get("/export/pdf")
    assert document.headers["content-type"] == "application/pdf"
    assert document.content.startswith(b"%PDF")


def test_unknown_export_kind_is_not_found(client: TestClient) -> None:
    assert client.get("/export/xlsx").status_code == 404

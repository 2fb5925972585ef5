# tests/integration/test_xirr_api.py
from uuid import uuid4

import pytest
from fastapi import status
from fastapi.testclient import TestClient

from main import app

if hasattr(status, "HTTP_422_UNPROCESSABLE_CONTENT"):
    HTTP_422_UNPROCESSABLE = status.HTTP_422_UNPROCESSABLE_CONTENT
else:
    HTTP_422_UNPROCESSABLE = status.HTTP_422_UNPROCESSABLE_ENTITY


@pytest.fixture(scope="module")
def client():
    with TestClient(app) as c:
        yield c


def test_root_endpoint(client):
    response = client.get("/")
    assert response.status_code == 200
    assert "/docs" in response.json()["message"]


def test_health_endpoints(client):
    health = client.get("/health").json()
    assert health["status"] == "ok"
    assert health["service"] == "XIRR Analytics API"
    assert client.get("/health/live").json() == {"status": "live"}
    assert client.get("/health/ready").json() == {"status": "ready"}


def test_simple_xirr_happy_path(client):
    """A 366-day holding that returns 10% is annualized just under 10%."""
    calculation_id = str(uuid4())
    payload = {
        "calculation_id": calculation_id,
        "cash_flows": [
            {"date": "2025-01-01", "amount": 1100.0, "label": "Final Value"},
            {"date": "2024-01-01", "amount": -1000.0, "label": "Initial Investment"},
        ],
    }

    response = client.post("/xirr/simple", json=payload)

    assert response.status_code == 200
    data = response.json()
    assert data["calculation_id"] == calculation_id
    assert data["status"] == "SUCCESS"

    result = data["result"]
    expected = 1.1 ** (365.25 / 366) - 1
    assert result["xirr"] == pytest.approx(expected, abs=1e-6)
    assert result["annualized"] is True
    assert result["total_days"] == 366
    assert result["simple_return"] == pytest.approx(0.1, abs=1e-6)
    assert result["reported_return_percent"] == pytest.approx(expected * 100, abs=1e-4)
    assert result["net_cash_flow"] == 100.0
    assert result["first_cash_flow"] == -1000.0
    assert result["last_cash_flow"] == 1100.0
    assert result["results_disagree"] is False
    assert result["newton_raphson"]["converged"] is True
    assert result["bracketing"]["converged"] is True
    assert result["chosen_method"] in ("NewtonRaphson", "Bracketing")

    # Flows are echoed in chronological order
    assert [cf["date"] for cf in data["cashflows_used"]] == ["2024-01-01", "2025-01-01"]

    meta = data["meta"]
    assert meta["engine_version"] == "0.1.0"
    assert meta["input_fingerprint"].startswith("sha256:")
    assert meta["calculation_hash"].startswith("sha256:")


def test_simple_xirr_short_span_reports_simple_return(client):
    payload = {
        "cash_flows": [
            {"date": "2024-01-01", "amount": -1000.0},
            {"date": "2024-07-01", "amount": 1050.0},
        ],
        "rounding_precision": 4,
        "output": {"include_cashflows": False},
    }

    response = client.post("/xirr/simple", json=payload)

    assert response.status_code == 200
    data = response.json()
    result = data["result"]
    assert result["annualized"] is False
    assert result["reported_return_percent"] == pytest.approx(5.0, abs=1e-4)
    assert result["xirr"] > 0.05
    assert "cashflows_used" not in data


def test_same_inputs_share_a_fingerprint(client):
    flows = [{"date": "2024-01-01", "amount": -1000.0}, {"date": "2025-01-01", "amount": 1100.0}]
    first = client.post("/xirr/simple", json={"cash_flows": flows}).json()["meta"]
    second = client.post("/xirr/simple", json={"cash_flows": flows}).json()["meta"]
    assert first["calculation_id"] != second["calculation_id"]
    assert first["input_fingerprint"] == second["input_fingerprint"]
    assert first["calculation_hash"] == second["calculation_hash"]


@pytest.mark.parametrize(
    "cash_flows, expected_status",
    [
        ([], "INSUFFICIENT_DATA"),
        ([{"date": "2024-01-01", "amount": -1000.0}], "INSUFFICIENT_DATA"),
        (
            [{"date": "2024-01-01", "amount": 1000.0}, {"date": "2025-01-01", "amount": 1100.0}],
            "INVALID_SIGN_MIX",
        ),
        (
            [{"date": "2024-01-01", "amount": 1000.0}, {"date": "2025-01-01", "amount": -1100.0}],
            "NO_RECOVERABLE_POSITION",
        ),
    ],
)
def test_simple_xirr_unsolvable_flows(client, cash_flows, expected_status):
    response = client.post("/xirr/simple", json={"cash_flows": cash_flows})

    assert response.status_code == HTTP_422_UNPROCESSABLE
    assert response.json()["detail"].startswith(f"{expected_status}: ")


def test_simple_xirr_rejects_malformed_dates(client):
    payload = {"cash_flows": [{"date": "2024-13-01", "amount": -1.0}, {"date": "2025-01-01", "amount": 2.0}]}
    response = client.post("/xirr/simple", json=payload)
    assert response.status_code == HTTP_422_UNPROCESSABLE


def test_solver_options_are_echoed(client):
    payload = {
        "cash_flows": [{"date": "2024-01-01", "amount": -1000.0}, {"date": "2025-01-01", "amount": 1100.0}],
        "solver": {"initial_guess": 0.05, "max_iterations": 50},
    }
    data = client.post("/xirr/simple", json=payload).json()
    assert data["meta"]["solver"] == {"initial_guess": 0.05, "max_iterations": 50}
    assert data["result"]["newton_raphson"]["iterations"] <= 50

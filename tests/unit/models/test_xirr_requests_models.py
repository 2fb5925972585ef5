# tests/unit/models/test_xirr_requests_models.py
import pytest
from pydantic import ValidationError

from app.models.xirr_requests import CashFlow, MultiPeriodXirrRequest, TrailingXirrRequest, XirrRequest


@pytest.fixture
def base_xirr_payload():
    """Provides a base payload for a single-sequence XIRR request."""
    return {
        "cash_flows": [
            {"date": "2024-01-01", "amount": -1000.0},
            {"date": "2025-01-01", "amount": 1100.0},
        ],
    }


def test_xirr_request_passes(base_xirr_payload):
    try:
        XirrRequest.model_validate(base_xirr_payload)
    except ValidationError as e:
        pytest.fail(f"Validation failed unexpectedly: {e}")


def test_empty_cash_flow_list_is_accepted_for_the_engine_to_report():
    """An empty list is valid input; the engine answers with INSUFFICIENT_DATA."""
    assert XirrRequest.model_validate({"cash_flows": []}).cash_flows == []


@pytest.mark.parametrize("amount", [float("nan"), float("inf"), float("-inf")])
def test_cash_flow_rejects_non_finite_amount(amount):
    with pytest.raises(ValidationError):
        CashFlow(date="2025-01-01", amount=amount)


def test_cash_flow_requires_a_real_date():
    with pytest.raises(ValidationError):
        CashFlow(date="2025-02-30", amount=1.0)


def test_multi_period_request_requires_a_period():
    with pytest.raises(ValidationError):
        MultiPeriodXirrRequest.model_validate({"periods": []})


def test_multi_period_request_allows_missing_values_and_flows():
    request = MultiPeriodXirrRequest.model_validate(
        {"periods": [{"label": "Open", "start_date": "2024-01-01", "end_date": "2024-12-31"}]}
    )
    assert request.periods[0].start_value is None
    assert request.periods[0].end_value is None
    assert request.cash_flows == []


@pytest.mark.parametrize("horizons", [[], [0], [-1, 5]])
def test_trailing_request_rejects_bad_horizons(base_xirr_payload, horizons):
    payload = {**base_xirr_payload, "horizons": horizons}
    with pytest.raises(ValidationError):
        TrailingXirrRequest.model_validate(payload)


def test_trailing_request_horizons_default_to_none(base_xirr_payload):
    assert TrailingXirrRequest.model_validate(base_xirr_payload).horizons is None

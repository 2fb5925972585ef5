# tests/conftest.py
from datetime import date

import pytest

from engine.schema import CashFlow


@pytest.fixture
def mixed_flows():
    """A one-year sequence with an interim distribution and a second contribution."""
    return [
        CashFlow(date=date(2024, 1, 1), amount=-100000.0, label="Initial Investment"),
        CashFlow(date=date(2024, 6, 15), amount=5000.0, label="Distribution"),
        CashFlow(date=date(2024, 9, 30), amount=-10000.0, label="Contribution"),
        CashFlow(date=date(2024, 12, 31), amount=115000.0, label="Final Value"),
    ]


@pytest.fixture
def two_root_flows():
    """
    NPV = 100 - 101x + x^2 with x = (1+r)^-4, so the rate has two roots:
    r = 0 and r = 100^(-1/4) - 1 (about -68.4%). The default bracket holds no
    sign change, so the bracketing search falls back to the rescue bracket.
    """
    return [
        CashFlow(date=date(2000, 1, 1), amount=100.0),
        CashFlow(date=date(2004, 1, 1), amount=-101.0),
        CashFlow(date=date(2008, 1, 1), amount=1.0),
    ]


@pytest.fixture(scope="module")
def multi_period_payload():
    """Provides a valid multi-period payload with one well-formed and one incomplete period."""
    return {
        "periods": [
            {
                "label": "Calendar 2024",
                "start_date": "2024-01-01",
                "end_date": "2024-12-31",
                "start_value": 100000,
                "end_value": 112000,
            },
            {
                "label": "Missing End",
                "start_date": "2024-01-01",
                "end_date": "2025-06-30",
                "start_value": 100000,
            },
        ],
        "cash_flows": [
            {"date": "2024-01-01", "amount": 99999, "label": "On start boundary"},
            {"date": "2024-06-15", "amount": 5000, "label": "Distribution"},
            {"date": "2024-09-30", "amount": -10000, "label": "Contribution"},
        ],
    }

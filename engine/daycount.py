# engine/daycount.py
from datetime import date
from typing import Sequence

import numpy as np

from engine.config import DEFAULT_SOLVER_CONFIG
from engine.schema import CashFlow

DAYS_PER_YEAR = DEFAULT_SOLVER_CONFIG.days_per_year


def days_between(d1: date, d2: date) -> int:
    """Absolute number of calendar days between two dates."""
    return abs((d2 - d1).days)


def years_between(d1: date, d2: date) -> float:
    """Year fraction on a fixed 365.25-day year."""
    return days_between(d1, d2) / DAYS_PER_YEAR


def _vectors(flows: Sequence[CashFlow], base_date: date):
    amounts = np.array([cf.amount for cf in flows], dtype=np.float64)
    years = np.array([years_between(base_date, cf.date) for cf in flows], dtype=np.float64)
    return amounts, years


def npv(rate: float, flows: Sequence[CashFlow], base_date: date) -> float:
    """
    Net present value of the flows discounted to `base_date`.
    Only defined for rate > -1; callers keep the rate above the solver floor.
    """
    amounts, years = _vectors(flows, base_date)
    with np.errstate(over="ignore", divide="ignore", invalid="ignore"):
        return float(np.sum(amounts / (1.0 + rate) ** years))


def dnpv_drate(rate: float, flows: Sequence[CashFlow], base_date: date) -> float:
    """Analytic derivative of `npv` with respect to the rate."""
    amounts, years = _vectors(flows, base_date)
    with np.errstate(over="ignore", divide="ignore", invalid="ignore"):
        return float(np.sum(-years * amounts / (1.0 + rate) ** (years + 1.0)))

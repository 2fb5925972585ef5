# app/models/xirr_requests.py
from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field, PositiveInt

from core.envelope import BaseRequest


class CashFlow(BaseModel):
    """Represents a single cash flow with its date, signed amount and optional label."""
    date: date
    amount: float = Field(..., allow_inf_nan=False)
    label: Optional[str] = None


class AnalysisPeriod(BaseModel):
    """An analysis window bounded by start and end market values."""
    label: str
    start_date: date
    end_date: date
    start_value: Optional[float] = Field(None, allow_inf_nan=False, description="Market value at the start date; treated as capital committed.")
    end_value: Optional[float] = Field(None, allow_inf_nan=False, description="Market value at the end date; sign is preserved.")


class XirrRequest(BaseRequest):
    """Request model for a single cash-flow sequence."""
    cash_flows: List[CashFlow]


class MultiPeriodXirrRequest(BaseRequest):
    """Request model for XIRR across a set of analysis periods sharing one flow pool."""
    periods: List[AnalysisPeriod] = Field(..., min_length=1)
    cash_flows: List[CashFlow] = Field(default_factory=list, description="Intermediate flows shared by all periods.")


class TrailingXirrRequest(BaseRequest):
    """Request model for trailing windows ending on the latest cash flow."""
    cash_flows: List[CashFlow]
    horizons: Optional[List[PositiveInt]] = Field(None, min_length=1, description="Window lengths in years. Defaults to the configured horizons.")

# app/models/xirr_responses.py
from datetime import date
from typing import List, Literal, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.models.xirr_requests import CashFlow
from common.enums import OutcomeStatus, SolverMethod
from core.envelope import Meta


class MethodResultModel(BaseModel):
    method: SolverMethod
    rate: float
    rate_percent: float
    iterations: int
    converged: bool
    final_residual: float


class XirrResult(BaseModel):
    """Cross-validated XIRR of one cash-flow sequence."""
    xirr: float
    xirr_percent: float
    chosen_method: SolverMethod
    simple_return: Optional[float] = None
    simple_return_percent: Optional[float] = None
    reported_return_percent: Optional[float] = None
    annualized: bool
    total_days: int
    net_cash_flow: float
    first_cash_flow: float
    last_cash_flow: float
    total_inflows: float
    total_outflows: float
    newton_raphson: MethodResultModel
    bracketing: MethodResultModel
    results_disagree: bool
    difference: float
    difference_percent: float


class XirrResponse(BaseModel):
    """Response model for a single-sequence XIRR calculation."""
    calculation_id: UUID
    status: OutcomeStatus
    result: XirrResult
    cashflows_used: Optional[List[CashFlow]] = None
    meta: Meta


class WindowResult(BaseModel):
    label: str
    start_date: date
    end_date: date
    status: OutcomeStatus
    message: Optional[str] = None
    result: Optional[XirrResult] = None
    cashflows_used: Optional[List[CashFlow]] = None


class MultiPeriodSummaryModel(BaseModel):
    total_windows: int
    total_calculations: int
    method_mismatches: int
    mismatch_labels: List[str]
    message: str


class MultiPeriodXirrResponse(BaseModel):
    """Response model for multi-period and trailing-window analyses."""
    calculation_id: UUID
    windows: List[WindowResult]
    summary: MultiPeriodSummaryModel
    meta: Meta


# --- "xirr-results" export document ---
class ExportWindow(BaseModel):
    window_id: str = Field(alias="window-id")
    converged: bool
    error: Optional[str] = None
    iterations: int
    xirr: float

    model_config = ConfigDict(populate_by_name=True)


class ExportCalculation(BaseModel):
    calc_id: str = Field(alias="calc-id")
    windows: List[ExportWindow]

    model_config = ConfigDict(populate_by_name=True)


class XirrResultsDocument(BaseModel):
    type: Literal["xirr-results"] = "xirr-results"
    calc_time: str = Field(alias="calc-time")
    request_id: str = Field(alias="request-id")
    results: List[ExportCalculation]

    model_config = ConfigDict(populate_by_name=True)

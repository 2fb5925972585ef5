# app/api/endpoints/xirr.py
import logging
import time

from fastapi import APIRouter

from adapters.api_adapter import (
    build_results_document,
    create_engine_flows,
    create_engine_periods,
    create_solver_config,
    format_cash_flows,
    format_period_outcome,
    format_reconciled_result,
    format_summary,
)
from app.core.config import get_settings
from app.models.xirr_requests import MultiPeriodXirrRequest, TrailingXirrRequest, XirrRequest
from app.models.xirr_responses import MultiPeriodXirrResponse, XirrResponse, XirrResultsDocument
from core.envelope import BaseRequest, Meta
from core.errors import APIBadRequestError, APIUnprocessableEntityError
from core.repro import generate_canonical_hash
from engine.multi_period import run_multi_period, run_trailing_analysis
from engine.reconcile import calculate_xirr
from engine.schema import MultiPeriodSummary, sort_flows

logger = logging.getLogger(__name__)

router = APIRouter(tags=["XIRR"])
settings = get_settings()


def _build_meta(request: BaseRequest) -> Meta:
    input_fingerprint, calculation_hash = generate_canonical_hash(request, settings.APP_VERSION)
    return Meta(
        calculation_id=request.calculation_id,
        engine_version=settings.APP_VERSION,
        solver=request.solver,
        input_fingerprint=input_fingerprint,
        calculation_hash=calculation_hash,
    )


def _run_periods(request: MultiPeriodXirrRequest) -> MultiPeriodSummary:
    if len(request.periods) > settings.MAX_PERIODS_PER_REQUEST:
        raise APIBadRequestError(
            f"A request may define at most {settings.MAX_PERIODS_PER_REQUEST} periods, got {len(request.periods)}."
        )
    return run_multi_period(
        create_engine_periods(request.periods),
        create_engine_flows(request.cash_flows),
        config=create_solver_config(request.solver),
    )


def _multi_period_response(request: BaseRequest, summary: MultiPeriodSummary) -> MultiPeriodXirrResponse:
    windows = [
        format_period_outcome(po, request.rounding_precision, request.output.include_cashflows)
        for po in summary.outcomes
    ]
    return MultiPeriodXirrResponse(
        calculation_id=request.calculation_id,
        windows=windows,
        summary=format_summary(summary),
        meta=_build_meta(request),
    )


@router.post("/simple", response_model=XirrResponse, response_model_exclude_none=True, summary="Calculate XIRR for one cash-flow sequence")
async def calculate_simple_xirr_endpoint(request: XirrRequest):
    """
    Calculates the XIRR of a single sequence of dated cash flows with both
    Newton-Raphson and Brent's method, reporting any disagreement between them.
    """
    flows = create_engine_flows(request.cash_flows)
    outcome = calculate_xirr(flows, create_solver_config(request.solver))
    if not outcome.ok:
        logger.info(f"XIRR request {request.calculation_id} rejected: {outcome.status.value}")
        raise APIUnprocessableEntityError(f"{outcome.status.value}: {outcome.message}")

    cashflows_used = None
    if request.output.include_cashflows:
        cashflows_used = format_cash_flows(sort_flows(flows))

    return XirrResponse(
        calculation_id=request.calculation_id,
        status=outcome.status,
        result=format_reconciled_result(outcome.result, request.rounding_precision),
        cashflows_used=cashflows_used,
        meta=_build_meta(request),
    )


@router.post("/multi-period", response_model=MultiPeriodXirrResponse, response_model_exclude_none=True, summary="Calculate XIRR across analysis periods")
async def calculate_multi_period_xirr_endpoint(request: MultiPeriodXirrRequest):
    """
    Builds one window per period from its start and end values plus the shared
    intermediate flows and solves each independently. Window errors are reported
    inline so the remaining windows are still returned.
    """
    summary = _run_periods(request)
    return _multi_period_response(request, summary)


@router.post("/trailing", response_model=MultiPeriodXirrResponse, response_model_exclude_none=True, summary="Calculate trailing-window XIRR")
async def calculate_trailing_xirr_endpoint(request: TrailingXirrRequest):
    """Calculates XIRR over trailing windows (in years) ending on the latest cash flow."""
    horizons = request.horizons or settings.DEFAULT_TRAILING_HORIZONS
    summary = run_trailing_analysis(
        create_engine_flows(request.cash_flows),
        horizons=horizons,
        config=create_solver_config(request.solver),
    )
    return _multi_period_response(request, summary)


@router.post("/multi-period/export", response_model=XirrResultsDocument, response_model_exclude_none=True, summary="Export multi-period results")
async def export_multi_period_xirr_endpoint(request: MultiPeriodXirrRequest):
    """Runs a multi-period analysis and returns it as an "xirr-results" document."""
    started = time.perf_counter()
    summary = _run_periods(request)
    calc_time_ms = int((time.perf_counter() - started) * 1000)
    return build_results_document(
        summary,
        calc_id="multi-period-analysis",
        calc_time_ms=calc_time_ms,
        request_id=f"{request.calculation_id}-user-generated",
    )

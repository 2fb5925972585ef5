# adapters/api_adapter.py
import logging
import math
from dataclasses import replace
from typing import Iterable, List, Optional
from uuid import uuid4

from app.models.xirr_requests import AnalysisPeriod
from app.models.xirr_requests import CashFlow as CashFlowModel
from app.models.xirr_responses import (
    ExportCalculation,
    ExportWindow,
    MethodResultModel,
    MultiPeriodSummaryModel,
    WindowResult,
    XirrResult,
    XirrResultsDocument,
)
from core.envelope import SolverOptions
from engine.config import DEFAULT_SOLVER_CONFIG, SolverConfig
from engine.schema import CashFlow, MethodResult, MultiPeriodSummary, Period, PeriodOutcome, ReconciledResult

logger = logging.getLogger(__name__)

FAILED_WINDOW_XIRR = -999.99


def create_solver_config(options: SolverOptions) -> SolverConfig:
    """Creates a SolverConfig from the request's solver block; other settings stay fixed."""
    return replace(DEFAULT_SOLVER_CONFIG, max_iterations=options.max_iterations, initial_guess=options.initial_guess)


def create_engine_flows(cash_flows: Iterable[CashFlowModel]) -> List[CashFlow]:
    return [CashFlow(date=cf.date, amount=cf.amount, label=cf.label) for cf in cash_flows]


def create_engine_periods(periods: Iterable[AnalysisPeriod]) -> List[Period]:
    return [
        Period(
            label=p.label,
            start_date=p.start_date,
            end_date=p.end_date,
            start_value=p.start_value,
            end_value=p.end_value,
        )
        for p in periods
    ]


def _round(value: float, precision: int) -> Optional[float]:
    if not math.isfinite(value):
        return None
    return round(value, precision)


def format_method_result(result: MethodResult, precision: int) -> MethodResultModel:
    return MethodResultModel(
        method=result.method,
        rate=result.rate,
        rate_percent=round(result.rate_percent, precision),
        iterations=result.iterations,
        converged=result.converged,
        final_residual=result.final_residual,
    )


def format_reconciled_result(result: ReconciledResult, precision: int) -> XirrResult:
    """Maps an engine ReconciledResult onto the API response model."""
    return XirrResult(
        xirr=result.chosen_rate,
        xirr_percent=round(result.chosen_rate_percent, precision),
        chosen_method=result.chosen_method,
        simple_return=_round(result.simple_return, 15),
        simple_return_percent=_round(result.simple_return * 100, precision),
        reported_return_percent=_round(result.reported_return * 100, precision),
        annualized=result.is_annualized,
        total_days=result.total_days,
        net_cash_flow=result.net_cash_flow,
        first_cash_flow=result.first_flow_amount,
        last_cash_flow=result.last_flow_amount,
        total_inflows=result.total_inflow,
        total_outflows=result.total_outflow,
        newton_raphson=format_method_result(result.newton_result, precision),
        bracketing=format_method_result(result.bracketing_result, precision),
        results_disagree=result.results_disagree,
        difference=result.disagreement_magnitude,
        difference_percent=round(result.disagreement_magnitude * 100, precision),
    )


def format_cash_flows(flows: Iterable[CashFlow]) -> List[CashFlowModel]:
    return [CashFlowModel(date=cf.date, amount=cf.amount, label=cf.label) for cf in flows]


def format_period_outcome(period_outcome: PeriodOutcome, precision: int, include_cashflows: bool) -> WindowResult:
    outcome = period_outcome.outcome
    return WindowResult(
        label=period_outcome.period.label,
        start_date=period_outcome.period.start_date,
        end_date=period_outcome.period.end_date,
        status=outcome.status,
        message=outcome.message or None,
        result=format_reconciled_result(outcome.result, precision) if outcome.ok else None,
        cashflows_used=format_cash_flows(period_outcome.window) if include_cashflows and period_outcome.window else None,
    )


def format_summary(summary: MultiPeriodSummary) -> MultiPeriodSummaryModel:
    return MultiPeriodSummaryModel(
        total_windows=summary.total_windows,
        total_calculations=summary.total_calculations,
        method_mismatches=summary.mismatch_count,
        mismatch_labels=list(summary.mismatch_labels),
        message=summary.summary_message,
    )


def build_results_document(
    summary: MultiPeriodSummary,
    calc_id: str,
    calc_time_ms: int,
    request_id: Optional[str] = None,
) -> XirrResultsDocument:
    """
    Builds the "xirr-results" export document. Each window reports the values of
    the method the reconciler chose; failed windows carry a sentinel rate.
    """
    windows = []
    for index, period_outcome in enumerate(summary.outcomes, start=1):
        outcome = period_outcome.outcome
        if not outcome.ok:
            windows.append(
                ExportWindow(
                    window_id=str(index),
                    converged=False,
                    error=outcome.message or "Unable to calculate XIRR",
                    iterations=0,
                    xirr=FAILED_WINDOW_XIRR,
                )
            )
            continue

        selected = outcome.result.chosen_method_result
        windows.append(
            ExportWindow(
                window_id=str(index),
                converged=selected.converged,
                iterations=selected.iterations,
                xirr=round(selected.rate, 15),
            )
        )

    logger.info(f"Built xirr-results document for {calc_id} with {len(windows)} windows.")
    return XirrResultsDocument(
        calc_time=f"{calc_time_ms} ms",
        request_id=request_id or f"{uuid4()}-user-generated",
        results=[ExportCalculation(calc_id=calc_id, windows=windows)],
    )

# engine/multi_period.py
import logging
from typing import Iterable, List, Optional, Sequence

from common.enums import OutcomeStatus
from core.periods import TRAILING_LENGTH_MESSAGE, resolve_trailing_start, trailing_label
from engine.config import DEFAULT_SOLVER_CONFIG, SolverConfig
from engine.reconcile import reconcile
from engine.schema import CashFlow, MultiPeriodSummary, Period, PeriodOutcome, XirrOutcome, sort_flows
from engine.windows import build_window, filter_cash_flows_by_period, validate_period

logger = logging.getLogger(__name__)

DEFAULT_TRAILING_HORIZONS = (1, 5, 10)

PERIOD_ERROR_MESSAGES = {
    OutcomeStatus.INSUFFICIENT_DATA: "Please enter start date, end date, and values.",
    OutcomeStatus.INVALID_PERIOD: "Period start date must be before its end date.",
}


def summarize(outcomes: Sequence[PeriodOutcome]) -> MultiPeriodSummary:
    """Aggregates usable results and method mismatches across windows."""
    usable = [po for po in outcomes if po.outcome.ok]
    mismatched = [po.period.label for po in usable if po.outcome.result.results_disagree]
    return MultiPeriodSummary(
        outcomes=tuple(outcomes),
        total_calculations=len(usable),
        mismatch_count=len(mismatched),
        mismatch_labels=tuple(mismatched),
    )


def run_multi_period(
    periods: Iterable[Period],
    flows: Iterable[CashFlow],
    config: SolverConfig = DEFAULT_SOLVER_CONFIG,
    initial_guess: Optional[float] = None,
) -> MultiPeriodSummary:
    """
    Builds and reconciles one window per period. Windows share the flow pool but
    nothing else, so one failing period never affects another.
    """
    pool = tuple(flows)
    outcomes: List[PeriodOutcome] = []

    for period in periods:
        problem = validate_period(period)
        if problem is not None:
            outcome = XirrOutcome(status=problem, message=PERIOD_ERROR_MESSAGES[problem])
            outcomes.append(PeriodOutcome(period=period, window=(), outcome=outcome))
            continue

        window = build_window(period, pool)
        outcomes.append(PeriodOutcome(period=period, window=window, outcome=reconcile(window, config, initial_guess)))

    summary = summarize(outcomes)
    logger.info(
        "Multi-period analysis complete: %d of %d windows solved, %d method mismatches.",
        summary.total_calculations, summary.total_windows, summary.mismatch_count,
    )
    return summary


def run_trailing_analysis(
    flows: Iterable[CashFlow],
    horizons: Sequence[int] = DEFAULT_TRAILING_HORIZONS,
    config: SolverConfig = DEFAULT_SOLVER_CONFIG,
) -> MultiPeriodSummary:
    """
    Reconciles trailing windows ending on the latest flow date, one per horizon
    in years, with earlier flows carried in as an opening balance.
    """
    ordered = sort_flows(flows)
    if len(ordered) < 2:
        return summarize([])

    end_date = ordered[-1].date
    outcomes: List[PeriodOutcome] = []
    for years in horizons:
        if years <= 0:
            period = Period(label=trailing_label(years), start_date=end_date, end_date=end_date)
            outcome = XirrOutcome(status=OutcomeStatus.INVALID_PERIOD, message=TRAILING_LENGTH_MESSAGE)
            outcomes.append(PeriodOutcome(period=period, window=(), outcome=outcome))
            continue

        period = Period(
            label=trailing_label(years),
            start_date=resolve_trailing_start(end_date, years),
            end_date=end_date,
        )
        window = filter_cash_flows_by_period(ordered, end_date, years)
        if len(window) < 2:
            outcome = XirrOutcome(
                status=OutcomeStatus.INSUFFICIENT_DATA, message="Insufficient data for this period."
            )
        else:
            outcome = reconcile(window, config)
        outcomes.append(PeriodOutcome(period=period, window=window, outcome=outcome))

    summary = summarize(outcomes)
    logger.info(
        "Trailing analysis over %s complete: %d of %d windows solved.",
        list(horizons), summary.total_calculations, summary.total_windows,
    )
    return summary

# engine/reconcile.py
import logging
import math
from typing import Iterable, Optional

from common.enums import OutcomeStatus
from engine.config import DEFAULT_SOLVER_CONFIG, SolverConfig
from engine.daycount import days_between
from engine.schema import CashFlow, MethodResult, ReconciledResult, XirrOutcome, sort_flows
from engine.solvers import solve_bracketing, solve_newton_raphson

logger = logging.getLogger(__name__)

INSUFFICIENT_FLOWS_MESSAGE = "At least two cash flows are required."
INVALID_SIGN_MIX_MESSAGE = "At least one negative cash flow (investment) and one positive cash flow (return) are required."
NO_RECOVERABLE_POSITION_MESSAGE = "Final cash flow and net cash flow are both negative; the position never recovered."


def _residual_size(result: MethodResult) -> float:
    return abs(result.final_residual) if math.isfinite(result.final_residual) else math.inf


def _simple_return(rate: float, years: float) -> float:
    """Non-annualized return over `years`; undefined below a -100% rate."""
    if 1 + rate <= 0:
        return math.nan
    return (1 + rate) ** years - 1


def reconcile(
    flows: Iterable[CashFlow],
    config: SolverConfig = DEFAULT_SOLVER_CONFIG,
    initial_guess: Optional[float] = None,
) -> XirrOutcome:
    """
    Solves one cash-flow sequence with both root finders and cross-checks them.

    The chosen rate is the one whose NPV residual is closer to zero; ties go to
    the bracketing solver. Disagreement between the two methods is reported on
    the result rather than resolved silently.
    """
    ordered = sort_flows(flows)
    if len(ordered) < 2:
        return XirrOutcome(status=OutcomeStatus.INSUFFICIENT_DATA, message=INSUFFICIENT_FLOWS_MESSAGE)

    base_date = ordered[0].date
    total_days = days_between(base_date, ordered[-1].date)
    net_cash_flow = sum(cf.amount for cf in ordered)
    total_inflow = sum(cf.amount for cf in ordered if cf.amount > 0)
    total_outflow = sum(abs(cf.amount) for cf in ordered if cf.amount < 0)
    first_flow_amount = ordered[0].amount
    last_flow_amount = ordered[-1].amount

    if last_flow_amount < 0 and net_cash_flow < 0:
        return XirrOutcome(
            status=OutcomeStatus.NO_RECOVERABLE_POSITION, message=NO_RECOVERABLE_POSITION_MESSAGE
        )

    newton = solve_newton_raphson(ordered, base_date, config, initial_guess=initial_guess)
    bracketing = solve_bracketing(ordered, base_date, config)

    chosen = newton if _residual_size(newton) < _residual_size(bracketing) else bracketing
    disagreement = abs(newton.rate - bracketing.rate)
    results_disagree = disagreement > config.disagreement_tolerance

    if not (newton.converged or bracketing.converged):
        logger.warning("Neither solver converged for a %d-flow sequence spanning %d days.", len(ordered), total_days)
    if results_disagree:
        logger.warning(
            "Solver disagreement of %.8f: Newton-Raphson %.8f vs bracketing %.8f.",
            disagreement, newton.rate, bracketing.rate,
        )

    years = total_days / config.days_per_year
    result = ReconciledResult(
        chosen_rate=chosen.rate,
        chosen_rate_percent=chosen.rate * 100,
        chosen_method=chosen.method,
        simple_return=_simple_return(chosen.rate, years),
        is_annualized=total_days > config.annualization_threshold_days,
        total_days=total_days,
        net_cash_flow=net_cash_flow,
        first_flow_amount=first_flow_amount,
        last_flow_amount=last_flow_amount,
        total_inflow=total_inflow,
        total_outflow=total_outflow,
        newton_result=newton,
        bracketing_result=bracketing,
        results_disagree=results_disagree,
        disagreement_magnitude=disagreement,
    )
    logger.debug(
        "Reconciled %d flows: %s rate %.8f after %d iterations.",
        len(ordered), chosen.method.value, chosen.rate, chosen.iterations,
    )
    return XirrOutcome(status=OutcomeStatus.SUCCESS, result=result)


def calculate_xirr(
    flows: Iterable[CashFlow],
    config: SolverConfig = DEFAULT_SOLVER_CONFIG,
    initial_guess: Optional[float] = None,
) -> XirrOutcome:
    """Single-sequence entry point: checks the sign mix before any solver runs."""
    ordered = sort_flows(flows)
    if len(ordered) < 2:
        return XirrOutcome(status=OutcomeStatus.INSUFFICIENT_DATA, message=INSUFFICIENT_FLOWS_MESSAGE)

    has_outflow = any(cf.amount < 0 for cf in ordered)
    has_inflow = any(cf.amount > 0 for cf in ordered)
    if not (has_outflow and has_inflow):
        return XirrOutcome(status=OutcomeStatus.INVALID_SIGN_MIX, message=INVALID_SIGN_MIX_MESSAGE)

    return reconcile(ordered, config, initial_guess=initial_guess)

# engine/schema.py
import math
from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable, Optional, Tuple

from common.enums import OutcomeStatus, SolverMethod
from engine.exceptions import InvalidEngineInputError


@dataclass(frozen=True)
class CashFlow:
    """A single dated, signed cash amount. Negative values are money committed."""
    date: date
    amount: float
    label: Optional[str] = None

    def __post_init__(self):
        if isinstance(self.date, datetime):
            object.__setattr__(self, "date", self.date.date())
        elif not isinstance(self.date, date):
            raise InvalidEngineInputError(f"Cash flow date must be a calendar date, got {type(self.date).__name__}.")
        try:
            amount = float(self.amount)
        except (TypeError, ValueError):
            raise InvalidEngineInputError(f"Cash flow amount must be numeric, got {self.amount!r}.")
        if not math.isfinite(amount):
            raise InvalidEngineInputError(f"Cash flow amount must be finite, got {self.amount!r}.")
        object.__setattr__(self, "amount", amount)


@dataclass(frozen=True)
class Period:
    """An analysis period bounded by market values. Values may be absent."""
    label: str
    start_date: date
    end_date: date
    start_value: Optional[float] = None
    end_value: Optional[float] = None


@dataclass(frozen=True)
class MethodResult:
    """The outcome of a single root-finder run."""
    rate: float
    iterations: int
    converged: bool
    final_residual: float
    method: SolverMethod

    @property
    def rate_percent(self) -> float:
        return self.rate * 100


@dataclass(frozen=True)
class ReconciledResult:
    """
    The cross-validated XIRR of one cash-flow sequence.

    `chosen_rate` is whichever solver left the smaller absolute residual.
    `simple_return` is the non-annualized return over the span; it is the
    figure to report when `is_annualized` is False.
    """
    chosen_rate: float
    chosen_rate_percent: float
    chosen_method: SolverMethod
    simple_return: float
    is_annualized: bool
    total_days: int
    net_cash_flow: float
    first_flow_amount: float
    last_flow_amount: float
    total_inflow: float
    total_outflow: float
    newton_result: MethodResult
    bracketing_result: MethodResult
    results_disagree: bool
    disagreement_magnitude: float

    @property
    def reported_return(self) -> float:
        return self.chosen_rate if self.is_annualized else self.simple_return

    @property
    def chosen_method_result(self) -> MethodResult:
        if self.chosen_method == SolverMethod.NEWTON_RAPHSON:
            return self.newton_result
        return self.bracketing_result


@dataclass(frozen=True)
class XirrOutcome:
    """Either a ReconciledResult or the reason none could be produced."""
    status: OutcomeStatus
    result: Optional[ReconciledResult] = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.status == OutcomeStatus.SUCCESS


@dataclass(frozen=True)
class PeriodOutcome:
    period: Period
    window: Tuple[CashFlow, ...]
    outcome: XirrOutcome


@dataclass(frozen=True)
class MultiPeriodSummary:
    """Per-window outcomes plus cross-window method agreement statistics."""
    outcomes: Tuple[PeriodOutcome, ...]
    total_calculations: int
    mismatch_count: int
    mismatch_labels: Tuple[str, ...]

    @property
    def total_windows(self) -> int:
        return len(self.outcomes)

    @property
    def summary_message(self) -> str:
        if self.total_calculations == 0:
            return "No periods produced a result."
        if self.mismatch_count == 0:
            return "All calculation methods agree on the results."
        message = (
            f"{self.mismatch_count} out of {self.total_calculations} calculations show differences "
            "between Newton-Raphson and Brent's method"
        )
        if self.mismatch_labels:
            message += f" ({', '.join(self.mismatch_labels)})"
        return message + "."


def sort_flows(flows: Iterable[CashFlow]) -> Tuple[CashFlow, ...]:
    """Returns a chronologically sorted copy. Ties are ordered by amount then label."""
    return tuple(sorted(flows, key=lambda cf: (cf.date, cf.amount, cf.label or "")))

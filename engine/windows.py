# engine/windows.py
from datetime import date
from typing import Iterable, Optional, Tuple

from common.enums import OutcomeStatus
from core.periods import resolve_trailing_start
from engine.schema import CashFlow, Period, sort_flows

START_VALUE_LABEL = "Period Start Value"
END_VALUE_LABEL = "Period End Value"
OPENING_BALANCE_LABEL = "Opening Balance"


def validate_period(period: Period) -> Optional[OutcomeStatus]:
    """Returns the reason a period cannot produce a window, or None if it can."""
    if period.start_value is None or period.end_value is None:
        return OutcomeStatus.INSUFFICIENT_DATA
    if period.start_date >= period.end_date:
        return OutcomeStatus.INVALID_PERIOD
    return None


def build_window(period: Period, flows: Iterable[CashFlow]) -> Tuple[CashFlow, ...]:
    """
    Synthesizes the cash-flow sequence for one analysis period.

    The start value is always committed capital (negative); the end value keeps
    its sign so a residual liability stays negative. Intermediate flows dated on
    either boundary are excluded, as the synthetic start and end flows already
    stand for those dates.
    """
    if validate_period(period) is not None:
        return ()

    window = [CashFlow(date=period.start_date, amount=-abs(period.start_value), label=START_VALUE_LABEL)]
    window.extend(cf for cf in flows if period.start_date < cf.date < period.end_date)
    window.append(CashFlow(date=period.end_date, amount=period.end_value, label=END_VALUE_LABEL))
    return sort_flows(window)


def filter_cash_flows_by_period(flows: Iterable[CashFlow], end_date: date, years: int) -> Tuple[CashFlow, ...]:
    """
    Trailing window of `years` years ending on `end_date`, boundaries inclusive.

    Flows before the window are rolled into a single opening balance dated on
    the first flow inside the window, when their sum is non-zero.
    """
    all_flows = tuple(flows)
    start_date = resolve_trailing_start(end_date, years)

    in_window = sort_flows(cf for cf in all_flows if start_date <= cf.date <= end_date)
    if not in_window:
        return ()

    opening_balance = sum(cf.amount for cf in all_flows if cf.date < start_date)
    if opening_balance != 0:
        opening = CashFlow(date=in_window[0].date, amount=opening_balance, label=OPENING_BALANCE_LABEL)
        return (opening,) + in_window
    return in_window

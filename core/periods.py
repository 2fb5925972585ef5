# core/periods.py
from datetime import date

import pandas as pd

TRAILING_LENGTH_MESSAGE = "Trailing window length must be a positive number of years."


def resolve_trailing_start(end_date: date, years: int) -> date:
    """
    Resolves the start of a trailing window ending on `end_date`.
    The start is the same calendar day `years` years earlier; a Feb 29 end date
    rolls forward to Mar 1 when the start year has no leap day.
    """
    if years <= 0:
        raise ValueError(TRAILING_LENGTH_MESSAGE)
    end_ts = pd.Timestamp(end_date)
    start_ts = end_ts - pd.DateOffset(years=years)
    if (end_ts.month, end_ts.day) == (2, 29) and start_ts.day == 28:
        start_ts += pd.Timedelta(days=1)
    return start_ts.date()


def trailing_label(years: int) -> str:
    return "1 Year" if years == 1 else f"{years} Years"

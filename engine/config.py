# engine/config.py
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class SolverConfig:
    """
    Immutable numerical settings shared by both XIRR root finders.
    The day-count basis and annualization threshold are fixed conventions;
    changing either changes every reported rate.
    """
    days_per_year: float = 365.25
    annualization_threshold_days: int = 365
    precision: float = 1e-6
    max_iterations: int = 100
    initial_guess: float = 0.1
    rate_floor: float = -0.99
    default_bracket: Tuple[float, float] = (-0.99, 10.0)
    rescue_bracket: Tuple[float, float] = (-0.5, 5.0)
    disagreement_tolerance: float = 1e-5


DEFAULT_SOLVER_CONFIG = SolverConfig()

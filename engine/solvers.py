# engine/solvers.py
import logging
import math
from datetime import date
from typing import Optional, Sequence

from common.enums import SolverMethod
from engine.config import DEFAULT_SOLVER_CONFIG, SolverConfig
from engine.daycount import dnpv_drate, npv
from engine.schema import CashFlow, MethodResult

logger = logging.getLogger(__name__)


def solve_newton_raphson(
    flows: Sequence[CashFlow],
    base_date: date,
    config: SolverConfig = DEFAULT_SOLVER_CONFIG,
    initial_guess: Optional[float] = None,
) -> MethodResult:
    """
    Derivative-based root finder for the NPV function.

    Stops on |npv| < precision (converged), on an exactly flat derivative or an
    undefined (NaN) step (not converged), or when the iteration budget runs out.
    Steps at or below the rate floor, including -inf, are clamped to the floor.
    """
    rate = config.initial_guess if initial_guess is None else initial_guess
    converged = False
    iterations = 0

    for iterations in range(1, config.max_iterations + 1):
        value = npv(rate, flows, base_date)
        if abs(value) < config.precision:
            converged = True
            break

        slope = dnpv_drate(rate, flows, base_date)
        if slope == 0:
            logger.debug("Newton-Raphson hit a zero derivative at rate %s.", rate)
            break

        next_rate = rate - value / slope
        if math.isnan(next_rate):
            logger.debug("Newton-Raphson produced an undefined step from rate %s.", rate)
            break
        rate = max(next_rate, config.rate_floor)

    return MethodResult(
        rate=rate,
        iterations=iterations,
        converged=converged,
        final_residual=npv(rate, flows, base_date),
        method=SolverMethod.NEWTON_RAPHSON,
    )


def solve_bracketing(
    flows: Sequence[CashFlow],
    base_date: date,
    config: SolverConfig = DEFAULT_SOLVER_CONFIG,
) -> MethodResult:
    """
    Brent's method: inverse quadratic interpolation and secant steps, falling
    back to bisection whenever the interpolated step is not acceptable.

    `b` is always the best estimate and `c` the opposite end of the bracket.
    If the default bracket does not straddle a root, `a` and `b` move to the
    rescue bracket once and the search proceeds either way; `c` and the step
    history still come from the default bracket.
    """
    precision = config.precision
    a, b = config.default_bracket
    fa = npv(a, flows, base_date)
    fb = npv(b, flows, base_date)
    c, fc = a, fa
    d = e = b - a

    if fa * fb >= 0:
        logger.debug("Default bracket %s has no sign change, retrying with %s.", config.default_bracket, config.rescue_bracket)
        a, b = config.rescue_bracket
        fa = npv(a, flows, base_date)
        fb = npv(b, flows, base_date)

    converged = False
    iterations = 0

    for iterations in range(1, config.max_iterations + 1):
        if abs(fc) < abs(fb):
            a, b, c = b, c, b
            fa, fb, fc = fb, fc, fb

        tol = 2 * precision * abs(b) + precision
        m = 0.5 * (c - b)

        if abs(m) <= tol or abs(fb) < precision:
            converged = True
            break

        if abs(e) < tol or abs(fa) <= abs(fb):
            d = e = m
        else:
            s = fb / fa
            if a == c:
                # Secant
                p = 2 * m * s
                q = 1 - s
            else:
                # Inverse quadratic interpolation
                q = fa / fc
                r = fb / fc
                p = s * (2 * m * q * (q - r) - (b - a) * (r - 1))
                q = (q - 1) * (r - 1) * (s - 1)

            if p > 0:
                q = -q
            else:
                p = -p

            if 2 * p < min(3 * m * q - abs(tol * q), abs(e * q)):
                e = d
                d = p / q
            else:
                d = e = m

        a, fa = b, fb
        if abs(d) > tol:
            b += d
        else:
            b += tol if m >= 0 else -tol
        fb = npv(b, flows, base_date)

        if fb * fc > 0:
            c, fc = a, fa
            d = e = b - a

    return MethodResult(
        rate=b,
        iterations=iterations,
        converged=converged,
        final_residual=npv(b, flows, base_date),
        method=SolverMethod.BRACKETING,
    )

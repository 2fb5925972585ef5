# common/enums.py
from enum import Enum


class SolverMethod(str, Enum):
    """Identifies which root finder produced a MethodResult."""

    NEWTON_RAPHSON = "NewtonRaphson"
    BRACKETING = "Bracketing"


class OutcomeStatus(str, Enum):
    """Defines the structured outcomes of an XIRR calculation."""

    SUCCESS = "SUCCESS"
    INSUFFICIENT_DATA = "INSUFFICIENT_DATA"
    INVALID_SIGN_MIX = "INVALID_SIGN_MIX"
    NO_RECOVERABLE_POSITION = "NO_RECOVERABLE_POSITION"
    INVALID_PERIOD = "INVALID_PERIOD"

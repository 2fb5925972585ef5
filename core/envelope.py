# core/envelope.py
from typing import Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


# --- Shared Request Components ---
class SolverOptions(BaseModel):
    initial_guess: float = Field(0.1, gt=-0.99, description="Starting rate for the Newton-Raphson solver.")
    max_iterations: int = Field(100, ge=1, le=1000, description="Iteration budget for each solver.")


class Output(BaseModel):
    include_cashflows: bool = Field(True, description="Echo the sorted cash flows each result was solved from.")


class BaseRequest(BaseModel):
    """Base Pydantic model for all XIRR API requests."""

    calculation_id: UUID = Field(default_factory=uuid4)
    rounding_precision: int = Field(6, ge=0, le=15)
    solver: SolverOptions = Field(default_factory=SolverOptions)
    output: Output = Field(default_factory=Output)


# --- Shared Response Components ---
class Meta(BaseModel):
    calculation_id: UUID
    engine_version: str
    solver: SolverOptions
    input_fingerprint: Optional[str] = None
    calculation_hash: Optional[str] = None

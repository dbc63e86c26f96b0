"""
Dantzig's-rule simplex over a dictionary-form tableau.

Each iteration:
    1. Entering variable: the tight variable with the largest positive
       objective coefficient (first one wins on ties). None → optimal.
    2. Leaving row: among rows where the entering variable has a negative
       coefficient (the row bounds it), the largest ratio constant /
       coefficient. Coefficients are stored negated, so this is the
       classical minimum-ratio test. Rows with a zero or positive
       coefficient never limit the entering variable and are skipped.
       None → unbounded along the entering direction.
    3. Pivot.

There is no anti-cycling rule; a pivot cap bounds degenerate cycling and
is reported as DID_NOT_CONVERGE.
"""

import numpy as np
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Callable, Optional

from ..config import DEFAULT_MAX_ITERATIONS
from .errors import UnboundedObjectiveError, IterationLimitError

if TYPE_CHECKING:
    from .tableau import LinearProgram


# =============================================================================
# Results
# =============================================================================

class SolveStatus(str, Enum):
    """Terminal state of a simplex run."""
    OPTIMAL = "optimal"
    UNBOUNDED = "unbounded"
    DID_NOT_CONVERGE = "did_not_converge"


@dataclass
class SolveResult:
    """
    Outcome of a simplex run.

    Attributes
    ----------
    status : SolveStatus
        OPTIMAL, UNBOUNDED or DID_NOT_CONVERGE.
    iterations : int
        Number of pivots performed.
    objective : Optional[float]
        Optimal objective value. None unless status is OPTIMAL.
    x : Optional[np.ndarray]
        Optimal values of the decision variables. None unless OPTIMAL.
    entering : Optional[int]
        For UNBOUNDED, the variable along which the objective is unbounded.
    message : str
        Human-readable status message.
    """
    status: SolveStatus
    iterations: int
    objective: Optional[float] = None
    x: Optional[np.ndarray] = None
    entering: Optional[int] = None
    message: str = ""

    @property
    def optimal(self) -> bool:
        return self.status is SolveStatus.OPTIMAL

    def raise_for_status(self) -> "SolveResult":
        """Return self if optimal, else raise the matching SimplexError."""
        if self.status is SolveStatus.UNBOUNDED:
            raise UnboundedObjectiveError(self.message)
        if self.status is SolveStatus.DID_NOT_CONVERGE:
            raise IterationLimitError(self.message)
        return self


@dataclass
class PivotRecord:
    """One pivot, as reported to a trace callback."""
    iteration: int
    entering: int
    leaving: int
    row: int
    pivot_coeff: float
    objective_before: float
    objective_after: float


# =============================================================================
# Selection rules
# =============================================================================

def select_entering(program: "LinearProgram") -> Optional[int]:
    """
    Dantzig's rule: tight variable with the largest positive objective coefficient.

    Tight variables are scanned in slot order and only a strictly larger
    coefficient replaces the current choice.

    Returns
    -------
    int or None
        The entering variable, or None if no coefficient is positive
        (the current basic solution is optimal).
    """
    entering = None
    highest_coeff = 0.0
    for var in program.tight:
        coeff = program.objective_row[var]
        if coeff > highest_coeff:
            entering = var
            highest_coeff = coeff
    return entering


def select_leaving(program: "LinearProgram", entering: int) -> Optional[int]:
    """
    Ratio test: row of the tightest binding constraint on `entering`.

    Only rows with a negative coefficient bound the entering variable. A
    zero-constant row with a positive coefficient would give a ratio of 0
    without binding anything, and pivoting on it cycles.

    Returns
    -------
    int or None
        Tableau row whose loose variable leaves, or None if no row bounds
        the entering variable (the objective is unbounded).
    """
    row = None
    highest_ratio = -np.inf
    for i in range(program.m):
        coeff = program.tableau[i, entering]
        if coeff >= 0:
            continue
        ratio = program.tableau[i, -1] / coeff
        if ratio <= 0 and ratio > highest_ratio:
            row = i
            highest_ratio = ratio
    return row


# =============================================================================
# Control loop
# =============================================================================

def solve(
    program: "LinearProgram",
    max_iter: Optional[int] = DEFAULT_MAX_ITERATIONS,
    trace: Optional[Callable[["LinearProgram", PivotRecord], None]] = None,
) -> SolveResult:
    """
    Pivot `program` in place until it is optimal or provably unbounded.

    Parameters
    ----------
    program : LinearProgram
        Problem in dictionary form; mutated in place.
    max_iter : int or None
        Maximum number of pivots. None means no cap.
    trace : callable, optional
        Called as ``trace(program, record)`` after every pivot.

    Returns
    -------
    SolveResult
        With status OPTIMAL, UNBOUNDED or DID_NOT_CONVERGE. The objective
        and solution are only filled in when OPTIMAL; `program.objective()`
        still holds the last objective constant in every case.
    """
    iterations = 0
    while True:
        entering = select_entering(program)
        if entering is None:
            return SolveResult(
                status=SolveStatus.OPTIMAL,
                iterations=iterations,
                objective=program.objective(),
                x=program.decision_values(),
                message=f"Optimal after {iterations} pivots",
            )

        if max_iter is not None and iterations >= max_iter:
            return SolveResult(
                status=SolveStatus.DID_NOT_CONVERGE,
                iterations=iterations,
                message=f"Pivot limit reached ({max_iter}) before optimality",
            )

        row = select_leaving(program, entering)
        if row is None:
            return SolveResult(
                status=SolveStatus.UNBOUNDED,
                iterations=iterations,
                entering=entering,
                message=f"Objective unbounded along variable {entering}",
            )

        pivot_coeff = float(program.tableau[row, entering])
        before = program.objective()
        leaving = program.pivot(entering, row)
        iterations += 1

        if trace is not None:
            trace(program, PivotRecord(
                iteration=iterations,
                entering=entering,
                leaving=leaving,
                row=row,
                pivot_coeff=pivot_coeff,
                objective_before=before,
                objective_after=program.objective(),
            ))

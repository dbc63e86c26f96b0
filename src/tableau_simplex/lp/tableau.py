"""
Dictionary-form tableau for "maximize c·x subject to Ax ≤ b, x ≥ 0".

Each constraint row i defines one loose (basic) variable:

    loose[i] = T[i, -1] + Σ_j T[i, j] * x_j      (j over tight variables)

and the objective row reads

    z = obj[-1] + Σ_j obj[j] * x_j

Variables 0 .. n-1 are the decision variables, n .. n+m-1 the slacks.
Initially every decision variable is tight (pinned at zero) and every
slack is loose, which is feasible as long as b ≥ 0.
"""

import numpy as np
from typing import Callable, List, Optional

from ..config import DEFAULT_MAX_ITERATIONS, VALIDATE_RHS, INVARIANT_TOLERANCE
from .errors import DimensionError, InfeasibleStartError, TableauCorruptionError
from .solver import SolveResult, solve as run_simplex


_UNSET = object()


# =============================================================================
# Input normalization
# =============================================================================

def as_problem_arrays(c, A, b):
    """Coerce (c, A, b) to float64 arrays and check their shapes agree."""
    c = np.asarray(c, dtype=np.float64)
    b = np.asarray(b, dtype=np.float64)
    if c.ndim != 1:
        raise DimensionError(f"Objective c must be one-dimensional, got shape {c.shape}")
    if b.ndim != 1:
        raise DimensionError(f"Right-hand side b must be one-dimensional, got shape {b.shape}")

    n, m = len(c), len(b)
    A = np.asarray(A, dtype=np.float64)
    if A.size == 0 and m * n == 0:
        A = A.reshape(m, n)

    if A.shape != (m, n):
        raise DimensionError(
            f"Constraint matrix A shape {A.shape} does not match expected ({m}, {n})"
        )

    for name, array in [("A", A), ("b", b), ("c", c)]:
        if not np.all(np.isfinite(array)):
            raise DimensionError(f"Array {name} contains non-finite values (NaN or Inf)")

    return c, A, b


# =============================================================================
# Linear program in dictionary form
# =============================================================================

class LinearProgram:
    """
    A linear program held as a simplex dictionary.

    Parameters
    ----------
    c : array_like, shape (n,)
        Objective coefficients of the decision variables.
    A : array_like, shape (m, n)
        Constraint coefficients; row i reads A[i] · x ≤ b[i].
    b : array_like, shape (m,)
        Right-hand sides. Must be non-negative.
    max_iter : int or None
        Pivot cap used by `solve()`. None means no cap.
    validate : bool
        If True, raise InfeasibleStartError when any b[i] < 0. If False,
        a negative right-hand side is the caller's responsibility and the
        result of `solve()` is meaningless.
    trace : callable, optional
        Called as ``trace(program, record)`` after every pivot with a
        `PivotRecord`.

    Attributes
    ----------
    n, m : int
        Number of decision variables and of constraints (= slacks).
    objective_row : np.ndarray, shape (n + m + 1,)
        Current objective coefficients; the last slot is the objective value.
    tableau : np.ndarray, shape (m, n + m + 1)
        Current defining equation of each loose variable; the last column
        holds the row constants.
    tight : list of int
        Nonbasic variable indices (value zero), length n.
    loose : list of int
        Basic variable indices, ``loose[i]`` is defined by row i, length m.
    """

    def __init__(
        self,
        c,
        A,
        b,
        max_iter: Optional[int] = DEFAULT_MAX_ITERATIONS,
        validate: bool = VALIDATE_RHS,
        trace: Optional[Callable] = None,
    ):
        c, A, b = as_problem_arrays(c, A, b)
        if validate and np.any(b < 0):
            bad = [int(i) for i in np.flatnonzero(b < 0)]
            raise InfeasibleStartError(
                f"Right-hand side must be non-negative; negative entries at rows {bad}"
            )
        if max_iter is not None and max_iter < 0:
            raise ValueError(f"max_iter must be non-negative or None, got {max_iter}")

        self.n = len(c)
        self.m = len(b)
        self.max_iter = max_iter
        self.trace = trace
        self.c = c.copy()

        width = self.n + self.m + 1
        self.objective_row = np.zeros(width)
        self.objective_row[:self.n] = c

        # Negated so that each row reads slack_i = b_i - A[i] · x
        self.tableau = np.zeros((self.m, width))
        self.tableau[:, :self.n] = -A
        self.tableau[:, -1] = b

        self.tight: List[int] = list(range(self.n))
        self.loose: List[int] = list(range(self.n, self.n + self.m))

    @property
    def n_vars(self) -> int:
        """Total variable count, decision variables plus slacks."""
        return self.n + self.m

    def __repr__(self):
        return f"LinearProgram(n={self.n}, m={self.m}, objective={self.objective()!r})"

    # -------------------------------------------------------------------------
    # Reading the current basic solution
    # -------------------------------------------------------------------------

    def objective(self) -> float:
        """Current objective value (the optimum once `solve()` reports OPTIMAL)."""
        return float(self.objective_row[-1])

    def value(self, var: int) -> float:
        """Current value of variable `var`: zero if tight, else its row constant."""
        if not 0 <= var < self.n_vars:
            raise IndexError(f"Variable index {var} out of range [0, {self.n_vars})")
        if var in self.loose:
            return float(self.tableau[self.loose.index(var), -1])
        return 0.0

    def assignment(self) -> np.ndarray:
        """Values of all n + m variables in the current basic solution."""
        x = np.zeros(self.n_vars)
        for row, var in enumerate(self.loose):
            x[var] = self.tableau[row, -1]
        return x

    def decision_values(self) -> np.ndarray:
        """Values of the n original decision variables."""
        return self.assignment()[:self.n]

    def check_invariants(self, tol: float = INVARIANT_TOLERANCE) -> None:
        """
        Verify the dictionary is well formed.

        Checks that tight and loose partition [0, n+m) with the right sizes,
        that no loose row references its own variable, and that the objective
        constant equals c · x for the current basic solution.

        Raises
        ------
        TableauCorruptionError
            If any check fails.
        """
        if len(self.tight) != self.n or len(self.loose) != self.m:
            raise TableauCorruptionError(
                f"Expected {self.n} tight and {self.m} loose variables, got "
                f"{len(self.tight)} and {len(self.loose)}"
            )
        if sorted(self.tight + self.loose) != list(range(self.n_vars)):
            raise TableauCorruptionError(
                f"tight {self.tight} and loose {self.loose} do not partition "
                f"[0, {self.n_vars})"
            )
        for row, var in enumerate(self.loose):
            if self.tableau[row, var] != 0:
                raise TableauCorruptionError(
                    f"Row {row} references its own basic variable {var} "
                    f"(coefficient {self.tableau[row, var]})"
                )
        for var in self.loose:
            if self.objective_row[var] != 0:
                raise TableauCorruptionError(
                    f"Objective row references basic variable {var}"
                )

        expected = float(self.c @ self.decision_values())
        if not np.isclose(self.objective(), expected, rtol=tol, atol=tol):
            raise TableauCorruptionError(
                f"Objective constant {self.objective()} differs from c·x = {expected}"
            )

    # -------------------------------------------------------------------------
    # Pivoting
    # -------------------------------------------------------------------------

    def pivot(self, entering: int, row: int) -> int:
        """
        Swap tight variable `entering` with the loose variable of `row`.

        Rewrites `row` as the defining equation of `entering`, then
        eliminates `entering` from every other row and from the objective.

        Parameters
        ----------
        entering : int
            Index of a currently tight variable.
        row : int
            Tableau row whose loose variable leaves the basis.

        Returns
        -------
        int
            Index of the leaving variable (now tight).
        """
        if entering not in self.tight:
            raise ValueError(f"Entering variable {entering} is not tight")
        if not 0 <= row < self.m:
            raise ValueError(f"Row {row} out of range [0, {self.m})")

        loosen_coeff = self.tableau[row, entering]
        if loosen_coeff == 0:
            raise ValueError(
                f"Variable {entering} does not appear in row {row}; cannot pivot"
            )
        leaving = self.loose[row]

        # leaving = const + loosen_coeff * entering + ...  solved for entering
        self.loose[row] = entering
        pivot_row = self.tableau[row]
        pivot_row[entering] = 0.0
        pivot_row[leaving] = -1.0
        pivot_row /= -loosen_coeff

        multipliers = self.tableau[:, entering].copy()
        multipliers[row] = 0.0
        self.tableau += np.outer(multipliers, pivot_row)
        self.tableau[:, entering] = 0.0

        self.objective_row += self.objective_row[entering] * pivot_row
        self.objective_row[entering] = 0.0

        self.tight[self.tight.index(entering)] = leaving
        return leaving

    def solve(self, max_iter=_UNSET, trace=_UNSET) -> SolveResult:
        """
        Run Dantzig's-rule simplex to termination.

        Parameters default to the values given at construction. See
        `tableau_simplex.lp.solver.solve`.

        Returns
        -------
        SolveResult
        """
        return run_simplex(
            self,
            max_iter=self.max_iter if max_iter is _UNSET else max_iter,
            trace=self.trace if trace is _UNSET else trace,
        )


def maximize(
    c,
    A,
    b,
    max_iter: Optional[int] = DEFAULT_MAX_ITERATIONS,
    validate: bool = VALIDATE_RHS,
    trace: Optional[Callable] = None,
) -> SolveResult:
    """
    Build and solve "maximize c·x subject to Ax ≤ b, x ≥ 0" in one call.

    See `LinearProgram` for the parameters.
    """
    program = LinearProgram(c, A, b, max_iter=max_iter, validate=validate, trace=trace)
    return program.solve()

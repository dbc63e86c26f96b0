"""
Reference solver for cross-validation.

Solves the same "maximize c·x subject to Ax ≤ b, x ≥ 0" problem through
scipy.optimize.linprog (HiGHS backend) and reports it as a SolveResult,
so the tableau solver can be checked against an independent implementation.
"""

import numpy as np
from scipy.optimize import linprog

from .errors import SimplexError
from .tableau import as_problem_arrays
from .solver import SolveResult, SolveStatus


def solve_reference(c, A, b, method: str = "highs") -> SolveResult:
    """
    Solve the problem with scipy.optimize.linprog.

    linprog minimizes, so the objective is negated going in and coming out.

    Parameters
    ----------
    c : array_like, shape (n,)
        Objective coefficients (to maximize).
    A : array_like, shape (m, n)
        Constraint matrix.
    b : array_like, shape (m,)
        Right-hand sides.
    method : str
        linprog method (default "highs").

    Returns
    -------
    SolveResult
        `iterations` is the iteration count reported by linprog.

    Raises
    ------
    SimplexError
        If linprog reports infeasibility or a numerical failure.
    """
    c, A, b = as_problem_arrays(c, A, b)
    n, m = len(c), len(b)

    if n == 0:
        return SolveResult(
            status=SolveStatus.OPTIMAL, iterations=0,
            objective=0.0, x=np.zeros(0), message="Empty problem",
        )

    res = linprog(
        -c,
        A_ub=A if m > 0 else None,
        b_ub=b if m > 0 else None,
        bounds=[(0, None)] * n,
        method=method,
        options={"presolve": False},
    )
    nit = int(getattr(res, "nit", 0) or 0)

    if res.status == 0:
        return SolveResult(
            status=SolveStatus.OPTIMAL,
            iterations=nit,
            objective=float(-res.fun),
            x=np.asarray(res.x, dtype=np.float64),
            message=res.message,
        )
    elif res.status == 1:
        return SolveResult(
            status=SolveStatus.DID_NOT_CONVERGE, iterations=nit, message=res.message,
        )
    elif res.status == 3 or (res.status in (2, 4) and _origin_feasible_unbounded(res, b)):
        return SolveResult(
            status=SolveStatus.UNBOUNDED, iterations=nit, message=res.message,
        )
    raise SimplexError(f"linprog returned status {res.status}: {res.message}")


def _origin_feasible_unbounded(res, b) -> bool:
    """
    Resolve HiGHS's "infeasible or unbounded" verdict.

    With b ≥ 0 the origin is feasible, so a status 2 can only mean
    unbounded; status 4 counts only when its message says so.
    """
    if not np.all(b >= 0):
        return False
    return res.status == 2 or "unbounded" in str(res.message).lower()

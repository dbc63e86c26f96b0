"""
Linear programming module: dictionary-form simplex.

Implements:
- Dictionary (tableau) construction from c, A, b
- Dantzig's entering rule and the ratio test
- Pivot / elimination step
- Reference solve through scipy.optimize.linprog

Main entry points:
- `LinearProgram(c, A, b).solve()`: Build and pivot to termination
- `maximize(c, A, b)`: One-shot helper
- `solve_reference(c, A, b)`: Cross-check with HiGHS
"""

from .errors import (
    SimplexError,
    DimensionError,
    InfeasibleStartError,
    TableauCorruptionError,
    UnboundedObjectiveError,
    IterationLimitError,
)

from .tableau import LinearProgram, as_problem_arrays, maximize

from .solver import (
    SolveStatus,
    SolveResult,
    PivotRecord,
    select_entering,
    select_leaving,
    solve,
)

from .reference import solve_reference

__all__ = [
    # Tableau
    "LinearProgram",
    "as_problem_arrays",
    "maximize",
    # Errors
    "SimplexError",
    "DimensionError",
    "InfeasibleStartError",
    "TableauCorruptionError",
    "UnboundedObjectiveError",
    "IterationLimitError",
    # Solver
    "SolveStatus",
    "SolveResult",
    "PivotRecord",
    "select_entering",
    "select_leaving",
    "solve",
    # Reference
    "solve_reference",
]

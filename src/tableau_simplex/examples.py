"""
Sample problems and command-line entry point.

Usage:
    python -m tableau_simplex.examples --example all --verbose --check

Example 1:  maximize 1.2 x1 + 1.7 x2
            s.t. x1 ≤ 3000, x2 ≤ 4000, x1 + x2 ≤ 5000
            optimum 8000 at x = (1000, 4000)

Example 2:  maximize 5 x1 + 4 x2 + 3 x3
            s.t. 2 x1 + 3 x2 + x3 ≤ 5
                 4 x1 + x2 + 2 x3 ≤ 11
                 3 x1 + 4 x2 + 2 x3 ≤ 8
            optimum 13 at x = (2, 0, 1)
"""

import argparse
import sys
from typing import Callable, Dict, Optional

from .config import DEFAULT_MAX_ITERATIONS, OBJECTIVE_TOLERANCE
from .diagnostics import format_tableau, printing_trace
from .lp.reference import solve_reference
from .lp.solver import SolveStatus
from .lp.tableau import LinearProgram


# =============================================================================
# Problem data
# =============================================================================

EXAMPLE_1 = {
    "c": [1.2, 1.7],
    "A": [
        [1, 0],
        [0, 1],
        [1, 1],
    ],
    "b": [3000, 4000, 5000],
}

EXAMPLE_2 = {
    "c": [5, 4, 3],
    "A": [
        [2, 3, 1],
        [4, 1, 2],
        [3, 4, 2],
    ],
    "b": [5, 11, 8],
}

UNBOUNDED_EXAMPLE = {
    # maximize x1 s.t. x2 ≤ 1: nothing limits x1
    "c": [1, 0],
    "A": [
        [0, 1],
    ],
    "b": [1],
}


def example_1(**kwargs) -> LinearProgram:
    """Two-variable production problem, optimum 8000."""
    return LinearProgram(EXAMPLE_1["c"], EXAMPLE_1["A"], EXAMPLE_1["b"], **kwargs)


def example_2(**kwargs) -> LinearProgram:
    """Three-variable textbook problem, optimum 13."""
    return LinearProgram(EXAMPLE_2["c"], EXAMPLE_2["A"], EXAMPLE_2["b"], **kwargs)


def unbounded_example(**kwargs) -> LinearProgram:
    return LinearProgram(
        UNBOUNDED_EXAMPLE["c"], UNBOUNDED_EXAMPLE["A"], UNBOUNDED_EXAMPLE["b"], **kwargs
    )


EXAMPLES: Dict[str, Callable[..., LinearProgram]] = {
    "1": example_1,
    "2": example_2,
    "unbounded": unbounded_example,
}

_PROBLEM_DATA = {
    "1": EXAMPLE_1,
    "2": EXAMPLE_2,
    "unbounded": UNBOUNDED_EXAMPLE,
}


# =============================================================================
# Running
# =============================================================================

def run_example(
    name: str,
    max_iter: Optional[int] = DEFAULT_MAX_ITERATIONS,
    verbose: bool = False,
    check: bool = False,
) -> bool:
    """
    Solve one named example and print its objective.

    Returns
    -------
    bool
        False if `check` is set and the reference solver disagrees.
    """
    trace = printing_trace(show_tableau=True) if verbose else None
    program = EXAMPLES[name](max_iter=max_iter, trace=trace)

    print(f"Example {name}: n={program.n}, m={program.m}")
    if verbose:
        print(format_tableau(program))

    result = program.solve()
    if result.optimal:
        print(f"  Objective: {result.objective:g}")
        print(f"  x = {result.x.tolist()}")
    else:
        print(f"  {result.status.value}: {result.message}")

    if not check:
        return True

    data = _PROBLEM_DATA[name]
    ref = solve_reference(data["c"], data["A"], data["b"])
    agrees = ref.status is result.status
    if agrees and result.optimal:
        agrees = abs(ref.objective - result.objective) <= OBJECTIVE_TOLERANCE
    if verbose or not agrees:
        ref_value = f"{ref.objective:g}" if ref.optimal else ref.status.value
        print(f"  Reference (linprog): {ref_value} -> "
              f"{'agrees' if agrees else 'MISMATCH'}")
    return agrees


def main(argv=None):
    """Command-line entry point."""
    parser = argparse.ArgumentParser(
        description="Solve the sample linear programs with the tableau simplex"
    )
    parser.add_argument(
        "--example", type=str, default="all",
        choices=sorted(EXAMPLES) + ["all"],
        help="Which example to solve (default: all)"
    )
    parser.add_argument(
        "--max-iter", type=int, default=DEFAULT_MAX_ITERATIONS,
        help=f"Pivot cap (default: {DEFAULT_MAX_ITERATIONS})"
    )
    parser.add_argument(
        "--verbose", action="store_true",
        help="Print every pivot and the tableau"
    )
    parser.add_argument(
        "--check", action="store_true",
        help="Compare against scipy.optimize.linprog"
    )

    args = parser.parse_args(argv)

    names = ["1", "2"] if args.example == "all" else [args.example]
    ok = True
    for name in names:
        ok &= run_example(
            name, max_iter=args.max_iter, verbose=args.verbose, check=args.check,
        )
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())

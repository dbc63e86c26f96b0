"""
Debug printing and trace sinks for the simplex loop.

The solver itself never prints; pass one of these as the `trace`
callback to watch it work.
"""

import sys
import numpy as np
from typing import List, Optional, TextIO

from .config import PRINT_PRECISION
from .lp.solver import PivotRecord
from .lp.tableau import LinearProgram


def format_vector(values, precision: int = PRINT_PRECISION) -> str:
    """One entry per line, like a column vector."""
    values = np.asarray(values)
    if values.dtype.kind == "f":
        return "\n".join(f"{v:.{precision}g}" for v in values)
    return "\n".join(str(v) for v in values)


def format_tableau(program: LinearProgram, precision: int = PRINT_PRECISION) -> str:
    """
    Dump the full dictionary state.

    Sections, separated by blank lines: objective row, loose variables,
    tight variables, tableau matrix.
    """
    matrix = np.array2string(
        program.tableau,
        precision=precision,
        suppress_small=True,
        max_line_width=200,
    )
    sections = [
        "objective:\n" + format_vector(program.objective_row, precision),
        "loose:\n" + format_vector(program.loose),
        "tight:\n" + format_vector(program.tight),
        "tableau:\n" + matrix,
    ]
    return "\n\n".join(sections) + "\n"


def printing_trace(stream: Optional[TextIO] = None, show_tableau: bool = False):
    """
    Build a trace callback that prints every pivot.

    Parameters
    ----------
    stream : file-like, optional
        Where to print. Defaults to sys.stdout at call time.
    show_tableau : bool
        Also dump the full tableau after each pivot.
    """
    def trace(program: LinearProgram, record: PivotRecord) -> None:
        out = stream if stream is not None else sys.stdout
        print(f"  Pivot {record.iteration}:", file=out)
        print(f"    Loosen: {record.entering}", file=out)
        print(f"    Constraint: {record.row}", file=out)
        print(f"    LoosenCoeff: {record.pivot_coeff:.{PRINT_PRECISION}g}", file=out)
        print(f"    Tighten: {record.leaving}", file=out)
        print(f"    Objective: {record.objective_before:.{PRINT_PRECISION}g} -> "
              f"{record.objective_after:.{PRINT_PRECISION}g}", file=out)
        if show_tableau:
            print(format_tableau(program), file=out)

    return trace


class TraceRecorder:
    """
    Trace callback that keeps every PivotRecord.

    With ``check=True`` the program's invariants are verified after each
    pivot, so a corrupted tableau fails at the pivot that broke it.
    """

    def __init__(self, check: bool = False):
        self.check = check
        self.records: List[PivotRecord] = []

    def __call__(self, program: LinearProgram, record: PivotRecord) -> None:
        if self.check:
            program.check_invariants()
        self.records.append(record)

    def __len__(self):
        return len(self.records)

    @property
    def objectives(self) -> List[float]:
        """Objective value after each pivot."""
        return [r.objective_after for r in self.records]

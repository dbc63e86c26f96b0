"""
Tests for the simplex control loop.

Tests the selection rules, termination on the sample problems,
unboundedness, the pivot cap, degenerate dimensions and the
per-pivot invariants observed through a trace callback.
"""

import pytest
import numpy as np

from tableau_simplex.config import OBJECTIVE_TOLERANCE
from tableau_simplex.diagnostics import TraceRecorder
from tableau_simplex.examples import (
    EXAMPLE_2,
    example_1,
    example_2,
    unbounded_example,
)
from tableau_simplex.lp.errors import UnboundedObjectiveError, IterationLimitError
from tableau_simplex.lp.tableau import LinearProgram, maximize
from tableau_simplex.lp.solver import (
    SolveStatus,
    SolveResult,
    select_entering,
    select_leaving,
    solve,
)


# ============================================================================
# Selection rules
# ============================================================================

class TestSelectEntering:
    """Dantzig's rule."""

    def test_largest_coefficient(self):
        assert select_entering(example_1()) == 1
        assert select_entering(example_2()) == 0

    def test_ties_go_to_first_tight_slot(self):
        program = LinearProgram([2.0, 3.0, 3.0], np.eye(3), [1.0, 1.0, 1.0])
        assert select_entering(program) == 1

    def test_none_when_no_positive_coefficient(self):
        program = LinearProgram([0.0, -1.0], np.eye(2), [1.0, 1.0])
        assert select_entering(program) is None

    def test_none_without_variables(self):
        program = LinearProgram([], np.zeros((1, 0)), [1.0])
        assert select_entering(program) is None


class TestSelectLeaving:
    """Ratio test on the negated coefficients."""

    def test_tightest_row(self):
        # x2 ≤ 4000 binds before x1 + x2 ≤ 5000
        assert select_leaving(example_1(), 1) == 1
        # 2 x1 ≤ 5 binds before 4 x1 ≤ 11 and 3 x1 ≤ 8
        assert select_leaving(example_2(), 0) == 0

    def test_rows_without_entering_are_skipped(self):
        # Only x1 ≤ 3000 and x1 + x2 ≤ 5000 mention x1
        assert select_leaving(example_1(), 0) == 0

    def test_none_when_column_is_empty(self):
        assert select_leaving(unbounded_example(), 0) is None

    def test_none_when_only_positive_ratios(self):
        # -x1 + x2 ≤ 1 does not bound x1 from above
        program = LinearProgram([1.0, 0.0], [[-1.0, 1.0]], [1.0])
        assert select_leaving(program, 0) is None

    def test_first_row_wins_ties(self):
        program = LinearProgram([1.0], [[1.0], [2.0]], [2.0, 4.0])
        assert select_leaving(program, 0) == 0

    def test_zero_rhs_positive_coefficient_is_skipped(self):
        """x1 - x2 ≥ 0 with b = 0 does not bound x1; x1 ≤ 5 does."""
        program = LinearProgram([1.0, 0.0], [[-1.0, 1.0], [1.0, 0.0]], [0.0, 5.0])
        assert select_leaving(program, 0) == 1

    def test_zero_rhs_negative_coefficient_is_selected(self):
        """x1 ≤ 0 binds immediately and beats x1 ≤ 3."""
        program = LinearProgram([1.0], [[1.0], [1.0]], [3.0, 0.0])
        assert select_leaving(program, 0) == 1

    def test_zero_rhs_only_positive_coefficient(self):
        program = LinearProgram([1.0], [[-1.0]], [0.0])
        assert select_leaving(program, 0) is None


# ============================================================================
# Termination on known problems
# ============================================================================

class TestKnownOptima:
    """End-to-end solves with known answers."""

    def test_example_1(self):
        """Optimum at x = (1000, 4000): 1.2·1000 + 1.7·4000 = 8000."""
        program = example_1()
        result = program.solve()

        assert result.status is SolveStatus.OPTIMAL
        assert result.optimal
        assert result.objective == pytest.approx(8000.0, abs=OBJECTIVE_TOLERANCE)
        assert program.objective() == pytest.approx(8000.0, abs=OBJECTIVE_TOLERANCE)
        np.testing.assert_allclose(result.x, [1000.0, 4000.0], atol=1e-9)
        assert result.iterations == 2

    def test_example_1_beats_other_vertex(self):
        """(3000, 2000) is a vertex but not the optimum."""
        result = example_1().solve()
        assert result.objective > 1.2 * 3000 + 1.7 * 2000

    def test_example_2(self):
        program = example_2()
        result = program.solve()

        assert result.status is SolveStatus.OPTIMAL
        assert result.objective == pytest.approx(13.0, abs=OBJECTIVE_TOLERANCE)
        np.testing.assert_allclose(result.x, [2.0, 0.0, 1.0], atol=1e-9)
        assert result.iterations == 2

    def test_solution_is_feasible(self):
        result = example_2().solve()
        A = np.array(EXAMPLE_2["A"], dtype=float)
        b = np.array(EXAMPLE_2["b"], dtype=float)
        assert np.all(A @ result.x <= b + 1e-9)
        assert np.all(result.x >= -1e-9)

    def test_objective_matches_assignment(self):
        program = example_2()
        result = program.solve()
        c = np.array(EXAMPLE_2["c"], dtype=float)
        assert c @ result.x == pytest.approx(result.objective)

    def test_already_optimal(self):
        program = LinearProgram([-1.0, -2.0], np.eye(2), [3.0, 4.0])
        result = program.solve()
        assert result.status is SolveStatus.OPTIMAL
        assert result.iterations == 0
        assert result.objective == 0.0

    def test_resolve_is_noop(self):
        program = example_2()
        first = program.solve()
        second = program.solve()
        assert second.status is SolveStatus.OPTIMAL
        assert second.iterations == 0
        assert second.objective == first.objective

    def test_maximize_helper(self):
        result = maximize(EXAMPLE_2["c"], EXAMPLE_2["A"], EXAMPLE_2["b"])
        assert result.objective == pytest.approx(13.0, abs=OBJECTIVE_TOLERANCE)

    def test_module_level_solve(self):
        result = solve(example_1(), max_iter=None)
        assert result.objective == pytest.approx(8000.0, abs=OBJECTIVE_TOLERANCE)

    def test_zero_rhs_non_binding_row(self):
        """maximize x1 s.t. x2 - x1 ≤ 0, x1 ≤ 5: optimum 5 at (5, 0)."""
        result = maximize([1.0, 0.0], [[-1.0, 1.0], [1.0, 0.0]], [0.0, 5.0])
        assert result.status is SolveStatus.OPTIMAL
        assert result.objective == pytest.approx(5.0)
        np.testing.assert_allclose(result.x, [5.0, 0.0])
        assert result.iterations == 1

    def test_degenerate_pivot(self):
        """maximize x1 + x2 s.t. x1 - x2 ≤ 0, x1 + x2 ≤ 4: first pivot stays at 0."""
        recorder = TraceRecorder(check=True)
        result = maximize([1.0, 1.0], [[1.0, -1.0], [1.0, 1.0]], [0.0, 4.0], trace=recorder)
        assert result.status is SolveStatus.OPTIMAL
        assert result.objective == pytest.approx(4.0)
        np.testing.assert_allclose(result.x, [2.0, 2.0])
        assert recorder.objectives == pytest.approx([0.0, 4.0])


# ============================================================================
# Unboundedness
# ============================================================================

class TestUnbounded:
    """A profitable direction with no binding row."""

    def test_unconstrained_variable(self):
        result = unbounded_example().solve()
        assert result.status is SolveStatus.UNBOUNDED
        assert not result.optimal
        assert result.objective is None
        assert result.x is None
        assert result.entering == 0

    def test_column_entirely_nonpositive(self):
        """-x1 + x2 ≤ 1, -2 x1 ≤ 3: x1 can grow forever."""
        program = LinearProgram([1.0, 0.0], [[-1.0, 1.0], [-2.0, 0.0]], [1.0, 3.0])
        result = program.solve()
        assert result.status is SolveStatus.UNBOUNDED
        assert result.entering == 0

    def test_zero_rhs_nonpositive_column(self):
        """maximize x1 s.t. -x1 ≤ 0."""
        result = maximize([1.0], [[-1.0]], [0.0])
        assert result.status is SolveStatus.UNBOUNDED
        assert result.iterations == 0
        assert result.entering == 0

    def test_unbounded_after_pivots(self):
        """x1 ≤ 2 is hit first, then x2 is free to grow."""
        program = LinearProgram([2.0, 1.0], [[1.0, 0.0], [1.0, -1.0]], [2.0, 5.0])
        result = program.solve()
        assert result.status is SolveStatus.UNBOUNDED
        assert result.iterations == 1
        assert result.entering == 1
        assert program.objective() == pytest.approx(4.0)

    def test_raise_for_status(self):
        result = unbounded_example().solve()
        with pytest.raises(UnboundedObjectiveError, match="unbounded"):
            result.raise_for_status()


# ============================================================================
# Pivot cap
# ============================================================================

class TestIterationLimit:
    """DID_NOT_CONVERGE when the cap is reached first."""

    def test_cap_reached(self):
        program = example_2(max_iter=1)
        result = program.solve()
        assert result.status is SolveStatus.DID_NOT_CONVERGE
        assert result.iterations == 1
        assert result.objective is None
        # The tableau keeps the partial progress
        assert program.objective() == pytest.approx(12.5)

    def test_zero_cap(self):
        result = example_2(max_iter=0).solve()
        assert result.status is SolveStatus.DID_NOT_CONVERGE
        assert result.iterations == 0

    def test_zero_cap_on_optimal_problem(self):
        program = LinearProgram([-1.0], [[1.0]], [1.0], max_iter=0)
        assert program.solve().status is SolveStatus.OPTIMAL

    def test_resume_without_cap(self):
        program = example_2(max_iter=1)
        program.solve()
        result = program.solve(max_iter=None)
        assert result.status is SolveStatus.OPTIMAL
        assert result.objective == pytest.approx(13.0, abs=OBJECTIVE_TOLERANCE)

    def test_raise_for_status(self):
        result = example_2(max_iter=1).solve()
        with pytest.raises(IterationLimitError):
            result.raise_for_status()

    def test_raise_for_status_passes_optimal(self):
        result = example_2().solve()
        assert result.raise_for_status() is result


# ============================================================================
# Degenerate dimensions
# ============================================================================

class TestDimensionBoundary:
    """n = 0 or m = 0 terminates immediately with objective 0."""

    def test_no_variables(self):
        program = LinearProgram([], np.zeros((3, 0)), [1.0, 2.0, 3.0])
        result = program.solve()
        assert result.status is SolveStatus.OPTIMAL
        assert result.iterations == 0
        assert program.objective() == 0.0

    def test_no_constraints_nonpositive_objective(self):
        program = LinearProgram([-1.0, 0.0], [], [])
        result = program.solve()
        assert result.status is SolveStatus.OPTIMAL
        assert result.iterations == 0
        assert program.objective() == 0.0

    def test_no_constraints_positive_objective(self):
        """Nothing bounds a profitable variable, but no pivot is made."""
        program = LinearProgram([1.0], [], [])
        result = program.solve()
        assert result.status is SolveStatus.UNBOUNDED
        assert result.iterations == 0
        assert program.objective() == 0.0

    def test_empty_problem(self):
        result = LinearProgram([], [], []).solve()
        assert result.status is SolveStatus.OPTIMAL
        assert result.objective == 0.0


# ============================================================================
# Per-pivot properties
# ============================================================================

class TestTrace:
    """Invariants and monotonicity observed after every pivot."""

    @pytest.mark.parametrize("build", [example_1, example_2])
    def test_invariants_after_every_pivot(self, build):
        recorder = TraceRecorder(check=True)
        result = build(trace=recorder).solve()
        assert result.optimal
        assert len(recorder) == result.iterations

    @pytest.mark.parametrize("build", [example_1, example_2])
    def test_objective_non_decreasing(self, build):
        recorder = TraceRecorder()
        build(trace=recorder).solve()
        values = [0.0] + recorder.objectives
        assert all(b >= a for a, b in zip(values, values[1:]))

    def test_records_example_2(self):
        recorder = TraceRecorder()
        example_2(trace=recorder).solve()
        first, second = recorder.records

        assert (first.entering, first.row, first.leaving) == (0, 0, 3)
        assert first.pivot_coeff == -2.0
        assert first.objective_after == pytest.approx(12.5)
        assert (second.entering, second.row, second.leaving) == (2, 2, 5)
        assert second.objective_before == pytest.approx(12.5)
        assert second.objective_after == pytest.approx(13.0)
        assert [r.iteration for r in recorder.records] == [1, 2]

    def test_trace_override_at_solve(self):
        recorder = TraceRecorder()
        program = example_1()
        program.solve(trace=recorder)
        assert len(recorder) == 2

    def test_random_problems_keep_invariants(self):
        rng = np.random.default_rng(7)
        for _ in range(20):
            n, m = rng.integers(1, 6, size=2)
            A = rng.uniform(0.1, 2.0, size=(m, n))
            b = rng.uniform(1.0, 10.0, size=m)
            c = rng.uniform(-1.0, 3.0, size=n)
            recorder = TraceRecorder(check=True)
            result = maximize(c, A, b, trace=recorder)
            assert result.optimal
            values = [0.0] + recorder.objectives
            assert all(b_ >= a_ - 1e-12 for a_, b_ in zip(values, values[1:]))


def test_result_defaults():
    result = SolveResult(status=SolveStatus.OPTIMAL, iterations=0)
    assert result.objective is None
    assert result.message == ""
    assert SolveStatus.UNBOUNDED == "unbounded"

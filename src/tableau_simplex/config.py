"""
Global configuration and numerical defaults for the tableau simplex solver.
"""


# =============================================================================
# Iteration Control
# =============================================================================

DEFAULT_MAX_ITERATIONS = 10_000
"""Default pivot cap. Degenerate problems can cycle under Dantzig's rule."""


# =============================================================================
# Construction
# =============================================================================

VALIDATE_RHS = True
"""Reject problems with a negative right-hand side at construction."""


# =============================================================================
# Numerical Parameters
# =============================================================================

OBJECTIVE_TOLERANCE = 1e-3
"""Tolerance when comparing an objective against a known optimum."""

INVARIANT_TOLERANCE = 1e-9
"""Tolerance for the objective-consistency part of the invariant check."""


# =============================================================================
# Diagnostics
# =============================================================================

PRINT_PRECISION = 4
"""Number of digits shown by the diagnostic tableau formatter."""

"""
Exceptions raised by the tableau simplex.
"""


class SimplexError(Exception):
    """Base class for simplex-related errors."""
    pass


class DimensionError(SimplexError, ValueError):
    """Raised when c, A and b do not describe a consistent problem."""
    pass


class InfeasibleStartError(SimplexError, ValueError):
    """Raised when the all-slack starting basis is infeasible (some b_i < 0)."""
    pass


class TableauCorruptionError(SimplexError):
    """Raised when the tableau appears to be in an invalid state."""
    pass


class UnboundedObjectiveError(SimplexError):
    """Raised when the objective can grow without limit."""
    pass


class IterationLimitError(SimplexError):
    """Raised when the pivot cap is reached before optimality."""
    pass

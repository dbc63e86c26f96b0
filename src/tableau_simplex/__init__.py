"""
tableau_simplex: Dantzig's-rule simplex in dictionary form.

Solves small dense linear programs "maximize c·x subject to Ax ≤ b, x ≥ 0"
with b ≥ 0, starting from the all-slack basis.
"""

from . import config
from .lp import LinearProgram, SolveResult, SolveStatus, maximize

__version__ = "0.1.0"
__all__ = ["config", "LinearProgram", "SolveResult", "SolveStatus", "maximize"]

"""lpbridge: run GLPK on linear problems and read back its solutions."""

from lpbridge.core import LpConstraint, LpProblem, LpVariable, Solution, Status
from lpbridge.errors import (
    ChannelError,
    FormatError,
    ProcessFailure,
    SolverError,
    SolverTimeout,
    SpawnError,
)
from lpbridge.solvers import GlpkSolver, parse_solution
from lpbridge.version import __version__

__all__ = [
    "__version__",
    "ChannelError",
    "FormatError",
    "GlpkSolver",
    "LpConstraint",
    "LpProblem",
    "LpVariable",
    "ProcessFailure",
    "Solution",
    "SolverError",
    "SolverTimeout",
    "SpawnError",
    "Status",
    "parse_solution",
]

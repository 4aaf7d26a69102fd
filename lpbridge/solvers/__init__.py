from lpbridge.solvers.base import SolutionParsingSolver, SolverPlugin
from lpbridge.solvers.discovery import discover_plugins, register_plugin
from lpbridge.solvers.glpk import GlpkSolver
from lpbridge.solvers.glpk_parser import parse_solution
from lpbridge.solvers.process import execute
from lpbridge.solvers.status import GLPK_STATUS_MAP, map_status

__all__ = [
    "GLPK_STATUS_MAP",
    "GlpkSolver",
    "SolutionParsingSolver",
    "SolverPlugin",
    "discover_plugins",
    "execute",
    "map_status",
    "parse_solution",
    "register_plugin",
]

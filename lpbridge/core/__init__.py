from lpbridge.core.problem import (
    ConstraintSense,
    LpConstraint,
    LpProblem,
    LpVariable,
    ObjectiveSense,
    VariableType,
)
from lpbridge.core.solution import Solution, Status

__all__ = [
    "ConstraintSense",
    "LpConstraint",
    "LpProblem",
    "LpVariable",
    "ObjectiveSense",
    "Solution",
    "Status",
    "VariableType",
]

"""Linear problem model handed to external solvers."""

from __future__ import annotations

import json
import math
import re
from collections.abc import Mapping
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field, model_validator

_NAME_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_.\[\]]*$")

# glpsol's report moves longer names onto a line of their own, which the
# fixed-offset report parser cannot follow.
MAX_NAME_LENGTH = 12


class VariableType(str, Enum):
    BINARY = "binary"
    INTEGER = "integer"
    CONTINUOUS = "continuous"


class ObjectiveSense(str, Enum):
    MIN = "min"
    MAX = "max"


class ConstraintSense(str, Enum):
    LE = "<="
    GE = ">="
    EQ = "=="


def _check_name(name: str, kind: str) -> None:
    if not _NAME_PATTERN.match(name):
        raise ValueError(f"{kind} name '{name}' is not a valid LP identifier")
    if len(name) > MAX_NAME_LENGTH:
        raise ValueError(f"{kind} name '{name}' is longer than {MAX_NAME_LENGTH} characters")


class LpVariable(BaseModel):
    name: str
    vartype: VariableType = VariableType.CONTINUOUS
    lb: float | None = 0.0
    ub: float | None = None

    @model_validator(mode="after")
    def _validate_bounds(self) -> "LpVariable":
        _check_name(self.name, "variable")
        if self.vartype == VariableType.BINARY:
            if self.lb is None:
                self.lb = 0.0
            if self.ub is None:
                self.ub = 1.0
            if self.lb != 0 or self.ub != 1:
                raise ValueError(f"binary variable '{self.name}' must have lb=0 and ub=1")
            return self

        if self.lb is not None and self.ub is not None and self.lb > self.ub:
            raise ValueError(f"variable '{self.name}' has lb > ub")

        if self.vartype == VariableType.INTEGER:
            for bound in (self.lb, self.ub):
                if bound is not None and math.isfinite(bound) and not float(bound).is_integer():
                    raise ValueError(f"integer variable '{self.name}' must have integral bounds")
        return self


class LpConstraint(BaseModel):
    name: str
    terms: dict[str, float]
    sense: ConstraintSense
    rhs: float

    @model_validator(mode="after")
    def _validate_name(self) -> "LpConstraint":
        _check_name(self.name, "constraint")
        return self


class LpProblem(BaseModel):
    """A named linear (mixed-integer) program."""

    name: str = "unnamed_problem"
    sense: ObjectiveSense = ObjectiveSense.MIN
    variables: list[LpVariable] = Field(default_factory=list)
    objective: dict[str, float] = Field(default_factory=dict)
    objective_constant: float = 0.0
    constraints: list[LpConstraint] = Field(default_factory=list)

    @model_validator(mode="after")
    def _validate_model(self) -> "LpProblem":
        if not self.variables:
            raise ValueError("at least one variable is required")

        names = self.variable_names()
        if len(names) != len(set(names)):
            raise ValueError("variable names must be unique")

        constraint_names = [c.name for c in self.constraints]
        if len(constraint_names) != len(set(constraint_names)):
            raise ValueError("constraint names must be unique")

        known = set(names)
        unknown = sorted(set(self.objective) - known)
        if unknown:
            raise ValueError("objective references unknown variables: " + ", ".join(unknown))
        for constraint in self.constraints:
            unknown = sorted(set(constraint.terms) - known)
            if unknown:
                raise ValueError(
                    f"constraint '{constraint.name}' references unknown variables: " + ", ".join(unknown)
                )
        return self

    def variable_names(self) -> list[str]:
        return [v.name for v in self.variables]

    def has_integer_variables(self) -> bool:
        return any(v.vartype != VariableType.CONTINUOUS for v in self.variables)

    def evaluate(self, values: Mapping[str, float]) -> float:
        """Objective value for the given assignment; missing variables count as zero."""
        total = float(self.objective_constant)
        for name, coef in self.objective.items():
            total += coef * float(values.get(name, 0.0))
        return total

    @classmethod
    def from_json_file(cls, path: str | Path) -> "LpProblem":
        with Path(path).open("r", encoding="utf-8") as f:
            data = json.load(f)
        return cls.model_validate(data)

    def to_json_file(self, path: str | Path) -> None:
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        with target.open("w", encoding="utf-8") as f:
            json.dump(self.model_dump(mode="json"), f, indent=2, sort_keys=True)

"""Solution and status models."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, PlainSerializer

from lpbridge.core.problem import LpProblem


class Status(str, Enum):
    OPTIMAL = "OPTIMAL"
    INFEASIBLE = "INFEASIBLE"
    UNBOUNDED = "UNBOUNDED"
    NOT_SOLVED = "NOT_SOLVED"


def _read_only(values: Mapping[str, float]) -> Mapping[str, float]:
    return MappingProxyType(dict(values))


def _as_dict(values: Mapping[str, float]) -> dict[str, float]:
    return dict(values)


ValueMap = Annotated[
    Mapping[str, float],
    AfterValidator(_read_only),
    PlainSerializer(_as_dict, return_type=dict[str, float]),
]


class Solution(BaseModel):
    """Outcome of one solver run.

    ``values`` is a read-only view over a private copy of the mapping the
    solution was built from; ``model_dump`` returns it as a plain dict.
    ``problem`` is the model the solution was produced for, when the caller
    supplied one. It is held by reference and never modified.

    Solutions compare by value but are not hashable, since ``problem`` is a
    mutable model.
    """

    model_config = ConfigDict(frozen=True)

    status: Status
    values: ValueMap = Field(default_factory=dict, validate_default=True)
    problem: LpProblem | None = None

    def is_success(self) -> bool:
        return self.status == Status.OPTIMAL

    def value(self, name: str, default: float | None = None) -> float | None:
        return self.values.get(name, default)

    def objective_value(self) -> float | None:
        if self.problem is None:
            return None
        return self.problem.evaluate(self.values)

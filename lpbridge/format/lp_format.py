"""CPLEX LP text rendering of an ``LpProblem``."""

from __future__ import annotations

import math
from collections.abc import Mapping

from lpbridge.core.problem import ConstraintSense, LpProblem, LpVariable, ObjectiveSense, VariableType

_SENSE_TOKENS = {
    ConstraintSense.LE: "<=",
    ConstraintSense.GE: ">=",
    ConstraintSense.EQ: "=",
}


def _number(value: float) -> str:
    return f"{value:.12g}"


def _linear_expression(terms: Mapping[str, float], fallback: str) -> str:
    parts: list[str] = []
    for name, coef in terms.items():
        if coef == 0:
            continue
        magnitude = abs(coef)
        text = name if magnitude == 1 else f"{_number(magnitude)} {name}"
        if coef < 0:
            parts.append(f"- {text}")
        elif parts:
            parts.append(f"+ {text}")
        else:
            parts.append(text)
    if not parts:
        return f"0 {fallback}"
    return " ".join(parts)


def _referenced_names(problem: LpProblem) -> set[str]:
    names = {name for name, coef in problem.objective.items() if coef != 0}
    for constraint in problem.constraints:
        names.update(name for name, coef in constraint.terms.items() if coef != 0)
    return names


def _bound_line(var: LpVariable, referenced: bool) -> str | None:
    has_lb = var.lb is not None and math.isfinite(var.lb)
    has_ub = var.ub is not None and math.isfinite(var.ub)

    if not has_lb and not has_ub:
        return f"{var.name} free"
    if has_lb and not has_ub:
        if var.lb == 0 and referenced:
            return None
        return f"{var.name} >= {_number(var.lb)}"
    if not has_lb:
        return f"-inf <= {var.name} <= {_number(var.ub)}"
    if var.lb == var.ub:
        return f"{var.name} = {_number(var.lb)}"
    return f"{_number(var.lb)} <= {var.name} <= {_number(var.ub)}"


def to_lp_format(problem: LpProblem) -> str:
    """Render ``problem`` in the CPLEX LP dialect read by `glpsol --lp`.

    The objective constant is not written; ``LpProblem.evaluate`` adds it
    back when a solution is scored.
    """
    first = problem.variables[0].name
    lines = [f"\\ Problem name: {problem.name}", ""]

    lines.append("Maximize" if problem.sense == ObjectiveSense.MAX else "Minimize")
    lines.append(f"  obj: {_linear_expression(problem.objective, first)}")

    lines.append("Subject To")
    for constraint in problem.constraints:
        expr = _linear_expression(constraint.terms, first)
        lines.append(f"  {constraint.name}: {expr} {_SENSE_TOKENS[constraint.sense]} {_number(constraint.rhs)}")

    # glpsol drops columns that appear nowhere in the model text, so an
    # unreferenced variable keeps an explicit default bound.
    referenced = _referenced_names(problem)
    bounds = [
        line
        for line in (
            _bound_line(v, v.name in referenced) for v in problem.variables if v.vartype != VariableType.BINARY
        )
        if line is not None
    ]
    if bounds:
        lines.append("Bounds")
        lines.extend(f"  {line}" for line in bounds)

    general = [v.name for v in problem.variables if v.vartype == VariableType.INTEGER]
    if general:
        lines.append("General")
        lines.extend(f"  {name}" for name in general)

    binary = [v.name for v in problem.variables if v.vartype == VariableType.BINARY]
    if binary:
        lines.append("Binary")
        lines.extend(f"  {name}" for name in binary)

    lines.append("End")
    return "\n".join(lines) + "\n"

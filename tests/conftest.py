import stat
import sys
from collections.abc import Callable
from pathlib import Path

import pytest

from lpbridge.core.problem import LpProblem


def glpk_report(
    status: str = "OPTIMAL",
    rows: list[str] | None = None,
    columns: list[tuple[str, str]] | None = None,
    name: str = "demo",
) -> str:
    """A report laid out the way `glpsol --output` prints an LP solution."""
    rows = ["c1", "c2"] if rows is None else rows
    columns = [("x", "2"), ("y", "3.5")] if columns is None else columns
    lines = [
        f"Problem:    {name}",
        f"Rows:       {len(rows)}",
        f"Columns:    {len(columns)}",
        f"Non-zeros:  {2 * len(rows)}",
        f"Status:     {status}",
        "Objective:  obj = 9 (MAXimum)",
        "",
        "   No.   Row name   St   Activity     Lower bound   Upper bound    Marginal",
        "------ ------------ -- ------------- ------------- ------------- -------------",
    ]
    for index, row in enumerate(rows, start=1):
        lines.append(f"{index:>6} {row:<12} NU             4                           4             1")
    lines += [
        "",
        "   No. Column name  St   Activity     Lower bound   Upper bound    Marginal",
        "------ ------------ -- ------------- ------------- ------------- -------------",
    ]
    for index, (column, value) in enumerate(columns, start=1):
        lines.append(f"{index:>6} {column:<12} B  {value:>13}             0")
    lines += ["", "Karush-Kuhn-Tucker optimality conditions:", "", "End of output"]
    return "\n".join(lines) + "\n"


@pytest.fixture
def demo_problem() -> LpProblem:
    return LpProblem.model_validate(
        {
            "name": "demo",
            "sense": "max",
            "variables": [
                {"name": "x", "vartype": "continuous", "lb": 0, "ub": 10},
                {"name": "y", "vartype": "integer", "lb": 0, "ub": 5},
            ],
            "objective": {"x": 3.0, "y": 2.0},
            "objective_constant": 1.0,
            "constraints": [
                {"name": "c1", "terms": {"x": 1.0, "y": 1.0}, "sense": "<=", "rhs": 4.0},
                {"name": "c2", "terms": {"x": 1.0, "y": -1.0}, "sense": ">=", "rhs": -2.0},
            ],
        }
    )


@pytest.fixture
def fake_glpsol(tmp_path: Path) -> Callable[..., Path]:
    """Write an executable that mimics glpsol's I/O contract.

    It stores stdin in ``model.lp`` next to itself, copies ``report`` to the
    path given after ``-o`` and exits with ``exit_code``.
    """
    if sys.platform == "win32":
        pytest.skip("fake glpsol relies on a POSIX shell")

    def _make(report: str = "", exit_code: int = 0, body: str | None = None) -> Path:
        report_path = tmp_path / "report.txt"
        report_path.write_text(report, encoding="utf-8")
        script = tmp_path / "glpsol"
        if body is None:
            body = (
                f'cat > "{tmp_path / "model.lp"}"\n'
                f'cat "{report_path}" > "$4"\n'
                f"exit {exit_code}\n"
            )
        script.write_text("#!/bin/sh\n" + body, encoding="utf-8")
        script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return script

    return _make


@pytest.fixture
def make_report() -> Callable[..., str]:
    return glpk_report

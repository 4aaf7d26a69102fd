"""GLPK (glpsol) command-line solver adapter."""

from __future__ import annotations

import io
import logging
import shutil
import uuid
from collections.abc import Iterable
from pathlib import Path

from lpbridge.config import ArtifactRoute, load_settings
from lpbridge.core.problem import LpProblem
from lpbridge.core.solution import Solution
from lpbridge.format.lp_format import to_lp_format
from lpbridge.readers.lines import LineReader
from lpbridge.solvers.base import SolutionParsingSolver
from lpbridge.solvers.glpk_parser import parse_solution
from lpbridge.solvers.process import execute

logger = logging.getLogger(__name__)


class GlpkSolver(SolutionParsingSolver):
    """Runs `glpsol` on a problem piped through stdin.

    Configuration is fixed at construction; the ``with_*`` methods return a
    new solver and leave this one untouched, so one instance can be shared
    between threads. By default glpsol writes its report to stderr. With the
    ``file`` artifact route it writes to ``temp_solution_file`` instead, a
    uuid-based name chosen once per instance.
    """

    name = "glpk"

    def __init__(
        self,
        command_name: str = "glpsol",
        temp_solution_file: str | None = None,
        artifact_route: ArtifactRoute | str = ArtifactRoute.STDERR,
        timeout: float | None = None,
    ) -> None:
        self.command_name = command_name
        self.temp_solution_file = temp_solution_file or f"{uuid.uuid4()}.sol"
        self.artifact_route = ArtifactRoute(artifact_route)
        self.timeout = timeout

    def __repr__(self) -> str:
        return (
            f"GlpkSolver(command_name={self.command_name!r}, "
            f"temp_solution_file={self.temp_solution_file!r}, "
            f"artifact_route={self.artifact_route.value!r}, timeout={self.timeout!r})"
        )

    @classmethod
    def from_config(cls) -> "GlpkSolver":
        settings = load_settings()
        return cls(
            command_name=settings.glpsol_command,
            artifact_route=settings.artifact_route,
            timeout=settings.timeout,
        )

    def _replace(self, **changes: object) -> "GlpkSolver":
        params: dict[str, object] = {
            "command_name": self.command_name,
            "temp_solution_file": self.temp_solution_file,
            "artifact_route": self.artifact_route,
            "timeout": self.timeout,
        }
        params.update(changes)
        return GlpkSolver(**params)

    def with_command_name(self, command_name: str) -> "GlpkSolver":
        return self._replace(command_name=command_name)

    def with_temp_solution_file(self, temp_solution_file: str) -> "GlpkSolver":
        return self._replace(temp_solution_file=temp_solution_file)

    def with_artifact_route(self, artifact_route: ArtifactRoute | str) -> "GlpkSolver":
        return self._replace(artifact_route=ArtifactRoute(artifact_route))

    def with_timeout(self, timeout: float | None) -> "GlpkSolver":
        return self._replace(timeout=timeout)

    def command_args(self) -> list[str]:
        if self.artifact_route == ArtifactRoute.FILE:
            output = self.temp_solution_file
        else:
            output = "/dev/stderr"
        return ["--lp", "/dev/stdin", "-o", output]

    def read_solution(self, lines: Iterable[str], problem: LpProblem | None = None) -> Solution:
        return parse_solution(lines, problem)

    def run(self, problem: LpProblem) -> Solution:
        model_text = to_lp_format(problem)
        logger.debug("solving '%s' with %s (%d variables)", problem.name, self.command_name, len(problem.variables))

        if self.artifact_route == ArtifactRoute.FILE:
            return self._run_with_solution_file(problem, model_text)

        artifact = execute(
            self.command_name,
            self.command_args(),
            model_text,
            solver_name=self.name,
            timeout=self.timeout,
        )
        return self.read_solution(LineReader(io.BytesIO(artifact)), problem)

    def _run_with_solution_file(self, problem: LpProblem, model_text: str) -> Solution:
        path = Path(self.temp_solution_file)
        try:
            execute(
                self.command_name,
                self.command_args(),
                model_text,
                solver_name=self.name,
                timeout=self.timeout,
            )
            return self.read_solution_file(path, problem)
        finally:
            path.unlink(missing_ok=True)


def get_plugin() -> GlpkSolver | None:
    solver = GlpkSolver.from_config()
    if shutil.which(solver.command_name) is None:
        return None
    return solver

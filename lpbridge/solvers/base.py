"""Solver plugin base classes."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from pathlib import Path

from lpbridge.core.problem import LpProblem
from lpbridge.core.solution import Solution
from lpbridge.readers.lines import LineReader


class SolverPlugin(ABC):
    name: str

    @abstractmethod
    def run(self, problem: LpProblem) -> Solution:
        raise NotImplementedError


class SolutionParsingSolver(SolverPlugin):
    """A solver whose results come back as a text report to be parsed."""

    @abstractmethod
    def read_solution(self, lines: Iterable[str], problem: LpProblem | None = None) -> Solution:
        raise NotImplementedError

    def read_solution_file(self, path: str | Path, problem: LpProblem | None = None) -> Solution:
        with LineReader.from_path(path) as lines:
            return self.read_solution(lines, problem)

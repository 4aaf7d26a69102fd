"""Exception types raised while driving an external solver."""

from __future__ import annotations


class SolverError(RuntimeError):
    """Base class for every failure surfaced by a solver run."""


class SpawnError(SolverError):
    """The solver binary is missing or could not be launched."""


class ChannelError(SolverError):
    """Reading or writing one of the solver's channels failed."""


class ProcessFailure(SolverError):
    def __init__(self, solver_name: str, returncode: int, stderr: str = "") -> None:
        self.solver_name = solver_name
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(f"{solver_name} exited with status {returncode}")


class SolverTimeout(SolverError):
    def __init__(self, solver_name: str, timeout: float) -> None:
        self.solver_name = solver_name
        self.timeout = timeout
        super().__init__(f"{solver_name} did not finish within {timeout:g}s")


class FormatError(SolverError, ValueError):
    """The solution report does not follow the expected layout."""

    def __init__(self, message: str, stage: str, line_number: int | None = None) -> None:
        self.stage = stage
        self.line_number = line_number
        if line_number is not None:
            message = f"{message} (line {line_number})"
        super().__init__(f"Incorrect solution format: {message}")

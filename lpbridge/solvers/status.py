"""GLPK status vocabulary."""

from __future__ import annotations

from types import MappingProxyType

from lpbridge.core.solution import Status
from lpbridge.errors import FormatError

# Values printed on the "Status:" line of `glpsol --output` (LP and MIP reports).
GLPK_STATUS_MAP = MappingProxyType(
    {
        "INTEGER OPTIMAL": Status.OPTIMAL,
        "OPTIMAL": Status.OPTIMAL,
        "INFEASIBLE (FINAL)": Status.INFEASIBLE,
        "INTEGER EMPTY": Status.INFEASIBLE,
        "UNDEFINED": Status.NOT_SOLVED,
        "INTEGER UNDEFINED": Status.UNBOUNDED,
        "UNBOUNDED": Status.UNBOUNDED,
    }
)


def map_status(token: str, line_number: int | None = None) -> Status:
    try:
        return GLPK_STATUS_MAP[token]
    except KeyError:
        raise FormatError(f"unknown solution status '{token}'", stage="status", line_number=line_number) from None

"""Reader for the solution report written by `glpsol --output`.

The report has no schema; values are found by position. A report for a
problem with R rows and C columns looks like::

    Problem:    knapsack
    Rows:       2
    Columns:    3
    Non-zeros:  6
    Status:     INTEGER OPTIMAL
    Objective:  obj = 15 (MAXimum)

       No.   Row name        Activity     Lower bound   Upper bound
    ------ ------------    ------------- ------------- -------------
         1 cap                         9                           9
         2 pair                        1                           1

       No. Column name       Activity     Lower bound   Upper bound
    ------ ------------    ------------- ------------- -------------
         1 a            *              1             0             1
         2 b            *              0             0             1
         3 c            *              1             0             1

Only the header counts, the status and the column block are read.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from lpbridge.core.problem import LpProblem
from lpbridge.core.solution import Solution
from lpbridge.errors import FormatError
from lpbridge.solvers.status import map_status

logger = logging.getLogger(__name__)

# Layout of glp_print_sol / glp_print_mip output (GLPK 4.x and 5.x).
# Column at which the status text starts on the "Status:" line.
STATUS_OFFSET = 12
# Lines between the status line and the first column entry, excluding the
# row block: "Objective:", blank, row header, rule, blank, column header, rule.
COLUMN_BLOCK_OFFSET = 7
COLUMNS_LABEL = "Columns:"


class _Cursor:
    def __init__(self, lines: Iterable[str]) -> None:
        self._lines: Iterator[str] = iter(lines)
        self.line_number = 0

    def next(self) -> str | None:
        line = next(self._lines, None)
        if line is not None:
            self.line_number += 1
        return line

    def skip(self, count: int) -> None:
        for _ in range(count):
            if self.next() is None:
                return


def _read_count(line: str | None, label: str, line_number: int) -> int:
    if line is None:
        raise FormatError(f"missing {label} count line", stage=label)
    fields = line.split()
    if len(fields) < 2:
        raise FormatError(f"no {label} count found in '{line}'", stage=label, line_number=line_number)
    token = fields[1]
    if not (token.isascii() and token.isdigit()):
        raise FormatError(f"{label} count '{token}' is not an unsigned integer", stage=label, line_number=line_number)
    return int(token)


def _parse_value(token: str) -> float:
    # float() also accepts "1_000"; glpsol never prints digit separators.
    if "_" in token:
        raise ValueError(token)
    return float(token)


def parse_solution(lines: Iterable[str], problem: LpProblem | None = None) -> Solution:
    """Build a ``Solution`` from the lines of a glpsol solution report.

    Raises ``FormatError`` at the first line that does not match the layout;
    nothing is returned for a partially readable report. Read failures from
    the underlying stream propagate unchanged.

    The value of a column is its fourth token. In MIP reports glpsol leaves
    the status column blank for continuous columns, so the fourth token there
    is not the activity and such reports parse incorrectly or fail.
    """
    cursor = _Cursor(lines)

    cursor.skip(1)
    rows = _read_count(cursor.next(), "rows", cursor.line_number)

    # glpsol prints "Columns:" right after "Rows:"; any other line here is a
    # separator and the count is on the line after it.
    line = cursor.next()
    if line is not None and not line.lstrip().startswith(COLUMNS_LABEL):
        line = cursor.next()
    columns = _read_count(line, "columns", cursor.line_number)

    cursor.skip(1)
    status_line = cursor.next()
    if status_line is None:
        raise FormatError("no solution status found", stage="status")
    status = map_status(status_line[STATUS_OFFSET:].rstrip(), line_number=cursor.line_number)
    logger.debug("glpk report: %d rows, %d columns, status %s", rows, columns, status.value)

    cursor.skip(rows + COLUMN_BLOCK_OFFSET)

    values: dict[str, float] = {}
    for index in range(1, columns + 1):
        line = cursor.next()
        if line is None:
            raise FormatError(
                f"not all columns are present: expected {columns}, found {index - 1}",
                stage="columns",
            )
        fields = line.split()
        if len(fields) < 4:
            raise FormatError(
                f"column {index} of {columns} has too few fields",
                stage="columns",
                line_number=cursor.line_number,
            )
        try:
            value = _parse_value(fields[3])
        except ValueError:
            raise FormatError(
                f"column {index} of {columns} has non-numeric value '{fields[3]}'",
                stage="columns",
                line_number=cursor.line_number,
            ) from None
        values[fields[1]] = value

    return Solution(status=status, values=values, problem=problem)

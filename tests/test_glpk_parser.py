import io

import pytest

from lpbridge.core.solution import Solution, Status
from lpbridge.errors import ChannelError, FormatError
from lpbridge.readers.lines import LineReader
from lpbridge.solvers.glpk_parser import parse_solution


def _lines(text: str) -> list[str]:
    return text.splitlines()


class _CountingLines:
    def __init__(self, lines: list[str]) -> None:
        self._lines = lines
        self.consumed = 0

    def __iter__(self):
        for line in self._lines:
            self.consumed += 1
            yield line


def test_parses_glpsol_lp_report(make_report) -> None:
    solution = parse_solution(_lines(make_report()))

    assert solution == Solution(status=Status.OPTIMAL, values={"x": 2.0, "y": 3.5})
    assert solution.problem is None


def test_attaches_problem_when_given(make_report, demo_problem) -> None:
    solution = parse_solution(_lines(make_report()), demo_problem)

    assert solution.problem is demo_problem
    assert solution.objective_value() == pytest.approx(1.0 + 3.0 * 2.0 + 2.0 * 3.5)


@pytest.mark.parametrize(
    ("token", "expected"),
    [
        ("INTEGER OPTIMAL", Status.OPTIMAL),
        ("OPTIMAL", Status.OPTIMAL),
        ("INFEASIBLE (FINAL)", Status.INFEASIBLE),
        ("INTEGER EMPTY", Status.INFEASIBLE),
        ("UNDEFINED", Status.NOT_SOLVED),
        ("INTEGER UNDEFINED", Status.UNBOUNDED),
        ("UNBOUNDED", Status.UNBOUNDED),
    ],
)
def test_status_line_maps_to_status(make_report, token: str, expected: Status) -> None:
    assert parse_solution(_lines(make_report(status=token))).status == expected


def test_unknown_status_is_an_error(make_report) -> None:
    with pytest.raises(FormatError, match="unknown solution status 'FEASIBLE'") as info:
        parse_solution(_lines(make_report(status="FEASIBLE")))
    assert info.value.stage == "status"
    assert info.value.line_number == 5


def test_missing_status_line_is_an_error() -> None:
    lines = ["Problem:    demo", "Rows:       1", "Columns:    1", "Non-zeros:  1"]

    with pytest.raises(FormatError, match="no solution status found"):
        parse_solution(lines)


def test_short_status_line_is_unknown_status() -> None:
    lines = ["Problem:", "Rows: 0", "Columns: 0", "Non-zeros: 0", "Status:"]

    with pytest.raises(FormatError, match="unknown solution status"):
        parse_solution(lines)


def test_row_count_is_read_from_second_token() -> None:
    lines = ["banner", "Rows: 5", "Columns: 0", "Non-zeros: 0", "Status:     OPTIMAL"]
    lines += ["filler"] * (5 + 7)

    solution = parse_solution(lines)

    assert solution.status == Status.OPTIMAL
    assert solution.values == {}


def test_non_numeric_row_count_fails_before_columns() -> None:
    lines = _CountingLines(["banner", "Rows: five", "Columns: 1", "Non-zeros: 1", "Status:     OPTIMAL"])

    with pytest.raises(FormatError, match="rows count 'five' is not an unsigned integer") as info:
        parse_solution(lines)
    assert info.value.stage == "rows"
    assert lines.consumed == 2


@pytest.mark.parametrize("row_line", ["Rows:", "Rows: -3", "Rows: 2.5"])
def test_invalid_row_count_line(row_line: str) -> None:
    with pytest.raises(FormatError) as info:
        parse_solution(["banner", row_line])
    assert info.value.stage == "rows"


def test_empty_stream_is_an_error() -> None:
    with pytest.raises(FormatError, match="missing rows count line"):
        parse_solution([])


def test_missing_column_count_is_an_error() -> None:
    with pytest.raises(FormatError, match="no columns count found"):
        parse_solution(["banner", "Rows: 1", "Columns:"])


def test_separator_line_before_column_count() -> None:
    # banner, rows, separator, columns, skipped, status, R + 7 skipped, C columns
    rows, columns = 2, 3
    lines = ["banner", "Rows: 2", "--", "Columns: 3", "--", "Status:     INTEGER OPTIMAL"]
    lines += ["skip"] * (rows + 7)
    lines += [f"{i} v{i} * {i}.5" for i in range(1, columns + 1)]
    lines += ["trailing line that must not be read"]
    counted = _CountingLines(lines)

    solution = parse_solution(counted)

    assert solution.values == {"v1": 1.5, "v2": 2.5, "v3": 3.5}
    assert counted.consumed == 1 + 1 + 1 + 1 + 1 + 1 + rows + 7 + columns


def test_consumes_exactly_the_report_header_and_blocks(make_report) -> None:
    counted = _CountingLines(_lines(make_report()))

    parse_solution(counted)

    # banner, rows, columns, non-zeros, status, R + 7, C
    assert counted.consumed == 5 + 2 + 7 + 2


def test_column_line_with_four_fields() -> None:
    lines = ["banner", "Rows: 0", "Columns: 1", "Non-zeros: 0", "Status:     OPTIMAL"]
    lines += ["skip"] * 7
    lines += ["1 x1 * 3.5"]

    assert parse_solution(lines).values == {"x1": 3.5}


def test_column_line_with_three_fields_is_an_error() -> None:
    lines = ["banner", "Rows: 0", "Columns: 2", "Non-zeros: 0", "Status:     OPTIMAL"]
    lines += ["skip"] * 7
    lines += ["1 x1 * 3.5", "2 x2 *"]

    with pytest.raises(FormatError, match="column 2 of 2 has too few fields") as info:
        parse_solution(lines)
    assert info.value.stage == "columns"
    assert info.value.line_number == len(lines)


@pytest.mark.parametrize("token", ["abc", "1_5", "2_000.5"])
def test_non_numeric_column_value_is_an_error(make_report, token: str) -> None:
    report = make_report(columns=[("x", "2"), ("y", token)])

    with pytest.raises(FormatError, match=f"column 2 of 2 has non-numeric value '{token}'"):
        parse_solution(_lines(report))


def test_truncated_column_block_is_an_error(make_report) -> None:
    lines = _lines(make_report(columns=[("a", "1"), ("b", "2"), ("c", "3")]))
    truncated = lines[: lines.index(next(line for line in lines if " c " in line))]

    with pytest.raises(FormatError, match="not all columns are present: expected 3, found 2"):
        parse_solution(truncated)


def test_duplicate_column_names_keep_last_value(make_report) -> None:
    report = make_report(columns=[("x", "1"), ("x", "4"), ("z", "0")])

    solution = parse_solution(_lines(report))

    assert solution.values == {"x": 4.0, "z": 0.0}


def test_error_messages_carry_format_prefix() -> None:
    with pytest.raises(FormatError) as info:
        parse_solution(["banner", "Rows: x"])
    assert str(info.value).startswith("Incorrect solution format: ")
    assert "(line 2)" in str(info.value)


def test_reparsing_same_report_gives_equal_solutions(make_report, demo_problem) -> None:
    data = make_report(status="INTEGER OPTIMAL").encode("utf-8")

    first = parse_solution(LineReader(io.BytesIO(data)), demo_problem)
    second = parse_solution(LineReader(io.BytesIO(data)), demo_problem)

    assert first == second
    assert first is not second


def test_read_failure_propagates_as_channel_error(make_report) -> None:
    data = make_report().encode("utf-8")
    broken = data.replace(b"Status:", b"\xff\xfeatus:")

    with pytest.raises(ChannelError, match="could not decode line 5"):
        parse_solution(LineReader(io.BytesIO(broken)))

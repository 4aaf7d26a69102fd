"""Command line interface for lpbridge."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from lpbridge.config import SolverSettings, clear_setting, config_path, load_settings, save_setting
from lpbridge.core.problem import LpProblem
from lpbridge.core.solution import Solution
from lpbridge.errors import SolverError
from lpbridge.format.lp_format import to_lp_format
from lpbridge.solvers.discovery import discover_plugins
from lpbridge.solvers.glpk import GlpkSolver
from lpbridge.version import __version__

console = Console()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lpbridge",
        description="Run GLPK on linear problems and read back its solutions.",
    )
    parser.add_argument("--version", action="version", version=f"lpbridge {__version__}")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")

    sub = parser.add_subparsers(dest="command")

    solve = sub.add_parser("solve", help="Solve a problem JSON file with glpsol")
    solve.add_argument("problem", type=Path, help="Path to problem JSON")
    solve.add_argument("--glpsol", default=None, help="glpsol executable (overrides config)")
    solve.add_argument("--timeout", type=float, default=None, help="Deadline in seconds")
    solve.add_argument(
        "--artifact",
        choices=["stderr", "file"],
        default=None,
        help="Where glpsol writes its solution report",
    )
    solve.add_argument("--json", action="store_true", help="Print the solution as JSON")
    solve.set_defaults(func=cmd_solve)

    parse = sub.add_parser("parse", help="Parse an existing glpsol solution report")
    parse.add_argument("artifact", type=Path, help="Path to the glpsol --output file")
    parse.add_argument("--problem", type=Path, default=None, help="Problem JSON used for the objective value")
    parse.add_argument("--json", action="store_true", help="Print the solution as JSON")
    parse.set_defaults(func=cmd_parse)

    lp = sub.add_parser("lp", help="Print the CPLEX LP text of a problem")
    lp.add_argument("problem", type=Path, help="Path to problem JSON")
    lp.set_defaults(func=cmd_lp)

    info = sub.add_parser("info", help="Show available solvers")
    info.set_defaults(func=cmd_info)

    config = sub.add_parser("config", help="Show or change solver settings")
    config_sub = config.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Show effective settings")
    config_set = config_sub.add_parser("set", help="Persist a setting")
    config_set.add_argument("key", choices=sorted(SolverSettings.model_fields))
    config_set.add_argument("value")
    config_unset = config_sub.add_parser("unset", help="Remove a persisted setting")
    config_unset.add_argument("key", choices=sorted(SolverSettings.model_fields))
    config.set_defaults(func=cmd_config)

    return parser


def _print_solution(solution: Solution, as_json: bool) -> None:
    objective = solution.objective_value()
    if as_json:
        payload = solution.model_dump(mode="json", exclude={"problem"})
        payload["objective_value"] = objective
        print(json.dumps(payload, indent=2, sort_keys=True))
        return

    print(f"Status: {solution.status.value}")
    if objective is not None:
        print(f"Objective: {objective:.6g}")

    table = Table(title="Variables")
    table.add_column("Name")
    table.add_column("Value", justify="right")
    for name in sorted(solution.values):
        table.add_row(escape(name), f"{solution.values[name]:.6g}")
    console.print(table)


def cmd_solve(args: argparse.Namespace) -> int:
    problem = LpProblem.from_json_file(args.problem)

    solver = GlpkSolver.from_config()
    if args.glpsol is not None:
        solver = solver.with_command_name(args.glpsol)
    if args.timeout is not None:
        solver = solver.with_timeout(args.timeout)
    if args.artifact is not None:
        solver = solver.with_artifact_route(args.artifact)

    solution = solver.run(problem)
    _print_solution(solution, args.json)
    return 0


def cmd_parse(args: argparse.Namespace) -> int:
    problem = LpProblem.from_json_file(args.problem) if args.problem is not None else None
    solution = GlpkSolver().read_solution_file(args.artifact, problem)
    _print_solution(solution, args.json)
    return 0


def cmd_lp(args: argparse.Namespace) -> int:
    problem = LpProblem.from_json_file(args.problem)
    sys.stdout.write(to_lp_format(problem))
    return 0


def cmd_info(args: argparse.Namespace) -> int:
    print(f"lpbridge {__version__}")
    plugins = discover_plugins()
    if not plugins:
        settings = load_settings()
        print(f"No solvers available ('{settings.glpsol_command}' not found on PATH).")
        return 0

    print("Available solvers:")
    for name in sorted(plugins):
        print(f"- {name}: {plugins[name]!r}")
    return 0


def cmd_config(args: argparse.Namespace) -> int:
    command = args.config_command or "show"
    if command == "set":
        save_setting(args.key, args.value)
    elif command == "unset":
        clear_setting(args.key)

    settings = load_settings()
    print(f"Config file: {config_path()}")
    for key, value in settings.model_dump(mode="json").items():
        print(f"{key} = {value}")
    return 0


def main(argv: list[str] | None = None) -> int:
    argv = list(argv) if argv is not None else sys.argv[1:]

    parser = build_parser()
    if not argv:
        parser.print_help()
        return 0

    args = parser.parse_args(argv)
    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        return args.func(args)
    except ValidationError as exc:
        console.print(f"[red]Invalid input:[/red] {escape(str(exc))}")
        return 1
    except (SolverError, OSError, ValueError) as exc:
        console.print(f"[red]Error:[/red] {escape(str(exc))}")
        return 1


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))

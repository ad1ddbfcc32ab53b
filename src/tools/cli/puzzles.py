"""Command line entry point for the puzzle engines."""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import sys
from pathlib import Path
from typing import Any, List

from contracts import validator
from orchestrator import orchestrator
from orchestrator.router import RouterError
from ports import generator_port, solver_port


def _seed_arg(value: str) -> int | str:
    try:
        return int(value)
    except ValueError:
        return value


def _load_json(path: str) -> Any:
    if path == "-":
        return json.load(sys.stdin)
    return json.loads(Path(path).read_text("utf-8"))


def _dump(payload: Any) -> None:
    print(json.dumps(payload, indent=2, sort_keys=True))


def _cli_env(args: argparse.Namespace) -> dict:
    env = {}
    if getattr(args, "generator_impl", None):
        env["CLI_PUZZLE_GENERATOR_IMPL"] = args.generator_impl
    return env


def cmd_generate(args: argparse.Namespace) -> int:
    payload, resolved = generator_port.generate(
        args.command, args.level, seed=args.seed, profile=args.profile, env=_cli_env(args)
    )
    logging.getLogger(__name__).debug("generated with %s (%s)", resolved.impl_id, resolved.decision_source)
    _dump(payload)
    return 0


def cmd_solve(args: argparse.Namespace) -> int:
    puzzle = _load_json(args.puzzle)
    answer = json.loads(args.answer) if args.kind == "motion" else args.answer
    verdict, _ = solver_port.check_answer(
        args.kind, puzzle, answer, profile=args.profile, emit_events=args.events
    )
    _dump(verdict)
    return 0 if verdict.get("is_correct") else 1


def cmd_validate(args: argparse.Namespace) -> int:
    payload = _load_json(args.path)
    report = validator.validate(payload, orchestrator.PAYLOAD_TYPES[args.kind], profile=args.profile)
    _dump(
        {
            "ok": report.ok,
            "errors": [dataclasses.asdict(issue) for issue in report.errors],
            "warnings": [dataclasses.asdict(issue) for issue in report.warnings],
        }
    )
    return 0 if report.ok else 1


def cmd_run(args: argparse.Namespace) -> int:
    env = {"PUZZLE_VALIDATION_PROFILE": args.profile}
    env.update(_cli_env(args))
    result = orchestrator.run_level(
        args.level,
        seed=args.seed,
        puzzle_kind=args.puzzle,
        env_overrides=env,
        emit_events=args.events,
    )
    if not args.include_puzzle:
        result.pop("puzzle", None)
    _dump(result)
    return 0 if result["valid"] else 1


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="GeoSudo and Motion puzzle engines")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (DEBUG, INFO, ...)")
    parser.add_argument("--profile", default="dev", help="Routing and validation profile")
    sub = parser.add_subparsers(dest="command", required=True)

    for kind in ("geosudo", "motion"):
        gen = sub.add_parser(kind, help=f"Generate a {kind} puzzle as JSON")
        gen.add_argument("--level", type=int, required=True)
        gen.add_argument("--seed", type=_seed_arg, default=None)
        gen.add_argument("--generator-impl", default=None, help="Import path overriding the configured generator")
        gen.set_defaults(func=cmd_generate)

    solve = sub.add_parser("solve", help="Check an answer against a puzzle file")
    solve.add_argument("kind", choices=sorted(orchestrator.PAYLOAD_TYPES))
    solve.add_argument("puzzle", help="Puzzle JSON file, or '-' for stdin")
    solve.add_argument(
        "answer",
        help="GeoSudo: a shape name. Motion: JSON list of {\"item_id\", \"direction\"} moves",
    )
    solve.add_argument("--events", action="store_true", help="Append an answer_validated event")
    solve.set_defaults(func=cmd_solve)

    validate = sub.add_parser("validate", help="Validate a puzzle payload against its contract")
    validate.add_argument("kind", choices=sorted(orchestrator.PAYLOAD_TYPES))
    validate.add_argument("path", help="Puzzle JSON file, or '-' for stdin")
    validate.set_defaults(func=cmd_validate)

    run = sub.add_parser("run", help="Generate, validate and re-measure one level")
    run.add_argument("--puzzle", default=None, help="Puzzle kind; defaults to run.puzzle_kind")
    run.add_argument("--level", type=int, required=True)
    run.add_argument("--seed", type=_seed_arg, default=None)
    run.add_argument("--generator-impl", default=None)
    run.add_argument("--events", action="store_true", help="Append a JSONL event for the run")
    run.add_argument("--include-puzzle", action="store_true")
    run.set_defaults(func=cmd_run)

    return parser


def main(argv: List[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        return args.func(args)
    except (RouterError, RuntimeError, ValueError, TypeError) as exc:
        parser.error(str(exc))
    return 2


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())

"""Application-layer CLI adapter."""

from __future__ import annotations

import argparse
import logging
from typing import Any

import yaml

from ..deck import run_deck
from ..errors import PipelineError
from ..pipeline.registry import build_default_registry
from ..selfcheck import run_selfcheck


def _yaml_scalar(text: str) -> Any:
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError:
        return text


def build_parser() -> argparse.ArgumentParser:
    """Create CLI parser."""
    parser = argparse.ArgumentParser(
        prog="envpipe", description="envpipe environment-threading pipelines"
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log each pipeline step to stderr.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    run_p = sub.add_parser("run", help="Run a YAML pipeline deck")
    run_p.add_argument("deck", type=str, help="Path to deck YAML")
    run_p.add_argument(
        "--arg",
        dest="args",
        action="append",
        type=_yaml_scalar,
        default=None,
        help="Positional argument for the input step (YAML scalar, repeatable). Overrides deck args.",
    )

    sub.add_parser("steps", help="List built-in registered steps")

    selfcheck_p = sub.add_parser(
        "selfcheck", help="Run dependency and smoke self-check"
    )
    selfcheck_p.add_argument(
        "--no-smoke",
        action="store_true",
        help="Run import checks only (skip smoke pipelines).",
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    if args.command == "run":
        try:
            result = run_deck(args.deck, args=args.args)
        except PipelineError as exc:
            parser.exit(2, f"Error: {exc}\n")

        print(f"Result: {result!r}")
        return 0

    if args.command == "steps":
        for name in build_default_registry().supported_names():
            print(name)
        return 0

    if args.command == "selfcheck":
        report = run_selfcheck(smoke=not bool(args.no_smoke))
        print(report.to_text())
        return 0 if report.ok else 1

    parser.exit(2, "Unknown command\n")
    return 2

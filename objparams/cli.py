#!/usr/bin/env python3
"""
objparams CLI

Thin wrapper over the lint engine.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from objparams.options import build_configuration
from objparams.orchestrator import LintResult, lint_paths

EXIT_OK = 0
EXIT_FINDINGS = 1
EXIT_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="objparams",
        description="Check that JavaScript/TypeScript functions take object parameters only.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  objparams check src
  objparams check src --ignore-function legacyFunc --no-ignore-single-param
  objparams check . --config objparams.json --format json
  objparams check . --changed-since origin/main
        """,
    )

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
        metavar="{check}",
    )

    check_parser = subparsers.add_parser(
        "check",
        help="Check files or directories",
    )
    check_parser.add_argument(
        "paths",
        nargs="*",
        default=["."],
        help="Files or directories to check (default: current directory)",
    )
    check_parser.add_argument(
        "--config",
        type=Path,
        help="JSON file with rule options (camelCase keys)",
    )
    check_parser.add_argument(
        "--ignore-function",
        dest="ignore_functions",
        action="append",
        metavar="NAME",
        help="Function name to ignore (repeatable)",
    )
    check_parser.add_argument(
        "--ignore-method",
        dest="ignore_methods",
        action="append",
        metavar="NAME",
        help="Method or property key to ignore, '#name' for private members (repeatable)",
    )
    check_parser.add_argument(
        "--ignore-file",
        dest="ignore_files",
        action="append",
        metavar="GLOB",
        help="Glob of files to ignore, e.g. '**/legacy/**' (repeatable)",
    )
    for flag, help_text in (
        ("ignore-constructors", "Ignore class constructors (default: on)"),
        ("ignore-single-param", "Ignore functions with a single parameter (default: on)"),
        ("ignore-no-params", "Ignore functions without parameters (default: on)"),
        ("ignore-test-files", "Ignore *.test.* and *.spec.* files (default: on)"),
    ):
        check_parser.add_argument(
            f"--{flag}",
            action=argparse.BooleanOptionalAction,
            default=None,
            help=help_text,
        )
    check_parser.add_argument(
        "--root",
        type=Path,
        default=None,
        help="Directory paths are reported relative to (default: current directory)",
    )
    check_parser.add_argument(
        "--changed-since",
        metavar="REV",
        help="Only check files changed since this git revision",
    )
    check_parser.add_argument(
        "--format",
        choices=("text", "json"),
        default="text",
        help="Output format (default: text)",
    )
    check_parser.add_argument(
        "--debug",
        action="store_true",
        help="Verbose logging and full tracebacks",
    )

    return parser


def _overrides(args: argparse.Namespace) -> dict:
    return {
        "ignoreFunctions": args.ignore_functions,
        "ignoreMethods": args.ignore_methods,
        "ignoreFiles": args.ignore_files,
        "ignoreConstructors": args.ignore_constructors,
        "ignoreSingleParam": args.ignore_single_param,
        "ignoreNoParams": args.ignore_no_params,
        "ignoreTestFiles": args.ignore_test_files,
    }


def _print_text(result: LintResult) -> None:
    for diag in result.diagnostics:
        loc = diag.location
        print(f"{diag.path}:{loc.line}:{loc.column}: {diag.message} [{diag.message_id}]")

    if result.diagnostics:
        print()
    print(
        f"{len(result.diagnostics)} problem(s) in {result.files_checked} file(s) checked"
        f" ({result.files_exempt} exempt, {len(result.files_skipped)} skipped)"
    )


def _print_json(result: LintResult) -> None:
    print(json.dumps([diag.to_dict() for diag in result.diagnostics], indent=2))


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if getattr(args, "debug", False) else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "check":
        try:
            config = build_configuration(args.config, _overrides(args))
            result = lint_paths(
                [Path(p) for p in args.paths],
                config,
                root=args.root,
                changed_since=args.changed_since,
            )
        except (ValueError, RuntimeError) as e:
            print(f"Error: {e}", file=sys.stderr)
            return EXIT_ERROR
        except Exception:
            if args.debug:
                raise
            print("Internal error while checking files.", file=sys.stderr)
            print("Run with --debug for details.", file=sys.stderr)
            return EXIT_ERROR

        if args.format == "json":
            _print_json(result)
        else:
            _print_text(result)

        return EXIT_OK if result.ok else EXIT_FINDINGS

    # This should never happen because argparse enforces commands
    parser.error(f"Unknown command: {args.command}")
    return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())

"""Command line entry point comparing a salary under both tax regimes."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Sequence

from vntax.backend.models import INSURANCE_BASE_KINDS, SALARY_TYPES
from vntax.backend.services import (
    build_calculation_response,
    calculate_comparison,
    parse_calculation_payload,
)
from vntax.backend.version import get_project_version

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def _build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vntax-compare",
        description=(
            "Compare net/gross salary, insurance and personal income tax under the "
            "rules in force before 2026 and from 2026."
        ),
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--salary", type=float, help="Monthly salary amount in VND")
    source.add_argument(
        "--payload",
        help="Path to a JSON calculation payload ('-' reads standard input)",
    )
    parser.add_argument(
        "--salary-type",
        choices=SALARY_TYPES,
        default="gross",
        help="Whether --salary is a gross or a net amount (default: gross)",
    )
    parser.add_argument(
        "--dependents", type=int, default=0, help="Number of registered dependents"
    )
    parser.add_argument(
        "--insurance-base",
        choices=INSURANCE_BASE_KINDS,
        default="basic",
        help="Insurance base selection (default: basic)",
    )
    parser.add_argument(
        "--insurance-value",
        type=float,
        help=(
            "Fixed base amount for 'specific' (or 'basic' overrides), "
            "or a percentage of gross salary for 'percentage'"
        ),
    )
    parser.add_argument("--compact", action="store_true", help="Emit single-line JSON")
    parser.add_argument("--log-level", choices=_LOG_LEVELS, default="WARNING")
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {get_project_version()}"
    )
    return parser


def _payload_from_arguments(args: argparse.Namespace) -> dict[str, Any]:
    if args.payload is not None:
        if args.payload == "-":
            raw = sys.stdin.read()
        else:
            raw = Path(args.payload).read_text(encoding="utf-8")
        return parse_calculation_payload(raw)

    insurance_base: dict[str, Any] = {"type": args.insurance_base}
    if args.insurance_value is not None:
        insurance_base["value"] = args.insurance_value

    return {
        "salary_type": args.salary_type,
        "salary": args.salary,
        "dependents": args.dependents,
        "insurance_base": insurance_base,
    }


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for ``vntax-compare``."""

    parser = _build_argument_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        payload = _payload_from_arguments(args)
        result = calculate_comparison(payload)
    except FileNotFoundError as error:
        print(f"error: {error}", file=sys.stderr)
        return 1
    except ValueError as error:
        print(f"error: {error}", file=sys.stderr)
        return 2

    print(build_calculation_response(result, indent=None if args.compact else 2))
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    raise SystemExit(main())

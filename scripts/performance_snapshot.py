#!/usr/bin/env python3
"""Time repeated regime comparisons for gross and net salary inputs."""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path
from time import perf_counter

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from vntax.backend.services import calculate_comparison  # noqa: E402

SAMPLE_PAYLOADS = {
    "gross_basic": {
        "salary_type": "gross",
        "salary": 35_000_000,
        "dependents": 1,
        "insurance_base": {"type": "basic"},
    },
    "net_percentage": {
        "salary_type": "net",
        "salary": 60_000_000,
        "dependents": 2,
        "insurance_base": {"type": "percentage", "value": 100},
    },
}


def measure(payload: dict[str, object], iterations: int) -> dict[str, float]:
    """Return timing statistics for repeated comparisons of ``payload``."""

    calculate_comparison(payload)  # Warm configuration cache
    start = perf_counter()
    for _ in range(iterations):
        calculate_comparison(payload)
    elapsed = perf_counter() - start
    return {
        "iterations": iterations,
        "total_ms": elapsed * 1000,
        "average_ms": (elapsed / iterations) * 1000,
    }


def main() -> None:
    iterations = int(os.getenv("VNTAX_PROFILE_ITERATIONS", "200"))
    report = {name: measure(payload, iterations) for name, payload in SAMPLE_PAYLOADS.items()}
    print(json.dumps(report, indent=2, sort_keys=True))


if __name__ == "__main__":
    main()

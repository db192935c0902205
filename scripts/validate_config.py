#!/usr/bin/env python3
"""Check every regime file listed in the manifest, drafts included.

``vntax-validate-config`` only looks at active regimes by default. Before
promoting a draft, run this from a checkout to validate all declared entries,
or pass regime ids to narrow the run.
"""

from __future__ import annotations

import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = REPO_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from vntax.backend.config.regime_config import manifest_entries  # noqa: E402
from vntax.backend.config.validator import main as validate  # noqa: E402


def main(argv: list[str]) -> int:
    regimes = argv or [entry.id for entry in manifest_entries()]
    for entry in manifest_entries():
        if entry.id in regimes and not entry.is_active:
            print(f"[{entry.id}] status: {entry.status}")
    return validate(regimes)


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))

"""Utilities for serialising calculation responses."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any


def build_calculation_response(payload: Mapping[str, Any], *, indent: int | None = 2) -> str:
    """Return the JSON document for the calculation ``payload``."""

    return json.dumps(payload, ensure_ascii=False, indent=indent)

"""Helpers for normalising incoming calculation payloads."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any


class InvalidPayloadError(ValueError):
    """Raised when a raw payload is not a JSON object."""


def parse_calculation_payload(raw: str | bytes | Mapping[str, Any]) -> dict[str, Any]:
    """Decode ``raw`` into a mutable payload mapping."""

    if isinstance(raw, Mapping):
        return dict(raw)

    try:
        data = json.loads(raw)
    except (TypeError, ValueError) as exc:
        raise InvalidPayloadError("Request body must be valid JSON") from exc

    if not isinstance(data, Mapping):
        raise InvalidPayloadError("Request JSON must be an object")

    return dict(data)

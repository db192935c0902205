"""Unit tests for calculation request parsing helpers."""

from __future__ import annotations

import pytest

from vntax.backend.services.request_parser import (
    InvalidPayloadError,
    parse_calculation_payload,
)


@pytest.mark.parametrize(
    "raw",
    ['{"salary": 20000000, "dependents": 1}', b'{"salary": 20000000, "dependents": 1}'],
)
def test_parse_payload_decodes_json_objects(raw: str | bytes) -> None:
    assert parse_calculation_payload(raw) == {"salary": 20_000_000, "dependents": 1}


def test_parse_payload_copies_mappings() -> None:
    original = {"salary": 1}

    payload = parse_calculation_payload(original)

    payload["salary"] = 2
    assert original == {"salary": 1}


def test_parse_payload_rejects_invalid_json() -> None:
    with pytest.raises(InvalidPayloadError, match="valid JSON"):
        parse_calculation_payload("{salary: 1")


def test_parse_payload_rejects_non_object() -> None:
    """Non-object JSON payloads are rejected as invalid input."""

    with pytest.raises(ValueError, match="must be an object"):
        parse_calculation_payload('["not", "an", "object"]')

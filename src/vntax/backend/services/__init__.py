"""Service-layer helpers for the VNTax backend."""

from .calculation_service import calculate_comparison, calculate_for_regime
from .request_parser import InvalidPayloadError, parse_calculation_payload
from .response_builder import build_calculation_response

__all__ = [
    "InvalidPayloadError",
    "build_calculation_response",
    "calculate_comparison",
    "calculate_for_regime",
    "parse_calculation_payload",
]

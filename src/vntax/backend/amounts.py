"""Helpers for whole-currency amounts and rate labels."""

from __future__ import annotations

import math


def round_half_up(value: float) -> int:
    """Round ``value`` to the nearest whole currency unit, halves upwards.

    Python's built-in :func:`round` uses banker's rounding (``round(0.5) == 0``)
    which drifts from published payroll tables on exact halves.
    """

    return math.floor(value + 0.5)


def format_percentage(value: float) -> str:
    """Return a human-readable label for a percentage ``value`` (``5`` -> ``5%``)."""

    if float(int(value)) == value:
        return f"{int(value)}%"
    return f"{value:g}%"


__all__ = ["format_percentage", "round_half_up"]

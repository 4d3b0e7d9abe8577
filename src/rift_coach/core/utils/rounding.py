"""Rounding helpers for user-facing numbers."""

from __future__ import annotations

import math


def round_half_up(value: float, digits: int = 0) -> float:
    """Round with halves going towards +infinity.

    Python's ``round`` uses banker's rounding (``round(2.5) == 2``); reports show
    ``2.5`` as ``3`` so stats line up with the numbers in the coaching text.
    """
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


def round_int(value: float) -> int:
    return int(round_half_up(value))

# utils/helpers.py
from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any, Tuple

import structlog

if TYPE_CHECKING:
    from game_rng import GameRNG

log = structlog.get_logger(__name__)

IntRange = Tuple[int, int]

# --- Range Parsing Utility ---
RANGE_PATTERN = re.compile(r"^\s*(-?\d+)\s*(?:-\s*(-?\d+))?\s*$")


def parse_range(value: Any) -> IntRange:
    """
    Parses an inclusive integer range from config data.
    Accepts ``"2-4"``, ``"3"``, ``[2, 4]``, ``(2, 4)`` or a plain integer.
    Raises ``ValueError`` for anything else or when ``lo > hi``.
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid range value: {value!r}")
    if isinstance(value, int):
        lo = hi = value
    elif isinstance(value, str):
        match = RANGE_PATTERN.match(value)
        if not match:
            log.error("Invalid range string format", range_str=value)
            raise ValueError(f"Invalid range string: {value!r}")
        lo_str, hi_str = match.groups()
        lo = int(lo_str)
        hi = int(hi_str) if hi_str is not None else lo
    elif isinstance(value, (list, tuple)) and len(value) == 2:
        try:
            lo, hi = int(value[0]), int(value[1])
        except (TypeError, ValueError):
            log.error("Non-integer range bounds", value=value)
            raise ValueError(f"Invalid range bounds: {value!r}") from None
    else:
        raise ValueError(f"Invalid range value: {value!r}")

    if lo > hi:
        log.error("Range lower bound exceeds upper bound", lo=lo, hi=hi)
        raise ValueError(f"Range lower bound exceeds upper bound: {value!r}")
    return lo, hi


def roll_range(bounds: IntRange, rng: GameRNG | None) -> int:
    """
    Rolls a uniform integer from an inclusive ``(lo, hi)`` range.
    Requires a :class:`GameRNG` instance and raises ``ValueError`` if ``rng`` is
    ``None``.
    """
    if rng is None:
        log.error("Range roll attempted without RNG instance!")
        raise ValueError("RNG instance is required for roll_range.")
    lo, hi = bounds
    return rng.get_int(lo, hi)

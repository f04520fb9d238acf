"""Seeded random number generator shared by generation and combat.

A single :class:`GameRNG` handle is created per session and threaded through
every function that needs randomness.  Nothing in the project touches a
module-level generator, so a fixed seed reproduces a whole run.
"""

from __future__ import annotations

import random
from typing import Any, Dict, Optional, Sequence

import numpy as np
import structlog

log = structlog.get_logger(__name__)


class GameRNG:
    def __init__(self, seed: Optional[int] = None) -> None:
        self.initial_seed = seed if seed is not None else random.randint(0, 2**32 - 1)
        self.rng = np.random.default_rng(self.initial_seed)
        log.debug("GameRNG created", seed=self.initial_seed)

    # ------------------------------------------------------------------
    # basic random helpers
    # ------------------------------------------------------------------
    def get_int(self, a: int, b: int) -> int:
        """Uniform integer in the inclusive range ``[a, b]``."""
        if a > b:
            raise ValueError("a <= b")
        return int(self.rng.integers(a, b + 1))

    def coin_flip(self) -> int:
        """Return 0 or 1 with equal probability."""
        return self.get_int(0, 1)

    def choice(self, seq: Sequence[Any]) -> Any:
        if not seq:
            raise ValueError("cannot choose from an empty sequence")
        return seq[self.get_int(0, len(seq) - 1)]

    # ------------------------------------------------------------------
    # state management
    # ------------------------------------------------------------------
    def get_state(self) -> Dict[str, Any]:
        return {
            "random_state": self.rng.bit_generator.state,
            "initial_seed": self.initial_seed,
        }

    def set_state(self, state: Dict[str, Any]) -> None:
        if "random_state" in state:
            self.rng.bit_generator.state = state["random_state"]
        if "initial_seed" in state:
            self.initial_seed = state["initial_seed"]

    def reset(self, seed: Optional[int] = None) -> None:
        self.initial_seed = seed if seed is not None else random.randint(0, 2**32 - 1)
        self.rng = np.random.default_rng(self.initial_seed)
        log.debug("GameRNG reset", seed=self.initial_seed)


__all__ = ["GameRNG"]

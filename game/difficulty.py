"""Difficulty profiles.

A profile bundles the ranges that vary by tier: how many enemies and potions
are placed, how tough enemies are, and how hard they hit.  Enemy damage is
not stored per agent; it is rolled from ``enemy_attack`` at every attack.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Dict, Mapping

import structlog

from game.constants import Difficulty
from utils.helpers import IntRange, parse_range

log = structlog.get_logger(__name__)


@dataclass(frozen=True)
class DifficultyProfile:
    name: str
    enemy_count: IntRange
    enemy_hp: IntRange
    enemy_attack: IntRange
    pickup_count: IntRange


DIFFICULTY_PROFILES: Dict[Difficulty, DifficultyProfile] = {
    Difficulty.EASY: DifficultyProfile(
        name="Easy",
        enemy_count=(2, 4),
        enemy_hp=(3, 5),
        enemy_attack=(1, 2),
        pickup_count=(5, 7),
    ),
    Difficulty.NORMAL: DifficultyProfile(
        name="Normal",
        enemy_count=(3, 6),
        enemy_hp=(4, 8),
        enemy_attack=(2, 3),
        pickup_count=(3, 5),
    ),
    Difficulty.HARD: DifficultyProfile(
        name="Hard",
        enemy_count=(5, 8),
        enemy_hp=(6, 12),
        enemy_attack=(3, 5),
        pickup_count=(1, 3),
    ),
}

_RANGE_FIELDS = ("enemy_count", "enemy_hp", "enemy_attack", "pickup_count")


def parse_difficulty_choice(choice: str) -> Difficulty:
    """Map the selector text to a tier. Anything unrecognised means Normal."""
    text = choice.strip()
    if text == "1":
        return Difficulty.EASY
    if text == "3":
        return Difficulty.HARD
    if text != "2":
        log.debug("Unrecognised difficulty selector, using Normal", choice=text)
    return Difficulty.NORMAL


def load_difficulty_profiles(
    overrides: Mapping[str, Any] | None,
) -> Dict[Difficulty, DifficultyProfile]:
    """Return the built-in profiles with any config overrides applied.

    ``overrides`` is keyed by tier name (``easy``/``normal``/``hard``) and
    holds range values accepted by :func:`parse_range`.  Unknown tiers or
    fields raise ``KeyError``.
    """
    profiles = dict(DIFFICULTY_PROFILES)
    if not overrides:
        return profiles

    for tier_name, fields in overrides.items():
        try:
            tier = Difficulty[str(tier_name).upper()]
        except KeyError:
            log.error("Unknown difficulty tier in config", tier=tier_name)
            raise
        changes: Dict[str, IntRange] = {}
        for field_name, value in (fields or {}).items():
            if field_name not in _RANGE_FIELDS:
                log.error(
                    "Unknown difficulty field in config",
                    tier=tier_name,
                    field=field_name,
                )
                raise KeyError(field_name)
            changes[field_name] = parse_range(value)
        profiles[tier] = replace(profiles[tier], **changes)
        log.info("Difficulty profile overridden", tier=tier.name, fields=sorted(changes))
    return profiles

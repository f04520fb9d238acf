import pytest

from game.constants import Difficulty
from game.difficulty import (
    DIFFICULTY_PROFILES,
    load_difficulty_profiles,
    parse_difficulty_choice,
)


@pytest.mark.parametrize(
    "choice, expected",
    [
        ("1", Difficulty.EASY),
        (" 3\n", Difficulty.HARD),
        ("2", Difficulty.NORMAL),
        ("", Difficulty.NORMAL),
        ("hard", Difficulty.NORMAL),
        ("7", Difficulty.NORMAL),
    ],
)
def test_parse_difficulty_choice(choice, expected):
    assert parse_difficulty_choice(choice) is expected


def test_builtin_profiles_get_harder():
    easy, normal, hard = (DIFFICULTY_PROFILES[d] for d in Difficulty)
    assert easy.enemy_count < normal.enemy_count < hard.enemy_count
    assert easy.enemy_hp < normal.enemy_hp < hard.enemy_hp
    assert easy.enemy_attack < normal.enemy_attack < hard.enemy_attack
    assert easy.pickup_count > normal.pickup_count > hard.pickup_count


def test_overrides_replace_only_named_fields():
    profiles = load_difficulty_profiles({"Hard": {"enemy_hp": "1-2", "pickup_count": 9}})
    hard = profiles[Difficulty.HARD]
    assert hard.enemy_hp == (1, 2)
    assert hard.pickup_count == (9, 9)
    assert hard.enemy_attack == DIFFICULTY_PROFILES[Difficulty.HARD].enemy_attack
    assert profiles[Difficulty.EASY] is DIFFICULTY_PROFILES[Difficulty.EASY]
    # Built-in table is untouched.
    assert DIFFICULTY_PROFILES[Difficulty.HARD].enemy_hp == (6, 12)


def test_no_overrides_returns_builtins():
    assert load_difficulty_profiles(None) == DIFFICULTY_PROFILES


@pytest.mark.parametrize(
    "overrides",
    [{"nightmare": {"enemy_hp": "1-2"}}, {"easy": {"enemy_speed": "1-2"}}],
)
def test_unknown_override_keys_raise(overrides):
    with pytest.raises(KeyError):
        load_difficulty_profiles(overrides)

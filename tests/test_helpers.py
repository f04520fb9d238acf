import pytest

from utils.helpers import parse_range, roll_range


class DummyRNG:
    def __init__(self, seed=None):
        self.initial_seed = seed

    def get_int(self, a, b):
        return a


@pytest.mark.parametrize(
    "value, expected",
    [
        ("2-4", (2, 4)),
        (" 6 - 10 ", (6, 10)),
        ("3", (3, 3)),
        (5, (5, 5)),
        ([1, 2], (1, 2)),
        ((0, 0), (0, 0)),
    ],
)
def test_parse_range_accepts_config_forms(value, expected):
    assert parse_range(value) == expected


@pytest.mark.parametrize("value", ["4-2", "abc", "1-2-3", [1], None, True, 1.5])
def test_parse_range_rejects_bad_values(value):
    with pytest.raises(ValueError):
        parse_range(value)


def test_roll_range_requires_rng():
    with pytest.raises(ValueError):
        roll_range((1, 6), None)


def test_roll_range_with_rng():
    # DummyRNG.get_int always returns the lower bound 'a'
    assert roll_range((6, 10), DummyRNG()) == 6

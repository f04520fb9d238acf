import pytest

from engine.input_handler import InputHandler


@pytest.mark.parametrize(
    "line, delta",
    [("w\n", (0, -1)), ("s", (0, 1)), ("a", (-1, 0)), ("D\n", (1, 0)), ("  dd", (1, 0))],
)
def test_default_bindings_map_to_moves(line, delta):
    action = InputHandler().parse(line)
    assert action["type"] == "move"
    assert (action["dx"], action["dy"]) == delta


def test_quit_and_unknown():
    handler = InputHandler()
    assert handler.parse("q\n") == {"type": "quit"}
    assert handler.parse("Quit") == {"type": "quit"}
    assert handler.parse("x") == {"type": "unknown", "key": "x"}
    assert handler.parse("   \n") == {"type": "unknown", "key": ""}


def test_custom_bindings_replace_defaults():
    config = {"bindings": {"up": ["k", "I"], "down": "j", "quit": ["x"], "jump": ["space"]}}
    handler = InputHandler(config)

    assert handler.parse("k")["dy"] == -1
    assert handler.parse("i")["dy"] == -1
    assert handler.parse("j")["dy"] == 1
    assert handler.parse("x") == {"type": "quit"}
    assert handler.parse("w")["type"] == "unknown"
    assert "space" not in handler.key_map


def test_empty_config_falls_back_to_defaults():
    assert InputHandler({}).parse("a")["direction"] == "left"

import io

import pytest
import yaml

import main
from game.constants import Difficulty


@pytest.fixture(autouse=True)
def _run_in_tmp(tmp_path, monkeypatch):
    # The log file and default high score file land in the working directory.
    monkeypatch.chdir(tmp_path)


def write_config(tmp_path, data):
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump(data), encoding="utf-8")
    return path


def test_bundled_config_loads():
    config = main.load_main_config(None)
    assert config["map"]["width"] == 20
    assert set(config["difficulty"]) == {"easy", "normal", "hard"}


def test_build_game_state_applies_overrides():
    config = {
        "map": {"width": 30, "height": 12, "room_count": "1-1"},
        "player": {"max_hp": 35, "attack": 9},
        "difficulty": {"normal": {"enemy_count": "1-1", "pickup_count": "0-0"}},
    }
    gs = main.build_game_state(config, Difficulty.NORMAL, seed=5, high_score=77)

    assert (gs.game_map.width, gs.game_map.height) == (30, 12)
    assert len(gs.rooms) == 1
    assert gs.player.max_hp == gs.player.hp == 35
    assert gs.player.attack == 9
    assert len(gs.agents) == 1
    assert len(gs.pickups) == 0
    assert gs.high_score == 77


def test_build_game_state_defaults():
    gs = main.build_game_state({}, Difficulty.EASY, seed=1, high_score=0)
    assert (gs.game_map.width, gs.game_map.height) == (20, 10)
    assert gs.profile.name == "Easy"


def test_choose_difficulty_skips_blank_lines():
    out = io.StringIO()
    assert main.choose_difficulty(io.StringIO("\n3\n"), out) is Difficulty.HARD
    assert out.getvalue() == main.DIFFICULTY_PROMPT
    assert main.choose_difficulty(io.StringIO(""), io.StringIO()) is None


def test_main_runs_a_session(tmp_path):
    config = write_config(tmp_path, {"seed": 12, "map": {"width": 20, "height": 10}})
    out = io.StringIO()

    code = main.main(
        ["--config", str(config), "--high-score-file", str(tmp_path / "best.txt")],
        input_stream=io.StringIO("1\nq\n"),
        output_stream=out,
    )

    assert code == 0
    text = out.getvalue()
    assert text.startswith(main.DIFFICULTY_PROMPT)
    assert "Diff: Easy" in text
    assert "Quitting. Final score: 0" in text
    assert text.endswith("Thanks for playing!\n")
    assert (tmp_path / "tinyrl.log").exists()


def test_main_with_difficulty_flag_skips_prompt(tmp_path):
    config = write_config(tmp_path, {"log_file": "run.log"})
    out = io.StringIO()

    main.main(
        ["--config", str(config), "--difficulty", "3", "--seed", "4"],
        input_stream=io.StringIO("q\n"),
        output_stream=out,
    )

    assert main.DIFFICULTY_PROMPT not in out.getvalue()
    assert "Diff: Hard" in out.getvalue()
    assert (tmp_path / "run.log").exists()


def test_main_exits_quietly_when_input_ends_at_prompt(tmp_path):
    config = write_config(tmp_path, {})
    out = io.StringIO()
    assert main.main(["--config", str(config)], io.StringIO(""), out) == 0
    assert "Thanks for playing!" not in out.getvalue()


def test_missing_explicit_config_exits(tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        main.main(["--config", str(tmp_path / "nope.yaml")], io.StringIO(""), io.StringIO())
    assert "File not found" in str(excinfo.value.code)


def test_bad_config_value_exits(tmp_path):
    config = write_config(tmp_path, {"difficulty": {"easy": {"enemy_hp": "9-2"}}})
    with pytest.raises(SystemExit):
        main.main(["--config", str(config), "--difficulty", "1"], io.StringIO(""), io.StringIO())


def test_choose_difficulty_treats_undecodable_input_as_closed():
    stream = io.TextIOWrapper(io.BytesIO(b"\xff\n"), encoding="utf-8")
    assert main.choose_difficulty(stream, io.StringIO()) is None

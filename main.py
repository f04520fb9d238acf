# main.py
import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, TextIO

import structlog
import yaml

from engine.input_handler import InputHandler
from engine.main_loop import MainLoop
from game.constants import (
    MAP_HEIGHT,
    MAP_WIDTH,
    PLAYER_ATTACK,
    PLAYER_MAX_HP,
    Difficulty,
)
from game.difficulty import load_difficulty_profiles, parse_difficulty_choice
from game.game_state import GameState, new_game
from game.world.procgen import ROOM_COUNT_RANGE, ROOM_HEIGHT_RANGE, ROOM_WIDTH_RANGE
from utils.config_loader import load_toml_config, load_yaml_config
from utils.helpers import parse_range
from utils.high_score import DEFAULT_HIGH_SCORE_FILE, load_high_score
from utils.logging_utils import setup_logging

# --- Paths relative to this script's location ---
SCRIPT_DIR = Path(__file__).parent.resolve()
CONFIG_DIR = SCRIPT_DIR / "config"

CONFIG_FILE = CONFIG_DIR / "config.yaml"
KEYBINDINGS_FILE = CONFIG_DIR / "keybindings.toml"
DEFAULT_LOG_FILE = "tinyrl.log"
# --- End Paths ---

DIFFICULTY_PROMPT = "Choose difficulty: 1) Easy  2) Normal  3) Hard  : "

log = structlog.get_logger(__name__)


def parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Tiny turn-based roguelike: survive, kill enemies, drink potions."
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for the RNG")
    parser.add_argument(
        "--difficulty",
        choices=["1", "2", "3"],
        default=None,
        help="Skip the prompt: 1=Easy 2=Normal 3=Hard",
    )
    parser.add_argument(
        "--config", type=Path, default=None, help=f"YAML config (default {CONFIG_FILE})"
    )
    parser.add_argument(
        "--keybindings",
        type=Path,
        default=KEYBINDINGS_FILE,
        help="TOML keybindings file",
    )
    parser.add_argument(
        "--high-score-file", type=Path, default=None, help="Where the best score is kept"
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="INFO",
        help="Logging level",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Debug logging to the console instead of the log file",
    )
    return parser.parse_args(argv)


def load_main_config(config_path: Path | None) -> Dict[str, Any]:
    """An explicit config path must exist; the bundled default is optional."""
    if config_path is not None:
        return load_yaml_config(config_path, "Main")
    if not CONFIG_FILE.is_file():
        return {}
    return load_yaml_config(CONFIG_FILE, "Main")


def build_game_state(
    config: Dict[str, Any],
    difficulty: Difficulty,
    seed: int | None,
    high_score: int,
) -> GameState:
    """Create a fresh session from the ``map``/``player``/``difficulty`` config sections."""
    map_cfg = config.get("map") or {}
    player_cfg = config.get("player") or {}
    profiles = load_difficulty_profiles(config.get("difficulty"))

    return new_game(
        difficulty=difficulty,
        seed=seed,
        profiles=profiles,
        map_width=int(map_cfg.get("width", MAP_WIDTH)),
        map_height=int(map_cfg.get("height", MAP_HEIGHT)),
        room_count_range=parse_range(map_cfg.get("room_count", ROOM_COUNT_RANGE)),
        room_width_range=parse_range(map_cfg.get("room_width", ROOM_WIDTH_RANGE)),
        room_height_range=parse_range(map_cfg.get("room_height", ROOM_HEIGHT_RANGE)),
        player_max_hp=int(player_cfg.get("max_hp", PLAYER_MAX_HP)),
        player_attack=int(player_cfg.get("attack", PLAYER_ATTACK)),
        high_score=high_score,
    )


def choose_difficulty(input_stream: TextIO, output_stream: TextIO) -> Difficulty | None:
    """Prompt for a tier. Returns None if input ends before an answer."""
    output_stream.write(DIFFICULTY_PROMPT)
    output_stream.flush()
    while True:
        try:
            line = input_stream.readline()
        except UnicodeDecodeError as e:
            log.warning("Undecodable input at difficulty prompt", error=str(e))
            return None
        if not line:
            return None
        if line.strip():
            return parse_difficulty_choice(line)


def main(
    argv: List[str] | None = None,
    input_stream: TextIO | None = None,
    output_stream: TextIO | None = None,
) -> int:
    """Main entry point for the application."""
    args = parse_args(argv)
    input_stream = input_stream or sys.stdin
    output_stream = output_stream or sys.stdout

    try:
        config = load_main_config(args.config)
        log_level = (
            logging.DEBUG
            if args.verbose
            else getattr(logging, args.log_level.upper(), logging.INFO)
        )
        setup_logging(
            log_level,
            log_file=None if args.verbose else config.get("log_file", DEFAULT_LOG_FILE),
        )
        log.info("Application starting...", script_dir=str(SCRIPT_DIR))
        keybindings_config = load_toml_config(args.keybindings, "Keybindings")
        input_handler = InputHandler(keybindings_config)

        high_score_file = args.high_score_file or Path(
            config.get("high_score_file", DEFAULT_HIGH_SCORE_FILE)
        )
        high_score = load_high_score(high_score_file)
        seed = args.seed if args.seed is not None else config.get("seed")

        if args.difficulty is not None:
            difficulty = parse_difficulty_choice(args.difficulty)
        else:
            difficulty = choose_difficulty(input_stream, output_stream)
            if difficulty is None:
                log.info("Input closed before a difficulty was chosen")
                return 0

        game_state = build_game_state(config, difficulty, seed, high_score)
    # --- Exception Handling ---
    except FileNotFoundError as e:
        log.critical("Required file not found during init", error=str(e), exc_info=True)
        sys.exit(f"Initialization failed: File not found - {e}")
    except KeyError as e:
        log.critical("Missing or unknown key, possibly in config", key=str(e), exc_info=True)
        sys.exit(f"Configuration failed: Bad key {e}")
    except yaml.YAMLError as e:
        log.critical("Could not parse configuration", error=str(e), exc_info=True)
        sys.exit(f"Configuration failed: {e}")
    except (TypeError, ValueError) as e:
        log.critical("Invalid configuration value", error=str(e), exc_info=True)
        sys.exit(f"Initialization failed: {e}")
    # --- End Exception Handling ---

    main_loop = MainLoop(
        game_state=game_state,
        input_handler=input_handler,
        high_score_file=high_score_file,
        input_stream=input_stream,
        output_stream=output_stream,
    )
    main_loop.run()
    output_stream.write("Thanks for playing!\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())

# engine/main_loop.py
import sys
from dataclasses import dataclass
from enum import Enum, auto
from pathlib import Path
from typing import Any, Dict, Self, TextIO

import structlog

from game.game_state import GameState
from utils.high_score import record_score

from . import action_handler, renderer
from .input_handler import InputHandler
from .renderer import RenderConfig

log = structlog.get_logger(__name__)

PROMPT = "Enter move (w/a/s/d) or q to quit: "


class RunOutcome(Enum):
    DIED = auto()
    QUIT = auto()
    EOF = auto()


@dataclass(frozen=True)
class RunResult:
    outcome: RunOutcome
    score: int
    turns: int
    new_high_score: bool


class MainLoop:
    """
    Coordinates the turn cycle: render, read one command, apply the player's
    action, let the agents act, and stop on death, quit or end of input.
    """

    def __init__(
        self: Self,
        game_state: GameState,
        input_handler: InputHandler,
        high_score_file: str | Path,
        input_stream: TextIO | None = None,
        output_stream: TextIO | None = None,
        render_config: RenderConfig | None = None,
    ):
        self.game_state: GameState = game_state
        self.input_handler: InputHandler = input_handler
        self.high_score_file = Path(high_score_file)
        self.input_stream: TextIO = input_stream or sys.stdin
        self.output_stream: TextIO = output_stream or sys.stdout
        self.render_config: RenderConfig = render_config or RenderConfig(
            high_score_file=self.high_score_file.name
        )
        log.info("MainLoop initialized", high_score_file=str(self.high_score_file))

    def _write(self: Self, text: str) -> None:
        self.output_stream.write(text)
        self.output_stream.flush()

    def _read_command(self: Self) -> str | None:
        """Next non-blank input line, or None once input is exhausted or unreadable."""
        while True:
            try:
                line = self.input_stream.readline()
            except UnicodeDecodeError as e:
                log.warning("Undecodable input, ending run", error=str(e))
                return None
            if not line:
                return None
            if line.strip():
                return line

    def handle_action(self: Self, action: Dict[str, Any]) -> bool:
        """
        Applies the player's action and, if it consumed a turn, runs the
        agent phase. Returns True if a turn was taken.
        """
        gs = self.game_state
        try:
            player_acted = action_handler.process_player_action(action, gs)
        except ValueError as e:
            log.error(
                "Invalid action during processing",
                action=action,
                error=str(e),
                exc_info=True,
            )
            gs.add_message("An internal error occurred.", (255, 0, 0))
            return False

        if player_acted:
            log.debug("Player action resulted in turn", action_type=action.get("type"))
            gs.advance_turn()
        else:
            log.debug(
                "Player action did not result in turn", action_type=action.get("type")
            )
        return player_acted

    def _flush_messages(self: Self) -> None:
        for text, _color in self.game_state.drain_messages():
            self._write(text + "\n")

    def _finish(self: Self, outcome: RunOutcome) -> RunResult:
        gs = self.game_state
        score, turns = gs.score, gs.turn_count
        new_best = record_score(self.high_score_file, score, gs.high_score)

        if outcome is RunOutcome.DIED:
            self._write(f"You died! Final score: {score}   Turns: {turns}\n")
            if new_best:
                self._write("New high score!\n")
            else:
                self._write(f"High score: {gs.high_score}\n")
        elif outcome is RunOutcome.QUIT:
            self._write(f"Quitting. Final score: {score}\n")
            if new_best:
                self._write("New high score!\n")

        if new_best:
            gs.high_score = score
        log.info(
            "Run finished",
            outcome=outcome.name,
            score=score,
            turns=turns,
            new_high_score=new_best,
        )
        return RunResult(outcome, score, turns, new_best)

    def run(self: Self) -> RunResult:
        gs = self.game_state
        try:
            while True:
                self._write(renderer.render_frame(gs, self.render_config))
                if gs.is_player_dead:
                    return self._finish(RunOutcome.DIED)

                self._write(PROMPT)
                line = self._read_command()
                if line is None:
                    self._write("\n")
                    return self._finish(RunOutcome.EOF)

                action = self.input_handler.parse(line)
                if action["type"] == "quit":
                    return self._finish(RunOutcome.QUIT)

                self.handle_action(action)
                self._flush_messages()
        except KeyboardInterrupt:
            log.info("Interrupted, ending run")
            self._write("\n")
            return self._finish(RunOutcome.EOF)

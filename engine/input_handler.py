# engine/input_handler.py
"""
Maps raw input lines to game actions based on keybindings.

Each turn the input collaborator supplies one line.  Its first
non-whitespace character is looked up in the bindings; a line that is
empty or unbound becomes an ``unknown`` action that does not cost a turn.
"""
from typing import Any, Dict, List, Mapping

import structlog

log = structlog.get_logger(__name__)

# action name -> (dx, dy)
MOVE_DELTAS: Dict[str, tuple[int, int]] = {
    "up": (0, -1),
    "down": (0, 1),
    "left": (-1, 0),
    "right": (1, 0),
}

DEFAULT_BINDINGS: Dict[str, List[str]] = {
    "up": ["w"],
    "down": ["s"],
    "left": ["a"],
    "right": ["d"],
    "quit": ["q"],
}


class InputHandler:
    """
    Translates text input into action dictionaries understood by
    :func:`engine.action_handler.process_player_action`.
    """

    def __init__(self, keybindings_config: Mapping[str, Any] | None = None):
        bindings = (keybindings_config or {}).get("bindings") or DEFAULT_BINDINGS
        self.key_map: Dict[str, str] = {}
        for action_name, keys in bindings.items():
            if action_name not in MOVE_DELTAS and action_name != "quit":
                log.warning("Ignoring binding for unknown action", action=action_name)
                continue
            if isinstance(keys, str):
                keys = [keys]
            for key in keys:
                self.key_map[str(key).lower()] = action_name
        log.debug("InputHandler initialized", bindings=len(self.key_map))

    def parse(self, line: str) -> Dict[str, Any]:
        text = line.strip()
        if not text:
            return {"type": "unknown", "key": ""}
        key = text[0].lower()
        action_name = self.key_map.get(key)
        if action_name is None:
            return {"type": "unknown", "key": key}
        if action_name == "quit":
            return {"type": "quit"}
        dx, dy = MOVE_DELTAS[action_name]
        return {"type": "move", "dx": dx, "dy": dy, "direction": action_name}

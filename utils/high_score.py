"""Best-score persistence: a single integer stored as text."""

from __future__ import annotations

from pathlib import Path

import structlog

log = structlog.get_logger(__name__)

DEFAULT_HIGH_SCORE_FILE = "highscore.txt"


def load_high_score(path: str | Path) -> int:
    """Read the stored best score. A missing or unreadable file counts as 0."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        log.debug("No high score file yet", path=str(path))
        return 0
    except UnicodeDecodeError:
        log.warning("Ignoring malformed high score file", path=str(path))
        return 0
    except OSError as e:
        log.warning("Could not read high score", path=str(path), error=str(e))
        return 0

    tokens = text.split()
    if not tokens:
        return 0
    try:
        value = int(tokens[0])
    except ValueError:
        log.warning("Ignoring malformed high score file", path=str(path))
        return 0
    return max(0, value)


def save_high_score(path: str | Path, score: int) -> bool:
    """Write ``score`` followed by a newline. Returns False if the write failed."""
    path = Path(path)
    try:
        path.write_text(f"{int(score)}\n", encoding="utf-8")
    except OSError as e:
        log.warning("Could not write high score", path=str(path), error=str(e))
        return False
    log.info("High score saved", path=str(path), score=score)
    return True


def record_score(path: str | Path, score: int, best: int) -> bool:
    """Persist ``score`` only if it beats ``best``. Returns True if a new best was saved."""
    if score <= best:
        return False
    return save_high_score(path, score)

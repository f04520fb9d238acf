import logging
from pathlib import Path

import structlog
from structlog.stdlib import add_log_level, add_logger_name


def setup_logging(level: int = logging.INFO, log_file: str | Path | None = None) -> None:
    """Configure structlog and standard logging with the given level.

    The terminal is the game screen, so callers normally pass ``log_file`` to
    keep log lines out of the rendered grid.  Colours are only used when
    logging to the console.
    """
    if log_file is not None:
        logging.basicConfig(
            level=level, format="%(message)s", filename=str(log_file), force=True
        )
    else:
        logging.basicConfig(level=level, format="%(message)s", force=True)
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            add_logger_name,
            add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=False),
            structlog.dev.ConsoleRenderer(colors=log_file is None),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname).1s | %(name)-30.30s | %(message)s"

# Per-statement and per-request chatter stays at WARNING unless asked for.
QUIET_LOGGERS = ("sqlalchemy.engine", "alembic.runtime.migration", "uvicorn.access")


def resolve_level(level: int | str, fallback: int = logging.INFO) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).strip().upper())
    return resolved if isinstance(resolved, int) else fallback


def setup_logging(level: int | str = logging.INFO) -> logging.Logger:
    """Route every data-accounting logger to stdout at the given level.

    Accepts a level number or a name such as ``"debug"``; unknown names fall
    back to INFO. Calling it again replaces the handler instead of stacking one.
    """
    numeric = resolve_level(level)
    root = logging.getLogger()
    root.setLevel(numeric)
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(numeric, logging.WARNING))

    return root

"""
Logging for the syllabus API process.

Application records (startup ping, migrations, one line per request
from the middleware in ``main``, storage failures with tracebacks) go
to stderr and optionally to ``LOG_FILE``.  Uvicorn keeps its own
loggers; its access log is raised to WARNING so requests are not
logged twice, and ``uvicorn_log_level`` turns ``LOG_LEVEL`` into a
name uvicorn's config accepts.
"""

import logging
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

UVICORN_LOG_LEVELS = ("critical", "error", "warning", "info", "debug", "trace")


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Install the API's handlers on the root logger, unless something already did.

    ``level`` is a name such as ``"debug"`` or ``"WARNING"``; unknown names
    mean INFO.
    """
    root = logging.getLogger()
    if root.handlers:
        # pytest's capture handler, or an earlier create_app in this process.
        return

    root.setLevel(getattr(logging, level.strip().upper(), logging.INFO))
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if logfile:
        handlers.append(logging.FileHandler(Path(logfile).resolve(), encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def uvicorn_log_level(level: str) -> str:
    """Map ``LOG_LEVEL`` onto uvicorn's level names, falling back to ``info``."""
    level = level.strip().lower()
    if level == "warn":
        return "warning"
    return level if level in UVICORN_LOG_LEVELS else "info"

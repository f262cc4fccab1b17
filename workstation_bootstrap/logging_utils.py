from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import NoReturn, Optional

from .lib.env import PATHS

DEFAULT_LOG_PATH = PATHS.log_default

CONSOLE_FORMAT = "[%(levelname)s]: %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(
    log_path: str = DEFAULT_LOG_PATH,
    level: int = logging.INFO,
    also_console: bool = True,
) -> str:
    """Configure logging.

    Every decision goes to a log file; the console gets the short
    ``[LEVEL]: message`` form.

    Notes:
    - If the requested log file cannot be created (read-only home, odd
      permissions), we fall back to a file in the working directory and
      report the path actually used.

    Returns the actual file path being used.
    """

    logger = logging.getLogger()
    logger.setLevel(level)

    # Avoid duplicate handlers if configure_logging() is called multiple times.
    if getattr(logger, "_workstation_bootstrap_configured", False):
        return getattr(logger, "_workstation_bootstrap_log_path", log_path)

    requested = os.path.expanduser(log_path)
    handlers: list[logging.Handler] = []

    file_fmt = logging.Formatter(fmt=FILE_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S%z")

    try:
        Path(os.path.dirname(requested) or ".").mkdir(parents=True, exist_ok=True)
        file_handler: logging.Handler = logging.FileHandler(requested)
        chosen_path = requested
    except OSError:
        fallback = str(Path.cwd() / "workstation-bootstrap.log")
        file_handler = logging.FileHandler(fallback)
        chosen_path = fallback
    file_handler.setFormatter(file_fmt)
    handlers.append(file_handler)

    if also_console:
        console = logging.StreamHandler()
        console.setFormatter(logging.Formatter(fmt=CONSOLE_FORMAT))
        handlers.append(console)

    for h in handlers:
        logger.addHandler(h)

    setattr(logger, "_workstation_bootstrap_configured", True)
    setattr(logger, "_workstation_bootstrap_log_path", chosen_path)
    setattr(logger, "_workstation_bootstrap_handlers", handlers)

    logging.getLogger(__name__).debug(
        "Logging initialized (requested=%s, actual=%s)", requested, chosen_path
    )
    return chosen_path


def fatal(logger: Optional[logging.Logger], msg: str, *args: object) -> NoReturn:
    """Log at ERROR and terminate the process with exit code 1."""

    (logger or logging.getLogger(__name__)).error(msg + " Exiting...", *args)
    raise SystemExit(1)

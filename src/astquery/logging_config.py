"""
Logging setup for astquery.

Library modules import `logger` from here. The console sink writes to stderr
and is dropped in machine mode so CLI output stays parseable; a rotating file
sink is opt-in. Environment: ASTQUERY_LOG_LEVEL, ASTQUERY_MACHINE_MODE,
ASTQUERY_FILE_LOGGING, ASTQUERY_LOG_FILE.
"""

import sys
import os
from pathlib import Path
from loguru import logger

# Flag to track if logging has been configured
_logging_configured = False

DEFAULT_LOG_FILE = Path(".astquery") / "logs" / "astquery.log"

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
)


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").lower() in ("1", "true", "yes")


def setup_logging(level=None, suppress_console=None, enable_file_logging=None, force=False):
    """
    Configures the global logger.

    Console logging goes to stderr. File logging is opt-in via
    ASTQUERY_FILE_LOGGING=1 or enable_file_logging=True.

    Args:
        level: Logging level (default: ASTQUERY_LOG_LEVEL or INFO)
        suppress_console: If True, suppress console logging. If None, check ASTQUERY_MACHINE_MODE env var.
        enable_file_logging: If True, enable file logging. If None, check ASTQUERY_FILE_LOGGING env var.
        force: Reconfigure even if logging was already set up.
    """
    global _logging_configured

    # Only configure once to avoid duplicate handlers
    if _logging_configured and not force:
        return
    _logging_configured = True

    logger.remove()

    if level is None:
        level = os.getenv("ASTQUERY_LOG_LEVEL", "INFO").upper()

    if suppress_console is None:
        suppress_console = _env_flag("ASTQUERY_MACHINE_MODE")

    if not suppress_console:
        logger.add(sys.stderr, level=level, format=CONSOLE_FORMAT, colorize=True)

    if enable_file_logging is None:
        enable_file_logging = _env_flag("ASTQUERY_FILE_LOGGING")

    if enable_file_logging:
        log_file = Path(os.getenv("ASTQUERY_LOG_FILE", str(DEFAULT_LOG_FILE)))
        log_file.parent.mkdir(parents=True, exist_ok=True)

        logger.add(
            log_file,
            level=level,
            rotation="10 MB",
            retention="1 day",
            compression="gz",
            catch=True,
            serialize=False
        )


# Configure the logger on import (will check env var for machine mode)
setup_logging()

"""
Optional source formatting through an external formatter (black).
"""

import shutil
import subprocess
from typing import Optional, Tuple

from astquery.config import FORMATTERS
from astquery.logging_config import logger


def format_source(code: str, line_length: int, language: str = "python") -> Tuple[str, Optional[str]]:
    """
    Pipe source text through the configured formatter.

    Args:
        code: Source text to format
        line_length: Target line length
        language: Key into FORMATTERS

    Returns:
        (code, error_message). On any failure the input code is returned
        unchanged together with the reason.
    """
    formatter_config = FORMATTERS.get(language)
    if not formatter_config:
        logger.warning(f"No formatter configured for {language}")
        return code, None

    command = formatter_config["command"]
    if not shutil.which(command):
        logger.warning(f"Formatter '{command}' not found in PATH, skipping format")
        return code, f"{command} not found"

    full_command = [command, "--line-length", str(line_length)] + formatter_config["args"]
    timeout = formatter_config["timeout"]

    try:
        result = subprocess.run(
            full_command,
            input=code,
            capture_output=True,
            text=True,
            timeout=timeout
        )
    except subprocess.TimeoutExpired:
        error_msg = f"Formatter timeout after {timeout}s"
        logger.error(error_msg)
        return code, error_msg
    except OSError as e:
        error_msg = f"Formatter error: {e}"
        logger.error(error_msg)
        return code, error_msg

    if result.returncode != 0:
        error_msg = result.stderr or result.stdout
        logger.error(f"Formatter failed: {error_msg}")
        return code, error_msg

    logger.debug(f"Formatted {len(code)} chars with {command}")
    return result.stdout, None

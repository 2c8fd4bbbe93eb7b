"""
CLI Configuration

Output mode switches for the astquery command line.
"""

import os
from typing import Optional


class CLIConfig:
    """Configuration for CLI commands"""

    # Characters of node source shown per search result
    DEFAULT_SNIPPET_WIDTH = 60

    # Machine mode (plain/JSON output)
    _machine_mode: Optional[bool] = None

    @classmethod
    def set_machine_mode(cls, enabled: Optional[bool]) -> None:
        """Set machine mode (pure data output, no presentation)"""
        cls._machine_mode = enabled

    @classmethod
    def is_machine_mode(cls) -> bool:
        """
        Check if machine mode is active.

        Machine mode is the default; ASTQUERY_HUMAN_MODE or --human opts out.
        """
        if cls._machine_mode is not None:
            return cls._machine_mode
        if os.getenv("ASTQUERY_HUMAN_MODE", "").lower() in ("1", "true", "yes"):
            return False
        return True

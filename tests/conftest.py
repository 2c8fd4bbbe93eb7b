"""
Pytest configuration for the astquery test suite.

This conftest.py provides:
- Machine-mode logging (suppresses console output)
- Sample source fixtures
"""

import os

import pytest

from astquery.logging_config import setup_logging


# ============================================================================
# GLOBAL CONFIGURATION
# ============================================================================

def pytest_configure(config):
    """Configure pytest for quiet operation."""
    os.environ.setdefault("ASTQUERY_MACHINE_MODE", "1")


# ============================================================================
# LOGGING FIXTURES
# ============================================================================

@pytest.fixture(autouse=True)
def setup_test_logging():
    """
    Machine mode by default - suppress console logs for clean test output.
    """
    setup_logging(level="DEBUG", suppress_console=True, force=True)


# ============================================================================
# SOURCE FIXTURES
# ============================================================================

SAMPLE_SOURCE = '''
import math

config = {"never": {"gonna": "give you up"}}


class Greeter(Base, metaclass=Meta):
    """A greeting class."""

    def greet(self, name):
        return f"Hello, {name}!"


def top_level_function(arg1, arg2):
    try:
        return math.sqrt(arg1) + arg2
    except ValueError:
        return None
'''


@pytest.fixture
def sample_source():
    return SAMPLE_SOURCE


@pytest.fixture
def sample_file(tmp_path):
    """A Python file holding SAMPLE_SOURCE."""
    path = tmp_path / "sample.py"
    path.write_text(SAMPLE_SOURCE)
    return path

"""
CLI Command Modules

Each module contains a logical group of related commands.
"""

from astquery.cli import edit, query

__all__ = ['edit', 'query']

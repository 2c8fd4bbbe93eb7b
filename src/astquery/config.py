"""
Configuration for parsing, printing and literal conversion.

Contains the defaults shared by the tree handles and the CLI.
"""

import re

PARSE_CONFIG = {
    # SyntaxError messages that trigger the parenthesized retry
    "recoverable_errors": re.compile(r"^(unexpected indent|invalid syntax)"),
    "filename": "<astquery>",
}

LITERAL_CONFIG = {
    "default_indent": 2,
}

PRINT_DEFAULTS = {
    "format": False,
    "line_length": 88,
}

FORMATTERS = {
    "python": {
        "command": "black",
        "args": ["--quiet", "-"],
        "timeout": 30,
    },
}

"""
astquery - search and splice Python syntax trees.

Parse source text (or convert a Python value to literal source), find nodes
with a predicate, splice statements and properties in, and print the result.
"""

__version__ = "1.0.0"

from astquery.exceptions import (
    AstQueryError,
    InvalidPredicateError,
    LiteralConversionError,
    NoTreeError,
)
from astquery.index import IndexEntry, build_index, search
from astquery.literal import LiteralResult, stringify
from astquery.properties import Property
from astquery.schemas import PrintOptions, SearchOptions, StringifyOptions
from astquery.services import Services, default_services
from astquery.tree import Collection, Node

parse = Collection.parse
from_string = Collection.from_string
from_value = Collection.from_value

__all__ = [
    "__version__",
    "Collection",
    "Node",
    "parse",
    "from_string",
    "from_value",
    "search",
    "build_index",
    "IndexEntry",
    "stringify",
    "LiteralResult",
    "Property",
    "SearchOptions",
    "StringifyOptions",
    "PrintOptions",
    "Services",
    "default_services",
    "AstQueryError",
    "NoTreeError",
    "InvalidPredicateError",
    "LiteralConversionError",
]

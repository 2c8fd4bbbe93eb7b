"""
Node capabilities.

A tree node is either an ast.AST instance or, for trees built by other tools,
a Mapping whose "type" key holds its tag. Lists are containers, never nodes; every
other value is a leaf.
"""

import ast
from collections.abc import Mapping
from typing import Any, Iterator, List, Optional, Tuple


def is_node(value: Any) -> bool:
    """True for values the indexer treats as compound nodes."""
    return isinstance(value, (ast.AST, Mapping))


def node_type(node: Any) -> Optional[str]:
    """The type tag of a node: the class name for ast nodes, node["type"] for mappings."""
    if isinstance(node, ast.AST):
        return type(node).__name__
    if isinstance(node, Mapping):
        tag = node.get("type")
        return tag if isinstance(tag, str) else None
    return None


def iter_node_fields(node: Any) -> Iterator[Tuple[str, Any]]:
    """Yield (name, value) for each field of node in declaration order."""
    if isinstance(node, ast.AST):
        yield from ast.iter_fields(node)
    elif isinstance(node, Mapping):
        yield from node.items()


def iter_node_attributes(node: Any) -> Iterator[Tuple[str, Any]]:
    """Yield the position attributes (lineno, col_offset, ...) an ast node carries."""
    if isinstance(node, ast.AST):
        for name in node._attributes:
            if hasattr(node, name):
                yield name, getattr(node, name)


def body_of(node: Any) -> Optional[List[Any]]:
    """The node's statement list, or None when it has none."""
    if isinstance(node, ast.AST):
        body = getattr(node, "body", None)
    elif isinstance(node, Mapping):
        body = node.get("body")
    else:
        return None
    return body if isinstance(body, list) else None


def location_of(node: Any) -> Tuple[Optional[int], Optional[int], Optional[int]]:
    """(line, col, end_line) for ast nodes that carry positions."""
    return (
        getattr(node, "lineno", None),
        getattr(node, "col_offset", None),
        getattr(node, "end_lineno", None),
    )

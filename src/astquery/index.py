"""
Indexer and search engine.

search() walks a tree once, builds a flat pre-order index of every distinct
compound node (lists are walked but never indexed), links each entry to the
entry of its structural parent, then runs a predicate over the index and
returns the original nodes it accepted.

A node reachable through several paths is indexed once, on first discovery,
but is walked again each time it is reached. On heavily shared (diamond
shaped) graphs this is exponential; parser output has no sharing beyond
childless context singletons such as ast.Load.
"""

import inspect
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple, Union

from astquery.exceptions import InvalidPredicateError, NoTreeError
from astquery.logging_config import logger
from astquery.nodes import is_node, iter_node_attributes, iter_node_fields, node_type
from astquery.schemas import SearchOptions


class IndexEntry:
    """
    Snapshot of one node's fields for predicate evaluation.

    Fields read as attributes (entry.name) or items (entry["name"]). Three
    synthetic attributes are added: type (the node's tag), node (the original
    node) and parent (the parent's entry, None at the root). A field that
    shares a name with one of these, such as ExceptHandler.type, is still
    available through item access. Helper methods avoid ast field names, so
    Dict.keys reads as the field.
    """

    __slots__ = ("_fields", "type", "node", "parent")

    def __init__(self, node: Any, parent: Optional["IndexEntry"] = None):
        self._fields = dict(iter_node_fields(node))
        # positions are readable but never walked
        self._fields.update(iter_node_attributes(node))
        self.type = node_type(node)
        self.node = node
        self.parent = parent

    def __getattr__(self, name: str) -> Any:
        if name == "_fields":
            raise AttributeError(name)
        try:
            return self._fields[name]
        except KeyError:
            raise AttributeError(f"{self.type} entry has no field {name!r}") from None

    def __getitem__(self, name: str) -> Any:
        return self._fields[name]

    def __contains__(self, name: str) -> bool:
        return name in self._fields

    def get(self, name: str, default: Any = None) -> Any:
        return self._fields.get(name, default)

    def field_names(self) -> List[str]:
        return list(self._fields)

    def __repr__(self) -> str:
        return f"IndexEntry(type={self.type!r}, fields={list(self._fields)})"


def _list_items(values: List[Any], parent: Optional[IndexEntry]) -> Iterator[Tuple[Any, Optional[IndexEntry]]]:
    for value in values:
        yield value, parent


def _node_children(node: Any, entry: IndexEntry) -> Iterator[Tuple[Any, IndexEntry]]:
    for _, value in iter_node_fields(node):
        yield value, entry


def build_index(root: Any) -> List[IndexEntry]:
    """
    Build the pre-order index for root.

    Returns:
        One IndexEntry per distinct node, in discovery order
    """
    index: List[IndexEntry] = []
    entries: Dict[int, IndexEntry] = {}
    # Containers currently being walked; re-entering one would never end
    on_path = set()
    stack = [(None, _list_items([root], None))]

    while stack:
        owner, pending = stack[-1]
        try:
            value, parent = next(pending)
        except StopIteration:
            stack.pop()
            if owner is not None:
                on_path.discard(owner)
            continue

        if id(value) in on_path:
            continue

        if isinstance(value, list):
            on_path.add(id(value))
            stack.append((id(value), _list_items(value, parent)))
            continue

        if not is_node(value):
            continue

        entry = entries.get(id(value))
        if entry is None:
            entry = IndexEntry(value, parent)
            entries[id(value)] = entry
            index.append(entry)

        on_path.add(id(value))
        stack.append((id(value), _node_children(value, entry)))

    return index


def _accepts_parent(predicate: Callable) -> bool:
    """True when predicate can be called as predicate(entry, parent)."""
    try:
        signature = inspect.signature(predicate)
    except (TypeError, ValueError):
        return False

    # optional parameters never receive the parent
    required = 0
    for param in signature.parameters.values():
        if param.kind == param.VAR_POSITIONAL:
            return True
        if param.kind in (param.POSITIONAL_ONLY, param.POSITIONAL_OR_KEYWORD) and param.default is param.empty:
            required += 1
    return required >= 2


def _coerce_options(options: Union[SearchOptions, Dict[str, Any], None]) -> SearchOptions:
    if options is None:
        return SearchOptions()
    if isinstance(options, SearchOptions):
        return options
    return SearchOptions(**options)


def search(
    root: Any,
    predicate: Callable,
    options: Union[SearchOptions, Dict[str, Any], None] = None,
) -> List[Any]:
    """
    Return the nodes under root (root included) accepted by predicate.

    Args:
        root: Tree node to search
        predicate: Called with (entry) or (entry, parent_entry); a truthy
            result selects the entry's node
        options: SearchOptions or a dict of its fields

    Returns:
        Original nodes in pre-order

    Raises:
        NoTreeError: root is None
        InvalidPredicateError: predicate is not callable
    """
    if root is None:
        raise NoTreeError("search")
    if not callable(predicate):
        raise InvalidPredicateError(predicate)

    options = _coerce_options(options)
    with_parent = _accepts_parent(predicate)
    index = build_index(root)
    logger.debug(f"Indexed {len(index)} nodes under {node_type(root)}")

    results = []
    failures = 0
    for entry in index:
        try:
            matched = predicate(entry, entry.parent) if with_parent else predicate(entry)
            if matched:
                results.append(entry.node)
        except Exception as e:
            if options.throw_errors:
                raise
            failures += 1
            logger.trace(f"Predicate raised on {entry.type}: {e!r}")

    if failures:
        logger.debug(f"Predicate raised on {failures}/{len(index)} entries (treated as misses)")
    return results

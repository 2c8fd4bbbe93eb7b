"""
Tree handles: Collection and Node.

A Collection owns zero or more Node handles and fans every operation out over
them. Collections built from source text also remember the parsed root, so
printing a collection re-emits the whole module rather than its pieces.
Mutations act on the live tree; a later search() or to_source() always sees
the current state.
"""

import ast
from collections.abc import Mapping
from typing import Any, Callable, Dict, Iterator, List, Optional, Union

from astquery.config import LITERAL_CONFIG, PARSE_CONFIG
from astquery.exceptions import NoTreeError
from astquery.index import search as search_tree
from astquery.literal import Replacer
from astquery.logging_config import logger
from astquery.nodes import body_of, is_node, node_type
from astquery.properties import NameOrPredicate, Property, PropertyList, properties_of
from astquery.schemas import PrintOptions, SearchOptions, StringifyOptions
from astquery.services import Services, default_services

_MISSING = object()

PrintOptionsLike = Union[PrintOptions, Dict[str, Any], None]


def parse_source(text: str, services: Services) -> ast.Module:
    """
    Parse source text, retrying once with the text wrapped in parentheses.

    The retry only happens for the SyntaxError messages listed in
    PARSE_CONFIG["recoverable_errors"] (an indented or multi-line bare
    expression); it promotes the expression to a module-level statement.
    If the retry fails too the original error is raised.
    """
    try:
        return services.parser.parse(text)
    except SyntaxError as err:
        if not PARSE_CONFIG["recoverable_errors"].match(err.msg or ""):
            raise
        logger.debug(f"Parse failed with '{err.msg}', retrying as a parenthesized expression")
        try:
            return services.parser.parse(f"({text}\n)")
        except SyntaxError:
            raise err from None


def parse_expression(text: str, services: Services) -> ast.expr:
    """Parse text that holds exactly one expression and return it."""
    module = services.parser.parse(f"({text}\n)")
    if len(module.body) != 1 or not isinstance(module.body[0], ast.Expr):
        raise SyntaxError(f"Expected a single expression, got {len(module.body)} statements")
    return module.body[0].value


def _print_options(options: PrintOptionsLike) -> PrintOptions:
    if options is None:
        return PrintOptions()
    if isinstance(options, PrintOptions):
        return options
    return PrintOptions(**options)


def _search_options(options, throw_errors: Optional[bool]):
    if throw_errors is None:
        return options
    return SearchOptions(throw_errors=throw_errors)


class Node:
    """
    Handle on a single tree node.

    Args:
        tree: An ast node (or a mapping-shaped node from another tool)
        services: Parser/printer/stringifier bundle; defaults to the stdlib ones
    """

    def __init__(self, tree: Any, services: Optional[Services] = None):
        self.tree = tree
        self.services = services or default_services()

    @property
    def type(self) -> Optional[str]:
        return node_type(self.tree)

    @property
    def body(self) -> Optional[List[Any]]:
        """The node's statement list, or None."""
        return body_of(self.tree)

    @property
    def properties(self) -> Optional[PropertyList]:
        """Live view of a dict display's entries or a call's keywords, or None."""
        return properties_of(self.tree)

    def to_source(self, options: PrintOptionsLike = None) -> str:
        """Return the node printed back to source text."""
        if self.tree is None:
            raise NoTreeError("print")
        return self.services.printer.print(self.tree, _print_options(options))

    def __str__(self) -> str:
        return self.to_source()

    def __repr__(self) -> str:
        return f"Node({self.type})"

    def search(
        self,
        predicate: Callable,
        options: Union[SearchOptions, Dict[str, Any], None] = None,
        *,
        throw_errors: Optional[bool] = None,
    ) -> "Collection":
        """
        Crawl the tree and collect every node the predicate accepts.

        Args:
            predicate: Receives an IndexEntry (and, if it takes two arguments,
                the parent entry). Exceptions count as a miss unless
                throw_errors is set.
            options: SearchOptions or dict
            throw_errors: Shortcut for options.throw_errors

        Returns:
            Collection of the matching nodes in pre-order

        Example:
            module.search(lambda e: e.type == "Dict")
            module.search(lambda e, parent: parent and parent.type == "Call")
        """
        found = search_tree(self.tree, predicate, _search_options(options, throw_errors))
        return Collection(found, services=self.services)

    # ------------------------------------------------------------------
    # Body splices
    # ------------------------------------------------------------------

    def append(self, obj: Any, at: Optional[int] = None) -> bool:
        """Append a source string, or the literal form of any other value, to the body."""
        if isinstance(obj, str):
            return self.append_string(obj, at)
        return self.append_value(obj, at)

    def prepend(self, obj: Any, at: Optional[int] = None) -> bool:
        """Prepend a source string, or the literal form of any other value, to the body."""
        if isinstance(obj, str):
            return self.prepend_string(obj, at)
        return self.prepend_value(obj, at)

    def append_string(self, text: str, at: Optional[int] = None) -> bool:
        """
        Parse text and insert its statements into the body.

        Args:
            text: Source code
            at: Insert position; defaults to the end of the body

        Returns:
            False when the node has no body, True otherwise
        """
        body = self.body
        if body is None:
            logger.debug(f"{self.type} has no body, nothing appended")
            return False
        statements = parse_source(text, self.services).body
        position = len(body) if at is None else at
        body[position:position] = statements
        logger.debug(f"Spliced {len(statements)} statement(s) into {self.type} body at {position}")
        return True

    def prepend_string(self, text: str, at: Optional[int] = None) -> bool:
        """Like append_string but defaults to the start of the body."""
        return self.append_string(text, 0 if at is None else at)

    def append_value(self, value: Any, at: Optional[int] = None,
                     options: Optional[StringifyOptions] = None) -> bool:
        """Convert value to literal source and append it to the body."""
        if self.body is None:
            return False
        return self.append_string(self._literal(value, options), at)

    def prepend_value(self, value: Any, at: Optional[int] = None,
                      options: Optional[StringifyOptions] = None) -> bool:
        """Convert value to literal source and prepend it to the body."""
        if self.body is None:
            return False
        return self.prepend_string(self._literal(value, options), at)

    def _literal(self, value: Any, options: Optional[StringifyOptions] = None) -> str:
        result = self.services.stringifier.stringify(value, options or StringifyOptions())
        return result.unwrap()

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    def prop(self, name: Any, value: Any = _MISSING) -> Union[Property, bool, None]:
        """
        Read a property by name, or write one when a value is given.

        A write replaces an existing entry with the same name in place and
        appends otherwise.

        Returns:
            Reading: the Property or None. Writing: True on success.
            False when the node has no properties list.
        """
        props = self.properties
        if props is None:
            return False
        if value is _MISSING:
            return props.find(name)

        if not props.accepts(name):
            logger.warning(f"'{name}' is not a valid property name for {self.type}")
            return False
        source = self._literal(props.literal_for(name, value))
        if not source:
            return False
        return props.splice(name, parse_expression(source, self.services))

    def props(self, values: Mapping) -> bool:
        """Write every item of values with prop(); True if all writes succeeded."""
        if not isinstance(values, Mapping):
            return False
        outcomes = [self.prop(name, value) for name, value in values.items()]
        return all(outcomes)

    def remove_prop(self, name_or_predicate: NameOrPredicate) -> bool:
        """
        Remove properties by name or by a predicate over Property records.

        Example:
            node.remove_prop("timeout")
            node.remove_prop(lambda p: p.name and p.name.startswith("_"))
        """
        props = self.properties
        if props is None:
            return False
        removed = props.remove(name_or_predicate)
        logger.debug(f"Removed {removed} propert{'y' if removed == 1 else 'ies'} from {self.type}")
        return True


class Collection:
    """
    Ordered collection of Node handles.

    Built by parsing (parse/from_string/from_value) or returned by search().
    Every operation is applied to each element; mutators return the list of
    per-element results.
    """

    def __init__(self, *items: Any, services: Optional[Services] = None):
        self.services = services or default_services()
        self.tree: Any = None
        self._nodes: List[Node] = []

        for item in items:
            members = item if isinstance(item, (list, tuple, Collection)) else [item]
            for member in members:
                if isinstance(member, Node):
                    self._nodes.append(member)
                elif is_node(member):
                    self._nodes.append(Node(member, self.services))

    @classmethod
    def parse(cls, obj: Any, services: Optional[Services] = None) -> "Collection":
        """Parse a source string, or convert any other value via from_value()."""
        if isinstance(obj, str):
            return cls.from_string(obj, services=services)
        return cls.from_value(obj, services=services)

    @classmethod
    def from_string(cls, text: str, services: Optional[Services] = None) -> "Collection":
        """Parse source text into a collection holding the module."""
        services = services or default_services()
        tree = parse_source(text, services)
        collection = cls(tree, services=services)
        collection.tree = tree
        return collection

    @classmethod
    def from_value(
        cls,
        value: Any = None,
        replacer: Optional[Replacer] = None,
        indent: int = LITERAL_CONFIG["default_indent"],
        services: Optional[Services] = None,
    ) -> "Collection":
        """
        Convert a value to literal source and parse it. None gives an empty module.

        Raises:
            LiteralConversionError: value has no literal form
        """
        services = services or default_services()
        if value is None:
            text = ""
        else:
            options = StringifyOptions(replacer=replacer, indent=indent)
            text = services.stringifier.stringify(value, options).unwrap()
        return cls.from_string(text, services=services)

    @property
    def body(self) -> Optional[List[Any]]:
        if self.tree is None:
            return None
        return body_of(self.tree)

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[Node]:
        return iter(self._nodes)

    def __getitem__(self, index):
        if isinstance(index, slice):
            return Collection(self._nodes[index], services=self.services)
        return self._nodes[index]

    def __repr__(self) -> str:
        return f"Collection({[node.type for node in self._nodes]})"

    def to_source(self, options: PrintOptionsLike = None) -> str:
        """Print the parsed root if there is one, else every element joined by newlines."""
        if self.tree is not None:
            return self.services.printer.print(self.tree, _print_options(options))
        return "\n".join(node.to_source(options) for node in self._nodes)

    def __str__(self) -> str:
        return self.to_source()

    def search(
        self,
        predicate: Callable,
        options: Union[SearchOptions, Dict[str, Any], None] = None,
        *,
        throw_errors: Optional[bool] = None,
    ) -> "Collection":
        """Node.search() over every element, concatenated in order."""
        return Collection(
            *[node.search(predicate, options, throw_errors=throw_errors) for node in self._nodes],
            services=self.services,
        )

    def append(self, obj: Any, at: Optional[int] = None) -> List[bool]:
        return [node.append(obj, at) for node in self._nodes]

    def prepend(self, obj: Any, at: Optional[int] = None) -> List[bool]:
        return [node.prepend(obj, at) for node in self._nodes]

    def append_string(self, text: str, at: Optional[int] = None) -> List[bool]:
        return [node.append_string(text, at) for node in self._nodes]

    def prepend_string(self, text: str, at: Optional[int] = None) -> List[bool]:
        return [node.prepend_string(text, at) for node in self._nodes]

    def append_value(self, value: Any, at: Optional[int] = None) -> List[bool]:
        return [node.append_value(value, at) for node in self._nodes]

    def prepend_value(self, value: Any, at: Optional[int] = None) -> List[bool]:
        return [node.prepend_value(value, at) for node in self._nodes]

    def prop(self, name: Any, value: Any = _MISSING) -> List[Union[Property, bool, None]]:
        return [node.prop(name, value) for node in self._nodes]

    def props(self, values: Mapping) -> List[bool]:
        return [node.props(values) for node in self._nodes]

    def remove_prop(self, name_or_predicate: NameOrPredicate) -> List[bool]:
        return [node.remove_prop(name_or_predicate) for node in self._nodes]

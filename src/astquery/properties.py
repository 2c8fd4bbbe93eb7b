"""
Live property views over dict displays and keyword argument lists.

ast.Dict keeps its entries in two parallel lists (keys, values) while calls
and class definitions keep ast.keyword nodes. PropertyList hides the
difference so the property helpers can read, replace, append and remove
entries in place.
"""

import ast
import keyword
from dataclasses import dataclass
from typing import Any, Callable, Iterator, List, Optional, Union


@dataclass
class Property:
    """
    One entry of a property list.

    Attributes:
        name: Constant key value (dicts) or argument name (keywords); None for
            ** spreads and computed keys
        value: The value expression
        key: The key expression of a dict entry
        keyword: The ast.keyword node of a keyword entry
    """
    name: Any
    value: ast.expr
    key: Optional[ast.expr] = None
    keyword: Optional[ast.keyword] = None


def _key_name(key: Optional[ast.expr]) -> Any:
    """The value of a literal key (1, -1, 'a', (1, 2)); None for spreads and computed keys."""
    if key is None:
        return None
    try:
        return ast.literal_eval(key)
    except (ValueError, TypeError, SyntaxError, RecursionError):
        return None


NameOrPredicate = Union[Any, Callable[[Property], Any]]


class PropertyList:
    """Common interface; see DictProperties and KeywordProperties."""

    def __init__(self, node: ast.AST):
        self.node = node

    def __iter__(self) -> Iterator[Property]:
        raise NotImplementedError

    def __len__(self) -> int:
        raise NotImplementedError

    def names(self) -> List[Any]:
        return [prop.name for prop in self]

    def index_of(self, name: Any) -> int:
        for i, prop in enumerate(self):
            if prop.name is not None and prop.name == name:
                return i
        return -1

    def find(self, name: Any) -> Optional[Property]:
        i = self.index_of(name)
        return None if i < 0 else list(self)[i]

    def accepts(self, name: Any) -> bool:
        return True

    def literal_for(self, name: Any, value: Any) -> Any:
        """The value whose literal source yields the entry for name."""
        raise NotImplementedError

    def splice(self, name: Any, fragment: ast.expr) -> bool:
        """Insert the entry parsed from literal_for() source, replacing any entry named name."""
        raise NotImplementedError

    def remove(self, name_or_predicate: NameOrPredicate) -> int:
        """Remove matching entries; returns how many were removed."""
        if callable(name_or_predicate):
            doomed = [bool(name_or_predicate(prop)) for prop in self]
        else:
            doomed = [prop.name is not None and prop.name == name_or_predicate for prop in self]
        self._keep([not d for d in doomed])
        return sum(doomed)

    def _keep(self, mask: List[bool]) -> None:
        raise NotImplementedError


class DictProperties(PropertyList):
    """Entries of an ast.Dict display."""

    def __iter__(self) -> Iterator[Property]:
        for key, value in zip(self.node.keys, self.node.values):
            yield Property(name=_key_name(key), value=value, key=key)

    def __len__(self) -> int:
        return len(self.node.values)

    def literal_for(self, name: Any, value: Any) -> Any:
        return {name: value}

    def splice(self, name: Any, fragment: ast.expr) -> bool:
        if not isinstance(fragment, ast.Dict):
            return False
        for key, value in zip(fragment.keys, fragment.values):
            i = self.index_of(_key_name(key)) if key is not None else -1
            if i < 0:
                self.node.keys.append(key)
                self.node.values.append(value)
            else:
                self.node.keys[i] = key
                self.node.values[i] = value
        return True

    def _keep(self, mask: List[bool]) -> None:
        self.node.keys[:] = [k for k, keep in zip(self.node.keys, mask) if keep]
        self.node.values[:] = [v for v, keep in zip(self.node.values, mask) if keep]


class KeywordProperties(PropertyList):
    """Keyword arguments of an ast.Call or keywords of an ast.ClassDef."""

    def __iter__(self) -> Iterator[Property]:
        for kw in self.node.keywords:
            yield Property(name=kw.arg, value=kw.value, keyword=kw)

    def __len__(self) -> int:
        return len(self.node.keywords)

    def accepts(self, name: Any) -> bool:
        return isinstance(name, str) and name.isidentifier() and not keyword.iskeyword(name)

    def literal_for(self, name: Any, value: Any) -> Any:
        return value

    def splice(self, name: Any, fragment: ast.expr) -> bool:
        new_keyword = ast.keyword(arg=name, value=fragment)
        i = self.index_of(name)
        if i < 0:
            self.node.keywords.append(new_keyword)
        else:
            self.node.keywords[i] = new_keyword
        return True

    def _keep(self, mask: List[bool]) -> None:
        self.node.keywords[:] = [kw for kw, keep in zip(self.node.keywords, mask) if keep]


def properties_of(node: Any) -> Optional[PropertyList]:
    """The property view for node, or None when it has no properties list."""
    if isinstance(node, ast.Dict):
        return DictProperties(node)
    if isinstance(node, (ast.Call, ast.ClassDef)):
        return KeywordProperties(node)
    return None

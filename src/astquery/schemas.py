from typing import Any, Callable, Optional

from pydantic import BaseModel, ConfigDict, Field

from astquery.config import LITERAL_CONFIG, PRINT_DEFAULTS


class SearchOptions(BaseModel):
    """
    Options accepted by search().

    throw_errors: let exceptions raised by the predicate abort the search
    instead of counting the entry as a miss.
    """
    model_config = ConfigDict(frozen=True)

    throw_errors: bool = False


class StringifyOptions(BaseModel):
    """
    Options for converting a Python value to literal source.
    """
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    replacer: Optional[Callable[..., Any]] = None
    indent: int = Field(default=LITERAL_CONFIG["default_indent"], ge=0)


class PrintOptions(BaseModel):
    """
    Options passed through to the printer.
    """
    model_config = ConfigDict(frozen=True)

    format: bool = PRINT_DEFAULTS["format"]
    line_length: int = Field(default=PRINT_DEFAULTS["line_length"], gt=0)


class NodeMatch(BaseModel):
    """
    Represents a node returned by a CLI search.
    """
    type: str
    line: Optional[int] = None
    col: Optional[int] = None
    end_line: Optional[int] = None
    source: Optional[str] = None

# Custom exceptions for astquery

class AstQueryError(Exception):
    """Base exception for all application-specific errors."""
    pass

class NoTreeError(AstQueryError):
    """Raised when a search or print is attempted on a handle with no tree."""
    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"{operation} expects a syntax tree but none was found.")

class InvalidPredicateError(AstQueryError, TypeError):
    """Raised when search() is not given a callable predicate."""
    def __init__(self, predicate):
        self.predicate = predicate
        super().__init__(
            f"search() expects a callable predicate, got {type(predicate).__name__}."
        )

class LiteralConversionError(AstQueryError, ValueError):
    """Raised when a value has no literal source form."""
    def __init__(self, value_type: str, reason: str):
        self.value_type = value_type
        self.reason = reason
        super().__init__(f"Cannot convert {value_type} to a literal: {reason}")

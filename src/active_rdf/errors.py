"""
Error hierarchy for ActiveRDF.

Every error raised by the adapter layer derives from ActiveRdfError so
callers can catch the whole family with a single clause.
"""

from typing import Optional


class ActiveRdfError(Exception):
    """Base class for ActiveRDF errors."""
    pass


class ConfigurationError(ActiveRdfError):
    """Raised when adapter construction parameters are missing or invalid."""
    pass


class InvalidInputError(ActiveRdfError):
    """Raised when a triple component is missing or of the wrong type."""
    pass


class QueryError(ActiveRdfError):
    """Raised for an empty query or an unexpected store response."""

    def __init__(
        self,
        message: str,
        query: Optional[str] = None,
        status_code: Optional[int] = None,
        detail: Optional[str] = None,
    ):
        super().__init__(message)
        self.query = query
        self.status_code = status_code
        self.detail = detail


class ParseError(ActiveRdfError):
    """Raised when a store response is not a well-formed N3 triple listing."""

    def __init__(self, message: str, line_number: int = 0, line: str = ""):
        super().__init__(f"Error parsing line {line_number}: {message}\nLine: {line}")
        self.line_number = line_number
        self.line = line


class TransportError(ActiveRdfError):
    """Raised when the store cannot be reached."""
    pass

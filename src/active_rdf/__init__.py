"""
ActiveRDF: object-relational style access to RDF triple stores.

Typed RDF nodes, an N3 serializer/parser and the Yars HTTP adapter.
"""

__version__ = "0.2.0"

from active_rdf.models import Node, Resource, Literal, Triple, Variable
from active_rdf.errors import (
    ActiveRdfError,
    ConfigurationError,
    InvalidInputError,
    QueryError,
    ParseError,
    TransportError,
)
from active_rdf.formats import N3Parser, N3Serializer, parse_n3, serialize_n3
from active_rdf.query import QueryEngine
from active_rdf.adapter import (
    AbstractAdapter,
    YarsAdapter,
    YarsConfig,
    TransportConfig,
    RequestStats,
)

__all__ = [
    "Node",
    "Resource",
    "Literal",
    "Triple",
    "Variable",
    # Errors
    "ActiveRdfError",
    "ConfigurationError",
    "InvalidInputError",
    "QueryError",
    "ParseError",
    "TransportError",
    # N3
    "N3Parser",
    "N3Serializer",
    "parse_n3",
    "serialize_n3",
    "QueryEngine",
    # Adapters
    "AbstractAdapter",
    "YarsAdapter",
    "YarsConfig",
    "TransportConfig",
    "RequestStats",
]

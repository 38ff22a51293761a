"""
RDF node values.

Nodes are immutable value objects:
- Resource: identified by an absolute URI, equal by URI
- Literal: a plain string value, equal by value (language and datatype
  tags are carried along but do not take part in equality)
- Triple: (subject, predicate, object) with Resource subject/predicate
- Variable: a query variable, only meaningful inside a query pattern
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import NamedTuple, Optional, Union

from active_rdf.errors import InvalidInputError


class Node:
    """Any RDF value that can appear in a triple."""

    __slots__ = ()

    def is_resource(self) -> bool:
        return False

    def is_literal(self) -> bool:
        return False


@dataclass(frozen=True, slots=True)
class Resource(Node):
    """An RDF resource identified by its URI."""
    uri: str

    def __post_init__(self):
        if not isinstance(self.uri, str) or not self.uri:
            raise InvalidInputError(f"Resource URI must be a non-empty string, got {self.uri!r}")

    def is_resource(self) -> bool:
        return True

    def __str__(self) -> str:
        return self.uri


@dataclass(frozen=True, slots=True)
class Literal(Node):
    """
    A literal value.

    Attributes:
        value: Lexical form
        language: Optional language tag (e.g. "en")
        datatype: Optional datatype URI
    """
    value: str
    language: Optional[str] = field(default=None, compare=False)
    datatype: Optional[str] = field(default=None, compare=False)

    def __post_init__(self):
        if not isinstance(self.value, str):
            object.__setattr__(self, "value", str(self.value))

    def is_literal(self) -> bool:
        return True

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class Variable:
    """A named query variable, rendered as ?name."""
    name: str

    def __str__(self) -> str:
        return f"?{self.name}"


class Triple(NamedTuple):
    """An RDF statement."""
    subject: Resource
    predicate: Resource
    object: Node


# Anything that can stand in a query pattern position
PatternTerm = Union[Node, Variable]

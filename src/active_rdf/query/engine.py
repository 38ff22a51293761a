"""
N3 query builder for Yars.

Assembles `ql:select` / `ql:where` queries from triple patterns:

    <> ql:select { ?s ?p ?o . } ; ql:where { ?s ?p ?o . } .

Wildcard positions use the fixed variables ?s, ?p and ?o, so the same
pattern always produces the same query text.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from active_rdf.errors import QueryError
from active_rdf.formats.n3 import N3Serializer
from active_rdf.models import PatternTerm, Variable


SUBJECT_VAR = Variable("s")
PREDICATE_VAR = Variable("p")
OBJECT_VAR = Variable("o")

Pattern = Tuple[PatternTerm, PatternTerm, PatternTerm]


class QueryEngine:
    """
    Collects binding triples and conditions, then renders an N3 query.

    Example:
        qe = QueryEngine()
        pattern = QueryEngine.pattern(subject, None, None)
        qe.add_binding_triple(*pattern)
        qe.add_condition(*pattern)
        qs = qe.generate()
    """

    def __init__(self, prefixes: Optional[Dict[str, str]] = None):
        self.prefixes: Dict[str, str] = dict(prefixes or {})
        self.bindings: List[Pattern] = []
        self.conditions: List[Pattern] = []
        self._serializer = N3Serializer()

    @staticmethod
    def pattern(s=None, p=None, o=None) -> Pattern:
        """Replace None positions with the wildcard variables."""
        return (
            SUBJECT_VAR if s is None else s,
            PREDICATE_VAR if p is None else p,
            OBJECT_VAR if o is None else o,
        )

    def add_binding_triple(self, s: PatternTerm, p: PatternTerm, o: PatternTerm) -> "QueryEngine":
        """Add a triple pattern to the select clause."""
        self.bindings.append((s, p, o))
        return self

    def add_condition(self, s: PatternTerm, p: PatternTerm, o: PatternTerm) -> "QueryEngine":
        """Add a triple pattern to the where clause."""
        self.conditions.append((s, p, o))
        return self

    def _render(self, patterns: List[Pattern]) -> str:
        return ' '.join(self._serializer.serialize_pattern(*pattern) for pattern in patterns)

    def generate(self) -> str:
        """
        Render the query.

        Returns:
            N3 query text

        Raises:
            QueryError: if no condition was added
        """
        if not self.conditions:
            raise QueryError("Cannot generate a query without conditions")

        # Without explicit bindings, select what the conditions match
        bindings = self.bindings or self.conditions

        query = (
            f"<> ql:select {{ {self._render(bindings)} }} ; "
            f"ql:where {{ {self._render(self.conditions)} }} ."
        )

        if self.prefixes:
            declarations = '\n'.join(
                f"@prefix {prefix}: <{uri}> ." for prefix, uri in self.prefixes.items()
            )
            query = f"{declarations}\n{query}"

        return query

"""N3 query construction."""

from active_rdf.query.engine import QueryEngine, SUBJECT_VAR, PREDICATE_VAR, OBJECT_VAR

__all__ = [
    "QueryEngine",
    "SUBJECT_VAR",
    "PREDICATE_VAR",
    "OBJECT_VAR",
]

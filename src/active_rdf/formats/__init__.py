"""
RDF Format Parsers and Serializers.

Supports:
- N3 / Notation3 flat triple listings as exchanged with Yars
"""

from active_rdf.formats.n3 import N3Parser, N3Serializer, parse_n3, serialize_n3, serialize_term

__all__ = [
    "N3Parser",
    "N3Serializer",
    "parse_n3",
    "serialize_n3",
    "serialize_term",
]

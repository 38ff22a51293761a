"""
Notation3 (N3) Parser and Serializer for Yars triple listings.

Yars answers queries with one statement per line:
    <subject> <predicate> <object> .
    <subject> <predicate> "literal" .

Only this flat subset is handled. Literal language tags and datatypes are
accepted on input and discarded.

Reference: https://www.w3.org/TeamSubmission/n3/
"""

from io import StringIO
from pathlib import Path
from typing import Iterable, Iterator, List, Tuple, Union

from active_rdf.errors import InvalidInputError, ParseError
from active_rdf.models import Literal, Node, Resource, Triple, Variable


_ESCAPES = {
    't': '\t',
    'n': '\n',
    'r': '\r',
    'b': '\b',
    'f': '\f',
    '"': '"',
    "'": "'",
    '\\': '\\',
}


def _escape(value: str) -> str:
    return (
        value.replace('\\', '\\\\')
        .replace('"', '\\"')
        .replace('\n', '\\n')
        .replace('\r', '\\r')
        .replace('\t', '\\t')
        .replace('\b', '\\b')
        .replace('\f', '\\f')
    )


class N3Serializer:
    """
    Serializer for N3 terms and statements.

    Resources are wrapped in angle brackets, literals are double-quoted,
    variables are written as ?name.
    """

    def serialize_term(self, term: Union[Node, Variable]) -> str:
        """
        Render a single term.

        Raises:
            InvalidInputError: if the term is not a Resource, Literal or Variable
        """
        if isinstance(term, Resource):
            return f"<{term.uri}>"
        if isinstance(term, Literal):
            text = f'"{_escape(term.value)}"'
            if term.language:
                return f"{text}@{term.language}"
            if term.datatype:
                return f"{text}^^<{term.datatype}>"
            return text
        if isinstance(term, Variable):
            return f"?{term.name}"
        raise InvalidInputError(f"Cannot serialize {term!r} as an N3 term")

    def serialize_pattern(self, s, p, o) -> str:
        """Render three terms followed by the statement terminator."""
        return f"{self.serialize_term(s)} {self.serialize_term(p)} {self.serialize_term(o)} ."

    def serialize(self, triples: Iterable[Triple]) -> str:
        """
        Serialize triples to N3, one statement per line.

        Args:
            triples: Triples to write

        Returns:
            N3 formatted string
        """
        return '\n'.join(self.serialize_pattern(*t) for t in triples)


class N3Parser:
    """
    Parser for flat N3 triple listings.

    Every non-empty line must hold exactly three terms followed by '.'.
    Subject and predicate must be URIs; the object is a Resource when it
    is bracketed and a Literal otherwise. A malformed line fails the
    whole parse.
    """

    def __init__(self):
        self.line_number = 0

    def parse(self, source: Union[str, Path, StringIO]) -> List[Triple]:
        """
        Parse N3 content.

        Args:
            source: N3 content as string, file path, or StringIO

        Returns:
            Triples in document order

        Raises:
            ParseError: on the first malformed line
        """
        if isinstance(source, Path):
            text = source.read_text(encoding="utf-8")
        elif isinstance(source, StringIO):
            text = source.read()
        else:
            text = source

        # Only \n ends a statement; literals may hold other line separators
        return list(self.parse_lines(text.split('\n')))

    def parse_lines(self, lines: List[str]) -> Iterator[Triple]:
        """Parse lines of N3, skipping blanks and comments."""
        for i, line in enumerate(lines):
            self.line_number = i + 1

            line = line.strip(' \t\r')
            if not line or line.startswith('#'):
                continue

            yield self._parse_line(line)

    def _fail(self, message: str, line: str) -> ParseError:
        return ParseError(message, line_number=self.line_number, line=line)

    def _parse_line(self, line: str) -> Triple:
        pos = 0

        if not line.startswith('<'):
            raise self._fail("subject must be a URI", line)
        subject, pos = self._parse_iri(line, pos)
        pos = self._skip_ws(line, pos)

        if pos >= len(line) or line[pos] != '<':
            raise self._fail("predicate must be a URI", line)
        predicate, pos = self._parse_iri(line, pos)
        pos = self._skip_ws(line, pos)

        obj, pos = self._parse_object(line, pos)
        pos = self._skip_ws(line, pos)

        if pos >= len(line) or line[pos] != '.':
            raise self._fail("expected '.' after object", line)
        pos = self._skip_ws(line, pos + 1)

        if pos < len(line) and line[pos] != '#':
            raise self._fail(f"unexpected content after '.': {line[pos:]!r}", line)

        return Triple(subject, predicate, obj)

    def _skip_ws(self, line: str, pos: int) -> int:
        while pos < len(line) and line[pos] in ' \t':
            pos += 1
        return pos

    def _parse_iri(self, line: str, pos: int) -> Tuple[Resource, int]:
        end = line.find('>', pos + 1)
        if end == -1:
            raise self._fail("unterminated URI", line)
        uri = line[pos + 1:end]
        if not uri or any(c in uri for c in ' \t<"'):
            raise self._fail(f"invalid URI <{uri}>", line)
        return Resource(uri), end + 1

    def _parse_object(self, line: str, pos: int) -> Tuple[Node, int]:
        if pos >= len(line):
            raise self._fail("missing object", line)
        if line[pos] == '<':
            return self._parse_iri(line, pos)
        if line[pos] == '"':
            return self._parse_literal(line, pos)
        return self._parse_bare(line, pos)

    def _parse_literal(self, line: str, pos: int) -> Tuple[Literal, int]:
        chars = []
        pos += 1
        while True:
            if pos >= len(line):
                raise self._fail("unterminated literal", line)
            c = line[pos]
            if c == '"':
                pos += 1
                break
            if c == '\\':
                decoded, pos = self._parse_escape(line, pos)
                chars.append(decoded)
                continue
            chars.append(c)
            pos += 1

        # Language tag or datatype, discarded
        if line.startswith('@', pos):
            start = pos + 1
            pos = start
            while pos < len(line) and (line[pos].isalnum() or line[pos] == '-'):
                pos += 1
            if pos == start:
                raise self._fail("empty language tag", line)
        elif line.startswith('^^', pos):
            pos += 2
            if pos < len(line) and line[pos] == '<':
                _, pos = self._parse_iri(line, pos)
            else:
                start = pos
                while pos < len(line) and line[pos] not in ' \t':
                    pos += 1
                if line[pos - 1:pos] == '.' and self._skip_ws(line, pos) >= len(line):
                    pos -= 1
                if pos == start:
                    raise self._fail("empty datatype", line)

        return Literal(''.join(chars)), pos

    def _parse_escape(self, line: str, pos: int) -> Tuple[str, int]:
        if pos + 1 >= len(line):
            raise self._fail("dangling escape in literal", line)
        code = line[pos + 1]
        if code in _ESCAPES:
            return _ESCAPES[code], pos + 2
        if code in 'uU':
            width = 4 if code == 'u' else 8
            digits = line[pos + 2:pos + 2 + width]
            try:
                if len(digits) != width:
                    raise ValueError(digits)
                return chr(int(digits, 16)), pos + 2 + width
            except ValueError:
                raise self._fail(f"invalid unicode escape \\{code}{digits}", line) from None
        raise self._fail(f"invalid escape \\{code}", line)

    def _parse_bare(self, line: str, pos: int) -> Tuple[Literal, int]:
        """Unquoted object token such as 42 or true."""
        start = pos
        while pos < len(line) and line[pos] not in ' \t':
            pos += 1
        # "42." at end of line: the dot is the terminator
        if pos - start > 1 and line[pos - 1] == '.' and self._skip_ws(line, pos) >= len(line):
            pos -= 1
        token = line[start:pos]
        if token == '.':
            raise self._fail("missing object", line)
        return Literal(token), pos


def parse_n3(source: Union[str, Path, StringIO]) -> List[Triple]:
    """
    Parse an N3 triple listing.

    Args:
        source: N3 content as string, file path, or StringIO

    Returns:
        List of triples
    """
    parser = N3Parser()
    return parser.parse(source)


def serialize_n3(triples: Iterable[Triple]) -> str:
    """
    Serialize triples to N3.

    Args:
        triples: Triples to write

    Returns:
        N3 formatted string
    """
    serializer = N3Serializer()
    return serializer.serialize(triples)


def serialize_term(term: Union[Node, Variable]) -> str:
    """Render one term in N3 syntax."""
    return N3Serializer().serialize_term(term)

"""
Shared fixtures: an in-memory Yars store behind httpx.MockTransport.
"""

import re
from typing import List, Optional

import httpx
import pytest

from active_rdf import Resource, YarsAdapter
from active_rdf.formats.n3 import parse_n3, serialize_n3


WHERE_PATTERN = re.compile(r'ql:where \{ (.*) \} \.$', re.DOTALL)
TERM_PATTERN = re.compile(r'<[^>]*>|"(?:[^"\\]|\\.)*"|\?\w+')


class FakeYarsStore:
    """
    Minimal Yars stand-in.

    Accepts N3 statements on PUT, answers single-pattern ql:where queries on
    GET (204 when nothing matches) and deletes matches on DELETE.
    """

    def __init__(self, context: str = "test"):
        self.path = f"/{context}"
        self.triples = []
        self.requests: List[httpx.Request] = []
        self.put_status = 201

    def _term(self, token: str):
        if token.startswith('?'):
            return None
        # Reuse the parser to decode a single term
        return parse_n3(f"<urn:s> <urn:p> {token} .")[0].object

    def _pattern(self, query: str):
        match = WHERE_PATTERN.search(query)
        assert match, f"unsupported query: {query}"
        tokens = TERM_PATTERN.findall(match.group(1))
        assert len(tokens) == 3, f"unsupported pattern: {match.group(1)}"
        return [self._term(t) for t in tokens]

    def _matches(self, query: str):
        pattern = self._pattern(query)
        return [
            t for t in self.triples
            if all(want is None or want == got for want, got in zip(pattern, t))
        ]

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path != self.path:
            return httpx.Response(404)

        if request.method == "PUT":
            if self.put_status != 201:
                return httpx.Response(self.put_status)
            for triple in parse_n3(request.content.decode("utf-8")):
                if triple not in self.triples:
                    self.triples.append(triple)
            return httpx.Response(201)

        query = request.url.params.get("q", "")
        if request.method == "GET":
            found = self._matches(query)
            if not found:
                return httpx.Response(204)
            return httpx.Response(200, text=serialize_n3(found) + "\n")

        if request.method == "DELETE":
            for triple in self._matches(query):
                self.triples.remove(triple)
            return httpx.Response(200)

        return httpx.Response(405)


def respond(status: int, text: Optional[str] = None):
    """Transport that answers every request with the same response."""
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(status, text=text)

    transport = httpx.MockTransport(handler)
    transport.requests = requests
    return transport


@pytest.fixture
def store():
    return FakeYarsStore()


@pytest.fixture
def adapter(store):
    return YarsAdapter(
        {"host": "yars.test", "port": 8080, "context": "test"},
        transport=httpx.MockTransport(store.handle),
    )


@pytest.fixture
def alice():
    return Resource("http://m3pe.org/activerdf/test/alice")


@pytest.fixture
def name():
    return Resource("http://m3pe.org/activerdf/test/name")


@pytest.fixture
def knows():
    return Resource("http://m3pe.org/activerdf/test/knows")


@pytest.fixture
def bob():
    return Resource("http://m3pe.org/activerdf/test/bob")


@pytest.fixture
def canned():
    """Factory for transports that always give the same answer."""
    return respond

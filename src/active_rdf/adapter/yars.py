"""
ActiveRDF adapter for the Yars triple store.

Triples are written with PUT, removed with DELETE and queried with GET,
all against http://{host}:{port}/{context} using N3 payloads:

    PUT    /{context}          body: <s> <p> o .
    DELETE /{context}?q=...    N3 select/where query
    GET    /{context}?q=...    Accept: application/rdf+n3

Every operation issues exactly one request. A rejected PUT or DELETE is
reported as False; bad input and unexpected query responses raise.
"""

from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional, Union
from urllib.parse import quote_plus

import httpx

from active_rdf.adapter.base import AbstractAdapter
from active_rdf.adapter.config import YarsConfig
from active_rdf.adapter.transport import HttpTransport, RequestStats
from active_rdf.errors import ConfigurationError, InvalidInputError, QueryError
from active_rdf.formats.n3 import N3Parser, N3Serializer
from active_rdf.models import Node, Resource, Triple
from active_rdf.query.engine import QueryEngine

_module_logger = logging.getLogger(__name__)

N3_MIME_TYPE = "application/rdf+n3"

# Characters of the response body echoed in error messages
_DETAIL_LIMIT = 500


class YarsAdapter(AbstractAdapter):
    """
    Adapter speaking N3 over HTTP to a Yars store.

    Example:
        adapter = YarsAdapter({"host": "localhost", "context": "test"})
        adapter.add(Resource("http://ex.org/a"), Resource("http://ex.org/name"), Literal("a"))
        adapter.query('<> ql:select { ?s ?p ?o . } ; ql:where { ?s ?p ?o . } .')

    Args:
        params: Parameter mapping (host, port, context, proxy, transport) or a YarsConfig
        logger: Logger for request tracing; defaults to this module's logger
        transport: Optional httpx transport used by every request
    """

    adapter_type = "yars"

    def __init__(
        self,
        params: Union[Mapping[str, Any], YarsConfig, None] = None,
        logger: Optional[logging.Logger] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        if params is None:
            raise ConfigurationError("Yars adapter initialisation error. Parameters are nil.")
        self.config = params if isinstance(params, YarsConfig) else YarsConfig.from_dict(params)

        self._log = logger or _module_logger
        self._serializer = N3Serializer()
        self._transport = HttpTransport(self.config, transport=transport, log=self._log)

        self._log.debug(f"opened YARS connection on {self.base_url}")

    # =========================================================================
    # Connection parameters
    # =========================================================================

    @property
    def host(self) -> str:
        return self.config.host

    @property
    def port(self) -> int:
        return self.config.port

    @property
    def context(self) -> str:
        return self.config.context

    @property
    def query_language(self) -> str:
        return self.config.query_language

    @property
    def base_url(self) -> str:
        return f"{self.config.base_url}{self.config.path}"

    @property
    def stats(self) -> RequestStats:
        return self._transport.stats

    # =========================================================================
    # Operations
    # =========================================================================

    def add(self, s: Resource, p: Resource, o: Node) -> bool:
        """
        Add the triple s, p, o to the store.

        Args:
            s: Subject
            p: Predicate
            o: Object, a Literal or a Resource

        Returns:
            True if the store answered 201 Created

        Raises:
            InvalidInputError: on a missing or mistyped component
        """
        if s is None or p is None or o is None:
            raise InvalidInputError("error during addition of statement: nil received")
        if not isinstance(s, Resource) or not isinstance(p, Resource) or not isinstance(o, Node):
            raise InvalidInputError("error during addition of statement: wrong type received")

        return self._put(self._serializer.serialize_pattern(s, p, o))

    def remove(
        self,
        s: Optional[Resource] = None,
        p: Optional[Resource] = None,
        o: Optional[Node] = None,
    ) -> bool:
        """
        Delete every triple matching the pattern.

        None components are wildcards (?s, ?p, ?o in the generated query).

        Returns:
            True if the store answered 200 OK

        Raises:
            InvalidInputError: if a given component has the wrong type
        """
        self._verify_input_type(s, p, o)

        pattern = QueryEngine.pattern(s, p, o)
        qe = QueryEngine()
        qe.add_binding_triple(*pattern)
        qe.add_condition(*pattern)

        return self._delete(qe.generate())

    def query(self, qs: str) -> List[Triple]:
        """
        Query the store.

        Args:
            qs: N3 query, e.g. '<> ql:select { ?s ?p ?o . } ; ql:where { ?s ?p ?o . } .'

        Returns:
            Triples in the order the store returned them; empty on 204

        Raises:
            QueryError: on an empty query or an unexpected status
            ParseError: if the response is not well-formed N3
        """
        self._log.debug(f"querying yars in context {self.context!r}")
        response = self._get(qs)
        if response.status_code == httpx.codes.NO_CONTENT:
            return []

        self._log.debug("parsing YARS response")
        return N3Parser().parse(response.text)

    def query_count(self, qs: str) -> int:
        """
        Query the store and count the result lines.

        The count is the number of newline characters in the response body.

        Raises:
            QueryError: on an empty query or an unexpected status
        """
        self._log.debug(f"querying count yars in context {self.context!r}:\n{qs}")
        response = self._get(qs)
        if response.status_code == httpx.codes.NO_CONTENT:
            return 0
        return response.text.count("\n")

    def count_statements(self, qs: str) -> int:
        """Query the store and count the parsed triples."""
        return len(self.query(qs))

    def save(self) -> bool:
        """Every mutation is sent immediately, so there is nothing to flush."""
        return True

    def close(self) -> None:
        self._transport.close()

    # =========================================================================
    # HTTP
    # =========================================================================

    def _verify_input_type(self, s, p, o) -> None:
        if (s is not None and not isinstance(s, Resource)) or \
           (p is not None and not isinstance(p, Resource)) or \
           (o is not None and not isinstance(o, Node)):
            raise InvalidInputError("wrong type received for removal")

    def _query_url(self, qs: str) -> str:
        return f"{self.config.path}?q={quote_plus(qs)}"

    def _put(self, data: str) -> bool:
        self._log.debug(f"putting data to yars (in context {self.config.path}): {data}")
        response = self._transport.request(
            "PUT",
            self.config.path,
            content=data,
            headers={"Content-Type": N3_MIME_TYPE},
        )
        self._log.debug(f"PUT - response from yars: {response.status_code} {response.reason_phrase}")

        if response.status_code != httpx.codes.CREATED:
            self._log.warning(f"PUT rejected by yars with status {response.status_code}: {data}")
            return False
        return True

    def _delete(self, qs: str) -> bool:
        self._log.debug(f"DELETE - query: {qs}")
        response = self._transport.request("DELETE", self._query_url(qs))
        self._log.debug(f"DELETE - response from yars: {response.status_code} {response.reason_phrase}")

        if response.status_code != httpx.codes.OK:
            self._log.warning(f"DELETE rejected by yars with status {response.status_code}: {qs}")
            return False
        return True

    def _get(self, qs: str) -> httpx.Response:
        """Send a query and check the status; returns 200 and 204 responses."""
        if not isinstance(qs, str) or not qs.strip():
            raise QueryError("query string nil", query=qs)

        response = self._transport.request(
            "GET",
            self._query_url(qs),
            headers={"Accept": N3_MIME_TYPE},
        )

        if response.status_code not in (httpx.codes.OK, httpx.codes.NO_CONTENT):
            detail = response.text[:_DETAIL_LIMIT]
            raise QueryError(
                f"bad request ({response.status_code} {response.reason_phrase}): {qs}",
                query=qs,
                status_code=response.status_code,
                detail=detail,
            )
        return response

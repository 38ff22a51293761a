"""
Adapter contract.

An adapter connects the ActiveRDF data layer to one triple store and
exposes the same small set of operations regardless of the backend.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from active_rdf.models import Node, Resource, Triple


class AbstractAdapter(ABC):
    """Operations every triple store adapter provides."""

    adapter_type: str = "abstract"

    @abstractmethod
    def add(self, s: Resource, p: Resource, o: Node) -> bool:
        """Store one triple. Returns True if the store accepted it."""

    @abstractmethod
    def remove(
        self,
        s: Optional[Resource] = None,
        p: Optional[Resource] = None,
        o: Optional[Node] = None,
    ) -> bool:
        """Delete triples matching a pattern; None matches anything."""

    @abstractmethod
    def query(self, qs: str) -> List[Triple]:
        """Run a query and return the matching triples."""

    @abstractmethod
    def query_count(self, qs: str) -> int:
        """Run a query and return the number of results."""

    def save(self) -> bool:
        """Flush pending changes. Adapters that write through return True."""
        return True

    def close(self) -> None:
        """Release any held resources."""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

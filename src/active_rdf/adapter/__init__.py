"""
Triple store adapters.

- YarsAdapter: N3 over HTTP to a Yars store
"""

from active_rdf.adapter.base import AbstractAdapter
from active_rdf.adapter.config import TransportConfig, YarsConfig, validate_proxy
from active_rdf.adapter.transport import HttpTransport, RequestStats
from active_rdf.adapter.yars import YarsAdapter

__all__ = [
    "AbstractAdapter",
    "YarsAdapter",
    "YarsConfig",
    "TransportConfig",
    "HttpTransport",
    "RequestStats",
    "validate_proxy",
]

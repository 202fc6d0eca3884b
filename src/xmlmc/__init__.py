"""
xmlmc — XMLMC API client for Python.

Resolves an instance name to its endpoint, builds XMLMC request envelopes and
keeps the session cookie the server hands back.
"""

from xmlmc.client import XmlmcInstance, DEFAULT_TIMEOUT, DEFAULT_USER_AGENT
from xmlmc.params import ParamBuilder
from xmlmc.zone import ZoneResolver, get_endpoint_from_name
from xmlmc.errors import (
    XmlmcError,
    ValidationError,
    EncodingError,
    NetworkError,
    DecodeError,
    RequestConstructionError,
)
from xmlmc.models.params import ParamAttribute, XmlmcResponse
from xmlmc.models.zone import ZoneInfo

__version__ = "0.1.0"
__all__ = [
    "XmlmcInstance",
    "DEFAULT_TIMEOUT",
    "DEFAULT_USER_AGENT",
    "ParamBuilder",
    "ZoneResolver",
    "get_endpoint_from_name",
    "XmlmcError",
    "ValidationError",
    "EncodingError",
    "NetworkError",
    "DecodeError",
    "RequestConstructionError",
    "ParamAttribute",
    "XmlmcResponse",
    "ZoneInfo",
]

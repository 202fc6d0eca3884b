"""
XMLMC error types.
"""

from typing import Any, Optional


class XmlmcError(Exception):
    def __init__(self, code: str, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.details = details


class ValidationError(XmlmcError):
    """Bad tag/element name or empty instance id."""

    def __init__(self, message: str, code: str = "validation_error"):
        super().__init__(code, message)


class EncodingError(XmlmcError):
    def __init__(self, message: str, code: str = "encoding_error"):
        super().__init__(code, message)


class NetworkError(XmlmcError):
    """Connection failure or a non-200 response. status_code is 0 when nothing came back."""

    def __init__(self, message: str, status_code: int = 0, details: Optional[dict[str, Any]] = None):
        super().__init__("network_error", message, details)
        self.status_code = status_code


class DecodeError(XmlmcError):
    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__("decode_error", message, details)


class RequestConstructionError(XmlmcError):
    def __init__(self, message: str):
        super().__init__("request_error", message)

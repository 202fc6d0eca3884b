"""
XmlmcInstance — one connection to an XMLMC server.

Holds the endpoint, session state and the pending parameters. Not safe to share
between threads; use one instance per logical session.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Optional

import httpx

from xmlmc.errors import NetworkError, RequestConstructionError, XmlmcError
from xmlmc.models.params import XmlmcResponse
from xmlmc.params import Attributes, ParamBuilder
from xmlmc.transport.envelope import build_method_call
from xmlmc.transport.http import HttpClient
from xmlmc.zone import ZoneResolver

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30
DEFAULT_USER_AGENT = "xmlmc-api/0.1.0"
CONTENT_TYPE = "text/xmlmc"
JSON_ACCEPT = "text/json"

URL_RE = re.compile(
    r"(?i:http|https)://([\w\-_]+(?:(?:\.[\w\-_]+)+))([\w\-\.,@?^=%&:/~\+#]*[\w\-\@?^=%&/~\+#])?"
)


def is_url(server: str) -> bool:
    return URL_RE.search(server) is not None


def dav_endpoint_for(server_url: str) -> str:
    return server_url.replace("/xmlmc/", "/dav/", 1)


class XmlmcInstance:
    """XMLMC client for a single instance.

    `server` is either a full endpoint URL, used as-is, or an instance name that
    is looked up through the zone hosts. A failed lookup does not raise here: it
    is kept on `zone_error`, `server_url` stays empty, and the first invoke()
    reports it.

        conn = XmlmcInstance("https://eurapi.example.com/test/xmlmc/")
        conn.set_param("userId", "admin")
        body = conn.invoke("session", "userLogon")
    """

    def __init__(
        self,
        server: str,
        *,
        api_key: str = "",
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
        transport: Optional[httpx.BaseTransport] = None,
        resolver: Optional[ZoneResolver] = None,
        strict_elements: bool = False,
    ):
        self._http = HttpClient(transport=transport)
        self._params = ParamBuilder()
        self._strict_elements = strict_elements

        self._server_url = ""
        self._dav_endpoint = ""
        self._stream = ""
        self.zone_error: Optional[XmlmcError] = None

        self._session_id = ""
        self._api_key = api_key
        self._trace = ""
        self._user_agent = user_agent
        self._timeout = timeout
        self._json_response = False
        self._status_code = 0
        self._count = 0

        if is_url(server):
            self._server_url = server
            self._dav_endpoint = dav_endpoint_for(server)
        else:
            self._resolve(server, resolver or ZoneResolver(http=self._http))

    def _resolve(self, instance_id: str, resolver: ZoneResolver) -> None:
        try:
            zone = resolver.resolve(instance_id)
        except XmlmcError as e:
            logger.debug("Unable to resolve instance %r: %s", instance_id, e)
            self.zone_error = e
            return
        if zone.endpoint:
            self._server_url = zone.endpoint
            self._dav_endpoint = zone.endpoint + "dav/"
        self._stream = zone.stream

    # -- Endpoint (read-only) --

    @property
    def server_url(self) -> str:
        return self._server_url

    @property
    def dav_endpoint(self) -> str:
        return self._dav_endpoint

    @property
    def stream(self) -> str:
        return self._stream

    # -- Session / config state --

    @property
    def session_id(self) -> str:
        return self._session_id

    @session_id.setter
    def session_id(self, value: str) -> None:
        self._session_id = value

    @property
    def api_key(self) -> str:
        return self._api_key

    @api_key.setter
    def api_key(self, value: str) -> None:
        self._api_key = value

    @property
    def trace(self) -> str:
        return self._trace

    @trace.setter
    def trace(self, value: str) -> None:
        self._trace = value

    @property
    def user_agent(self) -> str:
        return self._user_agent

    @user_agent.setter
    def user_agent(self, value: str) -> None:
        self._user_agent = value

    @property
    def timeout(self) -> float:
        """Seconds allowed for a whole call. Zero or less disables the timeout."""
        return self._timeout

    @timeout.setter
    def timeout(self, value: float) -> None:
        self._timeout = value

    @property
    def json_response(self) -> bool:
        return self._json_response

    @json_response.setter
    def json_response(self, value: bool) -> None:
        self._json_response = value

    @property
    def status_code(self) -> int:
        """HTTP status of the last call, including failed ones. 0 before the first call."""
        return self._status_code

    @property
    def count(self) -> int:
        return self._count

    # -- Parameters --

    def set_param(self, name: str, value: Any) -> None:
        self._params.set_param(name, value)

    def set_param_attr(self, name: str, value: Any, attributes: Attributes) -> None:
        self._params.set_param_attr(name, value, attributes)

    def open_element(self, name: str) -> None:
        """Open a complex parameter. Close it with close_element(); nothing checks that you do."""
        self._params.open_element(name)

    def close_element(self, name: str) -> None:
        self._params.close_element(name)

    def get_param(self) -> str:
        return self._params.get_param()

    def clear_param(self) -> None:
        self._params.clear()

    # -- Invocation --

    def _request_url(self, service: str, method: str) -> str:
        return f"{self._server_url.rstrip('/')}/{service}/?method={method}"

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": CONTENT_TYPE}
        if self._api_key:
            headers["Authorization"] = f"ESP-APIKEY {self._api_key}"
        headers["User-Agent"] = self._user_agent
        headers["Cookie"] = self._session_id
        if self._json_response:
            headers["Accept"] = JSON_ACCEPT
        return headers

    def _check_request(self, service: str, method: str) -> None:
        if not self._server_url:
            raise RequestConstructionError("No server endpoint configured for this instance") from self.zone_error
        if not service or not method:
            raise RequestConstructionError("Service and method names are required")
        if self._strict_elements and not self._params.is_balanced():
            raise RequestConstructionError("Unbalanced elements in params: every open_element() needs a close_element()")

    def invoke_get_response(self, service: str, method: str) -> XmlmcResponse:
        """Call service::method with the pending params and return body, headers and status.

        A non-200 response raises NetworkError and leaves the params in place so
        the call can be retried; a successful one clears them.
        """
        self._check_request(service, method)
        body = build_method_call(service, method, self._params.fragment, self._trace)
        url = self._request_url(service, method)

        logger.debug("XMLMC %s::%s -> %s", service, method, url)
        try:
            response = self._http.post(url, body.encode("utf-8"), self._headers(), self._timeout)
        except NetworkError as e:
            # The status line arrived even though the body did not
            if e.status_code:
                self._status_code = e.status_code
            raise
        self._status_code = response.status_code

        if response.status_code != 200:
            logger.debug("XMLMC %s::%s returned HTTP %d", service, method, response.status_code)
            raise NetworkError(f"Invalid HTTP Response: {response.status_code}", response.status_code)

        set_cookie = response.headers.get_list("set-cookie")
        if set_cookie:
            session = set_cookie[0].split(";")[0]
            if session:
                self._session_id = session

        self._count += 1
        self._params.clear()
        headers = {name: response.headers.get_list(name) for name in response.headers.keys()}
        return XmlmcResponse(body=response.text, headers=headers, status_code=response.status_code)

    def invoke(self, service: str, method: str) -> str:
        """Call service::method and return the raw response body."""
        return self.invoke_get_response(service, method).body

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> XmlmcInstance:
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"XmlmcInstance(server_url={self._server_url!r}, count={self._count})"

"""Zone lookup tests — the zone hosts are faked with httpx.MockTransport."""

import httpx
import pytest

from xmlmc import DecodeError, NetworkError, ValidationError, ZoneResolver, get_endpoint_from_name
from xmlmc.transport.http import HttpClient

ZONEINFO = {
    "zoneinfo": {
        "name": "hornbill",
        "zone": "eur",
        "message": "",
        "endpoint": "https://betaapi.example.com/hornbill/",
        "releaseStream": "beta",
    }
}


def make_resolver(handler) -> ZoneResolver:
    return ZoneResolver(http=HttpClient(transport=httpx.MockTransport(handler)))


def test_resolve_from_primary_host():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(str(request.url))
        return httpx.Response(200, json=ZONEINFO)

    info = make_resolver(handler).resolve("hornbill")
    assert info.endpoint == "https://betaapi.example.com/hornbill/"
    assert info.stream == "beta"
    assert info.zone == "eur"
    assert seen == ["https://files.hornbill.com/instances/hornbill/zoneinfo"]


def test_falls_back_to_secondary_on_bad_status():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.url.host)
        if request.url.host == "files.hornbill.com":
            return httpx.Response(404)
        return httpx.Response(200, json=ZONEINFO)

    info = make_resolver(handler).resolve("hornbill")
    assert info.endpoint == "https://betaapi.example.com/hornbill/"
    assert seen == ["files.hornbill.com", "files.hornbill.co"]


def test_falls_back_to_secondary_on_connection_error():
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.host == "files.hornbill.com":
            raise httpx.ConnectError("connection refused", request=request)
        return httpx.Response(200, json=ZONEINFO)

    assert make_resolver(handler).resolve("hornbill").stream == "beta"


def test_both_hosts_unreachable():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request.url.host)
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(NetworkError):
        make_resolver(handler).resolve("hornbill")
    # one fallback, no further retries
    assert len(calls) == 2


def test_secondary_bad_status_reports_status():
    with pytest.raises(NetworkError) as exc:
        make_resolver(lambda request: httpx.Response(503)).resolve("hornbill")
    assert exc.value.status_code == 503


@pytest.mark.parametrize("body", [b"not json", b'{"something": "else"}', b'{"zoneinfo": "nope"}'])
def test_bad_zoneinfo_body(body):
    with pytest.raises(DecodeError):
        make_resolver(lambda request: httpx.Response(200, content=body)).resolve("hornbill")


def test_empty_instance_id():
    with pytest.raises(ValidationError, match="instanceid not provided"):
        make_resolver(lambda request: httpx.Response(200, json=ZONEINFO)).resolve("")


def test_custom_hosts():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(str(request.url))
        return httpx.Response(200, json=ZONEINFO)

    resolver = ZoneResolver(
        http=HttpClient(transport=httpx.MockTransport(handler)),
        hosts=["https://zones.internal/"],
    )
    resolver.resolve("abc")
    assert seen == ["https://zones.internal/instances/abc/zoneinfo"]


def test_no_caching():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(1)
        return httpx.Response(200, json=ZONEINFO)

    resolver = make_resolver(handler)
    resolver.resolve("hornbill")
    resolver.resolve("hornbill")
    assert len(calls) == 2


def test_get_endpoint_from_name():
    resolver = make_resolver(lambda request: httpx.Response(200, json=ZONEINFO))
    assert get_endpoint_from_name("hornbill", resolver) == "https://betaapi.example.com/hornbill/"
    assert get_endpoint_from_name("", resolver) == ""

    failing = make_resolver(lambda request: httpx.Response(500))
    assert get_endpoint_from_name("hornbill", failing) == ""


def test_instance_id_is_quoted_in_lookup_url():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.url.raw_path)
        return httpx.Response(200, json=ZONEINFO)

    make_resolver(handler).resolve("a/b?c")
    assert seen == [b"/instances/a%2Fb%3Fc/zoneinfo"]

"""
Integration tests against a real XMLMC instance.

Requires environment variables:
  XMLMC_INSTANCE  — instance name (or full .../xmlmc/ URL)
  XMLMC_API_KEY   — API key for that instance

Run: XMLMC_INTEGRATION=1 pytest tests/integration/ -v
"""

import os

import pytest

from xmlmc import XmlmcInstance, get_endpoint_from_name

SKIP = not os.environ.get("XMLMC_INTEGRATION")
INSTANCE = os.environ.get("XMLMC_INSTANCE", "")
API_KEY = os.environ.get("XMLMC_API_KEY", "")

pytestmark = pytest.mark.skipif(SKIP, reason="XMLMC_INTEGRATION not set")


def make_conn() -> XmlmcInstance:
    return XmlmcInstance(INSTANCE, api_key=API_KEY)


class TestZoneLookup:
    def test_instance_resolves(self):
        conn = make_conn()
        assert conn.zone_error is None
        assert conn.server_url

    def test_unknown_instance(self):
        assert get_endpoint_from_name("NoInstanceNameHERE") == ""


class TestInvoke:
    def test_ping_check(self):
        with make_conn() as conn:
            body = conn.invoke("system", "pingCheck")
        assert "methodCallResult" in body
        assert conn.status_code == 200
        assert conn.count == 1

    def test_json_response(self):
        with make_conn() as conn:
            conn.json_response = True
            body = conn.invoke("system", "pingCheck")
        assert body.lstrip().startswith("{")

    def test_session_info_uses_api_key(self):
        with make_conn() as conn:
            body = conn.invoke("session", "getSessionInfo")
        assert 'status="ok"' in body

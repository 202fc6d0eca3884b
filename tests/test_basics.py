"""Basic unit tests for the xmlmc package."""

from xmlmc import (
    XmlmcInstance,
    ParamBuilder,
    ZoneResolver,
    XmlmcError,
    ValidationError,
    EncodingError,
    NetworkError,
    DecodeError,
    RequestConstructionError,
    DEFAULT_TIMEOUT,
    __version__,
)


def test_version():
    assert __version__ == "0.1.0"


def test_public_exports():
    assert XmlmcInstance is not None
    assert ParamBuilder is not None
    assert ZoneResolver is not None


def test_error_hierarchy():
    for cls in (ValidationError, EncodingError, NetworkError, DecodeError, RequestConstructionError):
        assert issubclass(cls, XmlmcError)


def test_error_attributes():
    err = XmlmcError(code="test_code", message="something broke")
    assert err.code == "test_code"
    assert str(err) == "something broke"
    assert err.details is None

    net = NetworkError("Invalid HTTP Response: 503", status_code=503)
    assert net.code == "network_error"
    assert net.status_code == 503

    assert NetworkError("refused").status_code == 0
    assert ValidationError("bad").code == "validation_error"
    assert DecodeError("bad json", details={"body": "x"}).details == {"body": "x"}


def test_defaults():
    assert DEFAULT_TIMEOUT == 30

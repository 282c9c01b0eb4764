"""
Unit tests for the wire primitives.
"""

import pytest

from minihttp.errors import MethodNotValid, ParseError, VersionNotValid
from minihttp.models import Method, Status, Version


@pytest.mark.parametrize("method", list(Method))
def test_method_round_trip(method):
    assert Method.from_string(method.as_string()) is method


@pytest.mark.parametrize("version", list(Version))
def test_version_round_trip(version):
    assert Version.from_string(version.as_string()) is version


@pytest.mark.parametrize("token", ["get", "HEAD", "OPTIONS", " GET", "GET ", ""])
def test_unknown_method_rejected(token):
    with pytest.raises(MethodNotValid) as exc_info:
        Method.from_string(token)
    assert exc_info.value.token == token


@pytest.mark.parametrize("token", ["HTTP/1.0", "http/1.1", "HTTP/2.0", "HTTP/1.1\r"])
def test_unknown_version_rejected(token):
    with pytest.raises(VersionNotValid):
        Version.from_string(token)


def test_errors_are_distinct_parse_errors():
    assert issubclass(MethodNotValid, ParseError)
    assert issubclass(VersionNotValid, ParseError)
    assert not issubclass(MethodNotValid, VersionNotValid)


def test_option_is_the_canonical_token():
    assert Method.OPTION.as_string() == "OPTION"


def test_status_ok():
    assert Status.OK.as_number() == 200
    assert Status.OK.as_string() == "OK"


@pytest.mark.parametrize("status", list(Status))
def test_status_is_total(status):
    assert isinstance(status.as_number(), int)
    assert status.as_string()

"""Tests for exceptions.py — taxonomy and defensive error conversion."""
from unittest.mock import MagicMock, PropertyMock

import httpx

from topcoder_api.exceptions import (
    TopcoderError,
    UpstreamRequestError,
    convert_topcoder_api_error,
)


def _status_error(status_code, **kwargs):
    request = httpx.Request("GET", "https://api.test/v5/x")
    response = httpx.Response(status_code, request=request, **kwargs)
    return httpx.HTTPStatusError("failed", request=request, response=response)


def test_status_error_fields():
    err = convert_topcoder_api_error(_status_error(400, json={"message": "bad name"}), "Failed to create project.")

    assert isinstance(err, UpstreamRequestError)
    assert err.message == "Failed to create project."
    assert err.status_code == 400
    assert err.response_data == {"message": "bad name"}
    assert err.upstream_message == "bad name"
    assert err.kind == "upstream-request-failure"


def test_v3_nested_message():
    body = {"result": {"content": {"message": "handle not found"}}}
    err = convert_topcoder_api_error(_status_error(404, json=body), "x")
    assert err.upstream_message == "handle not found"


def test_non_json_body_falls_back_to_text():
    err = convert_topcoder_api_error(_status_error(502, text="Bad Gateway"), "x")
    assert err.response_data == "Bad Gateway"
    assert err.upstream_message is None


def test_error_without_response():
    cause = httpx.ReadTimeout("timed out")
    err = convert_topcoder_api_error(cause, "Failed to close challenge.")

    assert err.cause is cause
    assert err.status_code is None
    assert err.response_data is None


def test_plain_exception():
    cause = ValueError("Expecting value")
    err = convert_topcoder_api_error(cause, "x")
    assert err.cause is cause
    assert err.status_code is None


def test_response_that_raises_on_read():
    response = MagicMock()
    response.status_code = 500
    response.json.side_effect = RuntimeError("stream consumed")
    type(response).text = PropertyMock(side_effect=RuntimeError("stream consumed"))
    cause = MagicMock(response=response)

    err = convert_topcoder_api_error(cause, "x")
    assert err.status_code == 500
    assert err.response_data is None


def test_non_int_status_is_dropped():
    cause = MagicMock()
    cause.response.status_code = "oops"
    cause.response.json.return_value = {"message": 42}

    err = convert_topcoder_api_error(cause, "x")
    assert err.status_code is None
    assert err.upstream_message == "42"


def test_to_dict():
    err = UpstreamRequestError("x", status_code=409, upstream_message="dup")
    assert err.to_dict() == {
        "kind": "upstream-request-failure",
        "message": "x",
        "status_code": 409,
        "upstream_message": "dup",
    }


def test_base_error_chains_cause():
    cause = KeyError("k")
    err = TopcoderError("wrapped", cause)
    assert err.__cause__ is cause
    assert err.to_dict() == {"kind": "topcoder-error", "message": "wrapped"}

from __future__ import annotations

import pytest

from gumroad_client import ApiError, AuthError, GumroadError, NetworkError
from gumroad_client.request import RawResponse, classify


def _raise(raw: RawResponse) -> GumroadError:
    with pytest.raises(GumroadError) as exc:
        classify(raw, method="GET", path="/sales")
    return exc.value


def test_success_returns_full_body() -> None:
    body = {"success": True, "sale": {"id": "s1"}, "next_page_key": "abc"}
    assert classify(RawResponse(200, body)) is body


def test_success_false_on_200_is_remote_rejection() -> None:
    err = _raise(RawResponse(200, {"success": False, "message": "Invalid token"}))
    assert type(err) is ApiError
    assert err.message == "Invalid token"
    assert str(err) == "Invalid token"
    assert err.status_code == 200


def test_missing_success_flag_is_rejection() -> None:
    err = _raise(RawResponse(200, {"products": []}))
    assert isinstance(err, ApiError)
    assert err.message == "GET /sales failed with 200"


def test_truthy_but_not_true_success_is_rejection() -> None:
    err = _raise(RawResponse(200, {"success": "true"}))
    assert isinstance(err, ApiError)


def test_non_200_with_message() -> None:
    err = _raise(RawResponse(404, {"success": False, "message": "The product was not found."}, text="{}"))
    assert isinstance(err, ApiError)
    assert err.status_code == 404
    assert err.message == "The product was not found."
    assert err.details == "{}"


def test_non_200_even_with_success_flag_is_rejection() -> None:
    err = _raise(RawResponse(500, {"success": True}))
    assert err.status_code == 500


@pytest.mark.parametrize("status", [401, 403])
def test_auth_statuses_raise_auth_error(status: int) -> None:
    err = _raise(RawResponse(status, {"success": False, "message": "The access token is invalid"}))
    assert isinstance(err, AuthError)
    assert isinstance(err, ApiError)
    assert err.message == "The access token is invalid"


def test_error_field_is_used_when_message_missing() -> None:
    err = _raise(RawResponse(422, {"success": False, "error": "bad"}))
    assert err.message == "bad"


@pytest.mark.parametrize("body", [None, [], "oops", 12, {"success": False}, {"message": None}])
def test_odd_bodies_never_escape_the_error_contract(body) -> None:
    err = _raise(RawResponse(502, body))
    assert isinstance(err, ApiError)
    assert err.message == "GET /sales failed with 502"


def test_malformed_body_on_200_is_transport_failure() -> None:
    err = _raise(RawResponse(200, None, text="<html>oops</html>", parsed=False))
    assert isinstance(err, NetworkError)
    assert err.status_code is None
    assert err.details == "<html>oops</html>"


def test_malformed_body_on_error_status_keeps_status() -> None:
    err = _raise(RawResponse(503, None, text="Service Unavailable", parsed=False))
    assert isinstance(err, ApiError)
    assert err.status_code == 503
    assert err.details == "Service Unavailable"


def test_classification_is_idempotent() -> None:
    ok = RawResponse(200, {"success": True, "user": {"name": "x"}})
    assert classify(ok) == classify(ok)

    bad = RawResponse(200, {"success": False, "message": "Invalid token"})
    first = _raise(bad)
    second = _raise(bad)
    assert first == second
    assert first is not second


def test_rejection_and_transport_failure_share_accessors() -> None:
    remote = ApiError(200, "Invalid token")
    transport = NetworkError("request timed out")
    for err in (remote, transport):
        assert isinstance(err, GumroadError)
        assert isinstance(err.message, str)
        assert hasattr(err, "status_code")
        assert hasattr(err, "details")

from __future__ import annotations

import pytest

from gumroad_client import ClientConfig, RequestOptions
from gumroad_client.request import build_request, drop_absent, format_path

BASE = "https://api.gumroad.com/v2"


def test_url_is_base_path_plus_endpoint() -> None:
    req = build_request(BASE, "/products/abc", "tok")
    assert req.url == "https://api.gumroad.com/v2/products/abc"
    assert req.method == "GET"


def test_trailing_slash_on_base_path_is_ignored() -> None:
    req = build_request(BASE + "/", "/user", "tok")
    assert req.url == "https://api.gumroad.com/v2/user"


def test_access_token_always_present() -> None:
    req = build_request(BASE, "/user", "tok")
    assert req.params == {"access_token": "tok"}


@pytest.mark.parametrize(
    "params, override_params",
    [
        ({}, {"access_token": "spoofed"}),
        ({"access_token": "from-bag"}, None),
        ({"access_token": "from-bag"}, {"access_token": "spoofed", "page_key": "x"}),
        ({"a": 1}, {"access_token": None}),
    ],
)
def test_access_token_cannot_be_overridden(params, override_params) -> None:
    req = build_request(BASE, "/sales", "real-token", params, RequestOptions(params=override_params))
    assert req.params["access_token"] == "real-token"


def test_absent_values_are_omitted() -> None:
    req = build_request(BASE, "/sales/1/mark_as_shipped", "tok", {"tracking_url": None, "keep": ""})
    assert "tracking_url" not in req.params
    assert req.params["keep"] == ""


def test_override_params_win_on_collision() -> None:
    req = build_request(
        BASE,
        "/sales",
        "tok",
        {"email": "a@example.com", "after": "2024-01-01"},
        RequestOptions(params={"email": "b@example.com"}),
    )
    assert req.params == {"access_token": "tok", "email": "b@example.com", "after": "2024-01-01"}


def test_override_can_drop_a_bag_value_with_none() -> None:
    req = build_request(BASE, "/sales", "tok", {"email": "a@example.com"}, RequestOptions(params={"email": None}))
    assert "email" not in req.params


def test_method_override_and_normalization() -> None:
    assert build_request(BASE, "/x", "tok", options=RequestOptions(method="put")).method == "PUT"
    with pytest.raises(ValueError):
        build_request(BASE, "/x", "tok", options=RequestOptions(method="PATCH"))


def test_content_type_header_and_overrides() -> None:
    req = build_request(BASE, "/x", "tok")
    assert req.headers == {"Content-type": "application/json"}

    req = build_request(
        BASE,
        "/x",
        "tok",
        options=RequestOptions(headers={"Content-type": "text/plain", "X-Trace": "1"}),
    )
    assert req.headers == {"Content-type": "text/plain", "X-Trace": "1"}


def test_timeout_is_passed_through() -> None:
    req = build_request(BASE, "/x", "tok", options=RequestOptions(timeout=2.5))
    assert req.timeout == 2.5


def test_builder_does_not_mutate_inputs() -> None:
    bag = {"email": "a@example.com", "tracking_url": None}
    opts = RequestOptions(params={"access_token": "spoofed"})
    build_request(BASE, "/sales", "tok", bag, opts)
    assert bag == {"email": "a@example.com", "tracking_url": None}
    assert opts.params == {"access_token": "spoofed"}


def test_drop_absent() -> None:
    assert drop_absent(None) == {}
    assert drop_absent({"a": None, "b": 0, "c": False}) == {"b": 0, "c": False}


def test_format_path_percent_encodes_segments() -> None:
    path = format_path("/products/{}/custom_fields/{}", "p1", "Shirt size/colour")
    assert path == "/products/p1/custom_fields/Shirt%20size%2Fcolour"


def test_format_path_accepts_non_string_ids() -> None:
    assert format_path("/sales/{}", 42) == "/sales/42"


def test_client_config_requires_token() -> None:
    with pytest.raises(ValueError):
        ClientConfig(access_token="")
    with pytest.raises(ValueError):
        ClientConfig(access_token="   ")


def test_client_config_defaults_base_path() -> None:
    cfg = ClientConfig(access_token="tok", base_path="")
    assert cfg.base_path == "https://api.gumroad.com/v2"

"""Declarative map of client operations to Gumroad API endpoints.

Each entry names the HTTP method, the path template (``{}`` slots are filled
with percent-encoded path segments) and how the payload is pulled out of a
successful response body. API reference: https://app.gumroad.com/api
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping

Extractor = Callable[[Mapping[str, Any]], Any]


def field(name: str) -> Extractor:
    def _extract(body: Mapping[str, Any]) -> Any:
        return body.get(name)

    return _extract


def fields(*names: str) -> Extractor:
    def _extract(body: Mapping[str, Any]) -> dict[str, Any]:
        return {name: body.get(name) for name in names}

    return _extract


def listing(name: str) -> Extractor:
    def _extract(body: Mapping[str, Any]) -> list[Any]:
        value = body.get(name)
        return list(value) if isinstance(value, list) else []

    return _extract


def acknowledge(body: Mapping[str, Any]) -> dict[str, Any]:
    return {"message": body.get("message")}


def whole_body(body: Mapping[str, Any]) -> Mapping[str, Any]:
    return body


@dataclass(frozen=True)
class Endpoint:
    method: str
    path: str
    extract: Extractor = whole_body


_PRODUCT = "/products/{}"
_VARIANT_CATEGORIES = "/products/{}/variant_categories"
_VARIANT_CATEGORY = "/products/{}/variant_categories/{}"
_VARIANTS = "/products/{}/variant_categories/{}/variants"
_VARIANT = "/products/{}/variant_categories/{}/variants/{}"
_OFFER_CODES = "/products/{}/offer_codes"
_OFFER_CODE = "/products/{}/offer_codes/{}"
_CUSTOM_FIELDS = "/products/{}/custom_fields"
_CUSTOM_FIELD = "/products/{}/custom_fields/{}"
_LICENSE = fields("purchase", "uses")

ENDPOINTS: dict[str, Endpoint] = {
    # products
    "get_products": Endpoint("GET", "/products", listing("products")),
    "get_product": Endpoint("GET", _PRODUCT, field("product")),
    "delete_product": Endpoint("DELETE", _PRODUCT, acknowledge),
    "enable_product": Endpoint("PUT", _PRODUCT + "/enable", field("product")),
    "disable_product": Endpoint("PUT", _PRODUCT + "/disable", field("product")),
    # variant categories
    "create_variant_category": Endpoint("POST", _VARIANT_CATEGORIES, field("variant_category")),
    "get_variant_category": Endpoint("GET", _VARIANT_CATEGORY, field("variant_category")),
    "update_variant_category": Endpoint("PUT", _VARIANT_CATEGORY, field("variant_category")),
    "delete_variant_category": Endpoint("DELETE", _VARIANT_CATEGORY, acknowledge),
    "get_variant_categories": Endpoint("GET", _VARIANT_CATEGORIES, listing("variant_categories")),
    # variants
    "create_variant": Endpoint("POST", _VARIANTS, field("variant")),
    "get_variant": Endpoint("GET", _VARIANT, field("variant")),
    "update_variant": Endpoint("PUT", _VARIANT, field("variant")),
    "delete_variant": Endpoint("DELETE", _VARIANT, acknowledge),
    "get_variants": Endpoint("GET", _VARIANTS, listing("variants")),
    # offer codes
    "get_offer_codes": Endpoint("GET", _OFFER_CODES, listing("offer_codes")),
    "get_offer_code": Endpoint("GET", _OFFER_CODE, field("offer_code")),
    "create_offer_code": Endpoint("POST", _OFFER_CODES, field("offer_code")),
    "update_offer_code": Endpoint("PUT", _OFFER_CODE, field("offer_code")),
    "delete_offer_code": Endpoint("DELETE", _OFFER_CODE, acknowledge),
    # custom fields
    "get_custom_fields": Endpoint("GET", _CUSTOM_FIELDS, listing("custom_fields")),
    "create_custom_field": Endpoint("POST", _CUSTOM_FIELDS, field("custom_field")),
    "update_custom_field": Endpoint("PUT", _CUSTOM_FIELD, field("custom_field")),
    "delete_custom_field": Endpoint("DELETE", _CUSTOM_FIELD, acknowledge),
    # user
    "get_user": Endpoint("GET", "/user", field("user")),
    # resource subscriptions (webhooks)
    "subscribe_to_resource": Endpoint("PUT", "/resource_subscriptions", field("resource_subscription")),
    "get_resource_subscriptions": Endpoint("GET", "/resource_subscriptions", listing("resource_subscriptions")),
    "unsubscribe_from_resource": Endpoint("DELETE", "/resource_subscriptions/{}", acknowledge),
    # sales
    "get_sales": Endpoint("GET", "/sales", fields("sales", "next_page_url", "next_page_key")),
    "get_sales_page": Endpoint("GET", "/sales"),
    "get_sale": Endpoint("GET", "/sales/{}", field("sale")),
    "mark_sale_as_shipped": Endpoint("PUT", "/sales/{}/mark_as_shipped", field("sale")),
    "refund_sale": Endpoint("PUT", "/sales/{}/refund", field("sale")),
    # subscribers
    "get_product_subscribers": Endpoint("GET", _PRODUCT + "/subscribers", listing("subscribers")),
    "get_subscriber": Endpoint("GET", "/subscribers/{}", field("subscriber")),
    # licenses
    "verify_license": Endpoint("POST", "/licenses/verify", _LICENSE),
    "enable_license": Endpoint("PUT", "/licenses/enable", _LICENSE),
    "disable_license": Endpoint("PUT", "/licenses/disable", _LICENSE),
}

from __future__ import annotations

from dataclasses import replace
from typing import Any, AsyncIterator, Mapping

from .config_types import DEFAULT_BASE_PATH, ClientConfig, RequestOptions
from .endpoints import ENDPOINTS
from .errors import GumroadError, NetworkError
from .pagination import Page, iter_items, paginate
from .request import build_request, classify, format_path
from .transport import HttpxTransport, Transport


class GumroadClient:
    def __init__(
            self,
            access_token: str | None = None,
            *,
            base_path: str | None = None,
            timeout_s: float = 15.0,
            cfg: ClientConfig | None = None,
            transport: Transport | None = None,
    ):
        self._cfg = cfg or ClientConfig(
            access_token=access_token or "",
            base_path=base_path or DEFAULT_BASE_PATH,
            timeout_s=timeout_s,
        )
        self._t = transport or HttpxTransport(self._cfg)

    @classmethod
    def from_config(cls, cfg: ClientConfig, *, transport: Transport | None = None) -> "GumroadClient":
        return cls(cfg=cfg, transport=transport)

    @property
    def config(self) -> ClientConfig:
        return self._cfg

    async def aclose(self) -> None:
        await self._t.aclose()

    async def __aenter__(self) -> "GumroadClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def request(
            self,
            path: str,
            *,
            params: Mapping[str, Any] | None = None,
            options: RequestOptions | None = None,
    ) -> dict[str, Any]:
        """Send one authenticated call and return the full success body."""
        descriptor = build_request(self._cfg.base_path, path, self._cfg.access_token, params, options)
        try:
            raw = await self._t.execute(descriptor)
        except GumroadError:
            raise
        except Exception as e:
            raise NetworkError(str(e) or type(e).__name__) from e
        return classify(raw, method=descriptor.method, path=path)

    async def _call(
            self,
            name: str,
            *segments: Any,
            params: Mapping[str, Any] | None = None,
            options: RequestOptions | None = None,
    ) -> Any:
        endpoint = ENDPOINTS[name]
        options = options or RequestOptions()
        options = replace(options, method=options.method or endpoint.method)
        body = await self.request(format_path(endpoint.path, *segments), params=params, options=options)
        return endpoint.extract(body)

    # --- products ---
    async def get_products(self, *, options: RequestOptions | None = None) -> list[dict[str, Any]]:
        """GET /products"""
        return await self._call("get_products", options=options)

    async def get_product(self, product_id: str, *, options: RequestOptions | None = None) -> dict[str, Any]:
        """GET /products/:id"""
        return await self._call("get_product", product_id, options=options)

    async def delete_product(self, product_id: str, *, options: RequestOptions | None = None) -> dict[str, Any]:
        """DELETE /products/:id"""
        return await self._call("delete_product", product_id, options=options)

    async def enable_product(self, product_id: str, *, options: RequestOptions | None = None) -> dict[str, Any]:
        """PUT /products/:id/enable"""
        return await self._call("enable_product", product_id, options=options)

    async def disable_product(self, product_id: str, *, options: RequestOptions | None = None) -> dict[str, Any]:
        """PUT /products/:id/disable"""
        return await self._call("disable_product", product_id, options=options)

    # --- variant categories ---
    async def create_variant_category(
            self,
            product_id: str,
            params: Mapping[str, Any] | None = None,
            *,
            options: RequestOptions | None = None,
    ) -> dict[str, Any]:
        """POST /products/:product_id/variant_categories"""
        return await self._call("create_variant_category", product_id, params=params, options=options)

    async def get_variant_category(
            self,
            product_id: str,
            variant_category_id: str,
            *,
            options: RequestOptions | None = None,
    ) -> dict[str, Any]:
        """GET /products/:product_id/variant_categories/:id"""
        return await self._call("get_variant_category", product_id, variant_category_id, options=options)

    async def update_variant_category(
            self,
            product_id: str,
            variant_category_id: str,
            params: Mapping[str, Any] | None = None,
            *,
            options: RequestOptions | None = None,
    ) -> dict[str, Any]:
        """PUT /products/:product_id/variant_categories/:id"""
        return await self._call(
            "update_variant_category", product_id, variant_category_id, params=params, options=options
        )

    async def delete_variant_category(
            self,
            product_id: str,
            variant_category_id: str,
            *,
            options: RequestOptions | None = None,
    ) -> dict[str, Any]:
        """DELETE /products/:product_id/variant_categories/:id"""
        return await self._call("delete_variant_category", product_id, variant_category_id, options=options)

    async def get_variant_categories(
            self,
            product_id: str,
            *,
            options: RequestOptions | None = None,
    ) -> list[dict[str, Any]]:
        """GET /products/:product_id/variant_categories"""
        return await self._call("get_variant_categories", product_id, options=options)

    # --- variants ---
    async def create_variant(
            self,
            product_id: str,
            variant_category_id: str,
            params: Mapping[str, Any] | None = None,
            *,
            options: RequestOptions | None = None,
    ) -> dict[str, Any]:
        """POST /products/:product_id/variant_categories/:variant_category_id/variants"""
        return await self._call("create_variant", product_id, variant_category_id, params=params, options=options)

    async def get_variant(
            self,
            product_id: str,
            variant_category_id: str,
            variant_id: str,
            *,
            options: RequestOptions | None = None,
    ) -> dict[str, Any]:
        """GET /products/:product_id/variant_categories/:variant_category_id/variants/:id"""
        return await self._call("get_variant", product_id, variant_category_id, variant_id, options=options)

    async def update_variant(
            self,
            product_id: str,
            variant_category_id: str,
            variant_id: str,
            params: Mapping[str, Any] | None = None,
            *,
            options: RequestOptions | None = None,
    ) -> dict[str, Any]:
        """PUT /products/:product_id/variant_categories/:variant_category_id/variants/:id"""
        return await self._call(
            "update_variant", product_id, variant_category_id, variant_id, params=params, options=options
        )

    async def delete_variant(
            self,
            product_id: str,
            variant_category_id: str,
            variant_id: str,
            *,
            options: RequestOptions | None = None,
    ) -> dict[str, Any]:
        """DELETE /products/:product_id/variant_categories/:variant_category_id/variants/:id"""
        return await self._call("delete_variant", product_id, variant_category_id, variant_id, options=options)

    async def get_variants(
            self,
            product_id: str,
            variant_category_id: str,
            *,
            options: RequestOptions | None = None,
    ) -> list[dict[str, Any]]:
        """GET /products/:product_id/variant_categories/:variant_category_id/variants"""
        return await self._call("get_variants", product_id, variant_category_id, options=options)

    # --- offer codes ---
    async def get_offer_codes(self, product_id: str, *, options: RequestOptions | None = None) -> list[dict[str, Any]]:
        """GET /products/:product_id/offer_codes

        Each code carries either ``amount_cents`` or ``percent_off``.
        """
        return await self._call("get_offer_codes", product_id, options=options)

    async def get_offer_code(
            self,
            product_id: str,
            offer_code_id: str,
            *,
            options: RequestOptions | None = None,
    ) -> dict[str, Any]:
        """GET /products/:product_id/offer_codes/:id"""
        return await self._call("get_offer_code", product_id, offer_code_id, options=options)

    async def create_offer_code(
            self,
            product_id: str,
            params: Mapping[str, Any] | None = None,
            *,
            options: RequestOptions | None = None,
    ) -> dict[str, Any]:
        """POST /products/:product_id/offer_codes (amounts are in cents unless ``offer_type`` says otherwise)"""
        return await self._call("create_offer_code", product_id, params=params, options=options)

    async def update_offer_code(
            self,
            product_id: str,
            offer_code_id: str,
            params: Mapping[str, Any] | None = None,
            *,
            options: RequestOptions | None = None,
    ) -> dict[str, Any]:
        """PUT /products/:product_id/offer_codes/:id"""
        return await self._call("update_offer_code", product_id, offer_code_id, params=params, options=options)

    async def delete_offer_code(
            self,
            product_id: str,
            offer_code_id: str,
            *,
            options: RequestOptions | None = None,
    ) -> dict[str, Any]:
        """DELETE /products/:product_id/offer_codes/:id"""
        return await self._call("delete_offer_code", product_id, offer_code_id, options=options)

    # --- custom fields ---
    async def get_custom_fields(self, product_id: str, *, options: RequestOptions | None = None) -> list[dict[str, Any]]:
        """GET /products/:product_id/custom_fields"""
        return await self._call("get_custom_fields", product_id, options=options)

    async def create_custom_field(
            self,
            product_id: str,
            params: Mapping[str, Any] | None = None,
            *,
            options: RequestOptions | None = None,
    ) -> dict[str, Any]:
        """POST /products/:product_id/custom_fields"""
        return await self._call("create_custom_field", product_id, params=params, options=options)

    async def update_custom_field(
            self,
            product_id: str,
            name: str,
            params: Mapping[str, Any] | None = None,
            *,
            options: RequestOptions | None = None,
    ) -> dict[str, Any]:
        """PUT /products/:product_id/custom_fields/:name"""
        return await self._call("update_custom_field", product_id, name, params=params, options=options)

    async def delete_custom_field(
            self,
            product_id: str,
            name: str,
            *,
            options: RequestOptions | None = None,
    ) -> dict[str, Any]:
        """DELETE /products/:product_id/custom_fields/:name"""
        return await self._call("delete_custom_field", product_id, name, options=options)

    # --- user ---
    async def get_user(self, *, options: RequestOptions | None = None) -> dict[str, Any]:
        """GET /user"""
        return await self._call("get_user", options=options)

    # --- resource subscriptions ---
    async def subscribe_to_resource(
            self,
            resource_name: str,
            post_url: str,
            *,
            options: RequestOptions | None = None,
    ) -> dict[str, Any]:
        """PUT /resource_subscriptions"""
        params = {"resource_name": resource_name, "post_url": post_url}
        return await self._call("subscribe_to_resource", params=params, options=options)

    async def get_resource_subscriptions(
            self,
            resource_name: str,
            *,
            options: RequestOptions | None = None,
    ) -> list[dict[str, Any]]:
        """GET /resource_subscriptions"""
        return await self._call("get_resource_subscriptions", params={"resource_name": resource_name}, options=options)

    async def unsubscribe_from_resource(
            self,
            resource_subscription_id: str,
            *,
            options: RequestOptions | None = None,
    ) -> dict[str, Any]:
        """DELETE /resource_subscriptions/:resource_subscription_id"""
        return await self._call("unsubscribe_from_resource", resource_subscription_id, options=options)

    # --- sales (view_sales scope) ---
    async def get_sales(
            self,
            params: Mapping[str, Any] | None = None,
            *,
            options: RequestOptions | None = None,
    ) -> dict[str, Any]:
        """GET /sales

        Returns ``sales`` plus the raw ``next_page_url`` / ``next_page_key`` of the
        response; prefer :meth:`get_sales_page` to walk further pages.
        """
        return await self._call("get_sales", params=params, options=options)

    async def get_sales_page(
            self,
            params: Mapping[str, Any] | None = None,
            *,
            options: RequestOptions | None = None,
    ) -> Page:
        """GET /sales as a :class:`Page` whose ``fetch_next`` follows ``next_page_key``."""
        params = dict(params or {})

        async def _fetch(page_params: dict[str, Any]) -> Page:
            return await self.get_sales_page(page_params, options=options)

        body = await self._call("get_sales_page", params=params, options=options)
        return paginate(_fetch, params, body, "sales")

    async def iter_sales(
            self,
            params: Mapping[str, Any] | None = None,
            *,
            options: RequestOptions | None = None,
    ) -> AsyncIterator[dict[str, Any]]:
        first = await self.get_sales_page(params, options=options)
        async for sale in iter_items(first):
            yield sale

    async def get_sale(self, sale_id: str, *, options: RequestOptions | None = None) -> dict[str, Any]:
        """GET /sales/:id"""
        return await self._call("get_sale", sale_id, options=options)

    async def mark_sale_as_shipped(
            self,
            sale_id: str,
            tracking_url: str | None = None,
            *,
            options: RequestOptions | None = None,
    ) -> dict[str, Any]:
        """PUT /sales/:id/mark_as_shipped (mark_sales_as_shipped scope)"""
        return await self._call("mark_sale_as_shipped", sale_id, params={"tracking_url": tracking_url}, options=options)

    async def refund_sale(
            self,
            sale_id: str,
            amount_cents: int | None = None,
            *,
            options: RequestOptions | None = None,
    ) -> dict[str, Any]:
        """PUT /sales/:id/refund (refund_sales scope); omit ``amount_cents`` for a full refund"""
        return await self._call("refund_sale", sale_id, params={"amount_cents": amount_cents}, options=options)

    # --- subscribers (view_sales scope) ---
    async def get_product_subscribers(
            self,
            product_id: str,
            email: str | None = None,
            *,
            options: RequestOptions | None = None,
    ) -> list[dict[str, Any]]:
        """GET /products/:product_id/subscribers"""
        return await self._call("get_product_subscribers", product_id, params={"email": email}, options=options)

    async def get_subscriber(self, subscriber_id: str, *, options: RequestOptions | None = None) -> dict[str, Any]:
        """GET /subscribers/:id"""
        return await self._call("get_subscriber", subscriber_id, options=options)

    # --- licenses ---
    async def verify_license(
            self,
            product_id: str,
            license_key: str,
            increment_uses_count: bool = True,
            *,
            options: RequestOptions | None = None,
    ) -> dict[str, Any]:
        """POST /licenses/verify"""
        params = {
            "product_id": product_id,
            "license_key": license_key,
            "increment_uses_count": increment_uses_count is not False,
        }
        return await self._call("verify_license", params=params, options=options)

    async def enable_license(
            self,
            product_id: str,
            license_key: str,
            *,
            options: RequestOptions | None = None,
    ) -> dict[str, Any]:
        """PUT /licenses/enable"""
        params = {"product_id": product_id, "license_key": license_key}
        return await self._call("enable_license", params=params, options=options)

    async def disable_license(
            self,
            product_id: str,
            license_key: str,
            *,
            options: RequestOptions | None = None,
    ) -> dict[str, Any]:
        """PUT /licenses/disable"""
        params = {"product_id": product_id, "license_key": license_key}
        return await self._call("disable_license", params=params, options=options)

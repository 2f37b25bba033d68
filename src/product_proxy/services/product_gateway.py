"""Gateway to the upstream object API that stores products."""

import logging
import time
from typing import Any, Iterable, Sequence
from urllib.parse import quote

import httpx
from pydantic import TypeAdapter

from product_proxy.core.exceptions import (
    UnexpectedUpstreamResponseError,
    UpstreamUnavailableError,
)
from product_proxy.middleware.metrics import record_upstream_call
from product_proxy.schemas.product import (
    Product,
    ProductCreate,
    ProductPatch,
    ProductUpdate,
)

logger = logging.getLogger(__name__)

COLLECTION_PATH = "/objects"
NOT_FOUND_STATUSES = (404, 410)

_product_list_adapter = TypeAdapter(list[Product])


def _check_paging(page: int, page_size: int) -> None:
    if page < 1 or page_size < 1:
        raise ValueError("page and page_size must be greater than zero")


def filter_and_paginate(
    products: Sequence[Product],
    name: str | None,
    page: int,
    page_size: int,
) -> list[Product]:
    """Filter products by name substring, then slice out one page.

    Args:
        products: Products in upstream order
        name: Case-insensitive substring to match; blank means no filter
        page: 1-based page number
        page_size: Maximum number of items per page

    Returns:
        The requested page, preserving upstream order
    """
    _check_paging(page, page_size)

    if name and name.strip():
        needle = name.lower()
        products = [p for p in products if needle in p.name.lower()]

    start = (page - 1) * page_size
    return list(products[start:start + page_size])


def _item_path(product_id: str) -> str:
    return f"{COLLECTION_PATH}/{quote(product_id, safe='')}"


class ProductGateway:
    """Issues exactly one upstream call per product operation."""

    def __init__(self, client: httpx.AsyncClient, errors_as_not_found: bool = False):
        self.client = client
        # Legacy get-one behaviour: any request failure reads as "absent"
        self.errors_as_not_found = errors_as_not_found

    async def get_all(
        self,
        name: str | None = None,
        page: int = 1,
        page_size: int = 10,
    ) -> list[Product]:
        """Fetch the whole upstream collection, then filter and paginate locally."""
        _check_paging(page, page_size)
        response = await self._request("list", "GET", COLLECTION_PATH)
        self._ensure_success(response, "list")
        products = self._parse_products(response, "list")
        return filter_and_paginate(products, name, page, page_size)

    async def get_by_ids(self, ids: Iterable[str]) -> list[Product]:
        """Fetch several products in one call (``/objects?id=a&id=b``).

        Ids unknown upstream are simply absent from the result.
        """
        params = [("id", product_id) for product_id in ids]
        response = await self._request("batch", "GET", COLLECTION_PATH, params=params)
        self._ensure_success(response, "batch")
        return self._parse_products(response, "batch")

    async def get_by_id(self, product_id: str) -> Product | None:
        """Fetch one product; ``None`` when upstream does not have it."""
        try:
            response = await self._request("get", "GET", _item_path(product_id))
            if response.status_code in NOT_FOUND_STATUSES:
                return None
            self._ensure_success(response, "get")
        except UpstreamUnavailableError as e:
            if not self.errors_as_not_found:
                raise
            logger.warning(f"Treating failed lookup of product {product_id} as not found: {e}")
            return None

        payload = self._decode(response, "get")
        if payload is None:
            return None
        return self._to_product(payload, "get")

    async def create(self, product_data: ProductCreate) -> Product:
        response = await self._request(
            "create", "POST", COLLECTION_PATH, json=product_data.model_dump()
        )
        self._ensure_success(response, "create")
        return self._parse_product(response, "create")

    async def update(self, product_id: str, product_data: ProductUpdate) -> Product:
        """Replace name and data of an existing product."""
        response = await self._request(
            "update", "PUT", _item_path(product_id), json=product_data.model_dump()
        )
        self._ensure_success(response, "update")
        return self._parse_product(response, "update")

    async def patch(self, product_id: str, product_data: ProductPatch) -> Product:
        """Send only the supplied fields; upstream replaces ``data`` wholesale."""
        response = await self._request(
            "patch", "PATCH", _item_path(product_id), json=product_data.to_upstream()
        )
        self._ensure_success(response, "patch")
        return self._parse_product(response, "patch")

    async def delete(self, product_id: str) -> bool:
        """Delete a product.

        Returns:
            True if upstream reported success, False otherwise
        """
        response = await self._request("delete", "DELETE", _item_path(product_id))
        if not response.is_success:
            logger.info(f"Upstream refused delete of product {product_id}: {response.status_code}")
        return response.is_success

    async def _request(self, operation: str, method: str, url: str, **kwargs: Any) -> httpx.Response:
        start_time = time.perf_counter()
        try:
            response = await self.client.request(method, url, **kwargs)
        except httpx.RequestError as e:
            record_upstream_call(operation, "error", time.perf_counter() - start_time)
            logger.error(f"Upstream {method} {url} failed: {e!r}")
            raise UpstreamUnavailableError(f"{method} {url} failed: {e}") from e

        if response.is_success:
            outcome = "success"
        elif response.status_code in NOT_FOUND_STATUSES:
            outcome = "not_found"
        else:
            outcome = "error"
        record_upstream_call(operation, outcome, time.perf_counter() - start_time)
        return response

    def _ensure_success(self, response: httpx.Response, operation: str) -> None:
        if response.is_success:
            return
        logger.warning(
            f"Upstream {operation} returned {response.status_code} for {response.request.url}"
        )
        raise UpstreamUnavailableError(
            f"Upstream {operation} returned {response.status_code}",
            upstream_status=response.status_code,
        )

    def _decode(self, response: httpx.Response, operation: str) -> Any:
        """Decode a JSON body; an empty body decodes to ``None``."""
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Upstream {operation} returned a non-JSON body: {e}")
            raise UnexpectedUpstreamResponseError(
                f"Non-JSON body from upstream {operation}"
            ) from e

    def _parse_products(self, response: httpx.Response, operation: str) -> list[Product]:
        payload = self._decode(response, operation)
        if payload is None:
            return []
        try:
            return _product_list_adapter.validate_python(payload)
        except ValueError as e:
            logger.error(f"Upstream {operation} returned an invalid product list: {e}")
            raise UnexpectedUpstreamResponseError(
                f"Invalid product list from upstream {operation}"
            ) from e

    def _parse_product(self, response: httpx.Response, operation: str) -> Product:
        payload = self._decode(response, operation)
        if payload is None:
            raise UnexpectedUpstreamResponseError(f"Empty body from upstream {operation}")
        return self._to_product(payload, operation)

    def _to_product(self, payload: Any, operation: str) -> Product:
        try:
            return Product.model_validate(payload)
        except ValueError as e:
            logger.error(f"Upstream {operation} returned an invalid product: {e}")
            raise UnexpectedUpstreamResponseError(
                f"Invalid product from upstream {operation}"
            ) from e

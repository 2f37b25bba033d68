"""Pytest configuration and fixtures for testing."""

import json
from typing import Generator

import httpx
import pytest
from fastapi.testclient import TestClient

from product_proxy.api.deps import get_product_gateway
from product_proxy.main import app
from product_proxy.services.product_gateway import ProductGateway

UPSTREAM_BASE_URL = "https://upstream.test"


class FakeObjectStore:
    """In-memory object API served through ``httpx.MockTransport``.

    Mirrors the upstream wire format: ``/objects`` and ``/objects/{id}``,
    repeated ``id`` query params for batch reads, 404 for unknown ids.
    """

    def __init__(self, products: list[dict]):
        self.products = {p["id"]: dict(p) for p in products}
        self.requests: list[httpx.Request] = []
        self.error: Exception | None = None
        self.status_override: int | None = None
        self._next_id = 100

    @property
    def call_count(self) -> int:
        return len(self.requests)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if self.status_override is not None:
            return httpx.Response(self.status_override, json={"error": "upstream failure"})

        path = request.url.path
        if path == "/objects":
            return self._handle_collection(request)

        product_id = path.removeprefix("/objects/")
        if product_id not in self.products:
            return httpx.Response(
                404, json={"error": f"Object with id={product_id} was not found."}
            )

        if request.method == "GET":
            return httpx.Response(200, json=self.products[product_id])
        if request.method == "PUT":
            body = json.loads(request.content)
            product = {
                "id": product_id,
                "name": body.get("name"),
                "data": body.get("data"),
                "updatedAt": "2026-10-18T12:30:00.000Z",
            }
            self.products[product_id] = product
            return httpx.Response(200, json=product)
        if request.method == "PATCH":
            body = json.loads(request.content)
            product = {**self.products[product_id], **body, "updatedAt": "2026-10-18T12:45:00.000Z"}
            self.products[product_id] = product
            return httpx.Response(200, json=product)
        if request.method == "DELETE":
            del self.products[product_id]
            return httpx.Response(
                200, json={"message": f"Object with id = {product_id} has been deleted."}
            )
        return httpx.Response(405)

    def _handle_collection(self, request: httpx.Request) -> httpx.Response:
        if request.method == "GET":
            ids = request.url.params.get_list("id")
            if ids:
                found = [p for pid, p in self.products.items() if pid in ids]
                return httpx.Response(200, json=found)
            return httpx.Response(200, json=list(self.products.values()))
        if request.method == "POST":
            body = json.loads(request.content)
            self._next_id += 1
            product = {
                "id": f"ff808181{self._next_id}",
                "name": body["name"],
                "data": body.get("data"),
                "createdAt": "2026-10-18T12:00:00.000Z",
            }
            self.products[product["id"]] = product
            return httpx.Response(200, json=product)
        return httpx.Response(405)


@pytest.fixture
def upstream_products() -> list[dict]:
    """Sample of the public mock object collection."""
    return [
        {"id": "1", "name": "Google Pixel 6 Pro", "data": {"color": "Cloudy White", "capacity": "128 GB"}},
        {"id": "2", "name": "Apple iPhone 12 Mini, 256GB, Blue", "data": None},
        {"id": "3", "name": "Apple iPhone 12 Pro Max", "data": {"color": "Cloudy White", "capacity GB": 512}},
        {"id": "4", "name": "Apple iPhone 11, 64GB", "data": {"price": 389.99, "color": "Purple"}},
        {"id": "5", "name": "Samsung Galaxy Z Fold2", "data": {"price": 689.99, "color": "Brown"}},
        {"id": "6", "name": "Apple AirPods", "data": {"generation": "3rd", "price": 120}},
        {"id": "7", "name": "Apple MacBook Pro 16", "data": {"year": 2019, "price": 1849.99}},
    ]


@pytest.fixture
def object_store(upstream_products: list[dict]) -> FakeObjectStore:
    return FakeObjectStore(upstream_products)


@pytest.fixture
def gateway(object_store: FakeObjectStore) -> ProductGateway:
    client = httpx.AsyncClient(transport=object_store.transport(), base_url=UPSTREAM_BASE_URL)
    return ProductGateway(client)


@pytest.fixture
def legacy_gateway(object_store: FakeObjectStore) -> ProductGateway:
    """Gateway that treats every failed get-one as not found."""
    client = httpx.AsyncClient(transport=object_store.transport(), base_url=UPSTREAM_BASE_URL)
    return ProductGateway(client, errors_as_not_found=True)


@pytest.fixture
def client(gateway: ProductGateway) -> Generator[TestClient, None, None]:
    """Test client whose product routes talk to the fake object store."""
    app.dependency_overrides[get_product_gateway] = lambda: gateway
    yield TestClient(app)
    app.dependency_overrides.clear()

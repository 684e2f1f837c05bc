import os
import sys
from typing import Any, Dict, List

import httpx
import pytest
from fastapi.testclient import TestClient

# Ensure project root is on sys.path for `import app`
_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if _ROOT not in sys.path:
    sys.path.insert(0, _ROOT)

os.environ.setdefault("BC_STORE_HASH", "teststore")
os.environ.setdefault("BC_TOKEN", "bc_test")
os.environ.setdefault("SHOPIFY_STORE", "test-shop")
os.environ.setdefault("SHOPIFY_ADMIN_TOKEN", "shpat_test")

from app.main import app
from app.api import deps
from app.models.migration import ItemOutcome, ItemState, MigrationReport
from app.services.bigcommerce_service import BigCommerceService
from app.services.migration_service import MigrationService
from app.services.shopify_service import ShopifyService


class FakeApi:
    """Routes mock-transport requests by method and path suffix.

    A route holds a queue of replies; the last reply repeats. A reply is an
    httpx.Response, a JSON-able body (sent with 200), an exception to raise,
    or a callable taking the request.
    """

    def __init__(self):
        self.routes: Dict[tuple, List[Any]] = {}
        self.calls: List[httpx.Request] = []

    def on(self, method: str, path: str, *replies: Any) -> "FakeApi":
        self.routes[(method.upper(), path)] = list(replies)
        return self

    def calls_to(self, method: str, path: str) -> List[httpx.Request]:
        return [r for r in self.calls if r.method == method.upper() and r.url.path.endswith(path)]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        # Longest matching suffix wins so /products.json and /products/1.json stay apart
        matches = [key for key in self.routes if key[0] == request.method and request.url.path.endswith(key[1])]
        if not matches:
            return httpx.Response(404, json={"errors": "not found"})
        key = max(matches, key=lambda k: len(k[1]))
        queue = self.routes[key]
        reply = queue.pop(0) if len(queue) > 1 else queue[0]
        if callable(reply) and not isinstance(reply, httpx.Response):
            reply = reply(request)
        if isinstance(reply, Exception):
            raise reply
        if isinstance(reply, httpx.Response):
            # replies repeat, so hand the transport a fresh response each time
            return httpx.Response(reply.status_code, headers=reply.headers, content=reply.content)
        return httpx.Response(200, json=reply)


def mock_client(api: FakeApi) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(api.handler))


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def bc_api() -> FakeApi:
    return FakeApi()


@pytest.fixture
def shopify_api() -> FakeApi:
    return FakeApi()


@pytest.fixture
def bigcommerce(bc_api) -> BigCommerceService:
    return BigCommerceService(client=mock_client(bc_api), page_size=2)


@pytest.fixture
def shopify(shopify_api) -> ShopifyService:
    return ShopifyService(client=mock_client(shopify_api), min_interval=0)


@pytest.fixture
def migration(bigcommerce, shopify) -> MigrationService:
    return MigrationService(bigcommerce=bigcommerce, shopify=shopify, rate_delay=0, metafield_batch_size=2)


class _FakeBigCommerce:
    async def test_connection(self) -> bool:
        return True


class _FakeShopify:
    async def test_connection(self) -> bool:
        return True


class _FakeMigration:
    is_running = False

    async def run(self) -> MigrationReport:
        report = MigrationReport(total_products=2, execution_time=0.01)
        report.record(ItemOutcome(index=1, name="Shirt", source_id=10, shopify_id=111, state=ItemState.DONE))
        report.record(ItemOutcome(index=2, name="Hat", source_id=11, state=ItemState.FAILED,
                                  error="Product creation failed"))
        return report


@pytest.fixture(autouse=True)
def _override_dependencies():
    app.dependency_overrides[deps.get_bigcommerce_service] = lambda: _FakeBigCommerce()
    app.dependency_overrides[deps.get_shopify_service] = lambda: _FakeShopify()
    app.dependency_overrides[deps.get_migration_service] = lambda: _FakeMigration()
    yield
    app.dependency_overrides.clear()


@pytest.fixture()
def client():
    return TestClient(app)

import httpx
import pytest


def _page(start: int, count: int):
    return {"data": [{"id": start + i, "name": f"P{start + i}"} for i in range(count)], "meta": {}}


@pytest.mark.anyio
async def test_fetch_all_products_stops_at_first_empty_page(bigcommerce, bc_api):
    # page size 2: pages of [2, 2, 3, 0] items
    bc_api.on("GET", "/catalog/products", _page(1, 2), _page(3, 2), _page(5, 3), {"data": []})

    products = await bigcommerce.fetch_all_products()

    assert [p["id"] for p in products] == [1, 2, 3, 4, 5, 6, 7]
    calls = bc_api.calls_to("GET", "/catalog/products")
    assert [c.url.params["page"] for c in calls] == ["1", "2", "3", "4"]
    assert all(c.url.params["limit"] == "2" for c in calls)
    assert calls[0].url.params["include"] == "images,variants,custom_fields,primary_image,options"
    assert calls[0].headers["X-Auth-Token"] == "bc_test"
    assert bigcommerce.last_fetch_failed_page is None


@pytest.mark.anyio
async def test_fetch_all_products_treats_missing_data_as_end(bigcommerce, bc_api):
    bc_api.on("GET", "/catalog/products", _page(1, 2), {"meta": {}})
    products = await bigcommerce.fetch_all_products()
    assert len(products) == 2
    assert len(bc_api.calls_to("GET", "/catalog/products")) == 2


@pytest.mark.anyio
async def test_failed_page_ends_pagination_and_is_recorded(bigcommerce, bc_api):
    bc_api.on("GET", "/catalog/products", _page(1, 2), httpx.Response(500, text="upstream error"), _page(3, 2))

    products = await bigcommerce.fetch_all_products()

    assert len(products) == 2
    assert len(bc_api.calls_to("GET", "/catalog/products")) == 2
    assert bigcommerce.last_fetch_failed_page == 2


@pytest.mark.anyio
async def test_fetch_category(bigcommerce, bc_api):
    bc_api.on("GET", "/catalog/categories/18", {"data": {"id": 18, "name": "Summer", "parent_id": 0}})
    bc_api.on("GET", "/catalog/categories/19", httpx.Response(404, json={"title": "Not found"}))

    found = await bigcommerce.fetch_category(18)
    assert found.ok and found.value.name == "Summer"

    missing = await bigcommerce.fetch_category(19)
    assert not missing.ok


@pytest.mark.anyio
async def test_fetch_brand_name(bigcommerce, bc_api):
    bc_api.on("GET", "/catalog/brands/3", {"data": {"id": 3, "name": "Acme"}})
    bc_api.on("GET", "/catalog/brands/4", httpx.Response(500, text="boom"))

    assert await bigcommerce.fetch_brand_name(3) == "Acme"
    assert await bigcommerce.fetch_brand_name(4) is None
    assert await bigcommerce.fetch_brand_name(0) is None
    assert await bigcommerce.fetch_brand_name(None) is None
    assert len(bc_api.calls) == 2

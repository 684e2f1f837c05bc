import logging
from typing import List, Optional, Sequence

import httpx

from app.core.config import settings
from app.models.result import CallResult
from app.models.shopify import ShopifyMetafield, ShopifyProductWrapper, ShopifyVariant
from app.services.gateway import ApiGateway
from app.services.mapping_service import chunk, variant_payloads

logger = logging.getLogger(__name__)


class ShopifyService:
    def __init__(self, client: Optional[httpx.AsyncClient] = None, min_interval: Optional[float] = None):
        self.gateway = ApiGateway(
            "Shopify",
            settings.shopify_base_url,
            headers={
                'Content-Type': 'application/json',
                'X-Shopify-Access-Token': settings.shopify_admin_token,
            },
            timeout=settings.request_timeout_seconds,
            min_interval=settings.shopify_min_request_interval if min_interval is None else min_interval,
            client=client,
        )

    async def test_connection(self) -> bool:
        """Test Shopify API connection"""
        return await self.gateway.ping("/shop.json")

    async def create_product(self, product: ShopifyProductWrapper) -> CallResult:
        """Create the product with its options and images; the result value is the product dict."""
        result = await self.gateway.post("/products.json", "Create Shopify product", json=product.to_payload())
        created = result.then(lambda body: body["product"] if body["product"].get("id") else None,
                              missing="product created without an id")
        if result.ok and not created.ok:
            logger.error(f"Create Shopify product: {created.reason}")
        return created

    async def upload_image(self, product_id: int, src: Optional[str], alt: str = "") -> CallResult:
        result = await self.gateway.post(
            f"/products/{product_id}/images.json",
            "Upload media to Shopify",
            json={"image": {"src": src, "alt": alt}},
        )
        return result.then(lambda body: body["image"] if body["image"].get("id") else None,
                           missing="image uploaded without an id")

    async def attach_variants(self, product_id: int, variants: Sequence[ShopifyVariant]) -> CallResult:
        return await self.gateway.put(
            f"/products/{product_id}.json",
            "Update product with variants",
            json={"product": {"id": product_id, "variants": variant_payloads(variants)}},
        )

    async def find_collection(self, title: str) -> CallResult:
        result = await self.gateway.get("/custom_collections.json", f"Find collection {title}", params={"title": title})
        return result.then(lambda body: body["custom_collections"][0]["id"], missing=f"no collection titled {title!r}")

    async def create_collection(self, title: str) -> CallResult:
        result = await self.gateway.post(
            "/custom_collections.json",
            f"Create collection {title}",
            json={"custom_collection": {"title": title, "published": True}},
        )
        return result.then(lambda body: body["custom_collection"]["id"], missing="collection created without an id")

    async def link_product_to_collection(self, product_id: int, collection_id: int) -> CallResult:
        return await self.gateway.post(
            "/collects.json",
            "Add product to collection",
            json={"collect": {"product_id": product_id, "collection_id": collection_id}},
        )

    async def create_metafield(self, product_id: int, metafield: ShopifyMetafield) -> CallResult:
        return await self.gateway.post(
            f"/products/{product_id}/metafields.json",
            "Create product metafield",
            json={"metafield": metafield.model_dump()},
        )

    async def create_metafields(self, product_id: int, metafields: List[ShopifyMetafield],
                                batch_size: Optional[int] = None) -> int:
        """Write metafields one call at a time; batches only group the progress log."""
        batches = chunk(metafields, batch_size or settings.metafield_batch_size)
        written = 0
        for i, batch in enumerate(batches, start=1):
            logger.info(f"   Metafields batch {i}/{len(batches)} ({len(batch)} fields)")
            for metafield in batch:
                result = await self.create_metafield(product_id, metafield)
                if result.ok:
                    written += 1
        return written

    async def aclose(self) -> None:
        await self.gateway.aclose()


shopify_service = ShopifyService()

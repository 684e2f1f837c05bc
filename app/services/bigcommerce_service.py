import logging
from typing import Any, Dict, List, Optional

import httpx

from app.core.config import settings
from app.models.bigcommerce import BigCommerceBrand, BigCommerceCategory
from app.models.result import CallResult
from app.services.gateway import ApiGateway

logger = logging.getLogger(__name__)

PRODUCT_INCLUDES = "images,variants,custom_fields,primary_image,options"


class BigCommerceService:
    def __init__(self, client: Optional[httpx.AsyncClient] = None, page_size: Optional[int] = None):
        self.page_size = page_size or settings.bc_page_size
        self.gateway = ApiGateway(
            "BigCommerce",
            settings.bigcommerce_base_url,
            headers={
                'X-Auth-Token': settings.bc_token,
                'Content-Type': 'application/json',
                'Accept': 'application/json',
            },
            timeout=settings.request_timeout_seconds,
            client=client,
        )
        self.last_fetch_failed_page: Optional[int] = None

    async def test_connection(self) -> bool:
        """Test BigCommerce API connection"""
        return await self.gateway.ping("/catalog/summary")

    async def fetch_all_products(self) -> List[Dict[str, Any]]:
        """Page through /catalog/products until a page comes back empty.

        A failed page also ends pagination; the page number is kept in
        ``last_fetch_failed_page`` so the caller can tell a truncated catalog
        from a complete one.
        """
        products: List[Dict[str, Any]] = []
        page = 1
        self.last_fetch_failed_page = None
        while True:
            logger.info(f"Fetching BigCommerce products page {page}")
            result = await self.gateway.get(
                "/catalog/products",
                "Fetch BC products",
                params={"page": page, "limit": self.page_size, "include": PRODUCT_INCLUDES},
            )
            if not result.ok:
                self.last_fetch_failed_page = page
                logger.error(f"Stopped paginating at page {page} after a failed request; "
                             f"catalog may be incomplete ({len(products)} products fetched)")
                break
            data = result.value.get("data") if isinstance(result.value, dict) else None
            if not data:
                break
            products.extend(data)
            page += 1
        logger.info(f"Fetched {len(products)} products from BigCommerce")
        return products

    async def fetch_category(self, category_id: int) -> CallResult:
        result = await self.gateway.get(f"/catalog/categories/{category_id}", f"Fetch category {category_id}")
        return result.then(lambda body: BigCommerceCategory.model_validate(body["data"]),
                           missing=f"category {category_id} not found")

    async def fetch_brand_name(self, brand_id: Optional[int]) -> Optional[str]:
        if not brand_id:
            return None
        result = await self.gateway.get(f"/catalog/brands/{brand_id}", f"Fetch brand {brand_id}")
        brand = result.then(lambda body: BigCommerceBrand.model_validate(body["data"]))
        if not brand.ok:
            return None
        return brand.value.name or None

    async def aclose(self) -> None:
        await self.gateway.aclose()


bigcommerce_service = BigCommerceService()

import logging
from typing import Optional

from app.models.result import CallResult, FailureKind
from app.services.shopify_service import ShopifyService, shopify_service as default_shopify_service

logger = logging.getLogger(__name__)


class CollectionResolver:
    """Get-or-create for Shopify custom collections, keyed by exact title.

    Every call looks the title up again; Shopify's title filter makes the
    lookup idempotent, so a title resolves to the same collection for the
    whole run once it has been created.
    """

    def __init__(self, shopify: Optional[ShopifyService] = None):
        self.shopify = shopify or default_shopify_service

    async def get_or_create(self, title: str) -> CallResult:
        found = await self.shopify.find_collection(title)
        if found.ok:
            return found
        if found.failure != FailureKind.MISSING_DATA:
            # A failed lookup is not a miss
            return found

        created = await self.shopify.create_collection(title)
        if created.ok:
            logger.info(f"   Created collection {title!r} ({created.value})")
        return created

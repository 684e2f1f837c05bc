import asyncio
import logging
import time
from typing import Any, Dict, List, Optional, Union

from app.core.config import settings
from app.models.bigcommerce import BigCommerceImage, BigCommerceProduct
from app.models.migration import ItemOutcome, ItemState, MigrationReport
from app.models.shopify import ShopifyVariant
from app.services import mapping_service
from app.services.bigcommerce_service import BigCommerceService, bigcommerce_service as default_bigcommerce_service
from app.services.collection_service import CollectionResolver
from app.services.shopify_service import ShopifyService, shopify_service as default_shopify_service

logger = logging.getLogger(__name__)


class ProductCreationError(Exception):
    """Shopify did not return a product id for a migrated item."""


class ImageIdentityMap:
    """BigCommerce image id -> Shopify image id for the item being migrated."""

    def __init__(self):
        self._ids: Dict[int, int] = {}

    def add(self, source_id: Optional[int], shopify_id: Optional[int]) -> None:
        if source_id is not None and shopify_id is not None:
            self._ids[source_id] = shopify_id

    def get(self, source_id: Optional[int]) -> Optional[int]:
        if source_id is None:
            return None
        return self._ids.get(source_id)

    def __contains__(self, source_id: Optional[int]) -> bool:
        return self.get(source_id) is not None


class MigrationService:
    def __init__(self, bigcommerce: Optional[BigCommerceService] = None, shopify: Optional[ShopifyService] = None,
                 collections: Optional[CollectionResolver] = None, rate_delay: Optional[float] = None,
                 metafield_batch_size: Optional[int] = None):
        self.bigcommerce = bigcommerce or default_bigcommerce_service
        self.shopify = shopify or default_shopify_service
        self.collections = collections or CollectionResolver(self.shopify)
        self.rate_delay = settings.rate_delay_seconds if rate_delay is None else rate_delay
        self.metafield_batch_size = metafield_batch_size or settings.metafield_batch_size
        self._running = asyncio.Lock()

    @property
    def is_running(self) -> bool:
        return self._running.locked()

    async def run(self) -> MigrationReport:
        """Migrate the whole catalog, one product at a time."""
        async with self._running:
            start_time = time.time()
            logger.info("BigCommerce -> Shopify migration started")

            raw_products = await self.bigcommerce.fetch_all_products()
            report = MigrationReport(total_products=len(raw_products),
                                     catalog_complete=self.bigcommerce.last_fetch_failed_page is None)
            logger.info(f"Products found: {len(raw_products)}")

            for index, raw in enumerate(raw_products, start=1):
                report.record(await self.migrate_product(raw, index, len(raw_products)))
                await asyncio.sleep(self.rate_delay)

            report.execution_time = time.time() - start_time
            logger.info(f"Migration completed: {report.succeeded} succeeded, {report.failed} failed "
                        f"in {report.execution_time:.2f}s")
            return report

    async def migrate_product(self, raw: Union[BigCommerceProduct, Dict[str, Any]], index: int = 1,
                              total: int = 1) -> ItemOutcome:
        """Drive one product through mapping and writing; never raises."""
        name = (raw.name or "") if isinstance(raw, BigCommerceProduct) else str((raw or {}).get("name") or "")
        outcome = ItemOutcome(index=index, name=name)
        logger.info(f"[{index}/{total}] {name}")

        try:
            product = raw if isinstance(raw, BigCommerceProduct) else BigCommerceProduct.model_validate(raw)
            outcome.source_id = product.id

            options = mapping_service.map_options(product.options)
            images = mapping_service.map_images(product.images)
            vendor = await self.bigcommerce.fetch_brand_name(product.brand_id) if product.brand_id else ""
            payload = mapping_service.build_product_payload(product, vendor, options, images)

            created = await self.shopify.create_product(payload)
            if not created.ok:
                raise ProductCreationError(f"Product creation failed: {created.describe()}")
            product_id = created.value["id"]
            outcome.shopify_id = product_id
            outcome.state = ItemState.PRODUCT_CREATED

            variants = await self._map_variants(product, product_id, outcome)
            if variants:
                attached = await self.shopify.attach_variants(product_id, variants)
                if attached.ok:
                    outcome.variants_attached = len(variants)
            outcome.state = ItemState.VARIANTS_ATTACHED

            for category_id in product.categories:
                if await self._link_category(product_id, category_id):
                    outcome.collections_linked += 1
            outcome.state = ItemState.COLLECTIONS_LINKED

            if product.custom_fields:
                metafields = mapping_service.map_product_metafields(product.custom_fields)
                outcome.metafields_written = await self.shopify.create_metafields(
                    product_id, metafields, batch_size=self.metafield_batch_size)
            outcome.state = ItemState.METAFIELDS_WRITTEN

            outcome.state = ItemState.DONE
            logger.info(f"SUCCESS: {name}")
        except ProductCreationError as e:
            outcome.error = str(e)
            logger.error(f"FAILED: {name}: {outcome.error}")
            outcome.state = ItemState.FAILED
        except Exception as e:
            outcome.error = str(e) or type(e).__name__
            logger.exception(f"FAILED: {name} (reached {outcome.state.value}): {outcome.error}")
            outcome.state = ItemState.FAILED
        return outcome

    async def _map_variants(self, product: BigCommerceProduct, product_id: int,
                            outcome: ItemOutcome) -> List[ShopifyVariant]:
        image_ids = ImageIdentityMap()
        for image in product.images:
            if await self._upload_product_image(product_id, image, image_ids):
                outcome.images_uploaded += 1

        variants: List[ShopifyVariant] = []
        for variant in product.variants:
            variant_image_id = None
            if variant.image_url and variant.image_id not in image_ids:
                uploaded = await self.shopify.upload_image(product_id, variant.image_url)
                if uploaded.ok:
                    variant_image_id = uploaded.value["id"]
                    outcome.images_uploaded += 1
            elif variant.image_id in image_ids:
                variant_image_id = image_ids.get(variant.image_id)
            variants.append(mapping_service.map_variant(variant, product.options, image_id=variant_image_id))
        return variants

    async def _upload_product_image(self, product_id: int, image: BigCommerceImage,
                                    image_ids: ImageIdentityMap) -> bool:
        uploaded = await self.shopify.upload_image(product_id, image.url_standard,
                                                   image.alt_text or image.description or "")
        if not uploaded.ok:
            return False
        image_ids.add(image.id, uploaded.value["id"])
        return True

    async def _link_category(self, product_id: int, category_id: int) -> bool:
        category = await self.bigcommerce.fetch_category(category_id)
        if not category.ok or not category.value.name:
            return False
        collection = await self.collections.get_or_create(category.value.name)
        if not collection.ok:
            return False
        linked = await self.shopify.link_product_to_collection(product_id, collection.value)
        return linked.ok


migration_service = MigrationService()

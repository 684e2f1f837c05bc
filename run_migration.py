#!/usr/bin/env python3
"""
Run one full BigCommerce -> Shopify migration pass.

Credentials come from the environment (or a .env file):
BC_STORE_HASH, BC_TOKEN, SHOPIFY_STORE, SHOPIFY_ADMIN_TOKEN, SHOPIFY_API_VERSION.
Exits 0 once the catalog has been processed, whatever happened to single products.
"""

import asyncio
import logging
import sys

from app.core.config import settings
from app.services.bigcommerce_service import bigcommerce_service
from app.services.migration_service import migration_service
from app.services.shopify_service import shopify_service

logger = logging.getLogger("run_migration")


async def _run() -> None:
    try:
        report = await migration_service.run()
    finally:
        await bigcommerce_service.aclose()
        await shopify_service.aclose()

    for item in report.items:
        if not item.succeeded:
            logger.warning(f"Failed: [{item.index}] {item.name}: {item.error}")
    if not report.catalog_complete:
        logger.warning("Catalog fetch stopped early; some products were not migrated")


def main() -> int:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    missing = settings.missing_credentials()
    if missing:
        logger.error(f"Missing configuration: {', '.join(missing)}")
        return 1
    asyncio.run(_run())
    return 0


if __name__ == "__main__":
    sys.exit(main())

from app.services.bigcommerce_service import bigcommerce_service
from app.services.migration_service import migration_service
from app.services.shopify_service import shopify_service


def get_bigcommerce_service():
    """Dependency for BigCommerce service"""
    return bigcommerce_service


def get_shopify_service():
    """Dependency for Shopify service"""
    return shopify_service


def get_migration_service():
    """Dependency for migration service"""
    return migration_service

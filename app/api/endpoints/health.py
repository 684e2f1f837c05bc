from fastapi import APIRouter, Depends
from app.core.config import settings
from app.services.bigcommerce_service import BigCommerceService
from app.services.shopify_service import ShopifyService
from app.api.deps import get_bigcommerce_service, get_shopify_service

router = APIRouter()


@router.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "service": "bigcommerce-shopify-migration",
        "version": settings.version
    }


@router.get("/test-connections")
async def test_connections(
    bigcommerce_service: BigCommerceService = Depends(get_bigcommerce_service),
    shopify_service: ShopifyService = Depends(get_shopify_service)
):
    """Test BigCommerce and Shopify connections"""
    results = {}

    try:
        results['bigcommerce'] = 'connected' if await bigcommerce_service.test_connection() else 'failed'
    except Exception as e:
        results['bigcommerce'] = f'error: {str(e)}'

    try:
        results['shopify'] = 'connected' if await shopify_service.test_connection() else 'failed'
    except Exception as e:
        results['shopify'] = f'error: {str(e)}'

    return results

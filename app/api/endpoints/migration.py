from fastapi import APIRouter, Depends, HTTPException
from app.services.migration_service import MigrationService
from app.api.deps import get_migration_service
from app.models.migration import MigrationResponse
import logging

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/run",
             response_model=MigrationResponse,
             summary="Run Catalog Migration",
             description="Fetch the full BigCommerce catalog and migrate every product to Shopify, one at a time.",
             response_description="Per-item outcomes with success/failure counts.")
async def run_migration(
    migration_service: MigrationService = Depends(get_migration_service)
):
    """
    Run one full migration pass.

    The request stays open until every product has been processed. Individual
    product failures are reported in the results and do not fail the request.
    Only one pass may run at a time; a second request gets 409.
    """
    if migration_service.is_running:
        raise HTTPException(status_code=409, detail="A migration run is already in progress")

    try:
        report = await migration_service.run()
    except Exception as e:
        logger.error(f"Migration run failed: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Migration run failed: {str(e)}")

    message = f"Migration completed: {report.succeeded} successful, {report.failed} failed"
    if not report.catalog_complete:
        message += " (catalog fetch stopped early)"
    return MigrationResponse(
        status="completed",
        message=message,
        total_products=report.total_products,
        successful_uploads=report.succeeded,
        failed_uploads=report.failed,
        catalog_complete=report.catalog_complete,
        execution_time=report.execution_time,
        results=[item.model_dump(mode="json") for item in report.items]
    )

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from app.core.config import settings
from app.api.endpoints import health, migration
from app.services.bigcommerce_service import bigcommerce_service
from app.services.shopify_service import shopify_service
import logging
import time

logging.basicConfig(
    level=settings.log_level.upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Starting {settings.app_name} v{settings.version}")
    logger.info(f"Debug mode: {settings.debug}")
    logger.info(f"API running on {settings.api_host}:{settings.api_port}")
    missing = settings.missing_credentials()
    if missing:
        logger.warning(f"Missing credentials: {', '.join(missing)}")
    yield
    # the services are module singletons; their httpx clients outlive any single request
    logger.info(f"Shutting down {settings.app_name}")
    await bigcommerce_service.aclose()
    await shopify_service.aclose()


app = FastAPI(
    title=settings.app_name,
    version=settings.version,
    description="Migrates a BigCommerce catalog into Shopify",
    openapi_url="/api/v1/openapi.json",
    docs_url="/api/v1/docs",
    redoc_url="/api/v1/redoc",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start_time = time.time()
    logger.info(f"Request: {request.method} {request.url}")
    response = await call_next(request)
    process_time = time.time() - start_time
    logger.info(f"Response: {response.status_code} - {process_time:.4f}s")
    return response


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Global exception: {str(exc)}")
    return JSONResponse(
        status_code=500,
        content={
            "status": "error",
            "message": "Internal server error",
            "detail": str(exc) if settings.debug else "An unexpected error occurred"
        }
    )


app.include_router(
    health.router,
    prefix="/api/v1",
    tags=["health"]
)

app.include_router(
    migration.router,
    prefix="/api/v1/migration",
    tags=["migration"]
)


@app.get("/")
async def root():
    """Service name, version and where to find the docs."""
    return {
        "name": settings.app_name,
        "version": settings.version,
        "status": "running",
        "docs_url": "/api/v1/docs",
        "health_check": "/api/v1/health"
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
        log_level="info"
    )

from contextlib import asynccontextmanager
from datetime import datetime, timezone
import logging
import traceback

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import settings
from app.api.deps import DB
from app.api.v1.router import api_router
from app.core.exceptions import WarehouseError, ValidationFailedError


logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Startup:
    - Create tables
    - Seed the default admin on an empty database
    """
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")

    from app.database_init import startup_initialization
    await startup_initialization()

    yield

    logger.info("Shutting down...")


# OpenAPI Tags with detailed descriptions
OPENAPI_TAGS = [
    {"name": "Authentication", "description": "Worker login and signed session tokens"},
    {"name": "Workers", "description": "Worker accounts (Admin only)"},
    {"name": "Items", "description": "Inventory items keyed by SKU"},
    {"name": "Stocktakes", "description": "Physical stock counts per zone/shelf"},
    {"name": "Shipments", "description": "Inbound/outbound shipments and their lines"},
    {"name": "Activity Logs", "description": "Append-only activity feed and stock movement chart"},
    {"name": "Tasks", "description": "Home dashboard tasks"},
]

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Warehouse operations API: items, shipments, stocktakes, workers, tasks and the activity feed.",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_tags=OPENAPI_TAGS,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API router
app.include_router(api_router)


@app.exception_handler(WarehouseError)
async def warehouse_exception_handler(request: Request, exc: WarehouseError):
    """Map domain errors onto their HTTP status."""
    content = {
        "error": exc.message,
        "type": type(exc).__name__,
    }
    if isinstance(exc, ValidationFailedError):
        content["fields"] = exc.fields
    return JSONResponse(status_code=exc.status_code, content=content)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Auth failures and unknown routes use the same error body as domain errors."""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": exc.detail,
            "type": "HTTPException",
        },
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Request body/query validation failures are 400s listing the failed fields."""
    errors = exc.errors()
    fields = [
        ".".join(str(part) for part in error["loc"] if part != "body")
        for error in errors
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": "Validation failed",
            "type": "ValidationFailedError",
            "fields": fields,
            "details": [
                {"field": field, "message": error["msg"]}
                for field, error in zip(fields, errors)
            ],
        },
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Unhandled errors: 500 with the exception message echoed."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")

    error_detail = {
        "error": str(exc),
        "type": type(exc).__name__,
        "path": str(request.url.path),
        "method": request.method,
    }
    if settings.DEBUG:
        error_detail["traceback"] = traceback.format_exc()

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_detail
    )


# Health check endpoint
@app.get("/health", tags=["Health"])
async def health_check(db: DB):
    """Health check endpoint with database validation."""
    health_status = {
        "status": "healthy",
        "app": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "checks": {
            "database": "unknown"
        }
    }

    # Check database connectivity
    try:
        result = await db.execute(text("SELECT 1"))
        result.scalar()
        health_status["checks"]["database"] = "connected"
    except Exception as e:
        health_status["status"] = "unhealthy"
        health_status["checks"]["database"] = f"error: {str(e)}"

    # Return 503 if unhealthy
    if health_status["status"] == "unhealthy":
        return JSONResponse(status_code=503, content=health_status)

    return health_status


@app.get("/", tags=["Root"])
async def root():
    """Root endpoint."""
    return {
        "message": f"Welcome to {settings.APP_NAME}",
        "version": settings.APP_VERSION,
        "docs": "/docs",
        "redoc": "/redoc",
    }

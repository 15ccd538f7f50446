"""
LawDesk Practice Management - Main FastAPI Application
"""

from datetime import datetime, UTC
import logging
from fastapi import FastAPI, HTTPException, status
from starlette.exceptions import HTTPException as StarletteHTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
import structlog
from contextlib import asynccontextmanager

from core.config import settings
from core.exceptions import (
    LawDeskException,
    lawdesk_exception_handler,
    validation_exception_handler,
    http_exception_handler
)
from api.v1.api import api_router
from schemas.base import HealthCheck

logging.basicConfig(format="%(message)s", level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))

# Configure structured logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger()

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    logger.info("Starting LawDesk Practice Management", version=settings.VERSION)

    # Step 1: Validate database connection
    from core.database import validate_database_connection

    db_valid = await validate_database_connection()
    if not db_valid:
        # Keep serving; /health/ready reports the outage
        logger.error("Database connection validation failed during startup")
    else:
        logger.info("Database connection validated successfully")

        # Step 2: Bring the schema up to date
        from core.database_migration import run_startup_migrations

        if await run_startup_migrations():
            logger.info("Database schema ready")
        else:
            logger.warning("Database migrations failed or were skipped")

    logger.info("Application startup complete")

    yield

    logger.info("Shutting down application")
    from core.database import engine
    await engine.dispose()

app = FastAPI(
    title=settings.APP_NAME,
    description="""
    ## Law Firm Practice Management API

    Clients, cases and court sessions, calendar scheduling, billing, tasks,
    document records, notifications, reports and AI drafting helpers.

    ### Authentication

    Register with `/auth/register-lawyer`, then exchange credentials at
    `/auth/login` for a token and send it on every other request:

    ```
    Authorization: Bearer <your-token>
    ```

    ### Error Handling

    Errors are returned as `{success: false, message, error_code, details}`:
    - `400` - Bad Request (validation errors; `message` lists each problem)
    - `401` - Unauthorized (missing/invalid token or bad credentials)
    - `403` - Forbidden
    - `404` - Not Found
    - `409` - Conflict (duplicate email, client still in use)
    - `500` - Internal Server Error
    """,
    version=settings.VERSION,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
    openapi_tags=[
        {"name": "authentication", "description": "Lawyer registration, login and token claims"},
        {"name": "users", "description": "Firm user directory"},
        {"name": "clients", "description": "Client records"},
        {"name": "cases", "description": "Legal cases and their court sessions"},
        {"name": "calendar", "description": "Calendar events and free-slot suggestions"},
        {"name": "billing", "description": "Invoices, payments and billing summary"},
        {"name": "tasks", "description": "Task assignment and workload statistics"},
        {"name": "documents", "description": "Document records and text search"},
        {"name": "notifications", "description": "Notification records and upcoming-session previews"},
        {"name": "reports", "description": "Read-only aggregate reports"},
        {"name": "ai", "description": "AI drafting helpers"},
        {"name": "health", "description": "Liveness and readiness checks"},
    ],
    lifespan=lifespan
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_HOSTS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Add exception handlers
app.add_exception_handler(LawDeskException, lawdesk_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)

# Include API routes
app.include_router(api_router, prefix=settings.API_PREFIX)

@app.get("/", tags=["health"])
async def root():
    """Service banner"""
    return {
        "message": f"{settings.APP_NAME} API",
        "version": settings.VERSION,
        "status": "healthy"
    }

@app.get("/health", tags=["health"])
async def health_check():
    """
    Liveness check for container health probes
    Returns immediately without touching the database
    """
    return {
        "status": "healthy",
        "timestamp": datetime.now(UTC).isoformat(),
        "service": "backend",
        "version": settings.VERSION
    }

@app.get("/health/ready", tags=["health"], response_model=HealthCheck)
async def readiness_check():
    """Readiness check including database connectivity and schema state"""
    from core.database import validate_database_connection
    from core.database_migration import get_migration_status

    if not await validate_database_connection():
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database connection validation failed"
        )

    return HealthCheck(migrations=await get_migration_status(), version=settings.VERSION)

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
        log_config=None  # Use structlog instead
    )

# /app/main.py

# --- Core FastAPI Imports ---
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# --- Application-specific Imports ---
from .core.config import get_settings
from .core.deps import get_current_admin
from .core.logging_config import get_logger, setup_logging
from .db.database import create_tables, get_engine
from .routers import (
    auth_router,
    content_router,
    dashboard_router,
    finance_router,
    groups_router,
    public_router,
    students_router,
    teachers_router,
)
from .services import auth_service
from .services.database_helpers.record_store_sql import RecordStoreError
from .services.database_service import DatabaseService

logger = get_logger("app")


# --- Application Lifecycle Management ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    # This code runs ONCE when the application starts up.
    settings = get_settings()
    setup_logging(settings.log_level)
    engine = get_engine()
    if settings.auto_create_tables:
        create_tables(engine)
    auth_service.ensure_bootstrap_admin(settings, DatabaseService.from_engine(engine))
    logger.info("Academy backend started")
    yield


# --- FastAPI Application Instance Creation ---
app = FastAPI(
    title="A+ Academy Backend API",
    description="Admin back office and public content API for A+ Academy.",
    version="1.0.0",
    lifespan=lifespan,
)

# --- Middleware Configuration ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RecordStoreError)
async def record_store_error_handler(request: Request, exc: RecordStoreError):
    logger.error("Record store failure on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Database operation failed."},
    )


# --- API Router Inclusion ---
admin_only = [Depends(get_current_admin)]

app.include_router(auth_router.router, prefix="/api/auth", tags=["Auth"])
app.include_router(dashboard_router.router, prefix="/api/dashboard", tags=["Dashboard"], dependencies=admin_only)
app.include_router(teachers_router.router, prefix="/api/teachers", tags=["Teachers"], dependencies=admin_only)
app.include_router(groups_router.router, prefix="/api/groups", tags=["Groups"], dependencies=admin_only)
app.include_router(students_router.router, prefix="/api/students", tags=["Students"], dependencies=admin_only)
app.include_router(finance_router.router, prefix="/api/finance", tags=["Finance"], dependencies=admin_only)
app.include_router(content_router.router, prefix="/api/content", tags=["Content"], dependencies=admin_only)

# Unauthenticated, public-facing routes under the /public prefix
app.include_router(public_router.router, prefix="/public", tags=["Public"])


# --- Root / Health Check Endpoint ---
@app.get("/", tags=["Health Check"])
async def read_root():
    """A simple health check endpoint to confirm the API is online."""
    return {"status": "A+ Academy backend is running!", "version": app.version}

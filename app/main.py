"""
Equipment Registry API - Main Application

Record keeping for air-conditioning equipment, the interventions performed
on them and the locations they are installed in.

SECURITY FEATURES:
- Conditional API docs (disabled in production by default)
- Database URLs are never logged in full
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from app.api.v2.router import api_router
from app.config import settings
from app.database import Database
from app.exceptions import register_exception_handlers
from app.middleware.correlation import CorrelationIdMiddleware, CorrelationLogFilter
# Import all models to register them with SQLAlchemy metadata before create_all()
from app.models import Equipment, Intervention, Location  # noqa: F401

VERSION = "1.0.0"

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] %(message)s",
)
for handler in logging.getLogger().handlers:
    handler.addFilter(CorrelationLogFilter())
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    logger.info("Starting Equipment Registry API...")
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    # SECURITY: Don't log full database URL, just prefix
    logger.info(f"Database URL prefix: {settings.DATABASE_URL[:30]}...")

    database = Database(settings.DATABASE_URL, echo=settings.sqlalchemy_echo)
    if settings.public_database_url == settings.DATABASE_URL:
        public_database = database
    else:
        public_database = Database(settings.public_database_url, echo=settings.sqlalchemy_echo)
    app.state.database = database
    app.state.public_database = public_database

    try:
        await database.create_all()
        logger.info("Database initialized successfully")
    except Exception as e:
        # SECURITY: Don't log full exception details which may contain credentials
        logger.error(f"Database initialization failed: {type(e).__name__}")
        logger.warning("App starting without database - requests will fail until it is reachable")
    yield
    # Shutdown
    logger.info("Shutting down Equipment Registry API...")
    await database.dispose()
    if public_database is not database:
        await public_database.dispose()


# SECURITY: Conditionally enable docs based on settings
docs_url = "/docs" if settings.DOCS_ENABLED else None
redoc_url = "/redoc" if settings.DOCS_ENABLED else None

app = FastAPI(
    title="Equipment Registry API",
    description="Air-conditioning equipment, interventions and locations",
    version=VERSION,
    docs_url=docs_url,
    redoc_url=redoc_url,
    lifespan=lifespan,
)

register_exception_handlers(app)

# CORS middleware
allowed_origins = [settings.FRONTEND_URL]

# Local dev servers
allowed_origins.extend([
    "http://localhost:5173",  # Vite dev server
    "http://localhost:3000",  # Alternative dev port
])

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(CorrelationIdMiddleware)

# Include routers
app.include_router(api_router, prefix="/api/v2")


@app.get("/")
async def root():
    """Root endpoint - API info."""
    response = {
        "name": "Equipment Registry API",
        "version": VERSION,
        "health": "/health",
    }
    # Only include docs link if enabled
    if settings.DOCS_ENABLED:
        response["docs"] = "/docs"
    return response


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "version": VERSION,
        "environment": settings.ENVIRONMENT,
    }


# For running with uvicorn directly (development only)
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=5001,
        reload=settings.DEBUG,
    )

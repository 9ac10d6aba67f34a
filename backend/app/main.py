"""
FastAPI application entry point.
Assembles the app with routers, middleware, lifespan handlers, and exception handlers.
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI, Depends
from fastapi.middleware.cors import CORSMiddleware
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.router import api_router
from app.core.config import settings
from app.core.exceptions import setup_exception_handlers
from app.core.logging import setup_logging, get_logger
from app.db.session import init_db, close_db, get_db
from app.deps.di_container import Container

logger = get_logger(__name__)

# Initialize rate limiter
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[f"{settings.RATE_LIMIT_PER_MINUTE}/minute"],
    enabled=settings.RATE_LIMIT_ENABLED,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events.
    Initializes logging, the database engine and the DI container.
    """
    # Startup
    setup_logging()
    await init_db()

    container = Container()
    container.config.from_dict({"database_url": settings.DATABASE_URL})
    app.state.container = container

    import app.deps.di_container as di_module
    di_module._container = container

    logger.info("Application started", extra={"version": settings.VERSION})

    yield

    # Shutdown
    await close_db()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        description="Construction back office: catalog, assembly groups, clients, projects and timelines",
        openapi_url=f"{settings.API_PREFIX}/openapi.json",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Rate limiting middleware
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    # Include API router
    app.include_router(api_router, prefix=settings.API_PREFIX)

    # Add root-level health endpoint for convenience
    from app.api.v1.endpoints.health import get_health

    @app.get("/health", response_model=None, include_in_schema=False)
    async def root_health(db: AsyncSession = Depends(get_db)):
        """Root-level health check endpoint."""
        return await get_health(db)

    # Global exception handler
    setup_exception_handlers(app)

    return app


app = create_app()

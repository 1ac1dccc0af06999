"""
Main FastAPI application for Membergraph
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ..config import settings
from ..graphql.schema import validate_schema
from ..logging import configure_logging, get_logger
from ..middleware import LoggingContextMiddleware
from ..repositories import Repositories, create_repositories

# Configure logging before creating logger
configure_logging(debug=settings.debug)
logger = get_logger(__name__)


async def _prepare_database() -> None:
    from ..database import create_schema, get_async_session, init_database
    from ..database.seed_data import ensure_member_types

    init_database()
    await create_schema()
    if settings.seed_member_types:
        async with get_async_session() as db:
            await ensure_member_types(db)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    # Startup
    logger.info("Starting Membergraph API...")

    if getattr(app.state, "repositories", None) is None:
        if settings.repository_backend == "sqlalchemy":
            await _prepare_database()
            logger.info("Database initialized")
        app.state.repositories = create_repositories()
        logger.info("Repositories initialized", backend=settings.repository_backend)

    yield

    # Shutdown
    logger.info("Shutting down Membergraph API...")


def create_app(repositories: Repositories | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        repositories: Bundle to serve from; when omitted the lifespan builds one
            for the configured backend.
    """

    app = FastAPI(
        title="Membergraph API",
        description="GraphQL API for users, profiles, posts and subscriptions",
        version="0.1.0",
        lifespan=lifespan,
        debug=settings.debug,
    )
    app.state.repositories = repositories

    # Add logging context middleware
    app.add_middleware(LoggingContextMiddleware)

    # CORS configuration
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Health check endpoint
    @app.get("/health")
    async def health_check():  # pyright: ignore [reportUnusedFunction]
        """Health check endpoint."""
        if settings.repository_backend != "sqlalchemy" or repositories is not None:
            return {"status": "healthy", "version": "0.1.0"}

        from ..database.connection import check_database_connection

        ok, error = await check_database_connection()
        if not ok:
            return {"status": "degraded", "version": "0.1.0", "database": error}
        return {"status": "healthy", "version": "0.1.0", "database": "ok"}

    try:
        # Validate schema at startup to catch unresolved lazy types early
        logger.info("Validating GraphQL schema...")
        validate_schema()
    except Exception as e:  # pragma: no cover
        logger.error("Failed to initialize GraphQL endpoint", error=str(e))
        raise

    from .endpoints import graphql

    app.include_router(graphql.router, prefix=settings.graphql_path, tags=["GraphQL"])
    logger.info("GraphQL endpoint initialized successfully", endpoint=settings.graphql_path)

    return app


# Create the main application instance
app = create_app()

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "membergraph.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
        log_level=settings.log_level.lower(),
    )

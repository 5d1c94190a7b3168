"""Main FastAPI application."""
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, HTTPException, Request, Depends
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from sqlalchemy import text
from sqlalchemy.orm import Session

from ballotbox.api.deps import get_db
from ballotbox.api.router import api_router
from ballotbox.core.config import Settings, settings as default_settings
from ballotbox.core.constants import MSG_INVALID_OPTION
from ballotbox.core.exceptions import SeedFailure, VotingError
from ballotbox.core.logging_config import setup_logging, get_logger
from ballotbox.core.rate_limit import bind_request_settings, limiter, reset_request_settings
from ballotbox.db import Database
from ballotbox.middleware import LoggingMiddleware, SecurityHeadersMiddleware
from ballotbox.services.catalog import count_options, seed_options
from ballotbox.services.registry import count_voters

logger = get_logger(__name__)


def open_database(settings: Settings) -> Database:
    """Open the vote store, create its tables and seed the option catalog.

    Raises:
        SeedFailure: the catalog could not be seeded; the caller must not serve
    """
    database = Database(
        settings.get_database_url(),
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        busy_timeout=settings.DB_BUSY_TIMEOUT,
    )
    try:
        database.create_all()
        with database.session() as db:
            seed_options(db, settings.VOTE_OPTIONS)
    except Exception:
        database.dispose()
        raise
    return database


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application around an explicitly owned database handle."""
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        try:
            database = open_database(settings)
        except SeedFailure as e:
            logger.critical("startup_aborted", reason=str(e))
            raise

        with database.session() as db:
            max_option_id = count_options(db)

        app.state.database = database
        app.state.max_option_id = max_option_id
        logger.info("application_ready", options=max_option_id)
        try:
            yield
        finally:
            database.dispose()
            logger.info("application_stopped")

    app = FastAPI(
        title=settings.APP_TITLE,
        description=settings.APP_DESCRIPTION,
        version=settings.APP_VERSION,
        lifespan=lifespan,
    )

    app.state.settings = settings

    # Add rate limiter to app state
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    @app.exception_handler(VotingError)
    async def voting_error_handler(request: Request, exc: VotingError):
        return JSONResponse(
            status_code=exc.status_code,
            content={"ok": False, "error": exc.message},
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        logger.info("request_invalid", errors=exc.errors())
        return JSONResponse(status_code=400, content={"ok": False, "error": MSG_INVALID_OPTION})

    # Middleware added later wraps middleware added earlier
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)

    @app.middleware("http")
    async def add_api_version_header(request: Request, call_next):
        """Add X-API-Version header to all responses for version tracking."""
        response = await call_next(request)
        response.headers["X-API-Version"] = settings.APP_VERSION
        return response

    @app.middleware("http")
    async def bind_app_settings(request: Request, call_next):
        """Rate limits read the settings of the app serving the request."""
        token = bind_request_settings(settings)
        try:
            return await call_next(request)
        finally:
            reset_request_settings(token)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=False,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    app.include_router(api_router)

    @app.get("/health")
    def health_check(db: Session = Depends(get_db)):
        """
        Health check endpoint.

        Returns:
            - status: "healthy" or "unhealthy"
            - database: connection status, option and voter counts
            - environment: Current environment setting

        Returns 503 if database is unreachable.
        """
        health_status = {
            "status": "healthy",
            "environment": settings.ENVIRONMENT,
            "database": {"status": "connected"},
        }

        try:
            db.execute(text("SELECT 1"))
            health_status["database"]["options"] = count_options(db)
            health_status["database"]["voters"] = count_voters(db)
        except Exception as e:
            health_status["status"] = "unhealthy"
            health_status["database"]["status"] = f"error: {str(e)}"
            logger.error("health_check_failed", error=str(e))
            raise HTTPException(status_code=503, detail=health_status)

        return health_status

    return app


setup_logging(level=default_settings.LOG_LEVEL, json_logs=default_settings.LOG_JSON)

# Validate production configuration after logging is configured
default_settings.validate_production_config()

logger.info(
    "application_configured",
    app_title=default_settings.APP_TITLE,
    app_version=default_settings.APP_VERSION,
    environment=default_settings.ENVIRONMENT,
)

app = create_app()

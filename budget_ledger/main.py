"""FastAPI application entrypoint. No business logic; only wiring, lifecycle and error mapping."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from dotenv import load_dotenv

load_dotenv()

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from budget_ledger import __version__
from budget_ledger.api.routes import router as api_router
from budget_ledger.core.config import Settings, get_settings
from budget_ledger.core.database import Database
from budget_ledger.core.logs import configure_logging
from budget_ledger.services.errors import ServiceError, UnauthenticatedError

logger = logging.getLogger(__name__)


def _summarize_validation_errors(errors: list[dict]) -> str:
    """Turn FastAPI/pydantic error entries into one short line (no input echo)."""
    parts = []
    for err in errors[:5]:
        loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path")]
        field = ".".join(loc) or "request"
        parts.append(f"{field}: {err.get('msg', 'invalid value')}")
    return "; ".join(parts) or "Invalid request."


def register_exception_handlers(app: FastAPI) -> None:
    """Map service, request-shape and storage errors onto JSON responses."""

    @app.exception_handler(ServiceError)
    async def service_error_handler(_request: Request, exc: ServiceError) -> JSONResponse:
        headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, UnauthenticatedError) else None
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.message},
            headers=headers,
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        _request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={"detail": _summarize_validation_errors(exc.errors())},
        )

    @app.exception_handler(SQLAlchemyError)
    async def storage_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
        logger.error(
            "Storage error",
            exc_info=exc,
            extra={"path": request.url.path, "method": request.method},
        )
        return JSONResponse(status_code=500, content={"detail": "Server error."})


def create_app(database: Database | None = None, settings: Settings | None = None) -> FastAPI:
    """
    Build the application.

    When database is None, one is created from DATABASE_URL at startup and
    disposed at shutdown. A database passed in is owned by the caller.
    settings, when given, replaces the cached settings for every route.
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        created = getattr(app.state, "database", None) is None
        if created:
            app.state.database = Database(settings.DATABASE_URL, echo=settings.DEBUG)
        logger.info("Application started", extra={"environment": settings.APP_ENV})
        try:
            yield
        finally:
            if created:
                app.state.database.dispose()
                app.state.database = None
            logger.info("Application stopped")

    app = FastAPI(
        title="Budget Ledger API",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    if database is not None:
        app.state.database = database
    # Routes read settings through the get_settings dependency.
    app.dependency_overrides[get_settings] = lambda: settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.APP_ENV == "dev" else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    app.include_router(api_router, prefix=settings.API_PREFIX)

    @app.get("/")
    def root() -> dict[str, str]:
        """Root route; minimal payload for discovery."""
        return {"message": "Budget Ledger API"}

    return app


configure_logging(get_settings().LOG_LEVEL)

app = create_app()

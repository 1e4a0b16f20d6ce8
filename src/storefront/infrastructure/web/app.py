"""Storefront FastAPI application.

Usage:
    storefront serve --port 4000
    uvicorn storefront.infrastructure.web.app:create_app --factory
"""

from __future__ import annotations

import uuid
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.sessions import SessionMiddleware

from storefront.domain.exceptions import (
    AuthenticationError,
    CommitFailedError,
    EntityNotFoundError,
    ValidationError,
)
from storefront.infrastructure import bootstrap
from storefront.infrastructure.logging import add_context, clear_context, configure_logging
from storefront.infrastructure.settings import Settings
from storefront.infrastructure.web.routes import (
    cart_router,
    compare_router,
    order_router,
    stock_router,
)

logger = structlog.get_logger(__name__)

_ALLOWED_ORIGINS = [
    "http://localhost:4001",
    "http://localhost:4002",
    "http://localhost:4200",
]


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings.from_env()
    configure_logging(settings)
    db = bootstrap.database(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        db.open()
        try:
            yield
        finally:
            db.close()

    app = FastAPI(title="Storefront API", lifespan=lifespan)
    app.state.settings = settings
    app.state.uow_factory = bootstrap.unit_of_work_factory(db)

    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.session_secret,
        max_age=settings.session_max_age,
        same_site="lax",
        https_only=settings.is_production,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    @app.middleware("http")
    async def correlation_id_middleware(request: Request, call_next):
        correlation_id = str(uuid.uuid4())
        clear_context()
        add_context(correlation_id=correlation_id)
        try:
            response = await call_next(request)
        except Exception:
            logger.exception("unhandled_error", path=request.url.path)
            response = JSONResponse(status_code=500, content={"message": "Server error"})
        response.headers["X-Correlation-ID"] = correlation_id
        return response

    _register_error_handlers(app)

    app.include_router(order_router)
    app.include_router(cart_router)
    app.include_router(compare_router)
    app.include_router(stock_router)
    return app


def _register_error_handlers(app: FastAPI) -> None:

    @app.exception_handler(AuthenticationError)
    async def unauthorized(request: Request, exc: AuthenticationError):
        logger.warning("unauthorized", path=request.url.path)
        return JSONResponse(status_code=401, content={"message": str(exc)})

    @app.exception_handler(ValidationError)
    async def bad_request(request: Request, exc: ValidationError):
        return JSONResponse(status_code=400, content={"message": str(exc)})

    @app.exception_handler(RequestValidationError)
    async def malformed_body(request: Request, exc: RequestValidationError):
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in exc.errors())
        return JSONResponse(status_code=400, content={"message": f"Invalid request: {fields}"})

    @app.exception_handler(EntityNotFoundError)
    async def not_found(request: Request, exc: EntityNotFoundError):
        return JSONResponse(status_code=404, content={"message": str(exc)})

    @app.exception_handler(CommitFailedError)
    async def commit_failed(request: Request, exc: CommitFailedError):
        # Detail stays in the log; callers may simply retry.
        return JSONResponse(status_code=500, content={"message": "Server error"})

"""FastAPI application entrypoint. No business logic; only wiring, middleware and error mapping."""

import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv

load_dotenv()

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from sessiongate.api.v1 import router as v1_router
from sessiongate.core.auth import build_auth_components
from sessiongate.core.config import Settings, get_settings
from sessiongate.core.database import create_db_engine, create_session_factory
from sessiongate.core.exceptions import AuthError
from sessiongate.core.logging import setup_logging

logger = logging.getLogger(__name__)


def _error_body(status_code: int, code: str, message: str) -> dict:
    return {"status": status_code, "code": code, "message": message}


async def handle_auth_error(request: Request, exc: AuthError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.status_code, exc.code, exc.message),
    )


async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    content = _error_body(400, "VALIDATION_ERROR", "Invalid request body")
    content["details"] = jsonable_encoder(exc.errors())
    return JSONResponse(status_code=400, content=content)


async def handle_storage_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("Database error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content=_error_body(500, "INTERNAL_ERROR", "Internal server error"),
    )


async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content=_error_body(500, "INTERNAL_ERROR", "Internal server error"),
    )


def create_app(
    settings: Settings | None = None,
    session_factory: sessionmaker | None = None,
) -> FastAPI:
    """
    Build the application and its long-lived services.

    The session factory, secret hasher and token codecs are created here and
    kept on app.state; tests pass their own settings and session factory.
    """
    settings = settings or get_settings()
    setup_logging(settings.LOG_LEVEL)

    engine = None
    if session_factory is None:
        engine = create_db_engine(settings.DATABASE_URL, echo=settings.DEBUG)
        session_factory = create_session_factory(engine)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        if engine is not None:
            engine.dispose()

    app = FastAPI(
        title="SessionGate API",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.session_factory = session_factory
    app.state.auth = build_auth_components(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(AuthError, handle_auth_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation)
    app.add_exception_handler(SQLAlchemyError, handle_storage_error)
    app.add_exception_handler(Exception, handle_unexpected)

    app.include_router(v1_router, prefix=settings.API_V1_PREFIX)

    @app.get("/")
    def root() -> dict[str, str]:
        """Root route; minimal payload for discovery."""
        return {"message": "SessionGate API"}

    return app


app = create_app()

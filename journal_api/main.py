from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from journal_api.api.events import router as events_router
from journal_api.api.metrics import router as metrics_router
from journal_api.config import get_settings
from journal_api.models.schemas import HealthResponse
from journal_api.observability.logging import configure_logging
from journal_api.observability.middleware import RequestContextMiddleware
from journal_api.storage.memory import InMemoryStore, Store


def _describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "invalid request"
    first = errors[0]
    if first.get("type") == "json_invalid":
        return "invalid payload"
    loc = ".".join(str(part) for part in first.get("loc", ()))
    return f"{loc}: {first.get('msg', 'invalid value')}" if loc else str(first.get("msg", "invalid value"))


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"detail": _describe_validation_error(exc)})


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    log = structlog.get_logger("journal_api")
    log.info("service_started")
    yield
    log.info("service_stopped")


def create_app(store: Store | None = None) -> FastAPI:
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title="Journal API", version="0.1.0", lifespan=_lifespan)
    app.state.store = store if store is not None else InMemoryStore.seeded()

    app.add_middleware(CORSMiddleware, allow_origins=settings.cors_origins, allow_methods=["*"], allow_headers=["*"])
    # outermost user middleware: also answers unhandled errors with a tagged 500
    app.add_middleware(RequestContextMiddleware)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)

    app.include_router(events_router)
    app.include_router(metrics_router)

    @app.get("/healthz", response_model=HealthResponse)
    async def healthz() -> HealthResponse:
        return HealthResponse()

    return app


app = create_app()

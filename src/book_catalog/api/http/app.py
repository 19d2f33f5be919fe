"""FastAPI application factory and setup."""

import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from loguru import logger
from starlette.responses import JSONResponse

from src.book_catalog.api.http.app_data import ApplicationDependencies
from src.book_catalog.api.http.routers.book import router as book_router
from src.book_catalog.api.http.routers.data import router as data_router
from src.book_catalog.api.http.routers.health import router as health_router
from src.book_catalog.api.utils.app_startup import configure_logging
from src.book_catalog.core.services import DocumentStoreService
from src.book_catalog.runtime.context import get_config

__all__ = ["app", "create_app", "startup", "shutdown"]


# --- Lifecycle hooks ---
async def startup(app: FastAPI, document_store: DocumentStoreService | None = None) -> None:
    """Connect to the document store; the listener is bound only if this returns.

    Raises:
        StoreUnavailableError: If MongoDB does not answer at startup.
    """
    config = get_config()
    logger.info("Starting up application in {} environment", config.app.environment)

    store = document_store or DocumentStoreService(config.mongo)
    await store.connect()

    app.state.app_dependencies = ApplicationDependencies(document_store=store)


async def shutdown(app: FastAPI) -> None:
    logger.info("Shutting down application")
    app_dependencies: ApplicationDependencies | None = getattr(
        app.state, "app_dependencies", None
    )
    if app_dependencies is not None:
        await app_dependencies.document_store.close()


# --- Request logging middleware ---
async def log_requests(request: Request, call_next):
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())

    xff = request.headers.get("x-forwarded-for")
    client_ip = (
        xff.split(",")[0].strip()
        if xff
        else request.client.host
        if request.client
        else "unknown"
    )

    base_ctx = {
        "request_id": request_id,
        "method": request.method,
        "path": request.url.path,
        "client_ip": client_ip,
        "user_agent": request.headers.get("user-agent", "unknown"),
    }

    start = time.perf_counter()

    # Everything that logs within this block inherits base_ctx
    with logger.contextualize(**base_ctx):
        try:
            logger.info("request.start")
            response = await call_next(request)
        except Exception as exc:
            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=500,
                duration_ms=round(duration_ms, 1),
                error_type=type(exc).__name__,
            ).exception("request.error")
            return JSONResponse(
                status_code=500,
                content={"detail": "Internal Server Error", "request_id": request_id},
                headers={"X-Request-ID": request_id},
            )

        duration_ms = (time.perf_counter() - start) * 1000
        logger.bind(
            status_code=response.status_code,
            duration_ms=round(duration_ms, 1),
        ).info("request.end")
        response.headers.setdefault("X-Request-ID", request_id)
        return response


def create_app(document_store: DocumentStoreService | None = None) -> FastAPI:
    """Build the application.

    Args:
        document_store: Store service to connect at startup. When omitted a
            service is built from the current configuration.
    """
    configure_logging()
    production = get_config().app.environment == "production"

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await startup(app, document_store)
        try:
            yield
        finally:
            await shutdown(app)

    app = FastAPI(
        title="Book Catalog",
        lifespan=lifespan,
        docs_url=None if production else "/docs",
        redoc_url=None if production else "/redoc",
    )
    app.middleware("http")(log_requests)

    app.include_router(health_router)
    app.include_router(data_router)
    app.include_router(book_router)
    return app


app = create_app()

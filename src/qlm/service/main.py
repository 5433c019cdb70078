"""Reference item service.

A small FastAPI app speaking the page contract ``QuickLoadMore`` expects.
Useful as a local backend while building a UI, and as the service the test
suite drives the loader against.

    uvicorn qlm.service.main:app
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from qlm.config import ServiceSettings
from qlm.logging import LoggingSettings, configure_logging, get_logger
from qlm.service.catalog import Catalog
from qlm.service.exceptions import PageTooLargeError, ServiceError
from qlm.service.routers.items import router as items_router
from qlm.service.schemas.items import RejectedPage

configure_logging(LoggingSettings())

logger = get_logger(__name__)


async def page_too_large_handler(request: Request, exc: PageTooLargeError) -> JSONResponse:
    """Return 400 when the requested page size exceeds the configured maximum."""
    logger.info("page_too_large", count=exc.count, max_page_size=exc.maximum)
    return JSONResponse(
        status_code=400,
        content=RejectedPage.of("page_too_large", exc.message, max_page_size=exc.maximum),
    )


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    """Return 400 for any other service-level violation."""
    logger.warning("service_error", error=exc.message, path=request.url.path)
    return JSONResponse(status_code=400, content=RejectedPage.of("service_error", exc.message))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log unhandled exceptions and return a safe error response."""
    logger.exception("unhandled_exception", path=request.url.path, method=request.method)
    return JSONResponse(
        status_code=500,
        content=RejectedPage.of("internal_error", "Internal server error"),
    )


def create_app(catalog: Catalog | None = None, settings: ServiceSettings | None = None) -> FastAPI:
    """Build an app serving ``catalog`` (150 demo items when omitted)."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info("service_started", total=app.state.catalog.count_items())
        yield
        logger.info("service_stopped")

    app = FastAPI(lifespan=lifespan)
    app.state.catalog = catalog if catalog is not None else Catalog.demo()
    app.state.settings = settings if settings is not None else ServiceSettings()

    app.add_exception_handler(PageTooLargeError, page_too_large_handler)  # type: ignore[arg-type]
    app.add_exception_handler(ServiceError, service_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_exception_handler)
    app.include_router(items_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Liveness check."""
        return {"status": "ok"}

    return app


app = create_app()

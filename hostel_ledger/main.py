from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from hostel_ledger.api.v1.router import router as api_v1_router
from hostel_ledger.config.logging import setup_logging
from hostel_ledger.config.settings import Settings, get_settings
from hostel_ledger.core.exceptions import BaseAppException
from hostel_ledger.core.middleware import register_middlewares
from hostel_ledger.services.integrations.hostel_api_client import HostelApiClient

logger = logging.getLogger(__name__)


async def app_exception_handler(request: Request, exc: BaseAppException) -> JSONResponse:
    logger.warning(
        f"Application error: {exc}",
        extra={"request_id": getattr(request.state, "request_id", "unknown")},
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


def create_app(config: Settings | None = None) -> FastAPI:
    """
    Application factory for the FastAPI app.

    - Configures title, version, debug mode from Settings.
    - Registers CORS, core middleware, and exception handlers.
    - Includes the versioned API router under /api/v1.
    """
    config = config or get_settings()
    setup_logging(config)

    app = FastAPI(
        title=config.APP_NAME,
        debug=config.DEBUG,
        version=config.API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS or ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_middlewares(app)
    app.add_exception_handler(BaseAppException, app_exception_handler)

    app.state.settings = config
    app.include_router(api_v1_router, prefix=config.API_V1_STR)

    @app.on_event("startup")
    async def on_startup() -> None:
        if getattr(app.state, "hostel_api_client", None) is None:
            app.state.hostel_api_client = HostelApiClient(config=config)
        logger.info(f"Hostel backend: {config.HOSTEL_API_URL}")

    @app.on_event("shutdown")
    async def on_shutdown() -> None:
        client = getattr(app.state, "hostel_api_client", None)
        if client is not None:
            await client.aclose()

    return app


app = create_app()

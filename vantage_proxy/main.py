import sys
import uuid
from contextlib import asynccontextmanager
from typing import Optional

import httpx
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from loguru import logger

from vantage_proxy.api.endpoints import router as api_router
from vantage_proxy.core.config import Settings, load_settings
from vantage_proxy.core.constants import RouteConfig
from vantage_proxy.core.exceptions import FatalStartupError, unhandled_exception_handler
from vantage_proxy.core.logging import setup_logging
from vantage_proxy.models.proxy import ProxyConfig


def create_app(
    settings: Settings,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    """
    Build the proxy application around an already validated configuration.

    Args:
        settings: Process-wide settings, loaded once at startup.
        transport: Optional httpx transport for the outbound client.

    Returns:
        FastAPI: The configured application.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging(level=settings.LOG_LEVEL, log_file=settings.LOG_FILE)
        app.state.http_client = httpx.AsyncClient(transport=transport, follow_redirects=True)
        logger.info(f"🚀 Proxy server listening on port {settings.PORT}")
        yield
        await app.state.http_client.aclose()
        logger.info("🛑 Application shutdown")

    app = FastAPI(title=settings.PROJECT_NAME, lifespan=lifespan)
    app.state.proxy_config = ProxyConfig.from_settings(settings)

    app.add_exception_handler(Exception, unhandled_exception_handler)

    @app.middleware("http")
    async def request_context_middleware(request: Request, call_next):
        request_id = str(uuid.uuid4())
        with logger.contextualize(request_id=request_id):
            response = await call_next(request)
            response.headers["X-Request-ID"] = request_id
            return response

    app.include_router(api_router, prefix=RouteConfig.API_PREFIX)

    @app.get("/", response_class=PlainTextResponse)
    async def greeting():
        return RouteConfig.GREETING

    @app.get("/health")
    async def health_check():
        return {"status": "ok", "project": settings.PROJECT_NAME}

    return app


def run() -> None:
    """Load configuration and serve the proxy, exiting with 1 if it is unusable."""
    setup_logging()
    try:
        settings = load_settings()
    except FatalStartupError as exc:
        logger.error(f"Error: {exc}")
        sys.exit(1)

    uvicorn.run(create_app(settings), host=settings.HOST, port=settings.PORT, log_config=None)


if __name__ == "__main__":
    run()

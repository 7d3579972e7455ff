"""
Proxy error taxonomy and the catch-all JSON error handler.
"""
from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse
from loguru import logger

from vantage_proxy.core.constants import ProxyMessages


class ProxyError(Exception):
    """Base per-request error, rendered as a JSON body with a status code."""

    def __init__(self, status_code: int, detail: str, body: Any = None):
        self.status_code = status_code
        self.detail = detail
        self.body = body
        super().__init__(detail)

    def to_body(self) -> Any:
        """Body sent to the client; defaults to an error object."""
        if self.body is not None:
            return self.body
        return {"error": self.detail}


class ClientInputError(ProxyError):
    """Missing or malformed target URL."""

    def __init__(self, detail: str):
        super().__init__(status_code=400, detail=detail)


class PolicyViolation(ProxyError):
    """Target hostname is not on the allow-list."""

    def __init__(self, hostname: str, allowed_hostname: str):
        self.hostname = hostname
        super().__init__(
            status_code=400,
            detail=ProxyMessages.HOSTNAME_NOT_ALLOWED.format(hostname=allowed_hostname),
        )


class UpstreamLogicalError(ProxyError):
    """Upstream answered successfully but reported an error in its payload."""

    def __init__(self, detail: str):
        super().__init__(status_code=400, detail=detail)


class UpstreamTransportError(ProxyError):
    """
    Upstream could not be reached or answered with a non-2xx status.

    The status mirrors the upstream when one was received, and the upstream
    body is relayed when there is one.
    """

    def __init__(self, status_code: int = 500, body: Any = None, detail: str = ProxyMessages.INTERNAL_ERROR):
        super().__init__(status_code=status_code, detail=detail, body=body)


class FatalStartupError(Exception):
    """Configuration is unusable; the process must not start."""


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Convert anything escaping a route into a generic 500 error object."""
    logger.exception(f"Unhandled error on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content={"error": ProxyMessages.INTERNAL_ERROR},
    )

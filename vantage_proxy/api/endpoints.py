"""
API endpoints for the Alpha Vantage proxy.
"""
import time
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from loguru import logger

from vantage_proxy.api.dependencies import get_allowlist_proxy
from vantage_proxy.core.constants import RouteConfig
from vantage_proxy.models.proxy import ErrorBody, ProxyRequest
from vantage_proxy.services.allowlist import AllowlistProxy


router = APIRouter()


@router.get(
    RouteConfig.PROXY_PATH,
    responses={400: {"model": ErrorBody}, 500: {"model": ErrorBody}},
)
async def proxy_alpha_vantage(
    url: Optional[str] = Query(
        default=None,
        description="Full Alpha Vantage URL without the apikey parameter",
    ),
    proxy: AllowlistProxy = Depends(get_allowlist_proxy),
):
    """
    Proxies a GET request to the Alpha Vantage API, adding the server's API key.

    Example: /api/alpha-vantage?url=https://www.alphavantage.co/query?function=OVERVIEW%26symbol=IBM

    Args:
        url: The target URL, which must point at the allowed Alpha Vantage host.
        proxy: The service performing validation and forwarding.

    Returns:
        JSONResponse: The upstream payload, or an ``{"error": ...}`` object.
    """
    proxy_request = ProxyRequest(raw_target_url=url)

    start_time = time.perf_counter()
    result = await proxy.handle(proxy_request.raw_target_url)
    duration = time.perf_counter() - start_time
    logger.info(f"Proxy request completed with status {result.status_code} in {duration:.2f}s")

    return JSONResponse(status_code=result.status_code, content=result.body)

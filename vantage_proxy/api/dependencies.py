"""
Dependency injection factories for FastAPI.

The proxy configuration and the outbound HTTP client are built once per
application and kept on ``app.state``; these factories hand them to routes.
"""
import httpx
from fastapi import Depends, Request

from vantage_proxy.models.proxy import ProxyConfig
from vantage_proxy.services.allowlist import AllowlistProxy


def get_proxy_config(request: Request) -> ProxyConfig:
    return request.app.state.proxy_config


def get_http_client(request: Request) -> httpx.AsyncClient:
    return request.app.state.http_client


def get_allowlist_proxy(
    config: ProxyConfig = Depends(get_proxy_config),
    client: httpx.AsyncClient = Depends(get_http_client),
) -> AllowlistProxy:
    """Get the proxy service bound to the application's config and client."""
    return AllowlistProxy(config=config, client=client)

"""
Allow-listed forwarding to the Alpha Vantage API.

A client names a full upstream URL (without the apikey). The proxy checks the
host against the single allowed hostname, injects the credential server-side,
issues one GET and normalizes the outcome into a ``ProxyResult``.

Outbound calls are a single attempt with the client's default timeout and no
retry.
"""
from typing import Any, Optional

import httpx
from loguru import logger

from vantage_proxy.core.constants import ProxyMessages, UpstreamConfig
from vantage_proxy.core.exceptions import (
    ClientInputError,
    PolicyViolation,
    ProxyError,
    UpstreamLogicalError,
    UpstreamTransportError,
)
from vantage_proxy.models.proxy import ProxyConfig, ProxyResult, TargetUrlParseResult


def parse_target_url(raw_target_url: str) -> TargetUrlParseResult:
    """
    Parse a client-supplied URL, accepting only absolute URLs with a host.

    Args:
        raw_target_url: The value of the ``url`` query parameter.

    Returns:
        TargetUrlParseResult: ``url`` set on success, None otherwise.
    """
    try:
        url = httpx.URL(raw_target_url)
    except httpx.InvalidURL:
        return TargetUrlParseResult()

    if not url.is_absolute_url or not url.host:
        return TargetUrlParseResult()
    # httpx accepts any digits as a port
    if url.port is not None and not 0 <= url.port <= 65535:
        return TargetUrlParseResult()
    return TargetUrlParseResult(url=url)


def inject_credential(url: httpx.URL, config: ProxyConfig) -> httpx.URL:
    """Set the credential parameter, replacing any value the client sent."""
    return url.copy_set_param(UpstreamConfig.CREDENTIAL_PARAM, config.credential_value)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Non-standard JSON constant: {name}")


def _read_body(response: httpx.Response) -> Any:
    """
    Decoded JSON body, falling back to the raw text (e.g. ``datatype=csv``).

    ``NaN`` and ``Infinity`` are not valid JSON and cannot be re-encoded for
    the client, so a body containing them is kept as text.
    """
    try:
        return response.json(parse_constant=_reject_constant)
    except ValueError:
        return response.text


class AllowlistProxy:
    """Forwards GET requests to the one allowed upstream host."""

    def __init__(self, config: ProxyConfig, client: httpx.AsyncClient):
        self.config = config
        self.client = client

    async def handle(self, raw_target_url: Optional[str]) -> ProxyResult:
        """
        Validate, forward and normalize a single proxy call.

        Every per-request failure is converted here; nothing is raised to the
        caller.

        Args:
            raw_target_url: The target URL as sent by the client, possibly absent.

        Returns:
            ProxyResult: Status code and JSON body for the client.
        """
        try:
            body = await self._forward(raw_target_url)
        except ProxyError as exc:
            return ProxyResult(status_code=exc.status_code, body=exc.to_body())
        return ProxyResult(status_code=200, body=body)

    async def _forward(self, raw_target_url: Optional[str]) -> Any:
        if not raw_target_url:
            raise ClientInputError(ProxyMessages.MISSING_URL)

        parsed = parse_target_url(raw_target_url)
        if not parsed.ok:
            raise ClientInputError(ProxyMessages.INVALID_URL)

        target = parsed.url
        if target.host != self.config.allowed_hostname:
            logger.warning(f"Rejected proxy request to disallowed host '{target.host}'")
            raise PolicyViolation(target.host, self.config.allowed_hostname)

        logger.info(f"Proxying request to {target}")
        response = await self._get(inject_credential(target, self.config))

        if response.is_success:
            body = _read_body(response)
            if isinstance(body, dict) and body.get(UpstreamConfig.ERROR_FIELD):
                logger.info(f"Upstream reported an error: {body[UpstreamConfig.ERROR_FIELD]}")
                raise UpstreamLogicalError(body[UpstreamConfig.ERROR_FIELD])
            # Upstream 2xx statuses are all relayed as 200, a JSON null body included
            return body

        logger.error(f"Error proxying to Alpha Vantage: upstream returned {response.status_code}")
        body = _read_body(response)
        raise UpstreamTransportError(
            status_code=response.status_code,
            body=None if body == "" else body,
        )

    async def _get(self, url: httpx.URL) -> httpx.Response:
        try:
            return await self.client.get(url)
        except httpx.HTTPError as exc:
            logger.error(f"Error proxying to Alpha Vantage: {exc}")
            raise UpstreamTransportError() from exc

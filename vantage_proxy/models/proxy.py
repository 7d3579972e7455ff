"""
Pydantic models for the allow-listed proxy.
"""
from typing import Any, Optional

import httpx
from pydantic import BaseModel, ConfigDict, Field

from vantage_proxy.core.config import Settings
from vantage_proxy.core.constants import UpstreamConfig


class ProxyConfig(BaseModel):
    """Upstream allow-list entry and the credential injected into every call."""

    allowed_hostname: str = Field(min_length=1)
    credential_value: str = Field(min_length=1, repr=False)

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_settings(cls, settings: Settings) -> "ProxyConfig":
        return cls(
            allowed_hostname=UpstreamConfig.ALLOWED_HOSTNAME,
            credential_value=settings.ALPHA_VANTAGE_API_KEY,
        )


class ProxyRequest(BaseModel):
    """An inbound proxy call, as received from the client."""

    raw_target_url: Optional[str] = None

    model_config = ConfigDict(frozen=True)


class ErrorBody(BaseModel):
    """Error object returned to the client."""

    error: str

    model_config = ConfigDict(frozen=True)


class ProxyResult(BaseModel):
    """Status code and JSON body to send back to the client."""

    status_code: int
    body: Any

    model_config = ConfigDict(frozen=True)


class TargetUrlParseResult(BaseModel):
    """Outcome of parsing a client-supplied target URL; ``url`` is None on failure."""

    url: Optional[httpx.URL] = None

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    @property
    def ok(self) -> bool:
        return self.url is not None

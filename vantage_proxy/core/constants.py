"""
Application-wide constants.

Grouped into static classes for namespace management, like the settings they sit beside.
"""


class UpstreamConfig:
    """The single upstream this proxy may reach."""
    ALLOWED_HOSTNAME = "www.alphavantage.co"
    CREDENTIAL_PARAM = "apikey"
    ERROR_FIELD = "Error Message"  # Set by Alpha Vantage on a 200 for bad calls


class ProxyMessages:
    """Client-facing error messages."""
    MISSING_URL = 'Missing required query parameter: "url".'
    INVALID_URL = "Invalid URL format provided."
    HOSTNAME_NOT_ALLOWED = (
        "Invalid proxy request. Hostname not allowed. "
        "Only requests to {hostname} are permitted."
    )
    INTERNAL_ERROR = "An internal server error occurred."


class RouteConfig:
    """Public route paths and fixed responses."""
    API_PREFIX = "/api"
    PROXY_PATH = "/alpha-vantage"
    GREETING = "Hola desde el proxy!"

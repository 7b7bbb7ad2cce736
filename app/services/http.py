"""Shared aiohttp session factory for outbound HTTP calls."""

import aiohttp

USER_AGENT = "StoreBridgeBot/1.0"


def create_session(headers: dict[str, str] | None = None) -> aiohttp.ClientSession:
    """Create an aiohttp session for backend and file download requests.

    Must be called from a running event loop. No request timeout is set
    beyond aiohttp's defaults.

    Args:
        headers: Extra default headers sent with every request.

    Returns:
        aiohttp.ClientSession: New HTTP session, owned by the caller.
    """
    connector = aiohttp.TCPConnector(limit=100, limit_per_host=30)
    default_headers = {"User-Agent": USER_AGENT}
    if headers:
        default_headers.update(headers)
    return aiohttp.ClientSession(connector=connector, headers=default_headers)

"""HTTP transport delivering raw feed bytes."""

import logging
import os
from urllib.parse import urlsplit

import httpx

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 20.0
DEFAULT_USER_AGENT = "rsschannel/0.1"


class TransportError(Exception):
    """Raised when a feed source cannot be fetched."""


def fetch_feed(
    url: str,
    timeout: float | None = None,
    user_agent: str | None = None,
) -> bytes:
    """Fetch the raw bytes of a feed with a single HTTP GET.

    Args:
        url: The feed URL.
        timeout: Request timeout in seconds, defaults to ``RSSCHANNEL_TIMEOUT``.
        user_agent: User-Agent header, defaults to ``RSSCHANNEL_USER_AGENT``.

    Returns:
        The response body, undecoded.

    Raises:
        TransportError: If the URL is invalid, unreachable, or answers with
            an error status.
    """
    _check_feed_url(url)

    if timeout is None:
        timeout = float(os.environ.get("RSSCHANNEL_TIMEOUT", DEFAULT_TIMEOUT))
    if user_agent is None:
        user_agent = os.environ.get("RSSCHANNEL_USER_AGENT", DEFAULT_USER_AGENT)

    try:
        with httpx.Client(
            timeout=timeout,
            headers={"User-Agent": user_agent},
            follow_redirects=True,
        ) as client:
            resp = client.get(url)
    except httpx.HTTPError as e:
        raise TransportError(f"Could not reach URL: {type(e).__name__}: {e}") from e

    if resp.status_code in (401, 403):
        raise TransportError(
            "Feed requires authentication. Ensure the URL is publicly accessible."
        )
    if resp.status_code >= 400:
        raise TransportError(f"Could not reach URL: HTTP {resp.status_code}")

    logger.debug("Fetched %d bytes from %s", len(resp.content), url)
    return resp.content


def _check_feed_url(url: str) -> None:
    """Reject URLs this transport cannot fetch."""
    try:
        parts = urlsplit(url)
        host = parts.hostname
    except ValueError as e:
        raise TransportError(f"Malformed feed URL {url!r}: {e}") from e
    if parts.scheme not in ("http", "https"):
        raise TransportError(f"Unsupported feed URL scheme {parts.scheme!r} in {url!r}")
    if not host:
        raise TransportError(f"Feed URL {url!r} has no host")

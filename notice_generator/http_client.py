"""HTTP client utilities with consistent user agent and retry behaviour."""

from typing import Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from . import __version__

DEFAULT_TIMEOUT = 15  # seconds
DEFAULT_MAX_RETRIES = 2

USER_AGENT = f"notice-file-generator/{__version__}"


def get_default_headers(token: Optional[str] = None, accept: Optional[str] = None) -> dict:
    """
    Get default HTTP headers with user agent.

    Args:
        token: Optional bearer token to include
        accept: Optional Accept header value (e.g., "application/vnd.github+json")

    Returns:
        Dictionary of HTTP headers
    """
    headers = {"User-Agent": USER_AGENT}
    if token:
        headers["Authorization"] = f"Bearer {token}"
    if accept:
        headers["Accept"] = accept
    return headers


def create_session(max_retries: int = DEFAULT_MAX_RETRIES, pool_size: int = 10) -> requests.Session:
    """
    Create a session with retry logic and the default User-Agent.

    The session never carries credentials; callers that talk to an
    authenticated API pass per-request headers instead.

    Args:
        max_retries: Maximum number of retries on throttling or server errors
        pool_size: Connection pool size per host, match it to the worker count

    Returns:
        Configured requests.Session instance
    """
    session = requests.Session()

    retry_strategy = Retry(
        total=max_retries,
        backoff_factor=1,
        status_forcelist=[429, 500, 502, 503, 504],
        allowed_methods=["HEAD", "GET"],
    )

    adapter = HTTPAdapter(max_retries=retry_strategy, pool_connections=pool_size, pool_maxsize=pool_size)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    session.headers.update(get_default_headers())

    return session


def http_get_text(session: requests.Session, url: str, timeout: int = DEFAULT_TIMEOUT) -> str:
    """
    GET a URL and return the body as text.

    Args:
        session: Session used for the request
        url: URL to fetch
        timeout: Request timeout in seconds

    Returns:
        Response body

    Raises:
        requests.exceptions.RequestException: On transport errors or any
            status other than 200
    """
    response = session.get(url, timeout=timeout)
    if response.status_code != 200:
        raise requests.exceptions.HTTPError(
            f"HTTP status code {response.status_code} when downloading {url!r}", response=response
        )
    return response.text

"""Base HTTP client with retry logic."""

import httpx
from loguru import logger
from tenacity import (
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from settings import API_TIMEOUT


def _is_retryable_error(exc: BaseException) -> bool:
    """Check if exception is retryable (network errors + 5xx server errors)."""
    if isinstance(exc, (httpx.ReadError, httpx.ConnectError, httpx.TimeoutException)):
        return True
    return isinstance(exc, httpx.HTTPStatusError) and exc.response.status_code >= 500


class BaseClient:
    """Base sync HTTP client with exponential backoff.

    Governance operations are synchronous and run inside a store
    transaction, so lookups block rather than fan out.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = API_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._client = httpx.Client(
            base_url=self._base_url,
            timeout=timeout,
            transport=transport,
            limits=httpx.Limits(max_connections=20, max_keepalive_connections=10),
        )
        self._request_count = 0
        logger.info("{}: base_url={}", self.__class__.__name__, self._base_url)

    def __enter__(self):
        return self

    def __exit__(self, *_):
        self.close()

    def close(self) -> None:
        logger.info("{}: total API requests: {}", self.__class__.__name__, self._request_count)
        self._client.close()

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.2, min=0.2, max=5),
        retry=retry_if_exception(_is_retryable_error),
        reraise=True,
    )
    def _get(self, path: str) -> dict | list:
        """GET request with retry logic."""
        self._request_count += 1
        resp = self._client.get(f"/{path.lstrip('/')}")
        resp.raise_for_status()
        return resp.json()

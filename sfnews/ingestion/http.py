"""HTTP helpers shared by source adapters."""

import logging

import httpx
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_fixed,
)

logger = logging.getLogger(__name__)


async def get_with_retry(
    client: httpx.AsyncClient,
    url: str,
    retries: int = 1,
    backoff: float = 1.0,
    **kwargs,
) -> httpx.Response:
    """
    GET a URL, retrying transport errors and non-2xx responses.

    Args:
        client: HTTP client to use
        url: URL to fetch
        retries: Extra attempts after the first one
        backoff: Fixed seconds to wait before each retry

    Raises:
        httpx.HTTPError: If the last attempt fails
    """
    async for attempt in AsyncRetrying(
        stop=stop_after_attempt(retries + 1),
        wait=wait_fixed(backoff),
        retry=retry_if_exception_type(httpx.HTTPError),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    ):
        with attempt:
            response = await client.get(url, **kwargs)
            response.raise_for_status()
    return response

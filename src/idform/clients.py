"""
HTTP clients for the remote collaborators.

- ``fetch_users``: read endpoint feeding the user table.
- ``HttpSubmissionSink``: write endpoint receiving the identification form.

Both accept an injected ``httpx.AsyncClient``; without one they open a
short-lived client per call.
"""

import logging
from typing import Any

import httpx

from idform.config import get_config
from idform.models.user_record import UserRecord

logger = logging.getLogger(__name__)


async def fetch_users(
    client: httpx.AsyncClient | None = None,
    url: str | None = None,
) -> list[UserRecord]:
    """
    Fetch the user list from the read endpoint.

    Args:
        client: Optional client to reuse.
        url: Endpoint URL. If None, uses config.users_url.

    Returns:
        The user records, in the order the service returned them.

    Raises:
        httpx.HTTPError: If the request fails or returns an error status.
        pydantic.ValidationError: If a record does not have the expected shape.
    """
    config = get_config()
    url = url or config.users_url

    logger.info(f"GET users from {url}")
    if client is None:
        async with httpx.AsyncClient(timeout=config.http_timeout) as own_client:
            response = await own_client.get(url)
    else:
        response = await client.get(url)
    response.raise_for_status()

    return [UserRecord.from_api(item) for item in response.json()]


class HttpSubmissionSink:
    """
    Submission sink that POSTs the form snapshot as JSON.

    Instances are async callables, so they plug straight into
    ``SubmissionLifecycle``.
    """

    def __init__(
        self,
        url: str | None = None,
        client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
    ):
        config = get_config()
        self.url = url or config.submit_url
        self.client = client
        self.timeout = timeout if timeout is not None else config.http_timeout

    async def __call__(self, payload: dict[str, Any]) -> Any:
        """
        Send ``payload`` and return the decoded response body.

        Raises:
            httpx.HTTPError: If the request fails or returns an error status.
        """
        logger.info(f"POST identification form to {self.url}")
        if self.client is None:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(self.url, json=payload)
        else:
            response = await self.client.post(self.url, json=payload)
        logger.info(f"Submission response: {response.status_code}")
        response.raise_for_status()
        if not response.content:
            return None
        return response.json()

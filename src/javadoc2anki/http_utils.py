"""HTTP utilities for posting JSON with retry logic and connection pooling."""

from __future__ import annotations

import asyncio
import json
from typing import Any, Final

import httpx

from javadoc2anki.config import (
    JAVADOC2ANKI_REQUEST_BACKOFF_S,
    JAVADOC2ANKI_REQUEST_MAX_RETRIES,
    JAVADOC2ANKI_REQUEST_TIMEOUT_S,
    JAVADOC2ANKI_USER_AGENT,
)
from javadoc2anki.exceptions import AnkiConnectError

RETRY_STATUS_CODES: Final[frozenset[int]] = frozenset({429, 500, 502, 503, 504})


async def post_json_with_retries(
    url: str,
    payload: dict[str, Any],
    *,
    client: httpx.AsyncClient | None = None,
    max_retries: int | None = None,
) -> Any:
    """POST a JSON payload and decode the JSON response, retrying transient failures.

    Args:
        url: The URL to post to.
        payload: JSON-serializable request body.
        client: Optional httpx.AsyncClient for connection pooling. If not
            provided, a new client is created for this request.
        max_retries: Retries after the first attempt. Defaults to
            ``JAVADOC2ANKI_REQUEST_MAX_RETRIES``.

    Returns:
        The decoded JSON response body.

    Raises:
        AnkiConnectError: If the request still fails after all retries, the
            server answers with a non-retryable error status, or the body is
            not JSON.
    """
    timeout = httpx.Timeout(JAVADOC2ANKI_REQUEST_TIMEOUT_S)
    headers = {"User-Agent": JAVADOC2ANKI_USER_AGENT}
    retries = JAVADOC2ANKI_REQUEST_MAX_RETRIES if max_retries is None else max_retries
    last_exc: Exception | None = None

    async def do_post(http_client: httpx.AsyncClient) -> Any:
        nonlocal last_exc

        for attempt in range(retries + 1):
            try:
                response = await http_client.post(url, json=payload)

                if response.status_code in RETRY_STATUS_CODES:
                    last_exc = AnkiConnectError(f"HTTP {response.status_code} from {url}")
                else:
                    response.raise_for_status()
                    try:
                        return response.json()
                    except json.JSONDecodeError as exc:
                        raise AnkiConnectError(f"Invalid JSON from {url}: {exc}") from exc
            except httpx.RequestError as exc:
                last_exc = exc
            except httpx.HTTPStatusError as exc:
                raise AnkiConnectError(f"HTTP {exc.response.status_code} from {url}") from exc

            if attempt < retries:
                backoff = JAVADOC2ANKI_REQUEST_BACKOFF_S * (2**attempt)
                await asyncio.sleep(backoff)

        raise AnkiConnectError(f"Failed to reach {url}: {last_exc}")

    if client is not None:
        return await do_post(client)

    async with httpx.AsyncClient(timeout=timeout, headers=headers) as new_client:
        return await do_post(new_client)

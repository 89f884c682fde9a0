"""Fetch blog post HTML."""

import asyncio

import httpx
from rich.console import Console

from . import config
from .errors import FetchError

console = Console(stderr=True)


def default_headers() -> dict[str, str]:
    return {
        "User-Agent": config.USER_AGENT,
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        "Accept-Language": "en-US,en;q=0.9",
    }


def make_client(timeout: float | None = None) -> httpx.AsyncClient:
    """Create a client configured the way every blogref fetch expects."""
    return httpx.AsyncClient(
        follow_redirects=True,
        timeout=config.FETCH_TIMEOUT if timeout is None else timeout,
        headers=default_headers(),
    )


async def _get(client: httpx.AsyncClient, url: str, timeout: float | None) -> httpx.Response:
    if timeout is None:
        return await client.get(url, headers=default_headers())
    return await client.get(url, headers=default_headers(), timeout=timeout)


async def _get_or_cancel(
    client: httpx.AsyncClient,
    url: str,
    timeout: float | None,
    cancel: asyncio.Event,
) -> httpx.Response:
    """Run the GET, aborting it as soon as ``cancel`` is set."""
    if cancel.is_set():
        raise FetchError(url, "cancelled")

    request_task = asyncio.ensure_future(_get(client, url, timeout))
    cancel_task = asyncio.ensure_future(cancel.wait())
    try:
        await asyncio.wait({request_task, cancel_task}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        cancel_task.cancel()
        if not request_task.done():
            request_task.cancel()
            try:
                await request_task
            except (asyncio.CancelledError, httpx.HTTPError):
                pass

    if request_task.cancelled():
        raise FetchError(url, "cancelled")
    return request_task.result()


async def fetch_html(
    url: str,
    client: httpx.AsyncClient | None = None,
    timeout: float | None = None,
    cancel: asyncio.Event | None = None,
) -> httpx.Response:
    """
    GET a page once and return the successful response.

    Args:
        url: Absolute URL to fetch
        client: Optional shared client; it is left open
        timeout: Per-request timeout in seconds (defaults to config.FETCH_TIMEOUT)
        cancel: Optional event; setting it aborts the request

    Returns:
        The httpx response (2xx)

    Raises:
        FetchError: transport failure, timeout, cancellation or non-2xx status
    """
    if config.VERBOSE:
        console.print(f"[dim]Fetching {url}...[/dim]")

    owns_client = client is None
    if owns_client:
        client = make_client(timeout)

    try:
        if cancel is not None:
            response = await _get_or_cancel(client, url, timeout, cancel)
        else:
            response = await _get(client, url, timeout)
    except httpx.TimeoutException as e:
        raise FetchError(url, "timed out") from e
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        raise FetchError(url, str(e) or type(e).__name__) from e
    finally:
        if owns_client:
            await client.aclose()

    if not response.is_success:
        raise FetchError(url, response.reason_phrase or "bad status", status_code=response.status_code)

    return response

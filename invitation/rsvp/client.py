import asyncio
import logging
from typing import Any

import httpx

from invitation.rsvp.errors import ApiError, RequestCancelled, RsvpTransportError

logger = logging.getLogger(__name__)


class CancellationToken:
    """One-shot abort signal shared between a caller and an in-flight request."""

    def __init__(self) -> None:
        self._event = asyncio.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    async def wait(self) -> None:
        await self._event.wait()


def read_body(response: httpx.Response) -> tuple[Any, str]:
    """Return (body, content_type): parsed JSON when declared, text otherwise."""
    content_type = response.headers.get("content-type", "")
    if "application/json" in content_type:
        try:
            return response.json(), content_type
        except ValueError:
            return None, content_type
    try:
        return response.text, content_type
    except UnicodeDecodeError:
        return None, content_type


def error_message(status: int, body: Any) -> str:
    if isinstance(body, dict):
        message = body.get("error") or body.get("message")
        if message:
            return str(message)
    if isinstance(body, str) and body:
        return body
    return f"HTTP {status}"


async def post_json(
    url: str,
    payload: dict[str, Any],
    *,
    cancellation: CancellationToken | None = None,
    http_client_class: type[httpx.AsyncClient] = httpx.AsyncClient,
    base_url: str = "",
    timeout: float | None = None,
) -> Any:
    """
    POST `payload` as JSON and return the parsed response body.

    Raises ApiError for non-2xx responses, RsvpTransportError for connection
    failures and RequestCancelled when `cancellation` fires first.
    """
    if cancellation is not None and cancellation.cancelled:
        raise RequestCancelled()

    client_kwargs: dict[str, Any] = {"base_url": base_url}
    if timeout is not None:
        client_kwargs["timeout"] = timeout

    async with http_client_class(**client_kwargs) as client:
        send = client.post(url, json=payload, headers={"Content-Type": "application/json"})
        try:
            response = await _send(send, cancellation)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning(f"RSVP request to {url} failed: {e!r}")
            raise RsvpTransportError(str(e) or type(e).__name__) from e

    body, content_type = read_body(response)

    if not response.is_success:
        raise ApiError(
            error_message(response.status_code, body),
            status=response.status_code,
            body=body,
            content_type=content_type,
        )

    return body


async def _send(send, cancellation: CancellationToken | None) -> httpx.Response:
    if cancellation is None:
        return await send

    request_task = asyncio.ensure_future(send)
    cancel_task = asyncio.ensure_future(cancellation.wait())
    try:
        await asyncio.wait({request_task, cancel_task}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        cancel_task.cancel()
        if not request_task.done():
            request_task.cancel()
            await asyncio.gather(request_task, return_exceptions=True)

    if request_task.cancelled():
        raise RequestCancelled()
    return request_task.result()

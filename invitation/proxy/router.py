import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Protocol

import httpx
from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from invitation.config.settings import settings
from invitation.proxy import urls
from invitation.proxy.schema import ProxyRsvpBody
from invitation.rsvp.client import read_body

logger = logging.getLogger(__name__)

router = APIRouter()

DEFAULT_TARGET_BASE_URL = "https://vestuviubackend-production.up.railway.app"
UPSTREAM_RSVP_PATH = "/api/rsvp"

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}

_HTTP_SCHEME = re.compile(r"^https?://", re.IGNORECASE)


def normalize_base_url(url: str | None) -> str:
    """Add https:// when the scheme is missing and drop trailing slashes."""
    raw = str(url or "").strip()
    if not raw:
        return ""
    with_scheme = raw if _HTTP_SCHEME.match(raw) else f"https://{raw}"
    return with_scheme.rstrip("/")


def join_url(base: str | None, path: str | None) -> str:
    b = normalize_base_url(base)
    p = str(path or "").strip()
    if not b or _HTTP_SCHEME.match(p):
        return p
    return f"{b}{p if p.startswith('/') else '/' + p}"


# =============================================================================
# Protocols (interfaces) for dependency injection
# =============================================================================


@dataclass(frozen=True)
class UpstreamResponse:
    status_code: int
    body: Any
    content_type: str = ""

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def error_message(self) -> str:
        if isinstance(self.body, dict) and self.body.get("error"):
            return str(self.body["error"])
        if isinstance(self.body, str) and self.body:
            return self.body
        return f"Upstream error ({self.status_code})"


class RsvpForwarder(Protocol):
    """Protocol for relaying an RSVP body to the backend."""

    async def __call__(self, body: dict[str, Any]) -> UpstreamResponse:
        """Forward the body and return the backend's response."""
        ...


class ForwardConfig(Protocol):
    RSVP_PROXY_TARGET_BASE_URL: str


# =============================================================================
# Default implementation
# =============================================================================


class HttpxRsvpForwarder:
    """Server-to-server relay to the RSVP backend over httpx."""

    def __init__(
        self,
        http_client_class: type[httpx.AsyncClient] = httpx.AsyncClient,
        config: ForwardConfig = settings,
    ):
        self._http_client_class = http_client_class
        self._config = config

    @property
    def target_url(self) -> str:
        base = self._config.RSVP_PROXY_TARGET_BASE_URL or DEFAULT_TARGET_BASE_URL
        return join_url(base, UPSTREAM_RSVP_PATH)

    async def __call__(self, body: dict[str, Any]) -> UpstreamResponse:
        async with self._http_client_class() as client:
            response = await client.post(
                self.target_url,
                json=body,
                headers={"Content-Type": "application/json"},
            )
        upstream_body, content_type = read_body(response)
        return UpstreamResponse(
            status_code=response.status_code,
            body=upstream_body,
            content_type=content_type,
        )


# =============================================================================
# Dependency providers (can be overridden in tests)
# =============================================================================


def get_rsvp_forwarder() -> RsvpForwarder:
    """Factory for the RSVP forwarder. Override in tests."""
    return HttpxRsvpForwarder(http_client_class=httpx.AsyncClient, config=settings)


# =============================================================================
# Endpoints
# =============================================================================


def _json(status_code: int, content: dict[str, Any], **headers: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=content, headers={**CORS_HEADERS, **headers})


async def _read_json_body(request: Request) -> Any:
    raw = await request.body()
    if not raw:
        return None
    try:
        return json.loads(raw)
    except ValueError:
        return None


@router.options(urls.RSVP_URL)
async def rsvp_preflight() -> Response:
    return Response(status_code=204, headers=CORS_HEADERS)


@router.api_route(
    urls.RSVP_URL,
    methods=["GET", "HEAD", "PUT", "PATCH", "DELETE", "TRACE", "CONNECT"],
)
async def rsvp_method_not_allowed() -> JSONResponse:
    return _json(405, {"ok": False, "error": "Method Not Allowed"}, Allow="POST, OPTIONS")


@router.post(urls.RSVP_URL)
async def proxy_rsvp(
    request: Request,
    forwarder: RsvpForwarder = Depends(get_rsvp_forwarder),
) -> JSONResponse:
    """
    Relay an RSVP to the backend so the browser only talks to its own origin.

    Invalid bodies are rejected with 400 without contacting the backend.
    Backend failures keep their status; network failures become 502.
    """
    body = await _read_json_body(request)

    try:
        ProxyRsvpBody.model_validate(body)
    except ValidationError as e:
        logger.info(f"Rejected RSVP payload: {e.error_count()} validation error(s)")
        return _json(400, {"ok": False, "error": "Invalid RSVP payload"})

    try:
        upstream = await forwarder(body)
    except Exception as e:
        logger.exception(f"RSVP proxy error: {e}")
        return _json(502, {"ok": False, "error": "RSVP proxy failed"})

    if not upstream.is_success:
        logger.warning(f"RSVP backend answered {upstream.status_code}")
        return _json(upstream.status_code, {"ok": False, "error": upstream.error_message})

    return _json(200, {"ok": True})

"""Resolution of the URL RSVP submissions are posted to."""

import logging
import re

logger = logging.getLogger(__name__)

DEFAULT_RSVP_PATH = "/api/rsvp"
DEFAULT_PROD_API_BASE_URL = "https://vestuviubackend-production.up.railway.app"

_ABSOLUTE_URL = re.compile(r"^https?://", re.IGNORECASE)
_BARE_HOST = re.compile(r"^[a-z0-9.-]+\.[a-z]{2,}(?:/|$)", re.IGNORECASE)


def is_absolute_url(value: str) -> bool:
    return bool(_ABSOLUTE_URL.match(value))


def looks_like_bare_host(value: str | None) -> bool:
    """
    True for host-like values without a scheme, e.g. "example.com/api/rsvp".

    Such a value would otherwise be appended to the current origin and produce
    "https://<frontend>/example.com/api/rsvp".
    """
    raw = str(value or "").strip()
    if not raw or raw.startswith("/") or is_absolute_url(raw):
        return False
    return bool(_BARE_HOST.match(raw))


def normalize_rsvp_endpoint(value: str | None) -> str | None:
    """Return an absolute URL or a path starting with "/", or None when unusable."""
    raw = str(value or "").strip()
    if not raw:
        return None
    if is_absolute_url(raw) or raw.startswith("/"):
        return raw
    if looks_like_bare_host(raw):
        logger.warning(f"Ignoring RSVP endpoint override that looks like a bare host: {raw!r}")
        return None
    return f"/{raw}"


def resolve_base_url(override_base: str | None, is_production: bool) -> str:
    base = str(override_base or "").strip().rstrip("/")
    if base:
        return base
    return DEFAULT_PROD_API_BASE_URL if is_production else ""


def resolve_endpoint(
    override_path: str | None,
    override_base: str | None,
    is_production: bool,
) -> str:
    """
    Build the submission URL.

    An absolute override is returned as is. Otherwise the normalized path (or
    DEFAULT_RSVP_PATH) is appended to the base; an empty base yields a
    same-origin relative URL.
    """
    path = normalize_rsvp_endpoint(override_path) or DEFAULT_RSVP_PATH
    if is_absolute_url(path):
        return path
    return f"{resolve_base_url(override_base, is_production)}{path}"

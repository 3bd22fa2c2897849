"""
Environment-dependent decisions taken by the submission controller.

Kept apart from the controller so each rule can be tested on its own:
- whether RSVPs are posted at all
- whether a 404 from a local dev server counts as a soft success
- whether an error body is an HTML error page
"""

from invitation.config.settings import Settings
from invitation.rsvp.errors import ApiError

MISSING_LOCAL_BACKEND_MARKER = "Cannot POST /api/rsvp"


def is_post_enabled(settings: Settings) -> bool:
    """Explicit RSVP_POST_ENABLED wins, else post when a base is set or in production."""
    if settings.RSVP_POST_ENABLED is not None:
        return settings.RSVP_POST_ENABLED
    return bool(settings.api_base_url) or settings.is_production


def is_missing_local_backend(error: Exception, settings: Settings) -> bool:
    """
    A dev server without the API route answers 404 "Cannot POST /api/rsvp".

    Only honoured in development builds with no API base configured, so a
    real backend misconfiguration elsewhere is never masked.
    """
    if not settings.is_development or settings.api_base_url:
        return False
    if not isinstance(error, ApiError) or error.status != 404:
        return False
    body = error.text_body
    return body is not None and MISSING_LOCAL_BACKEND_MARKER in body


def has_html_body(error: Exception) -> bool:
    if not isinstance(error, ApiError):
        return False
    body = error.text_body
    return body is not None and "<html" in body

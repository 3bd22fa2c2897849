import logging
import math
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any

import httpx

from invitation.config.settings import Settings
from invitation.rsvp.client import CancellationToken, post_json
from invitation.rsvp.dtos import (
    WEDDING,
    RsvpDraft,
    RsvpPayload,
    SubmissionState,
    SubmissionStatus,
    WeddingInfo,
)
from invitation.rsvp.endpoints import resolve_endpoint
from invitation.rsvp.errors import (
    ApiError,
    RequestCancelled,
    RsvpError,
    RsvpTransportError,
    RsvpValidationError,
)
from invitation.rsvp.messages import Messages
from invitation.rsvp.policies import has_html_body, is_missing_local_backend, is_post_enabled

logger = logging.getLogger(__name__)

MIN_GUESTS = 1
MAX_GUESTS = 6


def parse_guests(value: Any) -> int | None:
    """Return the guest count as an int, or None if it is not a whole number in range."""
    if isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number) or not number.is_integer():
        return None
    if number < MIN_GUESTS or number > MAX_GUESTS:
        return None
    return int(number)


def validate_draft(draft: RsvpDraft) -> int:
    """
    Check the fields required for submission.
    Returns the parsed guest count, raises RsvpValidationError otherwise.
    """
    if not str(draft.name or "").strip():
        raise RsvpValidationError("name", Messages.MISSING_NAME)

    guests = parse_guests(draft.guests)
    if guests is None:
        raise RsvpValidationError("guests", Messages.INVALID_GUESTS)

    if not str(draft.attending or "").strip():
        raise RsvpValidationError("attending", Messages.MISSING_ATTENDING)

    return guests


class SubmissionController:
    """
    Runs "submit RSVP" operations and owns the resulting SubmissionState.

    Overlapping calls are allowed but only the latest one reports status: each
    new attempt cancels the previous in-flight request first.
    """

    def __init__(
        self,
        settings: Settings,
        wedding: WeddingInfo = WEDDING,
        http_client_class: type[httpx.AsyncClient] = httpx.AsyncClient,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        self._settings = settings
        self._wedding = wedding
        self._http_client_class = http_client_class
        self._clock = clock
        self._in_flight: CancellationToken | None = None
        self.state = SubmissionState()

    @property
    def status(self) -> SubmissionStatus:
        return self.state.status

    @property
    def message(self) -> str:
        return self.state.message

    @property
    def in_flight(self) -> bool:
        return self._in_flight is not None

    def _set(self, status: SubmissionStatus, message: str = "") -> None:
        self.state = SubmissionState(status=status, message=message)

    def reset(self) -> None:
        self._set(SubmissionStatus.IDLE)

    def cancel(self) -> bool:
        """Abort the in-flight attempt, if any. Returns True when one was cancelled."""
        if self._in_flight is None:
            return False
        self._in_flight.cancel()
        self._in_flight = None
        return True

    @property
    def endpoint(self) -> str:
        return resolve_endpoint(
            self._settings.RSVP_ENDPOINT,
            self._settings.API_BASE_URL,
            self._settings.is_production,
        )

    async def submit(self, draft: RsvpDraft) -> bool:
        """
        Submit `draft` and report the outcome through `state`.

        Returns True on success (including the local-only and missing local
        backend soft successes). A superseded attempt returns False and leaves
        the state to the newer attempt.
        """
        try:
            guests = validate_draft(draft)
        except RsvpValidationError as e:
            self._set(SubmissionStatus.ERROR, e.message)
            return False

        if not is_post_enabled(self._settings):
            logger.info("RSVP posting disabled, keeping the response on this device")
            self._set(SubmissionStatus.SUCCESS, Messages.LOCAL_ONLY)
            return True

        self.cancel()
        token = CancellationToken()
        self._in_flight = token

        self._set(SubmissionStatus.SUBMITTING, Messages.SUBMITTING)

        try:
            payload = RsvpPayload.build(
                draft, guests=guests, wedding=self._wedding, submitted_at=self._clock()
            )
            url = self.endpoint
            logger.debug(f"Posting RSVP for {payload.name!r} to {url}")
            await post_json(
                url,
                payload.to_json(),
                cancellation=token,
                http_client_class=self._http_client_class,
                base_url=self._settings.APP_ORIGIN,
                timeout=self._settings.RSVP_HTTP_TIMEOUT_SECONDS,
            )
            if token.cancelled:
                return False
            self._set(SubmissionStatus.SUCCESS, Messages.SUCCESS)
            return True
        except RequestCancelled:
            return False
        except RsvpError as e:
            if token.cancelled:
                return False
            return self._handle_failure(e)
        finally:
            if self._in_flight is token:
                self._in_flight = None

    def _handle_failure(self, error: RsvpError) -> bool:
        if is_missing_local_backend(error, self._settings):
            logger.info("Local dev server has no RSVP route, keeping the response on this device")
            self._set(SubmissionStatus.SUCCESS, Messages.BACKEND_NOT_CONNECTED)
            return True

        if has_html_body(error):
            message = Messages.SERVER_ERROR
        elif isinstance(error, RsvpTransportError):
            message = Messages.SEND_FAILED
        elif isinstance(error, ApiError):
            message = error.message or Messages.SEND_FAILED
        else:
            message = str(error) or Messages.SEND_FAILED

        logger.warning(f"RSVP submission failed: {error!r}")
        self._set(SubmissionStatus.ERROR, message)
        return False

import pytest

from invitation.proxy import urls
from invitation.proxy.router import UpstreamResponse, get_rsvp_forwarder

VALID_BODY = {
    "wedding": {"groom": "Deividas", "bride": "Aistė", "dateISO": "2026-06-25T14:00:00+03:00"},
    "rsvp": {"name": "Jonas Jonaitis", "attending": "taip", "guests": 2, "diet": "", "note": ""},
    "submittedAtISO": "2026-05-01T10:00:00.000Z",
    "source": "web",
}


class MockForwarder:
    """Mock RSVP forwarder that records calls."""

    def __init__(self, response: UpstreamResponse | None = None, error: Exception | None = None):
        self.calls = []
        self.response = response or UpstreamResponse(status_code=200, body={"ok": True})
        self.error = error

    async def __call__(self, body: dict) -> UpstreamResponse:
        self.calls.append(body)
        if self.error is not None:
            raise self.error
        return self.response


def assert_cors_headers(response):
    assert response.headers["access-control-allow-origin"] == "*"
    assert response.headers["access-control-allow-methods"] == "POST, OPTIONS"
    assert response.headers["access-control-allow-headers"] == "Content-Type"


@pytest.mark.asyncio
async def test_forward_success(client_factory):
    forwarder = MockForwarder()

    async with client_factory({get_rsvp_forwarder: lambda: forwarder}) as client:
        response = await client.post(urls.RSVP_URL, json=VALID_BODY)

    assert response.status_code == 200
    assert response.json() == {"ok": True}
    assert forwarder.calls == [VALID_BODY]
    assert_cors_headers(response)


@pytest.mark.asyncio
async def test_numeric_string_guests_are_accepted(client_factory):
    forwarder = MockForwarder()
    body = {**VALID_BODY, "rsvp": {**VALID_BODY["rsvp"], "guests": "2"}}

    async with client_factory({get_rsvp_forwarder: lambda: forwarder}) as client:
        response = await client.post(urls.RSVP_URL, json=body)

    assert response.status_code == 200
    assert forwarder.calls[0]["rsvp"]["guests"] == "2"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "rsvp",
    [
        {"name": "  ", "attending": "taip", "guests": 2},
        {"name": "Jonas", "attending": "", "guests": 2},
        {"name": "Jonas", "attending": "taip", "guests": "many"},
        {"name": "Jonas", "attending": "taip"},
        {"name": 42, "attending": "taip", "guests": 2},
        None,
    ],
)
async def test_invalid_payload_is_rejected_without_forwarding(client_factory, rsvp):
    forwarder = MockForwarder()

    async with client_factory({get_rsvp_forwarder: lambda: forwarder}) as client:
        response = await client.post(urls.RSVP_URL, json={**VALID_BODY, "rsvp": rsvp})

    assert response.status_code == 400
    assert response.json() == {"ok": False, "error": "Invalid RSVP payload"}
    assert forwarder.calls == []
    assert_cors_headers(response)


@pytest.mark.asyncio
async def test_malformed_json_is_rejected(client_factory):
    forwarder = MockForwarder()

    async with client_factory({get_rsvp_forwarder: lambda: forwarder}) as client:
        response = await client.post(
            urls.RSVP_URL,
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

    assert response.status_code == 400
    assert forwarder.calls == []


@pytest.mark.asyncio
async def test_upstream_error_status_and_message_are_relayed(client_factory):
    forwarder = MockForwarder(
        UpstreamResponse(status_code=422, body={"ok": False, "error": "Duplicate RSVP"})
    )

    async with client_factory({get_rsvp_forwarder: lambda: forwarder}) as client:
        response = await client.post(urls.RSVP_URL, json=VALID_BODY)

    assert response.status_code == 422
    assert response.json() == {"ok": False, "error": "Duplicate RSVP"}


@pytest.mark.asyncio
async def test_upstream_text_error_is_relayed(client_factory):
    forwarder = MockForwarder(UpstreamResponse(status_code=503, body="Service Unavailable"))

    async with client_factory({get_rsvp_forwarder: lambda: forwarder}) as client:
        response = await client.post(urls.RSVP_URL, json=VALID_BODY)

    assert response.status_code == 503
    assert response.json()["error"] == "Service Unavailable"


@pytest.mark.asyncio
async def test_upstream_error_without_body_gets_generic_message(client_factory):
    forwarder = MockForwarder(UpstreamResponse(status_code=500, body=None))

    async with client_factory({get_rsvp_forwarder: lambda: forwarder}) as client:
        response = await client.post(urls.RSVP_URL, json=VALID_BODY)

    assert response.status_code == 500
    assert response.json() == {"ok": False, "error": "Upstream error (500)"}


@pytest.mark.asyncio
async def test_forwarder_failure_is_502(client_factory):
    forwarder = MockForwarder(error=RuntimeError("connection refused"))

    async with client_factory({get_rsvp_forwarder: lambda: forwarder}) as client:
        response = await client.post(urls.RSVP_URL, json=VALID_BODY)

    assert response.status_code == 502
    assert response.json() == {"ok": False, "error": "RSVP proxy failed"}
    assert_cors_headers(response)


@pytest.mark.asyncio
async def test_preflight_has_no_body(client_factory):
    async with client_factory() as client:
        response = await client.options(urls.RSVP_URL)

    assert response.status_code == 204
    assert response.content == b""
    assert_cors_headers(response)


@pytest.mark.asyncio
@pytest.mark.parametrize("method", ["GET", "PUT", "PATCH", "DELETE", "TRACE"])
async def test_other_methods_are_not_allowed(client_factory, method):
    async with client_factory() as client:
        response = await client.request(method, urls.RSVP_URL)

    assert response.status_code == 405
    assert response.headers["allow"] == "POST, OPTIONS"
    assert response.json() == {"ok": False, "error": "Method Not Allowed"}
    assert_cors_headers(response)


@pytest.mark.asyncio
async def test_head_is_not_allowed(client_factory):
    async with client_factory() as client:
        response = await client.head(urls.RSVP_URL)

    assert response.status_code == 405
    assert response.headers["allow"] == "POST, OPTIONS"
    assert_cors_headers(response)

"""
Tests for the form controller against a mocked contacts API (httpx.MockTransport)
and end to end against the ASGI app.
"""
import asyncio
import io
import json
import logging
from itertools import count

import httpx
import pytest
import pytest_asyncio

from contact_manager.client.api_client import ContactApiClient, ContactApiError
from contact_manager.client.controller import (
    NETWORK_ERROR_MESSAGE,
    STATUS_CLEAR_DELAY,
    SUCCESS_MESSAGE,
    ContactFormController,
)
from contact_manager.client.notifier import ConsoleNotifier, LoggingNotifier
from contact_manager.main import create_app

_ids = count(1)


class RecordingNotifier:
    def __init__(self):
        self.messages = []

    def alert(self, message):
        self.messages.append(message)


class FakeContactsApi:
    """In-memory stand-in for the contacts endpoints."""

    def __init__(self):
        self.contacts = []
        self.requests = []
        self.list_response = None
        self.create_response = None
        self.fail_with = None

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail_with is not None:
            raise self.fail_with("connection refused", request=request)
        if request.method == "GET":
            if self.list_response is not None:
                return self.list_response
            return httpx.Response(200, json=list(reversed(self.contacts)))
        if self.create_response is not None:
            return self.create_response
        body = json.loads(request.content)
        stamp = "2026-10-19T09:30:00.000Z"
        contact = {
            "_id": f"{next(_ids):024x}",
            "name": body["name"].strip(),
            "email": body["email"].strip(),
            "phone": body["phone"].strip(),
            "message": body.get("message") or "",
            "createdAt": stamp,
            "updatedAt": stamp,
        }
        self.contacts.append(contact)
        return httpx.Response(201, json=contact)

    @property
    def posts(self):
        return [r for r in self.requests if r.method == "POST"]


@pytest.fixture
def fake_api():
    return FakeContactsApi()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest_asyncio.fixture
async def controller(fake_api, notifier):
    api = ContactApiClient("http://api.test", transport=httpx.MockTransport(fake_api.handle))
    controller = ContactFormController(api, notifier, status_clear_delay=0.05)
    yield controller
    controller.close()
    await api.aclose()


def fill(controller, **values):
    for field, value in values.items():
        controller.change_field(field, value)


@pytest.mark.asyncio
async def test_load_populates_contacts(controller, fake_api):
    fake_api.contacts.append({
        "_id": "65f000000000000000000001",
        "name": "Ann",
        "email": "ann@x.com",
        "phone": "555",
        "message": "",
        "createdAt": "2026-10-19T09:30:00.000Z",
        "updatedAt": "2026-10-19T09:30:00.000Z",
    })

    await controller.load()

    assert [c.name for c in controller.state.contacts] == ["Ann"]
    assert fake_api.requests[0].url == "http://api.test/api/contacts"


@pytest.mark.asyncio
async def test_load_failure_leaves_list_empty_without_alert(controller, fake_api, notifier):
    fake_api.list_response = httpx.Response(500, json={"error": "Failed to fetch contacts"})

    await controller.load()

    assert controller.state.contacts == []
    assert notifier.messages == []


@pytest.mark.asyncio
async def test_load_network_failure_is_swallowed(controller, fake_api, notifier):
    fake_api.fail_with = httpx.ConnectError

    await controller.load()

    assert controller.state.contacts == []
    assert notifier.messages == []


@pytest.mark.asyncio
async def test_invalid_form_makes_no_request(controller, fake_api):
    fill(controller, name="", email="nope", phone="")

    saved = await controller.submit()

    assert saved is False
    assert fake_api.requests == []
    assert controller.state.errors == {
        "name": "Name is required",
        "email": "Please enter a valid email",
        "phone": "Phone is required",
    }


@pytest.mark.asyncio
async def test_successful_submit_resets_form_and_refreshes(controller, fake_api, notifier):
    fill(controller, name="Ann", email="ann@x.com", phone="555", message="hello")

    saved = await controller.submit()

    assert saved is True
    assert json.loads(fake_api.posts[0].content) == {
        "name": "Ann",
        "email": "ann@x.com",
        "phone": "555",
        "message": "hello",
    }
    assert controller.state.form == {"name": "", "email": "", "phone": "", "message": ""}
    assert controller.state.errors == {}
    assert controller.state.submit_status == SUCCESS_MESSAGE
    assert [c.name for c in controller.state.contacts] == ["Ann"]
    assert notifier.messages == []

    await asyncio.sleep(0.1)
    assert controller.state.submit_status == ""


@pytest.mark.asyncio
async def test_newer_success_keeps_status_for_full_delay(controller):
    fill(controller, name="Ann", email="ann@x.com", phone="555")
    await controller.submit()
    await asyncio.sleep(0.03)
    fill(controller, name="Bob", email="bob@x.com", phone="556")
    await controller.submit()

    await asyncio.sleep(0.03)
    assert controller.state.submit_status == SUCCESS_MESSAGE
    await asyncio.sleep(0.1)
    assert controller.state.submit_status == ""


@pytest.mark.asyncio
async def test_server_error_message_is_alerted(controller, fake_api, notifier):
    fake_api.create_response = httpx.Response(400, json={"error": "Path `name` is required."})
    fill(controller, name="Ann", email="ann@x.com", phone="555")

    saved = await controller.submit()

    assert saved is False
    assert notifier.messages == ["Error: Path `name` is required."]
    assert controller.state.form["name"] == "Ann"
    assert controller.state.submit_status == ""


@pytest.mark.asyncio
async def test_server_error_without_message_uses_fallback(controller, fake_api, notifier):
    fake_api.create_response = httpx.Response(500, json={})
    fill(controller, name="Ann", email="ann@x.com", phone="555")

    await controller.submit()

    assert notifier.messages == ["Error: Failed to save contact"]


@pytest.mark.asyncio
async def test_network_failure_is_alerted(controller, fake_api, notifier):
    fake_api.fail_with = httpx.ConnectError
    fill(controller, name="Ann", email="ann@x.com", phone="555")

    saved = await controller.submit()

    assert saved is False
    assert notifier.messages == [NETWORK_ERROR_MESSAGE]
    assert controller.state.form["email"] == "ann@x.com"


@pytest.mark.asyncio
async def test_on_change_runs_after_state_changes(fake_api, notifier):
    renders = []
    api = ContactApiClient("http://api.test", transport=httpx.MockTransport(fake_api.handle))
    controller = ContactFormController(api, notifier, on_change=lambda s: renders.append(dict(s.form)))

    controller.change_field("name", "A")
    await controller.load()

    assert renders == [form_with(name="A"), form_with(name="A")]
    await api.aclose()


def form_with(**values):
    base = {"name": "", "email": "", "phone": "", "message": ""}
    base.update(values)
    return base


@pytest.mark.asyncio
async def test_api_client_raises_with_server_message(fake_api):
    fake_api.create_response = httpx.Response(400, json={"error": "Name, email, and phone are required"})
    async with ContactApiClient("http://api.test/", transport=httpx.MockTransport(fake_api.handle)) as api:
        with pytest.raises(ContactApiError) as exc_info:
            await api.create_contact({"name": ""})

    assert exc_info.value.status_code == 400
    assert exc_info.value.message == "Name, email, and phone are required"


@pytest.mark.asyncio
async def test_submit_against_running_app(database, settings, notifier):
    app = create_app(database=database, settings=settings)
    api = ContactApiClient("http://testserver", transport=httpx.ASGITransport(app=app))
    controller = ContactFormController(api, notifier, status_clear_delay=0.01)
    try:
        await controller.load()
        assert controller.state.contacts == []

        fill(controller, name=" Ann ", email="ann@x.com", phone="555")
        assert await controller.submit() is True

        fill(controller, name="Bob", email="bob@y.org", phone="556", message="later")
        assert await controller.submit() is True

        assert [c.name for c in controller.state.contacts] == ["Bob", "Ann"]
        assert controller.state.contacts[0].message == "later"
        assert notifier.messages == []
    finally:
        controller.close()
        await api.aclose()


def test_console_notifier_writes_alert():
    stream = io.StringIO()

    ConsoleNotifier(stream).alert("Error: Server error")

    assert "Error: Server error" in stream.getvalue()


def test_logging_notifier_logs_alert(caplog):
    with caplog.at_level(logging.WARNING, logger="contact_manager.client.notifier"):
        LoggingNotifier().alert(NETWORK_ERROR_MESSAGE)

    assert NETWORK_ERROR_MESSAGE in caplog.text


@pytest.mark.parametrize("body", [None, 42, {"contacts": []}])
@pytest.mark.asyncio
async def test_non_list_body_leaves_contacts_unchanged(controller, fake_api, notifier, body):
    await controller.load()
    fill(controller, name="Ann", email="ann@x.com", phone="555")
    await controller.submit()
    fake_api.list_response = httpx.Response(200, json=body)

    await controller.load()

    assert [c.name for c in controller.state.contacts] == ["Ann"]
    assert notifier.messages == []


@pytest.mark.asyncio
async def test_api_client_rejects_non_list_body(fake_api):
    fake_api.list_response = httpx.Response(200, json=None)
    async with ContactApiClient("http://api.test", transport=httpx.MockTransport(fake_api.handle)) as api:
        with pytest.raises(ContactApiError) as exc_info:
            await api.list_contacts()

    assert exc_info.value.message == "Failed to fetch contacts"
    assert exc_info.value.status_code == 200


def test_status_message_clears_after_three_seconds_by_default(notifier):
    controller = ContactFormController(ContactApiClient("http://api.test"), notifier)

    assert STATUS_CLEAR_DELAY == 3.0
    assert controller.status_clear_delay == STATUS_CLEAR_DELAY

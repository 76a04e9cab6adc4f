"""
Form controller: drives ContactFormState through load, edit and submit against the contacts API.
Runs on the asyncio loop; callers re-render through the on_change hook.
"""

import asyncio
import logging
from typing import Callable

import httpx

from contact_manager.client.api_client import ContactApiClient, ContactApiError
from contact_manager.client.notifier import Notifier
from contact_manager.client.state import ContactFormState, validate_form

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "✅ Contact saved successfully!"
NETWORK_ERROR_MESSAGE = "❌ Network error. Please check your internet connection."
STATUS_CLEAR_DELAY = 3.0


class ContactFormController:
    def __init__(
        self,
        api: ContactApiClient,
        notifier: Notifier,
        state: ContactFormState | None = None,
        *,
        status_clear_delay: float = STATUS_CLEAR_DELAY,
        on_change: Callable[[ContactFormState], None] | None = None,
    ) -> None:
        self.api = api
        self.notifier = notifier
        self.state = state or ContactFormState()
        self.status_clear_delay = status_clear_delay
        self._on_change = on_change
        self._status_timer: asyncio.TimerHandle | None = None

    def _render(self) -> None:
        if self._on_change is not None:
            self._on_change(self.state)

    async def load(self) -> None:
        await self.refresh_contacts()

    async def refresh_contacts(self) -> None:
        """Fetch the list. Failures are logged only; the last known list stays on screen."""
        try:
            contacts = await self.api.list_contacts()
        except (ContactApiError, httpx.HTTPError, ValueError) as e:
            logger.error("Failed to fetch contacts: %s", e)
            return
        self.state.set_contacts(contacts)
        self._render()

    def change_field(self, name: str, value: str) -> None:
        self.state.change_field(name, value)
        self._render()

    def validate(self) -> dict[str, str]:
        errors = validate_form(self.state.form)
        self.state.apply_errors(errors)
        self._render()
        return errors

    async def submit(self) -> bool:
        """Validate, then POST the form. Returns True when the contact was saved."""
        if self.validate():
            return False

        try:
            await self.api.create_contact(self.state.payload())
        except ContactApiError as e:
            self.notifier.alert(f"Error: {e.message}")
            return False
        except (httpx.TransportError, ValueError) as e:
            logger.warning("Submit failed: %s", e)
            self.notifier.alert(NETWORK_ERROR_MESSAGE)
            return False

        self.state.reset_form()
        self.state.set_status(SUCCESS_MESSAGE)
        self._schedule_status_clear()
        self._render()
        await self.refresh_contacts()
        return True

    def _schedule_status_clear(self) -> None:
        if self._status_timer is not None:
            self._status_timer.cancel()
        loop = asyncio.get_running_loop()
        self._status_timer = loop.call_later(self.status_clear_delay, self._clear_status)

    def _clear_status(self) -> None:
        self._status_timer = None
        self.state.clear_status()
        self._render()

    def close(self) -> None:
        """Cancel the pending status timer, if any."""
        if self._status_timer is not None:
            self._status_timer.cancel()
            self._status_timer = None

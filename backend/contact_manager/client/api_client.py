"""
HTTP client for the contacts API (httpx, async).
No timeout unless one is passed; transport failures propagate as httpx.TransportError.
"""

import logging
from typing import Any

import httpx
from pydantic import TypeAdapter

from contact_manager.schemas.contact import Contact

logger = logging.getLogger(__name__)

CONTACTS_PATH = "/api/contacts"
SAVE_FAILED_MESSAGE = "Failed to save contact"
FETCH_FAILED_MESSAGE = "Failed to fetch contacts"

_contact_list = TypeAdapter(list[Contact])


class ContactApiError(Exception):
    """Raised when the contacts API answers with a non-success status or an unreadable body."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


def _error_message(response: httpx.Response, fallback: str) -> str:
    try:
        body = response.json()
    except ValueError:
        return fallback
    if isinstance(body, dict) and isinstance(body.get("error"), str) and body["error"]:
        return body["error"]
    return fallback


class ContactApiClient:
    def __init__(
        self,
        base_url: str,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            transport=transport,
            timeout=timeout,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    async def list_contacts(self) -> list[Contact]:
        """GET /api/contacts"""
        response = await self._client.get(CONTACTS_PATH)
        if not response.is_success:
            raise ContactApiError(_error_message(response, FETCH_FAILED_MESSAGE), response.status_code)
        try:
            return _contact_list.validate_python(response.json())
        except ValueError as e:
            logger.warning("Unreadable contact list: %s", e)
            raise ContactApiError(FETCH_FAILED_MESSAGE, response.status_code) from e

    async def create_contact(self, form: dict[str, Any]) -> Contact:
        """POST /api/contacts"""
        response = await self._client.post(CONTACTS_PATH, json=form)
        if not response.is_success:
            message = _error_message(response, SAVE_FAILED_MESSAGE)
            logger.warning("Create contact rejected (%s): %s", response.status_code, message)
            raise ContactApiError(message, response.status_code)
        return Contact.model_validate(response.json())

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "ContactApiClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

"""
Console front-end for the contact form: prompts for fields, shows inline errors,
and lists saved contacts after every successful submit.

    contact-form            # uses CONTACTS_API_URL (default http://localhost:5000)
"""

import asyncio
import logging
import sys

from contact_manager.client.api_client import ContactApiClient
from contact_manager.client.controller import ContactFormController
from contact_manager.client.notifier import ConsoleNotifier
from contact_manager.client.state import FORM_FIELDS, ContactFormState
from contact_manager.core.config import get_settings

logger = logging.getLogger(__name__)

FIELD_LABELS = {
    "name": "Full Name",
    "email": "Email Address",
    "phone": "Phone Number",
    "message": "Message (Optional)",
}


def render_contacts(state: ContactFormState) -> str:
    lines = ["Saved Contacts", "--------------"]
    if not state.contacts:
        lines.append("No contacts yet.")
        return "\n".join(lines)
    for contact in state.contacts:
        lines.append(contact.name)
        lines.append(f"  {contact.email} | {contact.phone}")
        if contact.message:
            lines.append(f"  “{contact.message}”")
    return "\n".join(lines)


def render_form(state: ContactFormState) -> str:
    lines = ["Add New Contact", "---------------"]
    for field in FORM_FIELDS:
        lines.append(f"{FIELD_LABELS[field]}: {state.form[field]}")
        if state.errors.get(field):
            lines.append(f"  ! {state.errors[field]}")
    lines.append("[Submit Contact]" if state.can_submit else "[Submit Contact] (disabled)")
    return "\n".join(lines)


def render(state: ContactFormState) -> str:
    parts = ["Contact Manager", "==============="]
    if state.submit_status:
        parts.append(state.submit_status)
    parts.append(render_form(state))
    parts.append(render_contacts(state))
    return "\n\n".join(parts)


async def _prompt(label: str) -> str:
    return await asyncio.to_thread(input, f"{label}: ")


async def run_console(api_url: str | None = None) -> None:
    api = ContactApiClient(api_url or get_settings().contacts_api_url)
    controller = ContactFormController(api, ConsoleNotifier())
    try:
        await controller.load()
        print(render(controller.state))
        while True:
            for field in FORM_FIELDS:
                controller.change_field(field, await _prompt(FIELD_LABELS[field]))
            if controller.state.can_submit:
                await controller.submit()
            else:
                controller.validate()
            print(render(controller.state))
            answer = (await _prompt("Add another? [Y/n]")).strip().lower()
            if answer in ("n", "no", "q", "quit"):
                break
    except (EOFError, KeyboardInterrupt):
        print()
    finally:
        controller.close()
        await api.aclose()


def main() -> None:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(levelname)s:     %(message)s",
        stream=sys.stderr,
    )
    asyncio.run(run_console(settings.contacts_api_url))


if __name__ == "__main__":
    main()

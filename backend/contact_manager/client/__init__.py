# Contact form client: state container, API client and controller

from contact_manager.client.api_client import ContactApiClient, ContactApiError
from contact_manager.client.controller import ContactFormController
from contact_manager.client.notifier import ConsoleNotifier, LoggingNotifier, Notifier
from contact_manager.client.state import ContactFormState, is_form_valid, validate_form

__all__ = [
    "ContactApiClient",
    "ContactApiError",
    "ContactFormController",
    "ConsoleNotifier",
    "LoggingNotifier",
    "Notifier",
    "ContactFormState",
    "is_form_valid",
    "validate_form",
]

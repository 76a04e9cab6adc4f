"""
Form client state: field values, per-field errors, fetched contacts and the status banner.
Validation mirrors the server's rules so invalid input never leaves the client.
"""

from typing import Mapping

from contact_manager.schemas.contact import Contact, is_valid_email

FORM_FIELDS = ("name", "email", "phone", "message")

NAME_REQUIRED = "Name is required"
EMAIL_REQUIRED = "Email is required"
EMAIL_INVALID = "Please enter a valid email"
PHONE_REQUIRED = "Phone is required"


def empty_form() -> dict[str, str]:
    return {field: "" for field in FORM_FIELDS}


def validate_form(values: Mapping[str, str]) -> dict[str, str]:
    """Field -> message for every failing field. A missing key means the field passed."""
    errors: dict[str, str] = {}
    if not values.get("name", "").strip():
        errors["name"] = NAME_REQUIRED
    email = values.get("email", "")
    if not email.strip():
        errors["email"] = EMAIL_REQUIRED
    elif not is_valid_email(email):
        errors["email"] = EMAIL_INVALID
    if not values.get("phone", "").strip():
        errors["phone"] = PHONE_REQUIRED
    return errors


def is_form_valid(values: Mapping[str, str]) -> bool:
    """Whether the submit control is enabled. Does not look at current error messages."""
    return bool(
        values.get("name", "").strip()
        and values.get("phone", "").strip()
        and is_valid_email(values.get("email", ""))
    )


class ContactFormState:
    """Transient UI state. Mutations replace dicts rather than editing them in place."""

    def __init__(self) -> None:
        self.form: dict[str, str] = empty_form()
        self.errors: dict[str, str] = {}
        self.contacts: list[Contact] = []
        self.submit_status: str = ""

    def change_field(self, name: str, value: str) -> None:
        if name not in FORM_FIELDS:
            raise KeyError(name)
        self.form = {**self.form, name: value}
        if self.errors.get(name):
            self.errors = {k: v for k, v in self.errors.items() if k != name}

    def apply_errors(self, errors: Mapping[str, str]) -> None:
        self.errors = dict(errors)

    def reset_form(self) -> None:
        self.form = empty_form()

    def set_contacts(self, contacts: list[Contact]) -> None:
        self.contacts = list(contacts)

    def set_status(self, message: str) -> None:
        self.submit_status = message

    def clear_status(self) -> None:
        self.submit_status = ""

    def payload(self) -> dict[str, str]:
        return dict(self.form)

    @property
    def can_submit(self) -> bool:
        return is_form_valid(self.form)

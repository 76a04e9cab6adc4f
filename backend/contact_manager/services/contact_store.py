"""
Contact record store on MongoDB.
Validates and normalizes candidates, stamps timestamps, and lists newest first.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Mapping

from fastapi import Request
from pydantic import ValidationError
from pymongo import DESCENDING
from pymongo.errors import PyMongoError

from contact_manager.db.mongo import get_contacts_collection
from contact_manager.schemas.contact import Contact, ContactCandidate

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


class ContactStoreError(Exception):
    """Raised when the contact store cannot complete an operation."""

    def __init__(self, message: str, detail: Any = None) -> None:
        self.message = message
        self.detail = detail
        super().__init__(message)


class ContactValidationError(ContactStoreError):
    """Raised when a candidate violates the contact schema. errors maps field -> message."""

    def __init__(self, errors: dict[str, str]) -> None:
        self.errors = errors
        super().__init__(", ".join(errors.values()), detail=errors)

    @classmethod
    def from_pydantic(cls, exc: ValidationError) -> "ContactValidationError":
        errors: dict[str, str] = {}
        for err in exc.errors():
            field = str(err["loc"][0]) if err.get("loc") else "__root__"
            errors.setdefault(field, err["msg"])
        return cls(errors)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _to_millis(value: datetime) -> datetime:
    # BSON dates hold milliseconds; trim so the returned document equals the stored one.
    return value.replace(microsecond=value.microsecond - value.microsecond % 1000)


class ContactStore:
    """
    Contacts collection wrapper. The database handle is injected (motor database or
    a compatible async handle); nothing here holds process-wide state.
    """

    def __init__(self, database: Any, clock: Clock | None = None) -> None:
        self._database = database
        self._clock = clock or _utc_now

    @property
    def collection(self):
        if self._database is None:
            raise ContactStoreError("Database not configured. Set MONGODB_URI in environment.")
        return get_contacts_collection(self._database)

    async def create_contact(self, candidate: Mapping[str, Any]) -> Contact:
        """Validate, stamp and insert one contact. Returns the stored document."""
        try:
            fields = ContactCandidate.model_validate(dict(candidate))
        except ValidationError as e:
            raise ContactValidationError.from_pydantic(e) from e

        now = _to_millis(self._clock())
        document: dict[str, Any] = {
            "name": fields.name,
            "email": fields.email,
            "phone": fields.phone,
            "message": fields.message,
            "createdAt": now,
            "updatedAt": now,
        }
        try:
            result = await self.collection.insert_one(document)
        except PyMongoError as e:
            raise ContactStoreError("Failed to insert contact", detail=str(e)) from e
        document["_id"] = result.inserted_id
        logger.info("Created contact %s", result.inserted_id)
        return Contact.model_validate(document)

    async def list_contacts(self) -> list[Contact]:
        """All contacts, most recently created first."""
        contacts: list[Contact] = []
        try:
            cursor = self.collection.find({}).sort([("createdAt", DESCENDING), ("_id", DESCENDING)])
            async for doc in cursor:
                contacts.append(Contact.model_validate(doc))
        except PyMongoError as e:
            raise ContactStoreError("Failed to list contacts", detail=str(e)) from e
        return contacts


def get_contact_store(request: Request) -> ContactStore:
    """Dependency for FastAPI: store over the database handle attached to the app."""
    return ContactStore(getattr(request.app.state, "database", None))

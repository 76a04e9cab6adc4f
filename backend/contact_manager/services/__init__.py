# Services: contact store

from contact_manager.services.contact_store import (
    ContactStore,
    ContactStoreError,
    ContactValidationError,
    get_contact_store,
)

__all__ = [
    "ContactStore",
    "ContactStoreError",
    "ContactValidationError",
    "get_contact_store",
]

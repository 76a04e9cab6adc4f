# Pydantic request/response schemas (API contract). Shared by the API server and the form client.

from contact_manager.schemas.common import ErrorResponse
from contact_manager.schemas.contact import (
    EMAIL_PATTERN,
    Contact,
    ContactCandidate,
    is_valid_email,
)

__all__ = [
    "ErrorResponse",
    "EMAIL_PATTERN",
    "Contact",
    "ContactCandidate",
    "is_valid_email",
]

"""
Common Pydantic schemas.
"""

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Every API error body has this shape."""
    error: str

"""
Aggregate API routes.

Convention: Use "" (not "/") for the root path of a segment (e.g. @router.get(""), @router.post(""))
so the route is /api/contacts not /api/contacts/. This avoids 307 redirects when the
request arrives without a trailing slash.
"""

from fastapi import APIRouter

from contact_manager.api.endpoints import contacts

api_router = APIRouter()

api_router.include_router(contacts.router, prefix="")

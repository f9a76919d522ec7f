"""
API routes for the contacts service.
"""

from fastapi import APIRouter

from app.api.contacts import router as contacts_router

# Main API router
api_router = APIRouter(prefix="/api")

# Include sub-routers
api_router.include_router(contacts_router, tags=["Contacts"])

__all__ = ["api_router"]

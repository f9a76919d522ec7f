"""
Business logic services.
"""

from app.services.contact_query import ContactFilter, PageRequest
from app.services.contact_service import ContactService

__all__ = [
    "ContactFilter",
    "ContactService",
    "PageRequest",
]

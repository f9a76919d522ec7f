"""
Pydantic schemas for API request/response validation.
"""

from app.schemas.contact import (
    CategoryCount,
    CategoryDeleteResponse,
    ContactPage,
    ContactProjection,
    ContactRequest,
    ContactResponse,
)

__all__ = [
    "CategoryCount",
    "CategoryDeleteResponse",
    "ContactPage",
    "ContactProjection",
    "ContactRequest",
    "ContactResponse",
]

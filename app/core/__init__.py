"""
Core utilities shared across layers.
"""

from app.core.exceptions import (
    ContactNotFoundError,
    ContactsAPIError,
    InvalidQueryError,
)

__all__ = [
    "ContactNotFoundError",
    "ContactsAPIError",
    "InvalidQueryError",
]

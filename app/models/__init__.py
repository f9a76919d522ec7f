"""
SQLAlchemy models for the contacts service.
"""

from app.models.contact import Contact

__all__ = [
    "Contact",
]

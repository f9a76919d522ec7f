"""
Conversion between stored contacts and their wire representation.
"""

from typing import Any

from app.models import Contact
from app.schemas.contact import ContactProjection, ContactRequest, ContactResponse

# Columns selected for projection queries, in ContactProjection field order.
PROJECTION_COLUMNS = (
    Contact.id,
    Contact.first_name,
    Contact.last_name,
    Contact.phone_no,
    Contact.email,
    Contact.category,
)


def contact_from_request(request: ContactRequest) -> Contact:
    """Build a new, unsaved contact. The store assigns id and creation date."""
    return Contact(
        first_name=request.first_name,
        last_name=request.last_name,
        phone_no=request.phone_no,
        email=str(request.email),
        is_active=True if request.is_active is None else request.is_active,
        category=request.category,
    )


def apply_contact_update(contact: Contact, request: ContactRequest) -> Contact:
    """
    Overwrite the mutable fields of `contact` from `request`.

    The active flag is kept when the request omits it; id and creation date
    are never touched.
    """
    contact.first_name = request.first_name
    contact.last_name = request.last_name
    contact.phone_no = request.phone_no
    contact.email = str(request.email)
    contact.category = request.category
    if request.is_active is not None:
        contact.is_active = request.is_active
    return contact


def contact_to_response(contact: Contact) -> ContactResponse:
    return ContactResponse(
        id=contact.id,
        first_name=contact.first_name,
        last_name=contact.last_name,
        phone_no=contact.phone_no,
        email=contact.email,
        is_active=contact.is_active,
        category=contact.category,
        creation_date=contact.creation_date,
    )


def row_to_projection(row: Any) -> ContactProjection:
    """Map a row selected with PROJECTION_COLUMNS."""
    return ContactProjection(
        id=row.id,
        first_name=row.first_name,
        last_name=row.last_name,
        phone_no=row.phone_no,
        email=row.email,
        category=row.category,
    )

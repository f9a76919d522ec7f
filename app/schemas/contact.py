"""
Contact-related Pydantic schemas.

Wire names are camelCase (``firstName``, ``isActive``...); requests are also
accepted with snake_case field names.
"""

from datetime import datetime
from typing import Annotated, Optional

from email_validator import EmailNotValidError, validate_email
from pydantic import AfterValidator, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def _check_email_syntax(value: str) -> str:
    """Reject malformed addresses but keep the caller's spelling."""
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError as exc:
        raise ValueError(str(exc)) from exc
    return value


# Stored exactly as sent, so lookups by the submitted address match.
ContactEmail = Annotated[str, Field(max_length=320), AfterValidator(_check_email_syntax)]


class CamelModel(BaseModel):
    """Base schema serialising field names as camelCase."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ContactRequest(CamelModel):
    """
    Body for creating or replacing a contact.

    Any ``id`` or ``creationDate`` sent by the client is ignored; both are
    assigned by the server.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    first_name: str = Field(min_length=1, max_length=255)
    last_name: str = Field(min_length=1, max_length=255)
    phone_no: str = Field(min_length=1, max_length=50)
    email: ContactEmail
    is_active: Optional[bool] = None
    category: str = Field(
        min_length=1,
        max_length=100,
        description="Free-text label such as work, family, client",
    )


class ContactResponse(CamelModel):
    """Response representing a stored contact."""

    id: int
    first_name: str
    last_name: str
    phone_no: str
    email: str
    is_active: bool
    category: str
    creation_date: datetime


class ContactProjection(CamelModel):
    """Reduced read-only view of a contact."""

    id: int
    first_name: str
    last_name: str
    phone_no: str
    email: str
    category: str


class ContactPage(CamelModel):
    """One page of contacts plus paging metadata."""

    contacts: list[ContactResponse]
    total: int
    page: int
    size: int
    total_pages: int
    sort_by: str
    sort_direction: str
    first: bool
    last: bool


class CategoryCount(CamelModel):
    """Number of contacts carrying a category label."""

    category: str
    count: int


class CategoryDeleteResponse(CamelModel):
    """Result of a bulk delete by category."""

    category: str
    deleted: int

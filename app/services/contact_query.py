"""
Filter and pagination building blocks for contact queries.

Every lookup the service exposes is expressed as a `ContactFilter` (which
criteria apply) plus, for paginated lookups, a `PageRequest` (which slice and
in which order). Both are turned into SQLAlchemy clauses here so the service
only has one parametrized query path.
"""

import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Optional, Sequence

from sqlalchemy import ColumnElement, Select, String, false, func, or_

from app.core.exceptions import InvalidQueryError
from app.models import Contact

DEFAULT_PAGE_SIZE = 10
DEFAULT_SORT_BY = "creationDate"

# Wire name -> mapped column. Column names are accepted as aliases below.
SORTABLE_FIELDS = {
    "id": Contact.id,
    "firstName": Contact.first_name,
    "lastName": Contact.last_name,
    "phoneNo": Contact.phone_no,
    "email": Contact.email,
    "isActive": Contact.is_active,
    "category": Contact.category,
    "creationDate": Contact.creation_date,
}
_SORT_ALIASES = {
    **{name: name for name in SORTABLE_FIELDS},
    "first_name": "firstName",
    "last_name": "lastName",
    "phone_no": "phoneNo",
    "is_active": "isActive",
    "creation_date": "creationDate",
}


def as_utc(value: datetime) -> datetime:
    """Normalise a timestamp to aware UTC; naive values are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


@dataclass
class ContactFilter:
    """
    Optional criteria over the contact set.

    A field left as None does not restrict the result; all set fields are
    combined with AND. `is_active` is three-state: True, False or unset.
    """

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    first_name_contains: Optional[str] = None
    last_name_contains: Optional[str] = None
    name_contains: Optional[str] = None
    category: Optional[str] = None
    categories: Optional[Sequence[str]] = None
    is_active: Optional[bool] = None
    email: Optional[str] = None
    phone_no: Optional[str] = None
    email_domain: Optional[str] = None
    created_after: Optional[datetime] = None
    created_from: Optional[datetime] = None
    created_to: Optional[datetime] = None


def _icontains(column: Any, value: str) -> ColumnElement[bool]:
    return func.lower(column, type_=String).contains(value.lower(), autoescape=True)


def build_conditions(criteria: ContactFilter) -> list[ColumnElement[bool]]:
    """Translate the set fields of `criteria` into WHERE conditions."""
    conditions: list[ColumnElement[bool]] = []

    if criteria.first_name is not None:
        conditions.append(Contact.first_name == criteria.first_name)
    if criteria.last_name is not None:
        conditions.append(Contact.last_name == criteria.last_name)
    if criteria.first_name_contains is not None:
        conditions.append(_icontains(Contact.first_name, criteria.first_name_contains))
    if criteria.last_name_contains is not None:
        conditions.append(_icontains(Contact.last_name, criteria.last_name_contains))
    if criteria.name_contains is not None:
        conditions.append(
            or_(
                _icontains(Contact.first_name, criteria.name_contains),
                _icontains(Contact.last_name, criteria.name_contains),
            )
        )
    if criteria.category is not None:
        conditions.append(Contact.category == criteria.category)
    if criteria.categories is not None:
        if criteria.categories:
            conditions.append(Contact.category.in_(list(criteria.categories)))
        else:
            conditions.append(false())
    if criteria.is_active is not None:
        conditions.append(Contact.is_active.is_(criteria.is_active))
    if criteria.email is not None:
        conditions.append(Contact.email == criteria.email)
    if criteria.phone_no is not None:
        conditions.append(Contact.phone_no == criteria.phone_no)
    if criteria.email_domain is not None:
        conditions.append(
            Contact.email.endswith(f"@{criteria.email_domain}", autoescape=True)
        )
    if criteria.created_after is not None:
        conditions.append(Contact.creation_date > as_utc(criteria.created_after))
    if criteria.created_from is not None:
        conditions.append(Contact.creation_date >= as_utc(criteria.created_from))
    if criteria.created_to is not None:
        conditions.append(Contact.creation_date <= as_utc(criteria.created_to))

    return conditions


def apply_filter(stmt: Select, criteria: Optional[ContactFilter]) -> Select:
    """Attach the conditions of `criteria` to `stmt`."""
    if criteria is None:
        return stmt
    conditions = build_conditions(criteria)
    if conditions:
        stmt = stmt.where(*conditions)
    return stmt


@dataclass(frozen=True)
class PageRequest:
    """A zero-based page index, a page size and a sort order."""

    page: int = 0
    size: int = DEFAULT_PAGE_SIZE
    sort_by: str = DEFAULT_SORT_BY
    direction: str = "DESC"

    @classmethod
    def from_params(
        cls,
        page: int = 0,
        size: int = DEFAULT_PAGE_SIZE,
        sort_by: Optional[str] = DEFAULT_SORT_BY,
        sort_direction: Optional[str] = "DESC",
        max_size: Optional[int] = None,
    ) -> "PageRequest":
        """
        Validate raw request parameters.

        Negative page indexes and unknown sort fields are rejected; the size
        is clamped to ``[1, max_size]``; any direction other than a
        case-insensitive "ASC" means descending.
        """
        if page < 0:
            raise InvalidQueryError(f"Page index must not be negative, got {page}")

        size = max(size, 1)
        if max_size is not None:
            size = min(size, max_size)

        key = (sort_by or DEFAULT_SORT_BY).strip()
        canonical = _SORT_ALIASES.get(key)
        if canonical is None:
            allowed = ", ".join(SORTABLE_FIELDS)
            raise InvalidQueryError(f"Cannot sort by '{key}'. Allowed fields: {allowed}")

        direction = "ASC" if (sort_direction or "").strip().upper() == "ASC" else "DESC"
        return cls(page=page, size=size, sort_by=canonical, direction=direction)

    @property
    def offset(self) -> int:
        return self.page * self.size

    def order_by(self) -> list[ColumnElement]:
        """Sort clauses, with the primary key as tie-breaker."""
        column = SORTABLE_FIELDS[self.sort_by]
        ascending = self.direction == "ASC"
        clauses = [column.asc() if ascending else column.desc()]
        if self.sort_by != "id":
            clauses.append(Contact.id.asc() if ascending else Contact.id.desc())
        return clauses

    def total_pages(self, total: int) -> int:
        return math.ceil(total / self.size) if total else 0

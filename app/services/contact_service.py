"""
Contact management service.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional, Sequence

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings, get_settings
from app.core.exceptions import ContactNotFoundError, InvalidQueryError
from app.models import Contact
from app.schemas.contact import (
    CategoryCount,
    ContactPage,
    ContactProjection,
    ContactRequest,
    ContactResponse,
)
from app.services.contact_mapping import (
    PROJECTION_COLUMNS,
    apply_contact_update,
    contact_from_request,
    contact_to_response,
    row_to_projection,
)
from app.services.contact_query import ContactFilter, PageRequest, apply_filter

logger = logging.getLogger(__name__)


class ContactService:
    """
    Service for storing and querying contacts.

    Every lookup funnels into one of three query paths:
    - `_find`: all matching contacts as a list
    - `_find_page`: one ordered page plus the total match count
    - `_count`: number of matching contacts

    Write operations commit their own transaction.
    """

    def __init__(self, db: AsyncSession, settings: Optional[Settings] = None):
        self.db = db
        self.settings = settings or get_settings()

    # ------------------------------------------------------------------
    # Query paths
    # ------------------------------------------------------------------

    async def _find(
        self,
        criteria: Optional[ContactFilter] = None,
        newest_first: bool = False,
    ) -> list[ContactResponse]:
        stmt = apply_filter(select(Contact), criteria)
        if newest_first:
            stmt = stmt.order_by(Contact.creation_date.desc(), Contact.id.desc())
        else:
            stmt = stmt.order_by(Contact.id.asc())

        result = await self.db.execute(stmt)
        return [contact_to_response(c) for c in result.scalars().all()]

    async def _find_one(self, criteria: ContactFilter) -> Optional[ContactResponse]:
        stmt = apply_filter(select(Contact), criteria).order_by(Contact.id.asc()).limit(1)
        result = await self.db.execute(stmt)
        contact = result.scalar_one_or_none()
        return contact_to_response(contact) if contact else None

    async def _count(self, criteria: Optional[ContactFilter] = None) -> int:
        stmt = apply_filter(select(func.count(Contact.id)), criteria)
        result = await self.db.execute(stmt)
        return int(result.scalar() or 0)

    async def _find_page(
        self,
        criteria: Optional[ContactFilter],
        page_request: PageRequest,
    ) -> ContactPage:
        total = await self._count(criteria)

        stmt = (
            apply_filter(select(Contact), criteria)
            .order_by(*page_request.order_by())
            .offset(page_request.offset)
            .limit(page_request.size)
        )
        result = await self.db.execute(stmt)
        contacts = [contact_to_response(c) for c in result.scalars().all()]

        total_pages = page_request.total_pages(total)
        return ContactPage(
            contacts=contacts,
            total=total,
            page=page_request.page,
            size=page_request.size,
            total_pages=total_pages,
            sort_by=page_request.sort_by,
            sort_direction=page_request.direction,
            first=page_request.page == 0,
            last=page_request.page >= total_pages - 1,
        )

    async def _projections(self, criteria: ContactFilter) -> list[ContactProjection]:
        stmt = apply_filter(select(*PROJECTION_COLUMNS), criteria).order_by(Contact.id.asc())
        result = await self.db.execute(stmt)
        return [row_to_projection(row) for row in result.all()]

    # ------------------------------------------------------------------
    # CRUD
    # ------------------------------------------------------------------

    async def create_contact(self, request: ContactRequest) -> ContactResponse:
        contact = contact_from_request(request)
        self.db.add(contact)
        await self.db.commit()
        await self.db.refresh(contact)

        logger.info("Created contact id=%s category=%s", contact.id, contact.category)
        return contact_to_response(contact)

    async def get_contact(self, contact_id: int) -> Optional[ContactResponse]:
        contact = await self.db.get(Contact, contact_id)
        return contact_to_response(contact) if contact else None

    async def list_contacts(self) -> list[ContactResponse]:
        return await self._find()

    async def update_contact(
        self,
        contact_id: int,
        request: ContactRequest,
    ) -> ContactResponse:
        """
        Replace the mutable fields of a contact.

        Raises:
            ContactNotFoundError: no contact has `contact_id`.
        """
        contact = await self.db.get(Contact, contact_id)
        if contact is None:
            logger.warning("Update requested for missing contact id=%s", contact_id)
            raise ContactNotFoundError(contact_id)

        apply_contact_update(contact, request)
        await self.db.commit()
        await self.db.refresh(contact)

        logger.info("Updated contact id=%s", contact.id)
        return contact_to_response(contact)

    async def delete_contact(self, contact_id: int) -> bool:
        """Delete a contact. Returns False when it did not exist."""
        contact = await self.db.get(Contact, contact_id)
        if contact is None:
            return False

        await self.db.delete(contact)
        await self.db.commit()

        logger.info("Deleted contact id=%s", contact_id)
        return True

    async def delete_contacts_by_category(self, category: str) -> int:
        result = await self.db.execute(delete(Contact).where(Contact.category == category))
        await self.db.commit()

        logger.info("Deleted %s contacts in category=%s", result.rowcount, category)
        return result.rowcount

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    async def get_contacts_by_first_name(self, first_name: str) -> list[ContactResponse]:
        return await self._find(ContactFilter(first_name=first_name))

    async def get_contacts_by_last_name(self, last_name: str) -> list[ContactResponse]:
        return await self._find(ContactFilter(last_name=last_name))

    async def get_contact_by_email(self, email: str) -> Optional[ContactResponse]:
        """Email is not unique; the oldest contact (lowest id) wins."""
        return await self._find_one(ContactFilter(email=email))

    async def get_contact_by_phone(self, phone_no: str) -> Optional[ContactResponse]:
        return await self._find_one(ContactFilter(phone_no=phone_no))

    async def get_contacts_by_category(self, category: str) -> list[ContactResponse]:
        return await self._find(ContactFilter(category=category))

    async def get_newest_contacts_by_category(self, category: str) -> list[ContactResponse]:
        return await self._find(ContactFilter(category=category), newest_first=True)

    async def get_active_contacts(self) -> list[ContactResponse]:
        return await self._find(ContactFilter(is_active=True))

    async def get_contacts_by_category_and_status(
        self,
        category: str,
        is_active: bool,
    ) -> list[ContactResponse]:
        return await self._find(ContactFilter(category=category, is_active=is_active))

    async def search_contacts_by_name(self, name: str) -> list[ContactResponse]:
        return await self._find(ContactFilter(name_contains=name))

    async def get_contacts_created_after(self, date: datetime) -> list[ContactResponse]:
        return await self._find(ContactFilter(created_after=date))

    async def get_contacts_created_between(
        self,
        start_date: datetime,
        end_date: datetime,
    ) -> list[ContactResponse]:
        return await self._find(ContactFilter(created_from=start_date, created_to=end_date))

    async def get_contacts_by_categories(
        self,
        categories: Sequence[str],
    ) -> list[ContactResponse]:
        """Active contacts whose category is one of `categories`."""
        return await self._find(ContactFilter(categories=categories, is_active=True))

    async def get_recent_contacts(self, days: Optional[int] = None) -> list[ContactResponse]:
        """Contacts created within the last `days` days, newest first."""
        if days is None:
            days = self.settings.recent_days_default
        if days < 0:
            raise InvalidQueryError(f"days must not be negative, got {days}")

        since = datetime.now(timezone.utc) - timedelta(days=days)
        return await self._find(ContactFilter(created_from=since), newest_first=True)

    async def get_contacts_by_email_domain(self, domain: str) -> list[ContactResponse]:
        return await self._find(ContactFilter(email_domain=domain))

    # ------------------------------------------------------------------
    # Paginated lookups
    # ------------------------------------------------------------------

    async def get_active_contacts_by_category(
        self,
        category: str,
        page_request: PageRequest,
    ) -> ContactPage:
        return await self._find_page(
            ContactFilter(category=category, is_active=True),
            page_request,
        )

    async def search_by_name(self, name: str, page_request: PageRequest) -> ContactPage:
        return await self._find_page(ContactFilter(name_contains=name), page_request)

    async def search_contacts(
        self,
        criteria: ContactFilter,
        page_request: PageRequest,
    ) -> ContactPage:
        """Advanced search: any combination of criteria, all optional."""
        return await self._find_page(criteria, page_request)

    # ------------------------------------------------------------------
    # Aggregates
    # ------------------------------------------------------------------

    async def count_by_category(self, category: str) -> int:
        return await self._count(ContactFilter(category=category))

    async def count_active_by_category(self, category: str) -> int:
        return await self._count(ContactFilter(category=category, is_active=True))

    async def email_exists(self, email: str) -> bool:
        return await self._count(ContactFilter(email=email)) > 0

    async def get_category_counts(self) -> list[CategoryCount]:
        stmt = (
            select(Contact.category, func.count(Contact.id))
            .group_by(Contact.category)
            .order_by(Contact.category.asc())
        )
        result = await self.db.execute(stmt)
        return [
            CategoryCount(category=category, count=count)
            for category, count in result.all()
        ]

    # ------------------------------------------------------------------
    # Projections
    # ------------------------------------------------------------------

    async def get_active_projections(self) -> list[ContactProjection]:
        return await self._projections(ContactFilter(is_active=True))

    async def get_projections_by_category(self, category: str) -> list[ContactProjection]:
        return await self._projections(ContactFilter(category=category))

"""
Contact API endpoints.
"""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import get_settings
from app.database import get_db
from app.schemas.contact import (
    CategoryCount,
    CategoryDeleteResponse,
    ContactPage,
    ContactProjection,
    ContactRequest,
    ContactResponse,
)
from app.services import ContactFilter, ContactService, PageRequest

router = APIRouter(prefix="/contacts")


def get_contact_service(db: AsyncSession = Depends(get_db)) -> ContactService:
    """Build a service bound to the request's session."""
    return ContactService(db)


def get_page_request(
    page: int = Query(default=0, description="Zero-based page index"),
    size: Optional[int] = Query(default=None, description="Page size"),
    sort_by: str = Query(default="creationDate", alias="sortBy"),
    sort_direction: str = Query(default="DESC", alias="sortDirection"),
) -> PageRequest:
    """Parse paging parameters shared by the paginated endpoints."""
    settings = get_settings()
    return PageRequest.from_params(
        page=page,
        size=settings.default_page_size if size is None else size,
        sort_by=sort_by,
        sort_direction=sort_direction,
        max_size=settings.max_page_size,
    )


def _or_404(contact: Optional[ContactResponse]) -> ContactResponse:
    if contact is None:
        raise HTTPException(status_code=404, detail="Contact not found")
    return contact


# ============= CRUD =============


@router.post("", response_model=ContactResponse, status_code=status.HTTP_201_CREATED)
async def create_contact(
    request: ContactRequest,
    service: ContactService = Depends(get_contact_service),
):
    """Create a contact. Id and creation date are assigned by the server."""
    return await service.create_contact(request)


@router.get("", response_model=list[ContactResponse])
async def list_contacts(service: ContactService = Depends(get_contact_service)):
    """List all contacts."""
    return await service.list_contacts()


# ============= Lookups =============


@router.get("/firstname/{first_name}", response_model=list[ContactResponse])
async def get_contacts_by_first_name(
    first_name: str,
    service: ContactService = Depends(get_contact_service),
):
    return await service.get_contacts_by_first_name(first_name)


@router.get("/lastname/{last_name}", response_model=list[ContactResponse])
async def get_contacts_by_last_name(
    last_name: str,
    service: ContactService = Depends(get_contact_service),
):
    return await service.get_contacts_by_last_name(last_name)


@router.get("/email/{email}", response_model=ContactResponse)
async def get_contact_by_email(
    email: str,
    service: ContactService = Depends(get_contact_service),
):
    return _or_404(await service.get_contact_by_email(email))


@router.get("/phone/{phone_no}", response_model=ContactResponse)
async def get_contact_by_phone(
    phone_no: str,
    service: ContactService = Depends(get_contact_service),
):
    return _or_404(await service.get_contact_by_phone(phone_no))


@router.get("/category/{category}", response_model=list[ContactResponse])
async def get_contacts_by_category(
    category: str,
    service: ContactService = Depends(get_contact_service),
):
    return await service.get_contacts_by_category(category)


@router.delete("/category/{category}", response_model=CategoryDeleteResponse)
async def delete_contacts_by_category(
    category: str,
    service: ContactService = Depends(get_contact_service),
):
    """Delete every contact in a category."""
    deleted = await service.delete_contacts_by_category(category)
    return CategoryDeleteResponse(category=category, deleted=deleted)


@router.get("/category/{category}/newest", response_model=list[ContactResponse])
async def get_newest_contacts_by_category(
    category: str,
    service: ContactService = Depends(get_contact_service),
):
    """Contacts in a category, most recently created first."""
    return await service.get_newest_contacts_by_category(category)


@router.get("/active", response_model=list[ContactResponse])
async def get_active_contacts(service: ContactService = Depends(get_contact_service)):
    return await service.get_active_contacts()


@router.get("/category/{category}/status/{is_active}", response_model=list[ContactResponse])
async def get_contacts_by_category_and_status(
    category: str,
    is_active: bool,
    service: ContactService = Depends(get_contact_service),
):
    return await service.get_contacts_by_category_and_status(category, is_active)


@router.get("/search/name", response_model=list[ContactResponse])
async def search_contacts_by_name(
    name: str = Query(..., description="Substring of first or last name"),
    service: ContactService = Depends(get_contact_service),
):
    return await service.search_contacts_by_name(name)


@router.get("/created-after", response_model=list[ContactResponse])
async def get_contacts_created_after(
    date: datetime = Query(..., description="ISO-8601 date-time"),
    service: ContactService = Depends(get_contact_service),
):
    return await service.get_contacts_created_after(date)


@router.get("/created-between", response_model=list[ContactResponse])
async def get_contacts_created_between(
    start_date: datetime = Query(..., alias="startDate"),
    end_date: datetime = Query(..., alias="endDate"),
    service: ContactService = Depends(get_contact_service),
):
    """Contacts created within [startDate, endDate], bounds included."""
    return await service.get_contacts_created_between(start_date, end_date)


@router.get("/categories", response_model=list[ContactResponse])
async def get_contacts_by_categories(
    categories: list[str] = Query(...),
    service: ContactService = Depends(get_contact_service),
):
    """Active contacts in any of the given categories."""
    return await service.get_contacts_by_categories(categories)


@router.get("/recent", response_model=list[ContactResponse])
async def get_recent_contacts(
    days: Optional[int] = Query(default=None, description="Defaults to RECENT_DAYS_DEFAULT"),
    service: ContactService = Depends(get_contact_service),
):
    return await service.get_recent_contacts(days)


@router.get("/email-domain/{domain}", response_model=list[ContactResponse])
async def get_contacts_by_email_domain(
    domain: str,
    service: ContactService = Depends(get_contact_service),
):
    return await service.get_contacts_by_email_domain(domain)


# ============= Counts =============


@router.get("/count/category/{category}", response_model=int)
async def count_contacts_by_category(
    category: str,
    service: ContactService = Depends(get_contact_service),
):
    return await service.count_by_category(category)


@router.get("/count/category/{category}/active", response_model=int)
async def count_active_contacts_by_category(
    category: str,
    service: ContactService = Depends(get_contact_service),
):
    return await service.count_active_by_category(category)


@router.get("/exists/email/{email}", response_model=bool)
async def email_exists(
    email: str,
    service: ContactService = Depends(get_contact_service),
):
    return await service.email_exists(email)


# ============= Paginated =============


@router.get("/category/{category}/active/paginated", response_model=ContactPage)
async def get_active_contacts_by_category(
    category: str,
    page_request: PageRequest = Depends(get_page_request),
    service: ContactService = Depends(get_contact_service),
):
    return await service.get_active_contacts_by_category(category, page_request)


@router.get("/search/name/paginated", response_model=ContactPage)
async def search_by_name(
    name: str = Query(...),
    page_request: PageRequest = Depends(get_page_request),
    service: ContactService = Depends(get_contact_service),
):
    return await service.search_by_name(name, page_request)


@router.get("/search/advanced", response_model=ContactPage)
async def search_contacts(
    first_name: Optional[str] = Query(default=None, alias="firstName"),
    last_name: Optional[str] = Query(default=None, alias="lastName"),
    category: Optional[str] = None,
    is_active: Optional[bool] = Query(default=None, alias="isActive"),
    email: Optional[str] = None,
    phone_no: Optional[str] = Query(default=None, alias="phoneNo"),
    email_domain: Optional[str] = Query(default=None, alias="emailDomain"),
    created_from: Optional[datetime] = Query(default=None, alias="createdFrom"),
    created_to: Optional[datetime] = Query(default=None, alias="createdTo"),
    page_request: PageRequest = Depends(get_page_request),
    service: ContactService = Depends(get_contact_service),
):
    """
    Multi-criteria search. Every filter is optional; omitted filters do not
    restrict the result. First and last name match as case-insensitive
    substrings.
    """
    criteria = ContactFilter(
        first_name_contains=first_name,
        last_name_contains=last_name,
        category=category,
        is_active=is_active,
        email=email,
        phone_no=phone_no,
        email_domain=email_domain,
        created_from=created_from,
        created_to=created_to,
    )
    return await service.search_contacts(criteria, page_request)


# ============= Projections =============


@router.get("/projections/active", response_model=list[ContactProjection])
async def get_active_projections(service: ContactService = Depends(get_contact_service)):
    return await service.get_active_projections()


@router.get("/projections/category/{category}", response_model=list[ContactProjection])
async def get_projections_by_category(
    category: str,
    service: ContactService = Depends(get_contact_service),
):
    return await service.get_projections_by_category(category)


# ============= Statistics =============


@router.get("/statistics/category-counts", response_model=list[CategoryCount])
async def get_category_counts(service: ContactService = Depends(get_contact_service)):
    """Number of contacts per category label."""
    return await service.get_category_counts()


# ============= By id =============
# Registered last so the static paths above are matched first.


@router.get("/{contact_id}", response_model=ContactResponse)
async def get_contact(
    contact_id: int,
    service: ContactService = Depends(get_contact_service),
):
    """Get a specific contact."""
    return _or_404(await service.get_contact(contact_id))


@router.put("/{contact_id}", response_model=ContactResponse)
async def update_contact(
    contact_id: int,
    request: ContactRequest,
    service: ContactService = Depends(get_contact_service),
):
    """Replace a contact's fields. Omitting isActive keeps the current value."""
    return await service.update_contact(contact_id, request)


@router.delete("/{contact_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_contact(
    contact_id: int,
    service: ContactService = Depends(get_contact_service),
):
    """Delete a contact. Deleting a missing id is not an error."""
    await service.delete_contact(contact_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

"""Tests for mapping between stored contacts and wire schemas."""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from app.models import Contact
from app.schemas.contact import ContactRequest, ContactResponse
from app.services.contact_mapping import (
    apply_contact_update,
    contact_from_request,
    contact_to_response,
)


def _stored_contact(**overrides) -> Contact:
    fields = dict(
        id=7,
        first_name="Ana",
        last_name="Lee",
        phone_no="555-0100",
        email="ana@x.com",
        is_active=False,
        category="work",
        creation_date=datetime(2026, 1, 1, tzinfo=timezone.utc),
    )
    fields.update(overrides)
    return Contact(**fields)


def test_create_defaults_active_to_true():
    request = ContactRequest(
        first_name="Ana",
        last_name="Lee",
        phone_no="555-0100",
        email="ana@x.com",
        category="work",
    )
    contact = contact_from_request(request)
    assert contact.is_active is True
    assert contact.id is None


def test_create_ignores_client_supplied_id_and_creation_date():
    request = ContactRequest.model_validate(
        {
            "id": 99,
            "creationDate": "2001-01-01T00:00:00",
            "firstName": "Ana",
            "lastName": "Lee",
            "phoneNo": "555-0100",
            "email": "ana@x.com",
            "category": "work",
            "isActive": False,
        }
    )
    contact = contact_from_request(request)
    assert contact.id is None
    assert contact.creation_date is None
    assert contact.is_active is False


def test_update_overwrites_fields_but_keeps_active_when_omitted():
    contact = _stored_contact()
    request = ContactRequest(
        first_name="Anna",
        last_name="Lie",
        phone_no="555-0199",
        email="anna@y.org",
        category="family",
    )
    apply_contact_update(contact, request)

    assert contact.first_name == "Anna"
    assert contact.last_name == "Lie"
    assert contact.phone_no == "555-0199"
    assert contact.email == "anna@y.org"
    assert contact.category == "family"
    assert contact.is_active is False
    assert contact.id == 7
    assert contact.creation_date == datetime(2026, 1, 1, tzinfo=timezone.utc)


def test_update_sets_active_when_given():
    contact = _stored_contact(is_active=False)
    request = ContactRequest(
        first_name="Ana",
        last_name="Lee",
        phone_no="555-0100",
        email="ana@x.com",
        category="work",
        is_active=True,
    )
    apply_contact_update(contact, request)
    assert contact.is_active is True


def test_response_serialises_camel_case():
    response = contact_to_response(_stored_contact())
    assert isinstance(response, ContactResponse)

    payload = response.model_dump(mode="json", by_alias=True)
    assert payload["firstName"] == "Ana"
    assert payload["phoneNo"] == "555-0100"
    assert payload["isActive"] is False
    assert payload["creationDate"].startswith("2026-01-01T00:00:00")


@pytest.mark.parametrize(
    "field, value",
    [
        ("firstName", ""),
        ("lastName", "   "),
        ("phoneNo", ""),
        ("category", " "),
        ("email", "not-an-email"),
    ],
)
def test_request_rejects_blank_or_malformed_fields(field, value):
    body = {
        "firstName": "Ana",
        "lastName": "Lee",
        "phoneNo": "555-0100",
        "email": "ana@x.com",
        "category": "work",
    }
    body[field] = value
    with pytest.raises(ValidationError):
        ContactRequest.model_validate(body)


def test_request_requires_every_mandatory_field():
    with pytest.raises(ValidationError) as exc_info:
        ContactRequest.model_validate({"firstName": "Ana"})

    missing = {error["loc"][0] for error in exc_info.value.errors()}
    assert missing == {"lastName", "phoneNo", "email", "category"}


def test_request_keeps_email_spelling():
    request = ContactRequest.model_validate(
        {
            "firstName": "Ana",
            "lastName": "Lee",
            "phoneNo": "555-0100",
            "email": "Ana@X.COM",
            "category": "work",
        }
    )
    assert request.email == "Ana@X.COM"
    assert contact_from_request(request).email == "Ana@X.COM"

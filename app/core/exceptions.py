"""
Domain errors raised by the service layer.

The API layer maps them to HTTP responses (see the exception handlers in
`app.main`).
"""


class ContactsAPIError(Exception):
    """Base class for expected, client-facing errors."""

    status_code = 400
    error = "Bad request"

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class ContactNotFoundError(ContactsAPIError):
    """Raised when an operation targets a contact id that does not exist."""

    status_code = 404
    error = "Not found"

    def __init__(self, contact_id: int):
        super().__init__(f"Contact not found with id: {contact_id}")
        self.contact_id = contact_id


class InvalidQueryError(ContactsAPIError):
    """Raised for unusable paging, sorting or filter parameters."""

    status_code = 400
    error = "Invalid query"

"""
Domain exceptions raised by the service layer.

Routers never translate these by hand; the handlers registered in
`shopfront.main` map each class to its HTTP status.
"""
from typing import Optional


class ShopfrontError(Exception):
    """Base class for expected, client-facing failures."""

    status_code = 400
    error_code = "bad_request"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"error": self.error_code, "detail": self.message}


class ValidationError(ShopfrontError):
    """Malformed input. Always raised before anything is written."""

    status_code = 400
    error_code = "validation_error"

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        day_of_week: Optional[int] = None,
    ):
        super().__init__(message)
        self.field = field
        self.day_of_week = day_of_week

    def to_dict(self) -> dict:
        payload = super().to_dict()
        if self.field is not None:
            payload["field"] = self.field
        if self.day_of_week is not None:
            payload["day_of_week"] = self.day_of_week
        return payload


class NotFoundError(ShopfrontError):
    """Referenced id does not exist."""

    status_code = 404
    error_code = "not_found"


class ConflictError(ShopfrontError):
    """Write lost a race or collides with existing state."""

    status_code = 409
    error_code = "conflict"

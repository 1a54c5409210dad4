"""Catalog error kinds.

Each error carries the HTTP status and the caller-visible message; routers
translate them into ``HTTPException`` at the request boundary.
"""


class CatalogError(Exception):
    """Base class for all catalog errors."""

    status_code: int = 500

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationFailed(CatalogError):
    """A required field is missing or malformed."""

    status_code = 400


class Forbidden(CatalogError):
    """The caller may not act on the target record."""

    status_code = 403


class EntityNotFound(CatalogError):
    """A vendor or product does not exist."""

    status_code = 404


class UpstreamFailure(CatalogError):
    """The media host or data store failed."""

    status_code = 500

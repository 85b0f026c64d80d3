"""Error taxonomy shared by services and the HTTP layer."""


class DonrError(Exception):
    """Base class for failures that map onto a structured API response."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(DonrError):
    """Malformed, missing or out-of-range input."""

    status_code = 400


class NotFoundError(DonrError):
    """Referenced entity does not exist."""

    status_code = 404


class ForbiddenError(DonrError):
    """Caller is authenticated but not entitled to the target."""

    status_code = 403


class ConflictError(DonrError):
    """Entity exists but its state does not allow the requested transition."""

    status_code = 409


class UpstreamError(DonrError):
    """Store or third-party provider failure."""

    status_code = 500


class GeocodingError(UpstreamError):
    """Address or coordinate resolution failed."""


class StoreError(UpstreamError):
    """The document store rejected or dropped a write."""

"""Service-layer errors surfaced to API callers as JSON error envelopes."""

from __future__ import annotations


class CRMError(Exception):
    """Base class for errors a caller can act on."""

    status_code = 400
    error_code = 0
    default_message = "The request could not be processed."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"message": self.message, "error_code": self.error_code}


class NotFound(CRMError):
    """Entity is absent or owned by another account."""

    status_code = 404
    error_code = 31
    default_message = "The resource has not been found."


class ValidationFailed(CRMError):
    """Payload or query parameters failed validation."""

    status_code = 400
    error_code = 32
    default_message = "Validator failed."

    def __init__(self, errors: dict[str, list[str]], message: str | None = None) -> None:
        self.errors = errors
        super().__init__(message)

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["errors"] = self.errors
        return data


class InvalidQuery(CRMError):
    """Sort or pagination parameters cannot be applied to the query."""

    status_code = 400
    error_code = 40
    default_message = "Invalid query."


class InvalidParameters(CRMError):
    """A write violated a storage constraint."""

    status_code = 400
    error_code = 41
    default_message = "Invalid parameters."


class Unauthorized(CRMError):
    """No account token was sent, or it matches no account."""

    status_code = 401
    error_code = 42
    default_message = "Account token required."

class DomainError(Exception):
    """Base exception for business rule violations.

    Every subclass carries a stable ``code`` and the HTTP status the web layer
    answers with.
    """

    code = "DOMAIN_ERROR"
    http_status = 400


class ValidationError(DomainError):
    """Raised when input data is missing or invalid."""

    code = "VALIDATION_ERROR"
    http_status = 400


class DuplicateUserError(DomainError):
    """Raised when a service number is already registered."""

    code = "DUPLICATE_USER"
    http_status = 409


class AuthenticationError(DomainError):
    """Raised when the caller is not logged in."""

    code = "NOT_AUTHENTICATED"
    http_status = 401


class UnknownUserError(AuthenticationError):
    """Raised on login with a service number that is not registered."""

    code = "UNKNOWN_USER"
    http_status = 404


class InvalidCredentialsError(AuthenticationError):
    """Raised when login credentials are invalid."""

    code = "INVALID_CREDENTIALS"
    http_status = 401


class AuthorizationError(DomainError):
    """Raised when the logged-in user acts on another service number."""

    code = "FORBIDDEN"
    http_status = 403


class UserNotFoundError(DomainError):
    code = "USER_NOT_FOUND"
    http_status = 404


class ProfileNotModifiedError(DomainError):
    """Raised when a profile update matched a record but changed nothing."""

    code = "PROFILE_NOT_MODIFIED"
    http_status = 409


class UploadRejectedError(DomainError):
    code = "UPLOAD_REJECTED"
    http_status = 400

    def __init__(self, message: str, *, too_large: bool = False):
        super().__init__(message)
        if too_large:
            self.http_status = 413


class StoreError(Exception):
    """Base exception for persistence failures."""

    code = "STORE_ERROR"
    http_status = 500


class StoreUnavailableError(StoreError):
    """Raised at startup when the store cannot be reached."""

    http_status = 503


class UnexpectedStoreError(StoreError):
    """Raised for any other persistence failure."""

"""Custom exceptions for the LedgerDesk application."""


class LedgerDeskException(Exception):
    """Base exception for LedgerDesk application."""

    pass


class ValidationError(LedgerDeskException):
    """Raised when validation fails."""

    pass


class InvalidAmount(ValidationError):
    """Raised when a monetary amount is zero, negative or malformed."""

    pass


class InvalidQuantity(ValidationError):
    """Raised when a line quantity is not strictly positive."""

    pass


class IndexOutOfRange(ValidationError):
    """Raised when a line index does not address an existing line."""

    pass


class NotFoundError(LedgerDeskException):
    """Raised when a resource is not found."""

    pass


class InvoiceNotFound(NotFoundError):
    pass


class CustomerNotFound(NotFoundError):
    pass


class ProductNotFound(NotFoundError):
    pass


class ConflictError(LedgerDeskException):
    """Raised when an operation would break referential integrity."""

    pass


class InconsistentStateError(LedgerDeskException):
    """Raised when stored invoice figures disagree with their items and payments."""

    pass


class DatabaseError(LedgerDeskException):
    """Raised when a database operation fails."""

    pass


class ConfigurationError(LedgerDeskException):
    """Raised when configuration is invalid."""

    pass


class AuthenticationError(LedgerDeskException):
    """Raised when authentication fails."""

    pass


class AuthorizationError(LedgerDeskException):
    """Raised when an authenticated principal lacks required scopes."""

    pass

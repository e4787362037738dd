"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the HTTP and CLI layers can catch them uniformly and turn them into
user-facing messages.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """Input was malformed or a business rule was violated."""


class InsufficientStockError(ValidationError):
    """A product does not have enough stock for the requested quantity."""


class InvalidTransitionError(ValidationError):
    """An order status change is not allowed from its current state."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class ConflictError(DomainException):
    """A unique field collides with an existing entity."""


class AuthenticationError(DomainException):
    """No credential, an invalid credential, or an unknown user."""


class PermissionDeniedError(DomainException):
    """The caller's role or ownership does not permit the operation."""

"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
Nothing here is retried automatically; the caller decides.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """Malformed input or a business rule was violated."""


class NotFoundError(DomainException):
    """A referenced order, product or line item does not exist."""


class InvalidStateError(DomainException):
    """The operation is forbidden by the current order status."""


class ConflictError(DomainException):
    """The store rejected a write (e.g. a foreign-key violation)."""

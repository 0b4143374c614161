"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer and the checkout flow can catch them uniformly and surface
user-friendly messages.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EmptyCartError(ValidationError):
    """Checkout was attempted with nothing in the cart."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class CollaboratorError(DomainException):
    """A collaborating service rejected a request or could not be reached."""


class InvalidTransitionError(DomainException):
    """A checkout step was requested from a stage that does not allow it."""


class FlowBusyError(DomainException):
    """A checkout step was submitted while another call was still in flight."""

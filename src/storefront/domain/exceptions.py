"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI and web layers can catch them uniformly and display
user-friendly messages.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class InsufficientStockError(ValidationError):
    """Requested quantity exceeds the stock on hand."""

    def __init__(self, product_id: str, requested: int, available: int) -> None:
        super().__init__(
            f"Product {product_id} is out of stock or has insufficient quantity "
            f"(requested {requested}, available {available})"
        )
        self.product_id = product_id
        self.requested = requested
        self.available = available


class CommitFailedError(DomainException):
    """The order transaction was aborted; nothing was written."""


class AuthenticationError(DomainException):
    """The caller has no usable identity."""

# stall_pos/domain/errors.py


class DomainError(Exception):
    """Base class for errors raised by the domain services."""


class NotFoundError(DomainError):
    pass


class BusinessError(DomainError):
    """A request that is well formed but not allowed in the current state."""


class EmptyCartError(BusinessError):
    def __init__(self):
        super().__init__("Cannot check out an empty cart")


class InsufficientStockError(BusinessError):
    def __init__(self, product_id, requested: int):
        self.product_id = product_id
        self.requested = requested
        super().__init__(f"Not enough stock of product {product_id} to sell {requested}")


class ValidationFailed(BusinessError):
    pass


class AuthError(DomainError):
    pass


class PermissionDenied(AuthError):
    pass


class CheckoutFailedError(DomainError):
    """The backend failed during checkout; nothing from the sale was kept."""

    def __init__(self, step: str, cause: Exception):
        self.step = step
        self.cause = cause
        super().__init__(f"Checkout failed while {step}")

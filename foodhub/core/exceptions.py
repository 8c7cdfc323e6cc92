"""
Domain errors raised inside the order services.

Every public service operation catches these and turns them into a
``CoreOutput(ok=False, ...)``; they never reach the routers.
"""


class OrderServiceError(Exception):
    """Base class. Anything not covered by a subclass is an unexpected fault."""
    code = "unexpected"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(OrderServiceError):
    """Referenced restaurant, dish or order does not exist."""
    code = "not_found"


class UnauthorizedError(OrderServiceError):
    """Actor may not view or change the resource."""
    code = "unauthorized"


class InvalidTransitionError(UnauthorizedError):
    """Actor's role may not move an order to the requested status."""
    code = "invalid_transition"


class ConflictError(OrderServiceError):
    """The order already has a driver."""
    code = "conflict"

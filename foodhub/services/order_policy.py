from foodhub.core.exceptions import InvalidTransitionError, UnauthorizedError
from foodhub.models.order import OrderStatus
from foodhub.models.user import UserRole
from foodhub.schemas.order import OrderSnapshot
from foodhub.schemas.user import Actor

# Statuses each role may move an order to. Clients may not change status.
ALLOWED_TARGETS = {
    UserRole.CLIENT: frozenset(),
    UserRole.OWNER: frozenset({OrderStatus.COOKING, OrderStatus.COOKED}),
    UserRole.DELIVERY: frozenset({OrderStatus.PICKED_UP, OrderStatus.DELIVERED}),
}

NOT_AUTHORIZED = "You are not authorized."


def can_view(actor: Actor, order: OrderSnapshot) -> bool:
    """Each role may only see the orders it is a party to."""
    if actor.role == UserRole.CLIENT and order.customer_id != actor.id:
        return False
    if actor.role == UserRole.DELIVERY and order.driver_id != actor.id:
        return False
    if actor.role == UserRole.OWNER and order.owner_id != actor.id:
        return False
    return True


def can_transition(actor: Actor, order: OrderSnapshot, target: OrderStatus) -> bool:
    # No adjacency check: an owner may go straight from Pending to Cooked.
    if not can_view(actor, order):
        return False
    return target in ALLOWED_TARGETS.get(actor.role, frozenset())


def authorize_transition(actor: Actor, order: OrderSnapshot, target: OrderStatus) -> None:
    """Raises UnauthorizedError / InvalidTransitionError when `can_transition` would be False."""
    if not can_view(actor, order):
        raise UnauthorizedError(NOT_AUTHORIZED)
    if not can_transition(actor, order, target):
        raise InvalidTransitionError(NOT_AUTHORIZED)

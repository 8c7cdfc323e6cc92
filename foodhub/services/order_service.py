import logging
from typing import Any
from tortoise.transactions import in_transaction
from foodhub.core.exceptions import ConflictError, NotFoundError, UnauthorizedError
from foodhub.events.pubsub import NEW_COOKED_ORDER, NEW_ORDER_UPDATE, NEW_PENDING_ORDER, PubSub
from foodhub.models.order import Order, OrderItem, OrderStatus
from foodhub.models.restaurant import Dish, Restaurant
from foodhub.models.user import UserRole
from foodhub.schemas.order import (
    CreateOrderInput, EditOrderInput, GetOrderInput, GetOrdersInput, OrderSnapshot, TakeOrderInput
)
from foodhub.schemas.response import (
    CreateOrderOutput, EditOrderOutput, GetOrderOutput, GetOrdersOutput, TakeOrderOutput
)
from foodhub.schemas.user import Actor
from foodhub.services.order_policy import NOT_AUTHORIZED, authorize_transition, can_view
from foodhub.services.pricing import price_order
from foodhub.services.results import failure

log = logging.getLogger("order_service")


async def notify(pubsub: PubSub, topic: str, payload: Any) -> None:
    # The state change is already committed; a failed publish must not undo it.
    try:
        await pubsub.publish(topic, payload)
    except Exception:
        log.exception(f"Failed to publish {topic}")


async def create_order(customer: Actor, data: CreateOrderInput, pubsub: PubSub) -> CreateOrderOutput:
    """
    Prices the requested dishes and creates the Order with its items
    atomically. Nothing is written if the restaurant or any dish is missing.
    """
    try:
        restaurant = await Restaurant.get_or_none(id=data.restaurant_id)
        if not restaurant:
            raise NotFoundError("Restaurant not found.")

        # Only dishes from this restaurant's menu can be ordered
        dish_ids = [item.dish_id for item in data.items]
        dishes = await Dish.filter(id__in=dish_ids, restaurant_id=restaurant.id)
        menu = {dish.id: dish for dish in dishes}

        total, resolved = price_order(menu, data.items)

        async with in_transaction() as conn:
            order = await Order.create(
                customer_id=customer.id,
                restaurant=restaurant,
                status=OrderStatus.PENDING,
                total=total,
                using_db=conn
            )
            items = []
            for dish, options in resolved:
                items.append(await OrderItem.create(order=order, dish=dish, options=options, using_db=conn))
    except Exception as e:
        return failure(CreateOrderOutput, e, "Could not create the order.")

    log.info(f"Order {order.id} placed by user {customer.id} (total={total}).")
    await notify(pubsub, NEW_PENDING_ORDER, {
        "order": OrderSnapshot.from_model(order, items),
        "owner_id": restaurant.owner_id,
    })
    return CreateOrderOutput(order_id=order.id)


async def get_orders(actor: Actor, data: GetOrdersInput) -> GetOrdersOutput:
    """Lists the orders the actor is a party to, optionally filtered by status."""
    try:
        if actor.role == UserRole.CLIENT:
            query = Order.filter(customer_id=actor.id)
        elif actor.role == UserRole.DELIVERY:
            query = Order.filter(driver_id=actor.id)
        else:
            restaurant_ids = await Restaurant.filter(owner_id=actor.id).values_list("id", flat=True)
            if not restaurant_ids:
                return GetOrdersOutput(orders=[])
            query = Order.filter(restaurant_id__in=list(restaurant_ids))

        if data.status:
            query = query.filter(status=data.status)

        orders = await query.order_by("id").prefetch_related("restaurant")
        return GetOrdersOutput(orders=[OrderSnapshot.from_model(order) for order in orders])
    except Exception as e:
        return failure(GetOrdersOutput, e, "Could not load orders.")


async def get_order(actor: Actor, data: GetOrderInput) -> GetOrderOutput:
    """Fetches one order with its items, if the actor may see it."""
    try:
        order = await Order.get_or_none(id=data.id).prefetch_related("restaurant", "items")
        if not order:
            raise NotFoundError("Order not found.")

        snapshot = OrderSnapshot.from_model(order, list(order.items))
        if not can_view(actor, snapshot):
            raise UnauthorizedError(NOT_AUTHORIZED)

        return GetOrderOutput(order=snapshot)
    except Exception as e:
        return failure(GetOrderOutput, e, "Could not load the order.")


async def edit_order(actor: Actor, data: EditOrderInput, pubsub: PubSub) -> EditOrderOutput:
    """
    Moves an order to a new status if the actor's role allows it, then
    notifies subscribers. Only the status is written; the total never changes.
    """
    try:
        order = await Order.get_or_none(id=data.id).prefetch_related("restaurant")
        if not order:
            raise NotFoundError("Order not found.")

        authorize_transition(actor, OrderSnapshot.from_model(order), data.status)

        old_status = order.status
        order.status = data.status
        await order.save(update_fields=["status", "updated_at"])
    except Exception as e:
        return failure(EditOrderOutput, e, "Could not update the order.")

    log.info(f"Order {order.id}: {old_status} -> {data.status} by user {actor.id}.")

    snapshot = OrderSnapshot.from_model(order)
    if actor.role == UserRole.OWNER and data.status == OrderStatus.COOKED:
        await notify(pubsub, NEW_COOKED_ORDER, snapshot)
    await notify(pubsub, NEW_ORDER_UPDATE, snapshot)
    return EditOrderOutput()


async def take_order(driver: Actor, data: TakeOrderInput, pubsub: PubSub) -> TakeOrderOutput:
    """
    Assigns the driver to an order that has none yet.

    The check and the write are separate statements; two drivers racing for
    the same order can both pass the check.
    """
    try:
        order = await Order.get_or_none(id=data.id).prefetch_related("restaurant")
        if not order:
            raise NotFoundError("Order not found.")

        if order.driver_id is not None:
            raise ConflictError("This order already has a driver.")

        order.driver_id = driver.id
        await order.save(update_fields=["driver_id", "updated_at"])
    except Exception as e:
        return failure(TakeOrderOutput, e, "Could not update the order.")

    log.info(f"Order {order.id} taken by driver {driver.id}.")
    await notify(pubsub, NEW_ORDER_UPDATE, OrderSnapshot.from_model(order))
    return TakeOrderOutput()

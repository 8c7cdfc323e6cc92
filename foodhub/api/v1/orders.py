import logging
from fastapi import APIRouter, Depends, WebSocket, status
from typing import Optional
from foodhub.api.deps import get_current_actor, get_pubsub, require_roles
from foodhub.api.streaming import stream_subscription
from foodhub.events.pubsub import (
    NEW_COOKED_ORDER, NEW_ORDER_UPDATE, NEW_PENDING_ORDER, PubSub,
    cooked_orders_filter, order_updates_filter, pending_orders_filter
)
from foodhub.models.order import OrderStatus
from foodhub.models.user import UserRole
from foodhub.schemas.order import (
    CreateOrderInput, EditOrderInput, GetOrderInput, GetOrdersInput, OrderStatusUpdate, TakeOrderInput
)
from foodhub.schemas.response import (
    CreateOrderOutput, EditOrderOutput, GetOrderOutput, GetOrdersOutput, TakeOrderOutput
)
from foodhub.schemas.user import Actor
from foodhub.services.order_service import create_order, edit_order, get_order, get_orders, take_order

router = APIRouter()
log = logging.getLogger("uvicorn")


@router.post("/", response_model=CreateOrderOutput)
async def create_order_endpoint(
    request_data: CreateOrderInput,
    actor: Actor = Depends(require_roles(UserRole.CLIENT)),
    pubsub: PubSub = Depends(get_pubsub),
):
    """Places a new order. The total is computed from the dishes and their options."""
    result = await create_order(actor, request_data, pubsub)
    if result.ok:
        log.info(f"Order {result.order_id} placed successfully for user {actor.id}.")
    return result


@router.get("/", response_model=GetOrdersOutput)
async def get_orders_endpoint(
    status: Optional[OrderStatus] = None,
    actor: Actor = Depends(get_current_actor),
):
    """Lists the caller's orders (as customer, driver or restaurant owner)."""
    return await get_orders(actor, GetOrdersInput(status=status))


@router.get("/{order_id}", response_model=GetOrderOutput)
async def get_order_endpoint(order_id: int, actor: Actor = Depends(get_current_actor)):
    """Fetches details for a specific order."""
    return await get_order(actor, GetOrderInput(id=order_id))


@router.patch("/{order_id}/status", response_model=EditOrderOutput)
async def update_status_endpoint(
    order_id: int,
    payload: OrderStatusUpdate,
    actor: Actor = Depends(get_current_actor),
    pubsub: PubSub = Depends(get_pubsub),
):
    """
    Updates status. Owners may set 'Cooking' / 'Cooked', drivers 'PickedUp' / 'Delivered'.
    """
    return await edit_order(actor, EditOrderInput(id=order_id, status=payload.status), pubsub)


@router.post("/{order_id}/take", response_model=TakeOrderOutput)
async def take_order_endpoint(
    order_id: int,
    actor: Actor = Depends(require_roles(UserRole.DELIVERY)),
    pubsub: PubSub = Depends(get_pubsub),
):
    """Claims an order for the calling driver."""
    return await take_order(actor, TakeOrderInput(id=order_id), pubsub)


# ----------- Live subscriptions -----------

async def _reject(websocket: WebSocket):
    await websocket.close(code=status.WS_1008_POLICY_VIOLATION)


@router.websocket("/subscriptions/pending")
async def pending_orders_subscription(
    websocket: WebSocket,
    actor: Actor = Depends(get_current_actor),
    pubsub: PubSub = Depends(get_pubsub),
):
    """New orders for the restaurants the owner runs."""
    if actor.role != UserRole.OWNER:
        return await _reject(websocket)
    await stream_subscription(
        websocket, pubsub.subscribe(NEW_PENDING_ORDER), pending_orders_filter(actor), lambda payload: payload["order"]
    )


@router.websocket("/subscriptions/cooked")
async def cooked_orders_subscription(
    websocket: WebSocket,
    actor: Actor = Depends(get_current_actor),
    pubsub: PubSub = Depends(get_pubsub),
):
    """Orders ready for pickup, for the driver pool."""
    if actor.role != UserRole.DELIVERY:
        return await _reject(websocket)
    await stream_subscription(
        websocket, pubsub.subscribe(NEW_COOKED_ORDER), cooked_orders_filter(actor), lambda order: order
    )


@router.websocket("/{order_id}/updates")
async def order_updates_subscription(
    websocket: WebSocket,
    order_id: int,
    actor: Actor = Depends(get_current_actor),
    pubsub: PubSub = Depends(get_pubsub),
):
    """Every change to one order, for its customer, driver and restaurant owner."""
    await stream_subscription(
        websocket, pubsub.subscribe(NEW_ORDER_UPDATE), order_updates_filter(actor, order_id), lambda order: order
    )

import asyncio
import logging
from collections import defaultdict
from typing import Any, AsyncIterator, Callable, Dict, Set

from foodhub.core.config import SUBSCRIPTION_BUFFER
from foodhub.schemas.order import OrderSnapshot
from foodhub.schemas.user import Actor

log = logging.getLogger("pubsub")

# Topics
NEW_PENDING_ORDER = "NEW_PENDING_ORDER"  # payload: {"order": OrderSnapshot, "owner_id": int}
NEW_COOKED_ORDER = "NEW_COOKED_ORDER"    # payload: OrderSnapshot
NEW_ORDER_UPDATE = "NEW_ORDER_UPDATE"    # payload: OrderSnapshot


class Subscription:
    """
    A live feed of one topic. Registered as soon as it is created; nothing
    published before is replayed. Holds at most `maxsize` undelivered
    events, newer ones are dropped while it is full.
    """

    def __init__(self, pubsub: "PubSub", topic: str, maxsize: int):
        self.topic = topic
        self.dropped = 0
        self._pubsub = pubsub
        self._queue: asyncio.Queue = asyncio.Queue(maxsize=maxsize)

    def _deliver(self, payload: Any):
        try:
            self._queue.put_nowait(payload)
        except asyncio.QueueFull:
            self.dropped += 1
            log.warning(f"Subscriber to {self.topic} is not keeping up, dropped {self.dropped} events")

    def __aiter__(self):
        return self

    async def __anext__(self) -> Any:
        return await self._queue.get()

    def close(self):
        self._pubsub._unsubscribe(self)


class PubSub:
    """
    In-process fan-out of order events to live subscribers.

    Delivery is at-most-once: there is no persistence and no retry.
    """

    def __init__(self, buffer_size: int = SUBSCRIPTION_BUFFER):
        self.buffer_size = buffer_size
        self._subscribers: Dict[str, Set[Subscription]] = defaultdict(set)

    async def publish(self, topic: str, payload: Any) -> None:
        subscribers = list(self._subscribers.get(topic, ()))
        log.debug(f"Publishing to {topic} ({len(subscribers)} subscribers)")
        for subscription in subscribers:
            subscription._deliver(payload)

    def subscribe(self, topic: str) -> Subscription:
        subscription = Subscription(self, topic, self.buffer_size)
        self._subscribers[topic].add(subscription)
        return subscription

    def _unsubscribe(self, subscription: Subscription):
        self._subscribers[subscription.topic].discard(subscription)


async def filtered(
    subscription: Subscription,
    predicate: Callable[[Any], bool],
) -> AsyncIterator[Any]:
    """Yields only the payloads `predicate` accepts. Closes the subscription on exit."""
    try:
        async for payload in subscription:
            if predicate(payload):
                yield payload
    finally:
        subscription.close()


# ----------- Subscriber filters -----------

def pending_orders_filter(actor: Actor) -> Callable[[Dict[str, Any]], bool]:
    """Owners only hear about new orders for their own restaurants."""
    return lambda payload: payload["owner_id"] == actor.id


def cooked_orders_filter(actor: Actor) -> Callable[[OrderSnapshot], bool]:
    # Every driver sees every cooked order.
    return lambda order: True


def order_updates_filter(actor: Actor, order_id: int) -> Callable[[OrderSnapshot], bool]:
    """Updates for one tracked order, for its customer, driver or restaurant owner."""
    def accept(order: OrderSnapshot) -> bool:
        if order.id != order_id:
            return False
        return actor.id in (order.customer_id, order.driver_id, order.owner_id)
    return accept

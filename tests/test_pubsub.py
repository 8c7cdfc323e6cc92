import asyncio
import pytest
from foodhub.events.pubsub import (
    NEW_ORDER_UPDATE, NEW_PENDING_ORDER, PubSub,
    cooked_orders_filter, filtered, order_updates_filter, pending_orders_filter
)
from foodhub.models.order import OrderStatus
from foodhub.models.user import UserRole
from foodhub.schemas.order import OrderSnapshot
from foodhub.schemas.user import Actor


def snapshot(**overrides):
    fields = dict(id=1, status=OrderStatus.PENDING, total=10, customer_id=10, owner_id=20, driver_id=None, restaurant_id=5)
    fields.update(overrides)
    return OrderSnapshot(**fields)


async def next_event(events):
    return await asyncio.wait_for(events.__anext__(), timeout=1)


@pytest.mark.asyncio
async def test_subscriber_receives_published_payload():
    pubsub = PubSub()
    subscription = pubsub.subscribe(NEW_ORDER_UPDATE)

    await pubsub.publish(NEW_ORDER_UPDATE, snapshot())

    assert (await next_event(subscription)).id == 1


@pytest.mark.asyncio
async def test_every_subscriber_gets_a_copy():
    pubsub = PubSub()
    first = pubsub.subscribe(NEW_ORDER_UPDATE)
    second = pubsub.subscribe(NEW_ORDER_UPDATE)

    await pubsub.publish(NEW_ORDER_UPDATE, snapshot())

    assert (await next_event(first)).id == 1
    assert (await next_event(second)).id == 1


@pytest.mark.asyncio
async def test_late_subscriber_misses_earlier_events():
    pubsub = PubSub()
    await pubsub.publish(NEW_ORDER_UPDATE, snapshot(id=1))

    subscription = pubsub.subscribe(NEW_ORDER_UPDATE)
    await pubsub.publish(NEW_ORDER_UPDATE, snapshot(id=2))

    assert (await next_event(subscription)).id == 2


@pytest.mark.asyncio
async def test_topics_are_isolated():
    pubsub = PubSub()
    subscription = pubsub.subscribe(NEW_PENDING_ORDER)

    await pubsub.publish(NEW_ORDER_UPDATE, snapshot())

    with pytest.raises(asyncio.TimeoutError):
        await asyncio.wait_for(subscription.__anext__(), timeout=0.05)


@pytest.mark.asyncio
async def test_publish_without_subscribers_is_a_no_op():
    await PubSub().publish(NEW_ORDER_UPDATE, snapshot())


@pytest.mark.asyncio
async def test_closed_subscription_is_unregistered():
    pubsub = PubSub()
    subscription = pubsub.subscribe(NEW_ORDER_UPDATE)
    subscription.close()

    await pubsub.publish(NEW_ORDER_UPDATE, snapshot())

    assert not pubsub._subscribers[NEW_ORDER_UPDATE]
    with pytest.raises(asyncio.TimeoutError):
        await asyncio.wait_for(subscription.__anext__(), timeout=0.05)


def test_closing_twice_is_harmless():
    pubsub = PubSub()
    subscription = pubsub.subscribe(NEW_ORDER_UPDATE)

    subscription.close()
    subscription.close()

    assert not pubsub._subscribers[NEW_ORDER_UPDATE]


@pytest.mark.asyncio
async def test_full_subscription_drops_newer_events():
    pubsub = PubSub(buffer_size=2)
    slow = pubsub.subscribe(NEW_ORDER_UPDATE)
    fast = pubsub.subscribe(NEW_ORDER_UPDATE)

    for order_id in (1, 2, 3):
        await pubsub.publish(NEW_ORDER_UPDATE, snapshot(id=order_id))
        if order_id < 3:
            assert (await next_event(fast)).id == order_id

    assert slow.dropped == 1
    assert fast.dropped == 0
    assert (await next_event(slow)).id == 1
    assert (await next_event(slow)).id == 2
    assert (await next_event(fast)).id == 3
    with pytest.raises(asyncio.TimeoutError):
        await asyncio.wait_for(slow.__anext__(), timeout=0.05)


@pytest.mark.asyncio
async def test_pending_orders_are_filtered_by_owner():
    pubsub = PubSub()
    owner = Actor(id=20, role=UserRole.OWNER)
    events = filtered(pubsub.subscribe(NEW_PENDING_ORDER), pending_orders_filter(owner))

    await pubsub.publish(NEW_PENDING_ORDER, {"order": snapshot(id=1, owner_id=99), "owner_id": 99})
    await pubsub.publish(NEW_PENDING_ORDER, {"order": snapshot(id=2), "owner_id": 20})

    assert (await next_event(events))["order"].id == 2

    await events.aclose()
    assert not pubsub._subscribers[NEW_PENDING_ORDER]


def test_cooked_orders_reach_every_driver():
    accept = cooked_orders_filter(Actor(id=77, role=UserRole.DELIVERY))
    assert accept(snapshot(status=OrderStatus.COOKED))


@pytest.mark.parametrize("actor_id, order_id, expected", [
    (10, 1, True),    # customer
    (20, 1, True),    # restaurant owner
    (30, 1, True),    # driver
    (40, 1, False),   # stranger
    (10, 2, False),   # other order
])
def test_order_updates_filter(actor_id, order_id, expected):
    accept = order_updates_filter(Actor(id=actor_id, role=UserRole.CLIENT), order_id)
    assert accept(snapshot(id=1, driver_id=30)) is expected

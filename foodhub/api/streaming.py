import asyncio
import logging
from typing import Any, Callable
from fastapi import WebSocket, WebSocketDisconnect
from foodhub.events.pubsub import Subscription, filtered
from foodhub.schemas.order import OrderSnapshot

log = logging.getLogger("uvicorn")


async def _send_events(
    websocket: WebSocket,
    subscription: Subscription,
    predicate: Callable[[Any], bool],
    to_order: Callable[[Any], OrderSnapshot],
):
    async for payload in filtered(subscription, predicate):
        await websocket.send_json(to_order(payload).model_dump(mode="json"))


async def _wait_for_disconnect(websocket: WebSocket):
    # Subscribers only listen; anything they send is ignored.
    while True:
        message = await websocket.receive()
        if message["type"] == "websocket.disconnect":
            return


async def stream_subscription(
    websocket: WebSocket,
    subscription: Subscription,
    predicate: Callable[[Any], bool],
    to_order: Callable[[Any], OrderSnapshot],
):
    """
    Pushes the events `predicate` accepts to the client until it goes away.

    Sending and watching for the client's disconnect run side by side, so a
    client that leaves is noticed even if no event ever arrives. The
    subscription is released as soon as either side stops.
    """
    await websocket.accept()
    sender = asyncio.create_task(_send_events(websocket, subscription, predicate, to_order))
    listener = asyncio.create_task(_wait_for_disconnect(websocket))
    try:
        done, _ = await asyncio.wait({sender, listener}, return_when=asyncio.FIRST_COMPLETED)
        for task in done:
            if task.cancelled():
                continue
            exc = task.exception()
            if exc is not None and not isinstance(exc, WebSocketDisconnect):
                log.error(f"Subscription stream on {websocket.url.path} failed", exc_info=exc)
    finally:
        for task in (sender, listener):
            task.cancel()
        await asyncio.gather(sender, listener, return_exceptions=True)
        subscription.close()

    log.info(f"Subscriber left {websocket.url.path}")

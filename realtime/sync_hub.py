"""In-process fan-out of route snapshots to connected viewers.

Delivery is best effort and at most once: each participant owns a bounded
queue, updates are appended in publish order, and an update that does not
fit is dropped for that participant only. Nothing is replayed on reconnect
except the optional last-value cache.
"""

import asyncio
from typing import Any, MutableMapping, Optional

import structlog
from pydantic import BaseModel, ValidationError

from models.location_model import parse_sync_message

logger = structlog.get_logger(__name__)

_CLOSED = object()


class Subscription:
    """Async stream of broadcast messages for one participant."""

    def __init__(self, participant_id: str, maxsize: int = 100):
        self.participant_id = participant_id
        self._queue: asyncio.Queue = asyncio.Queue(maxsize=maxsize)
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def offer(self, message: BaseModel) -> bool:
        if self._closed:
            return False
        try:
            self._queue.put_nowait(message)
        except asyncio.QueueFull:
            logger.warning("sync_dropped_slow_participant", participant=self.participant_id)
            return False
        return True

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        # pending messages are discarded so the end marker always fits
        while not self._queue.empty():
            self._queue.get_nowait()
        self._queue.put_nowait(_CLOSED)

    def __aiter__(self):
        return self

    async def __anext__(self) -> BaseModel:
        item = await self._queue.get()
        if item is _CLOSED:
            # keep the marker for any other waiter
            self._queue.put_nowait(_CLOSED)
            raise StopAsyncIteration
        return item


class SyncHub:
    def __init__(
        self,
        replay_last: bool = False,
        queue_size: int = 100,
        registry: Optional[MutableMapping[str, Subscription]] = None,
    ):
        self.replay_last = replay_last
        self.queue_size = queue_size
        self._subscriptions: MutableMapping[str, Subscription] = (
            registry if registry is not None else {}
        )
        self._last: Optional[BaseModel] = None

    @property
    def participant_count(self) -> int:
        return len(self._subscriptions)

    @property
    def last_value(self) -> Optional[BaseModel]:
        return self._last

    def subscribe(self, participant_id: str) -> Subscription:
        previous = self._subscriptions.pop(participant_id, None)
        if previous is not None:
            previous.close()

        subscription = Subscription(participant_id, maxsize=self.queue_size)
        self._subscriptions[participant_id] = subscription
        if self.replay_last and self._last is not None:
            subscription.offer(self._last)

        logger.info(
            "sync_participant_joined",
            participant=participant_id,
            participants=self.participant_count,
        )
        return subscription

    def unsubscribe(self, participant_id: str) -> None:
        subscription = self._subscriptions.pop(participant_id, None)
        if subscription is None:
            return
        subscription.close()
        logger.info(
            "sync_participant_left",
            participant=participant_id,
            participants=self.participant_count,
        )

    def publish(self, payload: Any) -> int:
        """Queue ``payload`` for every connected participant.

        Returns how many participants it was queued for. Malformed payloads
        are dropped without raising.
        """
        try:
            message = parse_sync_message(payload)
        except (ValidationError, ValueError) as e:
            logger.debug("sync_payload_rejected", error=str(e))
            return 0

        if self.replay_last:
            self._last = message

        delivered = 0
        for subscription in list(self._subscriptions.values()):
            if subscription.offer(message):
                delivered += 1

        logger.info(
            "sync_published",
            message_type=getattr(message, "type", None),
            delivered=delivered,
        )
        return delivered

    def close(self) -> None:
        for participant_id in list(self._subscriptions):
            self.unsubscribe(participant_id)

import asyncio
from typing import Dict, List, Tuple

import socketio
import structlog

from realtime.sync_hub import Subscription, SyncHub

logger = structlog.get_logger(__name__)

UPDATE_LOCATIONS = "updateLocations"
LOCATIONS_UPDATED = "locationsUpdated"


class LocationSyncNamespace(socketio.AsyncNamespace):
    """Bridges Socket.IO clients to the SyncHub.

    Each connection is subscribed to the hub and a pump task forwards the
    hub's messages to that client as ``locationsUpdated``.
    """

    def __init__(self, hub: SyncHub, namespace: str = "/"):
        super().__init__(namespace)
        self.hub = hub
        self._pumps: Dict[str, asyncio.Task] = {}

    async def on_connect(self, sid, environ, auth=None):
        subscription = self.hub.subscribe(sid)
        previous = self._pumps.pop(sid, None)
        if previous is not None:
            previous.cancel()
        self._pumps[sid] = asyncio.create_task(self._pump(sid, subscription))
        logger.info("socket_connected", sid=sid)

    async def on_updateLocations(self, sid, data):
        self.hub.publish(data)

    async def on_disconnect(self, sid, reason=None):
        self.hub.unsubscribe(sid)
        task = self._pumps.pop(sid, None)
        if task is not None:
            task.cancel()
        logger.info("socket_disconnected", sid=sid, reason=reason)

    async def _pump(self, sid: str, subscription: Subscription) -> None:
        async for message in subscription:
            try:
                await self.emit(
                    LOCATIONS_UPDATED,
                    message.model_dump(mode="json", exclude_none=True),
                    to=sid,
                )
            except Exception as e:
                logger.warning("socket_emit_failed", sid=sid, error=str(e))

    async def shutdown(self) -> None:
        tasks: List[asyncio.Task] = list(self._pumps.values())
        self._pumps.clear()
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)


def create_socket_server(
    hub: SyncHub, allowed_origins
) -> Tuple[socketio.AsyncServer, LocationSyncNamespace]:
    sio = socketio.AsyncServer(
        async_mode="asgi",
        cors_allowed_origins=allowed_origins,
    )
    namespace = LocationSyncNamespace(hub)
    sio.register_namespace(namespace)
    return sio, namespace

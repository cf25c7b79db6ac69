from .socket_server import (
    LOCATIONS_UPDATED,
    UPDATE_LOCATIONS,
    LocationSyncNamespace,
    create_socket_server,
)
from .sync_hub import Subscription, SyncHub

__all__ = [
    "LOCATIONS_UPDATED",
    "UPDATE_LOCATIONS",
    "LocationSyncNamespace",
    "create_socket_server",
    "Subscription",
    "SyncHub",
]

from dotenv import load_dotenv

from typing import Optional

import socketio
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from apis.health_api import router as health_router
from apis.locations_api import router as locations_router
from config.app_config import AppConfig
from config.logging_config import setup_logging
from core.infrastructure.lifecycle import lifespan
from core.infrastructure.request_logging_middleware import RequestLoggingMiddleware
from core.metadata import APP_TITLE, VERSION
from exceptions.handlers import setup_exception_handlers
from realtime.socket_server import create_socket_server
from realtime.sync_hub import SyncHub

load_dotenv()


def create_app(config: Optional[AppConfig] = None) -> FastAPI:
    config = config or AppConfig.from_env()

    app = FastAPI(title=APP_TITLE, version=VERSION, lifespan=lifespan)
    app.state.config = config

    # One hub per process, handed to the socket transport explicitly
    hub = SyncHub(
        replay_last=config.sync_replay_last,
        queue_size=config.sync_queue_size,
    )
    sio, namespace = create_socket_server(hub, config.allowed_origins)
    app.state.sync_hub = hub
    app.state.sio = sio
    app.state.sync_namespace = namespace

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    app.include_router(locations_router)
    app.include_router(health_router)

    setup_exception_handlers(app)
    return app


def create_asgi_app(config: Optional[AppConfig] = None) -> socketio.ASGIApp:
    app = create_app(config)
    return socketio.ASGIApp(app.state.sio, other_asgi_app=app)


setup_logging()
asgi_app = create_asgi_app()


if __name__ == "__main__":
    uvicorn.run("main:asgi_app", host="0.0.0.0", port=AppConfig.from_env().port)

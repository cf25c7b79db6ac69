import os
from dataclasses import dataclass, field
from typing import List, Optional


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


def _env_list(name: str, default: str) -> List[str]:
    raw = os.getenv(name, default)
    return [item.strip() for item in raw.split(",") if item.strip()]


@dataclass(frozen=True)
class AppConfig:
    # ===== GEOCODING =====
    geocoding_api: Optional[str] = None
    country: str = "India"
    geocoding_timeout_seconds: float = 10.0
    geocoding_user_agent: str = "route-sync-service"

    # ===== STORAGE =====
    database_url: Optional[str] = None

    # ===== SERVER =====
    port: int = 5000
    allowed_origins: List[str] = field(
        default_factory=lambda: ["http://localhost:5173"]
    )

    # ===== REALTIME SYNC =====
    sync_replay_last: bool = False
    sync_queue_size: int = 100

    # ===== RUNTIME =====
    environment: str = "dev"

    @classmethod
    def from_env(cls) -> "AppConfig":
        return cls(
            geocoding_api=os.getenv("GEOCODING_API") or None,
            country=os.getenv("GEOCODING_COUNTRY", "India"),
            geocoding_timeout_seconds=float(
                os.getenv("GEOCODING_TIMEOUT_SECONDS", "10")
            ),
            geocoding_user_agent=os.getenv(
                "GEOCODING_USER_AGENT", "route-sync-service"
            ),
            database_url=os.getenv("DATABASE_URL") or None,
            port=int(os.getenv("PORT", "5000")),
            allowed_origins=_env_list("ALLOWED_ORIGINS", "http://localhost:5173"),
            sync_replay_last=_env_bool("SYNC_REPLAY_LAST"),
            sync_queue_size=int(os.getenv("SYNC_QUEUE_SIZE", "100")),
            environment=os.getenv("ENVIRONMENT", "dev"),
        )

import httpx
import structlog

logger = structlog.get_logger(__name__)

_client: httpx.AsyncClient | None = None


def init_http_client(timeout: float = 10.0, user_agent: str | None = None):
    global _client
    headers = {"User-Agent": user_agent} if user_agent else None
    _client = httpx.AsyncClient(
        timeout=httpx.Timeout(timeout, connect=min(timeout, 10)),
        limits=httpx.Limits(max_connections=100, max_keepalive_connections=20),
        headers=headers,
    )


async def close_http_client():
    global _client
    if _client:
        await _client.aclose()
        _client = None


def get_http_client() -> httpx.AsyncClient:
    if _client is None:
        raise RuntimeError("HTTP client not initialized")
    return _client

from config.app_config import AppConfig


def test_defaults_without_environment(monkeypatch):
    for name in (
        "GEOCODING_API",
        "GEOCODING_COUNTRY",
        "DATABASE_URL",
        "PORT",
        "ALLOWED_ORIGINS",
        "SYNC_REPLAY_LAST",
        "SYNC_QUEUE_SIZE",
        "ENVIRONMENT",
    ):
        monkeypatch.delenv(name, raising=False)

    config = AppConfig.from_env()

    assert config.geocoding_api is None
    assert config.country == "India"
    assert config.database_url is None
    assert config.port == 5000
    assert config.allowed_origins == ["http://localhost:5173"]
    assert config.sync_replay_last is False
    assert config.sync_queue_size == 100
    assert config.environment == "dev"


def test_values_from_environment(monkeypatch):
    monkeypatch.setenv("GEOCODING_API", "https://nominatim.example/search")
    monkeypatch.setenv("GEOCODING_COUNTRY", "Nepal")
    monkeypatch.setenv("PORT", "5001")
    monkeypatch.setenv("ALLOWED_ORIGINS", "http://localhost:5173, https://map.example.app")
    monkeypatch.setenv("SYNC_REPLAY_LAST", "true")

    config = AppConfig.from_env()

    assert config.geocoding_api == "https://nominatim.example/search"
    assert config.country == "Nepal"
    assert config.port == 5001
    assert config.allowed_origins == ["http://localhost:5173", "https://map.example.app"]
    assert config.sync_replay_last is True

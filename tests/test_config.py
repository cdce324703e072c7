from task_service.config import (
    DEFAULT_DATABASE_URL,
    Settings,
    get_settings,
    normalize_database_url,
    parse_origins,
)


def test_normalize_database_url() -> None:
    assert normalize_database_url("postgresql://u:p@h/db") == "postgresql+asyncpg://u:p@h/db"
    assert normalize_database_url("postgres://u:p@h/db") == "postgresql+asyncpg://u:p@h/db"
    assert normalize_database_url("sqlite+aiosqlite:///x.db") == "sqlite+aiosqlite:///x.db"


def test_parse_origins() -> None:
    assert parse_origins("*") == ["*"]
    assert parse_origins("http://a.test, http://b.test,") == ["http://a.test", "http://b.test"]


def test_get_settings_reads_environment(monkeypatch) -> None:
    monkeypatch.setenv("DATABASE_URL", "postgresql://u:p@db/tasks")
    monkeypatch.setenv("PORT", "9000")
    monkeypatch.setenv("DEBUG", "true")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("ALLOWED_ORIGINS", "http://a.test")

    settings = get_settings()

    assert settings.database_url == "postgresql+asyncpg://u:p@db/tasks"
    assert settings.port == 9000
    assert settings.debug is True
    assert settings.log_level == "DEBUG"
    assert settings.allowed_origins == ["http://a.test"]
    assert settings.is_postgres


def test_defaults() -> None:
    settings = Settings()

    assert settings.database_url == DEFAULT_DATABASE_URL
    assert settings.allowed_origins == ["*"]
    assert settings.port == 8080

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Library settings."""

    # Lookup behaviour
    SKIP_STATIC: bool = False

    # Remote provider (BrasilAPI)
    API_BASE_URL: str = "https://brasilapi.com.br/api/feriados/v1"
    API_TIMEOUT_SECONDS: float = 10.0
    USER_AGENT: str = "br-holiday"

    # Accepted year range
    MIN_YEAR: int = 1900
    MAX_YEAR: int = 2100

    # Cache policy
    CURRENT_YEAR_TTL_DAYS: int = 7
    FUTURE_YEAR_TTL_DAYS: int = 30
    CACHE_CLEANUP_INTERVAL_HOURS: float = 24
    CACHE_MAX_ENTRIES: int = 100  # emergency cap checked on every write
    CACHE_TRIM_TO: int = 80
    CACHE_CLEANUP_MAX_ENTRIES: int = 50  # cap enforced by the periodic sweep
    CACHE_PRESERVE_WINDOW_YEARS: int = 2

    # Logging
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="BR_HOLIDAY_",
        case_sensitive=True,
        extra="ignore",
    )


# Global settings instance
settings = Settings()

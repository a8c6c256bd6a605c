from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_BASE_URL = "https://api.germanminer.de/v2/"


class Settings(BaseSettings):
    """Client settings loaded from environment variables.

    All settings can be configured via environment variables or .env file.
    """

    # API key used when none is passed to the client explicitly
    api_key: str = Field(
        default="", validation_alias=AliasChoices("GM_API_KEY", "API_KEY")
    )

    # Base URL of the GermanMiner API (must end with a slash)
    base_url: str = Field(
        default=DEFAULT_BASE_URL,
        validation_alias=AliasChoices("GM_BASE_URL", "BASE_URL"),
    )

    # "development" enables debug output by default
    environment: str = Field(
        default="production", validation_alias=AliasChoices("GM_ENV", "ENV")
    )

    # Lifetime of the cached api/info snapshot
    quota_cache_ttl_seconds: float = 600.0

    # HTTP Client connection pool settings
    httpx_timeout: float = 30.0  # Default timeout for all operations
    httpx_connect_timeout: float = 10.0  # Time to establish connection
    httpx_read_timeout: float = 30.0  # Time to read response data
    httpx_write_timeout: float = 10.0  # Time to send request data
    httpx_pool_timeout: float = 5.0  # Time to acquire connection from pool
    httpx_keepalive_expiry: float = 30.0
    httpx_max_connections: int = 20
    httpx_max_keepalive_connections: int = 10

    # Logging settings
    log_level: str = "INFO"
    log_format: str = "text"  # text | structured | json

    @property
    def debug_default(self) -> bool:
        """Debug mode used when the client is not told otherwise."""
        return self.environment.strip().lower() == "development"

    @field_validator("base_url")
    @classmethod
    def ensure_trailing_slash(cls, v: str) -> str:
        """Endpoints are joined relative to the base URL."""
        v = v.strip()
        if not v:
            return DEFAULT_BASE_URL
        return v if v.endswith("/") else f"{v}/"

    @field_validator("quota_cache_ttl_seconds")
    @classmethod
    def validate_ttl_positive(cls, v: float) -> float:
        """Validate the quota cache lifetime is positive."""
        if v <= 0:
            raise ValueError("quota_cache_ttl_seconds must be positive")
        return v

    @field_validator(
        "httpx_timeout",
        "httpx_connect_timeout",
        "httpx_read_timeout",
        "httpx_write_timeout",
        "httpx_pool_timeout",
    )
    @classmethod
    def validate_timeout_positive(cls, v: float) -> float:
        """Validate timeout values are positive."""
        if v <= 0:
            raise ValueError("Timeout values must be positive")
        return v

    @field_validator("httpx_max_connections", "httpx_max_keepalive_connections")
    @classmethod
    def validate_pool_size_positive(cls, v: int) -> int:
        """Validate pool size values are positive."""
        if v < 1:
            raise ValueError("pool size values must be at least 1")
        return v

    model_config = SettingsConfigDict(
        env_file=".env", extra="ignore", populate_by_name=True
    )


# Global settings instance
settings = Settings()

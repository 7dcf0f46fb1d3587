"""Application configuration using Pydantic Settings."""

from functools import lru_cache

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict

PLACES_KEY_PLACEHOLDER = "YOUR_GOOGLE_PLACES_API_KEY_HERE"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="TableMatch API")
    app_env: str = Field(default="development")
    debug: bool = Field(default=False)
    log_level: str = Field(default="INFO")

    # Server
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)

    # Database
    database_url: str = Field(
        default="postgresql+asyncpg://localhost:5432/tablematch",
        description="PostgreSQL connection URL with asyncpg driver",
    )
    db_pool_size: int = Field(default=5, ge=1)
    db_max_overflow: int = Field(default=10, ge=0)

    # JWT Authentication (tokens are issued by the external auth service)
    jwt_secret_key: str = Field(
        default="CHANGE-ME-IN-PRODUCTION",
        description="Shared secret used to verify HS256 member tokens",
    )
    jwt_algorithm: str = Field(default="HS256")
    jwt_expire_minutes: int = Field(default=30)

    # Places search
    places_api_key: str = Field(
        default=PLACES_KEY_PLACEHOLDER,
        description="Google Places API key (server-side only, keep secret)",
    )
    places_base_url: str = Field(default="https://maps.googleapis.com/maps/api/place")
    places_nearby_path: str = Field(default="/nearbysearch/json")
    places_timeout_seconds: float = Field(default=10.0)
    places_max_pages: int = Field(
        default=3,
        ge=1,
        description="Maximum number of result pages followed per search",
    )
    places_page_token_delay_seconds: float = Field(
        default=2.0,
        description="Upstream page tokens only become valid after a short delay",
    )

    # Default search origin (San Francisco)
    default_latitude: float = Field(default=37.7749)
    default_longitude: float = Field(default=-122.4194)

    # Sessions
    candidate_limit: int = Field(default=10, ge=1)
    fallback_unfiltered_on_empty: bool = Field(
        default=False,
        description=(
            "Return the whole fallback pool when the filters match none of it "
            "instead of an empty result"
        ),
    )
    session_poll_interval_seconds: float = Field(default=2.0)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def async_database_url(self) -> str:
        """Ensure the database URL uses the asyncpg driver scheme.

        Hosted providers supply a standard ``postgresql://`` URL.
        SQLAlchemy's async engine requires ``postgresql+asyncpg://``.
        """
        url = self.database_url
        if url.startswith("postgresql://"):
            url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
        return url

    @computed_field  # type: ignore[prop-decorator]
    @property
    def places_api_key_configured(self) -> bool:
        """Check that a real-looking places API key is present."""
        key = self.places_api_key
        return bool(key) and key != PLACES_KEY_PLACEHOLDER and len(key) > 20

    # Rate Limiting
    rate_limit_enabled: bool = Field(
        default=True,
        description="Enable/disable rate limiting (disable for tests)",
    )

    # CORS
    cors_origins: str = Field(
        default="http://localhost:3000,http://localhost:5173",
        description="Comma-separated list of allowed origins",
    )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.app_env == "production"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()

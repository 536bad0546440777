"""Configuration management using Pydantic settings.

Two-layer configuration system:
1. Environment: Loads raw values from environment variables (UPPER_CASE)
2. Settings: Clean application settings with lowercase fields and derived values
"""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_DEFAULT_TANKERKOENIG_URL = "https://creativecommons.tankerkoenig.de/json/list.php"

# Upper bound enforced by the provider's list endpoint
MAX_RADIUS_KM = 25.0


class Environment(BaseSettings):
    """Raw environment variable loading."""

    model_config = SettingsConfigDict(
        env_file=_PROJECT_ROOT / ".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # ── Server ─────────────────────────────────────────────────────────

    FLASK_ENV: str = Field(default="development")
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=2112)
    WAITRESS_THREADS: int = Field(default=4)

    # ── Search area ────────────────────────────────────────────────────

    LATITUDE: float = Field(default=51.575710)
    LONGITUDE: float = Field(default=7.209179)
    RADIUS: float = Field(default=2.0)
    APIKEY: str = Field(default="")

    # ── Provider ───────────────────────────────────────────────────────

    TANKERKOENIG_URL: str = Field(default=_DEFAULT_TANKERKOENIG_URL)
    FETCH_CONNECT_TIMEOUT: float = Field(default=5.0)
    FETCH_READ_TIMEOUT: float = Field(default=10.0)
    FETCH_MAX_RESPONSE_BYTES: int = Field(default=5 * 1024 * 1024)
    VERIFY_TLS: bool = Field(default=True)

    # ── Exporter behavior ──────────────────────────────────────────────

    SKIP_UNPRICED_FUELS: bool = Field(default=True)
    PRIME_ON_STARTUP: bool = Field(default=True)


class Settings(BaseModel):
    """Application settings with lowercase fields and derived values."""

    model_config = ConfigDict(from_attributes=True)

    flask_env: str = "development"
    host: str = "0.0.0.0"
    port: int = 2112
    waitress_threads: int = 4

    latitude: float = 51.575710
    longitude: float = 7.209179
    radius: float = 2.0
    api_key: str = ""

    tankerkoenig_url: str = _DEFAULT_TANKERKOENIG_URL
    fetch_connect_timeout: float = 5.0
    fetch_read_timeout: float = 10.0
    fetch_max_response_bytes: int = 5 * 1024 * 1024
    verify_tls: bool = True

    skip_unpriced_fuels: bool = True
    prime_on_startup: bool = True

    @property
    def is_testing(self) -> bool:
        return self.flask_env == "testing"

    @property
    def is_production(self) -> bool:
        return self.flask_env == "production"

    @property
    def masked_api_key(self) -> str:
        """API key safe for log output."""
        if not self.api_key:
            return "<unset>"
        return f"{self.api_key[:4]}***"

    def to_flask_config(self) -> "FlaskConfig":
        return FlaskConfig(TESTING=self.is_testing)

    def validate_config(self) -> None:
        from exporter.exceptions import ConfigurationError

        errors: list[str] = []

        if not -90.0 <= self.latitude <= 90.0:
            errors.append(f"LATITUDE must be between -90 and 90, got {self.latitude}")

        if not -180.0 <= self.longitude <= 180.0:
            errors.append(
                f"LONGITUDE must be between -180 and 180, got {self.longitude}"
            )

        if not 0.0 < self.radius <= MAX_RADIUS_KM:
            errors.append(
                f"RADIUS must be greater than 0 and at most {MAX_RADIUS_KM:g}, "
                f"got {self.radius}"
            )

        if self.fetch_max_response_bytes <= 0:
            errors.append("FETCH_MAX_RESPONSE_BYTES must be positive")

        if self.is_production and not self.api_key:
            errors.append("APIKEY must be set in production")

        if errors:
            raise ConfigurationError(
                "Configuration validation failed:\n  - " + "\n  - ".join(errors)
            )

    @classmethod
    def load(cls, env: "Environment | None" = None) -> "Settings":
        if env is None:
            env = Environment()

        return cls(
            # Server
            flask_env=env.FLASK_ENV,
            host=env.HOST,
            port=env.PORT,
            waitress_threads=env.WAITRESS_THREADS,

            # Search area
            latitude=env.LATITUDE,
            longitude=env.LONGITUDE,
            radius=env.RADIUS,
            api_key=env.APIKEY,

            # Provider
            tankerkoenig_url=env.TANKERKOENIG_URL,
            fetch_connect_timeout=env.FETCH_CONNECT_TIMEOUT,
            fetch_read_timeout=env.FETCH_READ_TIMEOUT,
            fetch_max_response_bytes=env.FETCH_MAX_RESPONSE_BYTES,
            verify_tls=env.VERIFY_TLS,

            # Exporter behavior
            skip_unpriced_fuels=env.SKIP_UNPRICED_FUELS,
            prime_on_startup=env.PRIME_ON_STARTUP,
        )


class FlaskConfig:
    """Flask-specific configuration for app.config.from_object()."""

    def __init__(self, TESTING: bool) -> None:
        self.TESTING = TESTING

import logging

from croniter import croniter
from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from guide_service.utils.timezone import resolve_timezone, TimezoneError


logger = logging.getLogger(__name__)


class CustomSettings(BaseSettings):
    """Application settings loaded from environment variables.

    Validates configuration at startup to catch misconfiguration early.
    """

    guide_source: str | None = None  # URL or path to a JSON guide document
    guide_fetch_timeout_sec: float = 30.0
    guide_fetch_max_retries: int = 3
    guide_fetch_backoff_factor: float = 2.0
    guide_refresh_cron: str = "*/15 * * * *"  # Every 15 minutes
    guide_refresh_misfire_grace_sec: int = 300
    guide_refresh_on_startup: bool = True
    guide_label_timezone: str = "UTC"
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("guide_source", mode="before")
    @classmethod
    def normalize_guide_source(cls, value):
        """Treat blank source values as unset."""
        if isinstance(value, str):
            value = value.strip()
            return value or None
        return value

    @field_validator("guide_fetch_timeout_sec")
    @classmethod
    def validate_fetch_timeout(cls, value: float) -> float:
        """Validate upstream request timeout (seconds)."""
        if value <= 0:
            raise ValueError("guide_fetch_timeout_sec must be > 0")
        return value

    @field_validator("guide_fetch_max_retries")
    @classmethod
    def validate_max_retries(cls, value: int) -> int:
        """Ensure at least one fetch attempt is made."""
        if value <= 0:
            raise ValueError("guide_fetch_max_retries must be > 0")
        return value

    @field_validator("guide_fetch_backoff_factor")
    @classmethod
    def validate_backoff_factor(cls, value: float) -> float:
        """Ensure the backoff multiplier is at least 1."""
        if value < 1:
            raise ValueError("guide_fetch_backoff_factor must be >= 1")
        return value

    @field_validator("guide_refresh_misfire_grace_sec")
    @classmethod
    def validate_misfire_grace(cls, value: int) -> int:
        """Validate scheduler misfire grace period (seconds)."""
        if value < 0:
            raise ValueError("guide_refresh_misfire_grace_sec must be >= 0")
        return value

    @field_validator("guide_refresh_cron")
    @classmethod
    def validate_cron_expression(cls, value: str) -> str:
        """Validate cron expression is valid."""
        try:
            croniter(value)
            return value
        except (ValueError, KeyError) as exc:
            raise ValueError(f"Invalid cron expression '{value}': {exc}") from exc

    @field_validator("guide_label_timezone")
    @classmethod
    def validate_label_timezone(cls, value: str) -> str:
        """Validate axis label timezone."""
        try:
            resolve_timezone(value)
            return value
        except TimezoneError as exc:
            raise ValueError(str(exc)) from exc

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Validate logging level name."""
        normalized = value.upper()
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if normalized not in allowed:
            raise ValueError(f"log_level must be one of {sorted(allowed)}")
        return normalized

    @field_validator("guide_source", mode="after")
    @classmethod
    def validate_guide_source(cls, value: str | None) -> str | None:
        """Reject URL schemes other than HTTP/HTTPS; anything else is a file path."""
        if value and "://" in value and not value.lower().startswith(("http://", "https://")):
            raise ValueError(f"Guide source URL must be HTTP/HTTPS: {value}")
        return value

    @model_validator(mode="after")
    def validate_guide_configuration(self):
        """Validate cross-field configuration."""
        if not self.guide_source:
            logger.warning(
                "No guide source configured - refresh will not retrieve any data"
            )
        return self

    @property
    def label_tzinfo(self):
        """Resolved timezone for axis labels."""
        return resolve_timezone(self.guide_label_timezone)

    def __init__(self, **data):
        """Initialize settings and log configuration."""
        super().__init__(**data)

        logger.info("Configuration loaded:")
        logger.info("  Guide Source: %s", "configured" if self.guide_source else "not configured")
        logger.info("  Fetch Timeout: %ss", self.guide_fetch_timeout_sec)
        logger.info(
            "  Fetch Retries: %s (backoff factor %.1f)",
            self.guide_fetch_max_retries,
            self.guide_fetch_backoff_factor,
        )
        logger.info("  Refresh Schedule: %s", self.guide_refresh_cron)
        logger.info("  Refresh Misfire Grace: %ss", self.guide_refresh_misfire_grace_sec)
        logger.info("  Refresh On Startup: %s", self.guide_refresh_on_startup)
        logger.info("  Label Timezone: %s", self.guide_label_timezone)


settings = CustomSettings()


def setup_logging() -> None:
    """Configure application logging."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

from datetime import timedelta
import logging

from lxml import etree  # type: ignore
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from run_ticker.utils.formatting import validate_template


logger = logging.getLogger(__name__)


class CustomSettings(BaseSettings):
    """Application settings loaded from environment variables.

    Validates configuration at startup to catch misconfiguration early.
    """

    schedule_url: str = "https://gamesdonequick.com/schedule"
    schedule_rows_xpath: str = "//table[@id='runTable']/tbody/tr"
    refresh_interval_sec: int = 20
    fetch_timeout_sec: float = 10.0

    label_format: str = "{current} -> {next}"
    error_label: str = "ERR"
    initial_label: str = "N/A"
    none_placeholder: str = "None"
    icon: str = "joystick"

    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("schedule_url")
    @classmethod
    def validate_schedule_url(cls, value: str) -> str:
        """Validate schedule URL is HTTP/HTTPS."""
        value = value.strip()
        if not value.lower().startswith(("http://", "https://")):
            raise ValueError(f"Schedule URL must be HTTP/HTTPS: {value}")
        return value

    @field_validator("schedule_rows_xpath")
    @classmethod
    def validate_rows_xpath(cls, value: str) -> str:
        """Validate the row selector compiles as XPath."""
        if not value.strip():
            raise ValueError("schedule_rows_xpath must not be empty")
        try:
            etree.XPath(value)
        except etree.XPathSyntaxError as exc:
            raise ValueError(f"Invalid XPath '{value}': {exc}") from exc
        return value

    @field_validator("refresh_interval_sec", "fetch_timeout_sec")
    @classmethod
    def validate_positive(cls, value, info):
        """Ensure interval and timeout are positive."""
        if value <= 0:
            raise ValueError(f"{info.field_name} must be > 0")
        return value

    @field_validator("label_format")
    @classmethod
    def validate_label_format(cls, value: str) -> str:
        """Validate label template placeholders."""
        return validate_template(value)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Validate log level name."""
        normalized = value.upper()
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if normalized not in allowed:
            raise ValueError(f"log_level must be one of {sorted(allowed)}")
        return normalized

    @property
    def refresh_interval(self) -> timedelta:
        return timedelta(seconds=self.refresh_interval_sec)

    def __init__(self, **data):
        """Initialize settings and log configuration."""
        super().__init__(**data)

        logger.info("Configuration loaded:")
        logger.info("  Schedule URL: %s", self.schedule_url)
        logger.info("  Row Selector: %s", self.schedule_rows_xpath)
        logger.info("  Refresh Interval: %ss", self.refresh_interval_sec)
        logger.info("  Fetch Timeout: %.1fs", self.fetch_timeout_sec)
        logger.info("  Label Format: %s", self.label_format)
        logger.info("  Log Level: %s", self.log_level)


settings = CustomSettings()


def setup_logging() -> None:
    """Configure application logging."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

"""
Configuration management using Pydantic models loaded from YAML.
"""

import os
from pathlib import Path

import pendulum
import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from .adapters.calendly_client import CalendlyClient
from .domain.clock import Clock, SystemClock
from .domain.exceptions import ConfigurationError
from .domain.window_calculator import WindowCalculator
from .services.booking_service import BookingService

API_TOKEN_ENV_VAR = "CALENDLY_API_TOKEN"


class DefaultsConfig(BaseModel):
    """Default event duration and working hours."""
    duration_minutes: int = 30
    start_hour: int = 9
    end_hour: int = 17

    @field_validator("duration_minutes")
    @classmethod
    def validate_duration(cls, value: int) -> int:
        """Ensure meeting duration is positive."""
        if value <= 0:
            raise ValueError("duration_minutes must be greater than zero")
        return value

    @field_validator("start_hour", "end_hour")
    @classmethod
    def validate_hour(cls, v: int) -> int:
        """Validate hour is between 0 and 23."""
        if not 0 <= v <= 23:
            raise ValueError(f"Hour must be between 0 and 23, got {v}")
        return v

    @model_validator(mode="after")
    def validate_hours_order(self) -> "DefaultsConfig":
        """Ensure the configured window opens before it closes."""
        if self.end_hour <= self.start_hour:
            raise ValueError("end_hour must be later than start_hour")
        return self


class BuffersConfig(BaseModel):
    """Lead times keeping offered slots away from "now"."""
    safety_minutes: int = Field(default=5, ge=0)  # same-day requests
    scheduling_hours: int = Field(default=3, ge=0)  # current-week overview


class AppConfig(BaseModel):
    """Application configuration."""
    api_token: str = ""
    base_url: str = CalendlyClient.DEFAULT_BASE_URL
    user_uri: str | None = None
    timezone: str = "UTC"
    request_timeout: float = Field(default=30, gt=0)
    defaults: DefaultsConfig = Field(default_factory=DefaultsConfig)
    buffers: BuffersConfig = Field(default_factory=BuffersConfig)

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, value: str) -> str:
        """Ensure the timezone is a known IANA name."""
        try:
            pendulum.timezone(value)
        except Exception as exc:
            raise ValueError(f"Unknown timezone: {value}") from exc
        return value

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "AppConfig":
        """
        Load configuration from YAML file.

        An empty ``api_token`` is filled from the CALENDLY_API_TOKEN
        environment variable.

        Args:
            config_path: Path to the YAML config file

        Returns:
            AppConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config is invalid
        """
        if not config_path.exists():
            raise FileNotFoundError(
                f"Config file not found: {config_path}\n"
                f"Please create a config.yaml file. See config.example.yaml for reference."
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {config_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ValueError("Config file must contain a mapping at the root level.")

        if not data.get("api_token"):
            data["api_token"] = os.environ.get(API_TOKEN_ENV_VAR, "")

        return cls(**data)

    def build_client(self) -> CalendlyClient:
        """
        Create the Calendly client once for the lifetime of the process.

        Raises:
            ConfigurationError: If no API token is configured
        """
        if not self.api_token:
            raise ConfigurationError(
                f"No Calendly API token configured. Set api_token in config.yaml "
                f"or the {API_TOKEN_ENV_VAR} environment variable."
            )
        return CalendlyClient(
            api_token=self.api_token,
            base_url=self.base_url,
            user_uri=self.user_uri,
            timeout=self.request_timeout,
        )

    def build_window_calculator(self, clock: Clock | None = None) -> WindowCalculator:
        return WindowCalculator(
            clock=clock or SystemClock(self.timezone),
            workday_start_hour=self.defaults.start_hour,
            workday_end_hour=self.defaults.end_hour,
            safety_buffer_minutes=self.buffers.safety_minutes,
            scheduling_buffer_hours=self.buffers.scheduling_hours,
        )

    def build_service(self, client=None, clock: Clock | None = None) -> BookingService:
        """Wire a BookingService; the real Calendly client is used unless one is given."""
        return BookingService(
            client=client or self.build_client(),
            window_calculator=self.build_window_calculator(clock),
            default_duration_minutes=self.defaults.duration_minutes,
        )


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    # Look for config.yaml in current directory
    current_dir = Path.cwd()
    config_path = current_dir / "config.yaml"

    if not config_path.exists():
        # Try in the project root (parent of the package)
        project_root = Path(__file__).parent.parent
        config_path = project_root / "config.yaml"

    return config_path
